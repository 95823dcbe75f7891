from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Union

import yaml


class YamlFileSource:
    types = ("yaml", "yml")

    def load(self, path: Union[str, Path]) -> Dict[str, Any]:
        with open(path, "r", encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ValueError(f"invalid YAML in {path}: {e}") from e
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValueError(
                f"{path}: top-level YAML value must be a mapping, got {type(data).__name__}"
            )
        return data
