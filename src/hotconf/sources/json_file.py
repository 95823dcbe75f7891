from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Union


class JsonFileSource:
    types = ("json",)

    def load(self, path: Union[str, Path]) -> Dict[str, Any]:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
        if not text.strip():
            return {}
        data = json.loads(text)
        if not isinstance(data, dict):
            raise ValueError(
                f"{path}: top-level JSON value must be an object, got {type(data).__name__}"
            )
        return data
