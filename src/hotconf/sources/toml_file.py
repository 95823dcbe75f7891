from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any, Dict, Union


class TomlFileSource:
    types = ("toml",)

    def load(self, path: Union[str, Path]) -> Dict[str, Any]:
        with open(path, "rb") as f:
            return tomllib.load(f)
