"""Reader for dotenv-style ``KEY=VALUE`` files."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

_LINE = re.compile(r"^(?:export\s+)?([A-Za-z_][A-Za-z0-9_.]*)\s*=\s*(.*)$")
_BRACED = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")
_SIMPLE = re.compile(r"\$([A-Za-z_][A-Za-z0-9_]*)")


class EnvFileSource:
    """Parses dotenv files without touching ``os.environ``.

    ``${VAR}`` and ``$VAR`` references are expanded from earlier keys in the
    same file first, then from the process environment. Single-quoted values
    are taken literally.
    """

    types = ("env", "dotenv")

    def _expand(self, value: str, values: Dict[str, str]) -> str:
        def lookup(match: "re.Match[str]") -> str:
            name = match.group(1)
            if name in values:
                return values[name]
            return os.environ.get(name, "")

        value = _BRACED.sub(lookup, value)
        return _SIMPLE.sub(lookup, value)

    def _parse_line(self, line: str, values: Dict[str, str]) -> Optional[Tuple[str, str]]:
        line = line.strip()
        if not line or line.startswith("#"):
            return None

        match = _LINE.match(line)
        if not match:
            raise ValueError(f"invalid line: {line!r}")
        key, value = match.groups()

        if len(value) >= 2 and value[0] == value[-1] == "'":
            return key, value[1:-1]
        if len(value) >= 2 and value[0] == value[-1] == '"':
            value = (
                value[1:-1]
                .replace('\\"', '"')
                .replace("\\n", "\n")
                .replace("\\r", "\r")
                .replace("\\t", "\t")
            )
        elif " #" in value:
            value = value.split(" #", 1)[0].rstrip()
        return key, self._expand(value, values)

    def load(self, path: Union[str, Path]) -> Dict[str, Any]:
        values: Dict[str, str] = {}
        with open(path, "r", encoding="utf-8") as f:
            for line_num, line in enumerate(f, 1):
                try:
                    parsed = self._parse_line(line, values)
                except ValueError as e:
                    raise ValueError(f"{path}:{line_num}: {e}") from e
                if parsed:
                    key, value = parsed
                    values[key] = value
        return dict(values)
