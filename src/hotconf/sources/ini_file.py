from __future__ import annotations

import configparser
from pathlib import Path
from typing import Any, Dict, Union


class IniFileSource:
    """Reads INI files into ``{section: {key: value}}``.

    Keys of the ``[DEFAULT]`` section are placed at the top level and, as
    configparser does, inherited by every section.
    """

    types = ("ini",)

    def _nest(self, parser: configparser.ConfigParser) -> Dict[str, Any]:
        nested: Dict[str, Any] = dict(parser.defaults())
        for section in parser.sections():
            nested[section] = dict(parser.items(section, raw=True))
        return nested

    def load(self, path: Union[str, Path]) -> Dict[str, Any]:
        parser = configparser.ConfigParser(interpolation=None)
        with open(path, "r", encoding="utf-8") as f:
            try:
                parser.read_file(f)
            except configparser.Error as e:
                raise ValueError(f"invalid INI in {path}: {e}") from e
        return self._nest(parser)
