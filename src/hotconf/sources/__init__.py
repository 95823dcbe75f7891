"""File format readers, looked up by source type."""

from __future__ import annotations

from typing import Dict, List

from ..core.errors import UnsupportedSourceType
from ..core.source import SourceReader
from .env_file import EnvFileSource
from .ini_file import IniFileSource
from .json_file import JsonFileSource
from .toml_file import TomlFileSource
from .yaml_file import YamlFileSource

_READERS: Dict[str, SourceReader] = {}


def register_reader(reader: SourceReader, *types: str) -> None:
    """Register ``reader`` for ``types`` (defaults to ``reader.types``)."""
    for source_type in types or reader.types:
        _READERS[source_type.lower()] = reader


def get_reader(source_type: str) -> SourceReader:
    try:
        return _READERS[source_type.lower()]
    except KeyError:
        raise UnsupportedSourceType(source_type) from None


def supported_types() -> List[str]:
    return sorted(_READERS)


for _reader in (YamlFileSource(), JsonFileSource(), TomlFileSource(), IniFileSource(), EnvFileSource()):
    register_reader(_reader)

__all__ = [
    "EnvFileSource",
    "IniFileSource",
    "JsonFileSource",
    "TomlFileSource",
    "YamlFileSource",
    "get_reader",
    "register_reader",
    "supported_types",
]
