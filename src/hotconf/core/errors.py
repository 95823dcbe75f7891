"""Exception hierarchy for hotconf.

Every failure that leaves the reload pipeline is a :class:`ReloadError`
carrying the logical name of the source that failed, with the original
exception chained as ``__cause__``.
"""

from __future__ import annotations


class ConfigError(Exception):
    """Base type for all exceptions raised by hotconf."""


class UnsupportedSourceType(ConfigError):
    """Raised when no reader is registered for a source type."""

    def __init__(self, source_type: str):
        super().__init__(f"unsupported config type: {source_type!r}")
        self.source_type = source_type


class ReloadError(ConfigError):
    """A reload pipeline step failed for one source.

    Attributes:
        name: Logical name of the failing source.
    """

    template = "reload config [{name}] failed"

    def __init__(self, name: str):
        super().__init__(self.template.format(name=name))
        self.name = name

    def __str__(self) -> str:
        message = super().__str__()
        if self.__cause__ is not None:
            return f"{message}: {self.__cause__}"
        return message


class ReadError(ReloadError):
    """The source file is missing, unreadable or malformed."""

    template = "read config [{name}] error"


class DecodeError(ReloadError):
    """The bound target could not be populated from the source."""

    template = "unmarshal config [{name}] failed"


class ListenerError(ReloadError):
    """The user change listener raised."""

    template = "onchange config [{name}] failed"
