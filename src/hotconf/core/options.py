"""Option callables for :meth:`hotconf.Config.with_options`."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, Union

from .notification import Notification, NotifyFunc

if TYPE_CHECKING:
    from .config import Config

Option = Callable[["Config"], None]


def with_config_path(config_path: Union[str, Path]) -> Option:
    def option(config: "Config") -> None:
        config.config_path = str(config_path)

    return option


def with_default_config_type(config_type: str) -> Option:
    def option(config: "Config") -> None:
        config.default_config_type = config_type

    return option


def with_notification(*notifications: Union[Notification, NotifyFunc]) -> Option:
    def option(config: "Config") -> None:
        config.register_notification(*notifications)

    return option


def with_automatic_env() -> Option:
    def option(config: "Config") -> None:
        config.automatic_env()

    return option


def with_allow_empty_env(allow_empty_env: bool) -> Option:
    def option(config: "Config") -> None:
        config.allow_empty_env(allow_empty_env)

    return option


def with_env_prefix(prefix: str) -> Option:
    def option(config: "Config") -> None:
        config.set_env_prefix(prefix)

    return option


def with_decoder_options(**options: Any) -> Option:
    """Pass ``options`` (e.g. ``strict=True``) to pydantic when decoding bound targets."""

    def option(config: "Config") -> None:
        config.decoder_options.update(options)

    return option
