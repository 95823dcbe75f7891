"""hotconf - live-reloaded configuration aggregation.

Register named configuration files, load them into one namespaced store,
and keep them (and any objects bound to them) in sync as the files change.
"""

from .core.config import Config
from .core.errors import (
    ConfigError,
    DecodeError,
    ListenerError,
    ReadError,
    ReloadError,
    UnsupportedSourceType,
)
from .core.notification import Notification
from .core.options import (
    with_allow_empty_env,
    with_automatic_env,
    with_config_path,
    with_decoder_options,
    with_default_config_type,
    with_env_prefix,
    with_notification,
)
from .core.source import SourceDescriptor
from .core.store import FileStore, Store

__all__ = [
    "Config",
    "ConfigError",
    "DecodeError",
    "ListenerError",
    "ReadError",
    "ReloadError",
    "UnsupportedSourceType",
    "Notification",
    "SourceDescriptor",
    "FileStore",
    "Store",
    "with_allow_empty_env",
    "with_automatic_env",
    "with_config_path",
    "with_decoder_options",
    "with_default_config_type",
    "with_env_prefix",
    "with_notification",
]
