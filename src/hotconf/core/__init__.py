from .config import Config
from .errors import (
    ConfigError,
    DecodeError,
    ListenerError,
    ReadError,
    ReloadError,
    UnsupportedSourceType,
)
from .notification import CallbackNotification, Notification
from .source import Listener, SourceDescriptor, SourceReader
from .store import FileStore, Store

__all__ = [
    "Config",
    "ConfigError",
    "DecodeError",
    "ListenerError",
    "ReadError",
    "ReloadError",
    "UnsupportedSourceType",
    "CallbackNotification",
    "Notification",
    "Listener",
    "SourceDescriptor",
    "SourceReader",
    "FileStore",
    "Store",
]
