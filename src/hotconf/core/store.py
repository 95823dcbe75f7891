"""Thread-safe nested key/value stores.

:class:`Store` holds one configuration tree addressed by dotted,
case-insensitive paths. :class:`FileStore` binds a store to a file on disk
and can re-read it, decode it into a target object and watch it for changes.
"""

from __future__ import annotations

import copy
import logging
import os
import threading
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Tuple, Union

from .accessors import ReadAccessors
from .decode import decode_into
from .watch import FileWatcher

logger = logging.getLogger(__name__)

_MISSING = object()


def _normalize(value: Any) -> Any:
    """Deep-copy ``value`` with every mapping key lower-cased."""
    if isinstance(value, Mapping):
        return {str(k).lower(): _normalize(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_normalize(v) for v in value]
    return copy.deepcopy(value)


def _split(key: str) -> List[str]:
    return [part for part in key.lower().split(".") if part]


def iter_hierarchical(data: Mapping[str, Any], parent: str = "") -> Iterator[Tuple[str, Any]]:
    """Flatten nested dictionaries into ``(dotted_key, leaf)`` pairs."""
    for key, value in data.items():
        full_key = key if not parent else f"{parent}.{key}"
        if isinstance(value, Mapping) and value:
            yield from iter_hierarchical(value, full_key)
        else:
            yield full_key, value


class Store(ReadAccessors):
    """A nested configuration tree guarded by a re-entrant lock.

    Writes replace whole sub-trees under the lock and reads copy values out
    under the same lock, so a reader never observes a half-written sub-tree.

    When :meth:`automatic_env` is enabled, ``get("a.b")`` first consults the
    environment variable ``<PREFIX>_A_B`` (or ``A_B`` with no prefix).
    """

    def __init__(self, data: Optional[Mapping[str, Any]] = None):
        self._lock = threading.RLock()
        self._tree: Dict[str, Any] = _normalize(data) if data else {}
        self._automatic_env = False
        self._allow_empty_env = False
        self._env_prefix = ""

    # ---- environment overlay ----
    def automatic_env(self) -> None:
        self._automatic_env = True

    def allow_empty_env(self, allow_empty_env: bool) -> None:
        self._allow_empty_env = allow_empty_env

    def set_env_prefix(self, prefix: str) -> None:
        self._env_prefix = prefix.rstrip("_")

    def env_key(self, key: str) -> str:
        name = key.replace(".", "_").replace("-", "_").upper()
        if self._env_prefix:
            return f"{self._env_prefix.upper()}_{name}"
        return name

    def _lookup_env(self, key: str) -> Any:
        if not self._automatic_env:
            return _MISSING
        value = os.environ.get(self.env_key(key))
        if value is None or (value == "" and not self._allow_empty_env):
            return _MISSING
        return value

    # ---- tree access ----
    def _find(self, parts: List[str]) -> Any:
        node: Any = self._tree
        for part in parts:
            if not isinstance(node, dict) or part not in node:
                return _MISSING
            node = node[part]
        return node

    def set(self, key: str, value: Any) -> None:
        """Replace the value (or whole sub-tree) at ``key``."""
        parts = _split(key)
        if not parts:
            raise ValueError("key must not be empty")
        normalized = _normalize(value)
        with self._lock:
            node = self._tree
            for part in parts[:-1]:
                child = node.get(part)
                if not isinstance(child, dict):
                    child = {}
                    node[part] = child
                node = child
            node[parts[-1]] = normalized

    def replace(self, data: Mapping[str, Any]) -> None:
        """Replace the whole tree with ``data``."""
        normalized = _normalize(data)
        with self._lock:
            self._tree = normalized

    def get(self, key: str) -> Any:
        env_value = self._lookup_env(key)
        if env_value is not _MISSING:
            return env_value
        with self._lock:
            value = self._find(_split(key))
            if value is _MISSING:
                return None
            return copy.deepcopy(value)

    def is_set(self, key: str) -> bool:
        if self._lookup_env(key) is not _MISSING:
            return True
        parts = _split(key)
        if not parts:
            return False
        with self._lock:
            value = self._find(parts)
        # a null value counts as unset
        return value is not _MISSING and value is not None

    def sub(self, key: str) -> Optional["Store"]:
        """Return a detached store holding the sub-tree at ``key``, or None."""
        value = self.get(key)
        if not isinstance(value, dict):
            return None
        return Store(value)

    def all_settings(self) -> Dict[str, Any]:
        with self._lock:
            return copy.deepcopy(self._tree)

    def all_keys(self) -> List[str]:
        with self._lock:
            return [k for k, _ in iter_hierarchical(self._tree)]


class FileStore(Store):
    """A store backed by a single configuration file."""

    def __init__(self, name: str, source_type: str, path: Union[str, Path]):
        super().__init__()
        self.name = name
        self.type = source_type
        self.path = str(path)
        self._watcher: Optional[FileWatcher] = None

    def __repr__(self) -> str:
        return f"FileStore(name={self.name!r}, type={self.type!r}, path={self.path!r})"

    def read_in_config(self) -> None:
        """Re-read and re-parse the backing file, replacing the tree.

        Raises:
            UnsupportedSourceType: If no reader handles ``self.type``.
            OSError: If the file is missing or unreadable.
            ValueError: If the content is malformed.
        """
        # Lazy import: readers import core modules
        from ..sources import get_reader

        reader = get_reader(self.type)
        data = reader.load(self.path)
        self.replace(data)
        logger.debug("read config %s from %s", self.name, self.path)

    def unmarshal(self, target: Any, tag_name: str = "json", **options: Any) -> None:
        """Populate ``target`` from this store's tree.

        ``options`` are forwarded to the validator, see :func:`decode_into`.

        Raises:
            pydantic.ValidationError: If a value does not fit its field.
            TypeError: If ``target`` is not a supported kind of object.
        """
        decode_into(target, self.all_settings(), tag_name, **options)

    def watch_config(self, on_change: Callable[[], None]) -> None:
        """Call ``on_change`` on a watcher thread whenever the file changes.

        Calling it again while already watching is a no-op.
        """
        if self._watcher is not None:
            return
        self._watcher = FileWatcher(self.path, on_change)
        self._watcher.start()

    def stop_watching(self) -> None:
        if self._watcher is None:
            return
        self._watcher.stop()
        self._watcher = None

    @property
    def watching(self) -> bool:
        return self._watcher is not None
