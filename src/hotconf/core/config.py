"""The configuration manager.

A :class:`Config` aggregates any number of named configuration files into
one store. Each file lives under its logical name, so ``server.yaml`` is
read as ``config.get("server.<key>")``. After :meth:`Config.load`, calling
:meth:`Config.watch` keeps every namespace in sync with its file.

Every load and reload of a source runs the same pipeline:

1. read and parse the file into the source's own store;
2. replace the source's namespace in the aggregated store;
3. decode into the bound target, if any;
4. call the change listener, if any.

A failing step stops the remaining steps for that run only. Note that a
decode failure happens after step 2, so raw reads already show the new
values while the bound target keeps its last successfully decoded state.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from .accessors import ReadAccessors
from .errors import DecodeError, ListenerError, ReadError, ReloadError
from .naming import parse_name
from .notification import Notification, NotifyFunc, as_notification
from .options import Option
from .source import Listener, SourceDescriptor
from .store import FileStore, Store

logger = logging.getLogger(__name__)


class Config(ReadAccessors):
    """Aggregates named configuration sources and keeps them live."""

    def __init__(
        self,
        config_path: Union[str, Path] = ".",
        *names: str,
        default_config_type: str = "yaml",
        notifications: Optional[List[Union[Notification, NotifyFunc]]] = None,
        automatic_env: bool = False,
        allow_empty_env: bool = False,
        env_prefix: str = "",
        decoder_options: Optional[Dict[str, Any]] = None,
    ):
        """Initialize a Config.

        Args:
            config_path: Directory that relative names are resolved against.
            *names: Config names to register, e.g. ``"app"`` or ``"log.toml"``.
            default_config_type: Type assumed for names without an extension.
            notifications: Sinks receiving reload failures while watching.
            automatic_env: Let environment variables override stored values.
            allow_empty_env: Treat empty environment variables as set.
            env_prefix: Prefix for environment variable lookups.
            decoder_options: Keyword arguments for pydantic validation of
                bound targets, such as ``strict=True``.
        """
        self.config_path = str(config_path)
        self.default_config_type = default_config_type
        self.decoder_options: Dict[str, Any] = dict(decoder_options or {})
        self._store = Store()
        self._sources: List[SourceDescriptor] = []
        self._notifications: List[Notification] = []
        if notifications:
            self.register_notification(*notifications)
        if automatic_env:
            self.automatic_env()
        self.allow_empty_env(allow_empty_env)
        if env_prefix:
            self.set_env_prefix(env_prefix)
        self.register(*names)

    @classmethod
    def with_options(cls, *options: Option) -> "Config":
        """Build a Config from option callables such as ``with_config_path``."""
        config = cls()
        for option in options:
            option(config)
        return config

    def __repr__(self) -> str:
        return f"Config(config_path={self.config_path!r}, sources={[sd.name for sd in self._sources]!r})"

    def __enter__(self) -> "Config":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    # ---- environment overlay ----
    def automatic_env(self) -> None:
        self._store.automatic_env()

    def allow_empty_env(self, allow_empty_env: bool) -> None:
        self._store.allow_empty_env(allow_empty_env)

    def set_env_prefix(self, prefix: str) -> None:
        self._store.set_env_prefix(prefix)

    # ---- registration ----
    def parse_name(self, name: str) -> Tuple[str, str, str]:
        return parse_name(name, self.config_path, self.default_config_type)

    def _find(self, name: str) -> Optional[SourceDescriptor]:
        for sd in self._sources:
            if sd.name == name:
                return sd
        return None

    def _add(self, name: str, source_type: str, file: str) -> SourceDescriptor:
        sd = self._find(name)
        if sd is not None:
            return sd
        sd = SourceDescriptor(
            name=name,
            type=source_type,
            file=file,
            store=FileStore(name, source_type, file),
        )
        self._sources.append(sd)
        logger.debug("registered config %s (%s) at %s", name, source_type, file)
        return sd

    def _resolve(self, name: str) -> SourceDescriptor:
        return self._add(*self.parse_name(name))

    def register(self, *names: str) -> None:
        """Register config names; names already registered are left as they are."""
        for name in names:
            self._resolve(name)

    def on_change(self, name: str, listener: Listener) -> None:
        """Call ``listener(store)`` after every successful load of ``name``.

        Replaces any listener set before. An exception raised by the
        listener is reported as a :class:`ListenerError`.
        """
        self._resolve(name).listener = listener

    def bind(self, name: str, target: Any) -> None:
        self.bind_with_tag(name, target, "json")

    def bind_with_tag(self, name: str, target: Any, tag_name: str) -> None:
        """Keep ``target`` decoded from ``name`` using field tags ``tag_name``."""
        sd = self._resolve(name)
        sd.target = target
        sd.tag_name = tag_name

    def register_notification(self, *notifications: Union[Notification, NotifyFunc]) -> None:
        self._notifications.extend(as_notification(n) for n in notifications)

    @property
    def sources(self) -> Tuple[SourceDescriptor, ...]:
        return tuple(self._sources)

    @property
    def notifications(self) -> Tuple[Notification, ...]:
        return tuple(self._notifications)

    def source(self, name: str) -> Optional[SourceDescriptor]:
        return self._find(name)

    # ---- reload pipeline ----
    def _notify(self, name: str, err: Optional[Exception]) -> None:
        for n in self._notifications:
            n.notify(name, err)

    def _apply(self, sd: SourceDescriptor) -> None:
        self._store.set(sd.name, sd.store.all_settings())
        if sd.target is not None:
            try:
                sd.store.unmarshal(sd.target, sd.tag_name, **self.decoder_options)
            except Exception as exc:
                raise DecodeError(sd.name) from exc
        if sd.listener is not None:
            try:
                sd.listener(sd.store)
            except Exception as exc:
                raise ListenerError(sd.name) from exc

    def _reload(self, sd: SourceDescriptor) -> None:
        try:
            sd.store.read_in_config()
        except Exception as exc:
            raise ReadError(sd.name) from exc
        try:
            self._apply(sd)
        except ReloadError:
            raise
        except Exception as exc:
            raise ReloadError(sd.name) from exc
        logger.debug("loaded config %s", sd.name)

    def load(self) -> None:
        """Read every registered source, in registration order.

        Raises:
            ReloadError: For the first source that fails; sources after it
                are not loaded.
        """
        for sd in list(self._sources):
            self._reload(sd)

    def _on_file_change(self, sd: SourceDescriptor) -> None:
        try:
            self._reload(sd)
        except ReloadError as err:
            try:
                self._notify(sd.name, err)
            except Exception:
                logger.exception("notifying reload failure of config %s failed", sd.name)

    def watch(self) -> None:
        """Start watching every registered file; returns immediately.

        Changes are reloaded on watcher threads. Failures are delivered to
        the registered notifications and never raised here.
        """
        for sd in list(self._sources):
            sd.store.watch_config(lambda sd=sd: self._on_file_change(sd))

    def close(self) -> None:
        """Stop every file watcher."""
        for sd in list(self._sources):
            sd.store.stop_watching()

    # ---- accessors ----
    def get(self, key: str) -> Any:
        return self._store.get(key)

    def is_set(self, key: str) -> bool:
        return self._store.is_set(key)

    def sub(self, key: str) -> Optional[Store]:
        return self._store.sub(key)

    def all_settings(self) -> Dict[str, Any]:
        return self._store.all_settings()

    def all_keys(self) -> List[str]:
        return self._store.all_keys()
