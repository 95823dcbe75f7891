"""Source reader protocol and per-name source descriptors."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional, Protocol, Tuple, Union

if TYPE_CHECKING:
    from .store import FileStore, Store


Listener = Callable[["Store"], Any]


class SourceReader(Protocol):
    """Protocol for file format readers.

    A reader turns one file into a nested dictionary. Readers are stateless
    and shared by every source of their type.
    """

    types: Tuple[str, ...]

    def load(self, path: Union[str, Path]) -> Dict[str, Any]:
        """Read and parse ``path``.

        Raises:
            OSError: If the file is missing or unreadable.
            ValueError: If the content is malformed for this format.
        """
        ...


@dataclass
class SourceDescriptor:
    """One registered configuration source.

    Attributes:
        name: Logical name; the registry key and the namespace in the
            aggregated store.
        type: Source type, e.g. ``"yaml"``.
        file: Path of the backing file.
        store: The source's own store, holding only its tree.
        tag_name: Field metadata key used to map source keys onto ``target``.
        target: Optional caller-owned object kept in sync on every reload.
        listener: Optional callback run after each successful reload with
            ``store`` as its only argument.
    """

    name: str
    type: str
    file: str
    store: "FileStore"
    tag_name: str = "json"
    target: Optional[Any] = None
    listener: Optional[Listener] = None
