from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Union, runtime_checkable


@runtime_checkable
class Notification(Protocol):
    """A destination for reload failure notifications.

    ``notify`` runs synchronously on the watcher thread that detected the
    failure, so implementations should be quick and should not raise.
    """

    def notify(self, name: str, err: Optional[Exception]) -> None:
        ...


NotifyFunc = Callable[[str, Optional[Exception]], None]


@dataclass
class CallbackNotification:
    """Adapts a plain ``func(name, err)`` to :class:`Notification`."""

    func: NotifyFunc

    def notify(self, name: str, err: Optional[Exception]) -> None:
        self.func(name, err)


def as_notification(sink: Union[Notification, NotifyFunc]) -> Notification:
    if isinstance(sink, Notification):
        return sink
    if callable(sink):
        return CallbackNotification(sink)
    raise TypeError(f"{sink!r} is neither a Notification nor callable")
