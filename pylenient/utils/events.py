from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from pylenient.domain.interfaces import IDisposable


@dataclass(eq=False)
class Disposable(IDisposable):
    """Runs `action` once on the first `dispose()`."""

    action: Callable[[], None] | None = None
    disposed: bool = False

    def dispose(self) -> None:
        if self.disposed:
            return
        self.disposed = True
        action, self.action = self.action, None
        if action is not None:
            action()


@dataclass(eq=False)
class CompositeDisposable(IDisposable):
    """Owns a group of disposables and disposes them together."""

    _items: list[IDisposable] = field(default_factory=list)
    disposed: bool = False

    def add(self, item: IDisposable) -> IDisposable:
        if self.disposed:
            item.dispose()
        else:
            self._items.append(item)
        return item

    def remove(self, item: IDisposable) -> None:
        if item in self._items:
            self._items.remove(item)

    def __len__(self) -> int:
        return len(self._items)

    def dispose(self) -> None:
        if self.disposed:
            return
        self.disposed = True
        items, self._items = self._items, []
        for item in items:
            item.dispose()


class Emitter:
    """Plain callback list; subscriptions are removed by disposing the returned handle."""

    def __init__(self) -> None:
        self._callbacks: list[Callable[..., Any]] = []

    def on(self, callback: Callable[..., Any]) -> Disposable:
        self._callbacks.append(callback)
        return Disposable(lambda: self._remove(callback))

    def _remove(self, callback: Callable[..., Any]) -> None:
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    def emit(self, *args: Any) -> None:
        # Snapshot: callbacks may unsubscribe while being notified.
        for callback in list(self._callbacks):
            callback(*args)

    def clear(self) -> None:
        self._callbacks.clear()

    def __len__(self) -> int:
        return len(self._callbacks)
