import asyncio
from collections.abc import Callable
from typing import Generic, TypeVar

T = TypeVar("T")


class PreviewDebouncer(Generic[T]):
    """Склеивает серию быстрых обновлений набора файлов в одно обновление превью.

    Каждый submit() заменяет ожидающий снимок и перезапускает таймер; в
    callback попадает только последний снимок серии.
    """

    def __init__(self, callback: Callable[[T], None], delay_ms: int = 500):
        self.callback = callback
        self.delay = delay_ms / 1000
        self._pending: T | None = None
        self._has_pending = False
        self._timer: asyncio.TimerHandle | None = None

    @property
    def is_pending(self) -> bool:
        return self._has_pending

    def submit(self, snapshot: T):
        self._pending = snapshot
        self._has_pending = True
        if self._timer:
            self._timer.cancel()
        self._timer = asyncio.get_running_loop().call_later(self.delay, self.flush)

    def flush(self):
        if self._timer:
            self._timer.cancel()
            self._timer = None
        if not self._has_pending:
            return
        snapshot = self._pending
        self._pending = None
        self._has_pending = False
        self.callback(snapshot)

    def cancel(self):
        if self._timer:
            self._timer.cancel()
            self._timer = None
        self._pending = None
        self._has_pending = False
