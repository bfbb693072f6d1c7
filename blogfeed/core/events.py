"""Change notifications published by services after every mutation."""

from __future__ import annotations

import threading
from typing import Callable, List

Listener = Callable[[str, int], None]


class ChangeFeed:
    """Keeps a version counter and fans out (topic, version) to subscribers.

    The presentation layer either subscribes or polls ``version`` and
    re-reads state when it moved.
    """

    def __init__(self) -> None:
        self._listeners: List[Listener] = []
        self._version = 0
        self._lock = threading.Lock()

    @property
    def version(self) -> int:
        return self._version

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def publish(self, topic: str) -> int:
        with self._lock:
            self._version += 1
            version = self._version
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(topic, version)
            except Exception as exc:
                print(f"[feed] Listener failed for {topic}: {exc}")
        return version
