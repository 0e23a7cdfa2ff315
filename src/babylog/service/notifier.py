# SPDX-License-Identifier: MIT

from typing import Callable

from babylog.model.event import Event

type Listener = Callable[[Event], None]


class Notifier:
    """Fan-out of controller events to the presentation layer."""

    def __init__(self) -> None:
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def emit(self, event: Event) -> None:
        for listener in list(self._listeners):
            listener(event)
