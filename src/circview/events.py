#!/usr/bin/env python
# coding: utf-8

from __future__ import annotations
from typing import Callable, Any
from collections.abc import Iterable


ANNOTATION_EVENTS: tuple[str, ...] = (
    "annotation_mouseover",
    "annotation_mouseout",
    "annotation_click",
    "annotation_added",
    "annotation_removed",
)

Listener = Callable[[Any], Any]


class EventDispatcher:
    """
    A fixed set of named notification channels, each with zero or more listeners.
    Listeners are called synchronously, in registration order, with the payload passed to :meth:`trigger`.

    >>> dispatcher = EventDispatcher(["annotation_added"])
    >>> received = []
    >>> dispatcher.on("annotation_added", received.append)
    >>> dispatcher.trigger("annotation_added", "payload")
    1
    >>> received
    ['payload']
    """

    def __init__(self, channels: Iterable[str] = ANNOTATION_EVENTS):
        self._listeners: dict[str, list[Listener]] = {name: [] for name in channels}

    @property
    def channels(self) -> tuple[str, ...]:
        return tuple(self._listeners)

    def _get_listeners(self, channel: str) -> list[Listener]:
        try:
            return self._listeners[channel]
        except KeyError:
            raise ValueError(
                f"Invalid event channel: {channel!r}. Expecting one of {self.channels!r}."
            ) from None

    def on(self, channel: str, listener: Listener) -> None:
        if not callable(listener):
            raise TypeError(f"Invalid listener: {listener!r}. Expecting a callable.")
        self._get_listeners(channel).append(listener)

    def off(self, channel: str, listener: Listener | None = None) -> None:
        """
        Remove ``listener`` from ``channel``, or every listener of ``channel`` if ``listener`` is None.
        """
        listeners = self._get_listeners(channel)
        if listener is None:
            listeners.clear()
        elif listener in listeners:
            listeners.remove(listener)

    def trigger(self, channel: str, payload: Any) -> int:
        "Call each listener of ``channel`` with ``payload``. Returns the number of listeners called."
        listeners = list(self._get_listeners(channel))
        for listener in listeners:
            listener(payload)
        return len(listeners)
