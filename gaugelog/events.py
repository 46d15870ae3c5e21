"""
Event Emitter

Named-channel observer lists with synchronous fan-out. Used by Log for the
"log", "log.<level>", per-prefix and "error" channels, and by trackers for
"change" notifications.
"""

import logging
from threading import RLock
from typing import Any, Callable, Dict, List, Optional

from gaugelog.exceptions import GaugeLogError

logger = logging.getLogger(__name__)

Listener = Callable[..., Any]

ERROR_EVENT = "error"


class EventEmitter:
    """
    Minimal event emitter.

    Listeners run synchronously in registration order. A listener that
    raises is reported through the package logger and the remaining
    listeners still run. Emitting "error" with no listener attached raises
    the error instead of dropping it.
    """

    def __init__(self) -> None:
        self._listener_lock = RLock()
        self._listeners: Dict[str, List[Listener]] = {}

    def on(self, event: str, listener: Listener) -> Listener:
        """
        Subscribe a listener to an event.

        Returns:
            The listener, so the call can be used inline
        """
        with self._listener_lock:
            self._listeners.setdefault(event, []).append(listener)
        return listener

    add_listener = on

    def once(self, event: str, listener: Listener) -> Listener:
        """Subscribe a listener that is removed after its first call."""
        def wrapper(*args: Any) -> Any:
            self.off(event, wrapper)
            return listener(*args)

        wrapper.listener = listener  # type: ignore[attr-defined]
        self.on(event, wrapper)
        return listener

    def off(self, event: str, listener: Listener) -> None:
        """Remove a listener (or a once() wrapper around it); unknown ones are ignored."""
        with self._listener_lock:
            listeners = self._listeners.get(event)
            if not listeners:
                return
            for index, registered in enumerate(listeners):
                if registered == listener or getattr(registered, "listener", None) == listener:
                    del listeners[index]
                    break
            if not listeners:
                del self._listeners[event]

    remove_listener = off

    def remove_all_listeners(self, event: Optional[str] = None) -> None:
        with self._listener_lock:
            if event is None:
                self._listeners.clear()
            else:
                self._listeners.pop(event, None)

    def listeners(self, event: str) -> List[Listener]:
        with self._listener_lock:
            return list(self._listeners.get(event, []))

    def listener_count(self, event: str) -> int:
        with self._listener_lock:
            return len(self._listeners.get(event, []))

    def emit(self, event: str, *args: Any) -> bool:
        """
        Call every listener of an event with the given arguments.

        Returns:
            True if the event had listeners

        Raises:
            Exception: The emitted error, for "error" events with no listener
        """
        # Copy so listeners can subscribe/unsubscribe while we iterate
        listeners = self.listeners(event)

        if not listeners:
            if event == ERROR_EVENT:
                error = args[0] if args else None
                if isinstance(error, BaseException):
                    raise error
                raise GaugeLogError(f"Unhandled error event: {error!r}")
            return False

        for listener in listeners:
            try:
                listener(*args)
            except Exception as e:
                logger.warning(f"Listener for event {event!r} failed: {e}", exc_info=True)
        return True
