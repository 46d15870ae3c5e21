"""
Logging Tracker Handles

Composition wrapper that lets callers log directly through a tracker
handle: attributes resolve on the tracker first and fall back to the
public methods of the owning Log. Spawn methods of a wrapped group return
wrapped children, so the whole subtree behaves the same way.
"""

from typing import TYPE_CHECKING, Any, Callable

if TYPE_CHECKING:
    from gaugelog.log import Log

SPAWN_METHODS = ("new_group", "new_item", "new_stream")


class LoggingTracker:
    """
    Tracker handle that also exposes the Log's methods.

    Example:
        >>> item = log.new_item("fetch", todo=10)
        >>> item.complete_work(1)        # tracker method
        >>> item.info("fetch", "got 1")  # forwarded to log.info
    """

    __slots__ = ("_tracker", "_log")

    def __init__(self, tracker: Any, log: "Log") -> None:
        object.__setattr__(self, "_tracker", tracker)
        object.__setattr__(self, "_log", log)

    def unwrap(self) -> Any:
        """The wrapped tracker."""
        return self._tracker

    def _spawner(self, spawn: Callable[..., Any]) -> Callable[..., "LoggingTracker"]:
        def spawn_wrapped(*args: Any, **kwargs: Any) -> "LoggingTracker":
            return LoggingTracker(spawn(*args, **kwargs), self._log)

        spawn_wrapped.__name__ = getattr(spawn, "__name__", "spawn")
        spawn_wrapped.__doc__ = getattr(spawn, "__doc__", None)
        return spawn_wrapped

    def __getattr__(self, name: str) -> Any:
        tracker = self._tracker
        try:
            attr = getattr(tracker, name)
        except AttributeError:
            pass
        else:
            if name in SPAWN_METHODS and callable(attr):
                return self._spawner(attr)
            return attr

        if name.startswith("_") or name in SPAWN_METHODS:
            raise AttributeError(
                f"{type(tracker).__name__!r} handle has no attribute {name!r}"
            )

        attr = getattr(self._log, name, None)
        if callable(attr):
            return attr
        raise AttributeError(
            f"{type(tracker).__name__!r} handle has no attribute {name!r}"
        )

    def __setattr__(self, name: str, value: Any) -> None:
        setattr(self._tracker, name, value)

    def __iter__(self):
        return iter(self._tracker)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, LoggingTracker):
            other = other.unwrap()
        return self._tracker is other

    def __hash__(self) -> int:
        return hash(self._tracker)

    def __repr__(self) -> str:
        return f"LoggingTracker({self._tracker!r})"
