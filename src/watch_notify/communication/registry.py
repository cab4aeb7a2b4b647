"""Topic-based observer registry (publish/subscribe within one process).

Observers are stored per topic in an append-only list. Removing an observer
leaves a ``None`` tombstone at its index so that every other handle issued for
the topic keeps pointing at the same slot. A topic is dropped as soon as it
holds no live slot.
"""

from __future__ import annotations

import logging
from functools import partial
from typing import Any, Callable, Dict, List, Literal, NamedTuple, Optional, Tuple, Union

from ..protocol import ObserverFailure
from ..settings import RegistrySettings

Slot = Optional[Tuple[Callable[..., Any], Any]]
ErrorHandler = Callable[[ObserverFailure], Any]

_ALL = object()


class Handle(NamedTuple):
    """Reference to one observer slot, returned by ``register``."""

    topic: Any
    index: int


class Registry:
    """Publish/subscribe registry. Every instance is fully isolated."""

    def __init__(
        self,
        settings: RegistrySettings | None = None,
        error_handler: ErrorHandler | None = None,
        logger: logging.Logger | None = None,
    ):
        self.settings = settings or RegistrySettings()
        self.error_handler = error_handler
        self.logger = logger or logging.getLogger(self.settings.logger_name)
        self._topics: Dict[Any, List[Slot]] = {}

    # ---------------------------------------------------------------------
    # Registration
    # ---------------------------------------------------------------------
    def register(self, topic: Any, callback: Callable[..., Any], scope: Any = None) -> Union[Handle, Literal[False]]:
        """Add an observer to ``topic``.

        ``scope`` is passed to ``callback`` as its first argument, like ``self``
        for a method. Only ``None`` means "no scope"; falsy values such as ``0``
        or ``""`` are passed through.

        Returns a ``Handle`` or ``False`` when ``callback`` is not callable or
        ``topic`` cannot be used as a key.
        """
        if not callable(callback):
            return False
        try:
            observers = self._topics.setdefault(topic, [])
        except TypeError:
            return False

        index = len(observers)
        observers.append((callback, scope))
        self.logger.debug("registered observer %d on '%s'", index, topic)
        return Handle(topic, index)

    def register_once(self, topic: Any, callback: Callable[..., Any], scope: Any = None) -> Union[Handle, Literal[False]]:
        """Add an observer that is removed before its first invocation runs."""
        if not callable(callback):
            return False

        def once(registry: "Registry", *args: Any) -> None:
            # remove first so a nested publish on the same topic can't fire it again
            registry.unregister(handle)
            _bind(callback, scope)(*args)

        handle = self.register(topic, once, self)
        return handle

    def unregister(self, handle: Any) -> bool:
        """Tombstone the slot addressed by ``handle``. False if it was not live."""
        observers = self._slots_for(handle)
        if observers is None:
            return False

        topic, index = handle
        observers[index] = None
        if not any(observers):
            del self._topics[topic]
            self.logger.debug("topic '%s' has no observers left, dropped", topic)
        self.logger.debug("unregistered observer %d from '%s'", index, topic)
        return True

    def unregister_all(self, topic: Any = _ALL) -> bool:
        """Drop one topic, or every topic when called without argument."""
        if topic is _ALL:
            for observers in self._topics.values():
                _tombstone(observers)
            self._topics = {}
            self.logger.debug("all topics cleared")
            return True

        observers = self._observers(topic)
        if observers is not None:
            _tombstone(observers)
            del self._topics[topic]
            self.logger.debug("topic '%s' cleared", topic)
        return True

    # ---------------------------------------------------------------------
    # Notification
    # ---------------------------------------------------------------------
    def publish(self, topic: Any, *args: Any) -> bool:
        """Invoke every live observer of ``topic`` with ``args``, in registration order.

        Returns False when the topic has no observers. A failing observer is
        logged and reported to ``error_handler``; the others still run.
        """
        observers = self._observers(topic)
        if observers is None:
            return False

        # observers added during this publish are not visited this round
        for index in range(len(observers)):
            slot = observers[index]
            if slot is None:
                continue
            callback, scope = slot
            try:
                _bind(callback, scope)(*args)
            except Exception as exc:
                self._report(topic, Handle(topic, index), callback, exc)
        return True

    def _report(self, topic: Any, handle: Handle, callback: Callable[..., Any], exc: Exception) -> None:
        message = _describe(exc)
        self.logger.error(
            "publishing on '%s' threw an error: %s",
            topic,
            message,
            exc_info=exc if self.settings.log_tracebacks else None,
        )
        if self.error_handler is None:
            return

        try:
            failure = ObserverFailure(
                topic=topic,
                handle=tuple(handle),
                observer=getattr(callback, "__qualname__", None) or type(callback).__qualname__,
                error=message,
                error_type=type(exc).__name__,
                exception=exc,
            )
            self.error_handler(failure)
        except Exception:
            self.logger.exception("error handler failed for '%s'", topic)

    # ---------------------------------------------------------------------
    # Queries
    # ---------------------------------------------------------------------
    def has_observer(self, handle: Any) -> bool:
        return self._slots_for(handle) is not None

    def has_topic(self, topic: Any) -> bool:
        return self._observers(topic) is not None

    def topics(self) -> List[Any]:
        return list(self._topics)

    def count(self, topic: Any) -> int:
        observers = self._observers(topic)
        if observers is None:
            return 0
        return sum(1 for slot in observers if slot is not None)

    def _observers(self, topic: Any) -> List[Slot] | None:
        try:
            return self._topics.get(topic)
        except TypeError:  # unhashable
            return None

    def _slots_for(self, handle: Any) -> List[Slot] | None:
        """Return the topic list when ``handle`` is live, else None."""
        if not isinstance(handle, tuple) or len(handle) != 2:
            return None
        topic, index = handle
        if not isinstance(index, int) or isinstance(index, bool):
            return None
        observers = self._observers(topic)
        if observers is None or not 0 <= index < len(observers):
            return None
        if observers[index] is None:
            return None
        return observers


def _bind(callback: Callable[..., Any], scope: Any) -> Callable[..., Any]:
    """Return ``callback`` bound to ``scope`` the way a method is bound to self."""
    if scope is None:
        return callback
    return partial(callback, scope)


def _tombstone(observers: List[Slot]) -> None:
    observers[:] = [None] * len(observers)


def _describe(exc: Exception) -> str:
    try:
        return str(exc)
    except Exception:
        return f"<unprintable {type(exc).__name__}>"
