from __future__ import annotations

from typing import Any, Callable, List, Literal, Union

from .registry import Handle, Registry


class Channel:
    """A registry bound to a single topic, tracking the observers it added."""

    def __init__(self, registry: Registry, topic: Any):
        self.registry = registry
        self.topic = topic
        self._handles: List[Handle] = []

    def subscribe(self, callback: Callable[..., Any], scope: Any = None) -> Union[Handle, Literal[False]]:
        return self._track(self.registry.register(self.topic, callback, scope))

    def subscribe_once(self, callback: Callable[..., Any], scope: Any = None) -> Union[Handle, Literal[False]]:
        return self._track(self.registry.register_once(self.topic, callback, scope))

    def send(self, *args: Any) -> bool:
        return self.registry.publish(self.topic, *args)

    @property
    def active(self) -> bool:
        return self.registry.has_topic(self.topic)

    def close(self) -> int:
        """Unregister this channel's live observers; returns how many were removed."""
        removed = sum(1 for handle in self._handles if self.registry.unregister(handle))
        self._handles = []
        return removed

    def _track(self, handle):
        if handle:
            self._handles.append(handle)
        return handle
