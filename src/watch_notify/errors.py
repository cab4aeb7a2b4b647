"""Error types for observer failures.

The registry itself never raises across its boundary. These exist for error
handlers that would rather collect or re-raise exceptions than inspect
``ObserverFailure`` records.
"""

from typing import Any


class WatchNotifyError(Exception):
    """Base error for watch_notify."""
    pass


class ObserverError(WatchNotifyError):
    """An observer raised while a topic was being published."""

    def __init__(self, topic: Any, handle: Any, message: str):
        self.topic = topic
        self.handle = handle
        super().__init__(f"publishing on '{topic}' threw an error: {message}")
