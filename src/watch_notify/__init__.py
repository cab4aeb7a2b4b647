"""In-process publish/subscribe registry."""

from __future__ import annotations

from .communication import Channel, Handle, Registry
from .errors import ObserverError, WatchNotifyError
from .protocol import ObserverFailure
from .settings import RegistrySettings
from .utils.logger import setup_logger

__all__ = [
    "Registry",
    "Handle",
    "Channel",
    "ObserverFailure",
    "RegistrySettings",
    "WatchNotifyError",
    "ObserverError",
    "setup_logger",
]

__version__ = "0.1.0"
