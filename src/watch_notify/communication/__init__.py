from .channel import Channel
from .registry import Handle, Registry

__all__ = ["Channel", "Handle", "Registry"]
