from __future__ import annotations

from typing import Any, Optional, Tuple

from pydantic import BaseModel, Field

from .errors import ObserverError


class ObserverFailure(BaseModel):
    """Record of one observer raising during a publish, handed to error handlers."""

    topic: Any
    handle: Tuple[Any, int]
    observer: str  # qualified name of the callback
    error: str
    error_type: str
    exception: Optional[BaseException] = Field(default=None, exclude=True, repr=False)

    class Config:
        arbitrary_types_allowed = True

    def to_error(self) -> ObserverError:
        err = ObserverError(self.topic, self.handle, self.error)
        err.__cause__ = self.exception
        return err
