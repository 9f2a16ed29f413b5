from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass
class OperationResult(Generic[T]):
    """Outcome of an engine operation. Failures carry a message instead of raising."""

    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    error_type: Optional[str] = None

    @classmethod
    def ok(cls, data: Optional[T] = None) -> "OperationResult[T]":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str, error_type: str) -> "OperationResult[T]":
        return cls(success=False, error=error, error_type=error_type)
