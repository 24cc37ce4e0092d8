"""Explicit success/failure results for adapter call sites."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from finance_tracker.domain.errors import FinanceError, FinanceErrorKind

T = TypeVar("T")


@dataclass(frozen=True)
class OperationResult(Generic[T]):
    """Value of a finance operation, or the error that prevented it."""

    value: T | None = None
    error: FinanceError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def error_kind(self) -> FinanceErrorKind | None:
        return self.error.kind if self.error is not None else None

    def unwrap(self) -> T:
        """Return the value or re-raise the captured error."""
        if self.error is not None:
            raise self.error
        return self.value


def attempt(operation: Callable[..., T], *args, **kwargs) -> OperationResult[T]:
    """Run ``operation`` and capture a FinanceError as a failed result.

    Errors other than FinanceError propagate unchanged.
    """
    try:
        return OperationResult(value=operation(*args, **kwargs))
    except FinanceError as exc:
        return OperationResult(error=exc)


__all__ = ["OperationResult", "attempt"]
