"""Remote backend exceptions."""

from __future__ import annotations

from scamvigil.exceptions.base import VigilError


class BackendError(VigilError):
    """Raised for non-2xx, unreachable, or malformed backend responses."""

    def __init__(self, message: str, *, function_path: str = "", status_code: int | None = None) -> None:
        super().__init__(message)
        self.function_path = function_path
        self.status_code = status_code


class PersistenceWarning(VigilError):
    """Best-effort history write failure. Logged, never raised to callers."""

    def __init__(self, function_path: str, cause: BaseException) -> None:
        super().__init__(f"Failed to persist scan via {function_path}: {cause}")
        self.function_path = function_path
        self.cause = cause
