"""
Result type shared by application use cases.

Use cases return ``Result`` values instead of raising for expected business
failures. The API layer inspects ``is_ok()`` / ``is_err()`` and maps
``Error.code`` to an HTTP status.
"""

from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class Error:
    """Business error with a stable machine-readable code"""

    def __init__(self, code: str, message: str):
        self.code = code
        self.message = message

    def __eq__(self, other) -> bool:
        if not isinstance(other, Error):
            return NotImplemented
        return self.code == other.code and self.message == other.message

    def __repr__(self) -> str:
        return f"Error(code={self.code!r}, message={self.message!r})"


class Result(Generic[T]):
    def __init__(self, value: Optional[T] = None, error: Optional[Error] = None):
        self.value = value
        self.error = error

    def is_ok(self) -> bool:
        return self.error is None

    def is_err(self) -> bool:
        return self.error is not None

    def __repr__(self) -> str:
        if self.is_err():
            return f"Result.err({self.error!r})"
        return f"Result.ok({self.value!r})"


class Return:
    """Constructors for Result values"""

    @staticmethod
    def ok(value: Optional[T] = None) -> Result[T]:
        return Result(value=value)

    @staticmethod
    def err(error: Error) -> Result:
        return Result(error=error)
