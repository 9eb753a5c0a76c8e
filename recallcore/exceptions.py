from typing import Optional


class RecallCoreError(Exception):
    """Base exception for memory-model errors."""

    def __init__(
        self, message: str, original_exception: Optional[Exception] = None
    ):
        super().__init__(message)
        self.original_exception = original_exception


class InvalidArgumentError(RecallCoreError, ValueError):
    """Raised when a caller violates a formula precondition
    (negative elapsed time, non-positive stability, retention outside (0, 1))."""

    pass


class ParameterTableError(RecallCoreError, ValueError):
    """Raised for a parameter table that is too short or holds unusable values."""

    pass


class ParameterFileError(RecallCoreError):
    """Raised when a parameter file cannot be read or has the wrong shape."""

    pass
