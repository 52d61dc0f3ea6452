"""
Custom exceptions for the brif package.

These exceptions provide more specific error handling and better debugging
information than generic Python exceptions.
"""


class BrifError(Exception):
    """Base exception for all brif package errors."""
    pass


class ConfigurationError(BrifError):
    """Configuration-related errors (non-positive token budget, invalid settings, missing credentials)."""
    pass


class SourceFetchError(BrifError):
    """Source text could not be fetched or did not have the expected shape."""
    pass


class TransientCompletionError(BrifError):
    """A single completion call failed (network, rate limit, server error)."""
    pass


class ExhaustedRetriesError(BrifError):
    """Every attempt of a retried completion call failed."""

    def __init__(self, attempts: int, last_error: BaseException | None = None):
        self.attempts = attempts
        self.last_error = last_error
        message = f"Completion failed after {attempts} attempts"
        if last_error is not None:
            message += f": {last_error}"
        super().__init__(message)


class TokenizationError(BrifError):
    """The token encoder/decoder failed on the given input."""
    pass


class DepthExceededError(BrifError):
    """Recursive reduction went past its depth or completion-call limit."""

    def __init__(self, depth: int, limit: int, what: str = "recursion depth"):
        self.depth = depth
        self.limit = limit
        super().__init__(f"Exceeded maximum {what} ({depth} > {limit})")


class ChunkingError(BrifError):
    """Chunking-related errors (invalid parameters, processing failures)."""
    pass


class ValidationError(BrifError):
    """Data validation errors (content preservation, format validation)."""
    pass
