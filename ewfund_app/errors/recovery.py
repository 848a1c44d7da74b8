"""
Recovery strategy classifications for error handling.

This mixin categorizes errors by their recovery characteristics and tells
the source retry loop which failures are worth another attempt.
"""


class RecoverableError(Exception):
    """Mixin for errors that can be recovered from automatically."""

    def __init__(self, message: str, retry_count: int = 0,
                 max_retries: int = 3, **kwargs):
        super().__init__(message)
        self.retry_count = retry_count
        self.max_retries = max_retries
        self.recoverable = True
