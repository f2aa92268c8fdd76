"""Error codes, exit statuses and exceptions."""
from enum import Enum


class ErrorCode(str, Enum):
    """Error codes surfaced to the invoking environment."""

    ENTROPY_UNAVAILABLE = "ENTROPY_UNAVAILABLE"


# Process exit status per error code
ERROR_EXIT_STATUS: dict[ErrorCode, int] = {
    ErrorCode.ENTROPY_UNAVAILABLE: 1,
}


class SecureRandError(Exception):
    """Base error that maps to a process exit status."""

    def __init__(self, code: ErrorCode, message: str | None = None):
        self.code = code
        self.message = message or f"Error: {code.value}"
        self.exit_status = ERROR_EXIT_STATUS[code]
        super().__init__(self.message)


class EntropySourceError(SecureRandError):
    """The secure random provider could not supply randomness."""

    def __init__(self, message: str | None = None):
        super().__init__(ErrorCode.ENTROPY_UNAVAILABLE, message)
