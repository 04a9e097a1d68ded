"""
Error codes and exceptions for mail sending.

Failures are normally returned as data (MailError inside a SendResult).
MailDeliveryError exists for callers that prefer exceptions and opt in via
SendResult.raise_for_error().
"""

# Malformed sender or recipient address (detected before any I/O)
INVALID_EMAIL = 'INVALID_EMAIL'

# Caller-requested synthetic failure given as a bare string
SIMULATE_ERROR = 'SIMULATE_ERROR'

# Directory or file creation failed
IO_ERROR = 'IO_ERROR'


class MailDeliveryError(Exception):
    """Raised when a failed SendResult is unwrapped with raise_for_error()."""

    def __init__(self, error):
        super().__init__(f"[{error.code}] {error.message}")
        self.error = error

    @property
    def code(self) -> str:
        return self.error.code
