"""
errors.py — Error taxonomy for the TOTP core.

Every engine and codec operation either returns a value or raises one of
these. Nothing is retried or silently recovered; the caller decides.
"""

from typing import Optional


class OTPError(Exception):
    """Base class for every error raised by totp_core."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class InvalidTime(OTPError, ValueError):
    """Timestamp is negative or the derived counter does not fit in 64 bits."""


class HashTooShort(OTPError, ValueError):
    """HMAC output shorter than 20 bytes (160 bits)."""


class UnsupportedDigitCount(OTPError, ValueError):
    """Digit count outside {6, 7, 8}."""


class MalformedUri(OTPError, ValueError):
    """URI lacks the otpauth://totp/ prefix or a ':' / '?' delimiter."""


class MissingSecret(OTPError, ValueError):
    """URI query has no secret parameter."""


class InvalidParameter(OTPError, ValueError):
    """A parameter has the wrong shape (non-integer digits, bad base32, ...)."""


class EntropyUnavailable(OTPError, RuntimeError):
    """The operating system random source could not be read."""
