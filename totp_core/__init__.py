"""
totp_core package
=================

TOTP (RFC 6238) on top of HOTP dynamic truncation (RFC 4226), plus the
otpauth://totp/ provisioning URI codec.

Quick example
-------------
>>> from totp_core import new_credential, parse_uri, totp, verify_code
>>> cred = new_credential("Test Corp", "testuser")
>>> code, remaining = totp(cred)
>>> verify_code(cred, code)
True
>>> parse_uri(cred.uri).secret == cred.secret
True
"""

from .credential import Credential, Kind, Label, build_uri, new_credential, parse_uri
from .engine import (
    DEFAULT_DIGITS,
    DEFAULT_PERIOD,
    Algorithm,
    code_at,
    hotp,
    int_to_bytes,
    timecode,
    totp,
    truncate,
    verify_code,
)
from .errors import (
    EntropyUnavailable,
    HashTooShort,
    InvalidParameter,
    InvalidTime,
    MalformedUri,
    MissingSecret,
    OTPError,
    UnsupportedDigitCount,
)
from .secret import SECRET_BYTES, decode_secret, generate_secret

__all__ = [
    "Algorithm",
    "Credential",
    "DEFAULT_DIGITS",
    "DEFAULT_PERIOD",
    "EntropyUnavailable",
    "HashTooShort",
    "InvalidParameter",
    "InvalidTime",
    "Kind",
    "Label",
    "MalformedUri",
    "MissingSecret",
    "OTPError",
    "SECRET_BYTES",
    "UnsupportedDigitCount",
    "build_uri",
    "code_at",
    "decode_secret",
    "generate_secret",
    "hotp",
    "int_to_bytes",
    "new_credential",
    "parse_uri",
    "timecode",
    "totp",
    "truncate",
    "verify_code",
]
