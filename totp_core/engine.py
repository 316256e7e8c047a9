"""
engine.py — HOTP (RFC 4226) / TOTP (RFC 6238) computation.

Pipeline:
    unix time --timecode()--> counter
    counter   --int_to_bytes()--> 8-byte big-endian message
    HMAC(key, message)        --> digest (>= 20 bytes)
    truncate(digest, digits)  --> integer code < 10**digits

Every function here is pure apart from reading the clock when no
timestamp is given.
"""

import enum
import hashlib
import hmac
import logging
import math
import struct
import time
from typing import Optional, Tuple, Union

from .errors import HashTooShort, InvalidParameter, InvalidTime, UnsupportedDigitCount
from .secret import decode_secret

logger = logging.getLogger(__name__)

# --- Constants ---------------------------------------------------------------
DEFAULT_DIGITS = 6
DEFAULT_PERIOD = 30
T0 = 0
MIN_DIGEST_BYTES = 20
MAX_COUNTER = 2 ** 64 - 1
MODULI = {6: 1_000_000, 7: 10_000_000, 8: 100_000_000}
MAX_WINDOW = 10             # steps either side of the current one


class Algorithm(enum.Enum):
    """HMAC hash algorithms. Only SHA1 is supported for now."""

    SHA1 = "SHA1"

    @property
    def digestmod(self):
        if self is Algorithm.SHA1:
            return hashlib.sha1
        raise InvalidParameter("Unsupported algorithm {}".format(self.value), field="algorithm")

    @classmethod
    def from_name(cls, name: str) -> "Algorithm":
        try:
            return cls(name.strip().upper())
        except ValueError as exc:
            raise InvalidParameter("Invalid value for algorithm, must be SHA1", field="algorithm") from exc


# --- RFC helpers -------------------------------------------------------------
def timecode(unix_time: Union[int, float], period: int = DEFAULT_PERIOD) -> int:
    """counter = floor((unix_time - T0) / period), as an unsigned 64-bit value."""
    if not math.isfinite(unix_time):
        raise InvalidTime("Timestamp must be a finite number", field="timestamp")
    if unix_time < 0:
        raise InvalidTime("Timestamp must not be negative", field="timestamp")
    if period <= 0:
        raise InvalidParameter("Period must be a positive number of seconds", field="period")
    counter = int((unix_time - T0) // period)
    if counter > MAX_COUNTER:
        raise InvalidTime("Timestamp is too far in the future", field="timestamp")
    return counter


def int_to_bytes(i: int) -> bytes:
    """8-byte big-endian encoding of the counter, e.g. 1 -> b'\\x00...\\x01'."""
    return struct.pack(">Q", i)


def hmac_digest(key: bytes, counter: int, algorithm: Algorithm = Algorithm.SHA1) -> bytes:
    return hmac.new(key, int_to_bytes(counter), algorithm.digestmod).digest()


def truncate(digest: bytes, digits: int = DEFAULT_DIGITS) -> int:
    """
    Dynamic truncation (RFC 4226 section 5.3).

    - offset = low nibble of the last byte
    - 4 bytes from offset, top bit of the first one cleared
    - big-endian uint32, reduced modulo 10**digits

    Raises:
        HashTooShort: digest shorter than 20 bytes
        UnsupportedDigitCount: digits not in {6, 7, 8}
    """
    if digits not in MODULI:
        raise UnsupportedDigitCount("Digits may only be 6, 7, or 8", field="digits")
    if len(digest) < MIN_DIGEST_BYTES:
        raise HashTooShort(
            "Digest is {} bytes, at least {} required".format(len(digest), MIN_DIGEST_BYTES)
        )

    offset = digest[-1] & 0x0F
    subset = bytes([digest[offset] & 0x7F]) + bytes(digest[offset + 1:offset + 4])
    value = struct.unpack(">I", subset)[0]
    return value % MODULI[digits]


def hotp(key: bytes, counter: int, digits: int = DEFAULT_DIGITS,
         algorithm: Algorithm = Algorithm.SHA1) -> int:
    """HOTP value for raw key bytes and a counter."""
    if counter < 0 or counter > MAX_COUNTER:
        raise InvalidParameter("Counter must fit in an unsigned 64-bit integer", field="counter")
    return truncate(hmac_digest(key, counter, algorithm), digits)


# --- TOTP on a credential ----------------------------------------------------
def code_at(credential, unix_time: Union[int, float]) -> int:
    """Expected code for `credential` at `unix_time`."""
    counter = timecode(unix_time, credential.period)
    return hotp(decode_secret(credential.secret), counter, credential.digits, credential.algorithm)


def totp(credential, timestamp: Optional[Union[int, float]] = None) -> Tuple[str, int]:
    """
    Current code as a zero-padded string, plus seconds left in the step.

    Returns:
        (code, remaining_seconds)
    """
    if timestamp is None:
        timestamp = time.time()
    code = code_at(credential, timestamp)
    remaining = int(credential.period - ((int(timestamp) - T0) % credential.period))
    return str(code).zfill(credential.digits), remaining


def _as_int(candidate) -> Optional[int]:
    if isinstance(candidate, bool):
        return None
    if isinstance(candidate, int):
        return candidate
    text = str(candidate).strip()
    if not text.isdigit() or not text.isascii():
        return None
    return int(text)


def verify_code(credential, candidate_code, now: Optional[Union[int, float]] = None,
                window: int = 0) -> bool:
    """
    Check `candidate_code` against the code expected at `now`.

    Codes are compared as integers, so "012345" and 12345 are the same code.
    window=0 accepts only the current step; a positive window also accepts
    that many steps before and after it, up to MAX_WINDOW.
    """
    if window < 0 or window > MAX_WINDOW:
        raise InvalidParameter(
            "Window must be between 0 and {} steps".format(MAX_WINDOW), field="window"
        )
    if now is None:
        now = time.time()
    counter = timecode(now, credential.period)

    candidate = _as_int(candidate_code)
    if candidate is None:
        logger.debug("Rejected non-numeric candidate code")
        return False

    key = decode_secret(credential.secret)
    for offset in range(-window, window + 1):
        test_counter = counter + offset
        if test_counter < 0 or test_counter > MAX_COUNTER:
            continue
        expected = hotp(key, test_counter, credential.digits, credential.algorithm)
        if hmac.compare_digest(str(expected), str(candidate)):
            if offset:
                logger.info("Accepted code %d step(s) away from the current one", offset)
            return True
    return False
