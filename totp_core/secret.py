"""
secret.py — Shared-secret generation and the base32 boundary.

- generate_secret(): CSPRNG bytes -> base32 text (no padding), URI-safe.
- decode_secret(): base32 text -> raw key bytes for the HMAC step.

The otpauth scheme does not use base32 padding, so secrets are stored
without '=' and re-padded only when decoding.
"""

import base64
import binascii
import logging
import os

from . import percent_codec
from .errors import EntropyUnavailable, InvalidParameter

logger = logging.getLogger(__name__)

SECRET_BYTES = 20           # 160-bit secret, RFC 4226 recommendation
MIN_SECRET_BYTES = 20


def generate_secret(byte_length: int = SECRET_BYTES) -> str:
    """
    Draw `byte_length` random bytes and return them as unpadded base32.

    Raises:
        InvalidParameter: byte_length below 20 (160 bits)
        EntropyUnavailable: the OS random source is missing or failing
    """
    if byte_length < MIN_SECRET_BYTES:
        raise InvalidParameter("Secrets should be at least 160 bits", field="byte_length")

    try:
        raw = os.urandom(byte_length)
    except (NotImplementedError, OSError) as exc:
        raise EntropyUnavailable("Secure random source unavailable: {}".format(exc)) from exc

    b32 = base64.b32encode(raw).decode("ascii").rstrip("=")
    logger.debug("Generated %d-byte secret %s...", byte_length, b32[:4])
    # base32 alphabet is URI-safe, kept for symmetry with the label encoding
    return percent_codec.encode(b32)


def decode_secret(secret: str) -> bytes:
    """Base32-decode `secret` (case-insensitive, padding optional)."""
    cleaned = percent_codec.decode(secret).replace(" ", "").upper()
    missing_padding = len(cleaned) % 8
    if missing_padding:
        cleaned += "=" * (8 - missing_padding)
    try:
        return base64.b32decode(cleaned, casefold=True)
    except (binascii.Error, ValueError) as exc:
        raise InvalidParameter("Invalid Base32 secret", field="secret") from exc
