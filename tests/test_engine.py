import hashlib
import hmac
import os

import pytest

from totp_core import engine
from totp_core.credential import Credential, Label
from totp_core.errors import HashTooShort, InvalidParameter, InvalidTime, UnsupportedDigitCount

from .conftest import RFC_SECRET

KNOWN_HASH = bytes([145, 178, 231, 186, 107, 69, 174, 5, 71, 37, 172, 10, 253, 225, 104, 30, 1, 159, 74, 22])
RFC_KEY = b"12345678901234567890"


@pytest.mark.parametrize("digits, expected", [(6, 97829), (7, 2097829), (8, 72097829)])
def test_truncate_known_answer(digits, expected):
    assert engine.truncate(KNOWN_HASH, digits) == expected


@pytest.mark.parametrize("digits", [0, 1, 5, 9, 10, -6])
def test_truncate_rejects_unsupported_digits(digits):
    with pytest.raises(UnsupportedDigitCount):
        engine.truncate(KNOWN_HASH, digits)


@pytest.mark.parametrize("length", [0, 4, 16, 19])
def test_truncate_rejects_short_hashes(length):
    with pytest.raises(HashTooShort):
        engine.truncate(KNOWN_HASH[:length], 6)


def test_truncate_stays_below_modulus():
    for _ in range(200):
        digest = os.urandom(20)
        for digits in (6, 7, 8):
            value = engine.truncate(digest, digits)
            assert 0 <= value < 10 ** digits
            assert engine.truncate(digest, digits) == value


def test_truncate_accepts_longer_digests():
    digest = hashlib.sha256(b"x").digest()
    assert 0 <= engine.truncate(digest, 6) < 10 ** 6


def test_int_to_bytes_is_big_endian():
    assert engine.int_to_bytes(1) == b"\x00\x00\x00\x00\x00\x00\x00\x01"
    assert engine.int_to_bytes(0x0102) == b"\x00\x00\x00\x00\x00\x00\x01\x02"


def test_hmac_digest_matches_stdlib():
    expected = hmac.new(RFC_KEY, engine.int_to_bytes(7), hashlib.sha1).digest()
    assert engine.hmac_digest(RFC_KEY, 7) == expected


# RFC 4226 appendix D
@pytest.mark.parametrize("counter, expected", list(enumerate([
    755224, 287082, 359152, 969429, 338314, 254676, 287922, 162583, 399871, 520489,
])))
def test_hotp_rfc4226_vectors(counter, expected):
    assert engine.hotp(RFC_KEY, counter, 6) == expected


def test_hotp_rejects_negative_counter():
    with pytest.raises(InvalidParameter):
        engine.hotp(RFC_KEY, -1)


def test_timecode():
    assert engine.timecode(0, 30) == 0
    assert engine.timecode(59, 30) == 1
    assert engine.timecode(60, 30) == 2
    assert engine.timecode(59.9, 30) == 1
    assert engine.timecode(1111111109, 30) == 0x23523EC


def test_timecode_rejects_negative_time():
    with pytest.raises(InvalidTime):
        engine.timecode(-1, 30)


def test_timecode_rejects_counter_overflow():
    with pytest.raises(InvalidTime):
        engine.timecode(2 ** 64, 1)


# RFC 6238 appendix B, SHA1
@pytest.mark.parametrize("timestamp, expected", [
    (59, 94287082),
    (1111111109, 7081804),
    (1111111111, 14050471),
    (1234567890, 89005924),
    (2000000000, 69279037),
    (20000000000, 65353130),
])
def test_code_at_rfc6238_vectors(rfc_credential, timestamp, expected):
    assert engine.code_at(rfc_credential, timestamp) == expected


def test_totp_zero_pads_and_reports_remaining(rfc_credential):
    code, remaining = engine.totp(rfc_credential, 1111111109)
    assert code == "07081804"
    assert remaining == 30 - (1111111109 % 30)


def test_totp_defaults_to_current_time(rfc_credential):
    code, remaining = engine.totp(rfc_credential)
    assert len(code) == 8
    assert 1 <= remaining <= 30


def test_verify_code_exact_match(rfc_credential):
    assert engine.verify_code(rfc_credential, "07081804", now=1111111109)
    assert engine.verify_code(rfc_credential, 7081804, now=1111111109)
    assert engine.verify_code(rfc_credential, "7081804", now=1111111109)


def test_verify_code_rejects_wrong_code(rfc_credential):
    assert not engine.verify_code(rfc_credential, "07081805", now=1111111109)
    assert not engine.verify_code(rfc_credential, "abc", now=1111111109)
    assert not engine.verify_code(rfc_credential, "", now=1111111109)


def test_verify_code_has_no_skew_window_by_default(rfc_credential):
    # code of the previous step
    previous = engine.code_at(rfc_credential, 1111111109 - 30)
    assert not engine.verify_code(rfc_credential, previous, now=1111111109)
    assert engine.verify_code(rfc_credential, previous, now=1111111109, window=1)


def test_verify_code_rejects_negative_window(rfc_credential):
    with pytest.raises(InvalidParameter):
        engine.verify_code(rfc_credential, "0", now=0, window=-1)


def test_verify_code_rejects_negative_time(rfc_credential):
    with pytest.raises(InvalidTime):
        engine.verify_code(rfc_credential, "0", now=-5)


def test_verify_code_uses_current_time():
    cred = Credential(label=Label("Acme", "bob"), secret=RFC_SECRET, issuer="Acme")
    code, _ = engine.totp(cred)
    # tolerate a step boundary between the two clock reads
    assert engine.verify_code(cred, code, window=1)


def test_algorithm_from_name():
    assert engine.Algorithm.from_name("sha1") is engine.Algorithm.SHA1
    with pytest.raises(InvalidParameter):
        engine.Algorithm.from_name("MD5")


@pytest.mark.parametrize("timestamp", [float("nan"), float("inf"), float("-inf")])
def test_timecode_rejects_non_finite_time(timestamp):
    with pytest.raises(InvalidTime):
        engine.timecode(timestamp, 30)


@pytest.mark.parametrize("timestamp", [float("nan"), float("inf")])
def test_code_at_and_verify_reject_non_finite_time(rfc_credential, timestamp):
    with pytest.raises(InvalidTime):
        engine.code_at(rfc_credential, timestamp)
    with pytest.raises(InvalidTime):
        engine.verify_code(rfc_credential, "abc", now=timestamp)


def test_verify_code_window_is_bounded(rfc_credential):
    assert not engine.verify_code(rfc_credential, "1", now=10 ** 9, window=engine.MAX_WINDOW)
    with pytest.raises(InvalidParameter) as excinfo:
        engine.verify_code(rfc_credential, "1", now=10 ** 9, window=engine.MAX_WINDOW + 1)
    assert excinfo.value.field == "window"
