"""
credential.py — The TOTP credential and its otpauth:// URI codec.

The URI looks like this:

    otpauth://totp/FooCorp:alice%40example.com?secret=JBSW...&issuer=FooCorp&digits=6&algorithm=SHA1&period=30
    ─────────┬────┬───────┬───────────────────┬──────────────────────────────────────────────────────────────
             │    │       │                   └── query (secret, issuer, digits, algorithm, period)
             │    │       └── account, percent-encoded
             │    └── issuer prefix, percent-encoded
             └── OTP type (only totp is supported)

- build_uri():      Credential -> URI, every query key always present
- parse_uri():      URI -> Credential, missing optional keys take defaults
- new_credential(): fresh random secret + built URI
"""

import enum
import logging
from dataclasses import dataclass, field
from typing import Dict
from urllib.parse import parse_qsl, quote, urlencode

from . import percent_codec
from .engine import DEFAULT_DIGITS, DEFAULT_PERIOD, MODULI, Algorithm
from .errors import InvalidParameter, MalformedUri, MissingSecret, UnsupportedDigitCount
from .secret import MIN_SECRET_BYTES, SECRET_BYTES, decode_secret, generate_secret

logger = logging.getLogger(__name__)

URI_PREFIX = "otpauth://totp/"


class Kind(enum.Enum):
    TOTP = "totp"
    HOTP = "hotp"    # reserved, not implemented


@dataclass(frozen=True, slots=True)
class Label:
    issuer_prefix: str
    account: str


@dataclass(frozen=True, slots=True)
class Credential:
    """
    Immutable TOTP credential.

    Construction validates digits, period and the secret; `uri` is derived
    (built on construction when not given) and does not take part in equality.
    """

    label: Label
    secret: str
    issuer: str = ""
    algorithm: Algorithm = Algorithm.SHA1
    digits: int = DEFAULT_DIGITS
    period: int = DEFAULT_PERIOD
    kind: Kind = Kind.TOTP
    uri: str = field(default="", compare=False)

    def __post_init__(self):
        if self.kind is not Kind.TOTP:
            raise InvalidParameter("Only TOTP credentials are supported", field="kind")
        if not isinstance(self.algorithm, Algorithm):
            raise InvalidParameter("Invalid value for algorithm, must be SHA1", field="algorithm")
        if isinstance(self.digits, bool) or not isinstance(self.digits, int) or self.digits not in MODULI:
            raise UnsupportedDigitCount("Digits may only be 6, 7, or 8", field="digits")
        if isinstance(self.period, bool) or not isinstance(self.period, int) or self.period <= 0:
            raise InvalidParameter("Period must be a positive number of seconds", field="period")
        if len(decode_secret(self.secret)) < MIN_SECRET_BYTES:
            raise InvalidParameter("Secrets should be at least 160 bits", field="secret")
        if self.issuer and self.label.issuer_prefix and self.issuer != self.label.issuer_prefix:
            logger.warning(
                "Issuer %r differs from label issuer %r", self.issuer, self.label.issuer_prefix
            )
        if not self.uri:
            object.__setattr__(self, "uri", build_uri(self))

    @property
    def account(self) -> str:
        return self.label.account

    def to_dict(self) -> Dict[str, object]:
        return {
            "kind": self.kind.value,
            "issuer": self.issuer,
            "issuer_prefix": self.label.issuer_prefix,
            "account": self.label.account,
            "secret": self.secret,
            "algorithm": self.algorithm.value,
            "digits": self.digits,
            "period": self.period,
            "uri": self.uri,
        }


# --- Build ------------------------------------------------------------------
def build_uri(credential: Credential) -> str:
    """Serialize `credential` as an otpauth://totp/ URI."""
    label = "{}:{}".format(
        percent_codec.encode(credential.label.issuer_prefix),
        percent_codec.encode(credential.label.account),
    )
    query = urlencode(
        [
            ("secret", credential.secret),
            ("issuer", credential.issuer),
            ("digits", str(credential.digits)),
            ("algorithm", credential.algorithm.value),
            ("period", str(credential.period)),
        ],
        quote_via=quote,
    )
    return URI_PREFIX + label + "?" + query


def new_credential(issuer: str, account: str, digits: int = DEFAULT_DIGITS,
                   period: int = DEFAULT_PERIOD, byte_length: int = SECRET_BYTES) -> Credential:
    """Create a credential with a fresh random secret and its URI."""
    credential = Credential(
        label=Label(issuer_prefix=issuer, account=account),
        secret=generate_secret(byte_length),
        issuer=issuer,
        digits=digits,
        period=period,
    )
    logger.info("Created credential for %s:%s", issuer, account)
    return credential


# --- Parse ------------------------------------------------------------------
def _parse_int(value: str, name: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise InvalidParameter("{} must be an integer, got {!r}".format(name, value), field=name) from exc


def parse_uri(uri: str) -> Credential:
    """
    Parse an otpauth://totp/ URI.

    Raises:
        MalformedUri: wrong prefix, or no ':' / '?' after the prefix
        MissingSecret: no secret in the query
        InvalidParameter: non-integer digits/period, unknown algorithm, bad secret
        UnsupportedDigitCount: digits outside {6, 7, 8}
    """
    if not isinstance(uri, str) or not uri.startswith(URI_PREFIX):
        raise MalformedUri("Not an otpauth://totp/ URI", field="uri")

    start = len(URI_PREFIX)
    colon = uri.find(":", start)
    question = uri.find("?", start)
    if colon < 0 or question < 0 or question < colon:
        raise MalformedUri("URI label must look like issuer:account?query", field="uri")

    issuer_prefix = percent_codec.decode(uri[start:colon])
    account = percent_codec.decode(uri[colon + 1:question])

    params: Dict[str, str] = {}
    for key, value in parse_qsl(uri[question + 1:], keep_blank_values=True):
        # first occurrence wins
        params.setdefault(key, value)

    secret = params.get("secret")
    if not secret:
        raise MissingSecret("No secret found in URI", field="secret")

    digits = _parse_int(params["digits"], "digits") if "digits" in params else DEFAULT_DIGITS
    period = _parse_int(params["period"], "period") if "period" in params else DEFAULT_PERIOD
    algorithm = Algorithm.from_name(params["algorithm"]) if "algorithm" in params else Algorithm.SHA1

    return Credential(
        label=Label(issuer_prefix=issuer_prefix, account=account),
        secret=secret,
        issuer=params.get("issuer", ""),
        algorithm=algorithm,
        digits=digits,
        period=period,
        uri=uri,
    )
