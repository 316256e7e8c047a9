"""
percent_codec.py — Reversible %XX escaping for otpauth labels and parameters.

Only a fixed set of characters is escaped (RFC 3986 reserved characters plus
the usual URI-hostile ones). Everything else passes through, so an account
like "alice" stays readable in the URI.

    encode("Test Corp")   -> "Test%20Corp"
    decode("Test%20Corp") -> "Test Corp"
    decode("100%")        -> "100%"      (incomplete escape, kept literally)
"""

from types import MappingProxyType
from typing import Dict, Mapping


# --- Reserved table ----------------------------------------------------------
_RFC3986_RESERVED = ":/?#[]@!$&'()*+,;="
_URI_HOSTILE = " \"%-.<>\\^_`{|}~"
_CURRENCY = "£¥€"


def _escape(ch: str) -> str:
    """Escape one character as its UTF-8 bytes, e.g. '€' -> '%E2%82%AC'."""
    return "".join("%{:02X}".format(b) for b in ch.encode("utf-8"))


def _build_table() -> Dict[str, str]:
    table: Dict[str, str] = {}
    for ch in _RFC3986_RESERVED + _URI_HOSTILE + _CURRENCY:
        table[ch] = _escape(ch)
    return table


RESERVED: Mapping[str, str] = MappingProxyType(_build_table())
_REVERSE: Mapping[str, str] = MappingProxyType({esc: ch for ch, esc in RESERVED.items()})
# longest escapes first so "%E2%82%AC" wins over a 3-char "%E2" lookup
_ESCAPE_LENGTHS = tuple(sorted({len(esc) for esc in _REVERSE}, reverse=True))


# --- Codec -------------------------------------------------------------------
def encode(text: str) -> str:
    """Replace every reserved character in `text` with its escape."""
    return "".join(RESERVED.get(ch, ch) for ch in text)


def decode(text: str) -> str:
    """
    Left inverse of encode().

    Unknown escapes are emitted as the literal 3-character token and a
    trailing '%' with fewer than two characters after it is kept as is.
    Never raises: malformed input only costs round-trip fidelity.
    """
    out = []
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch != "%":
            out.append(ch)
            i += 1
            continue

        if n - i < 3:
            out.append(text[i:])
            break

        for length in _ESCAPE_LENGTHS:
            token = text[i:i + length]
            if len(token) == length and token.upper() in _REVERSE:
                out.append(_REVERSE[token.upper()])
                i += length
                break
        else:
            out.append(text[i:i + 3])
            i += 3
    return "".join(out)
