"""frozenuri.grammar
ABNF building blocks, character classes and percent-encoding mechanics from RFC 3986.
"""

import re
import string

from .errors import MalformedEncoding

# Each of these ABNF rules is from RFC 3986, 6874, or 5234.

# ALPHA = %x41-5A / %x61-7A
_ALPHA: str = r"[A-Za-z]"

# DIGIT = %x30-39
_DIGIT: str = r"[0-9]"

# HEXDIG = DIGIT / "A" / "B" / "C" / "D" / "E" / "F"
_HEXDIG: str = rf"(?:{_DIGIT}|[A-Fa-f])"

# unreserved = ALPHA / DIGIT / "-" / "." / "_" / "~"
_UNRESERVED: str = rf"(?:{_ALPHA}|{_DIGIT}|[-._~])"

# pct-encoded = "%" HEXDIG HEXDIG
_PCT_ENCODED: str = rf"%{_HEXDIG}{_HEXDIG}"

# sub-delims = "!" / "$" / "&" / "'" / "(" / ")" / "*" / "+" / "," / ";" / "="
_SUB_DELIMS: str = r"[!$&'()*+,;=]"

# pchar = unreserved / pct-encoded / sub-delims / ":" / "@"
_PCHAR: str = rf"(?:{_UNRESERVED}|{_PCT_ENCODED}|{_SUB_DELIMS}|[:@])"

# scheme = ALPHA *( ALPHA / DIGIT / "+" / "-" / "." )
SCHEME: str = rf"{_ALPHA}(?:{_ALPHA}|{_DIGIT}|[+\-.])*"

# userinfo = *( unreserved / pct-encoded / sub-delims / ":" )
USERINFO: str = rf"(?:{_UNRESERVED}|{_PCT_ENCODED}|{_SUB_DELIMS}|:)*"

# path = *( pchar / "/" )
# (The path-abempty / path-absolute / path-noscheme / path-rootless split is
# enforced structurally by validators.check_invariants.)
PATH: str = rf"(?:{_PCHAR}|/)*"

# query = *( pchar / "/" / "?" )
QUERY: str = rf"(?:{_PCHAR}|[/?])*"

# fragment = *( pchar / "/" / "?" )
FRAGMENT: str = rf"(?:{_PCHAR}|[/?])*"

# port = *DIGIT
PORT: str = rf"{_DIGIT}*"

# dec-octet = DIGIT / %x31-39 DIGIT / "1" 2DIGIT / "2" %x30-34 DIGIT / "25" %x30-35
_DEC_OCTET: str = rf"(?:25[0-5]|2[0-4]{_DIGIT}|1{_DIGIT}{{2}}|[1-9]{_DIGIT}|{_DIGIT})"

# IPv4address = dec-octet "." dec-octet "." dec-octet "." dec-octet
IPV4ADDRESS: str = rf"{_DEC_OCTET}\.{_DEC_OCTET}\.{_DEC_OCTET}\.{_DEC_OCTET}"

# h16 = 1*4HEXDIG
_H16: str = rf"(?:{_HEXDIG}{{1,4}})"

# ls32 = ( h16 ":" h16 ) / IPv4address
_LS32: str = rf"(?:{_H16}:{_H16}|{IPV4ADDRESS})"

# IPv6address =                                      6( h16 ":" ) ls32
#                       /                       "::" 5( h16 ":" ) ls32
#                       / [               h16 ] "::" 4( h16 ":" ) ls32
#                       / [ *1( h16 ":" ) h16 ] "::" 3( h16 ":" ) ls32
#                       / [ *2( h16 ":" ) h16 ] "::" 2( h16 ":" ) ls32
#                       / [ *3( h16 ":" ) h16 ] "::"    h16 ":"   ls32
#                       / [ *4( h16 ":" ) h16 ] "::"              ls32
#                       / [ *5( h16 ":" ) h16 ] "::"              h16
#                       / [ *6( h16 ":" ) h16 ] "::"
_IPV6ADDRESS: str = (
    "(?:"
    + r"|".join(
        (
                                           rf"(?:{_H16}:){{6}}{_LS32}",
                                         rf"::(?:{_H16}:){{5}}{_LS32}",
                              rf"(?:{_H16})?::(?:{_H16}:){{4}}{_LS32}",
            rf"(?:(?:{_H16}:){{0,1}}{_H16})?::(?:{_H16}:){{3}}{_LS32}",
            rf"(?:(?:{_H16}:){{0,2}}{_H16})?::(?:{_H16}:){{2}}{_LS32}",
            rf"(?:(?:{_H16}:){{0,3}}{_H16})?::(?:{_H16}:){_LS32}",
            rf"(?:(?:{_H16}:){{0,4}}{_H16})?::{_LS32}",
            rf"(?:(?:{_H16}:){{0,5}}{_H16})?::{_H16}",
            rf"(?:(?:{_H16}:){{0,6}}{_H16})?::",
        )
    )
    + ")"
)

# ZoneID = 1*( unreserved / pct-encoded )
_ZONEID: str = rf"(?:{_UNRESERVED}|{_PCT_ENCODED})+"

# IPv6addrz = IPv6address "%25" ZoneID
_IPV6ADDRZ: str = rf"{_IPV6ADDRESS}%25{_ZONEID}"

# IPvFuture = "v" 1*HEXDIG "." 1*( unreserved / sub-delims / ":" )
_IPVFUTURE: str = rf"[vV]{_HEXDIG}+\.(?:{_UNRESERVED}|{_SUB_DELIMS}|:)+"

# IP-literal = "[" ( IPv6address / IPv6addrz / IPvFuture  ) "]"
IP_LITERAL: str = rf"\[(?:{_IPV6ADDRESS}|{_IPV6ADDRZ}|{_IPVFUTURE})\]"

# reg-name = *( unreserved / pct-encoded / sub-delims )
REG_NAME: str = rf"(?:{_UNRESERVED}|{_PCT_ENCODED}|{_SUB_DELIMS})*"

_PCT_TRIPLET_PAT: re.Pattern[str] = re.compile(rf"{_PCT_ENCODED}")

UNRESERVED_CHARS: frozenset[str] = frozenset(string.ascii_letters + string.digits + "-._~")
SUB_DELIM_CHARS: frozenset[str] = frozenset("!$&'()*+,;=")
PCHAR_CHARS: frozenset[str] = UNRESERVED_CHARS | SUB_DELIM_CHARS | frozenset(":@")
_HEX_CHARS: frozenset[str] = frozenset(string.hexdigits)


def is_unreserved(ch: str) -> bool:
    """unreserved, RFC 3986 section 2.3"""
    return ch in UNRESERVED_CHARS


def is_sub_delim(ch: str) -> bool:
    """sub-delims, RFC 3986 section 2.2"""
    return ch in SUB_DELIM_CHARS


def is_pchar(ch: str) -> bool:
    """Single-character members of pchar (RFC 3986 section 3.3).
    A pct-encoded triplet is three characters long, so "%" on its own is not a pchar.
    """
    return ch in PCHAR_CHARS


def percent_decode(data: str) -> bytes:
    """Decodes every %HH triplet in data. Literal characters are passed through as UTF-8.
    e.g. percent_decode("a%2Fb") == b"a/b"
    """
    result: bytearray = bytearray()
    i: int = 0
    while i < len(data):
        ch: str = data[i]
        if ch == "%":
            triplet: str = data[i + 1 : i + 3]
            if len(triplet) != 2 or not all(c in _HEX_CHARS for c in triplet):
                raise MalformedEncoding(None, i, f"invalid percent-encoding {data[i : i + 3]!r}")
            result.append(int(triplet, base=16))
            i += 3
        else:
            result += ch.encode("utf-8")
            i += 1
    return bytes(result)


def percent_encode(data: bytes, allowed: frozenset[str] | str = UNRESERVED_CHARS) -> str:
    """Encodes every byte of data whose ASCII character is not in allowed as uppercase %HH.
    e.g. percent_encode(b"a b") == "a%20b"
    """
    result: list[str] = []
    for byte in data:
        ch: str = chr(byte)
        if byte < 0x80 and ch in allowed and ch != "%":
            result.append(ch)
        else:
            result.append(f"%{byte:02X}")
    return "".join(result)


def _normalize_triplet(m: re.Match[str]) -> str:
    ch: str = chr(int(m[0][1:], base=16))
    if ch in UNRESERVED_CHARS:
        return ch
    return m[0].upper()


def normalize_percent_encodings(data: str) -> str:
    """Returns data with triplets of unreserved characters decoded and all other triplets upper-cased.
    e.g. normalize_percent_encodings("%7efoo%2f") == "~foo%2F"
    """
    return _PCT_TRIPLET_PAT.sub(_normalize_triplet, data)
