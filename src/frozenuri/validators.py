"""frozenuri.validators
Per-component grammar checks and the cross-component rules of RFC 3986 section 3.
Every validator returns its input unchanged or raises a ComponentError.
"""

import re

from .components import Components
from .errors import GrammarViolation, MalformedEncoding
from .grammar import FRAGMENT, IP_LITERAL, IPV4ADDRESS, PATH, PORT, QUERY, REG_NAME, SCHEME, USERINFO

_SCHEME_PAT: re.Pattern[str] = re.compile(SCHEME)
_USERINFO_PAT: re.Pattern[str] = re.compile(USERINFO)
_IP_LITERAL_PAT: re.Pattern[str] = re.compile(IP_LITERAL)
_IPV4ADDRESS_PAT: re.Pattern[str] = re.compile(IPV4ADDRESS)
_REG_NAME_PAT: re.Pattern[str] = re.compile(REG_NAME)
_PORT_PAT: re.Pattern[str] = re.compile(PORT)
_PATH_PAT: re.Pattern[str] = re.compile(PATH)
_QUERY_PAT: re.Pattern[str] = re.compile(QUERY)
_FRAGMENT_PAT: re.Pattern[str] = re.compile(FRAGMENT)


def _scan(pattern: re.Pattern[str], value: str, component: str, offset: int) -> str:
    # Every pattern passed in here is a starred rule, so match() always succeeds;
    # where it stops is the first character the rule does not allow.
    end: int = pattern.match(value).end()  # type: ignore[union-attr]
    if end < len(value):
        if value[end] == "%":
            raise MalformedEncoding(component, offset + end, f"invalid percent-encoding {value[end : end + 3]!r}")
        raise GrammarViolation(component, offset + end, f"unexpected character {value[end]!r}")
    return value


def validate_scheme(scheme: str, offset: int = 0) -> str:
    if len(scheme) == 0:
        raise GrammarViolation("scheme", offset, "scheme is empty")
    m: re.Match[str] | None = _SCHEME_PAT.match(scheme)
    end: int = m.end() if m is not None else 0
    if end < len(scheme):
        # Percent-encoding is not part of the scheme grammar, so "%" is just another bad character here.
        raise GrammarViolation("scheme", offset + end, f"unexpected character {scheme[end]!r}")
    return scheme


def validate_userinfo(userinfo: str, offset: int = 0) -> str:
    return _scan(_USERINFO_PAT, userinfo, "userinfo", offset)


def validate_host(host: str, offset: int = 0) -> str:
    """host = IP-literal / IPv4address / reg-name, tried in that order."""
    if host.startswith("["):
        if _IP_LITERAL_PAT.fullmatch(host) is None:
            raise GrammarViolation("host", offset, f"malformed IP-literal {host!r}")
        return host
    if _IPV4ADDRESS_PAT.fullmatch(host) is not None:
        return host
    return _scan(_REG_NAME_PAT, host, "host", offset)


def validate_port(port: str, offset: int = 0) -> str:
    end: int = _PORT_PAT.match(port).end()  # type: ignore[union-attr]
    if end < len(port):
        raise GrammarViolation("port", offset + end, f"unexpected character {port[end]!r}")
    return port


def validate_path(path: str, offset: int = 0) -> str:
    return _scan(_PATH_PAT, path, "path", offset)


def validate_query(query: str, offset: int = 0) -> str:
    return _scan(_QUERY_PAT, query, "query", offset)


def validate_fragment(fragment: str, offset: int = 0) -> str:
    return _scan(_FRAGMENT_PAT, fragment, "fragment", offset)


def check_invariants(components: Components, path_offset: int = 0) -> None:
    """Rules that span components, from RFC 3986 sections 3 and 4.2"""
    path: str = components.raw_path
    if components.raw_host is None:
        if components.raw_userinfo is not None or components.raw_port is not None:
            raise GrammarViolation("authority", 0, "userinfo or port given without a host")
        if path.startswith("//"):
            raise GrammarViolation("path", path_offset, "path cannot begin with '//' when there is no authority")
        if components.raw_scheme is None:
            first_segment: str = path.partition("/")[0]
            if ":" in first_segment:
                raise GrammarViolation(
                    "path",
                    path_offset + first_segment.index(":"),
                    "first segment of a relative-path reference cannot contain ':'",
                )
    elif len(path) > 0 and not path.startswith("/"):
        raise GrammarViolation("path", path_offset, "path must be empty or begin with '/' when there is an authority")


def validate_components(components: Components) -> Components:
    """Validates a component set built by hand. Offsets are relative to the offending component."""
    if components.raw_scheme is not None:
        validate_scheme(components.raw_scheme)
    if components.raw_userinfo is not None:
        validate_userinfo(components.raw_userinfo)
    if components.raw_host is not None:
        validate_host(components.raw_host)
    if components.raw_port is not None:
        validate_port(components.raw_port)
    validate_path(components.raw_path)
    if components.raw_query is not None:
        validate_query(components.raw_query)
    if components.raw_fragment is not None:
        validate_fragment(components.raw_fragment)
    check_invariants(components)
    return components
