"""frozenuri.parse
RFC 3986 parser.

Splitting follows the Appendix B algorithm, but presence is tracked explicitly instead of
being read off empty capture groups, so "s:" (no authority) and "s://" (empty authority)
stay different. Each piece is then checked against its own grammar rule.
"""

import logging
import re

from .components import Components, split_authority
from .errors import ComponentError, GrammarViolation, InvalidUri
from .hooks import SchemeHooks
from .uri import URI, finalize
from .validators import (
    check_invariants,
    validate_fragment,
    validate_host,
    validate_path,
    validate_port,
    validate_query,
    validate_scheme,
    validate_userinfo,
)

logger = logging.getLogger(__name__)

# ^(([^:/?#]+):)?  from Appendix B. Whatever sits before the first ":" is taken to be a
# scheme and has to pass as one.
_SCHEME_CANDIDATE_PAT: re.Pattern[str] = re.compile(r"([^:/?#]+):")
_AUTHORITY_END_PAT: re.Pattern[str] = re.compile(r"[/?#]")
_PATH_END_PAT: re.Pattern[str] = re.compile(r"[?#]")
_QUERY_END_PAT: re.Pattern[str] = re.compile(r"#")


def _find(pattern: re.Pattern[str], data: str, start: int) -> int:
    m: re.Match[str] | None = pattern.search(data, start)
    return m.start() if m is not None else len(data)


def _split(data: str, relative_only: bool) -> Components:
    pos: int = 0

    scheme: str | None = None
    if not relative_only:
        m: re.Match[str] | None = _SCHEME_CANDIDATE_PAT.match(data)
        if m is not None:
            scheme = validate_scheme(m[1], 0)
            pos = m.end()

    userinfo: str | None = None
    host: str | None = None
    port: str | None = None
    if data.startswith("//", pos):
        start: int = pos + 2
        pos = _find(_AUTHORITY_END_PAT, data, start)
        userinfo, host, port = split_authority(data[start:pos])
        if userinfo is not None:
            validate_userinfo(userinfo, start)
            start += len(userinfo) + 1
        validate_host(host, start)
        if port is not None:
            validate_port(port, start + len(host) + 1)

    path_start: int = pos
    pos = _find(_PATH_END_PAT, data, pos)
    path: str = validate_path(data[path_start:pos], path_start)

    query: str | None = None
    if data.startswith("?", pos):
        end: int = _find(_QUERY_END_PAT, data, pos + 1)
        query = validate_query(data[pos + 1 : end], pos + 1)
        pos = end

    fragment: str | None = None
    if data.startswith("#", pos):
        fragment = validate_fragment(data[pos + 1 :], pos + 1)

    components: Components = Components(
        raw_scheme=scheme,
        raw_userinfo=userinfo,
        raw_host=host,
        raw_port=port,
        raw_path=path,
        raw_query=query,
        raw_fragment=fragment,
    )
    check_invariants(components, path_start)
    return components


def parse_components(data: str, relative_only: bool = False) -> Components:
    """Splits and validates data without normalizing it.
    Use this when you need the components exactly as written (e.g. the scheme's original case).
    With relative_only, data is read as a relative-ref and no scheme is ever recognized.
    """
    try:
        return _split(data, relative_only)
    except ComponentError as e:
        logger.debug("parse failed for %r: %s", data, e)
        raise InvalidUri(data, e) from e


def parse(data: str, hooks: SchemeHooks | None = None) -> URI:
    """RFC 3986-compliant URI-reference parser.
    Accepts both URIs ("http://example.org/path?query#fragment") and relative references ("../path").
    """
    return finalize(parse_components(data), hooks)


def parse_uri(data: str, hooks: SchemeHooks | None = None) -> URI:
    """RFC 3986-compliant URI parser. Fails unless data has a scheme."""
    components: Components = parse_components(data)
    if components.raw_scheme is None:
        e: GrammarViolation = GrammarViolation("scheme", 0, "a URI must have a scheme")
        logger.debug("parse failed for %r: %s", data, e)
        raise InvalidUri(data, e)
    return finalize(components, hooks)


def parse_relative_ref(data: str, hooks: SchemeHooks | None = None) -> URI:
    """RFC 3986-compliant relative-ref parser.
    Nothing is taken to be a scheme, so "a:b/c" is rejected rather than read as scheme "a".
    """
    return finalize(parse_components(data, relative_only=True), hooks)
