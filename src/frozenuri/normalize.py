"""frozenuri.normalize
Scheme-agnostic normalization from RFC 3986 section 6.2.2.
"""

import re

from .components import Components
from .grammar import normalize_percent_encodings

_TRIPLET_SPLIT_PAT: re.Pattern[str] = re.compile(r"(%[0-9A-Fa-f]{2})")


def _normalize_host(host: str) -> str:
    """Percent-encoding normalization, then lower-case everything that isn't a triplet.
    e.g. _normalize_host("Ex%61mple%2ecom") == "example.com"
    """
    parts: list[str] = _TRIPLET_SPLIT_PAT.split(normalize_percent_encodings(host))
    # re.split puts the captured triplets at the odd indices.
    return "".join(part if i % 2 else part.lower() for i, part in enumerate(parts))


def remove_dot_segments(path: str) -> str:
    """Segment-stack version of the "remove_dot_segments" routine from RFC 3986 section 5.2.4.

    A ".." that would climb above the root of a rooted path is dropped, as in the RFC.
    In a rootless path there is nothing to absorb it, so it is kept:
    remove_dot_segments("a/../../b") == "../b"
    """
    rooted: bool = path.startswith("/")
    segments: list[str] = path.split("/")
    if rooted:
        segments = segments[1:]

    output: list[str] = []
    last: int = len(segments) - 1
    for i, segment in enumerate(segments):
        if segment == ".":
            pass
        elif segment == "..":
            if len(output) > 0 and output[-1] != "..":
                output.pop()
            elif not rooted:
                output.append("..")
        else:
            output.append(segment)
            continue
        # A dot segment at the end still names a directory.
        if i == last:
            output.append("")

    if not rooted and len(path) > 0 and len(output) > 0 and output[0] == "":
        # "a/.." is "./", not "", and "a/..//b" must not turn into the rooted "/b".
        output.insert(0, ".")
    result: str = "/".join(output)
    return f"/{result}" if rooted else result


def _disambiguate_path(components: Components, path: str) -> str:
    """Keeps a normalized path from reading as an authority or a scheme (RFC 3986 section 4.2)"""
    if components.raw_host is None:
        if path.startswith("//"):
            return f"/.{path}"
        if components.raw_scheme is None and ":" in path.partition("/")[0]:
            return f"./{path}"
    return path


def normalize(components: Components) -> Components:
    """Applies the syntax-based normalizations of RFC 3986 section 6.2.2 to already-validated components.
    Default ports are left alone; that is a scheme-based normalization (see frozenuri.hooks).
    """
    scheme: str | None = components.raw_scheme
    if scheme is not None:
        scheme = scheme.lower()

    host: str | None = components.raw_host
    if host is not None:
        host = _normalize_host(host)

    userinfo: str | None = components.raw_userinfo
    if userinfo is not None:
        userinfo = normalize_percent_encodings(userinfo)

    query: str | None = components.raw_query
    if query is not None:
        query = normalize_percent_encodings(query)

    fragment: str | None = components.raw_fragment
    if fragment is not None:
        fragment = normalize_percent_encodings(fragment)

    path: str = remove_dot_segments(normalize_percent_encodings(components.raw_path))

    return components.replace(
        raw_scheme=scheme,
        raw_userinfo=userinfo,
        raw_host=host,
        raw_path=_disambiguate_path(components, path),
        raw_query=query,
        raw_fragment=fragment,
    )
