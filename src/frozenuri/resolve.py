"""frozenuri.resolve
Reference resolution from RFC 3986 section 5.2.
"""

from .components import Components
from .errors import NonAbsoluteBase
from .hooks import SchemeHooks
from .parse import parse, parse_components
from .uri import URI, finalize


def _merge_paths(base: Components, r: Components) -> str:
    """Implementation of the "merge" routine defined in RFC 3986 section 5.2.3"""
    if base.raw_host is not None and len(base.raw_path) == 0:
        return f"/{r.raw_path}"
    dirname, slash, _ = base.raw_path.rpartition("/")
    return dirname + slash + r.raw_path


def _transform(base: Components, r: Components, strict: bool) -> Components:
    """Implementation of the "Transform References" algorithm from RFC 3986 section 5.2.2

    remove_dot_segments is left to the normalizer, which every result goes through.
    """
    # A direct translation of the pseudocode, kept that way so it can be checked against the RFC.
    r_scheme: str | None = r.raw_scheme
    if not strict and r_scheme is not None and r_scheme.lower() == base.raw_scheme:
        r_scheme = None

    if r_scheme is not None:
        return r

    if r.raw_host is not None:
        return r.replace(raw_scheme=base.raw_scheme)

    path: str
    query: str | None
    if len(r.raw_path) == 0:
        path = base.raw_path
        query = r.raw_query if r.raw_query is not None else base.raw_query
    else:
        if r.raw_path.startswith("/"):
            path = r.raw_path
        else:
            path = _merge_paths(base, r)
        query = r.raw_query

    return Components(
        raw_scheme=base.raw_scheme,
        raw_userinfo=base.raw_userinfo,
        raw_host=base.raw_host,
        raw_port=base.raw_port,
        raw_path=path,
        raw_query=query,
        raw_fragment=r.raw_fragment,
    )


def resolve(base: URI, reference: str | URI, strict: bool = True, hooks: SchemeHooks | None = None) -> URI:
    """Resolves reference against base, which must have a scheme.

    With strict=False, a reference whose scheme equals the base's is treated as if it had
    none, the backwards-compatible reading allowed by RFC 3986 section 5.2.2.
    The base's fragment is never carried over.
    """
    if base.raw_scheme is None:
        raise NonAbsoluteBase(base.canonical_string())
    r: Components = parse_components(reference) if isinstance(reference, str) else reference.components
    return finalize(_transform(base.components, r, strict), hooks)


def join(base: str, reference: str, strict: bool = True) -> str:
    """String-in, string-out resolution. e.g. join("http://a/b/c/d;p?q", "../g") == "http://a/b/g" """
    return resolve(parse(base), reference, strict=strict).canonical_string()
