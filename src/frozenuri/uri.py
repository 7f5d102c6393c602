"""frozenuri.uri
The immutable URI value and the mutable builder that produces it.
"""

import dataclasses
import logging

from typing import Self

from .components import ABSENT, EMPTY, Components, Presence, split_authority
from .errors import ComponentError, InvalidUri, URIError
from .hooks import SchemeHooks
from .normalize import normalize
from .validators import check_invariants, validate_components

logger = logging.getLogger(__name__)


def _render(components: Components) -> str:
    try:
        check_invariants(components)
    except URIError:
        return ""
    return components.recompose()


@dataclasses.dataclass(frozen=True)
class URI:
    """A normalized URI-reference. You should not instantiate this directly.
    Instead use parse(), resolve() or URIBuilder.build().

    Two URIs are equal when all of their components are equal, so "s://h" and "s:" differ
    (present vs. absent authority) even though neither has a host worth speaking of.
    """

    raw_scheme: str | None
    raw_userinfo: str | None
    raw_host: str | None
    raw_port: str | None
    raw_path: str
    raw_query: str | None
    raw_fragment: str | None
    _canonical: str = dataclasses.field(init=False, repr=False, compare=False)

    def __post_init__(self: Self) -> None:
        object.__setattr__(self, "_canonical", _render(self.components))

    @classmethod
    def from_components(cls: type[Self], components: Components) -> Self:
        return cls(
            raw_scheme=components.raw_scheme,
            raw_userinfo=components.raw_userinfo,
            raw_host=components.raw_host,
            raw_port=components.raw_port,
            raw_path=components.raw_path,
            raw_query=components.raw_query,
            raw_fragment=components.raw_fragment,
        )

    @property
    def components(self: Self) -> Components:
        return Components(
            raw_scheme=self.raw_scheme,
            raw_userinfo=self.raw_userinfo,
            raw_host=self.raw_host,
            raw_port=self.raw_port,
            raw_path=self.raw_path,
            raw_query=self.raw_query,
            raw_fragment=self.raw_fragment,
        )

    @property
    def scheme(self: Self) -> str:
        return self.raw_scheme if self.raw_scheme is not None else ""

    @property
    def authority(self: Self) -> str | Presence:
        authority: str | None = self.components.authority
        return authority if authority is not None else ABSENT

    @property
    def userinfo(self: Self) -> str | Presence:
        return self.raw_userinfo if self.raw_userinfo is not None else ABSENT

    @property
    def host(self: Self) -> str | Presence:
        return self.raw_host if self.raw_host is not None else ABSENT

    @property
    def port(self: Self) -> int | Presence:
        if self.raw_port is None:
            return ABSENT
        if len(self.raw_port) == 0:
            return EMPTY
        return int(self.raw_port, base=10)

    @property
    def path(self: Self) -> str:
        return self.raw_path

    @property
    def query(self: Self) -> str:
        return self.raw_query if self.raw_query is not None else ""

    @property
    def fragment(self: Self) -> str:
        return self.raw_fragment if self.raw_fragment is not None else ""

    @property
    def is_absolute(self: Self) -> bool:
        """True for an absolute-URI (RFC 3986 section 4.3): a scheme and no fragment."""
        return self.raw_scheme is not None and self.raw_fragment is None

    @property
    def is_relative_reference(self: Self) -> bool:
        return self.raw_scheme is None

    def canonical_string(self: Self) -> str:
        """The normalized string, or "" if these components cannot form a conforming URI."""
        return self._canonical

    def __str__(self: Self) -> str:
        return self._canonical

    def to_builder(self: Self) -> "URIBuilder":
        return URIBuilder.from_uri(self)

    def resolve(self: Self, reference: "str | URI", strict: bool = True, hooks: SchemeHooks | None = None) -> "URI":
        """Resolves reference against this URI. See frozenuri.resolve.resolve."""
        from .resolve import resolve

        return resolve(self, reference, strict=strict, hooks=hooks)


def finalize(components: Components, hooks: SchemeHooks | None = None) -> URI:
    """Normalizes already-validated components, runs the scheme hooks, and freezes the result."""
    components = normalize(components)
    if hooks is not None:
        components = hooks.apply(components)
    return URI.from_components(components)


def _coerce(value: str | Presence) -> str | None:
    if value is ABSENT:
        return None
    if value is EMPTY:
        return ""
    if not isinstance(value, str):
        raise TypeError(f"expected a str, ABSENT or EMPTY, got {value!r}")
    return value


class URIBuilder:
    """Mutable staging area for a URI. Any state is allowed until build() validates it.
    A builder is meant to be used from one thread at a time.

        uri = URIBuilder().with_scheme("http").with_host("example.com").with_path("/a").build()
    """

    def __init__(self: Self) -> None:
        self.reset()

    def reset(self: Self) -> Self:
        self.scheme: str | None = None
        self.userinfo: str | None = None
        self.host: str | None = None
        self.port: str | None = None
        self.path: str = ""
        self.query: str | None = None
        self.fragment: str | None = None
        return self

    @classmethod
    def from_uri(cls: type[Self], uri: URI) -> Self:
        builder: Self = cls()
        builder.scheme = uri.raw_scheme
        builder.userinfo = uri.raw_userinfo
        builder.host = uri.raw_host
        builder.port = uri.raw_port
        builder.path = uri.raw_path
        builder.query = uri.raw_query
        builder.fragment = uri.raw_fragment
        return builder

    def with_scheme(self: Self, scheme: str | Presence) -> Self:
        self.scheme = _coerce(scheme)
        return self

    def with_authority(self: Self, authority: str | Presence) -> Self:
        """Sets userinfo, host and port together. EMPTY means "//" with nothing after it."""
        raw: str | None = _coerce(authority)
        if raw is None:
            self.userinfo = self.host = self.port = None
        else:
            self.userinfo, self.host, self.port = split_authority(raw)
        return self

    def with_userinfo(self: Self, userinfo: str | Presence) -> Self:
        self.userinfo = _coerce(userinfo)
        return self

    def with_host(self: Self, host: str | Presence) -> Self:
        self.host = _coerce(host)
        return self

    def with_port(self: Self, port: int | str | Presence) -> Self:
        self.port = str(port) if isinstance(port, int) else _coerce(port)
        return self

    def with_path(self: Self, path: str | Presence) -> Self:
        self.path = _coerce(path) or ""
        return self

    def with_query(self: Self, query: str | Presence) -> Self:
        self.query = _coerce(query)
        return self

    def with_fragment(self: Self, fragment: str | Presence) -> Self:
        self.fragment = _coerce(fragment)
        return self

    def _components(self: Self) -> Components:
        host: str | None = self.host
        if host is None and (self.userinfo is not None or self.port is not None):
            # userinfo and port only exist inside an authority, whose host defaults to "".
            host = ""
        return Components(
            raw_scheme=self.scheme,
            raw_userinfo=self.userinfo,
            raw_host=host,
            raw_port=self.port,
            raw_path=self.path,
            raw_query=self.query,
            raw_fragment=self.fragment,
        )

    def build(self: Self, hooks: SchemeHooks | None = None) -> URI:
        components: Components = self._components()
        try:
            validate_components(components)
        except ComponentError as e:
            logger.debug("build failed for %r: %s", components, e)
            raise InvalidUri(components.recompose(), e) from e
        return finalize(components, hooks)

    def __repr__(self: Self) -> str:
        return f"{self.__class__.__name__}({self._components().recompose()!r})"
