"""frozenuri.hooks
Scheme-specific policy, plugged in after generic normalization.

RFC 3986 has no notion of a default port or of a required host; those belong to the
individual scheme specifications. A SchemeHook carries one such rule for one scheme,
and a SchemeHooks registry is passed explicitly to parse(), resolve() or build().
"""

import abc
import logging

from collections.abc import Iterable, Mapping
from typing import Self

from .components import Components
from .errors import SchemePolicyError

logger = logging.getLogger(__name__)


class SchemeHook(abc.ABC):
    """Post-normalization rule for one scheme. Raise SchemePolicyError to reject."""

    def __init__(self: Self, scheme: str) -> None:
        self.scheme: str = scheme.lower()

    @abc.abstractmethod
    def apply(self: Self, components: Components) -> Components:
        ...

    def __repr__(self: Self) -> str:
        return f"{self.__class__.__name__}({self.scheme!r})"


class DefaultPortElision(SchemeHook):
    """Drops a port equal to the scheme's default, and an empty port (RFC 3986 section 6.2.3)."""

    def __init__(self: Self, scheme: str, port: int) -> None:
        super().__init__(scheme)
        self.port: int = port

    def apply(self: Self, components: Components) -> Components:
        port: str | None = components.raw_port
        if port is None:
            return components
        if len(port) == 0 or int(port, base=10) == self.port:
            return components.replace(raw_port=None)
        return components

    def __repr__(self: Self) -> str:
        return f"{self.__class__.__name__}({self.scheme!r}, {self.port})"


class HostRequired(SchemeHook):
    def apply(self: Self, components: Components) -> Components:
        if components.raw_host is None or len(components.raw_host) == 0:
            raise SchemePolicyError(self.scheme, "a non-empty host is required")
        return components


class SchemeHooks:
    """Registry of SchemeHooks keyed by scheme. Hooks for a scheme run in registration order."""

    def __init__(self: Self, hooks: Iterable[SchemeHook] = ()) -> None:
        self._hooks: dict[str, list[SchemeHook]] = {}
        for hook in hooks:
            self.register(hook)

    def register(self: Self, hook: SchemeHook) -> Self:
        self._hooks.setdefault(hook.scheme, []).append(hook)
        return self

    def for_scheme(self: Self, scheme: str | None) -> list[SchemeHook]:
        if scheme is None:
            return []
        return list(self._hooks.get(scheme.lower(), ()))

    def apply(self: Self, components: Components) -> Components:
        for hook in self.for_scheme(components.raw_scheme):
            logger.debug("applying %r to %r", hook, components.recompose())
            components = hook.apply(components)
        return components

    def __contains__(self: Self, scheme: object) -> bool:
        return isinstance(scheme, str) and scheme.lower() in self._hooks


# Default ports of common schemes, from their registrations in the IANA URI scheme registry.
DEFAULT_PORTS: Mapping[str, int] = {
    "http": 80,
    "https": 443,
    "ws": 80,
    "wss": 443,
    "ftp": 21,
}

_HOST_REQUIRED: tuple[str, ...] = ("http", "https", "ws", "wss")


def default_hooks() -> SchemeHooks:
    """A fresh registry with default-port elision for DEFAULT_PORTS and a required host for the web schemes."""
    hooks: SchemeHooks = SchemeHooks(DefaultPortElision(scheme, port) for scheme, port in DEFAULT_PORTS.items())
    for scheme in _HOST_REQUIRED:
        hooks.register(HostRequired(scheme))
    return hooks
