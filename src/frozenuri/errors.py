"""frozenuri.errors
Everything raised by frozenuri is a URIError, which is a ValueError.
"""

from typing import Self


class URIError(ValueError):
    pass


class ComponentError(URIError):
    """A single component failed its grammar. offset is the position of the first offending character."""

    def __init__(self: Self, component: str | None, offset: int, reason: str = "") -> None:
        self.component: str | None = component
        self.offset: int = offset
        self.reason: str = reason
        where: str = f"{component} at offset {offset}" if component is not None else f"offset {offset}"
        super().__init__(f"invalid {where}: {reason}" if reason else f"invalid {where}")


class GrammarViolation(ComponentError):
    pass


class MalformedEncoding(ComponentError):
    pass


class InvalidUri(URIError):
    """A parse or build failed. cause is the first ComponentError encountered."""

    def __init__(self: Self, value: str, cause: ComponentError) -> None:
        self.value: str = value
        self.cause: ComponentError = cause
        super().__init__(f"invalid URI {value!r}: {cause}")

    @property
    def component(self: Self) -> str | None:
        return self.cause.component

    @property
    def offset(self: Self) -> int:
        return self.cause.offset


class NonAbsoluteBase(URIError):
    def __init__(self: Self, base: str) -> None:
        self.base: str = base
        super().__init__(f"{base!r} is not an absolute URI")


class SchemePolicyError(URIError):
    """Raised by scheme hooks. Never an InvalidUri: the generic syntax was fine, the scheme's policy was not."""

    def __init__(self: Self, scheme: str, reason: str) -> None:
        self.scheme: str = scheme
        self.reason: str = reason
        super().__init__(f"{scheme}: {reason}")
