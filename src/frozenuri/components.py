"""frozenuri.components
The five components of a URI-reference, with absent and present-empty kept apart.
"""

import dataclasses
import enum

from typing import Self


class Presence(enum.Enum):
    """Markers for the states a plain string cannot express."""

    ABSENT = "absent"
    EMPTY = "empty"

    def __repr__(self: Self) -> str:
        return self.name


ABSENT: Presence = Presence.ABSENT
EMPTY: Presence = Presence.EMPTY


@dataclasses.dataclass(frozen=True)
class Components:
    """Raw component slots. None means absent, "" means present but empty.
    The authority is present exactly when raw_host is not None.
    """

    raw_scheme: str | None = None
    raw_userinfo: str | None = None
    raw_host: str | None = None
    raw_port: str | None = None
    raw_path: str = ""
    raw_query: str | None = None
    raw_fragment: str | None = None

    @property
    def authority(self: Self) -> str | None:
        """userinfo@host:port"""
        if self.raw_host is None:
            return None
        result: str = ""
        if self.raw_userinfo is not None:
            result += f"{self.raw_userinfo}@"
        result += self.raw_host
        if self.raw_port is not None:
            result += f":{self.raw_port}"
        return result

    def recompose(self: Self) -> str:
        """Direct translation of RFC 3986 section 5.3"""
        result: str = ""
        if self.raw_scheme is not None:
            result += f"{self.raw_scheme}:"
        if self.authority is not None:
            result += f"//{self.authority}"
        result += self.raw_path
        if self.raw_query is not None:
            result += f"?{self.raw_query}"
        if self.raw_fragment is not None:
            result += f"#{self.raw_fragment}"
        return result

    def replace(self: Self, **changes: str | None) -> Self:
        return dataclasses.replace(self, **changes)


def split_authority(authority: str) -> tuple[str | None, str, str | None]:
    """Splits "userinfo@host:port" into its parts.
    userinfo ends at the last "@"; the port starts after the last ":" that follows any "]".
    """
    userinfo: str | None = None
    host_port: str = authority
    if "@" in authority:
        userinfo, _, host_port = authority.rpartition("@")

    port: str | None = None
    host: str = host_port
    colon: int = host_port.rfind(":")
    if colon > host_port.rfind("]"):
        host, port = host_port[:colon], host_port[colon + 1 :]
    return userinfo, host, port
