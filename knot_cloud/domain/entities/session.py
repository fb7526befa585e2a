"""Domain entities for broker sessions."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class SessionCredentials:
    """Identity used to authenticate against the broker and its HTTP API."""

    host: str
    port: int
    uuid: str = field(repr=False)
    token: str = field(repr=False)
