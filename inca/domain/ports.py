from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Mapping, Optional, Protocol

Method = str
Target = str


# ---- Error model ----
class UseCaseError(Exception):
    """Base class for use case level errors (user-presentable)."""

    def __init__(self, code: str, message: str, meta: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.meta = meta


# ---- Transport value types ----
@dataclass(frozen=True)
class TransportResponse:
    """Status, headers and decoded JSON payload of one backend call."""

    status: int
    headers: Mapping[str, str] = field(default_factory=dict)
    payload: Any = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def with_payload(self, payload: Any) -> "TransportResponse":
        return replace(self, payload=payload)


@dataclass(frozen=True)
class Credentials:
    """Stored session tokens for the backend."""

    token: Optional[str] = None
    refresh_token: Optional[str] = None
    user_data: Optional[Dict[str, Any]] = None


# ---- Ports (Hexagonal boundaries) ----
class TransportPort(Protocol):
    """Verb-based call primitive against the incentive backend.
    Raises ApiError subclasses for non-2xx responses and network failures.
    """

    def call(
        self,
        method: Method,
        target: Target,
        body: Any = None,
        *,
        params: Optional[Dict[str, Any]] = None,
    ) -> TransportResponse: ...


class TokenStorePort(Protocol):
    """Persistence for session credentials."""

    def load(self) -> Credentials: ...
    def save(self, credentials: Credentials) -> None: ...
    def clear(self) -> None: ...
