"""Client settings loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_BASE_URL = "https://localhost:44307/api"
DEFAULT_TENANT_ID = "root"


def _int_env(env: Mapping[str, str], name: str, fallback: int) -> int:
    raw = (env.get(name) or "").strip()
    if not raw:
        return fallback
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc
    if value < 0:
        raise ValueError(f"{name} must be >= 0, got {value}")
    return value


@dataclass(frozen=True)
class ClientSettings:
    """Connection settings for the incentive backend.

    Attributes:
        base_url: API root, without trailing slash.
        tenant_id: Value of the ``tenantId`` header.
        request_timeout_s: Per-request timeout in seconds.
        retries: Retries after timeouts or connection errors.
        token_path: JSON file for session tokens; ``None`` keeps them in memory.
    """

    base_url: str = DEFAULT_BASE_URL
    tenant_id: str = DEFAULT_TENANT_ID
    request_timeout_s: int = 10
    retries: int = 2
    token_path: Optional[str] = None

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "ClientSettings":
        source = os.environ if env is None else env
        return cls(
            base_url=(source.get("INCA_API_BASE_URL") or DEFAULT_BASE_URL).rstrip("/"),
            tenant_id=source.get("INCA_TENANT_ID") or DEFAULT_TENANT_ID,
            request_timeout_s=_int_env(source, "INCA_REQUEST_TIMEOUT_S", 10),
            retries=_int_env(source, "INCA_RETRIES", 2),
            token_path=source.get("INCA_TOKEN_PATH") or None,
        )
