"""HTTP transport for the incentive backend.

This module provides a thin wrapper around ``requests.Session`` that applies
the shared timeout/retry policy, tenant and bearer-token headers, and the
one-shot token refresh the backend expects after an HTTP 401.

Dependencies:
    - ``requests`` for network I/O.
    - ``inca.adapters.api_errors`` for typed transport failures.
    - ``inca.domain.ports.TokenStorePort`` for session credentials.

Call context:
    - ``HttpTransport`` is wrapped by ``TranscodingGateway``; it never sees
      application symbols, only wire codes.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests
from requests import exceptions as req_exc

from inca.adapters.api_errors import ApiAuthError, ApiTimeoutError, error_for_response
from inca.domain.ports import Credentials, TokenStorePort, TransportPort, TransportResponse

REFRESH_PATH = "/Auth/refresh-token"


@dataclass
class HttpConfig:
    """Timeout, retry and tenant configuration for backend calls.

    Attributes:
        request_timeout_s: Default timeout in seconds for JSON API calls.
        retries: Number of retry attempts after the initial request.
        tenant_id: Value of the ``tenantId`` header required by the backend.
    """
    request_timeout_s: int = 10
    retries: int = 2
    tenant_id: str = "root"


class RetryingSession:
    """Shared requests wrapper with tenant headers and retry loops.

    This class is intentionally transport-only. Callers provide endpoint URLs
    and decide how to map non-2xx responses into typed errors.
    """

    def __init__(self, cfg: HttpConfig) -> None:
        """Create a retry-enabled session.

        Side Effects:
            Creates a persistent ``requests.Session`` object.
        """
        self.session = requests.Session()
        self.cfg = cfg

    def _headers(
        self, token: Optional[str] = None, json_body: bool = False
    ) -> Dict[str, str]:
        headers = {"Accept": "application/json", "tenantId": self.cfg.tenant_id}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        if json_body:
            headers["Content-Type"] = "application/json"
        return headers

    def request(
        self,
        method: str,
        url: str,
        *,
        json_body: Any = None,
        params: Optional[Dict[str, Any]] = None,
        token: Optional[str] = None,
        timeout: Optional[int] = None,
    ) -> requests.Response:
        """Send one request, retrying on timeout/connectivity failures.

        Args:
            method: HTTP verb (``GET``, ``POST``, ``PUT``, ``PATCH``, ``DELETE``).
            url: Absolute endpoint URL.
            json_body: Optional payload object serialized to JSON text.
            params: Optional query parameter mapping.
            token: Bearer token to send, if any.
            timeout: Optional timeout override in seconds.

        Returns:
            ``requests.Response`` from the first attempt that reached the server.

        Raises:
            ApiTimeoutError: If all attempts fail with timeout/connection errors.
        """
        context = f"{method} {url}"
        data = None if json_body is None else json.dumps(json_body)
        last_err: ApiTimeoutError | None = None
        attempts = self.cfg.retries + 1
        for _ in range(attempts):
            try:
                return self.session.request(
                    method,
                    url,
                    data=data,
                    params=params,
                    headers=self._headers(token, json_body=json_body is not None),
                    timeout=timeout or self.cfg.request_timeout_s,
                )
            except (req_exc.Timeout, req_exc.ConnectionError):
                last_err = ApiTimeoutError(f"Timeout contacting {url}", context=context)
        raise last_err


class HttpTransport(TransportPort):
    """Verb-based call primitive with bearer auth and 401-triggered refresh."""

    def __init__(
        self,
        base_url: str,
        *,
        token_store: TokenStorePort,
        cfg: Optional[HttpConfig] = None,
    ) -> None:
        if not base_url:
            raise ValueError("HttpTransport requires a base URL")
        self.base_url = base_url.rstrip("/")
        self.token_store = token_store
        self.cfg = cfg or HttpConfig()
        self.session = RetryingSession(self.cfg)
        self._log = logging.getLogger(__name__)

    def call(
        self,
        method: str,
        target: str,
        body: Any = None,
        *,
        params: Optional[Dict[str, Any]] = None,
    ) -> TransportResponse:
        method = method.upper()
        url = self._make_url(target)
        ctx = f"{method} {target}"
        credentials = self.token_store.load()
        resp = self.session.request(
            method, url, json_body=body, params=params, token=credentials.token
        )
        if resp.status_code == 401:
            token = self._refresh(credentials, ctx)
            resp = self.session.request(
                method, url, json_body=body, params=params, token=token
            )
            if resp.status_code == 401:
                self.token_store.clear()
                raise ApiAuthError(f"{ctx}: unauthorized after token refresh", context=ctx)
        if not 200 <= resp.status_code < 300:
            raise error_for_response(resp, ctx)
        return TransportResponse(
            status=resp.status_code,
            headers=resp.headers if resp.headers is not None else {},
            payload=self._json_or_text(resp),
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _refresh(self, credentials: Credentials, ctx: str) -> str:
        """Exchange the stored refresh token for a new access token.

        Raises:
            ApiAuthError: If no refresh token is stored or the backend rejects it.
                Stored credentials are cleared in that case.
        """
        if not (credentials.token and credentials.refresh_token):
            self.token_store.clear()
            raise ApiAuthError(f"{ctx}: unauthorized", context=ctx)

        self._log.info("Access token rejected; refreshing session")
        resp = self.session.request(
            "POST",
            self._make_url(REFRESH_PATH),
            json_body={
                "token": credentials.token,
                "refreshToken": credentials.refresh_token,
            },
        )
        payload = self._json_or_text(resp) if 200 <= resp.status_code < 300 else None
        data = payload.get("data") if isinstance(payload, dict) else None
        new_token = data.get("token") if isinstance(data, dict) else None
        if not (isinstance(payload, dict) and payload.get("succeeded") and new_token):
            self._log.warning("Token refresh failed (HTTP %s)", resp.status_code)
            self.token_store.clear()
            raise ApiAuthError(f"{ctx}: token refresh failed", payload=payload, context=ctx)

        new_refresh = data.get("refreshToken") or credentials.refresh_token
        self.token_store.save(
            Credentials(
                token=new_token,
                refresh_token=new_refresh,
                user_data=credentials.user_data,
            )
        )
        return new_token

    def _make_url(self, target: str) -> str:
        if target.startswith(("http://", "https://")):
            return target
        if not target.startswith("/"):
            target = f"/{target}"
        return f"{self.base_url}{target}"

    @staticmethod
    def _json_or_text(resp: requests.Response) -> Any:
        text = getattr(resp, "text", "")
        if not text:
            return None
        try:
            return resp.json()
        except ValueError:
            return text
