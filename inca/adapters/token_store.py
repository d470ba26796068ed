from __future__ import annotations
import json, os
from typing import Any, Dict, Optional
from inca.domain.ports import Credentials, TokenStorePort


class MemoryTokenStore(TokenStorePort):
    """Process-local credential store (default when no token path is configured)."""

    def __init__(self, credentials: Optional[Credentials] = None) -> None:
        self._credentials = credentials or Credentials()

    def load(self) -> Credentials:
        return self._credentials

    def save(self, credentials: Credentials) -> None:
        self._credentials = credentials

    def clear(self) -> None:
        self._credentials = Credentials()


class TokenStoreLocal(TokenStorePort):
    """JSON file store using the web client's storage keys."""

    _KEYS = ("auth_token", "refresh_token", "user_data")

    def __init__(self, path: str) -> None:
        self.path = path

    def load(self) -> Credentials:
        data = self._read()
        user_data = data.get("user_data")
        return Credentials(
            token=data.get("auth_token") or None,
            refresh_token=data.get("refresh_token") or None,
            user_data=user_data if isinstance(user_data, dict) else None,
        )

    def save(self, credentials: Credentials) -> None:
        payload: Dict[str, Any] = {
            "auth_token": credentials.token,
            "refresh_token": credentials.refresh_token,
            "user_data": credentials.user_data,
        }
        folder = os.path.dirname(self.path)
        if folder:
            os.makedirs(folder, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=2)

    def clear(self) -> None:
        if os.path.exists(self.path):
            os.remove(self.path)

    def _read(self) -> Dict[str, Any]:
        if not os.path.exists(self.path):
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            return {}
        return {key: data.get(key) for key in self._KEYS}
