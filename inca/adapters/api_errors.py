"""Typed failures of the incentive API and readers for its error envelope.

Failed calls answer with the same envelope as successful ones::

    {"succeeded": false, "message": "...", "errors": [...], "data": null}

``errors`` is either a list of messages or, for model validation failures, a
mapping of field name to a list of messages. Bodies that are not JSON (proxy
pages, crashes) are kept as a trimmed text snippet.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Optional, Sequence, Tuple

_SNIPPET_LIMIT = 400
_HINT_LIMIT = 200
_HINT_ITEMS = 3


class ApiError(RuntimeError):
    """Base class for incentive API failures.

    Attributes:
        status: HTTP status, ``None`` when no response arrived.
        errors: Flattened envelope ``errors`` (``"field: message"`` for
            validation mappings).
        hint: Short display text derived from ``errors`` or a text body.
        payload: Decoded body or text snippet of the failed response.
        context: ``"METHOD target"`` of the failed call.
    """

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        errors: Iterable[str] = (),
        hint: Optional[str] = None,
        payload: Any = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.errors: Tuple[str, ...] = tuple(errors)
        self.hint = hint if hint is not None else join_errors(self.errors)
        self.payload = payload
        self.context = context


class ApiClientError(ApiError):
    """HTTP 4xx from the incentive API."""

    def __init__(self, message: str, *, status: int, **kwargs: Any) -> None:
        super().__init__(message, status=status, **kwargs)


class ApiAuthError(ApiClientError):
    """HTTP 401 that could not be recovered by refreshing the session token."""

    def __init__(
        self,
        message: str,
        *,
        payload: Any = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(
            message,
            status=401,
            errors=envelope_errors(payload),
            payload=payload,
            context=context,
        )


class ApiServerError(ApiError):
    """HTTP 5xx from the incentive API."""

    def __init__(self, message: str, *, status: int, **kwargs: Any) -> None:
        super().__init__(message, status=status, **kwargs)


class ApiTimeoutError(ApiError):
    """Timeout or connectivity failure before any response arrived."""

    def __init__(self, message: str, *, context: Optional[str] = None) -> None:
        super().__init__(message, context=context)


def read_error_payload(resp: Any) -> Any:
    """Return the JSON body of ``resp``, else a text snippet, else ``None``."""
    try:
        return resp.json()
    except ValueError:
        text = (getattr(resp, "text", "") or "").strip()
        return text[:_SNIPPET_LIMIT] or None


def envelope_message(payload: Any) -> Optional[str]:
    if not isinstance(payload, dict):
        return None
    message = payload.get("message")
    if isinstance(message, str) and message.strip():
        return message.strip()
    return None


def envelope_errors(payload: Any) -> List[str]:
    """Flatten the envelope's ``errors`` entry into display strings.

    ``["a", "b"]`` gives ``["a", "b"]``; ``{"PlanName": ["is required"]}``
    gives ``["PlanName: is required"]``. Blank entries are dropped.
    """
    if not isinstance(payload, dict):
        return []
    return _flatten_errors(payload.get("errors"), None)


def _flatten_errors(node: Any, field_name: Optional[str]) -> List[str]:
    if node is None:
        return []
    if isinstance(node, dict):
        flat: List[str] = []
        for key, messages in node.items():
            flat.extend(_flatten_errors(messages, str(key)))
        return flat
    if isinstance(node, (list, tuple)):
        flat = []
        for item in node:
            flat.extend(_flatten_errors(item, field_name))
        return flat
    text = str(node).strip()
    if not text:
        return []
    return [f"{field_name}: {text}" if field_name else text]


def join_errors(errors: Sequence[str]) -> Optional[str]:
    if not errors:
        return None
    return "; ".join(errors[:_HINT_ITEMS])[:_HINT_LIMIT]


def extract_error_hint(payload: Any) -> Optional[str]:
    """Hint for a failed call: joined envelope errors or the text body."""
    if isinstance(payload, str):
        return payload.strip()[:_HINT_LIMIT] or None
    return join_errors(envelope_errors(payload))


def build_error_message(ctx: str, status: int, payload: Any) -> str:
    # message first, then the first validation error, then a text body
    detail = envelope_message(payload)
    if detail is None:
        errors = envelope_errors(payload)
        detail = errors[0] if errors else None
    if detail is None and isinstance(payload, str):
        detail = payload.strip()[:_HINT_LIMIT] or None
    if detail:
        return f"{ctx}: {detail} (HTTP {status})"
    return f"{ctx}: HTTP {status}"


def error_for_response(resp: Any, ctx: str) -> ApiError:
    """Build the typed error for a non-2xx ``requests`` response."""
    status = resp.status_code
    payload = read_error_payload(resp)
    fields = {
        "status": status,
        "errors": envelope_errors(payload),
        "hint": extract_error_hint(payload),
        "payload": payload,
        "context": ctx,
    }
    message = build_error_message(ctx, status, payload)
    if 400 <= status < 500:
        return ApiClientError(message, **fields)
    if 500 <= status < 600:
        return ApiServerError(message, **fields)
    return ApiError(message, **fields)
