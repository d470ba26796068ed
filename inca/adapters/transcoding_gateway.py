"""Transport wrapper that transcodes categorical fields on every call.

Outbound bodies and query parameters are encoded (symbol -> wire code) before
they reach the transport; inbound payloads are decoded (wire code -> symbol)
before they are returned. Status and headers pass through untouched, and
transport failures propagate as raised without any decode attempt.

Dependencies:
    - ``inca.domain.transcoder.PayloadTranscoder`` for the tree walk.
    - Any ``TransportPort`` implementation (``HttpTransport`` at runtime).

Call context:
    - Constructed by ``inca.app.composition.build_gateway``.
    - Used by ``inca.usecases.entity_service`` and application callers.
"""

from __future__ import annotations

import re
from typing import Any, Dict, Optional, Sequence, Tuple
from urllib.parse import urlsplit

from inca.domain.ports import TransportPort, TransportResponse
from inca.domain.transcoder import DEFAULT_TRANSCODER, PayloadTranscoder

_SEGMENT_SPLIT = re.compile(r"/+")


def target_hints(target: str) -> Tuple[str, ...]:
    """Return non-numeric path segments of ``target``, innermost first.

    ``/api/workflows/12/steps`` -> ``("steps", "workflows", "api")``. Used as
    the outermost disambiguation context for a call.
    """
    path = urlsplit(target).path if "://" in target else target.split("?", 1)[0]
    segments = [
        segment
        for segment in _SEGMENT_SPLIT.split(path)
        if segment and not segment.isdigit() and any(ch.isalpha() for ch in segment)
    ]
    return tuple(reversed(segments))


class TranscodingGateway:
    """Verb surface over a transport with payload transcoding in both directions."""

    def __init__(
        self,
        transport: TransportPort,
        transcoder: Optional[PayloadTranscoder] = None,
    ) -> None:
        self.transport = transport
        self.transcoder = transcoder or DEFAULT_TRANSCODER

    def get(
        self,
        target: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        context: Sequence[str] = (),
    ) -> TransportResponse:
        return self.request("GET", target, params=params, context=context)

    def post(
        self,
        target: str,
        body: Any = None,
        *,
        params: Optional[Dict[str, Any]] = None,
        context: Sequence[str] = (),
    ) -> TransportResponse:
        return self.request("POST", target, body, params=params, context=context)

    def put(
        self,
        target: str,
        body: Any = None,
        *,
        params: Optional[Dict[str, Any]] = None,
        context: Sequence[str] = (),
    ) -> TransportResponse:
        return self.request("PUT", target, body, params=params, context=context)

    def patch(
        self,
        target: str,
        body: Any = None,
        *,
        params: Optional[Dict[str, Any]] = None,
        context: Sequence[str] = (),
    ) -> TransportResponse:
        return self.request("PATCH", target, body, params=params, context=context)

    def delete(
        self,
        target: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        context: Sequence[str] = (),
    ) -> TransportResponse:
        return self.request("DELETE", target, params=params, context=context)

    def request(
        self,
        method: str,
        target: str,
        body: Any = None,
        *,
        params: Optional[Dict[str, Any]] = None,
        context: Sequence[str] = (),
    ) -> TransportResponse:
        """Encode ``body``/``params``, call the transport, decode the payload.

        Args:
            method: HTTP verb.
            target: Path relative to the API base URL, or an absolute URL.
            body: Optional JSON-like request body with symbolic values.
            params: Optional query parameters with symbolic values.
            context: Extra disambiguation hints placed before the path hints.

        Returns:
            The transport response with its payload decoded.

        Raises:
            ApiError: Propagated unchanged from the transport.
        """
        hints = tuple(context) + target_hints(target)
        wire_body = self.transcoder.encode(body, hints) if body is not None else None
        wire_params = self.transcoder.encode(params, hints) if params else params
        response = self.transport.call(method, target, wire_body, params=wire_params)
        if self._is_empty(response.payload):
            return response
        return response.with_payload(self.transcoder.decode(response.payload, hints))

    @staticmethod
    def _is_empty(payload: Any) -> bool:
        if payload is None:
            return True
        if isinstance(payload, (str, bytes, dict, list, tuple)):
            return len(payload) == 0
        return False


__all__ = ["TranscodingGateway", "target_hints"]
