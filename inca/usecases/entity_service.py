"""CRUD access to backend collections through the transcoding gateway.

The backend wraps every result in ``{"succeeded", "message", "errors", "data"}``.
``EntityService`` unwraps that envelope, maps transport failures to
``UseCaseError`` and hands symbolic payloads back to callers.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from inca.adapters.api_errors import envelope_errors, envelope_message
from inca.adapters.transcoding_gateway import TranscodingGateway
from inca.domain.ports import TransportResponse, UseCaseError

from .error_mapping import map_api_error

# Collection paths as exposed by the backend (casing included).
ENTITY_RESOURCES: Mapping[str, str] = {
    "incentive_plans": "/incentive-plans",
    "deals": "/Deals",
    "users": "/users",
    "roles": "/roles",
    "teams": "/teams",
    "projects": "/Project",
    "workflows": "/workflows",
    "payouts": "/payouts",
}

# Creation / replacement routes per symbolic plan type.
PLAN_TYPE_ROUTES: Mapping[str, str] = {
    "TargetBased": "target-based",
    "RoleBased": "role-based",
    "ProjectBased": "project-based",
    "KickerBased": "kicker",
    "TieredBased": "tiered-based",
}


def unwrap_envelope(response: TransportResponse, *, ctx: str) -> Any:
    """Return ``data`` from a backend envelope or raise when it reports failure.

    Payloads that are not envelopes are returned as-is.
    """
    payload = response.payload
    if not isinstance(payload, dict) or "succeeded" not in payload:
        return payload
    if not payload.get("succeeded"):
        errors = envelope_errors(payload)
        fallback = errors[0] if errors else f"{ctx} rejected by server"
        message = envelope_message(payload) or fallback
        raise UseCaseError(
            "REQUEST_REJECTED",
            message,
            meta={"errors": errors} if errors else None,
        )
    return payload.get("data")


@dataclass
class EntityService:
    gateway: TranscodingGateway
    resource: str
    _log: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.resource = "/" + self.resource.strip("/")
        self._log = logging.getLogger(__name__)

    @classmethod
    def for_entity(cls, gateway: TranscodingGateway, entity: str) -> "EntityService":
        try:
            return cls(gateway, ENTITY_RESOURCES[entity])
        except KeyError as exc:
            raise ValueError(f"Unknown entity '{entity}'") from exc

    def list(self, **filters: Any) -> Any:
        params = {key: value for key, value in filters.items() if value is not None}
        return self._call("LIST_FAILED", "GET", self.resource, params=params or None)

    def get(self, entity_id: Any) -> Any:
        return self._call("GET_FAILED", "GET", self._item(entity_id))

    def create(self, body: Dict[str, Any]) -> Any:
        return self._call("CREATE_FAILED", "POST", self.resource, body)

    def update(self, entity_id: Any, body: Dict[str, Any]) -> Any:
        return self._call("UPDATE_FAILED", "PUT", self._item(entity_id), body)

    def patch(self, entity_id: Any, body: Dict[str, Any], *, suffix: str = "") -> Any:
        target = self._item(entity_id)
        if suffix:
            target = f"{target}/{suffix.strip('/')}"
        return self._call("UPDATE_FAILED", "PATCH", target, body)

    def delete(self, entity_id: Any) -> Any:
        return self._call("DELETE_FAILED", "DELETE", self._item(entity_id))

    def _item(self, entity_id: Any) -> str:
        text = str(entity_id).strip()
        if not text:
            raise ValueError("Entity id must be non-empty.")
        return f"{self.resource}/{text}"

    def _call(
        self,
        code: str,
        method: str,
        target: str,
        body: Any = None,
        *,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        try:
            response = self.gateway.request(method, target, body, params=params)
        except Exception as exc:
            self._log.warning("%s %s failed: %s", method, target, exc)
            raise map_api_error(exc, default_code=code) from exc
        return unwrap_envelope(response, ctx=f"{method} {target}")


class IncentivePlanService(EntityService):
    """Incentive plans are written through plan-type specific routes."""

    def __init__(self, gateway: TranscodingGateway) -> None:
        super().__init__(gateway, ENTITY_RESOURCES["incentive_plans"])

    def create(self, body: Dict[str, Any]) -> Any:
        target = f"{self.resource}/{self._route_for(body)}"
        return self._call("CREATE_FAILED", "POST", target, body)

    def update(self, entity_id: Any, body: Dict[str, Any]) -> Any:
        target = f"{self.resource}/{self._route_for(body)}/{str(entity_id).strip()}"
        return self._call("UPDATE_FAILED", "PUT", target, body)

    def set_active(self, entity_id: Any, is_active: bool) -> Any:
        return self.patch(entity_id, {"isActive": bool(is_active)}, suffix="status")

    @staticmethod
    def _route_for(body: Mapping[str, Any]) -> str:
        plan_type = body.get("planType")
        route = PLAN_TYPE_ROUTES.get(plan_type) if isinstance(plan_type, str) else None
        if route is None:
            raise UseCaseError("INVALID_PARAMS", f"Unsupported plan type: {plan_type!r}")
        return route


__all__ = [
    "ENTITY_RESOURCES",
    "EntityService",
    "IncentivePlanService",
    "PLAN_TYPE_ROUTES",
    "unwrap_envelope",
]
