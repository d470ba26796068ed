from __future__ import annotations

from typing import Any, Dict, List, Optional

import pytest

from inca.adapters.api_errors import ApiClientError, ApiTimeoutError
from inca.adapters.transcoding_gateway import TranscodingGateway, target_hints
from inca.domain.ports import TransportPort, TransportResponse
from inca.domain.transcoder import PayloadTranscoder


class _TransportStub(TransportPort):
    def __init__(
        self,
        payload: Any = None,
        *,
        status: int = 200,
        headers: Optional[Dict[str, str]] = None,
        error: Optional[Exception] = None,
    ) -> None:
        self.payload = payload
        self.status = status
        self.headers = headers or {"Content-Type": "application/json"}
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    def call(
        self,
        method: str,
        target: str,
        body: Any = None,
        *,
        params: Optional[Dict[str, Any]] = None,
    ) -> TransportResponse:
        self.calls.append({"method": method, "target": target, "body": body, "params": params})
        if self.error is not None:
            raise self.error
        return TransportResponse(status=self.status, headers=self.headers, payload=self.payload)


class _DecodeForbidden(PayloadTranscoder):
    def decode(self, node: Any, context=()) -> Any:
        raise AssertionError("decode must not run")


def test_target_hints_skip_ids_and_query() -> None:
    assert target_hints("/api/workflows/12/steps?page=2") == ("steps", "workflows", "api")
    assert target_hints("https://host:44307/api/Deals/7") == ("Deals", "api")
    assert target_hints("") == ()


def test_post_encodes_body_and_decodes_response() -> None:
    transport = _TransportStub(
        {"succeeded": True, "data": {"id": "p1", "planType": 0, "periodType": 5}}
    )
    gateway = TranscodingGateway(transport)
    body = {"planName": "Q3", "planType": "TargetBased", "periodType": "Custom"}

    response = gateway.post("/incentive-plans/target-based", body)

    assert transport.calls[0]["method"] == "POST"
    assert transport.calls[0]["body"] == {"planName": "Q3", "planType": 0, "periodType": 5}
    assert body["planType"] == "TargetBased"
    assert response.payload["data"] == {
        "id": "p1",
        "planType": "TargetBased",
        "periodType": "Custom",
    }


def test_get_encodes_query_params_using_path_context() -> None:
    transport = _TransportStub({"succeeded": True, "data": [{"id": 1, "status": 3}]})
    gateway = TranscodingGateway(transport)

    response = gateway.get("/Deals", params={"status": "Won", "page": 1, "limit": 10})

    assert transport.calls[0]["params"] == {"status": 3, "page": 1, "limit": 10}
    assert response.payload["data"] == [{"id": 1, "status": "Won"}]


def test_status_and_headers_pass_through() -> None:
    transport = _TransportStub({"status": 2}, status=201, headers={"X-Trace": "abc"})
    gateway = TranscodingGateway(transport)

    response = gateway.put("/payouts/4", {"status": "REJECTED"})

    assert transport.calls[0]["body"] == {"status": 2}
    assert response.status == 201
    assert response.headers == {"X-Trace": "abc"}
    assert response.payload == {"status": "REJECTED"}


def test_patch_and_delete_use_matching_verbs() -> None:
    transport = _TransportStub({"succeeded": True})
    gateway = TranscodingGateway(transport)

    gateway.patch("/incentive-plans/9/status", {"isActive": False})
    gateway.delete("/incentive-plans/9")

    assert [call["method"] for call in transport.calls] == ["PATCH", "DELETE"]
    assert transport.calls[0]["body"] == {"isActive": False}
    assert transport.calls[1]["body"] is None


def test_explicit_context_disambiguates_generic_paths() -> None:
    transport = _TransportStub({"data": {"status": 0}})
    gateway = TranscodingGateway(transport)

    response = gateway.get("/dashboard/summary", context=("workflowInstance",))

    assert response.payload == {"data": {"status": "RUNNING"}}


def test_instance_history_statuses_decode_per_step() -> None:
    transport = _TransportStub({"data": {"status": 0, "history": [{"stepId": "s1", "status": 3}]}})
    gateway = TranscodingGateway(transport)

    response = gateway.get("/workflows/instances/5")

    assert response.payload["data"]["status"] == "RUNNING"
    assert response.payload["data"]["history"] == [{"stepId": "s1", "status": "SKIPPED"}]


def test_instance_history_statuses_encode_per_step() -> None:
    transport = _TransportStub({"succeeded": True})
    gateway = TranscodingGateway(transport)

    gateway.put(
        "/workflows/instances/5",
        {"status": "WAITING", "history": [{"stepId": "s1", "status": "PENDING"}]},
    )

    assert transport.calls[0]["body"] == {"status": 4, "history": [{"stepId": "s1", "status": 0}]}


@pytest.mark.parametrize("payload", [None, "", {}, []])
def test_empty_payload_is_not_decoded(payload: Any) -> None:
    transport = _TransportStub(payload, status=204)
    gateway = TranscodingGateway(transport, transcoder=_DecodeForbidden())

    response = gateway.delete("/Deals/3")

    assert response.status == 204
    assert response.payload == payload


def test_transport_failure_propagates_without_decode() -> None:
    error = ApiClientError("GET /Deals/3: HTTP 404", status=404)
    transport = _TransportStub(error=error)
    gateway = TranscodingGateway(transport, transcoder=_DecodeForbidden())

    with pytest.raises(ApiClientError) as excinfo:
        gateway.get("/Deals/3")

    assert excinfo.value is error


def test_timeout_propagates_unchanged() -> None:
    transport = _TransportStub(error=ApiTimeoutError("Timeout contacting host"))
    gateway = TranscodingGateway(transport)

    with pytest.raises(ApiTimeoutError):
        gateway.post("/Deals", {"status": "New"})

    assert transport.calls[0]["body"] == {"status": 0}


def test_unknown_codes_in_response_survive() -> None:
    transport = _TransportStub({"data": [{"status": 99, "name": "future"}]})
    gateway = TranscodingGateway(transport)

    response = gateway.get("/payouts")

    assert response.payload == {"data": [{"status": 99, "name": "future"}]}
