import json
import logging
from types import SimpleNamespace

from starlette.requests import Request
from starlette.responses import Response

from app.techno.core.logging import log_json
from app.techno.middleware.observability import build_request_log_payload


def test_build_request_log_payload():
    scope = {
        "type": "http",
        "method": "DELETE",
        "path": "/warehouse/stores/7",
        "headers": [],
        "route": SimpleNamespace(path="/warehouse/stores/{store_code}"),
    }
    request = Request(scope)
    request.state.trace_id = "trace-1"
    request.state.user_id = "user-1"
    request.state.error_code = "STORE_HAS_BALANCE"
    response = Response(status_code=409)

    payload = build_request_log_payload(
        request=request,
        response=response,
        latency_ms=12.3456,
        db_time_ms=4.5678,
    )

    assert payload["trace_id"] == "trace-1"
    assert payload["user_id"] == "user-1"
    assert payload["route"] == "/warehouse/stores/{store_code}"
    assert payload["method"] == "DELETE"
    assert payload["status_code"] == 409
    assert payload["latency_ms"] == 12.35
    assert payload["db_time_ms"] == 4.57
    assert payload["error_code"] == "STORE_HAS_BALANCE"


def test_build_request_log_payload_without_route_or_response():
    request = Request({"type": "http", "method": "GET", "path": "/health", "headers": []})

    payload = build_request_log_payload(request=request, response=None, latency_ms=1.0, db_time_ms=None)

    assert payload["route"] == "/health"
    assert payload["status_code"] == 500
    assert payload["user_id"] is None
    assert payload["db_time_ms"] is None


def test_log_json_emits_single_json_line(caplog):
    logger = logging.getLogger("techno.test")
    with caplog.at_level(logging.INFO, logger="techno.test"):
        log_json(logger, {"event": "store_deactivated", "store_code": 3})

    assert json.loads(caplog.records[-1].getMessage()) == {"event": "store_deactivated", "store_code": 3}
