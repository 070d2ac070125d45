"""
Backend forwarding and error normalization
"""

import asyncio

import httpx
import pytest

from voucher_gateway.config import config
from voucher_gateway.services.backend_service import (
    BackendService,
    derive_error_message,
    normalize_error,
)
from voucher_gateway.utils.constants import ErrorCode
from voucher_gateway.utils.exceptions import (
    BackendUnreachableError,
    ConfigurationError,
    GatewayError,
    UnexpectedResponseFormatError,
)


class TestDeriveErrorMessage:
    def test_prefers_message(self):
        data = {"message": "Voucher not found.", "error": "ignored"}
        assert derive_error_message(data, "fallback") == "Voucher not found."

    def test_joins_field_errors(self):
        data = {"errors": {"paid_to": ["The paid to field is required."],
                           "date": ["The date field is required."]}}
        assert derive_error_message(data, "fallback") == (
            "The paid to field is required. The date field is required."
        )

    def test_error_string(self):
        assert derive_error_message({"error": "Token expired"}, "fallback") == "Token expired"

    def test_fallback(self):
        assert derive_error_message({}, "fallback") == "fallback"
        assert derive_error_message({"message": "  "}, "fallback") == "fallback"
        assert derive_error_message([1, 2], "fallback") == "fallback"


class TestNormalizeError:
    def test_validation_error_keeps_field_errors(self):
        text = '{"message": "The given data was invalid.", "errors": {"paid_to": ["Required."]}}'
        error = normalize_error(422, text, "Failed to create cash voucher")
        assert error.status_code == 422
        assert error.code == ErrorCode.VALIDATION_ERROR
        assert error.message == "The given data was invalid."
        assert error.extra == {"errors": {"paid_to": ["Required."]}}
        assert error.details["message"] == "The given data was invalid."

    def test_other_statuses_are_backend_errors(self):
        error = normalize_error(404, '{"message": "Cash voucher not found."}', "fallback")
        assert error.status_code == 404
        assert error.code == ErrorCode.BACKEND_ERROR
        assert error.message == "Cash voucher not found."

    def test_non_json_body(self):
        error = normalize_error(500, "<html><body>Whoops</body></html>", "fallback")
        assert isinstance(error, UnexpectedResponseFormatError)
        assert error.status_code == 500
        assert error.details == {"backend_status": 500, "body": "<html><body>Whoops</body></html>"}

    def test_non_json_body_excerpt_is_bounded(self):
        error = normalize_error(502, "x" * 1000, "fallback")
        assert len(error.details["body"]) <= 303

    def test_empty_body_keeps_status_with_fallback(self):
        error = normalize_error(403, "", "Failed to fetch cash vouchers")
        assert error.status_code == 403
        assert error.message == "Failed to fetch cash vouchers"


def test_url_for_joins_paths(backend_service):
    assert backend_service.url_for("cash-vouchers") == "http://backend.test/api/cash-vouchers"
    assert backend_service.url_for("/cash-vouchers/5/") == "http://backend.test/api/cash-vouchers/5"
    assert backend_service.url_for("") == "http://backend.test/api"


def test_explicit_base_url_wins_over_config(monkeypatch):
    monkeypatch.setattr(config.backend, "base_url", "http://other.test/api")
    service = BackendService(base_url="http://mine.test/api/")
    assert service.url_for("login") == "http://mine.test/api/login"


def test_missing_base_url_fails_before_network(backend, monkeypatch):
    monkeypatch.setattr(config.backend, "base_url", None)
    service = BackendService(transport=httpx.MockTransport(backend))
    assert not service.configured
    
    with pytest.raises(ConfigurationError) as info:
        asyncio.run(service.send("GET", "cash-vouchers"))
    
    assert info.value.status_code == 500
    assert info.value.code == ErrorCode.CONFIGURATION_ERROR
    assert backend.requests == []


def test_send_forwards_auth_and_accept(backend, backend_service):
    backend.on("GET", "/cash-vouchers", json_body={"data": []})
    
    asyncio.run(backend_service.send(
        "GET", "cash-vouchers",
        params=[("page", "2")],
        headers={"Authorization": "Bearer abc", "Content-Type": None}
    ))
    
    request = backend.last
    assert request.headers["authorization"] == "Bearer abc"
    assert request.headers["accept"] == "application/json"
    assert request.url.params["page"] == "2"


def test_network_failure_becomes_unreachable_error(monkeypatch):
    monkeypatch.setattr(config.backend, "base_url", "http://backend.test/api")

    def refuse(request):
        raise httpx.ConnectError("Connection refused", request=request)

    service = BackendService(transport=httpx.MockTransport(refuse))
    with pytest.raises(BackendUnreachableError) as info:
        asyncio.run(service.forward("GET", "cash-vouchers", "Failed to fetch cash vouchers"))
    
    assert info.value.status_code == 500
    assert info.value.message == "Internal Server Error"
    assert info.value.extra == {"error": "Connection refused"}


def test_forward_relays_success_payload(backend, backend_service):
    backend.on("POST", "/cash-vouchers", status=200, json_body={"id": 9})
    
    result = asyncio.run(backend_service.forward(
        "POST", "cash-vouchers", "Failed", success_status=201, content=b"{}",
        headers={"Content-Type": "application/json"}
    ))
    
    assert result.status_code == 201
    assert result.payload == {"id": 9}


def test_forward_rejects_non_json_success(backend, backend_service):
    backend.on("GET", "/cash-vouchers", text="<!doctype html><title>Login</title>")
    
    with pytest.raises(UnexpectedResponseFormatError):
        asyncio.run(backend_service.forward("GET", "cash-vouchers", "Failed"))


def test_forward_empty_success_body(backend, backend_service):
    backend.on_call("PUT", "/cash-vouchers/1", lambda request: httpx.Response(204))
    
    result = asyncio.run(backend_service.forward("PUT", "cash-vouchers/1", "Failed", json_body={}))
    
    assert result.status_code == 204
    assert result.payload is None


def test_forward_raises_normalized_error(backend, backend_service):
    backend.on("GET", "/cash-vouchers/77", status=404, json_body={"message": "Not here"})
    
    with pytest.raises(GatewayError) as info:
        asyncio.run(backend_service.forward("GET", "cash-vouchers/77", "Failed to fetch cash voucher"))
    
    assert info.value.status_code == 404
    assert info.value.message == "Not here"


def test_ping(backend, backend_service, monkeypatch):
    assert asyncio.run(backend_service.ping()) == {
        "reachable": True, "configured": True, "status_code": 404
    }
    
    monkeypatch.setattr(config.backend, "base_url", None)
    result = asyncio.run(backend_service.ping())
    assert result["configured"] is False
    assert result["reachable"] is False
