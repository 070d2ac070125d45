"""
Shared fixtures: a recording fake of the accounting backend behind
httpx.MockTransport, and a TestClient wired to it through the
get_backend_service dependency.
"""

import json
from email.parser import BytesParser
from typing import Any, Callable, Dict, List, Optional, Tuple
from urllib.parse import parse_qsl

import httpx
import pytest
from fastapi.testclient import TestClient

from voucher_gateway.config import config
from voucher_gateway.main import app
from voucher_gateway.services.backend_service import BackendService, get_backend_service

BACKEND_URL = "http://backend.test/api"


def parse_form(content: bytes, content_type: str) -> Tuple[Dict[str, str], Dict[str, Tuple[str, bytes]]]:
    """Decode a multipart or urlencoded body into (fields, files)"""
    if content_type.startswith("application/x-www-form-urlencoded"):
        return dict(parse_qsl(content.decode("utf-8"), keep_blank_values=True)), {}
    
    raw = b"Content-Type: " + content_type.encode("latin-1") + b"\r\n\r\n" + content
    message = BytesParser().parsebytes(raw)
    fields: Dict[str, str] = {}
    files: Dict[str, Tuple[str, bytes]] = {}
    for part in message.get_payload():
        name = part.get_param("name", header="content-disposition")
        data = part.get_payload(decode=True) or b""
        filename = part.get_filename()
        if filename:
            files[name] = (filename, data)
        else:
            fields[name] = data.decode("utf-8")
    return fields, files


def build_multipart(data: Dict[str, str], files: Any) -> Tuple[bytes, str]:
    """Encode a multipart body the way a browser FormData would"""
    request = httpx.Request("POST", "http://encoder.test/", data=data, files=files)
    request.read()
    return request.content, request.headers["content-type"]


class FakeBackend:
    """Records requests and answers from registered routes"""
    
    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.routes: Dict[Tuple[str, str], Callable[[httpx.Request], httpx.Response]] = {}
    
    @staticmethod
    def path_of(request: httpx.Request) -> str:
        path = request.url.path
        if path.startswith("/api"):
            path = path[len("/api"):]
        return path or "/"
    
    def on(self, method: str, path: str, status: int = 200, json_body: Any = None,
           text: Optional[str] = None, content_type: Optional[str] = None) -> None:
        """Register a canned answer"""
        def handler(request: httpx.Request) -> httpx.Response:
            if text is not None:
                headers = {"content-type": content_type or "text/html"}
                return httpx.Response(status, text=text, headers=headers)
            return httpx.Response(status, json=json_body)
        self.routes[(method, path)] = handler
    
    def on_call(self, method: str, path: str, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.routes[(method, path)] = handler
    
    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self.routes.get((request.method, self.path_of(request)))
        if handler is None:
            return httpx.Response(404, json={"message": "Not Found"})
        return handler(request)
    
    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]
    
    def last_json(self) -> Any:
        return json.loads(self.last.content)
    
    def last_form(self):
        return parse_form(self.last.content, self.last.headers["content-type"])


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def backend_service(backend, monkeypatch):
    monkeypatch.setattr(config.backend, "base_url", BACKEND_URL)
    return BackendService(transport=httpx.MockTransport(backend))


@pytest.fixture
def client(backend_service):
    app.dependency_overrides[get_backend_service] = lambda: backend_service
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c
    app.dependency_overrides.clear()
