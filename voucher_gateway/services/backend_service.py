"""
Backend Service Module
======================
Forwards gateway requests to the accounting backend (Laravel REST API).

CONNECTION:
----------
- Base URL: config.backend.base_url (e.g. http://localhost:8000/api),
  overridable with VOUCHER_API_URL
- No base URL configured: every call fails with CONFIGURATION_ERROR before
  any network activity
- One httpx.AsyncClient per forwarded call; no automatic retries

RESPONSE HANDLING:
-----------------
- 2xx: JSON body relayed verbatim with the backend status
- 4xx/5xx: body read as text, then JSON-parsed; relayed as
  {message, details?, errors?} with the backend status
- Non-JSON body (HTML error page, stack trace): 500 with
  UNEXPECTED_RESPONSE_FORMAT
- Network failure: 500 {message: "Internal Server Error", error: <detail>}
"""

import json
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Union

import httpx

from ..config import config
from ..utils.constants import ErrorCode
from ..utils.decorators import timed
from ..utils.exceptions import (
    BackendUnreachableError,
    ConfigurationError,
    GatewayError,
    UnexpectedResponseFormatError,
)
from ..utils.helpers import excerpt
from ..utils.logger import logger
from ..views.json_view import JsonView

QueryParams = Union[Mapping[str, str], Iterable[Tuple[str, str]], None]


class ProxyResult:
    """Successful backend answer to relay to the browser"""

    def __init__(self, status_code: int, payload: Any):
        self.status_code = status_code
        self.payload = payload

    def to_response(self):
        return JsonView.relay(self.status_code, self.payload)


def derive_error_message(data: Any, fallback: str) -> str:
    """Pick the most useful message from a backend error body"""
    if isinstance(data, dict):
        message = data.get("message")
        if isinstance(message, str) and message.strip():
            return message
        errors = data.get("errors")
        if isinstance(errors, dict):
            messages = []
            for value in errors.values():
                if isinstance(value, list):
                    messages.extend(str(item) for item in value)
                else:
                    messages.append(str(value))
            if messages:
                return " ".join(messages)
        error = data.get("error")
        if isinstance(error, str) and error.strip():
            return error
    elif isinstance(data, str) and data.strip():
        return data
    return fallback


def normalize_error(status_code: int, text: str, fallback_message: str) -> GatewayError:
    """Turn a failed backend response into the gateway's error shape"""
    if not text.strip():
        return GatewayError(status_code, ErrorCode.BACKEND_ERROR, fallback_message)
    
    try:
        data = json.loads(text)
    except ValueError:
        logger.warning(f"Backend returned non-JSON error body ({status_code}): {excerpt(text)}")
        return UnexpectedResponseFormatError(status_code, excerpt(text))
    
    code = ErrorCode.VALIDATION_ERROR if status_code == 422 else ErrorCode.BACKEND_ERROR
    extra: Dict[str, Any] = {}
    if isinstance(data, dict) and isinstance(data.get("errors"), dict):
        extra["errors"] = data["errors"]
    
    return GatewayError(
        status_code,
        code,
        derive_error_message(data, fallback_message),
        details=data,
        extra=extra
    )


class BackendService:
    """Service for forwarding requests to the accounting backend"""
    
    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self._base_url = base_url
        self._timeout = timeout
        self.transport = transport
    
    @property
    def base_url(self) -> Optional[str]:
        url = self._base_url if self._base_url is not None else config.backend.base_url
        return url.rstrip("/") if url else None
    
    @property
    def timeout(self) -> float:
        return self._timeout if self._timeout is not None else config.backend.timeout
    
    @property
    def configured(self) -> bool:
        return bool(self.base_url)
    
    def url_for(self, path: str) -> str:
        """Absolute backend URL for a path, or ConfigurationError"""
        base_url = self.base_url
        if not base_url:
            logger.error("Backend API URL is not configured")
            raise ConfigurationError()
        path = path.strip("/")
        return f"{base_url}/{path}" if path else base_url
    
    @timed
    async def send(
        self,
        method: str,
        path: str,
        params: QueryParams = None,
        json_body: Any = None,
        content: Optional[bytes] = None,
        headers: Optional[Dict[str, Optional[str]]] = None
    ) -> httpx.Response:
        """Send one request to the backend and return the raw response"""
        url = self.url_for(path)
        request_headers = {"Accept": "application/json"}
        for key, value in (headers or {}).items():
            if value:
                request_headers[key] = value
        
        logger.debug(f"Forwarding {method} {url}")
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.request(
                    method,
                    url,
                    params=params,
                    json=json_body,
                    content=content,
                    headers=request_headers
                )
        except httpx.RequestError as e:
            detail = str(e) or type(e).__name__
            logger.error(f"Backend connection error on {method} /{path.strip('/')}: {detail}")
            raise BackendUnreachableError(detail) from e
        
        logger.info(f"{method} /{path.strip('/')} -> {response.status_code}")
        return response
    
    def relay(
        self,
        response: httpx.Response,
        fallback_message: str,
        success_status: Optional[int] = None
    ) -> ProxyResult:
        """Normalize a backend response into a ProxyResult or raise GatewayError"""
        text = response.text
        
        if not response.is_success:
            raise normalize_error(response.status_code, text, fallback_message)
        
        status_code = success_status or response.status_code
        if response.status_code == 204 or not text.strip():
            return ProxyResult(204 if response.status_code == 204 else status_code, None)
        
        try:
            payload = json.loads(text)
        except ValueError:
            logger.warning(
                f"Backend returned non-JSON success body ({response.status_code}): {excerpt(text)}"
            )
            raise UnexpectedResponseFormatError(response.status_code, excerpt(text))
        
        return ProxyResult(status_code, payload)
    
    async def forward(
        self,
        method: str,
        path: str,
        fallback_message: str,
        success_status: Optional[int] = None,
        **kwargs: Any
    ) -> ProxyResult:
        """send() + relay()"""
        response = await self.send(method, path, **kwargs)
        return self.relay(response, fallback_message, success_status)
    
    async def ping(self) -> Dict[str, Any]:
        """Reachability check against the API root"""
        if not self.configured:
            return {"reachable": False, "configured": False, "error": "Backend API URL is not configured."}
        try:
            response = await self.send("GET", "")
            return {
                "reachable": True,
                "configured": True,
                "status_code": response.status_code
            }
        except GatewayError as e:
            return {
                "reachable": False,
                "configured": True,
                "error": e.extra.get("error", e.message)
            }


# Global service instance
backend_service = BackendService()


def get_backend_service() -> BackendService:
    """FastAPI dependency; overridden in tests"""
    return backend_service
