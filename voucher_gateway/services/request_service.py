"""
Request Service Module
Reads and reshapes inbound browser requests before they are forwarded.
"""

from typing import Any, Dict, Iterable, Optional, Tuple

from fastapi import Request

from ..utils.constants import ErrorCode, METHOD_OVERRIDE_FIELD
from ..utils.exceptions import GatewayError
from ..utils.logger import logger
from ..utils.multipart import append_form_field, has_form_field, is_json, is_multipart, is_urlencoded


def forward_headers(request: Request, content_type: Optional[str] = None) -> Dict[str, Optional[str]]:
    """Headers passed on to the backend: the caller's credentials and body type"""
    return {
        "Authorization": request.headers.get("authorization"),
        "Content-Type": content_type,
    }


def query_items(request: Request) -> list:
    """Query string as (key, value) pairs, repeated keys kept"""
    return list(request.query_params.multi_items())


async def read_json(request: Request) -> Any:
    """Parse a JSON body or fail with 400"""
    try:
        return await request.json()
    except ValueError:
        raise GatewayError(400, ErrorCode.INVALID_REQUEST, "Request body must be valid JSON")


async def read_json_fields(request: Request, fields: Iterable[str]) -> Dict[str, Any]:
    """JSON object body restricted to the given keys"""
    body = await read_json(request)
    if not isinstance(body, dict):
        raise GatewayError(400, ErrorCode.INVALID_REQUEST, "Request body must be a JSON object")
    return {key: body[key] for key in fields if key in body}


async def read_body(request: Request) -> Tuple[bytes, Optional[str]]:
    """Raw body for pass-through creates (multipart, urlencoded or JSON)"""
    content_type = request.headers.get("content-type")
    if not (is_multipart(content_type) or is_urlencoded(content_type) or is_json(content_type)):
        raise GatewayError(
            415,
            ErrorCode.UNSUPPORTED_MEDIA_TYPE,
            "Expected a multipart/form-data, urlencoded or JSON body"
        )
    return await request.body(), content_type


async def read_form_with_override(request: Request, method: str = "PUT") -> Tuple[bytes, str]:
    """
    Raw form body carrying the method-override marker.

    The marker is added only when the caller did not send one; the rest of
    the body is left untouched.
    """
    content_type = request.headers.get("content-type")
    if not (is_multipart(content_type) or is_urlencoded(content_type)):
        raise GatewayError(
            415,
            ErrorCode.UNSUPPORTED_MEDIA_TYPE,
            "Expected a multipart/form-data or urlencoded body"
        )
    
    body = await request.body()
    if has_form_field(body, content_type, METHOD_OVERRIDE_FIELD):
        return body, content_type
    
    try:
        body = append_form_field(body, content_type, METHOD_OVERRIDE_FIELD, method)
    except ValueError as e:
        logger.warning(f"Malformed form body: {e}")
        raise GatewayError(400, ErrorCode.INVALID_REQUEST, str(e))
    return body, content_type
