"""
JSON View
Formats gateway responses as JSON
"""

from typing import Any, Dict, Optional

from fastapi.responses import JSONResponse, Response

from ..utils.exceptions import GatewayError
from ..utils.helpers import get_current_timestamp


class JsonView:
    """JSON response formatter"""
    
    @staticmethod
    def success(message: str = "", data: Any = None) -> Dict:
        """Format success response"""
        return {
            "status": "success",
            "message": message,
            "data": data,
            "timestamp": get_current_timestamp()
        }
    
    @staticmethod
    def error(code: str, message: str, details: Optional[Any] = None, **extra: Any) -> Dict:
        """Format error response: {error, code, message, details?, ...extra, timestamp}"""
        body = {
            "error": True,
            "code": code,
            "message": message,
        }
        if details is not None:
            body["details"] = details
        body.update(extra)
        body["timestamp"] = get_current_timestamp()
        return body
    
    @staticmethod
    def relay(status_code: int, payload: Any) -> Response:
        """Relay a backend payload with its status"""
        if status_code == 204:
            return Response(status_code=204)
        return JSONResponse(content=payload, status_code=status_code)
    
    @classmethod
    def gateway_error(cls, exc: GatewayError) -> JSONResponse:
        """Render a GatewayError"""
        return JSONResponse(
            content=cls.error(exc.code, exc.message, exc.details, **exc.extra),
            status_code=exc.status_code
        )
