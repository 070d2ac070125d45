"""
Auth Controller
Credential forwarding for login and registration
"""

from fastapi import APIRouter, Depends, Request

from ..services.backend_service import BackendService, get_backend_service
from ..services.request_service import read_json_fields
from ..utils.logger import logger

router = APIRouter()

LOGIN_FIELDS = ("email", "password")
REGISTER_FIELDS = ("name", "email", "password", "password_confirmation")


@router.post("/login")
async def login(request: Request, backend: BackendService = Depends(get_backend_service)):
    """Forward credentials; relays the backend's token/user or its errors"""
    payload = await read_json_fields(request, LOGIN_FIELDS)
    logger.info(f"Login attempt for {payload.get('email', '<no email>')}")
    result = await backend.forward("POST", "login", "Login failed", json_body=payload)
    return result.to_response()


@router.post("/register")
async def register(request: Request, backend: BackendService = Depends(get_backend_service)):
    """Forward a registration"""
    payload = await read_json_fields(request, REGISTER_FIELDS)
    logger.info(f"Registration attempt for {payload.get('email', '<no email>')}")
    result = await backend.forward("POST", "register", "Registration failed", json_body=payload)
    return result.to_response()
