"""
Health Controller
Handles health check API endpoints
"""

from fastapi import APIRouter, Depends

from ..models.health import BackendHealth, HealthCheckResponse
from ..services.backend_service import BackendService, get_backend_service
from ..services.health_service import health_service

router = APIRouter()


@router.get("", response_model=HealthCheckResponse)
async def health_check(backend: BackendService = Depends(get_backend_service)):
    """Complete health check"""
    return await health_service.check_all(backend)


@router.get("/backend", response_model=BackendHealth)
async def backend_health(backend: BackendService = Depends(get_backend_service)):
    """Backend reachability"""
    return await health_service.check_backend(backend)
