"""
Health Models
Pydantic models for health checks
"""

from typing import Optional

from pydantic import BaseModel


class ComponentHealth(BaseModel):
    status: str
    message: str = ""


class BackendHealth(ComponentHealth):
    base_url: Optional[str] = None
    status_code: Optional[int] = None


class HealthComponents(BaseModel):
    gateway: ComponentHealth
    backend: BackendHealth


class HealthCheckResponse(BaseModel):
    status: str
    timestamp: str
    components: HealthComponents
