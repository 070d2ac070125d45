# Services Package
# Business Logic Layer

from .backend_service import BackendService, backend_service, get_backend_service
from .health_service import HealthService
from .gateway_client import GatewayClient, GatewayClientError, Session
from .pagination import ListViewModel, ViewState
from .presenter import VoucherPresenter

__all__ = [
    "BackendService",
    "backend_service",
    "get_backend_service",
    "HealthService",
    "GatewayClient",
    "GatewayClientError",
    "Session",
    "ListViewModel",
    "ViewState",
    "VoucherPresenter"
]
