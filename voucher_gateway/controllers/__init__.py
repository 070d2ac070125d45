# Controllers Package
# MVC Controller Layer

from .voucher_controller import cash_router, cheque_router, compat_router
from .activity_log_controller import router as activity_log_router
from .auth_controller import router as auth_router
from .dashboard_controller import router as dashboard_router
from .config_controller import router as config_router
from .health_controller import router as health_router

__all__ = [
    "cash_router",
    "cheque_router",
    "compat_router",
    "activity_log_router",
    "auth_router",
    "dashboard_router",
    "config_router",
    "health_router"
]
