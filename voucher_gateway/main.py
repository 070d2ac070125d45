"""
Voucher Gateway
Main Application Entry Point

Same-origin proxy between the voucher UI and the accounting backend.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from .config import config
from .utils.constants import APP_NAME, APP_VERSION
from .utils.exceptions import GatewayError
from .utils.logger import setup_logger, logger
from .views.json_view import JsonView
from .controllers.voucher_controller import cash_router, cheque_router, compat_router
from .controllers.activity_log_controller import router as activity_log_router
from .controllers.auth_controller import router as auth_router
from .controllers.dashboard_controller import router as dashboard_router
from .controllers.config_controller import router as config_router
from .controllers.health_controller import router as health_router


# Setup logging
setup_logger(
    level=config.logging.level,
    log_file=config.logging.file,
    max_size=config.logging.max_size,
    backup_count=config.logging.backup_count,
    console=config.logging.console,
    colorize=config.logging.colorize
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info(f"{APP_NAME} starting...")
    if config.backend.base_url:
        logger.info(f"Forwarding to backend at {config.backend.base_url}")
    else:
        logger.warning("Backend API URL is not configured; every proxy route will answer 500")
    yield
    logger.info(f"{APP_NAME} shutting down...")


async def gateway_error_handler(request: Request, exc: GatewayError):
    """Render GatewayError as the gateway's JSON error envelope"""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.code} {exc.message}")
    else:
        logger.warning(f"{request.method} {request.url.path} -> {exc.status_code} {exc.message}")
    return JsonView.gateway_error(exc)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application"""
    app = FastAPI(
        title=APP_NAME,
        description="Proxy for cash and cheque voucher operations on the accounting API",
        version=APP_VERSION,
        lifespan=lifespan
    )
    
    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.api.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    
    app.add_exception_handler(GatewayError, gateway_error_handler)
    
    # Include routers
    app.include_router(cash_router, prefix="/api/cash-vouchers", tags=["Cash Vouchers"])
    app.include_router(cheque_router, prefix="/api/cheque-vouchers", tags=["Cheque Vouchers"])
    app.include_router(compat_router, prefix="/api", tags=["Voucher Forms"])
    app.include_router(dashboard_router, prefix="/api/vouchers", tags=["Dashboard"])
    app.include_router(activity_log_router, prefix="/api/activity-logs", tags=["Activity Logs"])
    app.include_router(auth_router, prefix="/api", tags=["Auth"])
    app.include_router(config_router, prefix="/api/config", tags=["Config"])
    app.include_router(health_router, prefix="/api/health", tags=["Health"])
    
    @app.get("/")
    async def root():
        """Service information"""
        return {
            "name": APP_NAME,
            "version": APP_VERSION,
            "status": "running",
            "backend_configured": bool(config.backend.base_url),
            "docs": "/docs"
        }
    
    return app


# Create FastAPI application
app = create_app()
