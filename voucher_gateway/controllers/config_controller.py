"""
Config Controller
Handles configuration API endpoints
"""

from typing import Optional

from fastapi import APIRouter
from pydantic import BaseModel

from ..config import config, save_config
from ..utils.constants import ErrorCode
from ..utils.exceptions import GatewayError
from ..utils.logger import logger
from ..views.json_view import JsonView

router = APIRouter()


class BackendConfigUpdate(BaseModel):
    base_url: Optional[str] = None
    timeout: Optional[float] = None


@router.get("")
async def get_config():
    """Get effective configuration"""
    data = config.model_dump()
    data["backend"]["configured"] = bool(config.backend.base_url)
    return data


@router.put("/backend")
async def update_backend_config(update: BackendConfigUpdate):
    """Point the gateway at another backend and persist it (api.allow_config_updates)"""
    if not config.api.allow_config_updates:
        logger.warning("Rejected backend configuration update: updates are disabled")
        raise GatewayError(
            403,
            ErrorCode.CONFIG_UPDATES_DISABLED,
            "Configuration updates are disabled on this gateway."
        )
    
    for key, value in update.model_dump(exclude_unset=True).items():
        setattr(config.backend, key, value)
    
    saved_to = save_config(config)
    
    logger.info(f"Backend configuration updated: {config.backend.base_url} (saved to {saved_to})")
    return JsonView.success("Backend configuration updated", config.backend.model_dump())
