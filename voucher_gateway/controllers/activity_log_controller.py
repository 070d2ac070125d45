"""
Activity Log Controller
Proxy endpoints for the backend's voucher audit trail
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from ..config import config
from ..models.activity_log import ActivityLogFilters
from ..services.backend_service import BackendService, get_backend_service
from ..services.request_service import forward_headers

router = APIRouter()


@router.get("")
async def list_activity_logs(
    request: Request,
    page: int = Query(default=1, ge=1),
    per_page: int = Query(default=config.pagination.activity_per_page, ge=1),
    log_name: Optional[str] = None,
    subject_type: Optional[str] = None,
    from_date: Optional[str] = None,
    to_date: Optional[str] = None,
    user_id: Optional[str] = None,
    search: Optional[str] = None,
    backend: BackendService = Depends(get_backend_service)
):
    """Get activity logs; "all" and empty filters are not forwarded"""
    filters = ActivityLogFilters(
        page=page,
        per_page=per_page,
        log_name=log_name,
        subject_type=subject_type,
        from_date=from_date,
        to_date=to_date,
        user_id=user_id,
        search=search
    )
    result = await backend.forward(
        "GET",
        "activity-logs",
        "Failed to fetch activity logs",
        params=filters.to_query(),
        headers=forward_headers(request)
    )
    return result.to_response()


@router.get("/summary")
async def activity_log_summary(request: Request, backend: BackendService = Depends(get_backend_service)):
    """Get activity totals, top users and recent activities"""
    result = await backend.forward(
        "GET",
        "activity-logs/summary",
        "Failed to fetch activity log summary",
        headers=forward_headers(request)
    )
    return result.to_response()
