"""
Dashboard Controller
Aggregate voucher counts
"""

from fastapi import APIRouter, Depends, Request

from ..services.backend_service import BackendService, get_backend_service
from ..services.request_service import forward_headers

router = APIRouter()


@router.get("/counts")
async def voucher_counts(request: Request, backend: BackendService = Depends(get_backend_service)):
    """Total, cash, cheque and this-month voucher counts"""
    result = await backend.forward(
        "GET",
        "vouchers/counts",
        "Failed to fetch voucher counts from backend",
        headers=forward_headers(request)
    )
    return result.to_response()
