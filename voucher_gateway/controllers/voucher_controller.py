"""
Voucher Controller
Proxy endpoints for cash and cheque vouchers, voucher numbering and the
legacy /cash and /check form targets.
"""

from fastapi import APIRouter, Depends, Request

from ..models.voucher import VoucherKind
from ..services.backend_service import BackendService, get_backend_service
from ..services.request_service import (
    forward_headers,
    query_items,
    read_body,
    read_form_with_override,
    read_json,
)
from ..utils.constants import CASH_LATEST_NUMBER_PATH, CHEQUE_NEXT_NUMBER_PATH


async def list_vouchers(kind: VoucherKind, request: Request, backend: BackendService):
    result = await backend.forward(
        "GET",
        kind.value,
        f"Failed to fetch {kind.label}s",
        params=query_items(request),
        headers=forward_headers(request)
    )
    return result.to_response()


async def create_voucher(kind: VoucherKind, request: Request, backend: BackendService):
    body, content_type = await read_body(request)
    result = await backend.forward(
        "POST",
        kind.value,
        f"Failed to create {kind.label}",
        success_status=201,
        content=body,
        headers=forward_headers(request, content_type)
    )
    return result.to_response()


def build_voucher_router(kind: VoucherKind) -> APIRouter:
    """Routes for one voucher collection: list, create, detail, update"""
    router = APIRouter()
    
    @router.get("")
    async def list_collection(request: Request, backend: BackendService = Depends(get_backend_service)):
        """List vouchers; page, per_page and filters pass through"""
        return await list_vouchers(kind, request, backend)
    
    @router.post("", status_code=201)
    async def create_in_collection(request: Request, backend: BackendService = Depends(get_backend_service)):
        """Create a voucher from a multipart (or JSON) body"""
        return await create_voucher(kind, request, backend)
    
    @router.get("/{voucher_id}")
    async def get_detail(voucher_id: str, request: Request, backend: BackendService = Depends(get_backend_service)):
        """Get one voucher"""
        result = await backend.forward(
            "GET",
            f"{kind.value}/{voucher_id}",
            f"Failed to fetch {kind.label}",
            headers=forward_headers(request)
        )
        return result.to_response()
    
    @router.put("/{voucher_id}")
    async def update_json(voucher_id: str, request: Request, backend: BackendService = Depends(get_backend_service)):
        """JSON update without files, e.g. {"status": "cancelled"}"""
        body = await read_json(request)
        result = await backend.forward(
            "PUT",
            f"{kind.value}/{voucher_id}",
            f"Failed to update {kind.label}",
            json_body=body,
            headers=forward_headers(request)
        )
        return result.to_response()
    
    @router.post("/{voucher_id}")
    async def update_with_files(voucher_id: str, request: Request, backend: BackendService = Depends(get_backend_service)):
        """Multipart update; sent to the backend as POST with _method=PUT"""
        body, content_type = await read_form_with_override(request, "PUT")
        result = await backend.forward(
            "POST",
            f"{kind.value}/{voucher_id}",
            f"Failed to update {kind.label} with files",
            content=body,
            headers=forward_headers(request, content_type)
        )
        return result.to_response()
    
    return router


cash_router = build_voucher_router(VoucherKind.CASH)
cheque_router = build_voucher_router(VoucherKind.CHEQUE)

# Form targets used by the compose screens
compat_router = APIRouter()


@compat_router.get("/cash")
async def list_cash(request: Request, backend: BackendService = Depends(get_backend_service)):
    """Alias of GET /cash-vouchers"""
    return await list_vouchers(VoucherKind.CASH, request, backend)


@compat_router.post("/cash", status_code=201)
async def create_cash(request: Request, backend: BackendService = Depends(get_backend_service)):
    """Alias of POST /cash-vouchers"""
    return await create_voucher(VoucherKind.CASH, request, backend)


@compat_router.post("/check", status_code=201)
async def create_cheque(request: Request, backend: BackendService = Depends(get_backend_service)):
    """Alias of POST /cheque-vouchers"""
    return await create_voucher(VoucherKind.CHEQUE, request, backend)


@compat_router.get("/cash/latest-voucher-no")
async def latest_cash_voucher_no(request: Request, backend: BackendService = Depends(get_backend_service)):
    """Next cash voucher number, e.g. {"latest_voucher_no": "CSH-25-000042"}"""
    result = await backend.forward(
        "GET",
        CASH_LATEST_NUMBER_PATH,
        "Failed to fetch latest voucher number from backend",
        headers=forward_headers(request)
    )
    return result.to_response()


@compat_router.get("/check/voucher-next-no")
async def next_cheque_voucher_no(request: Request, backend: BackendService = Depends(get_backend_service)):
    """Next cheque voucher number, e.g. {"nextVoucherNo": "CHK-25-000007"}"""
    result = await backend.forward(
        "GET",
        CHEQUE_NEXT_NUMBER_PATH,
        "Failed to fetch next voucher number from backend",
        headers=forward_headers(request)
    )
    return result.to_response()
