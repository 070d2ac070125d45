"""
Gateway Client Module
=====================
Caller side of the gateway: what the voucher screens use to talk to
/api/*. Requests are built from drafts (multipart) or plain values (JSON);
failures surface as GatewayClientError for the screen to show as a
notification.

SESSION:
-------
A Session is created by login(), passed explicitly to every authenticated
call (Authorization: Bearer <token>) and cleared by logout(). There is no
global auth state.
"""

from typing import Any, Dict, Optional, Type

import httpx
from pydantic import BaseModel, ValidationError

from ..models.activity_log import ActivityLog, ActivityLogFilters, ActivityLogSummary
from ..models.draft import VoucherDraft
from ..models.response import Page
from ..models.voucher import CashVoucher, ChequeVoucher, StatusUpdate, VoucherCounts, VoucherKind
from ..utils.constants import ErrorCode, VoucherStatus
from ..utils.logger import logger

VOUCHER_MODELS = {
    VoucherKind.CASH: CashVoucher,
    VoucherKind.CHEQUE: ChequeVoucher,
}


class GatewayClientError(Exception):
    """A gateway call that did not succeed"""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        code: Optional[str] = None,
        details: Any = None,
        errors: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code
        self.details = details
        self.errors = errors or {}

    @property
    def is_validation_error(self) -> bool:
        return self.status_code == 422

    @property
    def is_auth_error(self) -> bool:
        return self.status_code in (401, 403)


class Session:
    """Authenticated user context"""

    def __init__(self, token: Optional[str] = None, user: Optional[Dict[str, Any]] = None):
        self.token = token
        self.user = user or {}

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    def headers(self) -> Dict[str, str]:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

    def clear(self) -> None:
        self.token = None
        self.user = {}


class GatewayClient:
    """Typed access to the gateway routes"""
    
    def __init__(
        self,
        base_url: str = "http://localhost:8080/api",
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 30.0
    ):
        self.base_url = base_url.rstrip("/")
        self.transport = transport
        self.timeout = timeout
    
    async def _request(self, method: str, path: str, session: Optional[Session] = None, **kwargs) -> Any:
        headers = session.headers() if session else {}
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url, transport=self.transport, timeout=self.timeout
            ) as client:
                response = await client.request(method, path, headers=headers, **kwargs)
        except httpx.RequestError as e:
            logger.error(f"Gateway unreachable on {method} {path}: {e}")
            raise GatewayClientError(f"Could not reach the gateway: {e}") from e
        
        if response.is_success:
            if not response.content:
                return None
            try:
                return response.json()
            except ValueError:
                raise GatewayClientError(
                    "Gateway returned a non-JSON response", response.status_code
                )
        
        try:
            body = response.json()
        except ValueError:
            body = {"message": response.text}
        if not isinstance(body, dict):
            body = {"message": str(body)}
        
        raise GatewayClientError(
            body.get("message") or f"Request failed with status {response.status_code}",
            status_code=response.status_code,
            code=body.get("code"),
            details=body.get("details"),
            errors=body.get("errors")
        )
    
    @staticmethod
    def _parse(model: Type[BaseModel], data: Any) -> Any:
        """Validate a 2xx body; a shape mismatch is reported like any other failure"""
        try:
            return model.model_validate(data)
        except ValidationError as e:
            logger.warning(f"Gateway response is not a valid {model.__name__}: {e.error_count()} errors")
            raise GatewayClientError(
                "Unexpected response format from the gateway",
                code=ErrorCode.UNEXPECTED_RESPONSE_FORMAT,
                details=e.errors(include_url=False)
            ) from e
    
    # ---- auth ----
    
    async def login(self, email: str, password: str) -> Session:
        data = await self._request("POST", "login", json={"email": email, "password": password})
        token = (data or {}).get("token") or (data or {}).get("access_token")
        if not token:
            raise GatewayClientError("Login response did not include a token")
        return Session(token, data.get("user"))
    
    async def register(self, name: str, email: str, password: str, password_confirmation: str) -> Dict[str, Any]:
        return await self._request("POST", "register", json={
            "name": name,
            "email": email,
            "password": password,
            "password_confirmation": password_confirmation,
        })
    
    def logout(self, session: Session) -> None:
        session.clear()
    
    # ---- vouchers ----
    
    async def list_vouchers(
        self,
        kind: VoucherKind,
        session: Optional[Session] = None,
        page: int = 1,
        per_page: int = 10,
        **filters: str
    ) -> Page:
        params = {"page": page, "per_page": per_page, **filters}
        data = await self._request("GET", kind.value, session, params=params)
        return self._parse(Page[VOUCHER_MODELS[kind]], data)
    
    async def get_voucher(self, kind: VoucherKind, voucher_id: Any, session: Optional[Session] = None):
        data = await self._request("GET", f"{kind.value}/{voucher_id}", session)
        return self._parse(VOUCHER_MODELS[kind], data)
    
    async def create_voucher(self, draft: VoucherDraft, session: Optional[Session] = None) -> Any:
        form = draft.create_form()
        return await self._request(
            "POST", draft.kind.value, session, data=form.data, files=form.files or None
        )
    
    async def update_voucher(self, voucher_id: Any, draft: VoucherDraft, session: Optional[Session] = None) -> Any:
        """Multipart update; the gateway adds the PUT override"""
        form = draft.update_form()
        return await self._request(
            "POST", f"{draft.kind.value}/{voucher_id}", session, data=form.data, files=form.files or None
        )
    
    async def update_status(self, kind: VoucherKind, voucher_id: Any, status: str,
                            session: Optional[Session] = None) -> Any:
        return await self._request(
            "PUT", f"{kind.value}/{voucher_id}", session, json=StatusUpdate(status=status).to_payload()
        )
    
    async def cancel_voucher(self, kind: VoucherKind, voucher_id: Any, session: Optional[Session] = None) -> Any:
        return await self.update_status(kind, voucher_id, VoucherStatus.CANCELLED, session)
    
    async def next_voucher_no(self, kind: VoucherKind, session: Optional[Session] = None) -> str:
        if kind is VoucherKind.CASH:
            data = await self._request("GET", "cash/latest-voucher-no", session)
            return data["latest_voucher_no"]
        data = await self._request("GET", "check/voucher-next-no", session)
        return data["nextVoucherNo"]
    
    async def voucher_counts(self, session: Optional[Session] = None) -> VoucherCounts:
        data = await self._request("GET", "vouchers/counts", session)
        return self._parse(VoucherCounts, data)
    
    # ---- activity logs ----
    
    async def list_activity_logs(
        self,
        session: Optional[Session] = None,
        page: int = 1,
        per_page: int = 15,
        **filters: str
    ) -> Page:
        query = ActivityLogFilters(page=page, per_page=per_page, **filters).to_query()
        data = await self._request("GET", "activity-logs", session, params=query)
        return self._parse(Page[ActivityLog], data)
    
    async def activity_summary(self, session: Optional[Session] = None) -> ActivityLogSummary:
        data = await self._request("GET", "activity-logs/summary", session)
        return self._parse(ActivityLogSummary, data)
