"""
Voucher Models
Pydantic models for cash and cheque vouchers as returned by the backend
"""

from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict

from ..utils.constants import VoucherStatus


class Particular(BaseModel):
    """Line item of a cash voucher"""
    model_config = ConfigDict(extra="allow")

    id: Optional[Union[int, str]] = None
    description: str = ""
    amount: Decimal = Decimal("0")


class Signatory(BaseModel):
    """One sign-off block (received by / approved by)"""
    name: Optional[str] = None
    signature_url: Optional[str] = None
    date: Optional[str] = None


class VoucherBase(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: Union[int, str]
    voucher_no: str
    date: Optional[str] = None
    paid_to: Optional[str] = None
    status: str = VoucherStatus.PENDING
    received_by_name: Optional[str] = None
    received_by_signature_url: Optional[str] = None
    received_by_date: Optional[str] = None
    approved_by_name: Optional[str] = None
    approved_by_signature_url: Optional[str] = None
    approved_by_date: Optional[str] = None

    @property
    def received_by(self) -> Signatory:
        return Signatory(
            name=self.received_by_name,
            signature_url=self.received_by_signature_url,
            date=self.received_by_date
        )

    @property
    def approved_by(self) -> Signatory:
        return Signatory(
            name=self.approved_by_name,
            signature_url=self.approved_by_signature_url,
            date=self.approved_by_date
        )

    @property
    def is_cancelled(self) -> bool:
        return self.status == VoucherStatus.CANCELLED


class CashVoucher(VoucherBase):
    total_amount: Decimal = Decimal("0")
    particulars: List[Particular] = []


class ChequeVoucher(VoucherBase):
    amount: Decimal = Decimal("0")
    bank_amount: Optional[Decimal] = None
    purpose: Optional[str] = None
    check_no: Optional[str] = None
    account_name: Optional[str] = None
    account_number: Optional[str] = None


class VoucherCounts(BaseModel):
    """Dashboard counters"""
    model_config = ConfigDict(extra="allow")

    total_vouchers: int = 0
    cash_vouchers: int = 0
    cheque_vouchers: int = 0
    vouchers_this_month: int = 0


class StatusUpdate(BaseModel):
    """JSON body for status-only updates such as cancellation"""
    status: str

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump()


class VoucherKind(str, Enum):
    """Voucher family; the value is the collection path on the backend"""
    CASH = "cash-vouchers"
    CHEQUE = "cheque-vouchers"

    @property
    def label(self) -> str:
        return "cash voucher" if self is VoucherKind.CASH else "cheque voucher"
