"""
Voucher Presenter
Display values for the preview and print views: ledger amount parts,
resolved signature images and long-form dates.
"""

from typing import Any, Dict, Optional, Union

from ..config import config
from ..models.voucher import CashVoucher, ChequeVoucher, Signatory
from ..utils.helpers import (
    format_currency,
    format_display_date,
    resolve_signature_url,
    split_amount,
)


class VoucherPresenter:
    """Turns a loaded voucher into display values"""
    
    def __init__(self, base_url: Optional[str] = None, placeholder: Optional[str] = None,
                 prefix: Optional[str] = None):
        self._base_url = base_url
        self.placeholder = placeholder or config.signatures.placeholder
        self.prefix = prefix or config.signatures.prefix
    
    @property
    def base_url(self) -> Optional[str]:
        return self._base_url if self._base_url is not None else config.backend.base_url
    
    def signature_url(self, path: Optional[str]) -> str:
        return resolve_signature_url(path, self.base_url, self.placeholder, self.prefix)
    
    def amount(self, value: Any) -> Dict[str, str]:
        whole, cents = split_amount(value)
        return {"whole": whole, "cents": cents, "formatted": format_currency(value)}
    
    def signatory(self, signatory: Signatory) -> Dict[str, Any]:
        return {
            "name": signatory.name or "",
            "signature_url": self.signature_url(signatory.signature_url),
            "has_signature": bool(signatory.signature_url),
            "date": format_display_date(signatory.date),
        }
    
    def present(self, voucher: Union[CashVoucher, ChequeVoucher]) -> Dict[str, Any]:
        view = {
            "id": voucher.id,
            "voucher_no": voucher.voucher_no,
            "paid_to": voucher.paid_to or "",
            "date": format_display_date(voucher.date),
            "status": voucher.status,
            "received_by": self.signatory(voucher.received_by),
            "approved_by": self.signatory(voucher.approved_by),
        }
        
        if isinstance(voucher, CashVoucher):
            view["particulars"] = [
                {"description": p.description, **self.amount(p.amount)}
                for p in voucher.particulars
            ]
            view["total"] = self.amount(voucher.total_amount)
        else:
            view.update({
                "purpose": voucher.purpose or "",
                "check_no": voucher.check_no or "",
                "account_name": voucher.account_name or "",
                "account_number": voucher.account_number or "",
                "amount": self.amount(voucher.amount),
                "bank_amount": self.amount(voucher.bank_amount),
            })
        
        return view
