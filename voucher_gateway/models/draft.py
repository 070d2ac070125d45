"""
Voucher Draft Models
====================
In-memory state of a voucher being composed or edited, and its
serialization to the form the backend expects.

FORM SHAPES:
-----------
- Create (compose screens): camelCase scalars (paidTo, voucherNo, ...),
  signatories as receivedBy[name] / receivedBy[signature] / receivedBy[date].
- Update (edit screens): snake_case scalars (paid_to, voucher_no, ...),
  received_by_signature file part or received_by_signature_cleared=1.
- Cash particulars in both: particulars[<i>][description] and
  particulars[<i>][amount].

SIGNATURES:
----------
Each signatory holds one SignatureChange: Unchanged, Replace(upload) or
Clear. An upload is an open file object owned by the draft; it is closed
when replaced, when cleared and when the draft is closed. Drafts are
context managers.
"""

import io
from decimal import Decimal
from pathlib import Path
from typing import Any, BinaryIO, Dict, List, Optional, Tuple

from ..utils.constants import CLEARED_SUFFIX
from ..utils.helpers import parse_amount, to_input_date
from .voucher import CashVoucher, ChequeVoucher, VoucherKind


class SignatureUpload:
    """A signature image selected for upload"""

    def __init__(self, filename: str, content: BinaryIO, content_type: str = "image/png"):
        self.filename = filename
        self.content = content
        self.content_type = content_type

    @classmethod
    def from_bytes(cls, filename: str, data: bytes, content_type: str = "image/png") -> "SignatureUpload":
        return cls(filename, io.BytesIO(data), content_type)

    @classmethod
    def from_path(cls, path: str, content_type: str = "image/png") -> "SignatureUpload":
        file_path = Path(path)
        return cls(file_path.name, open(file_path, "rb"), content_type)

    @property
    def closed(self) -> bool:
        return self.content.closed

    def close(self) -> None:
        if not self.content.closed:
            self.content.close()

    def as_file(self) -> Tuple[str, BinaryIO, str]:
        if self.closed:
            raise ValueError(f"Signature upload {self.filename} is already closed")
        self.content.seek(0)
        return self.filename, self.content, self.content_type


class SignatureChange:
    """What to do with a signatory's stored signature on submit"""
    kind = ""

    def release(self) -> None:
        pass

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other)

    def __hash__(self) -> int:
        return hash(self.kind)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class Unchanged(SignatureChange):
    kind = "unchanged"


class Clear(SignatureChange):
    kind = "clear"


class Replace(SignatureChange):
    kind = "replace"

    def __init__(self, upload: SignatureUpload):
        self.upload = upload

    def release(self) -> None:
        self.upload.close()

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Replace) and other.upload is self.upload

    def __hash__(self) -> int:
        return id(self.upload)

    def __repr__(self) -> str:
        return f"Replace({self.upload.filename!r})"


class SignatoryDraft:
    """Received-by / approved-by block of a draft"""

    def __init__(self, name: str = "", date: str = "", signature: Optional[SignatureChange] = None):
        self.name = name
        self.date = date
        self.signature: SignatureChange = signature or Unchanged()

    def _set(self, change: SignatureChange) -> None:
        if change != self.signature:
            self.signature.release()
        self.signature = change

    def select_signature(self, upload: SignatureUpload) -> None:
        self._set(Replace(upload))

    def clear_signature(self) -> None:
        self._set(Clear())

    def keep_signature(self) -> None:
        self._set(Unchanged())

    @property
    def upload(self) -> Optional[SignatureUpload]:
        if isinstance(self.signature, Replace):
            return self.signature.upload
        return None

    def close(self) -> None:
        self.signature.release()


class FormPayload:
    """Fields and file parts ready for an httpx multipart request"""

    def __init__(self):
        self.data: Dict[str, str] = {}
        self.files: List[Tuple[str, Tuple[str, BinaryIO, str]]] = []

    def add(self, name: str, value: Any) -> None:
        self.data[name] = "" if value is None else str(value)

    def add_file(self, name: str, upload: SignatureUpload) -> None:
        self.files.append((name, upload.as_file()))

    @property
    def has_files(self) -> bool:
        return bool(self.files)


class VoucherDraft:
    """Fields shared by cash and cheque drafts"""
    kind: VoucherKind

    def __init__(self, paid_to: str = "", voucher_no: str = "", date: str = "", status: Optional[str] = None):
        self.paid_to = paid_to
        self.voucher_no = voucher_no
        self.date = date
        self.status = status
        self.received_by = SignatoryDraft()
        self.approved_by = SignatoryDraft()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def close(self) -> None:
        self.received_by.close()
        self.approved_by.close()

    def _signatories(self):
        return (("receivedBy", "received_by", self.received_by),
                ("approvedBy", "approved_by", self.approved_by))

    def _add_create_signatories(self, form: FormPayload) -> None:
        for prefix, _, signatory in self._signatories():
            form.add(f"{prefix}[name]", signatory.name)
            form.add(f"{prefix}[date]", signatory.date)
            if signatory.upload is not None:
                form.add_file(f"{prefix}[signature]", signatory.upload)

    def _add_update_signatories(self, form: FormPayload) -> None:
        for _, prefix, signatory in self._signatories():
            form.add(f"{prefix}_name", signatory.name)
            form.add(f"{prefix}_date", signatory.date)
            field = f"{prefix}_signature"
            if isinstance(signatory.signature, Replace):
                form.add_file(field, signatory.upload)
            elif isinstance(signatory.signature, Clear):
                form.add(f"{field}{CLEARED_SUFFIX}", "1")

    def _load_signatories(self, voucher) -> None:
        self.received_by = SignatoryDraft(
            voucher.received_by_name or "", to_input_date(voucher.received_by_date)
        )
        self.approved_by = SignatoryDraft(
            voucher.approved_by_name or "", to_input_date(voucher.approved_by_date)
        )

    def create_form(self) -> FormPayload:
        raise NotImplementedError

    def update_form(self) -> FormPayload:
        raise NotImplementedError


class ParticularDraft:
    def __init__(self, description: str = "", amount: Any = "", particular_id: Any = None):
        self.id = particular_id
        self.description = description
        self.amount = amount


class CashVoucherDraft(VoucherDraft):
    """Cash voucher form; always keeps at least one particular row"""
    kind = VoucherKind.CASH

    def __init__(self, particulars: Optional[List[ParticularDraft]] = None, **kwargs):
        super().__init__(**kwargs)
        self.particulars: List[ParticularDraft] = particulars or [ParticularDraft()]

    @classmethod
    def from_voucher(cls, voucher: CashVoucher) -> "CashVoucherDraft":
        """Seed an edit form from a loaded voucher"""
        draft = cls(
            paid_to=voucher.paid_to or "",
            voucher_no=voucher.voucher_no,
            date=to_input_date(voucher.date),
            status=voucher.status,
            particulars=[
                ParticularDraft(p.description, p.amount, p.id) for p in voucher.particulars
            ],
        )
        draft._load_signatories(voucher)
        return draft

    def add_particular(self, description: str = "", amount: Any = "") -> ParticularDraft:
        particular = ParticularDraft(description, amount)
        self.particulars.append(particular)
        return particular

    def remove_particular(self, index: int) -> bool:
        if len(self.particulars) <= 1:
            return False
        del self.particulars[index]
        return True

    def update_particular(self, index: int, **fields: Any) -> None:
        particular = self.particulars[index]
        for key, value in fields.items():
            if key not in ("description", "amount"):
                raise KeyError(key)
            setattr(particular, key, value)

    @property
    def total(self) -> Decimal:
        return sum((parse_amount(p.amount) for p in self.particulars), Decimal("0"))

    def _add_particulars(self, form: FormPayload, with_ids: bool) -> None:
        for index, particular in enumerate(self.particulars):
            if with_ids and particular.id is not None:
                form.add(f"particulars[{index}][id]", particular.id)
            form.add(f"particulars[{index}][description]", particular.description)
            form.add(f"particulars[{index}][amount]", parse_amount(particular.amount))

    def create_form(self) -> FormPayload:
        form = FormPayload()
        form.add("paidTo", self.paid_to)
        form.add("voucherNo", self.voucher_no)
        form.add("date", self.date)
        self._add_particulars(form, with_ids=False)
        self._add_create_signatories(form)
        return form

    def update_form(self) -> FormPayload:
        form = FormPayload()
        form.add("paid_to", self.paid_to)
        form.add("voucher_no", self.voucher_no)
        form.add("date", self.date)
        if self.status:
            form.add("status", self.status)
        self._add_particulars(form, with_ids=True)
        self._add_update_signatories(form)
        return form


class ChequeVoucherDraft(VoucherDraft):
    kind = VoucherKind.CHEQUE

    def __init__(
        self,
        amount: Any = "",
        purpose: str = "",
        check_no: str = "",
        account_name: str = "",
        account_number: str = "",
        bank_amount: Any = "",
        **kwargs
    ):
        super().__init__(**kwargs)
        self.amount = amount
        self.purpose = purpose
        self.check_no = check_no
        self.account_name = account_name
        self.account_number = account_number
        self.bank_amount = bank_amount

    @classmethod
    def from_voucher(cls, voucher: ChequeVoucher) -> "ChequeVoucherDraft":
        draft = cls(
            paid_to=voucher.paid_to or "",
            voucher_no=voucher.voucher_no,
            date=to_input_date(voucher.date),
            status=voucher.status,
            amount=voucher.amount,
            purpose=voucher.purpose or "",
            check_no=voucher.check_no or "",
            account_name=voucher.account_name or "",
            account_number=voucher.account_number or "",
            bank_amount=voucher.bank_amount if voucher.bank_amount is not None else "",
        )
        draft._load_signatories(voucher)
        return draft

    def create_form(self) -> FormPayload:
        form = FormPayload()
        form.add("paidTo", self.paid_to)
        form.add("voucherNo", self.voucher_no)
        form.add("date", self.date)
        form.add("amount", self.amount)
        form.add("purpose", self.purpose)
        form.add("checkNo", self.check_no)
        form.add("accountName", self.account_name)
        form.add("accountNumber", self.account_number)
        form.add("bankAmount", self.bank_amount)
        self._add_create_signatories(form)
        return form

    def update_form(self) -> FormPayload:
        form = FormPayload()
        form.add("paid_to", self.paid_to)
        form.add("voucher_no", self.voucher_no)
        form.add("date", self.date)
        if self.status:
            form.add("status", self.status)
        form.add("amount", self.amount)
        form.add("purpose", self.purpose)
        form.add("check_no", self.check_no)
        form.add("account_name", self.account_name)
        form.add("account_number", self.account_number)
        form.add("bank_amount", self.bank_amount)
        self._add_update_signatories(form)
        return form
