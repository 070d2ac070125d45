"""
Helper Functions Module
Amount formatting, signature URL resolution and date display helpers
"""

import calendar
import re
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Optional, Tuple

CENTS = Decimal("0.01")
SIGNATURES_PREFIX = "/signatures/"
PLACEHOLDER_IMAGE = "/placeholder.svg"


def to_decimal(value: Any) -> Optional[Decimal]:
    """Convert a number or numeric string to Decimal, None when not numeric"""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        amount = value
    else:
        text = str(value).strip()
        if not text:
            return None
        try:
            amount = Decimal(text)
        except InvalidOperation:
            return None
    if not amount.is_finite():
        return None
    return amount


def round_amount(value: Any) -> Optional[Decimal]:
    """Round to two decimals (half up); None when not numeric"""
    amount = to_decimal(value)
    if amount is None:
        return None
    rounded = amount.quantize(CENTS, rounding=ROUND_HALF_UP)
    # Avoid "-0.00"
    if rounded.is_zero():
        rounded = abs(rounded)
    return rounded


def parse_amount(value: Any) -> Decimal:
    """Lenient amount parse for running totals: separators and currency
    symbols are ignored, anything unparseable counts as zero."""
    if isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
        amount = to_decimal(value)
    else:
        cleaned = re.sub(r"[^\d.\-]", "", str(value or ""))
        amount = to_decimal(cleaned)
    return amount if amount is not None else Decimal("0")


def split_amount(value: Any) -> Tuple[str, str]:
    """
    Split an amount into ledger display parts.

    The amount is rounded to cents first, then the integer part is the
    truncation of the rounded value and the fraction its two digits:
    1234.5 -> ("1234", "50"), 0 -> ("0", "00").
    Invalid or empty input gives ("", "").
    """
    rounded = round_amount(value)
    if rounded is None:
        return "", ""
    sign = "-" if rounded < 0 else ""
    magnitude = abs(rounded)
    integer_part = int(magnitude)
    fraction_part = f"{magnitude:.2f}".split(".")[1]
    return f"{sign}{integer_part}", fraction_part


def format_amount(value: Any) -> str:
    """Format as a plain two-decimal string, e.g. "1234.50"."""
    rounded = round_amount(value)
    if rounded is None:
        return ""
    return f"{rounded:.2f}"


def format_currency(value: Any, symbol: str = "₱") -> str:
    """Format as a grouped currency string, e.g. "₱1,234.50"."""
    rounded = round_amount(value)
    if rounded is None:
        return ""
    if rounded < 0:
        return f"-{symbol}{abs(rounded):,.2f}"
    return f"{symbol}{rounded:,.2f}"


def static_root(base_url: str) -> str:
    """Strip a trailing slash and a trailing /api from the API base URL"""
    root = base_url.rstrip("/")
    if root.endswith("/api"):
        root = root[:-len("/api")]
    return root


def resolve_signature_url(
    path: Optional[str],
    base_url: Optional[str],
    placeholder: str = PLACEHOLDER_IMAGE,
    prefix: str = SIGNATURES_PREFIX
) -> str:
    """
    Resolve a stored signature reference to a displayable URL.

    Absolute http(s) URLs are returned unchanged. Relative paths are served
    from the backend's static root (the API base URL without /api). Missing
    path or missing base URL gives the placeholder image.
    """
    if not path:
        return placeholder
    if path.startswith("http://") or path.startswith("https://"):
        return path
    if not base_url:
        return placeholder
    root = static_root(base_url)
    if path.startswith(prefix):
        return f"{root}{path}"
    return f"{root}/{path.lstrip('/')}"


def _parse_datetime(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc)
    return parsed


def to_input_date(value: Optional[str]) -> str:
    """ISO date or datetime -> "YYYY-MM-DD" for date inputs; "" when invalid"""
    parsed = _parse_datetime(value)
    if parsed is None:
        return ""
    return parsed.date().isoformat()


def format_display_date(value: Optional[str]) -> str:
    """ISO date -> "January 5, 2025"; "" when invalid"""
    parsed = _parse_datetime(value)
    if parsed is None:
        return ""
    return f"{calendar.month_name[parsed.month]} {parsed.day}, {parsed.year}"


def excerpt(text: str, limit: int = 300) -> str:
    """Shorten a response body for log lines"""
    if len(text) <= limit:
        return text
    return text[:limit] + "..."


def get_current_timestamp() -> str:
    """Get current timestamp in ISO format"""
    return datetime.now().isoformat()
