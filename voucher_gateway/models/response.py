"""
Response Models
Paginated backend results
"""

import math
from typing import Any, Dict, Generic, List, Optional, Sequence, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    """
    One page of a Laravel-style paginated result.

    ``from`` is a Python keyword, so the field is ``from_`` with an alias.
    Invariants: last_page == max(1, ceil(total / per_page)) and
    len(data) <= per_page.
    """
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    data: List[T] = []
    current_page: int = 1
    per_page: int = 15
    total: int = 0
    last_page: int = 1
    from_: Optional[int] = Field(default=None, alias="from")
    to: Optional[int] = None

    @staticmethod
    def page_count(total: int, per_page: int) -> int:
        if per_page <= 0:
            raise ValueError("per_page must be positive")
        return max(1, math.ceil(total / per_page))

    @classmethod
    def slice(cls, items: Sequence[Any], page: int, per_page: int) -> "Page":
        """Build the requested page out of a full list of items"""
        total = len(items)
        last_page = cls.page_count(total, per_page)
        start = (page - 1) * per_page
        data = list(items[start:start + per_page]) if page >= 1 else []
        return cls(
            data=data,
            current_page=page,
            per_page=per_page,
            total=total,
            last_page=last_page,
            from_=start + 1 if data else None,
            to=start + len(data) if data else None,
        )

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")
