"""
Activity Log Models
Read-only audit records produced by the backend on voucher mutations
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict

from ..utils.constants import FILTER_ALL


class ActivityLog(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    log_name: Optional[str] = None
    description: str = ""
    subject_id: Optional[int] = None
    subject_type: Optional[str] = None
    causer_id: Optional[int] = None
    causer_type: Optional[str] = None
    event: Optional[str] = None
    properties: Optional[Dict[str, Any]] = None
    batch_uuid: Optional[str] = None
    created_at: str
    updated_at: Optional[str] = None
    subject: Optional[Dict[str, Any]] = None
    causer: Optional[Dict[str, Any]] = None


class ActivityLogSummary(BaseModel):
    model_config = ConfigDict(extra="allow")

    total_logs: int = 0
    today_logs: int = 0
    this_week_logs: int = 0
    top_users: List[Dict[str, Any]] = []
    recent_activities: List[ActivityLog] = []


class ActivityLogFilters(BaseModel):
    """Query accepted by the activity log list"""
    page: int = 1
    per_page: int = 15
    log_name: Optional[str] = None
    subject_type: Optional[str] = None
    from_date: Optional[str] = None
    to_date: Optional[str] = None
    user_id: Optional[str] = None
    search: Optional[str] = None

    def to_query(self) -> Dict[str, str]:
        """Query string for the backend; empty and "all" filters are left out"""
        query = {"page": str(self.page), "per_page": str(self.per_page)}
        for key in ("log_name", "subject_type", "from_date", "to_date", "user_id", "search"):
            value = getattr(self, key)
            if value and value != FILTER_ALL:
                query[key] = str(value)
        return query
