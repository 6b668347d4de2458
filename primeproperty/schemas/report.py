from pydantic import BaseModel, Field
from typing import Optional


class ReportCreateRequest(BaseModel):
    reason: str = Field(..., min_length=1, max_length=2000)


class ReportResponse(BaseModel):
    id: int
    property_id: int
    user_id: int
    reason: str
    is_resolved: bool
    resolved_at: Optional[str] = None
    property_title: Optional[str] = None
    user_name: Optional[str] = None
    created_at: str
