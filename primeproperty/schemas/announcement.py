from pydantic import BaseModel, Field
from typing import Optional


class AnnouncementCreateRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)


class AnnouncementResponse(BaseModel):
    id: int
    author_id: Optional[int] = None
    title: str
    content: str
    created_at: str
