from pydantic import BaseModel, Field
from typing import Optional


class MessageCreateRequest(BaseModel):
    receiver_id: int
    property_id: Optional[int] = None
    content: str = Field(..., min_length=1)


class MessageReplyRequest(BaseModel):
    content: str = Field(..., min_length=1)


class MessageResponse(BaseModel):
    id: int
    sender_id: int
    receiver_id: int
    property_id: Optional[int] = None
    content: str
    sender_name: Optional[str] = None
    receiver_name: Optional[str] = None
    property_title: Optional[str] = None
    created_at: str
