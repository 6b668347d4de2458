from pydantic import BaseModel
from typing import Optional
from primeproperty.schemas.common import PaymentType, PaymentStatus


class PaymentResponse(BaseModel):
    id: int
    user_id: int
    property_id: Optional[int] = None
    amount: float
    payment_type: PaymentType
    status: PaymentStatus
    user_name: Optional[str] = None
    property_title: Optional[str] = None
    created_at: str
