from fastapi import APIRouter, Depends, status
from typing import List
from primeproperty.config import settings
from primeproperty.schemas.payment import PaymentResponse
from primeproperty.services.payment_service import create_subscription_payment, get_payments_for_user
from primeproperty.utils.dependencies import get_current_user

router = APIRouter(prefix="/api/payments", tags=["Payments"])


@router.get("", response_model=List[PaymentResponse])
async def list_my_payments(current_user: dict = Depends(get_current_user)):
    """Current user's payment history"""
    payments = await get_payments_for_user(current_user["id"])
    return [PaymentResponse(**payment) for payment in payments]


@router.post("/subscription", response_model=PaymentResponse, status_code=status.HTTP_201_CREATED)
async def subscribe(current_user: dict = Depends(get_current_user)):
    """Simulated subscription charge"""
    payment = await create_subscription_payment(current_user["id"], settings.SUBSCRIPTION_AMOUNT)
    return PaymentResponse(**payment)
