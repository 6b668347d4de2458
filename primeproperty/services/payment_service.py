"""
Payment Service - simulated charge ledger

No payment provider is involved: every charge is recorded as completed
the moment it is created.
"""
from typing import List, Optional
import logging
from sqlalchemy import select, desc
from primeproperty.database.connection import AsyncSessionLocal
from primeproperty.models.payment import Payment
from primeproperty.models.property import Property
from primeproperty.models.user import User

logger = logging.getLogger(__name__)

PROMOTION = "promotion"
SUBSCRIPTION = "subscription"
COMPLETED = "completed"


def payment_to_dict(payment: Payment, user_name: Optional[str] = None, property_title: Optional[str] = None) -> dict:
    return {
        "id": payment.id,
        "user_id": payment.user_id,
        "property_id": payment.property_id,
        "amount": float(payment.amount) if payment.amount is not None else 0.0,
        "payment_type": payment.payment_type,
        "status": payment.status,
        "user_name": user_name,
        "property_title": property_title,
        "created_at": payment.created_at.isoformat() if payment.created_at else "",
    }


def new_payment(user_id: int, amount: float, payment_type: str, property_id: Optional[int] = None) -> Payment:
    """Build a ledger row for a simulated charge"""
    return Payment(
        user_id=user_id,
        property_id=property_id,
        amount=amount,
        payment_type=payment_type,
        status=COMPLETED,
    )


async def create_subscription_payment(user_id: int, amount: float) -> dict:
    async with AsyncSessionLocal() as session:
        payment = new_payment(user_id, amount, SUBSCRIPTION)
        session.add(payment)
        await session.commit()
        await session.refresh(payment)

        logger.info(f"Recorded subscription payment {payment.id} for user {user_id}")
        return payment_to_dict(payment)


async def _list_payments(user_id: Optional[int] = None) -> List[dict]:
    async with AsyncSessionLocal() as session:
        stmt = (
            select(Payment, User.name, Property.title)
            .outerjoin(User, User.id == Payment.user_id)
            .outerjoin(Property, Property.id == Payment.property_id)
            .order_by(desc(Payment.created_at), desc(Payment.id))
        )
        if user_id is not None:
            stmt = stmt.where(Payment.user_id == user_id)

        result = await session.execute(stmt)
        return [
            payment_to_dict(payment, user_name=user_name, property_title=property_title)
            for payment, user_name, property_title in result.all()
        ]


async def get_payments_for_user(user_id: int) -> List[dict]:
    """The caller's own ledger, newest first"""
    return await _list_payments(user_id=user_id)


async def get_all_payments() -> List[dict]:
    """Full ledger for the admin console"""
    return await _list_payments()
