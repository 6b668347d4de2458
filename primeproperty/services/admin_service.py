from typing import List
import logging
from sqlalchemy import select, func, asc
from primeproperty.database.connection import AsyncSessionLocal
from primeproperty.models.user import User
from primeproperty.models.property import Property
from primeproperty.services.auth_service import user_to_dict
from primeproperty.utils.exceptions import NotFoundError

logger = logging.getLogger(__name__)


async def get_all_users() -> List[dict]:
    """Every user with the number of listings they own"""
    async with AsyncSessionLocal() as session:
        listing_counts = (
            select(Property.seller_id, func.count(Property.id).label("listing_count"))
            .group_by(Property.seller_id)
            .subquery()
        )
        stmt = (
            select(User, func.coalesce(listing_counts.c.listing_count, 0))
            .outerjoin(listing_counts, listing_counts.c.seller_id == User.id)
            .order_by(asc(User.id))
        )
        result = await session.execute(stmt)

        users = []
        for user, listing_count in result.all():
            data = user_to_dict(user)
            data["listing_count"] = int(listing_count or 0)
            users.append(data)
        return users


async def set_user_role_and_status(user_id: int, role: str, status: str) -> dict:
    """Replace role and status together"""
    async with AsyncSessionLocal() as session:
        result = await session.execute(select(User).where(User.id == user_id).with_for_update())
        user = result.scalar_one_or_none()
        if not user:
            raise NotFoundError("User not found")

        previous_status = user.status
        user.role = role
        user.status = status
        await session.commit()
        await session.refresh(user)

        if previous_status != status:
            logger.info(f"User {user_id} status changed {previous_status} -> {status}")

        count_result = await session.execute(
            select(func.count(Property.id)).where(Property.seller_id == user_id)
        )
        data = user_to_dict(user)
        data["listing_count"] = count_result.scalar_one() or 0
        return data


async def delete_user(user_id: int) -> bool:
    """Hard delete. Listings, messages and payments keep the orphaned user id."""
    async with AsyncSessionLocal() as session:
        result = await session.execute(select(User).where(User.id == user_id))
        user = result.scalar_one_or_none()
        if not user:
            raise NotFoundError("User not found")

        await session.delete(user)
        await session.commit()

        logger.info(f"User {user_id} deleted")
        return True
