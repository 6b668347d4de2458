from typing import List
import logging
from sqlalchemy import select, delete, desc
from sqlalchemy.exc import IntegrityError
from primeproperty.database.connection import AsyncSessionLocal
from primeproperty.models.favorite import Favorite
from primeproperty.models.property import Property
from primeproperty.services.property_service import property_to_dict
from primeproperty.utils.exceptions import ConflictError, NotFoundError

logger = logging.getLogger(__name__)


async def get_favorites(user_id: int) -> List[dict]:
    """Listings the user has favorited, most recently saved first"""
    async with AsyncSessionLocal() as session:
        stmt = (
            select(Property)
            .join(Favorite, Favorite.property_id == Property.id)
            .where(Favorite.user_id == user_id)
            .order_by(desc(Favorite.created_at), desc(Property.id))
        )
        result = await session.execute(stmt)
        return [property_to_dict(prop) for prop in result.scalars().all()]


async def add_favorite(user_id: int, property_id: int) -> bool:
    async with AsyncSessionLocal() as session:
        prop_result = await session.execute(select(Property.id).where(Property.id == property_id))
        if prop_result.scalar_one_or_none() is None:
            raise NotFoundError("Property not found")

        existing = await session.execute(
            select(Favorite).where(
                Favorite.user_id == user_id,
                Favorite.property_id == property_id
            )
        )
        if existing.scalar_one_or_none():
            raise ConflictError("Already favorited")

        session.add(Favorite(user_id=user_id, property_id=property_id))
        try:
            await session.commit()
        except IntegrityError:
            # Lost a race with a concurrent insert of the same pair
            await session.rollback()
            raise ConflictError("Already favorited")

        return True


async def remove_favorite(user_id: int, property_id: int) -> bool:
    """Delete by pair; removing a favorite that is not there is not an error"""
    async with AsyncSessionLocal() as session:
        stmt = delete(Favorite).where(
            Favorite.user_id == user_id,
            Favorite.property_id == property_id
        )
        await session.execute(stmt)
        await session.commit()
        return True
