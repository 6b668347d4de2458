"""
Property Service - listing storage, public search and lifecycle transitions

Every mutating call loads the row, runs the authorization policy and
applies the change in the same session, so the ownership check and the
write commit together. Rows are read FOR UPDATE where the backend
supports row locks.
"""
from typing import Optional, List, Dict, Tuple
import logging
from sqlalchemy import select, and_, asc, desc
from primeproperty.database.connection import AsyncSessionLocal
from primeproperty.models.property import Property
from primeproperty.models.user import User
from primeproperty.services import listing_lifecycle
from primeproperty.services.payment_service import new_payment, payment_to_dict, PROMOTION
from primeproperty.utils.exceptions import NotFoundError
from primeproperty.utils.permissions import ensure_admin, ensure_owner_or_admin

logger = logging.getLogger(__name__)


def property_to_dict(prop: Property, seller_name: Optional[str] = None, seller_email: Optional[str] = None) -> dict:
    return {
        "id": prop.id,
        "seller_id": prop.seller_id,
        "title": prop.title,
        "description": prop.description,
        "price": float(prop.price) if prop.price is not None else 0.0,
        "location": prop.location,
        "type": prop.property_type,
        "status": prop.status,
        "images": list(prop.images or []),
        "details": prop.details,
        "contact_phone": prop.contact_phone,
        "contact_email": prop.contact_email,
        "is_approved": bool(prop.is_approved),
        "is_featured": bool(prop.is_featured),
        "seller_name": seller_name,
        "seller_email": seller_email,
        "created_at": prop.created_at.isoformat() if prop.created_at else "",
        "updated_at": prop.updated_at.isoformat() if prop.updated_at else "",
    }


async def _get_for_update(session, property_id: int) -> Property:
    stmt = select(Property).where(Property.id == property_id).with_for_update()
    result = await session.execute(stmt)
    prop = result.scalar_one_or_none()
    if not prop:
        raise NotFoundError("Property not found")
    return prop


async def search_properties(
    location: Optional[str] = None,
    property_type: Optional[str] = None,
    min_price: Optional[float] = None,
    max_price: Optional[float] = None,
    sort: Optional[str] = None,
    featured_only: bool = False,
) -> List[dict]:
    """
    Public search. Only approved listings are ever returned.
    Without a sort the rows come back in insertion order.
    """
    async with AsyncSessionLocal() as session:
        conditions = [Property.is_approved == True]  # noqa: E712

        if location:
            conditions.append(Property.location.ilike(f"%{location}%"))

        if property_type:
            conditions.append(Property.property_type == property_type)

        if min_price is not None:
            conditions.append(Property.price >= min_price)

        if max_price is not None:
            conditions.append(Property.price <= max_price)

        if featured_only:
            conditions.append(Property.is_featured == True)  # noqa: E712

        stmt = select(Property).where(and_(*conditions))

        if sort == "newest":
            stmt = stmt.order_by(desc(Property.created_at), desc(Property.id))
        elif sort == "price_asc":
            stmt = stmt.order_by(asc(Property.price), asc(Property.id))
        elif sort == "price_desc":
            stmt = stmt.order_by(desc(Property.price), asc(Property.id))
        elif sort:
            raise ValueError(f"Unknown sort order '{sort}'")
        else:
            stmt = stmt.order_by(asc(Property.id))

        result = await session.execute(stmt)
        return [property_to_dict(prop) for prop in result.scalars().all()]


async def get_property_by_id(property_id: int) -> Optional[dict]:
    """Single listing with its seller's name and email"""
    async with AsyncSessionLocal() as session:
        stmt = (
            select(Property, User.name, User.email)
            .outerjoin(User, User.id == Property.seller_id)
            .where(Property.id == property_id)
        )
        result = await session.execute(stmt)
        row = result.first()

        if not row:
            return None

        prop, seller_name, seller_email = row
        return property_to_dict(prop, seller_name=seller_name, seller_email=seller_email)


async def get_properties_by_seller(seller_id: int) -> List[dict]:
    """Seller dashboard: own listings in every state, latest first"""
    async with AsyncSessionLocal() as session:
        stmt = (
            select(Property)
            .where(Property.seller_id == seller_id)
            .order_by(desc(Property.created_at), desc(Property.id))
        )
        result = await session.execute(stmt)
        return [property_to_dict(prop) for prop in result.scalars().all()]


async def get_all_properties(pending_only: bool = False) -> List[dict]:
    """Admin view of every listing, approved or not"""
    async with AsyncSessionLocal() as session:
        stmt = (
            select(Property, User.name, User.email)
            .outerjoin(User, User.id == Property.seller_id)
            .order_by(desc(Property.created_at), desc(Property.id))
        )
        if pending_only:
            stmt = stmt.where(Property.is_approved == False)  # noqa: E712

        result = await session.execute(stmt)
        return [
            property_to_dict(prop, seller_name=seller_name, seller_email=seller_email)
            for prop, seller_name, seller_email in result.all()
        ]


async def create_property(actor: dict, property_data: Dict) -> dict:
    """Create a listing owned by the actor"""
    async with AsyncSessionLocal() as session:
        new_property = listing_lifecycle.new_listing(actor, property_data)

        session.add(new_property)
        await session.commit()
        await session.refresh(new_property)

        logger.info(
            f"User {actor['id']} created property {new_property.id} "
            f"(approved={new_property.is_approved})"
        )
        return property_to_dict(new_property)


async def update_property(
    property_id: int,
    actor: dict,
    update_data: Dict,
    reapprove_on_edit: bool = False
) -> dict:
    """Edit a listing as its owner or an admin"""
    async with AsyncSessionLocal() as session:
        prop = await _get_for_update(session, property_id)
        ensure_owner_or_admin(actor, prop.seller_id)

        was_approved = bool(prop.is_approved)
        state = listing_lifecycle.apply_edit(prop, actor, update_data, reapprove_on_edit=reapprove_on_edit)

        await session.commit()
        await session.refresh(prop)

        if was_approved and not state.is_approved:
            logger.info(f"Property {property_id} returned to moderation after edit by user {actor['id']}")
        return property_to_dict(prop)


async def delete_property(property_id: int, actor: dict) -> bool:
    """Hard delete. Favorites, messages, payments and reports keep their dangling ids."""
    async with AsyncSessionLocal() as session:
        prop = await _get_for_update(session, property_id)
        ensure_owner_or_admin(actor, prop.seller_id)

        await session.delete(prop)
        await session.commit()

        logger.info(f"Property {property_id} deleted by user {actor['id']}")
        return True


async def promote_property(property_id: int, actor: dict, amount: float) -> Tuple[dict, dict]:
    """Simulated paid featuring: charge, then flag. Charges again on every call."""
    async with AsyncSessionLocal() as session:
        prop = await _get_for_update(session, property_id)
        ensure_owner_or_admin(actor, prop.seller_id)

        payment = new_payment(actor["id"], amount, PROMOTION, property_id=prop.id)
        session.add(payment)
        listing_lifecycle.promote(prop)

        await session.commit()
        await session.refresh(prop)
        await session.refresh(payment)

        logger.info(f"Property {property_id} promoted by user {actor['id']} (payment {payment.id})")
        return property_to_dict(prop), payment_to_dict(payment, property_title=prop.title)


async def approve_property(property_id: int, actor: dict) -> dict:
    async with AsyncSessionLocal() as session:
        ensure_admin(actor)
        prop = await _get_for_update(session, property_id)

        listing_lifecycle.approve(prop)
        await session.commit()
        await session.refresh(prop)

        logger.info(f"Property {property_id} approved by admin {actor['id']}")
        return property_to_dict(prop)


async def set_property_featured(property_id: int, actor: dict, is_featured: bool) -> dict:
    """Admin override of the featured flag, no payment involved"""
    async with AsyncSessionLocal() as session:
        ensure_admin(actor)
        prop = await _get_for_update(session, property_id)

        listing_lifecycle.set_featured(prop, is_featured)
        await session.commit()
        await session.refresh(prop)

        logger.info(f"Property {property_id} featured={prop.is_featured} by admin {actor['id']}")
        return property_to_dict(prop)
