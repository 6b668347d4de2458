from typing import Optional, Dict
import logging
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from primeproperty.database.connection import AsyncSessionLocal
from primeproperty.models.user import User
from primeproperty.utils.exceptions import ConflictError
from primeproperty.utils.security import verify_password, get_password_hash

logger = logging.getLogger(__name__)


def user_to_dict(user: User) -> dict:
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "role": user.role,
        "status": user.status,
        "created_at": user.created_at.isoformat() if user.created_at else "",
    }


async def register_user(name: str, email: str, password: str, role: str = "buyer") -> dict:
    """Register a new buyer or seller"""
    async with AsyncSessionLocal() as session:
        stmt = select(User).where(User.email == email.lower())
        result = await session.execute(stmt)
        if result.scalar_one_or_none():
            raise ConflictError("Email already registered")

        new_user = User(
            name=name,
            email=email.lower(),
            hashed_password=get_password_hash(password),
            role=role or "buyer",
            status="active",
        )

        session.add(new_user)
        try:
            await session.commit()
        except IntegrityError:
            # Lost a race with a concurrent registration of the same email
            await session.rollback()
            raise ConflictError("Email already registered")
        await session.refresh(new_user)

        logger.info(f"Registered user {new_user.id} as {new_user.role}")
        return user_to_dict(new_user)


async def authenticate_user(email: str, password: str) -> Optional[dict]:
    """
    Check credentials and return the user record, or None when they do not match.
    Blocked users are returned too; the caller decides how to refuse them.
    """
    async with AsyncSessionLocal() as session:
        stmt = select(User).where(User.email == email.lower())
        result = await session.execute(stmt)
        user = result.scalar_one_or_none()

        if not user:
            return None

        if not verify_password(password, user.hashed_password):
            return None

        return user_to_dict(user)


async def get_user_by_id(user_id: int) -> Optional[dict]:
    """Get user by ID"""
    async with AsyncSessionLocal() as session:
        stmt = select(User).where(User.id == user_id)
        result = await session.execute(stmt)
        user = result.scalar_one_or_none()

        if not user:
            return None

        return user_to_dict(user)


async def update_profile(user_id: int, update_data: Dict) -> Optional[dict]:
    """Update the caller's own name and email"""
    async with AsyncSessionLocal() as session:
        stmt = select(User).where(User.id == user_id)
        result = await session.execute(stmt)
        user = result.scalar_one_or_none()

        if not user:
            return None

        # Check email uniqueness if email is being changed
        new_email = update_data.get("email")
        if new_email and new_email.lower() != user.email:
            email_stmt = select(User).where(
                User.email == new_email.lower(),
                User.id != user_id
            )
            email_result = await session.execute(email_stmt)
            if email_result.scalar_one_or_none():
                raise ConflictError("Email already in use")
            user.email = new_email.lower()

        if update_data.get("name"):
            user.name = update_data["name"]

        await session.commit()
        await session.refresh(user)

        return user_to_dict(user)


async def change_password(user_id: int, current_password: str, new_password: str) -> bool:
    """Change password after checking the current one"""
    async with AsyncSessionLocal() as session:
        stmt = select(User).where(User.id == user_id)
        result = await session.execute(stmt)
        user = result.scalar_one_or_none()

        if not user:
            return False

        if not verify_password(current_password, user.hashed_password):
            raise ValueError("Current password is incorrect")

        user.hashed_password = get_password_hash(new_password)
        await session.commit()

        return True


async def seed_admin(email: str, password: str, name: str) -> bool:
    """Create the first-boot admin account. Returns False when it already exists."""
    async with AsyncSessionLocal() as session:
        stmt = select(User).where(User.email == email.lower())
        result = await session.execute(stmt)
        if result.scalar_one_or_none():
            return False

        session.add(User(
            name=name,
            email=email.lower(),
            hashed_password=get_password_hash(password),
            role="admin",
            status="active",
        ))
        await session.commit()

        logger.info(f"Seeded admin account {email.lower()}")
        return True
