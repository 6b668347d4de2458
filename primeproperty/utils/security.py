from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt

from primeproperty.config import settings


def get_password_hash(password: str) -> str:
    # bcrypt stores algorithm + cost + salt in the resulting hash string.
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=12)).decode("utf-8")


def verify_password(password: str, hashed_password: str) -> bool:
    if not hashed_password:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        # Invalid hash format
        return False


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Sign a token for the given claims, adding iat and exp"""
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode = data.copy()
    to_encode.update({"iat": now, "exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def create_user_token(user: dict) -> str:
    """Issue the identity token for a user record"""
    return create_access_token(
        data={
            "sub": str(user["id"]),
            "name": user["name"],
            "email": user["email"],
            "role": user["role"],
        }
    )


def decode_access_token(token: str) -> Optional[dict]:
    """Return the token claims, or None when the token is malformed, forged or expired"""
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except jwt.PyJWTError:
        return None
