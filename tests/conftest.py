"""
Test Configuration and Fixtures
Provides shared test setup for all test cases
"""
import sys
import uuid
from unittest.mock import patch

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from primeproperty.main import app
from primeproperty.database.connection import Base
from primeproperty.models import User
import primeproperty.models  # noqa: F401
from primeproperty.utils.security import get_password_hash, create_user_token

# Test database URL (use in-memory SQLite for testing)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

TEST_PASSWORD = "StrongPass123!"
# bcrypt is slow on purpose, hash once for every fixture user
TEST_PASSWORD_HASH = get_password_hash(TEST_PASSWORD)

test_engine = create_async_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestSessionLocal = async_sessionmaker(
    test_engine, class_=AsyncSession, expire_on_commit=False
)

# Every module that opens its own sessions
SESSION_MODULES = [
    'primeproperty.database.connection',
    'primeproperty.services.auth_service',
    'primeproperty.services.property_service',
    'primeproperty.services.payment_service',
    'primeproperty.services.favorite_service',
    'primeproperty.services.message_service',
    'primeproperty.services.report_service',
    'primeproperty.services.announcement_service',
    'primeproperty.services.admin_service',
    'primeproperty.services.admin_dashboard_service',
]


@pytest_asyncio.fixture(scope="function")
async def db_session():
    """Create a fresh database session for each test"""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with TestSessionLocal() as session:
        yield session

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture(scope="function")
async def client(db_session):
    """Create test HTTP client wired to the test session"""

    class TestSessionContext:
        def __init__(self, session):
            self.session = session

        async def __aenter__(self):
            return self.session

        async def __aexit__(self, *args):
            pass

    def make_test_session_local(session):
        return lambda: TestSessionContext(session)

    patches = []
    for module_name in SESSION_MODULES:
        module = sys.modules.get(module_name)
        if module is not None and hasattr(module, 'AsyncSessionLocal'):
            patches.append(patch.object(module, 'AsyncSessionLocal', make_test_session_local(db_session)))

    for p in patches:
        p.start()

    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            yield ac
    finally:
        for p in patches:
            p.stop()


@pytest_asyncio.fixture(scope="function")
async def make_user(db_session):
    """Factory that stores a user and returns (user, auth headers)"""

    async def _make_user(role: str = "buyer", status: str = "active", name: str = None, email: str = None):
        user = User(
            name=name or f"Test {role.title()}",
            email=(email or f"{role}_{uuid.uuid4().hex[:10]}@example.com").lower(),
            hashed_password=TEST_PASSWORD_HASH,
            role=role,
            status=status,
        )
        db_session.add(user)
        await db_session.commit()
        await db_session.refresh(user)

        token = create_user_token({
            "id": user.id,
            "name": user.name,
            "email": user.email,
            "role": user.role,
        })
        return user, {"Authorization": f"Bearer {token}"}

    return _make_user


@pytest_asyncio.fixture(scope="function")
async def authenticated_seller(make_user):
    """A seller account and its auth headers"""
    return await make_user(role="seller", name="Test Seller")


@pytest_asyncio.fixture(scope="function")
async def authenticated_buyer(make_user):
    """A buyer account and its auth headers"""
    return await make_user(role="buyer", name="Test Buyer")


@pytest_asyncio.fixture(scope="function")
async def authenticated_admin(make_user):
    """An admin account and its auth headers"""
    return await make_user(role="admin", name="System Administrator")


@pytest.fixture
def listing_payload():
    """Factory for a valid create-listing body"""

    def _payload(**overrides):
        data = {
            "title": "Family house with garden",
            "description": "Three bedrooms close to the park",
            "price": 450000,
            "location": "Austin, TX",
            "type": "house",
            "status": "for sale",
            "images": ["https://img.example.com/1.jpg", "https://img.example.com/2.jpg"],
        }
        data.update(overrides)
        return data

    return _payload
