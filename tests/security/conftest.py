"""
Security test fixtures.

These fixtures enable testing multi-tenant isolation by creating multiple
users and their links, and clients authenticated as a specific user.
"""
from collections.abc import AsyncGenerator, Callable, Generator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from models.link import Link
from models.user import User


@pytest.fixture
async def user_a(db_session: AsyncSession) -> User:
    """Create the first test user (User A)."""
    user = User(auth0_id="auth0|user-a", email="user-a@test.com")
    db_session.add(user)
    await db_session.flush()
    await db_session.refresh(user)
    return user


@pytest.fixture
async def user_b(db_session: AsyncSession) -> User:
    """Create a second test user (User B)."""
    user = User(auth0_id="auth0|user-b", email="user-b@test.com")
    db_session.add(user)
    await db_session.flush()
    await db_session.refresh(user)
    return user


async def _create_links(
    db_session: AsyncSession, user: User, title: str, extra: int,
) -> Link:
    """Create one named link for `user` plus `extra` filler links."""
    link = Link(
        user_id=user.id,
        url=f"https://{user.auth0_id.split('|')[1]}.example.com/",
        title=title,
        description="This should only be accessible to its owner",
        position=1,
    )
    db_session.add(link)
    db_session.add_all(
        Link(
            user_id=user.id,
            url=f"https://example.com/{user.id}/{i}",
            title=f"Filler {i}",
            position=i + 2,
        )
        for i in range(extra)
    )
    await db_session.flush()
    await db_session.refresh(link)
    return link


@pytest.fixture
async def user_a_link(db_session: AsyncSession, user_a: User) -> Link:
    """Create a link belonging to User A (plus 3 more)."""
    return await _create_links(db_session, user_a, "Link of User A", extra=3)


@pytest.fixture
async def user_b_link(db_session: AsyncSession, user_b: User) -> Link:
    """Create a link belonging to User B (plus 2 more)."""
    return await _create_links(db_session, user_b, "Link of User B", extra=2)


@pytest.fixture
def client_factory(
    db_session: AsyncSession,
) -> Generator[Callable[[User], AsyncClient]]:
    """
    Factory fixture that creates test clients authenticated as a specific user.

    The current-user override is global to the app, so use one client at a time:

        client = client_factory(user_a)
        response = await client.get("/links/")
    """
    from core.config import get_settings

    get_settings.cache_clear()

    from api.main import app
    from core.auth import get_current_user
    from db.session import get_async_session

    async def override_get_async_session() -> AsyncGenerator[AsyncSession]:
        yield db_session

    app.dependency_overrides[get_async_session] = override_get_async_session

    def create_client(user: User) -> AsyncClient:
        async def override_get_current_user() -> User:
            return user

        app.dependency_overrides[get_current_user] = override_get_current_user
        return AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        )

    yield create_client

    app.dependency_overrides.clear()


@pytest.fixture
async def client_as_user_a(
    client_factory: Callable[[User], AsyncClient],
    user_a: User,
) -> AsyncGenerator[AsyncClient]:
    """Create a test client authenticated as User A."""
    async with client_factory(user_a) as test_client:
        yield test_client
