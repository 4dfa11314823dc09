import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ryunix.db.database import build_engine, get_session, init_db
from ryunix.db.operations import create_user
from ryunix.main import app
from ryunix.models.catalog import CatalogItem, Rating, price_for_rating
from ryunix.models.db import Base
from ryunix.services.catalog_overlay import CatalogOverlay
from ryunix.services.registry import ServiceRegistry, build_services


def make_item(
    name: str, rating: Rating = Rating.C, image_url: str | None = None
) -> CatalogItem:
    price = price_for_rating(rating)
    return CatalogItem(name=name, rating=rating, price=price, image_url=image_url)


@pytest.fixture
async def async_engine():
    """Create an in-memory SQLite engine for testing."""
    engine = build_engine("sqlite+aiosqlite:///:memory:")
    await init_db(engine)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(async_engine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test engine, as the services receive it."""
    return async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(session_factory) -> AsyncSession:
    """Provide a database session for tests."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def base_archetypes() -> list[CatalogItem]:
    return [
        make_item("Blue-Eyes", Rating.C, "https://img/blue-eyes.jpg"),
        make_item("Dark Magician", Rating.B, "https://img/dark-magician.jpg"),
        make_item("Sky Striker", Rating.S, "https://img/sky-striker.jpg"),
        make_item("Pot of Greed", Rating.F),
    ]


@pytest.fixture
def base_staples() -> list[CatalogItem]:
    return [
        make_item("Ash Blossom & Joyous Spring", Rating.S),
        make_item("Called by the Grave", Rating.A),
        make_item("Forbidden Droplet", Rating.B),
    ]


@pytest.fixture
def overlay(base_archetypes, base_staples) -> CatalogOverlay:
    return CatalogOverlay(base_archetypes, base_staples)


@pytest.fixture
async def services(session_factory, overlay) -> ServiceRegistry:
    """Service graph on the test store. The debounce is long so only explicit flushes write."""
    services = build_services(session_factory, overlay=overlay, debounce_seconds=60)
    yield services
    await services.stop()


@pytest.fixture
async def client(services: ServiceRegistry, session_factory):
    """Provide an async test client wired to the test services and store."""

    async def override_get_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session] = override_get_session
    app.state.services = services

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def make_user(session_factory):
    """Create a committed user and return its id."""

    async def _make_user(username: str = "duelist", coin: int = 0) -> str:
        async with session_factory() as session:
            user = await create_user(session, username, coin=coin)
            await session.commit()
            return user.id

    return _make_user
