"""Shared pytest fixtures: in-memory database, seeded tenants, API client."""
from __future__ import annotations

import os

# Must be set before any storefront module reads the settings
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("CART_STORAGE_BACKEND", "memory")
os.environ.setdefault("ENV_MODE", "development")

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from storefront.cart import CartStore
from storefront.database import get_db, init_db
from storefront.schemas import SeedDocument
from storefront.services.cart_storage import MemoryCartStorage
from storefront.services.seeding import seed_tenant


def make_seed_payload(slug: str = "la-cantina", name: str = "La Cantina") -> dict:
    """Small menu with ties in sort order and an inactive product."""
    return {
        "tenant": {
            "name": name,
            "slug": slug,
            "branding": {"primaryColor": "#ff0000"},
            "settings": {"currency": "EUR"},
        },
        "store": {"name": f"{name} Centro", "address": "Calle Mayor 1", "city": "Madrid", "postalCode": "28001"},
        "modifierGroups": [
            {
                "name": "Pan",
                "slug": "pan",
                "required": True,
                "minSelect": 1,
                "maxSelect": 1,
                "sortOrder": 1,
                "options": [{"name": "Tradicional"}, {"name": "Brioche", "priceCents": 50}],
            },
            {
                "name": "Guarnición",
                "slug": "guarnicion",
                "required": True,
                "minSelect": 1,
                "maxSelect": 1,
                "sortOrder": 2,
                "options": [
                    {"name": "Patatas fritas (incluido)", "priceCents": 0},
                    {"name": "Boniato", "priceCents": 120},
                ],
            },
        ],
        "categories": [
            {
                "name": "Postres",
                "slug": "postres",
                "sortOrder": 2,
                "products": [
                    {"name": "Tarta de queso", "slug": "tarta-queso", "priceCents": 550},
                ],
            },
            {
                "name": "Bebidas",
                "slug": "bebidas",
                "sortOrder": 1,
                "products": [
                    {"name": "Refresco", "slug": "refresco", "priceCents": 280},
                    {"name": "Agua", "slug": "agua", "priceCents": 200},
                    {"name": "Limonada", "slug": "limonada", "priceCents": 350, "isActive": False},
                ],
            },
            {
                "name": "Aperitivos",
                "slug": "aperitivos",
                "sortOrder": 1,
                "isFeatured": True,
                "products": [
                    {"name": "Nachos", "slug": "nachos", "description": "Con guacamole.", "priceCents": 750},
                    {"name": "Croquetas", "slug": "croquetas", "priceCents": 650},
                ],
            },
        ],
    }


@pytest.fixture
def seed_payload() -> dict:
    return make_seed_payload()


@pytest.fixture
def seed_document(seed_payload) -> SeedDocument:
    return SeedDocument.model_validate(seed_payload)


@pytest_asyncio.fixture
async def db_engine():
    """Fresh in-memory SQLite database per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await init_db(engine)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest_asyncio.fixture
async def session_maker(db_engine):
    return async_sessionmaker(bind=db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def seeded_tenant(session_maker, seed_document):
    async with session_maker() as session:
        return await seed_tenant(session, seed_document)


@pytest_asyncio.fixture
async def api_client(session_maker):
    """HTTP client bound to the app with the test database."""
    from storefront.main import app

    async def override_get_db():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    transport = httpx.ASGITransport(app=app)
    try:
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def storage() -> MemoryCartStorage:
    return MemoryCartStorage()


@pytest.fixture
def cart(storage) -> CartStore:
    return CartStore(storage=storage, key="test-cart")
