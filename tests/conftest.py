"""
Test configuration and fixtures.

Provides:
- In-memory SQLite per test (StaticPool), schema created with init_db
- EntityStore bound to a fresh session
- A small sample graph (client, provider, well) built through the store
- HTTPX AsyncClient against the FastAPI app with get_db overridden
"""
import os
import tempfile
from dataclasses import dataclass
from typing import AsyncGenerator

# Precisa estar no ambiente antes de importar o app
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="eccoserv-uploads-")
os.environ["SEED_SAMPLE_DATA"] = "false"

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from eccoserv.main import app
from eccoserv.core import create_access_token, get_password_hash
from eccoserv.database import get_db, init_db
from eccoserv.models import UserType
from eccoserv.services import EntityKind, EntityStore


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await init_db(bind=engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest.fixture
async def session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as s:
        yield s


@pytest.fixture
def store(session) -> EntityStore:
    return EntityStore(session)


# =============================================================================
# Sample data
# =============================================================================

@dataclass
class Graph:
    """Client + provider + well, all linked"""
    client_user: object
    client: object
    provider_user: object
    provider: object
    well: object


async def make_user(store: EntityStore, email: str, name: str, user_type: UserType, password: str = "secret123"):
    return await store.create(EntityKind.USER, {
        "email": email,
        "hashed_password": get_password_hash(password),
        "name": name,
        "user_type": user_type.value,
    })


@pytest.fixture
async def graph(store) -> Graph:
    client_user = await make_user(store, "joao@cliente.com", "João Silva", UserType.CLIENT)
    client = await store.create(EntityKind.CLIENT, {
        "user_id": client_user.id,
        "address": "Rua das Flores, 123",
        "phone": "(11) 99999-9999",
    })
    provider_user = await make_user(store, "carlos@tecnico.com", "Carlos Santos", UserType.PROVIDER)
    provider = await store.create(EntityKind.PROVIDER, {
        "user_id": provider_user.id,
        "specialties": ["Limpeza de poços"],
        "phone": "(11) 88888-8888",
    })
    well = await store.create(EntityKind.WELL, {
        "client_id": client.id,
        "name": "Poço Principal",
        "type": "residential",
        "location": "Quintal",
        "status": "active",
    })
    await store.commit()
    return Graph(client_user, client, provider_user, provider, well)


# =============================================================================
# Auth Fixtures
# =============================================================================

@pytest.fixture
async def admin_user(store):
    admin = await make_user(store, "admin@eccoserv.com", "Admin Sistema", UserType.ADMIN, "admin123")
    await store.commit()
    return admin


@pytest.fixture
def admin_headers(admin_user) -> dict:
    token = create_access_token({"sub": admin_user.id, "email": admin_user.email})
    return {"Authorization": f"Bearer {token}"}


# =============================================================================
# Client Fixtures
# =============================================================================

@pytest.fixture
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """AsyncClient against the app, each request with its own session"""
    async def override_get_db():
        async with session_factory() as db:
            try:
                yield db
                await db.commit()
            except Exception:
                await db.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as c:
        yield c

    app.dependency_overrides.clear()
