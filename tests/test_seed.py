"""Tests for startup seeding."""
import pytest

from eccoserv.core import settings, verify_password
from eccoserv.database.seed import seed_database
from eccoserv.services import EntityKind, EntityStore, RelationshipResolver


@pytest.mark.asyncio
async def test_seed_is_idempotent(monkeypatch, session_factory):
    monkeypatch.setattr(settings, "SEED_SAMPLE_DATA", True)
    monkeypatch.setattr(settings, "ADMIN_PASSWORD", None)

    await seed_database(session_factory)
    await seed_database(session_factory)

    async with session_factory() as session:
        store = EntityStore(session)
        users = await store.list_all(EntityKind.USER)
        assert sorted(u.email for u in users) == sorted([
            settings.ADMIN_EMAIL, "joao@cliente.com", "carlos@tecnico.com"
        ])
        admin = await store.find_one(EntityKind.USER, "email", settings.ADMIN_EMAIL)
        assert verify_password("admin123", admin.hashed_password)

        resolver = RelationshipResolver(store)
        assert len(await resolver.wells_with_client()) == 2
        [invoice] = await resolver.invoices_with_details()
        assert invoice.model_dump(by_alias=True, mode="json")["totalAmount"] == "250.00"
        assert len(await resolver.scheduled_visits_by_client(invoice.client_id)) == 1


@pytest.mark.asyncio
async def test_seed_only_admin(monkeypatch, session_factory):
    monkeypatch.setattr(settings, "SEED_SAMPLE_DATA", False)
    monkeypatch.setattr(settings, "ADMIN_PASSWORD", "s3cret!")

    await seed_database(session_factory)

    async with session_factory() as session:
        users = await EntityStore(session).list_all(EntityKind.USER)
        assert [u.user_type for u in users] == ["admin"]
        assert verify_password("s3cret!", users[0].hashed_password)


@pytest.mark.asyncio
async def test_seed_disabled(monkeypatch, session_factory):
    monkeypatch.setattr(settings, "SEED_SAMPLE_DATA", False)
    monkeypatch.setattr(settings, "ADMIN_PASSWORD", None)

    await seed_database(session_factory)

    async with session_factory() as session:
        assert await EntityStore(session).list_all(EntityKind.USER) == []
