"""Tests for EntityStore."""
from datetime import datetime

import pytest

from eccoserv.services import EntityKind


@pytest.mark.asyncio
async def test_create_assigns_id_and_created_at(store, graph):
    assert graph.well.id
    assert isinstance(graph.well.created_at, datetime)


@pytest.mark.asyncio
async def test_get_by_id_returns_none_for_unknown_or_empty(store, graph):
    assert await store.get_by_id(EntityKind.WELL, graph.well.id) is graph.well
    assert await store.get_by_id(EntityKind.WELL, "does-not-exist") is None
    assert await store.get_by_id(EntityKind.WELL, None) is None
    assert await store.get_by_id(EntityKind.WELL, "") is None


@pytest.mark.asyncio
async def test_get_many_skips_missing_ids(store, graph):
    found = await store.get_many(EntityKind.USER, [graph.client_user.id, "nope", None])
    assert list(found) == [graph.client_user.id]


@pytest.mark.asyncio
async def test_get_by_foreign_key_keeps_insertion_order(store, graph):
    second = await store.create(EntityKind.WELL, {
        "client_id": graph.client.id,
        "name": "Poço da Horta",
        "type": "agricultural",
        "created_at": datetime(2099, 1, 1),
    })
    wells = await store.get_by_foreign_key(EntityKind.WELL, "client_id", graph.client.id)
    assert [w.id for w in wells] == [graph.well.id, second.id]


@pytest.mark.asyncio
async def test_get_by_foreign_key_rejects_unknown_field(store, graph):
    with pytest.raises(ValueError):
        await store.get_by_foreign_key(EntityKind.WELL, "owner", graph.client.id)


@pytest.mark.asyncio
async def test_list_all_bounds_are_inclusive(store, graph):
    stamps = [datetime(2025, 1, 1), datetime(2025, 1, 15), datetime(2025, 2, 1)]
    for i, stamp in enumerate(stamps):
        await store.create(EntityKind.WELL, {
            "client_id": graph.client.id,
            "name": f"Poço {i}",
            "type": "residential",
            "created_at": stamp,
        })

    rows = await store.list_all(
        EntityKind.WELL,
        created_from=datetime(2025, 1, 1),
        created_to=datetime(2025, 1, 15),
    )
    assert [r.created_at for r in rows] == stamps[:2]


@pytest.mark.asyncio
async def test_patch_fields_merges_and_protects_immutable(store, graph):
    well = await store.patch_fields(EntityKind.WELL, graph.well.id, {"status": "maintenance"})
    assert well.status == "maintenance"
    assert well.name == "Poço Principal"

    with pytest.raises(ValueError):
        await store.patch_fields(EntityKind.WELL, graph.well.id, {"id": "other"})
    with pytest.raises(ValueError):
        await store.patch_fields(EntityKind.WELL, graph.well.id, {"depth": 10})


@pytest.mark.asyncio
async def test_patch_fields_unknown_id_is_silent(store, graph):
    assert await store.patch_fields(EntityKind.WELL, "missing", {"status": "inactive"}) is None


@pytest.mark.asyncio
async def test_delete(store, graph):
    extra = await store.create(EntityKind.USER, {
        "email": "temp@eccoserv.com",
        "hashed_password": "x",
        "name": "Temp",
        "user_type": "client",
    })
    assert await store.delete(EntityKind.USER, extra.id) is True
    assert await store.delete(EntityKind.USER, extra.id) is False
    assert await store.get_by_id(EntityKind.USER, extra.id) is None
