"""Tests for the wells routes and the client views built on them."""
from datetime import datetime

import pytest

from eccoserv.services import EntityKind


async def add_visit(store, graph, well_id, visit_date):
    visit = await store.create(EntityKind.VISIT, {
        "well_id": well_id,
        "provider_id": graph.provider.id,
        "visit_date": visit_date,
        "service_type": "limpeza",
        "visit_type": "unique",
        "status": "completed",
        "photos": [],
        "documents": [],
    })
    await store.commit()
    return visit


# =============================================================================
# POST /api/wells
# =============================================================================

@pytest.mark.asyncio
async def test_create_well(client, graph):
    response = await client.post("/api/wells", json={
        "clientId": graph.client.id,
        "name": "Poço Novo",
        "type": "agricultural",
        "location": "Pasto norte",
    })
    assert response.status_code == 201
    well = response.json()["well"]
    assert well["clientId"] == graph.client.id
    assert well["status"] == "active"

    response = await client.get(f"/api/clients/{graph.client.id}/wells")
    assert response.status_code == 200
    names = {w["name"] for w in response.json()["wells"]}
    assert names == {"Poço Principal", "Poço Novo"}


@pytest.mark.asyncio
async def test_create_well_for_unknown_client(client, graph):
    response = await client.post("/api/wells", json={
        "clientId": "nao-existe",
        "name": "Poço Fantasma",
        "type": "residential",
    })
    assert response.status_code == 404
    assert response.json()["message"] == "Client not found"

    response = await client.get("/api/wells")
    assert [w["name"] for w in response.json()["wells"]] == ["Poço Principal"]


# =============================================================================
# PATCH /api/wells/{id}/status
# =============================================================================

@pytest.mark.asyncio
async def test_update_well_status(client, graph):
    response = await client.patch(f"/api/wells/{graph.well.id}/status", json={"status": "maintenance"})
    assert response.status_code == 200
    assert response.json()["well"]["status"] == "maintenance"

    response = await client.get("/api/wells")
    [well] = response.json()["wells"]
    assert well["status"] == "maintenance"


@pytest.mark.asyncio
async def test_update_well_status_rejects_unknown_value(client, graph):
    response = await client.patch(f"/api/wells/{graph.well.id}/status", json={"status": "broken"})
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid request data"

    response = await client.get("/api/wells")
    [well] = response.json()["wells"]
    assert well["status"] == "active"


@pytest.mark.asyncio
async def test_update_status_of_unknown_well(client, graph):
    response = await client.patch("/api/wells/nao-existe/status", json={"status": "inactive"})
    assert response.status_code == 404


# =============================================================================
# Visit history views
# =============================================================================

@pytest.mark.asyncio
async def test_well_visits_most_recent_first(client, store, graph):
    older = await add_visit(store, graph, graph.well.id, datetime(2025, 1, 10))
    newer = await add_visit(store, graph, graph.well.id, datetime(2025, 3, 10))

    response = await client.get(f"/api/wells/{graph.well.id}/visits")
    assert response.status_code == 200
    assert [v["id"] for v in response.json()["visits"]] == [newer.id, older.id]

    response = await client.get("/api/wells/nao-existe/visits")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_client_visits_cover_every_well(client, store, graph):
    second_well = await store.create(EntityKind.WELL, {
        "client_id": graph.client.id,
        "name": "Poço do Fundo",
        "type": "residential",
        "status": "active",
    })
    first = await add_visit(store, graph, graph.well.id, datetime(2025, 2, 1))
    second = await add_visit(store, graph, second_well.id, datetime(2025, 5, 1))

    response = await client.get(f"/api/clients/{graph.client.id}/visits")
    assert response.status_code == 200
    visits = response.json()["visits"]
    assert [v["id"] for v in visits] == [second.id, first.id]
    assert visits[0]["well"]["name"] == "Poço do Fundo"
    assert visits[1]["provider"]["user"]["name"] == "Carlos Santos"

    response = await client.get("/api/clients/nao-existe/visits")
    assert response.status_code == 404
