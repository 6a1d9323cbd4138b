"""Tests for the admin endpoints."""
from datetime import datetime
from decimal import Decimal

import pytest

from eccoserv.core import create_access_token
from eccoserv.services import EntityKind


@pytest.fixture
async def visit(store, graph):
    row = await store.create(EntityKind.VISIT, {
        "well_id": graph.well.id,
        "provider_id": graph.provider.id,
        "visit_date": datetime.utcnow(),
        "service_type": "limpeza",
        "visit_type": "unique",
        "observations": "ok",
        "status": "completed",
    })
    await store.create(EntityKind.MATERIAL_USAGE, {
        "visit_id": row.id,
        "material_type": "Pastilha de Cloro",
        "quantity_grams": Decimal("1500"),
    })
    await store.commit()
    return row


@pytest.mark.asyncio
async def test_admin_routes_require_admin(client, graph):
    response = await client.get("/api/admin/stats")
    assert response.status_code in (401, 403)

    token = create_access_token({"sub": graph.client_user.id})
    response = await client.get("/api/admin/stats", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_stats(client, graph, visit, admin_headers):
    response = await client.get("/api/admin/stats", headers=admin_headers)

    assert response.status_code == 200
    stats = response.json()
    assert stats["totalClients"] == 1
    assert stats["totalProviders"] == 1
    assert stats["totalWells"] == 1
    assert stats["monthlyVisits"] == 1
    assert stats["outstandingAmount"] == "0.00"


@pytest.mark.asyncio
async def test_listings(client, graph, visit, admin_headers):
    for path, key in (("clients", "clients"), ("providers", "providers"), ("wells", "wells"), ("visits", "visits")):
        response = await client.get(f"/api/admin/{path}", headers=admin_headers)
        assert response.status_code == 200
        assert len(response.json()[key]) == 1


@pytest.mark.asyncio
@pytest.mark.parametrize("period", ["week", "month"])
async def test_material_consumption(client, visit, admin_headers, period):
    response = await client.get(f"/api/admin/materials/consumption?period={period}", headers=admin_headers)

    assert response.status_code == 200
    report = response.json()
    assert report["period"] == period
    assert report["startDate"] < report["endDate"]
    [row] = report["consumption"]
    assert row["materialType"] == "Pastilha de Cloro"
    assert row["totalGrams"] == 1500.0
    assert row["totalKilograms"] == 1.5
    assert row["visitCount"] == 1


@pytest.mark.asyncio
async def test_material_consumption_rejects_unknown_period(client, admin_headers):
    response = await client.get("/api/admin/materials/consumption?period=year", headers=admin_headers)
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_reset_password_issues_temporary_password(client, graph, admin_headers):
    response = await client.post(f"/api/admin/clients/{graph.client.id}/reset-password", headers=admin_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["email"] == "joao@cliente.com"
    temporary = body["temporaryPassword"]
    assert len(temporary) >= 8

    response = await client.post("/api/auth/login", json={
        "email": "joao@cliente.com", "password": temporary, "userType": "client"
    })
    assert response.status_code == 200

    response = await client.post("/api/admin/providers/missing/reset-password", headers=admin_headers)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_provider_refused_while_referenced(client, graph, visit, admin_headers):
    response = await client.delete(f"/api/admin/providers/{graph.provider.id}", headers=admin_headers)
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_delete_provider_removes_user(client, graph, admin_headers):
    provider_user_id = graph.provider_user.id
    response = await client.delete(f"/api/admin/providers/{graph.provider.id}", headers=admin_headers)
    assert response.status_code == 200

    response = await client.get(f"/api/auth/profile/{provider_user_id}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_well(client, graph, admin_headers):
    response = await client.delete(f"/api/admin/wells/{graph.well.id}", headers=admin_headers)
    assert response.status_code == 200

    response = await client.get("/api/wells")
    assert response.json()["wells"] == []


@pytest.mark.asyncio
async def test_delete_user_refused_while_profile_exists(client, graph, admin_headers):
    response = await client.delete(f"/api/admin/users/{graph.client_user.id}", headers=admin_headers)
    assert response.status_code == 400
