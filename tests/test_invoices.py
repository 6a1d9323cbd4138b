"""Tests for invoice creation, totals and status transitions."""
from datetime import datetime
from decimal import Decimal

import pytest

from eccoserv.services import EntityKind, InvoiceService, compute_amounts


@pytest.fixture
async def visit(store, graph):
    row = await store.create(EntityKind.VISIT, {
        "well_id": graph.well.id,
        "provider_id": graph.provider.id,
        "visit_date": datetime(2025, 5, 1, 10, 0),
        "service_type": "limpeza",
        "visit_type": "unique",
        "observations": "ok",
        "status": "completed",
    })
    await store.commit()
    return row


def invoice_payload(visit, **overrides):
    payload = {
        "visitId": visit.id,
        "description": "Limpeza do poço",
        "serviceValue": "100.00",
        "materialCosts": "50.00",
        "isFree": False,
        "dueDate": "2025-06-01T00:00:00",
    }
    payload.update(overrides)
    return payload


async def create_invoice(client, visit, **overrides):
    response = await client.post("/api/invoices", json=invoice_payload(visit, **overrides))
    assert response.status_code == 201, response.text
    return response.json()["invoice"]


def test_compute_amounts_uses_exact_decimals():
    assert compute_amounts("0.10", "0.20", False) == (
        Decimal("0.10"), Decimal("0.20"), Decimal("0.30"), False
    )
    assert compute_amounts("10.005", "0", False)[2] == Decimal("10.01")
    assert compute_amounts("0", "0.00", False) == (Decimal("0.00"),) * 3 + (True,)


@pytest.mark.asyncio
async def test_create_invoice_totals(client, graph, visit):
    invoice = await create_invoice(client, visit)

    assert invoice["totalAmount"] == "150.00"
    assert invoice["serviceValue"] == "100.00"
    assert invoice["materialCosts"] == "50.00"
    assert invoice["status"] == "pending"
    assert invoice["clientId"] == graph.client.id
    assert invoice["providerId"] == graph.provider.id
    assert invoice["invoiceNumber"].startswith("INV-")


@pytest.mark.asyncio
async def test_free_invoice_zeroes_amounts(client, visit):
    invoice = await create_invoice(client, visit, isFree=True)

    assert invoice["isFree"] is True
    assert invoice["serviceValue"] == invoice["materialCosts"] == invoice["totalAmount"] == "0.00"


@pytest.mark.asyncio
async def test_zero_valued_invoice_is_free(client, visit):
    invoice = await create_invoice(client, visit, serviceValue="0", materialCosts="0")
    assert invoice["isFree"] is True


@pytest.mark.asyncio
async def test_negative_values_are_rejected(client, visit):
    response = await client.post("/api/invoices", json=invoice_payload(visit, serviceValue="-1.00"))
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_invoice_for_unknown_visit(client, graph):
    response = await client.post("/api/invoices", json={
        "visitId": "missing",
        "description": "x",
        "serviceValue": "10.00",
        "dueDate": "2025-06-01T00:00:00",
    })
    assert response.status_code == 404
    assert response.json()["message"] == "Visit not found"


@pytest.mark.asyncio
async def test_second_invoice_for_visit_is_rejected(client, visit):
    await create_invoice(client, visit)

    response = await client.post("/api/invoices", json=invoice_payload(visit))
    assert response.status_code == 400
    assert response.json()["message"] == "Visit already has an invoice"


@pytest.mark.asyncio
async def test_paid_without_method_leaves_invoice_unchanged(client, visit):
    invoice = await create_invoice(client, visit)

    response = await client.patch(f"/api/invoices/{invoice['id']}/paid", json={})
    assert response.status_code == 400
    assert response.json()["message"] == "Payment method is required"

    response = await client.get(f"/api/invoices/{invoice['id']}")
    assert response.json()["invoice"]["status"] == "pending"
    assert response.json()["invoice"]["paidDate"] is None


@pytest.mark.asyncio
async def test_send_then_pay(client, visit):
    invoice = await create_invoice(client, visit)

    response = await client.patch(f"/api/invoices/{invoice['id']}/send")
    assert response.status_code == 200
    sent = response.json()["invoice"]
    assert sent["status"] == "sent"
    assert sent["sentAt"] is not None

    response = await client.patch(f"/api/invoices/{invoice['id']}/send")
    assert response.status_code == 400

    response = await client.patch(f"/api/invoices/{invoice['id']}/paid", json={"paymentMethod": "pix"})
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Invoice marked as paid"
    assert body["invoice"]["status"] == "paid"
    assert body["invoice"]["paymentMethod"] == "pix"
    assert body["invoice"]["paidDate"] is not None


@pytest.mark.asyncio
async def test_pending_invoice_cannot_be_paid(client, visit):
    invoice = await create_invoice(client, visit)

    response = await client.patch(f"/api/invoices/{invoice['id']}/paid", json={"paymentMethod": "cash"})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_free_form_status_patch(client, visit):
    invoice = await create_invoice(client, visit)

    response = await client.patch(f"/api/invoices/{invoice['id']}/status", json={"status": "overdue"})
    assert response.status_code == 200
    assert response.json()["invoice"]["status"] == "overdue"

    response = await client.patch(f"/api/invoices/{invoice['id']}/status", json={"status": "lost"})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_invoice_listings(client, graph, visit):
    invoice = await create_invoice(client, visit)

    for path in ("/api/invoices", f"/api/clients/{graph.client.id}/invoices", f"/api/providers/{graph.provider.id}/invoices"):
        response = await client.get(path)
        assert response.status_code == 200
        [listed] = response.json()["invoices"]
        assert listed["id"] == invoice["id"]
        assert listed["visit"]["well"]["name"] == "Poço Principal"


@pytest.mark.asyncio
async def test_invoice_numbers_are_unique_per_instant(store, graph, visit):
    service = InvoiceService(store)
    now = datetime(2025, 5, 1, 12, 0, 0)
    first = await service.next_invoice_number(now)
    await store.create(EntityKind.INVOICE, {
        "visit_id": visit.id,
        "client_id": graph.client.id,
        "provider_id": graph.provider.id,
        "invoice_number": first,
        "description": "x",
        "service_value": Decimal("1.00"),
        "material_costs": Decimal("0.00"),
        "total_amount": Decimal("1.00"),
        "status": "pending",
        "due_date": now,
    })

    assert await service.next_invoice_number(now) == f"{first}-2"
