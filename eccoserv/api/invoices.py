"""
EccoServ - Invoices API
"""
from fastapi import APIRouter, Depends, status

from eccoserv.schemas import (
    InvoiceCreate,
    InvoiceOut,
    InvoicePaidRequest,
    InvoiceStatusUpdate
)
from eccoserv.services import RelationshipResolver, InvoiceService
from .deps import get_resolver, get_invoice_service

router = APIRouter(prefix="/invoices", tags=["Invoices"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_invoice(
    payload: InvoiceCreate,
    invoices: InvoiceService = Depends(get_invoice_service)
):
    """Emite a fatura de uma visita"""
    invoice = await invoices.create_invoice(payload)
    return {"invoice": InvoiceOut.model_validate(invoice)}


@router.get("")
async def list_invoices(resolver: RelationshipResolver = Depends(get_resolver)):
    """Faturas com cliente, prestador e visita, mais recentes primeiro"""
    return {"invoices": await resolver.invoices_with_details()}


@router.get("/{invoice_id}")
async def get_invoice(
    invoice_id: str,
    resolver: RelationshipResolver = Depends(get_resolver)
):
    return {"invoice": await resolver.invoice_with_details(invoice_id)}


@router.patch("/{invoice_id}/send")
async def send_invoice(
    invoice_id: str,
    invoices: InvoiceService = Depends(get_invoice_service)
):
    invoice = await invoices.mark_sent(invoice_id)
    return {"invoice": InvoiceOut.model_validate(invoice), "message": "Invoice sent"}


@router.patch("/{invoice_id}/paid")
async def pay_invoice(
    invoice_id: str,
    payload: InvoicePaidRequest,
    invoices: InvoiceService = Depends(get_invoice_service)
):
    """Marca como paga (exige método de pagamento)"""
    invoice = await invoices.mark_paid(invoice_id, payload.payment_method)
    return {"invoice": InvoiceOut.model_validate(invoice), "message": "Invoice marked as paid"}


@router.patch("/{invoice_id}/status")
async def update_invoice_status(
    invoice_id: str,
    payload: InvoiceStatusUpdate,
    invoices: InvoiceService = Depends(get_invoice_service)
):
    invoice = await invoices.update_status(invoice_id, payload.status)
    return {"invoice": InvoiceOut.model_validate(invoice), "message": "Invoice status updated"}
