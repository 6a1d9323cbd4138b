"""
EccoServ - Invoices
Emissão de faturas a partir de visitas e transições de status
"""
import logging
from datetime import datetime
from decimal import Decimal
from typing import Optional

from eccoserv.core import BusinessRuleError, NotFoundError, ValidationError
from eccoserv.models import InvoiceStatus, PaymentMethod
from eccoserv.schemas import InvoiceCreate, to_money
from .store import EntityKind, EntityStore

logger = logging.getLogger(__name__)

ZERO = Decimal("0.00")

PAYABLE_STATUSES = (InvoiceStatus.SENT.value, InvoiceStatus.OVERDUE.value)


def compute_amounts(service_value, material_costs, is_free: bool):
    """
    Retorna (service_value, material_costs, total_amount, is_free), todos
    Decimal com 2 casas. Valor zerado também conta como gratuita e fatura
    gratuita tem todos os valores zerados.
    """
    service = to_money(service_value)
    materials = to_money(material_costs)
    is_free = bool(is_free) or service + materials == ZERO

    if is_free:
        return ZERO, ZERO, ZERO, True
    return service, materials, to_money(service + materials), False


class InvoiceService:

    def __init__(self, store: EntityStore):
        self.store = store

    async def _require_invoice(self, invoice_id: str):
        invoice = await self.store.get_by_id(EntityKind.INVOICE, invoice_id)
        if invoice is None:
            raise NotFoundError(EntityKind.INVOICE.value, invoice_id)
        return invoice

    async def next_invoice_number(self, now: Optional[datetime] = None) -> str:
        """INV-<timestamp UTC em ms>; colisões recebem sufixo -2, -3, ..."""
        now = now or datetime.utcnow()
        epoch = datetime(1970, 1, 1)
        base = f"INV-{int((now - epoch).total_seconds() * 1000)}"

        number, attempt = base, 1
        while await self.store.find_one(EntityKind.INVOICE, "invoice_number", number):
            attempt += 1
            number = f"{base}-{attempt}"
        return number

    async def create_invoice(self, request: InvoiceCreate):
        visit = await self.store.get_by_id(EntityKind.VISIT, request.visit_id)
        if visit is None:
            raise NotFoundError(EntityKind.VISIT.value, request.visit_id)

        well = await self.store.get_by_id(EntityKind.WELL, visit.well_id)
        if well is None:
            raise NotFoundError(EntityKind.WELL.value, visit.well_id)

        # Uma fatura por visita
        if await self.store.find_one(EntityKind.INVOICE, "visit_id", visit.id):
            raise BusinessRuleError("Visit already has an invoice", {"visit_id": visit.id})

        service, materials, total, is_free = compute_amounts(
            request.service_value, request.material_costs, request.is_free
        )
        now = datetime.utcnow()

        invoice = await self.store.create(EntityKind.INVOICE, {
            "visit_id": visit.id,
            "client_id": well.client_id,
            "provider_id": visit.provider_id,
            "invoice_number": await self.next_invoice_number(now),
            "description": request.description,
            "service_value": service,
            "material_costs": materials,
            "total_amount": total,
            "is_free": is_free,
            "status": InvoiceStatus.PENDING.value,
            "issue_date": now,
            "due_date": request.due_date,
            "payment_method": request.payment_method.value if request.payment_method else None,
            "payment_url": request.payment_url,
            "notes": request.notes,
        })
        await self.store.commit()

        logger.info("Created invoice %s (%s) total %s", invoice.id, invoice.invoice_number, total)
        return invoice

    async def mark_sent(self, invoice_id: str):
        invoice = await self._require_invoice(invoice_id)
        if invoice.status != InvoiceStatus.PENDING.value:
            raise BusinessRuleError(
                f"Only pending invoices can be sent (current: {invoice.status})",
                {"status": invoice.status},
            )

        await self.store.patch_fields(EntityKind.INVOICE, invoice_id, {
            "status": InvoiceStatus.SENT.value,
            "sent_at": datetime.utcnow(),
        })
        await self.store.commit()

        logger.info("Invoice %s sent", invoice_id)
        return invoice

    async def mark_paid(self, invoice_id: str, payment_method: Optional[PaymentMethod]):
        invoice = await self._require_invoice(invoice_id)
        if payment_method is None:
            raise ValidationError("Payment method is required", {"field": "paymentMethod"})
        if invoice.is_free:
            raise BusinessRuleError("Free invoices cannot be paid")
        if invoice.status not in PAYABLE_STATUSES:
            raise BusinessRuleError(
                f"Only sent or overdue invoices can be paid (current: {invoice.status})",
                {"status": invoice.status},
            )

        await self.store.patch_fields(EntityKind.INVOICE, invoice_id, {
            "status": InvoiceStatus.PAID.value,
            "payment_method": payment_method.value,
            "paid_date": datetime.utcnow(),
        })
        await self.store.commit()

        logger.info("Invoice %s paid via %s", invoice_id, payment_method.value)
        return invoice

    async def update_status(self, invoice_id: str, new_status: InvoiceStatus):
        """Patch livre de status (só valida o enum)"""
        invoice = await self._require_invoice(invoice_id)

        changes = {"status": new_status.value}
        now = datetime.utcnow()
        if new_status == InvoiceStatus.SENT and invoice.sent_at is None:
            changes["sent_at"] = now
        if new_status == InvoiceStatus.PAID and invoice.paid_date is None:
            changes["paid_date"] = now

        await self.store.patch_fields(EntityKind.INVOICE, invoice_id, changes)
        await self.store.commit()

        logger.info("Invoice %s status -> %s", invoice_id, new_status.value)
        return invoice
