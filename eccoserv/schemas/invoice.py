"""
EccoServ - Invoice Schemas
"""
from decimal import Decimal
from pydantic import Field
from typing import Annotated, Optional
from datetime import datetime

from eccoserv.models import InvoiceStatus, PaymentMethod
from .base import CamelModel, Money, UtcDateTime, lenient_enum


class InvoiceCreate(CamelModel):
    visit_id: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    service_value: Decimal = Field(..., ge=0)
    material_costs: Decimal = Field(Decimal("0.00"), ge=0)
    is_free: bool = False
    due_date: UtcDateTime
    payment_method: Optional[PaymentMethod] = None
    payment_url: Optional[str] = Field(None, max_length=500)
    notes: Optional[str] = None


class InvoicePaidRequest(CamelModel):
    # Opcional no schema para a regra "método obrigatório" responder com mensagem própria
    payment_method: Optional[PaymentMethod] = None


class InvoiceStatusUpdate(CamelModel):
    status: InvoiceStatus


class InvoiceOut(CamelModel):
    id: str
    visit_id: str
    client_id: str
    provider_id: str
    invoice_number: str
    description: str
    service_value: Money
    material_costs: Money
    total_amount: Money
    is_free: bool = False
    status: Annotated[InvoiceStatus, lenient_enum(InvoiceStatus, InvoiceStatus.PENDING)]
    issue_date: Optional[datetime] = None
    due_date: datetime
    sent_at: Optional[datetime] = None
    paid_date: Optional[datetime] = None
    payment_method: Optional[str] = None
    payment_url: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
