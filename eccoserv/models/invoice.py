"""
EccoServ - Invoice Model
Faturas geradas a partir das visitas
"""
import uuid
import enum
from datetime import datetime
from sqlalchemy import Column, String, Boolean, DateTime, Text, Numeric, ForeignKey

from eccoserv.database import Base


class InvoiceStatus(str, enum.Enum):
    """Status da fatura"""
    PENDING = "pending"
    SENT = "sent"
    PAID = "paid"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"


class PaymentMethod(str, enum.Enum):
    """Método de pagamento"""
    BOLETO = "boleto"
    PIX = "pix"
    CARD = "card"
    CASH = "cash"


class Invoice(Base):
    """Fatura de uma visita"""
    __tablename__ = "invoices"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    visit_id = Column(String(36), ForeignKey("visits.id"), nullable=False, index=True)
    client_id = Column(String(36), ForeignKey("clients.id"), nullable=False, index=True)
    provider_id = Column(String(36), ForeignKey("providers.id"), nullable=False, index=True)

    invoice_number = Column(String(40), unique=True, nullable=False, index=True)
    description = Column(Text, nullable=False)

    # Valores em reais, sempre com 2 casas
    service_value = Column(Numeric(12, 2), nullable=False)
    material_costs = Column(Numeric(12, 2), nullable=False)
    total_amount = Column(Numeric(12, 2), nullable=False)
    is_free = Column(Boolean, default=False, nullable=False)

    status = Column(String(20), nullable=False, default=InvoiceStatus.PENDING.value, index=True)
    issue_date = Column(DateTime, default=datetime.utcnow, nullable=False)
    due_date = Column(DateTime, nullable=False)
    sent_at = Column(DateTime)
    paid_date = Column(DateTime)
    payment_method = Column(String(20))
    payment_url = Column(String(500))
    notes = Column(Text)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
