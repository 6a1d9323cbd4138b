from .user import User, Client, Provider, UserType
from .well import Well, WellStatus
from .visit import Visit, ScheduledVisit, VisitType, VisitStatus, ScheduledVisitStatus
from .invoice import Invoice, InvoiceStatus, PaymentMethod
from .material import MaterialUsage, MATERIAL_CATALOG

__all__ = [
    "User",
    "Client",
    "Provider",
    "UserType",
    "Well",
    "WellStatus",
    "Visit",
    "ScheduledVisit",
    "VisitType",
    "VisitStatus",
    "ScheduledVisitStatus",
    "Invoice",
    "InvoiceStatus",
    "PaymentMethod",
    "MaterialUsage",
    "MATERIAL_CATALOG"
]
