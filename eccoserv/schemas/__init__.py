from .base import CamelModel, Money, UtcDateTime, to_money, format_money
from .user import (
    RegisterRequest,
    RegisterResponse,
    LoginRequest,
    ClientCreate,
    ProviderCreate,
    UserOut,
    ClientOut,
    ProviderOut,
    PasswordResetResponse
)
from .well import WellCreate, WellStatusUpdate, WellOut
from .visit import (
    VisitCreate,
    VisitStatusUpdate,
    ScheduledVisitCreate,
    ScheduledVisitStatusUpdate,
    VisitOut,
    ScheduledVisitOut
)
from .invoice import InvoiceCreate, InvoicePaidRequest, InvoiceStatusUpdate, InvoiceOut
from .material import (
    MaterialInput,
    MaterialsCreate,
    MaterialUsageOut,
    MaterialConsumptionRow,
    MaterialConsumptionReport
)
from .stats import DashboardStats
from .views import (
    ClientWithUser,
    ProviderWithUser,
    UserWithProfile,
    WellWithClient,
    VisitWithDetails,
    VisitWithMaterials,
    ScheduledVisitWithDetails,
    InvoiceWithDetails
)

__all__ = [
    "CamelModel",
    "Money",
    "UtcDateTime",
    "to_money",
    "format_money",
    "RegisterRequest",
    "RegisterResponse",
    "LoginRequest",
    "ClientCreate",
    "ProviderCreate",
    "UserOut",
    "ClientOut",
    "ProviderOut",
    "PasswordResetResponse",
    "WellCreate",
    "WellStatusUpdate",
    "WellOut",
    "VisitCreate",
    "VisitStatusUpdate",
    "ScheduledVisitCreate",
    "ScheduledVisitStatusUpdate",
    "VisitOut",
    "ScheduledVisitOut",
    "InvoiceCreate",
    "InvoicePaidRequest",
    "InvoiceStatusUpdate",
    "InvoiceOut",
    "MaterialInput",
    "MaterialsCreate",
    "MaterialUsageOut",
    "MaterialConsumptionRow",
    "MaterialConsumptionReport",
    "DashboardStats",
    "ClientWithUser",
    "ProviderWithUser",
    "UserWithProfile",
    "WellWithClient",
    "VisitWithDetails",
    "VisitWithMaterials",
    "ScheduledVisitWithDetails",
    "InvoiceWithDetails"
]
