from .auth import router as auth_router, limiter
from .clients import router as clients_router
from .providers import router as providers_router
from .wells import router as wells_router
from .visits import router as visits_router, scheduled_router as scheduled_visits_router
from .invoices import router as invoices_router
from .admin import router as admin_router

__all__ = [
    "auth_router",
    "limiter",
    "clients_router",
    "providers_router",
    "wells_router",
    "visits_router",
    "scheduled_visits_router",
    "invoices_router",
    "admin_router"
]
