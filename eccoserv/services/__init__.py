from .store import EntityKind, EntityStore
from .resolver import RelationshipResolver
from .aggregation import period_bounds, material_consumption, dashboard_stats
from .accounts import AccountService
from .wells import WellService
from .visits import VisitService
from .invoices import InvoiceService, compute_amounts

__all__ = [
    "EntityKind",
    "EntityStore",
    "RelationshipResolver",
    "period_bounds",
    "material_consumption",
    "dashboard_stats",
    "AccountService",
    "WellService",
    "VisitService",
    "InvoiceService",
    "compute_amounts"
]
