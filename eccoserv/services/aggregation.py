"""
EccoServ - Aggregation
Relatório de consumo de materiais e números do painel administrativo
"""
import logging
from collections import Counter
from datetime import datetime, timedelta
from decimal import Decimal
from typing import List, Optional, Tuple

from dateutil.relativedelta import relativedelta

from eccoserv.core.exceptions import ValidationError
from eccoserv.models import InvoiceStatus
from eccoserv.schemas import DashboardStats, MaterialConsumptionRow, to_money
from .resolver import RelationshipResolver
from .store import EntityKind, EntityStore

logger = logging.getLogger(__name__)

PERIODS = ("week", "month")

# Faturas que ainda representam dinheiro a receber
OUTSTANDING_STATUSES = (
    InvoiceStatus.PENDING.value,
    InvoiceStatus.SENT.value,
    InvoiceStatus.OVERDUE.value,
)


def period_bounds(period: str, now: Optional[datetime] = None) -> Tuple[datetime, datetime]:
    """Intervalo [início, fim] para os presets week/month"""
    now = now or datetime.utcnow()
    if period == "week":
        return now - timedelta(days=7), now
    if period == "month":
        return now - relativedelta(months=1), now
    raise ValidationError(
        f"Invalid period: {period!r}. Use one of: {', '.join(PERIODS)}",
        {"period": period},
    )


class _MaterialTotals:
    __slots__ = ("grams", "visits", "days")

    def __init__(self):
        self.grams = Decimal("0")
        self.visits = set()
        self.days = set()


async def material_consumption(
    store: EntityStore,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None
) -> List[MaterialConsumptionRow]:
    """
    Soma por material os registros com start <= created_at <= end.
    Sem limites, considera todo o histórico.
    """
    usage = await store.list_all(EntityKind.MATERIAL_USAGE, created_from=start, created_to=end)
    visits = await store.get_many(EntityKind.VISIT, [row.visit_id for row in usage])

    # dict preserva a ordem em que cada material apareceu (desempate)
    totals = {}
    for row in usage:
        entry = totals.setdefault(row.material_type, _MaterialTotals())
        entry.grams += Decimal(str(row.quantity_grams))
        entry.visits.add(row.visit_id)
        visit = visits.get(row.visit_id)
        if visit is not None:
            entry.days.add(visit.visit_date.date())

    report = []
    for material_type, entry in totals.items():
        grams = float(entry.grams)
        visit_count = len(entry.visits)
        report.append(MaterialConsumptionRow(
            material_type=material_type,
            total_grams=grams,
            total_kilograms=round(grams / 1000, 3),
            visit_count=visit_count,
            average_per_visit=round(grams / visit_count, 1) if visit_count else 0.0,
            days_with_usage=len(entry.days),
        ))

    report.sort(key=lambda row: row.total_kilograms, reverse=True)
    logger.debug("Material consumption: %d materials from %d rows", len(report), len(usage))
    return report


async def dashboard_stats(store: EntityStore, now: Optional[datetime] = None) -> DashboardStats:
    """Totais do painel admin (só conta registros com relacionamentos íntegros)"""
    now = now or datetime.utcnow()
    resolver = RelationshipResolver(store)

    clients = await resolver.all_clients()
    providers = await resolver.all_providers()
    wells = await resolver.wells_with_client()
    visits = await resolver.visits_with_details()

    monthly_visits = [
        v for v in visits
        if v.visit_date.year == now.year and v.visit_date.month == now.month
    ]

    invoices = await store.list_all(EntityKind.INVOICE)
    by_status = Counter(invoice.status for invoice in invoices)
    outstanding = sum(
        (to_money(invoice.total_amount) for invoice in invoices if invoice.status in OUTSTANDING_STATUSES),
        Decimal("0.00"),
    )

    return DashboardStats(
        total_clients=len(clients),
        total_providers=len(providers),
        total_wells=len(wells),
        monthly_visits=len(monthly_visits),
        invoices_by_status=dict(by_status),
        outstanding_amount=to_money(outstanding),
    )
