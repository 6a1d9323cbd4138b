"""
EccoServ - Seed
Admin inicial (ADMIN_EMAIL/ADMIN_PASSWORD) e dados de demonstração
(SEED_SAMPLE_DATA). Pode rodar várias vezes sem duplicar nada.
"""
import logging
from datetime import datetime
from decimal import Decimal

from eccoserv.core import settings
from eccoserv.models import (
    UserType,
    WellStatus,
    VisitType,
    VisitStatus,
    ScheduledVisitStatus,
    InvoiceStatus,
    PaymentMethod
)
from eccoserv.services import EntityKind, EntityStore, AccountService
from .session import AsyncSessionLocal

logger = logging.getLogger(__name__)

SAMPLE_CLIENT_EMAIL = "joao@cliente.com"
SAMPLE_PROVIDER_EMAIL = "carlos@tecnico.com"
SAMPLE_ADMIN_PASSWORD = "admin123"


async def _seed_admin(accounts):
    password = settings.ADMIN_PASSWORD
    if not password and settings.SEED_SAMPLE_DATA:
        password = SAMPLE_ADMIN_PASSWORD
    if not password:
        return

    admin, created = await accounts.ensure_user(
        settings.ADMIN_EMAIL, password, "Admin Sistema", UserType.ADMIN
    )
    if created:
        logger.info("Admin %s created", admin.email)


async def _seed_sample_data(store, accounts):
    if await store.find_one(EntityKind.USER, "email", SAMPLE_CLIENT_EMAIL):
        logger.info("Sample data already present")
        return

    client_user, _ = await accounts.ensure_user(
        SAMPLE_CLIENT_EMAIL, "cliente123", "João Silva", UserType.CLIENT
    )
    provider_user, _ = await accounts.ensure_user(
        SAMPLE_PROVIDER_EMAIL, "tecnico123", "Carlos Santos", UserType.PROVIDER
    )

    client = await store.create(EntityKind.CLIENT, {
        "user_id": client_user.id,
        "address": "Rua das Flores, 123, São Paulo - SP",
        "phone": "(11) 99999-9999",
    })
    provider = await store.create(EntityKind.PROVIDER, {
        "user_id": provider_user.id,
        "specialties": ["Manutenção preventiva", "Limpeza de poços"],
        "phone": "(11) 88888-8888",
    })

    main_well = await store.create(EntityKind.WELL, {
        "client_id": client.id,
        "name": "Poço Principal",
        "type": "residential",
        "location": "Quintal da residência",
        "status": WellStatus.ACTIVE.value,
    })
    await store.create(EntityKind.WELL, {
        "client_id": client.id,
        "name": "Poço da Horta",
        "type": "agricultural",
        "location": "Fundos do terreno",
        "status": WellStatus.MAINTENANCE.value,
    })

    visit = await store.create(EntityKind.VISIT, {
        "well_id": main_well.id,
        "provider_id": provider.id,
        "visit_date": datetime(2024, 1, 20, 14, 0),
        "service_type": "manutencao-preventiva",
        "visit_type": VisitType.PERIODIC.value,
        "next_visit_date": datetime(2024, 4, 20, 14, 0),
        "observations": "Manutenção preventiva realizada. Sistema funcionando perfeitamente.",
        "status": VisitStatus.COMPLETED.value,
        "photos": [],
        "documents": [],
    })
    await store.create(EntityKind.MATERIAL_USAGE, {
        "visit_id": visit.id,
        "material_type": "Hipoclorito de Cálcio (Cloro Granulado)",
        "quantity_grams": Decimal("500.00"),
    })
    await store.create(EntityKind.SCHEDULED_VISIT, {
        "well_id": main_well.id,
        "provider_id": provider.id,
        "scheduled_date": visit.next_visit_date,
        "service_type": visit.service_type,
        "status": ScheduledVisitStatus.SCHEDULED.value,
        "created_from_visit_id": visit.id,
    })

    await store.create(EntityKind.INVOICE, {
        "visit_id": visit.id,
        "client_id": client.id,
        "provider_id": provider.id,
        "invoice_number": "FAT-001-2024",
        "description": "Manutenção preventiva - Poço Principal",
        "service_value": Decimal("200.00"),
        "material_costs": Decimal("50.00"),
        "total_amount": Decimal("250.00"),
        "is_free": False,
        "status": InvoiceStatus.PAID.value,
        "issue_date": datetime(2024, 1, 20),
        "due_date": datetime(2024, 2, 20),
        "sent_at": datetime(2024, 1, 20),
        "paid_date": datetime(2024, 1, 25),
        "payment_method": PaymentMethod.PIX.value,
    })
    logger.info("Sample data created (client %s, provider %s)", client.id, provider.id)


async def seed_database(session_factory=None):
    """Executado no startup"""
    if not settings.ADMIN_PASSWORD and not settings.SEED_SAMPLE_DATA:
        return

    async with (session_factory or AsyncSessionLocal)() as session:
        store = EntityStore(session)
        accounts = AccountService(store)
        try:
            await _seed_admin(accounts)
            if settings.SEED_SAMPLE_DATA:
                await _seed_sample_data(store, accounts)
            await store.commit()
        except Exception:
            await store.rollback()
            logger.exception("Seed failed")
            raise
