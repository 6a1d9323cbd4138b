"""
EccoServ - API Dependencies
Store, resolver e serviços injetados por request (mesma sessão)
"""
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from eccoserv.core import NotFoundError
from eccoserv.database import get_db
from eccoserv.services import (
    EntityKind,
    EntityStore,
    RelationshipResolver,
    AccountService,
    WellService,
    VisitService,
    InvoiceService
)


def get_store(db: AsyncSession = Depends(get_db)) -> EntityStore:
    return EntityStore(db)


def get_resolver(store: EntityStore = Depends(get_store)) -> RelationshipResolver:
    return RelationshipResolver(store)


def get_account_service(store: EntityStore = Depends(get_store)) -> AccountService:
    return AccountService(store)


def get_well_service(store: EntityStore = Depends(get_store)) -> WellService:
    return WellService(store)


def get_visit_service(store: EntityStore = Depends(get_store)) -> VisitService:
    return VisitService(store)


def get_invoice_service(store: EntityStore = Depends(get_store)) -> InvoiceService:
    return InvoiceService(store)


async def require_entity(store: EntityStore, kind: EntityKind, entity_id: str):
    """404 para ids de rota que não existem"""
    row = await store.get_by_id(kind, entity_id)
    if row is None:
        raise NotFoundError(kind.value, entity_id)
    return row
