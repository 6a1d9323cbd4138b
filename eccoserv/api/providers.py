"""
EccoServ - Providers API
"""
from fastapi import APIRouter, Depends, status

from eccoserv.schemas import ProviderCreate, ProviderOut
from eccoserv.services import EntityKind, EntityStore, RelationshipResolver, AccountService
from .deps import get_store, get_resolver, get_account_service, require_entity

router = APIRouter(prefix="/providers", tags=["Providers"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_provider(
    payload: ProviderCreate,
    accounts: AccountService = Depends(get_account_service)
):
    """Cria o perfil de prestador de um usuário"""
    provider = await accounts.create_provider(payload)
    return {"provider": ProviderOut.model_validate(provider)}


@router.get("")
async def list_providers(resolver: RelationshipResolver = Depends(get_resolver)):
    return {"providers": await resolver.all_providers()}


@router.get("/{provider_id}/visits")
async def list_provider_visits(
    provider_id: str,
    store: EntityStore = Depends(get_store),
    resolver: RelationshipResolver = Depends(get_resolver)
):
    """Visitas do prestador, mais recentes primeiro"""
    await require_entity(store, EntityKind.PROVIDER, provider_id)
    return {"visits": await resolver.visits_by_provider(provider_id)}


@router.get("/{provider_id}/visits-with-materials")
async def list_provider_visits_with_materials(
    provider_id: str,
    store: EntityStore = Depends(get_store),
    resolver: RelationshipResolver = Depends(get_resolver)
):
    await require_entity(store, EntityKind.PROVIDER, provider_id)
    return {"visits": await resolver.visits_with_materials_by_provider(provider_id)}


@router.get("/{provider_id}/invoices")
async def list_provider_invoices(
    provider_id: str,
    store: EntityStore = Depends(get_store),
    resolver: RelationshipResolver = Depends(get_resolver)
):
    await require_entity(store, EntityKind.PROVIDER, provider_id)
    return {"invoices": await resolver.invoices_by_provider(provider_id)}


@router.get("/{provider_id}/scheduled-visits")
async def list_provider_scheduled_visits(
    provider_id: str,
    store: EntityStore = Depends(get_store),
    resolver: RelationshipResolver = Depends(get_resolver)
):
    """Agenda do prestador, próximas datas primeiro"""
    await require_entity(store, EntityKind.PROVIDER, provider_id)
    return {"scheduledVisits": await resolver.scheduled_visits_by_provider(provider_id)}
