"""
EccoServ - Clients API
Perfis de clientes e tudo que pertence a eles (poços, visitas, faturas)
"""
from fastapi import APIRouter, Depends, status

from eccoserv.schemas import ClientCreate, ClientOut
from eccoserv.services import EntityKind, EntityStore, RelationshipResolver, AccountService
from .deps import get_store, get_resolver, get_account_service, require_entity

router = APIRouter(prefix="/clients", tags=["Clients"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_client(
    payload: ClientCreate,
    accounts: AccountService = Depends(get_account_service)
):
    """Cria o perfil de cliente de um usuário"""
    client = await accounts.create_client(payload)
    return {"client": ClientOut.model_validate(client)}


@router.get("")
async def list_clients(resolver: RelationshipResolver = Depends(get_resolver)):
    """Lista clientes com o usuário"""
    return {"clients": await resolver.all_clients()}


@router.get("/{client_id}/wells")
async def list_client_wells(
    client_id: str,
    store: EntityStore = Depends(get_store),
    resolver: RelationshipResolver = Depends(get_resolver)
):
    await require_entity(store, EntityKind.CLIENT, client_id)
    return {"wells": await resolver.wells_by_client(client_id)}


@router.get("/{client_id}/visits")
async def list_client_visits(
    client_id: str,
    store: EntityStore = Depends(get_store),
    resolver: RelationshipResolver = Depends(get_resolver)
):
    await require_entity(store, EntityKind.CLIENT, client_id)
    return {"visits": await resolver.visits_by_client(client_id)}


@router.get("/{client_id}/invoices")
async def list_client_invoices(
    client_id: str,
    store: EntityStore = Depends(get_store),
    resolver: RelationshipResolver = Depends(get_resolver)
):
    await require_entity(store, EntityKind.CLIENT, client_id)
    return {"invoices": await resolver.invoices_by_client(client_id)}


@router.get("/{client_id}/scheduled-visits")
async def list_client_scheduled_visits(
    client_id: str,
    store: EntityStore = Depends(get_store),
    resolver: RelationshipResolver = Depends(get_resolver)
):
    await require_entity(store, EntityKind.CLIENT, client_id)
    return {"scheduledVisits": await resolver.scheduled_visits_by_client(client_id)}
