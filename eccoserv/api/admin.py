"""
EccoServ - Admin API
Painel administrativo: estatísticas, listagens, relatório de materiais,
exclusões e reset de senha
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from eccoserv.models import User
from eccoserv.schemas import MaterialConsumptionReport, PasswordResetResponse
from eccoserv.services import (
    EntityKind,
    EntityStore,
    RelationshipResolver,
    AccountService,
    WellService,
    period_bounds,
    material_consumption,
    dashboard_stats
)
from .auth import get_current_admin
from .deps import get_store, get_resolver, get_account_service, get_well_service

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.get("/stats")
async def get_stats(
    store: EntityStore = Depends(get_store),
    admin: User = Depends(get_current_admin)
):
    """Totais do painel"""
    return await dashboard_stats(store)


@router.get("/clients")
async def list_clients(
    resolver: RelationshipResolver = Depends(get_resolver),
    admin: User = Depends(get_current_admin)
):
    return {"clients": await resolver.all_clients()}


@router.get("/providers")
async def list_providers(
    resolver: RelationshipResolver = Depends(get_resolver),
    admin: User = Depends(get_current_admin)
):
    return {"providers": await resolver.all_providers()}


@router.get("/wells")
async def list_wells(
    resolver: RelationshipResolver = Depends(get_resolver),
    admin: User = Depends(get_current_admin)
):
    return {"wells": await resolver.wells_with_client()}


@router.get("/visits")
async def list_visits(
    resolver: RelationshipResolver = Depends(get_resolver),
    admin: User = Depends(get_current_admin)
):
    return {"visits": await resolver.visits_with_details()}


@router.get("/materials/consumption", response_model=MaterialConsumptionReport)
async def get_material_consumption(
    period: Optional[str] = Query("month"),
    store: EntityStore = Depends(get_store),
    admin: User = Depends(get_current_admin)
):
    """Consumo de materiais na última semana ou mês"""
    start, end = period_bounds(period)
    return MaterialConsumptionReport(
        period=period,
        start_date=start,
        end_date=end,
        consumption=await material_consumption(store, start, end),
    )


@router.delete("/providers/{provider_id}")
async def delete_provider(
    provider_id: str,
    accounts: AccountService = Depends(get_account_service),
    admin: User = Depends(get_current_admin)
):
    """Remove prestador e o usuário dele"""
    await accounts.delete_provider(provider_id)
    return {"message": "Provider deleted successfully"}


@router.delete("/wells/{well_id}")
async def delete_well(
    well_id: str,
    wells: WellService = Depends(get_well_service),
    admin: User = Depends(get_current_admin)
):
    await wells.delete_well(well_id)
    return {"message": "Well deleted successfully"}


@router.delete("/users/{user_id}")
async def delete_user(
    user_id: str,
    accounts: AccountService = Depends(get_account_service),
    admin: User = Depends(get_current_admin)
):
    await accounts.delete_user(user_id)
    return {"message": "User deleted successfully"}


async def _reset_password(accounts: AccountService, kind: EntityKind, profile_id: str):
    user, temporary_password = await accounts.reset_password(kind, profile_id)
    return PasswordResetResponse(
        user_id=user.id,
        email=user.email,
        temporary_password=temporary_password,
    )


@router.post("/clients/{client_id}/reset-password", response_model=PasswordResetResponse)
async def reset_client_password(
    client_id: str,
    accounts: AccountService = Depends(get_account_service),
    admin: User = Depends(get_current_admin)
):
    """Gera senha temporária para o cliente"""
    return await _reset_password(accounts, EntityKind.CLIENT, client_id)


@router.post("/providers/{provider_id}/reset-password", response_model=PasswordResetResponse)
async def reset_provider_password(
    provider_id: str,
    accounts: AccountService = Depends(get_account_service),
    admin: User = Depends(get_current_admin)
):
    """Gera senha temporária para o prestador"""
    return await _reset_password(accounts, EntityKind.PROVIDER, provider_id)
