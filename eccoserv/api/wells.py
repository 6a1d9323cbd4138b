"""
EccoServ - Wells API
"""
from fastapi import APIRouter, Depends, status

from eccoserv.schemas import WellCreate, WellStatusUpdate, WellOut
from eccoserv.services import EntityKind, EntityStore, RelationshipResolver, WellService
from .deps import get_store, get_resolver, get_well_service, require_entity

router = APIRouter(prefix="/wells", tags=["Wells"])


@router.get("")
async def list_wells(resolver: RelationshipResolver = Depends(get_resolver)):
    """Poços com cliente e usuário"""
    return {"wells": await resolver.wells_with_client()}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_well(
    payload: WellCreate,
    wells: WellService = Depends(get_well_service)
):
    well = await wells.create_well(payload)
    return {"well": WellOut.model_validate(well)}


@router.patch("/{well_id}/status")
async def update_well_status(
    well_id: str,
    payload: WellStatusUpdate,
    wells: WellService = Depends(get_well_service)
):
    well = await wells.update_status(well_id, payload.status)
    return {"well": WellOut.model_validate(well), "message": "Well status updated"}


@router.get("/{well_id}/visits")
async def list_well_visits(
    well_id: str,
    store: EntityStore = Depends(get_store),
    resolver: RelationshipResolver = Depends(get_resolver)
):
    """Histórico de visitas do poço"""
    await require_entity(store, EntityKind.WELL, well_id)
    return {"visits": await resolver.visits_by_well(well_id)}
