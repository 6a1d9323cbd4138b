"""
EccoServ - Visits API
Registro de visitas (multipart com fotos/documentos), materiais e status
"""
import json
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from eccoserv.core import ValidationError
from eccoserv.schemas import (
    VisitCreate,
    VisitOut,
    VisitStatusUpdate,
    MaterialsCreate,
    MaterialUsageOut,
    ScheduledVisitCreate,
    ScheduledVisitOut,
    ScheduledVisitStatusUpdate
)
from eccoserv.services import RelationshipResolver, VisitService
from .deps import get_resolver, get_visit_service

router = APIRouter(prefix="/visits", tags=["Visits"])
scheduled_router = APIRouter(prefix="/scheduled-visits", tags=["Scheduled Visits"])


def _parse_materials(raw: Optional[str]) -> list:
    """Materiais chegam como string JSON no formulário"""
    if not raw or not raw.strip():
        return []
    try:
        materials = json.loads(raw)
    except json.JSONDecodeError:
        raise ValidationError("Invalid materials JSON", {"field": "materials"})
    if not isinstance(materials, list):
        raise ValidationError("Materials must be a list", {"field": "materials"})
    return materials


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_visit(
    well_id: Optional[str] = Form(None, alias="wellId"),
    provider_id: Optional[str] = Form(None, alias="providerId"),
    visit_date: Optional[str] = Form(None, alias="visitDate"),
    service_type: Optional[str] = Form(None, alias="serviceType"),
    visit_type: Optional[str] = Form(None, alias="visitType"),
    next_visit_date: Optional[str] = Form(None, alias="nextVisitDate"),
    observations: Optional[str] = Form(None),
    visit_status: Optional[str] = Form(None, alias="status"),
    materials: Optional[str] = Form(None),
    photos: Optional[List[UploadFile]] = File(None),
    documents: Optional[List[UploadFile]] = File(None),
    visits: VisitService = Depends(get_visit_service)
):
    """
    Registra uma visita.

    Numa única transação também grava os materiais (quantidade > 0) e, se a
    visita for periódica com próxima data, cria o agendamento.
    """
    data = {
        "wellId": well_id,
        "providerId": provider_id,
        "visitDate": visit_date,
        "serviceType": service_type,
        "visitType": visit_type,
        "nextVisitDate": next_visit_date,
        "observations": observations,
        "materials": _parse_materials(materials),
    }
    if visit_status:
        data["status"] = visit_status

    request = VisitCreate.model_validate(data)
    visit = await visits.create_visit(request, photos=photos, documents=documents)
    return {"visit": VisitOut.model_validate(visit)}


@router.get("/{visit_id}")
async def get_visit(
    visit_id: str,
    resolver: RelationshipResolver = Depends(get_resolver)
):
    """Visita com poço, cliente, prestador e materiais"""
    return {"visit": await resolver.visit_with_materials(visit_id)}


@router.get("/{visit_id}/materials")
async def list_visit_materials(
    visit_id: str,
    resolver: RelationshipResolver = Depends(get_resolver)
):
    return {"materials": await resolver.materials_for_visit(visit_id)}


@router.post("/{visit_id}/materials", status_code=status.HTTP_201_CREATED)
async def add_visit_materials(
    visit_id: str,
    payload: MaterialsCreate,
    visits: VisitService = Depends(get_visit_service)
):
    rows = await visits.add_materials(visit_id, payload.materials)
    return {"materials": [MaterialUsageOut.model_validate(row) for row in rows]}


@router.patch("/{visit_id}/status")
async def update_visit_status(
    visit_id: str,
    payload: VisitStatusUpdate,
    visits: VisitService = Depends(get_visit_service)
):
    visit = await visits.update_status(visit_id, payload.status)
    return {"visit": VisitOut.model_validate(visit), "message": "Visit status updated"}


@scheduled_router.post("", status_code=status.HTTP_201_CREATED)
async def create_scheduled_visit(
    payload: ScheduledVisitCreate,
    visits: VisitService = Depends(get_visit_service)
):
    scheduled = await visits.create_scheduled_visit(payload)
    return {"scheduledVisit": ScheduledVisitOut.model_validate(scheduled)}


@scheduled_router.get("/{scheduled_id}")
async def get_scheduled_visit(
    scheduled_id: str,
    resolver: RelationshipResolver = Depends(get_resolver)
):
    return {"scheduledVisit": await resolver.scheduled_visit_with_details(scheduled_id)}


@scheduled_router.patch("/{scheduled_id}/status")
async def update_scheduled_visit_status(
    scheduled_id: str,
    payload: ScheduledVisitStatusUpdate,
    visits: VisitService = Depends(get_visit_service)
):
    scheduled = await visits.update_scheduled_status(scheduled_id, payload.status)
    return {
        "scheduledVisit": ScheduledVisitOut.model_validate(scheduled),
        "message": "Scheduled visit status updated",
    }
