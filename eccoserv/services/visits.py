"""
EccoServ - Visits
Criação de visitas (com materiais, anexos e agendamento automático)
e transições de status de visitas e agendamentos
"""
import logging
from typing import Dict, Iterable, List, Optional, Tuple

from fastapi import UploadFile

from eccoserv.core import BusinessRuleError, NotFoundError, ValidationError
from eccoserv.models import (
    MATERIAL_CATALOG,
    VisitType,
    VisitStatus,
    ScheduledVisitStatus
)
from eccoserv.schemas import MaterialInput, VisitCreate, ScheduledVisitCreate
from .store import EntityKind, EntityStore
from .uploads import PHOTOS, DOCUMENTS, save_uploads, discard_uploads

logger = logging.getLogger(__name__)

VISIT_TRANSITIONS: Dict[VisitStatus, Tuple[VisitStatus, ...]] = {
    VisitStatus.PENDING: (VisitStatus.IN_PROGRESS, VisitStatus.COMPLETED, VisitStatus.CANCELLED),
    VisitStatus.IN_PROGRESS: (VisitStatus.COMPLETED, VisitStatus.CANCELLED),
    VisitStatus.COMPLETED: (),
    VisitStatus.CANCELLED: (),
}

SCHEDULED_TRANSITIONS: Dict[ScheduledVisitStatus, Tuple[ScheduledVisitStatus, ...]] = {
    ScheduledVisitStatus.SCHEDULED: (
        ScheduledVisitStatus.CONFIRMED,
        ScheduledVisitStatus.COMPLETED,
        ScheduledVisitStatus.CANCELLED,
    ),
    ScheduledVisitStatus.CONFIRMED: (ScheduledVisitStatus.COMPLETED, ScheduledVisitStatus.CANCELLED),
    ScheduledVisitStatus.COMPLETED: (),
    ScheduledVisitStatus.CANCELLED: (),
}


def _check_transition(kind: EntityKind, transitions: dict, current: str, new_status):
    try:
        current_status = type(new_status)(current)
    except ValueError:
        # Valor legado fora do enum: trata como estado inicial
        current_status = next(iter(transitions))

    if new_status not in transitions[current_status]:
        raise BusinessRuleError(
            f"Cannot change {kind.value.replace('_', ' ')} status from {current} to {new_status.value}",
            {"from": current, "to": new_status.value},
        )


def _billable_materials(materials: Iterable[MaterialInput]) -> List[MaterialInput]:
    """Valida contra o catálogo e descarta itens com quantidade zero"""
    billable = []
    for material in materials:
        if material.material_type not in MATERIAL_CATALOG:
            raise ValidationError(
                f"Unknown material type: {material.material_type}",
                {"material_type": material.material_type},
            )
        if material.quantity_grams > 0:
            billable.append(material)
    return billable


class VisitService:

    def __init__(self, store: EntityStore):
        self.store = store

    async def _require(self, kind: EntityKind, entity_id: str):
        row = await self.store.get_by_id(kind, entity_id)
        if row is None:
            raise NotFoundError(kind.value, entity_id)
        return row

    async def _record_materials(self, visit_id: str, materials: List[MaterialInput]):
        rows = []
        for material in materials:
            rows.append(await self.store.create(EntityKind.MATERIAL_USAGE, {
                "visit_id": visit_id,
                "material_type": material.material_type,
                "quantity_grams": material.quantity_grams,
                "notes": material.notes,
            }))
        return rows

    async def _schedule_follow_up(self, visit):
        scheduled = await self.store.create(EntityKind.SCHEDULED_VISIT, {
            "well_id": visit.well_id,
            "provider_id": visit.provider_id,
            "scheduled_date": visit.next_visit_date,
            "service_type": visit.service_type,
            "status": ScheduledVisitStatus.SCHEDULED.value,
            "created_from_visit_id": visit.id,
        })
        logger.info("Scheduled follow-up %s from periodic visit %s", scheduled.id, visit.id)
        return scheduled

    async def create_visit(
        self,
        request: VisitCreate,
        photos: Optional[List[UploadFile]] = None,
        documents: Optional[List[UploadFile]] = None
    ):
        """
        Cria a visita numa única transação: anexos, materiais e, para visitas
        periódicas com próxima data, o agendamento. Qualquer erro desfaz tudo
        (inclusive os arquivos já gravados).
        """
        await self._require(EntityKind.WELL, request.well_id)
        await self._require(EntityKind.PROVIDER, request.provider_id)
        materials = _billable_materials(request.materials)

        saved: List[str] = []
        try:
            photo_paths = await save_uploads(photos, PHOTOS, saved)
            document_paths = await save_uploads(documents, DOCUMENTS, saved)

            visit = await self.store.create(EntityKind.VISIT, {
                "well_id": request.well_id,
                "provider_id": request.provider_id,
                "visit_date": request.visit_date,
                "service_type": request.service_type,
                "visit_type": request.visit_type.value,
                "next_visit_date": request.next_visit_date,
                "observations": request.observations,
                "status": request.status.value,
                "photos": photo_paths,
                "documents": document_paths,
            })
            await self._record_materials(visit.id, materials)

            if request.visit_type == VisitType.PERIODIC and request.next_visit_date is not None:
                await self._schedule_follow_up(visit)

            await self.store.commit()
        except Exception:
            await self.store.rollback()
            discard_uploads(saved)
            raise

        logger.info(
            "Created visit %s (well %s, %d materials, %d photos, %d documents)",
            visit.id, visit.well_id, len(materials), len(photo_paths), len(document_paths)
        )
        return visit

    async def add_materials(self, visit_id: str, materials: List[MaterialInput]):
        await self._require(EntityKind.VISIT, visit_id)
        rows = await self._record_materials(visit_id, _billable_materials(materials))
        await self.store.commit()

        logger.info("Added %d materials to visit %s", len(rows), visit_id)
        return rows

    async def update_status(self, visit_id: str, new_status: VisitStatus):
        visit = await self._require(EntityKind.VISIT, visit_id)
        if visit.status == new_status.value:
            return visit

        _check_transition(EntityKind.VISIT, VISIT_TRANSITIONS, visit.status, new_status)
        await self.store.patch_fields(EntityKind.VISIT, visit_id, {"status": new_status.value})

        if (
            new_status == VisitStatus.COMPLETED
            and visit.visit_type == VisitType.PERIODIC.value
            and visit.next_visit_date is not None
            and not await self.store.find_one(EntityKind.SCHEDULED_VISIT, "created_from_visit_id", visit_id)
        ):
            await self._schedule_follow_up(visit)

        await self.store.commit()
        logger.info("Visit %s status -> %s", visit_id, new_status.value)
        return visit

    async def create_scheduled_visit(self, request: ScheduledVisitCreate):
        await self._require(EntityKind.WELL, request.well_id)
        await self._require(EntityKind.PROVIDER, request.provider_id)

        scheduled = await self.store.create(EntityKind.SCHEDULED_VISIT, {
            **request.model_dump(),
            "status": ScheduledVisitStatus.SCHEDULED.value,
        })
        await self.store.commit()

        logger.info("Created scheduled visit %s for well %s", scheduled.id, scheduled.well_id)
        return scheduled

    async def update_scheduled_status(self, scheduled_id: str, new_status: ScheduledVisitStatus):
        scheduled = await self._require(EntityKind.SCHEDULED_VISIT, scheduled_id)
        if scheduled.status == new_status.value:
            return scheduled

        _check_transition(EntityKind.SCHEDULED_VISIT, SCHEDULED_TRANSITIONS, scheduled.status, new_status)
        await self.store.patch_fields(EntityKind.SCHEDULED_VISIT, scheduled_id, {"status": new_status.value})
        await self.store.commit()

        logger.info("Scheduled visit %s status -> %s", scheduled_id, new_status.value)
        return scheduled
