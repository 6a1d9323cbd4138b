"""
EccoServ - Wells
"""
import logging

from eccoserv.core import BusinessRuleError, NotFoundError
from eccoserv.models import WellStatus
from eccoserv.schemas import WellCreate
from .store import EntityKind, EntityStore

logger = logging.getLogger(__name__)


class WellService:

    def __init__(self, store: EntityStore):
        self.store = store

    async def create_well(self, request: WellCreate):
        if await self.store.get_by_id(EntityKind.CLIENT, request.client_id) is None:
            raise NotFoundError(EntityKind.CLIENT.value, request.client_id)

        data = request.model_dump()
        data["status"] = request.status.value
        well = await self.store.create(EntityKind.WELL, data)
        await self.store.commit()

        logger.info("Created well %s for client %s", well.id, well.client_id)
        return well

    async def update_status(self, well_id: str, new_status: WellStatus):
        # Sem máquina de estados: qualquer status válido é aceito
        well = await self.store.patch_fields(EntityKind.WELL, well_id, {"status": new_status.value})
        if well is None:
            raise NotFoundError(EntityKind.WELL.value, well_id)
        await self.store.commit()

        logger.info("Well %s status -> %s", well_id, new_status.value)
        return well

    async def delete_well(self, well_id: str):
        if await self.store.get_by_id(EntityKind.WELL, well_id) is None:
            raise NotFoundError(EntityKind.WELL.value, well_id)

        for kind in (EntityKind.VISIT, EntityKind.SCHEDULED_VISIT):
            if await self.store.find_one(kind, "well_id", well_id):
                raise BusinessRuleError(
                    f"Well has {kind.value.replace('_', ' ')} records and cannot be deleted",
                    {"well_id": well_id, "referenced_by": kind.value},
                )

        await self.store.delete(EntityKind.WELL, well_id)
        await self.store.commit()
        logger.info("Deleted well %s", well_id)
