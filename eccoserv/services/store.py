"""
EccoServ - Entity Store
Acesso genérico por tipo de entidade (get por id, por chave estrangeira,
listagem e patch de campos) sobre uma AsyncSession injetada
"""
import enum
import uuid
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from eccoserv.models import (
    User,
    Client,
    Provider,
    Well,
    Visit,
    ScheduledVisit,
    Invoice,
    MaterialUsage
)


class EntityKind(str, enum.Enum):
    USER = "user"
    CLIENT = "client"
    PROVIDER = "provider"
    WELL = "well"
    VISIT = "visit"
    SCHEDULED_VISIT = "scheduled_visit"
    INVOICE = "invoice"
    MATERIAL_USAGE = "material_usage"


MODELS = {
    EntityKind.USER: User,
    EntityKind.CLIENT: Client,
    EntityKind.PROVIDER: Provider,
    EntityKind.WELL: Well,
    EntityKind.VISIT: Visit,
    EntityKind.SCHEDULED_VISIT: ScheduledVisit,
    EntityKind.INVOICE: Invoice,
    EntityKind.MATERIAL_USAGE: MaterialUsage,
}

IMMUTABLE_FIELDS = ("id", "created_at")


def _model(kind: EntityKind):
    return MODELS[EntityKind(kind)]


def _column(model, field: str):
    if field not in model.__table__.columns:
        raise ValueError(f"{model.__tablename__} has no field {field!r}")
    return getattr(model, field)


class EntityStore:
    """
    Armazenamento por tipo de entidade.

    Não faz commit sozinho: create/patch/delete apenas dão flush e quem chama
    decide a fronteira da transação (commit/rollback).
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, kind: EntityKind, data: Dict[str, Any]):
        """Persiste um novo registro; gera id e created_at quando ausentes"""
        model = _model(kind)
        values = dict(data)
        if not values.get("id"):
            values["id"] = str(uuid.uuid4())
        if not values.get("created_at"):
            values["created_at"] = datetime.utcnow()

        row = model(**values)
        self.session.add(row)
        await self.session.flush()
        return row

    async def get_by_id(self, kind: EntityKind, entity_id: Optional[str]):
        """Retorna o registro ou None (nunca levanta)"""
        if not entity_id:
            return None
        return await self.session.get(_model(kind), entity_id)

    async def get_many(self, kind: EntityKind, ids: Iterable[Optional[str]]) -> Dict[str, Any]:
        """Busca em lote; ids inexistentes simplesmente não aparecem no dict"""
        wanted = {i for i in ids if i}
        if not wanted:
            return {}
        model = _model(kind)
        result = await self.session.execute(select(model).where(model.id.in_(wanted)))
        return {row.id: row for row in result.scalars().all()}

    async def get_by_foreign_key(self, kind: EntityKind, fk_field: str, value: Any) -> List[Any]:
        """Filtra por um campo, em ordem de inserção"""
        model = _model(kind)
        column = _column(model, fk_field)
        result = await self.session.execute(
            select(model).where(column == value).order_by(model.created_at)
        )
        return list(result.scalars().all())

    async def get_by_foreign_keys(self, kind: EntityKind, fk_field: str, values: Iterable[Any]) -> List[Any]:
        """Como get_by_foreign_key, para vários valores numa consulta só"""
        wanted = {v for v in values if v is not None}
        if not wanted:
            return []
        model = _model(kind)
        column = _column(model, fk_field)
        result = await self.session.execute(
            select(model).where(column.in_(wanted)).order_by(model.created_at)
        )
        return list(result.scalars().all())

    async def find_one(self, kind: EntityKind, field: str, value: Any):
        rows = await self.get_by_foreign_key(kind, field, value)
        return rows[0] if rows else None

    async def list_all(
        self,
        kind: EntityKind,
        created_from: Optional[datetime] = None,
        created_to: Optional[datetime] = None
    ) -> List[Any]:
        """Lista todos os registros (limites de created_at inclusivos)"""
        model = _model(kind)
        query = select(model)
        if created_from is not None:
            query = query.where(model.created_at >= created_from)
        if created_to is not None:
            query = query.where(model.created_at <= created_to)
        result = await self.session.execute(query.order_by(model.created_at))
        return list(result.scalars().all())

    async def patch_fields(self, kind: EntityKind, entity_id: str, partial: Dict[str, Any]):
        """Merge raso; no-op silencioso (retorna None) se o id não existe"""
        row = await self.get_by_id(kind, entity_id)
        if row is None:
            return None

        model = _model(kind)
        for field, value in partial.items():
            if field in IMMUTABLE_FIELDS:
                raise ValueError(f"{field} is immutable")
            _column(model, field)
            setattr(row, field, value)

        await self.session.flush()
        return row

    async def delete(self, kind: EntityKind, entity_id: str) -> bool:
        row = await self.get_by_id(kind, entity_id)
        if row is None:
            return False
        await self.session.delete(row)
        await self.session.flush()
        return True

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
