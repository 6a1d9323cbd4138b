"""
EccoServ - Relationship Resolver
Monta as visões "WithDetails" seguindo as chaves estrangeiras
(users <-> clients <-> wells <-> visits <-> invoices <-> material_usage)

Regras:
- só leitura, nunca altera o store e não guarda cache entre chamadas;
- junção tudo-ou-nada: se qualquer elo da cadeia não resolve, o registro
  inteiro sai da listagem (com log de aviso) e, numa consulta de um único
  registro, vira OrphanedReferenceError.
"""
import logging
from collections import defaultdict
from typing import Any, Callable, Dict, Iterable, List, Optional

from eccoserv.core.exceptions import NotFoundError, OrphanedReferenceError
from eccoserv.models import UserType
from eccoserv.schemas import (
    UserOut,
    ClientOut,
    ProviderOut,
    WellOut,
    MaterialUsageOut,
    ClientWithUser,
    ProviderWithUser,
    UserWithProfile,
    WellWithClient,
    VisitWithDetails,
    VisitWithMaterials,
    ScheduledVisitWithDetails,
    InvoiceWithDetails
)
from .store import EntityKind, EntityStore

logger = logging.getLogger(__name__)


class _Unresolved(Exception):
    """Elo da cadeia que não resolveu (uso interno)"""

    def __init__(self, kind: EntityKind, entity_id: Optional[str]):
        super().__init__(f"{kind.value} {entity_id}")
        self.kind = kind
        self.entity_id = entity_id


def _columns(row) -> Dict[str, Any]:
    return {column.key: getattr(row, column.key) for column in row.__table__.columns}


class JoinContext:
    """
    Memo das linhas carregadas durante a montagem de UMA resposta.
    Cada nível da cadeia é buscado em lote (uma consulta por tipo).
    """

    def __init__(self, store: EntityStore):
        self.store = store
        self._rows: Dict[EntityKind, Dict[str, Any]] = defaultdict(dict)

    def seed(self, kind: EntityKind, rows: Iterable[Any]):
        cache = self._rows[kind]
        for row in rows:
            cache[row.id] = row

    async def load(self, kind: EntityKind, ids: Iterable[Optional[str]]) -> List[Any]:
        """Garante as linhas no memo; devolve as encontradas"""
        cache = self._rows[kind]
        wanted = {i for i in ids if i}
        missing = {i for i in wanted if i not in cache}
        if missing:
            found = await self.store.get_many(kind, missing)
            for entity_id in missing:
                cache[entity_id] = found.get(entity_id)
        return [cache[i] for i in wanted if cache[i] is not None]

    def require(self, kind: EntityKind, entity_id: Optional[str]):
        row = self._rows[kind].get(entity_id) if entity_id else None
        if row is None:
            raise _Unresolved(kind, entity_id)
        return row


class RelationshipResolver:
    """Reconstrói visões aninhadas a partir do EntityStore"""

    def __init__(self, store: EntityStore):
        self.store = store

    # ------------------------------------------------------------------
    # carga em lote de cada cadeia
    # ------------------------------------------------------------------

    async def _load_clients(self, ctx: JoinContext, client_ids):
        clients = await ctx.load(EntityKind.CLIENT, client_ids)
        await ctx.load(EntityKind.USER, [c.user_id for c in clients])

    async def _load_providers(self, ctx: JoinContext, provider_ids):
        providers = await ctx.load(EntityKind.PROVIDER, provider_ids)
        await ctx.load(EntityKind.USER, [p.user_id for p in providers])

    async def _load_wells(self, ctx: JoinContext, well_ids):
        wells = await ctx.load(EntityKind.WELL, well_ids)
        await self._load_clients(ctx, [w.client_id for w in wells])

    async def _load_visits(self, ctx: JoinContext, visits):
        ctx.seed(EntityKind.VISIT, visits)
        await self._load_wells(ctx, [v.well_id for v in visits])
        await self._load_providers(ctx, [v.provider_id for v in visits])

    async def _load_invoices(self, ctx: JoinContext, invoices):
        await self._load_clients(ctx, [i.client_id for i in invoices])
        await self._load_providers(ctx, [i.provider_id for i in invoices])
        visits = await ctx.load(EntityKind.VISIT, [i.visit_id for i in invoices])
        await self._load_visits(ctx, visits)

    # ------------------------------------------------------------------
    # montagem (síncrona, depois da carga)
    # ------------------------------------------------------------------

    def _client_with_user(self, ctx: JoinContext, client) -> ClientWithUser:
        user = ctx.require(EntityKind.USER, client.user_id)
        return ClientWithUser.model_validate({**_columns(client), "user": UserOut.model_validate(user)})

    def _provider_with_user(self, ctx: JoinContext, provider) -> ProviderWithUser:
        user = ctx.require(EntityKind.USER, provider.user_id)
        return ProviderWithUser.model_validate({**_columns(provider), "user": UserOut.model_validate(user)})

    def _well_with_client(self, ctx: JoinContext, well) -> WellWithClient:
        client = ctx.require(EntityKind.CLIENT, well.client_id)
        return WellWithClient.model_validate({
            **_columns(well),
            "client": self._client_with_user(ctx, client),
        })

    def _visit_parts(self, ctx: JoinContext, visit) -> Dict[str, Any]:
        well = ctx.require(EntityKind.WELL, visit.well_id)
        provider = ctx.require(EntityKind.PROVIDER, visit.provider_id)
        return {
            **_columns(visit),
            "well": self._well_with_client(ctx, well),
            "provider": self._provider_with_user(ctx, provider),
        }

    def _visit_with_details(self, ctx: JoinContext, visit) -> VisitWithDetails:
        return VisitWithDetails.model_validate(self._visit_parts(ctx, visit))

    def _scheduled_with_details(self, ctx: JoinContext, scheduled) -> ScheduledVisitWithDetails:
        return ScheduledVisitWithDetails.model_validate(self._visit_parts(ctx, scheduled))

    def _invoice_with_details(self, ctx: JoinContext, invoice) -> InvoiceWithDetails:
        client = ctx.require(EntityKind.CLIENT, invoice.client_id)
        provider = ctx.require(EntityKind.PROVIDER, invoice.provider_id)
        visit = ctx.require(EntityKind.VISIT, invoice.visit_id)
        return InvoiceWithDetails.model_validate({
            **_columns(invoice),
            "client": self._client_with_user(ctx, client),
            "provider": self._provider_with_user(ctx, provider),
            "visit": self._visit_with_details(ctx, visit),
        })

    # ------------------------------------------------------------------
    # tudo-ou-nada
    # ------------------------------------------------------------------

    def _collect(self, kind: EntityKind, rows, build: Callable) -> List[Any]:
        views = []
        for row in rows:
            try:
                views.append(build(row))
            except _Unresolved as missing:
                logger.warning(
                    "Dropping %s %s from view: missing %s %s",
                    kind.value, row.id, missing.kind.value, missing.entity_id
                )
        return views

    def _single(self, kind: EntityKind, row, build: Callable):
        try:
            return build(row)
        except _Unresolved as missing:
            raise OrphanedReferenceError(kind.value, row.id, missing.kind.value, missing.entity_id)

    async def _require_root(self, kind: EntityKind, entity_id: str):
        row = await self.store.get_by_id(kind, entity_id)
        if row is None:
            raise NotFoundError(kind.value, entity_id)
        return row

    # ------------------------------------------------------------------
    # usuários e perfis
    # ------------------------------------------------------------------

    async def user_with_profile(self, user_id: str) -> UserWithProfile:
        """Usuário + perfil; perfil ausente é permitido (anexo opcional)"""
        user = await self._require_root(EntityKind.USER, user_id)
        data = {**_columns(user)}
        if user.user_type == UserType.CLIENT.value:
            client = await self.store.find_one(EntityKind.CLIENT, "user_id", user.id)
            data["client"] = ClientOut.model_validate(client) if client else None
        elif user.user_type == UserType.PROVIDER.value:
            provider = await self.store.find_one(EntityKind.PROVIDER, "user_id", user.id)
            data["provider"] = ProviderOut.model_validate(provider) if provider else None
        return UserWithProfile.model_validate(data)

    async def all_clients(self) -> List[ClientWithUser]:
        ctx = JoinContext(self.store)
        clients = await self.store.list_all(EntityKind.CLIENT)
        await ctx.load(EntityKind.USER, [c.user_id for c in clients])
        return self._collect(EntityKind.CLIENT, clients, lambda c: self._client_with_user(ctx, c))

    async def all_providers(self) -> List[ProviderWithUser]:
        ctx = JoinContext(self.store)
        providers = await self.store.list_all(EntityKind.PROVIDER)
        await ctx.load(EntityKind.USER, [p.user_id for p in providers])
        return self._collect(EntityKind.PROVIDER, providers, lambda p: self._provider_with_user(ctx, p))

    # ------------------------------------------------------------------
    # poços
    # ------------------------------------------------------------------

    async def wells_with_client(self) -> List[WellWithClient]:
        ctx = JoinContext(self.store)
        wells = await self.store.list_all(EntityKind.WELL)
        await self._load_clients(ctx, [w.client_id for w in wells])
        return self._collect(EntityKind.WELL, wells, lambda w: self._well_with_client(ctx, w))

    async def wells_by_client(self, client_id: str) -> List[WellOut]:
        wells = await self.store.get_by_foreign_key(EntityKind.WELL, "client_id", client_id)
        return [WellOut.model_validate(w) for w in wells]

    # ------------------------------------------------------------------
    # visitas
    # ------------------------------------------------------------------

    async def _visits_view(self, visits) -> List[VisitWithDetails]:
        ctx = JoinContext(self.store)
        await self._load_visits(ctx, visits)
        views = self._collect(EntityKind.VISIT, visits, lambda v: self._visit_with_details(ctx, v))
        # sort estável: empates mantêm a ordem de inserção
        return sorted(views, key=lambda v: v.visit_date, reverse=True)

    async def visits_with_details(self) -> List[VisitWithDetails]:
        return await self._visits_view(await self.store.list_all(EntityKind.VISIT))

    async def visits_by_client(self, client_id: str) -> List[VisitWithDetails]:
        wells = await self.store.get_by_foreign_key(EntityKind.WELL, "client_id", client_id)
        visits = await self.store.get_by_foreign_keys(EntityKind.VISIT, "well_id", [w.id for w in wells])
        return await self._visits_view(visits)

    async def visits_by_provider(self, provider_id: str) -> List[VisitWithDetails]:
        visits = await self.store.get_by_foreign_key(EntityKind.VISIT, "provider_id", provider_id)
        return await self._visits_view(visits)

    async def visits_by_well(self, well_id: str) -> List[VisitWithDetails]:
        visits = await self.store.get_by_foreign_key(EntityKind.VISIT, "well_id", well_id)
        return await self._visits_view(visits)

    async def visit_with_details(self, visit_id: str) -> VisitWithDetails:
        visit = await self._require_root(EntityKind.VISIT, visit_id)
        ctx = JoinContext(self.store)
        await self._load_visits(ctx, [visit])
        return self._single(EntityKind.VISIT, visit, lambda v: self._visit_with_details(ctx, v))

    async def _attach_materials(self, details: List[VisitWithDetails]) -> List[VisitWithMaterials]:
        usage = await self.store.get_by_foreign_keys(
            EntityKind.MATERIAL_USAGE, "visit_id", [v.id for v in details]
        )
        by_visit = defaultdict(list)
        for row in usage:
            by_visit[row.visit_id].append(MaterialUsageOut.model_validate(row))
        return [
            VisitWithMaterials.model_validate({**dict(v), "materials": by_visit.get(v.id, [])})
            for v in details
        ]

    async def visit_with_materials(self, visit_id: str) -> VisitWithMaterials:
        details = await self.visit_with_details(visit_id)
        return (await self._attach_materials([details]))[0]

    async def visits_with_materials_by_provider(self, provider_id: str) -> List[VisitWithMaterials]:
        return await self._attach_materials(await self.visits_by_provider(provider_id))

    async def materials_for_visit(self, visit_id: str) -> List[MaterialUsageOut]:
        await self._require_root(EntityKind.VISIT, visit_id)
        usage = await self.store.get_by_foreign_key(EntityKind.MATERIAL_USAGE, "visit_id", visit_id)
        return [MaterialUsageOut.model_validate(row) for row in usage]

    # ------------------------------------------------------------------
    # agendamentos
    # ------------------------------------------------------------------

    async def _scheduled_view(self, scheduled) -> List[ScheduledVisitWithDetails]:
        ctx = JoinContext(self.store)
        await self._load_wells(ctx, [s.well_id for s in scheduled])
        await self._load_providers(ctx, [s.provider_id for s in scheduled])
        views = self._collect(
            EntityKind.SCHEDULED_VISIT, scheduled, lambda s: self._scheduled_with_details(ctx, s)
        )
        return sorted(views, key=lambda s: s.scheduled_date)

    async def scheduled_visits_by_client(self, client_id: str) -> List[ScheduledVisitWithDetails]:
        wells = await self.store.get_by_foreign_key(EntityKind.WELL, "client_id", client_id)
        scheduled = await self.store.get_by_foreign_keys(
            EntityKind.SCHEDULED_VISIT, "well_id", [w.id for w in wells]
        )
        return await self._scheduled_view(scheduled)

    async def scheduled_visits_by_provider(self, provider_id: str) -> List[ScheduledVisitWithDetails]:
        scheduled = await self.store.get_by_foreign_key(EntityKind.SCHEDULED_VISIT, "provider_id", provider_id)
        return await self._scheduled_view(scheduled)

    async def scheduled_visit_with_details(self, scheduled_id: str) -> ScheduledVisitWithDetails:
        scheduled = await self._require_root(EntityKind.SCHEDULED_VISIT, scheduled_id)
        ctx = JoinContext(self.store)
        await self._load_wells(ctx, [scheduled.well_id])
        await self._load_providers(ctx, [scheduled.provider_id])
        return self._single(
            EntityKind.SCHEDULED_VISIT, scheduled, lambda s: self._scheduled_with_details(ctx, s)
        )

    # ------------------------------------------------------------------
    # faturas
    # ------------------------------------------------------------------

    async def _invoices_view(self, invoices) -> List[InvoiceWithDetails]:
        ctx = JoinContext(self.store)
        await self._load_invoices(ctx, invoices)
        views = self._collect(EntityKind.INVOICE, invoices, lambda i: self._invoice_with_details(ctx, i))
        return sorted(views, key=lambda i: i.issue_date, reverse=True)

    async def invoices_with_details(self) -> List[InvoiceWithDetails]:
        return await self._invoices_view(await self.store.list_all(EntityKind.INVOICE))

    async def invoices_by_client(self, client_id: str) -> List[InvoiceWithDetails]:
        invoices = await self.store.get_by_foreign_key(EntityKind.INVOICE, "client_id", client_id)
        return await self._invoices_view(invoices)

    async def invoices_by_provider(self, provider_id: str) -> List[InvoiceWithDetails]:
        invoices = await self.store.get_by_foreign_key(EntityKind.INVOICE, "provider_id", provider_id)
        return await self._invoices_view(invoices)

    async def invoice_with_details(self, invoice_id: str) -> InvoiceWithDetails:
        invoice = await self._require_root(EntityKind.INVOICE, invoice_id)
        ctx = JoinContext(self.store)
        await self._load_invoices(ctx, [invoice])
        return self._single(EntityKind.INVOICE, invoice, lambda i: self._invoice_with_details(ctx, i))
