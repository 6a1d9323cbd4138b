"""
EccoServ - Accounts
Cadastro, login, perfis de cliente/prestador, reset de senha e exclusões
"""
import logging
from typing import Tuple

from eccoserv.core import (
    verify_password,
    get_password_hash,
    generate_temporary_password,
    create_access_token,
    AuthenticationError,
    BusinessRuleError,
    NotFoundError,
    OrphanedReferenceError,
    PermissionDeniedError
)
from eccoserv.models import UserType
from eccoserv.schemas import RegisterRequest, ClientCreate, ProviderCreate
from .store import EntityKind, EntityStore

logger = logging.getLogger(__name__)

# Perfil associado a cada tipo de usuário
PROFILE_KINDS = {
    UserType.CLIENT.value: EntityKind.CLIENT,
    UserType.PROVIDER.value: EntityKind.PROVIDER,
}


class AccountService:
    """Operações de conta; cada método faz commit ao final"""

    def __init__(self, store: EntityStore):
        self.store = store

    async def register(self, request: RegisterRequest):
        if request.user_type == UserType.ADMIN:
            # Admins vêm do seed (ADMIN_EMAIL/ADMIN_PASSWORD)
            raise PermissionDeniedError("Admin accounts cannot be self-registered")

        email = str(request.email)
        if await self.store.find_one(EntityKind.USER, "email", email):
            raise BusinessRuleError("Email already registered", {"email": email})

        user = await self.store.create(EntityKind.USER, {
            "email": email,
            "hashed_password": get_password_hash(request.password),
            "name": request.name,
            "user_type": request.user_type.value,
        })
        await self.store.commit()

        logger.info("Registered %s user %s", user.user_type, user.id)
        return user

    async def ensure_user(self, email: str, password: str, name: str, user_type: UserType):
        """Cria o usuário se o email ainda não existe (seed / admin inicial)"""
        user = await self.store.find_one(EntityKind.USER, "email", email)
        if user is not None:
            return user, False
        user = await self.store.create(EntityKind.USER, {
            "email": email,
            "hashed_password": get_password_hash(password),
            "name": name,
            "user_type": user_type.value,
        })
        return user, True

    async def authenticate(self, email: str, password: str, user_type: UserType) -> Tuple[object, str]:
        """Email, senha e tipo precisam bater; retorna (usuário, token)"""
        user = await self.store.find_one(EntityKind.USER, "email", email)

        if (
            not user
            or user.user_type != user_type.value
            or not verify_password(password, user.hashed_password)
        ):
            raise AuthenticationError("Invalid credentials")

        access_token = create_access_token(
            data={"sub": user.id, "email": user.email, "type": user.user_type}
        )
        logger.info("User %s logged in", user.id)
        return user, access_token

    async def _create_profile(self, kind: EntityKind, user_id: str, data: dict):
        user = await self.store.get_by_id(EntityKind.USER, user_id)
        if user is None:
            raise NotFoundError(EntityKind.USER.value, user_id)

        if PROFILE_KINDS.get(user.user_type) != kind:
            raise BusinessRuleError(
                f"User is not a {kind.value}",
                {"user_id": user_id, "user_type": user.user_type},
            )

        if await self.store.find_one(kind, "user_id", user_id):
            raise BusinessRuleError(
                f"{kind.value.capitalize()} profile already exists",
                {"user_id": user_id},
            )

        profile = await self.store.create(kind, {"user_id": user_id, **data})
        await self.store.commit()

        logger.info("Created %s profile %s for user %s", kind.value, profile.id, user_id)
        return profile

    async def create_client(self, request: ClientCreate):
        return await self._create_profile(
            EntityKind.CLIENT,
            request.user_id,
            {"address": request.address, "phone": request.phone},
        )

    async def create_provider(self, request: ProviderCreate):
        return await self._create_profile(
            EntityKind.PROVIDER,
            request.user_id,
            {"specialties": list(request.specialties), "phone": request.phone},
        )

    async def reset_password(self, kind: EntityKind, profile_id: str) -> Tuple[object, str]:
        """Gera senha temporária para o usuário dono do perfil"""
        profile = await self.store.get_by_id(kind, profile_id)
        if profile is None:
            raise NotFoundError(kind.value, profile_id)

        user = await self.store.get_by_id(EntityKind.USER, profile.user_id)
        if user is None:
            raise OrphanedReferenceError(kind.value, profile_id, EntityKind.USER.value, profile.user_id)

        temporary_password = generate_temporary_password()
        await self.store.patch_fields(
            EntityKind.USER, user.id, {"hashed_password": get_password_hash(temporary_password)}
        )
        await self.store.commit()

        logger.info("Password reset for user %s (%s %s)", user.id, kind.value, profile_id)
        return user, temporary_password

    async def delete_provider(self, provider_id: str):
        """Remove o prestador e o usuário dele, se nada mais o referencia"""
        provider = await self.store.get_by_id(EntityKind.PROVIDER, provider_id)
        if provider is None:
            raise NotFoundError(EntityKind.PROVIDER.value, provider_id)

        for kind in (EntityKind.VISIT, EntityKind.SCHEDULED_VISIT, EntityKind.INVOICE):
            if await self.store.find_one(kind, "provider_id", provider_id):
                raise BusinessRuleError(
                    f"Provider has {kind.value.replace('_', ' ')} records and cannot be deleted",
                    {"provider_id": provider_id, "referenced_by": kind.value},
                )

        user_id = provider.user_id
        await self.store.delete(EntityKind.PROVIDER, provider_id)
        await self.store.delete(EntityKind.USER, user_id)
        await self.store.commit()

        logger.info("Deleted provider %s and user %s", provider_id, user_id)

    async def delete_user(self, user_id: str):
        if await self.store.get_by_id(EntityKind.USER, user_id) is None:
            raise NotFoundError(EntityKind.USER.value, user_id)

        for kind in (EntityKind.CLIENT, EntityKind.PROVIDER):
            if await self.store.find_one(kind, "user_id", user_id):
                raise BusinessRuleError(
                    f"User has a {kind.value} profile and cannot be deleted",
                    {"user_id": user_id},
                )

        await self.store.delete(EntityKind.USER, user_id)
        await self.store.commit()
        logger.info("Deleted user %s", user_id)
