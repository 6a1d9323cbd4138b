"""
EccoServ - Auth API
Cadastro, login e perfil do usuário
"""
from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from slowapi import Limiter
from slowapi.util import get_remote_address

from eccoserv.core import settings, verify_access_token
from eccoserv.models import User, UserType
from eccoserv.schemas import RegisterRequest, RegisterResponse, LoginRequest
from eccoserv.services import EntityKind, EntityStore, RelationshipResolver, AccountService
from .deps import get_store, get_resolver, get_account_service

router = APIRouter(tags=["Authentication"])
security = HTTPBearer()

limiter = Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    store: EntityStore = Depends(get_store)
) -> User:
    """Dependency para obter usuário autenticado"""
    payload = verify_access_token(credentials.credentials)

    if not payload:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token"
        )

    user = await store.get_by_id(EntityKind.USER, payload.get("sub"))
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found"
        )

    return user


async def get_current_admin(user: User = Depends(get_current_user)) -> User:
    """Dependency para rotas administrativas"""
    if user.user_type != UserType.ADMIN.value:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required"
        )
    return user


@router.post("/register", response_model=RegisterResponse)
async def register(
    payload: RegisterRequest,
    accounts: AccountService = Depends(get_account_service)
):
    """Cadastro de cliente ou prestador"""
    user = await accounts.register(payload)
    return RegisterResponse.model_validate(user)


@router.post("/auth/login")
@limiter.limit(settings.LOGIN_RATE_LIMIT)
async def login(
    request: Request,
    payload: LoginRequest,
    accounts: AccountService = Depends(get_account_service),
    resolver: RelationshipResolver = Depends(get_resolver)
):
    """Login (email + senha + tipo de usuário)"""
    user, access_token = await accounts.authenticate(
        str(payload.email), payload.password, payload.user_type
    )
    return {
        "accessToken": access_token,
        "tokenType": "bearer",
        "user": await resolver.user_with_profile(user.id),
    }


@router.get("/auth/me")
async def get_me(
    user: User = Depends(get_current_user),
    resolver: RelationshipResolver = Depends(get_resolver)
):
    """Retorna dados do usuário atual"""
    return {"user": await resolver.user_with_profile(user.id)}


@router.get("/auth/profile/{user_id}")
async def get_profile(
    user_id: str,
    resolver: RelationshipResolver = Depends(get_resolver)
):
    """Usuário com perfil de cliente/prestador"""
    return {"user": await resolver.user_with_profile(user_id)}
