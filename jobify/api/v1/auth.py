# jobify/api/v1/auth.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.security import APIKeyHeader, HTTPAuthorizationCredentials, HTTPBearer

from jobify.api.v1.schemas import (
    LoginIn,
    LoginOut,
    ProfileUpdate,
    RegisterIn,
    TokenOut,
    UserOut,
    UserSummary,
)
from jobify.core.errors import AuthError, ForbiddenError, ValidationError
from jobify.core.security import create_access_token, decode_access_token, verify_password
from jobify.db.documents import Role, User
from jobify.repositories.users import create_user, get_user, get_user_by_email, update_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])

# The token travels in `x-auth-token`; `Authorization: Bearer` is accepted too
token_header = APIKeyHeader(name="x-auth-token", auto_error=False)
bearer = HTTPBearer(auto_error=False)

INVALID_CREDENTIALS = "Invalid credentials"


async def get_current_user(
    token: Optional[str] = Depends(token_header),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
) -> User:
    if not token and credentials is not None:
        token = credentials.credentials
    if not token:
        raise AuthError("No token, authorization denied")
    user_id = decode_access_token(token)
    user = await get_user(user_id)
    if user is None:
        raise AuthError("User not found, authorization denied")
    return user


def require_roles(*roles: Role):
    """Dependency factory: only identities holding one of `roles` get through."""

    async def checker(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in roles:
            raise ForbiddenError("Not authorized to access this resource")
        return current_user

    return checker


def is_owner_or_admin(user: User, owner_id) -> bool:
    return user.role == Role.ADMIN or owner_id == user.id


@router.post("/register", response_model=TokenOut)
async def register(payload: RegisterIn):
    user = await create_user(payload.name, payload.email, payload.password, payload.role)
    return {"token": create_access_token(str(user.id))}


@router.post("/login", response_model=LoginOut)
async def login(payload: LoginIn):
    user = await get_user_by_email(payload.email)
    # same answer for unknown email and wrong password
    if not user or not verify_password(payload.password, user.password):
        logger.info("Failed login for %s", payload.email)
        raise AuthError(INVALID_CREDENTIALS)
    return {
        "token": create_access_token(str(user.id)),
        "user": UserSummary(id=str(user.id), name=user.name, email=user.email, role=user.role),
    }


@router.get("/me", response_model=UserOut)
async def me(current_user: User = Depends(get_current_user)):
    return UserOut.from_document(current_user)


@router.put("/update", response_model=UserOut)
async def update_profile(payload: ProfileUpdate, current_user: User = Depends(get_current_user)):
    fields = payload.profile_fields()
    if payload.wants_password_change:
        if not verify_password(payload.current_password, current_user.password):
            raise ValidationError("Current password is incorrect")
        fields["password"] = payload.new_password
    user = await update_user(current_user, fields)
    return UserOut.from_document(user)
