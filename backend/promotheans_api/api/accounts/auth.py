from fastapi import APIRouter, Depends
from fastapi.security import HTTPAuthorizationCredentials
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from promotheans_api.api.deps import bearer, get_current_user, get_token_service
from promotheans_api.core.errors import Unauthorized, ValidationError
from promotheans_api.core.security import TokenIdentity, TokenService
from promotheans_api.db.session import get_db
from promotheans_api.models.users import AdminUser
from promotheans_api.repositories.users import UserRepository

router = APIRouter(prefix="/auth", tags=["auth"])


class LoginIn(BaseModel):
    username: str | None = None
    password: str | None = None


class UserOut(BaseModel):
    id: int
    username: str
    role: str

    @classmethod
    def from_user(cls, user: AdminUser) -> "UserOut":
        return cls(id=user.id, username=user.username, role=user.user_role)


class LoginOut(BaseModel):
    success: bool = True
    token: str
    user: UserOut


class CheckOut(BaseModel):
    valid: bool
    user: UserOut


@router.post("/verify-access", response_model=LoginOut)
async def verify_access(
    payload: LoginIn,
    db: AsyncSession = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    if not payload.username or not payload.password:
        raise ValidationError("Username and password are required")

    user = await UserRepository(db).authenticate(payload.username, payload.password)
    if user is None:
        raise Unauthorized("Invalid credentials")

    token = tokens.issue(TokenIdentity(id=user.id, username=user.username, role=user.user_role))
    return LoginOut(token=token, user=UserOut.from_user(user))


async def _checked_user(
    creds: HTTPAuthorizationCredentials | None = Depends(bearer),
    tokens: TokenService = Depends(get_token_service),
    db: AsyncSession = Depends(get_db),
) -> AdminUser:
    try:
        return await get_current_user(creds=creds, tokens=tokens, db=db)
    except Unauthorized as e:
        raise Unauthorized(e.message, valid=False)


@router.get("/check", response_model=CheckOut)
async def check(user: AdminUser = Depends(_checked_user)):
    return CheckOut(valid=True, user=UserOut.from_user(user))
