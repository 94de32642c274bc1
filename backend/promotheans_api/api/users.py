from datetime import datetime

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict
from sqlalchemy.ext.asyncio import AsyncSession

from promotheans_api.api.deps import require_roles
from promotheans_api.db.session import get_db
from promotheans_api.models.users import AdminUser, UserRole
from promotheans_api.repositories.users import UserRepository

router = APIRouter(prefix="/users", tags=["users"])

admin_only = require_roles(UserRole.admin.value)


class UserIn(BaseModel):
    username: str | None = None
    password: str | None = None
    user_role: str | None = None


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    user_role: str
    created_at: datetime
    updated_at: datetime


@router.get("", response_model=list[UserOut])
async def list_users(_: AdminUser = Depends(admin_only), db: AsyncSession = Depends(get_db)):
    return await UserRepository(db).list()


@router.get("/{user_id}", response_model=UserOut)
async def get_user(user_id: int, _: AdminUser = Depends(admin_only), db: AsyncSession = Depends(get_db)):
    return await UserRepository(db).get(user_id)


@router.post("", status_code=201)
async def create_user(payload: UserIn, _: AdminUser = Depends(admin_only), db: AsyncSession = Depends(get_db)):
    user = await UserRepository(db).create(payload.username, payload.password, payload.user_role)
    return {
        "id": user.id,
        "username": user.username,
        "user_role": user.user_role,
        "message": "User created successfully",
    }


@router.put("/{user_id}")
async def update_user(
    user_id: int,
    payload: UserIn,
    _: AdminUser = Depends(admin_only),
    db: AsyncSession = Depends(get_db),
):
    user = await UserRepository(db).update(user_id, payload.username, payload.password, payload.user_role)
    return {
        "id": user.id,
        "username": user.username,
        "user_role": user.user_role,
        "message": "User updated successfully",
    }


@router.delete("/{user_id}")
async def delete_user(user_id: int, current: AdminUser = Depends(admin_only), db: AsyncSession = Depends(get_db)):
    await UserRepository(db).delete(user_id, acting_user_id=current.id)
    return {"message": "User deleted successfully"}
