from __future__ import annotations

from typing import Sequence

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from promotheans_api.core import security
from promotheans_api.core.errors import Conflict, NotFound, ValidationError
from promotheans_api.models.users import AdminUser, UserRole

ROLES = tuple(r.value for r in UserRole)

LAST_ADMIN_DELETE = (
    "Cannot delete the last remaining Admin user. At least one Admin user must exist in the system."
)
LAST_ADMIN_DOWNGRADE = (
    "Cannot change the role of the last remaining Admin user to Editor. "
    "At least one Admin user must exist in the system."
)


def _hash(password: str) -> str:
    try:
        return security.hash_password(password)
    except ValueError as e:
        raise ValidationError(str(e))


class UserRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list(self) -> Sequence[AdminUser]:
        res = await self.db.execute(
            select(AdminUser).order_by(AdminUser.created_at.desc(), AdminUser.id.desc())
        )
        return res.scalars().all()

    async def get(self, user_id: int) -> AdminUser:
        user = await self.db.get(AdminUser, user_id)
        if user is None:
            raise NotFound("User not found")
        return user

    async def find(self, user_id: int) -> AdminUser | None:
        return await self.db.get(AdminUser, user_id)

    async def get_by_username(self, username: str, exclude_id: int | None = None) -> AdminUser | None:
        stmt = select(AdminUser).where(AdminUser.username == username)
        if exclude_id is not None:
            stmt = stmt.where(AdminUser.id != exclude_id)
        res = await self.db.execute(stmt)
        return res.scalar_one_or_none()

    async def count_admins(self) -> int:
        res = await self.db.execute(
            select(func.count()).select_from(AdminUser).where(AdminUser.user_role == UserRole.admin.value)
        )
        return int(res.scalar_one())

    async def authenticate(self, username: str, password: str) -> AdminUser | None:
        user = await self.get_by_username(username)
        if user is None or not security.verify_password(password, user.password_hash):
            return None
        return user

    async def create(self, username: str | None, password: str | None, user_role: str | None) -> AdminUser:
        username = (username or "").strip()
        if not username or not password:
            raise ValidationError("Username and password are required")
        if user_role not in ROLES:
            raise ValidationError("Valid user_role (Admin or Editor) is required")
        if await self.get_by_username(username):
            raise Conflict("Username already exists")

        user = AdminUser(username=username, password_hash=_hash(password), user_role=user_role)
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise Conflict("Username already exists")
        await self.db.refresh(user)
        return user

    async def update(
        self,
        user_id: int,
        username: str | None = None,
        password: str | None = None,
        user_role: str | None = None,
    ) -> AdminUser:
        user = await self.get(user_id)
        username = (username or "").strip() or None

        if user_role is not None and user_role not in ROLES:
            raise ValidationError("Valid user_role (Admin or Editor) is required")
        if not (username or password or user_role):
            raise ValidationError("No valid fields to update")
        if username and await self.get_by_username(username, exclude_id=user_id):
            raise Conflict("Username already exists")
        if user_role and user_role != UserRole.admin.value and user.is_admin:
            if await self.count_admins() <= 1:
                raise Conflict(LAST_ADMIN_DOWNGRADE)

        if username:
            user.username = username
        if password:
            user.password_hash = _hash(password)
        if user_role:
            user.user_role = user_role

        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise Conflict("Username already exists")
        await self.db.refresh(user)
        return user

    async def delete(self, user_id: int, acting_user_id: int) -> None:
        user = await self.get(user_id)
        if user.id == acting_user_id:
            raise ValidationError("Cannot delete your own account")
        if user.is_admin and await self.count_admins() <= 1:
            raise Conflict(LAST_ADMIN_DELETE)
        await self.db.delete(user)
        await self.db.commit()
