from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from promotheans_api.core.errors import Forbidden, Unauthorized
from promotheans_api.core.security import InvalidToken, TokenService
from promotheans_api.db.session import get_db
from promotheans_api.models.users import AdminUser
from promotheans_api.repositories.users import UserRepository
from promotheans_api.services.assets import AssetLifecycleManager
from promotheans_api.services.storage import StorageBackend
from promotheans_api.services.uploads import UploadResolver

bearer = HTTPBearer(auto_error=False)


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_storage(request: Request) -> StorageBackend:
    return request.app.state.storage


def get_upload_resolver(request: Request) -> UploadResolver:
    return request.app.state.upload_resolver


def get_asset_manager(
    storage: StorageBackend = Depends(get_storage),
    db: AsyncSession = Depends(get_db),
) -> AssetLifecycleManager:
    return AssetLifecycleManager(storage, db)


async def get_current_user(
    creds: HTTPAuthorizationCredentials | None = Depends(bearer),
    tokens: TokenService = Depends(get_token_service),
    db: AsyncSession = Depends(get_db),
) -> AdminUser:
    if not creds:
        raise Unauthorized("Access token required")

    try:
        identity = tokens.verify(creds.credentials)
    except InvalidToken:
        raise Unauthorized("Invalid or expired token")

    # the token proves identity only; role and existence come from the database
    # ids can be reused after a delete (sqlite rowids), so the username must match too
    user = await UserRepository(db).find(identity.id)
    if user is None or user.username != identity.username:
        raise Unauthorized("User no longer exists")
    return user


def require_roles(*roles: str):
    async def _guard(user: AdminUser = Depends(get_current_user)) -> AdminUser:
        if user.user_role not in roles:
            raise Forbidden(f"Access denied. {' or '.join(roles)} role required.")
        return user
    return _guard
