from datetime import datetime

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from promotheans_api.api.deps import require_roles
from promotheans_api.db.session import get_db
from promotheans_api.models.audit_logs import AssetCleanupFailure
from promotheans_api.models.users import UserRole

router = APIRouter(prefix="/admin", tags=["admin"])


class CleanupFailureOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    image_path: str
    backend: str
    error: str
    created_at: datetime


@router.get(
    "/asset-cleanup-failures",
    response_model=list[CleanupFailureOut],
    dependencies=[Depends(require_roles(UserRole.admin.value))],
)
async def list_cleanup_failures(db: AsyncSession = Depends(get_db)):
    """Images that could not be removed after their art record changed or was deleted."""
    res = await db.execute(
        select(AssetCleanupFailure).order_by(AssetCleanupFailure.created_at.desc(), AssetCleanupFailure.id.desc())
    )
    return res.scalars().all()
