from datetime import datetime

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict
from sqlalchemy.ext.asyncio import AsyncSession

from promotheans_api.api.deps import require_roles
from promotheans_api.db.session import get_db
from promotheans_api.models.users import UserRole
from promotheans_api.repositories.youtube import YoutubeSettingRepository

router = APIRouter(prefix="/youtube-video", tags=["youtube"])


class YoutubeVideoIn(BaseModel):
    video_url: str | None = None


class YoutubeVideoOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    video_id: str
    video_url: str
    updated_at: datetime | None = None


@router.get("", response_model=YoutubeVideoOut)
async def get_video(db: AsyncSession = Depends(get_db)):
    return await YoutubeSettingRepository(db).get()


@router.put("", dependencies=[Depends(require_roles(UserRole.admin.value))])
async def update_video(payload: YoutubeVideoIn, db: AsyncSession = Depends(get_db)):
    video = await YoutubeSettingRepository(db).update(payload.video_url)
    return {
        "id": video.id,
        "video_id": video.video_id,
        "video_url": video.video_url,
        "message": "YouTube video updated successfully",
    }
