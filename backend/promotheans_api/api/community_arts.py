from datetime import datetime

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, field_validator
from sqlalchemy.ext.asyncio import AsyncSession

from promotheans_api.api.deps import get_asset_manager, get_current_user
from promotheans_api.db.session import get_db
from promotheans_api.repositories.community_arts import CommunityArtRepository, clean_artist_name
from promotheans_api.services.assets import AssetLifecycleManager

router = APIRouter(prefix="/community-arts", tags=["community-arts"])


class CommunityArtIn(BaseModel):
    # `image` is a path previously returned by POST /upload/community-art
    image: str | None = None
    title: str | None = None
    category: str | None = None
    artist: str | None = None
    xHandle: str | None = None
    xUrl: str | None = None
    description: str | None = None


class CommunityArtOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    image: str
    title: str | None = None
    category: str
    artist: str
    xHandle: str | None = None
    xUrl: str | None = None
    description: str | None = None
    created_at: datetime
    updated_at: datetime

    @field_validator("artist")
    @classmethod
    def _strip_art_suffix(cls, v: str) -> str:
        return clean_artist_name(v)


@router.get("", response_model=list[CommunityArtOut])
async def list_arts(db: AsyncSession = Depends(get_db)):
    return await CommunityArtRepository(db).list()


@router.get("/{art_id}", response_model=CommunityArtOut)
async def get_art(art_id: int, db: AsyncSession = Depends(get_db)):
    return await CommunityArtRepository(db).get(art_id)


@router.post("", response_model=CommunityArtOut, status_code=201, dependencies=[Depends(get_current_user)])
async def create_art(payload: CommunityArtIn, db: AsyncSession = Depends(get_db)):
    return await CommunityArtRepository(db).create(payload.model_dump())


@router.put("/{art_id}", response_model=CommunityArtOut, dependencies=[Depends(get_current_user)])
async def update_art(
    art_id: int,
    payload: CommunityArtIn,
    db: AsyncSession = Depends(get_db),
    assets: AssetLifecycleManager = Depends(get_asset_manager),
):
    art, previous_image = await CommunityArtRepository(db).update(art_id, payload.model_dump())
    out = CommunityArtOut.model_validate(art)
    await assets.replace(previous_image, art.image)
    return out


@router.delete("/{art_id}", dependencies=[Depends(get_current_user)])
async def delete_art(
    art_id: int,
    db: AsyncSession = Depends(get_db),
    assets: AssetLifecycleManager = Depends(get_asset_manager),
):
    image = await CommunityArtRepository(db).delete(art_id)
    await assets.discard(image)
    return {"success": True, "message": "Art item and associated image deleted successfully"}
