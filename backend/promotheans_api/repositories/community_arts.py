from __future__ import annotations

import re
from typing import Any, Sequence

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from promotheans_api.core.errors import Conflict, NotFound, ValidationError
from promotheans_api.models.community_arts import CommunityArt
from promotheans_api.services.assets import canonical_asset_path

REQUIRED_FIELDS = ("image", "category", "artist")

IMAGE_IN_USE = "Image is already used by another art item"

_ART_SUFFIX = re.compile(r"\s+ART\s*$", re.IGNORECASE)


def clean_artist_name(name: str | None) -> str | None:
    """Strip a trailing " ART" (any case, any surrounding whitespace) from an artist name."""
    if not name:
        return name
    return _ART_SUFFIX.sub("", name.strip()).strip()


def _normalize(fields: dict[str, Any]) -> dict[str, Any]:
    missing = [f for f in REQUIRED_FIELDS if not fields.get(f)]
    if missing:
        raise ValidationError("Missing required fields: " + ", ".join(REQUIRED_FIELDS))
    return {
        "image": canonical_asset_path(fields["image"]),
        "title": fields.get("title") or "",
        "category": fields["category"],
        "artist": clean_artist_name(fields["artist"]),
        "xHandle": fields.get("xHandle") or None,
        "xUrl": fields.get("xUrl") or None,
        "description": fields.get("description") or None,
    }


class CommunityArtRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list(self) -> Sequence[CommunityArt]:
        res = await self.db.execute(
            select(CommunityArt).order_by(CommunityArt.created_at.desc(), CommunityArt.id.desc())
        )
        return res.scalars().all()

    async def get(self, art_id: int) -> CommunityArt:
        art = await self.db.get(CommunityArt, art_id)
        if art is None:
            raise NotFound("Art item not found")
        return art

    async def _find_by_image(self, image: str, exclude_id: int | None = None) -> CommunityArt | None:
        stmt = select(CommunityArt).where(CommunityArt.image == image)
        if exclude_id is not None:
            stmt = stmt.where(CommunityArt.id != exclude_id)
        res = await self.db.execute(stmt)
        return res.scalars().first()

    async def _commit(self) -> None:
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise Conflict(IMAGE_IN_USE)

    async def create(self, fields: dict[str, Any]) -> CommunityArt:
        values = _normalize(fields)
        if await self._find_by_image(values["image"]):
            raise Conflict(IMAGE_IN_USE)

        art = CommunityArt(**values)
        self.db.add(art)
        await self._commit()
        await self.db.refresh(art)
        return art

    async def update(self, art_id: int, fields: dict[str, Any]) -> tuple[CommunityArt, str]:
        """Returns the updated record and the image path it referenced before."""
        art = await self.get(art_id)
        values = _normalize(fields)
        if await self._find_by_image(values["image"], exclude_id=art_id):
            raise Conflict(IMAGE_IN_USE)

        previous_image = art.image
        for key, value in values.items():
            setattr(art, key, value)
        await self._commit()
        await self.db.refresh(art)
        return art, previous_image

    async def delete(self, art_id: int) -> str:
        """Deletes the record and returns the image path it owned."""
        art = await self.get(art_id)
        image = art.image
        await self.db.delete(art)
        await self.db.commit()
        return image
