from __future__ import annotations

from typing import Any, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from promotheans_api.core.errors import NotFound, ValidationError
from promotheans_api.models.news import NewsItem

REQUIRED_FIELDS = ("date", "category", "title", "excerpt")
DEFAULT_TIMEZONE = "(UTC)"


def _normalize(fields: dict[str, Any]) -> dict[str, Any]:
    missing = [f for f in REQUIRED_FIELDS if not fields.get(f)]
    if missing:
        raise ValidationError("Missing required fields: " + ", ".join(missing))
    return {
        "date": fields["date"],
        "timezone": fields.get("timezone") or DEFAULT_TIMEZONE,
        "category": fields["category"],
        "title": fields["title"],
        "excerpt": fields["excerpt"],
        "link": fields.get("link") or None,
        "featured": bool(fields.get("featured") or False),
    }


class NewsRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list(self) -> Sequence[NewsItem]:
        res = await self.db.execute(
            select(NewsItem).order_by(NewsItem.date.desc(), NewsItem.created_at.desc(), NewsItem.id.desc())
        )
        return res.scalars().all()

    async def get(self, news_id: int) -> NewsItem:
        item = await self.db.get(NewsItem, news_id)
        if item is None:
            raise NotFound("News item not found")
        return item

    async def create(self, fields: dict[str, Any]) -> NewsItem:
        item = NewsItem(**_normalize(fields))
        self.db.add(item)
        await self.db.commit()
        await self.db.refresh(item)
        return item

    async def update(self, news_id: int, fields: dict[str, Any]) -> NewsItem:
        item = await self.get(news_id)
        for key, value in _normalize(fields).items():
            setattr(item, key, value)
        await self.db.commit()
        await self.db.refresh(item)
        return item

    async def delete(self, news_id: int) -> None:
        item = await self.get(news_id)
        await self.db.delete(item)
        await self.db.commit()
