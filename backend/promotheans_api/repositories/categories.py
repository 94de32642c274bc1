"""
Category taxonomies for news items and community art.

Items carry the category *name* rather than a foreign key, so the
repository keeps the two in step itself: a rename rewrites every item
using the old name inside the same transaction, and a category cannot be
deleted while any item still uses it.
"""

from __future__ import annotations

from typing import Sequence

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from promotheans_api.core.errors import Conflict, NotFound, ValidationError
from promotheans_api.models.community_arts import ArtCategory, CommunityArt
from promotheans_api.models.news import NewsCategory, NewsItem


def clean_name(name: str | None) -> str:
    if name is None or not name.strip():
        raise ValidationError("Category name is required")
    return name.strip()


class CategoryRepository:
    def __init__(self, db: AsyncSession, model, item_model, item_label: str):
        self.db = db
        self.model = model
        self.item_model = item_model
        self.item_label = item_label

    async def list(self) -> Sequence:
        res = await self.db.execute(select(self.model).order_by(self.model.name.asc()))
        return res.scalars().all()

    async def get(self, category_id: int):
        category = await self.db.get(self.model, category_id)
        if category is None:
            raise NotFound("Category not found")
        return category

    async def _find_by_name(self, name: str, exclude_id: int | None = None):
        stmt = select(self.model).where(self.model.name == name)
        if exclude_id is not None:
            stmt = stmt.where(self.model.id != exclude_id)
        res = await self.db.execute(stmt)
        return res.scalars().first()

    async def create(self, name: str | None):
        name = clean_name(name)
        if await self._find_by_name(name):
            raise Conflict("Category already exists")

        category = self.model(name=name)
        self.db.add(category)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise Conflict("Category already exists")
        await self.db.refresh(category)
        return category

    async def rename(self, category_id: int, name: str | None):
        name = clean_name(name)
        category = await self.get(category_id)
        if await self._find_by_name(name, exclude_id=category_id):
            raise Conflict("Category name already exists")

        old_name = category.name
        try:
            await self._rename_row(category, name)
            await self._cascade_items(old_name, name)
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise Conflict("Category name already exists")
        except Exception:
            await self.db.rollback()
            raise

        await self.db.refresh(category)
        return category

    async def _rename_row(self, category, name: str) -> None:
        category.name = name
        await self.db.flush()

    async def _cascade_items(self, old_name: str, new_name: str) -> None:
        await self.db.execute(
            update(self.item_model)
            .where(self.item_model.category == old_name)
            .values(category=new_name)
        )

    async def usage_count(self, name: str) -> int:
        res = await self.db.execute(
            select(func.count()).select_from(self.item_model).where(self.item_model.category == name)
        )
        return int(res.scalar_one())

    async def delete(self, category_id: int) -> None:
        category = await self.get(category_id)
        count = await self.usage_count(category.name)
        if count > 0:
            raise Conflict(
                f"Cannot delete category. It is being used by {self.item_label}.",
                usageCount=count,
            )
        await self.db.delete(category)
        await self.db.commit()


def news_categories(db: AsyncSession) -> CategoryRepository:
    return CategoryRepository(db, NewsCategory, NewsItem, "news items")


def art_categories(db: AsyncSession) -> CategoryRepository:
    return CategoryRepository(db, ArtCategory, CommunityArt, "art items")
