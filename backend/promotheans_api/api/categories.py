from datetime import datetime
from typing import Callable

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict
from sqlalchemy.ext.asyncio import AsyncSession

from promotheans_api.api.deps import get_current_user
from promotheans_api.db.session import get_db
from promotheans_api.repositories.categories import CategoryRepository, art_categories, news_categories


class CategoryIn(BaseModel):
    name: str | None = None


class CategoryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    created_at: datetime | None = None


def build_router(prefix: str, tag: str, repo_factory: Callable[[AsyncSession], CategoryRepository]) -> APIRouter:
    router = APIRouter(prefix=prefix, tags=[tag])

    @router.get("", response_model=list[CategoryOut])
    async def list_categories(db: AsyncSession = Depends(get_db)):
        return await repo_factory(db).list()

    @router.get("/{category_id}", response_model=CategoryOut)
    async def get_category(category_id: int, db: AsyncSession = Depends(get_db)):
        return await repo_factory(db).get(category_id)

    @router.post("", response_model=CategoryOut, status_code=201, dependencies=[Depends(get_current_user)])
    async def create_category(payload: CategoryIn, db: AsyncSession = Depends(get_db)):
        return await repo_factory(db).create(payload.name)

    @router.put("/{category_id}", response_model=CategoryOut, dependencies=[Depends(get_current_user)])
    async def rename_category(category_id: int, payload: CategoryIn, db: AsyncSession = Depends(get_db)):
        return await repo_factory(db).rename(category_id, payload.name)

    @router.delete("/{category_id}", dependencies=[Depends(get_current_user)])
    async def delete_category(category_id: int, db: AsyncSession = Depends(get_db)):
        await repo_factory(db).delete(category_id)
        return {"success": True, "message": "Category deleted successfully"}

    return router


news_router = build_router("/news-categories", "news-categories", news_categories)
art_router = build_router("/art-categories", "art-categories", art_categories)
