import datetime as dt

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from promotheans_api.api.deps import get_current_user
from promotheans_api.db.session import get_db
from promotheans_api.models.news import NewsItem
from promotheans_api.repositories.news import NewsRepository

router = APIRouter(prefix="/news", tags=["news"])


class NewsIn(BaseModel):
    date: dt.date | None = None
    timezone: str | None = None
    category: str | None = None
    title: str | None = None
    excerpt: str | None = None
    link: str | None = None
    featured: bool | None = None


class NewsOut(BaseModel):
    id: int
    date: str
    timezone: str
    category: str
    title: str
    excerpt: str
    link: str | None = None
    featured: bool
    created_at: dt.datetime
    updated_at: dt.datetime


class NewsDetailOut(NewsOut):
    dateFormatted: str


def format_news_date(value: dt.date) -> str:
    """Render dates like "March 05, 2024", as shown on the public site."""
    return value.strftime("%B %d, %Y")


def _fields(item: NewsItem) -> dict:
    return {
        "id": item.id,
        "timezone": item.timezone,
        "category": item.category,
        "title": item.title,
        "excerpt": item.excerpt,
        "link": item.link,
        "featured": item.featured,
        "created_at": item.created_at,
        "updated_at": item.updated_at,
    }


def to_list_item(item: NewsItem) -> NewsOut:
    return NewsOut(date=format_news_date(item.date), **_fields(item))


def to_detail(item: NewsItem) -> NewsDetailOut:
    return NewsDetailOut(
        date=item.date.isoformat(),
        dateFormatted=format_news_date(item.date),
        **_fields(item),
    )


@router.get("", response_model=list[NewsOut])
async def list_news(db: AsyncSession = Depends(get_db)):
    return [to_list_item(n) for n in await NewsRepository(db).list()]


@router.get("/{news_id}", response_model=NewsDetailOut)
async def get_news(news_id: int, db: AsyncSession = Depends(get_db)):
    return to_detail(await NewsRepository(db).get(news_id))


@router.post("", response_model=NewsDetailOut, status_code=201, dependencies=[Depends(get_current_user)])
async def create_news(payload: NewsIn, db: AsyncSession = Depends(get_db)):
    item = await NewsRepository(db).create(payload.model_dump())
    return to_detail(item)


@router.put("/{news_id}", response_model=NewsDetailOut, dependencies=[Depends(get_current_user)])
async def update_news(news_id: int, payload: NewsIn, db: AsyncSession = Depends(get_db)):
    item = await NewsRepository(db).update(news_id, payload.model_dump())
    return to_detail(item)


@router.delete("/{news_id}", dependencies=[Depends(get_current_user)])
async def delete_news(news_id: int, db: AsyncSession = Depends(get_db)):
    await NewsRepository(db).delete(news_id)
    return {"success": True, "message": "News item deleted successfully"}
