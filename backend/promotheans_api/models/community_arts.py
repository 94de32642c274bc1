from datetime import datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from promotheans_api.db.base import Base
from promotheans_api.models.users import _utcnow


class ArtCategory(Base):
    __tablename__ = "art_categories"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(200), unique=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)


class CommunityArt(Base):
    __tablename__ = "community_arts"

    id: Mapped[int] = mapped_column(primary_key=True)
    # one record per stored asset; deleting the record deletes the file
    image: Mapped[str] = mapped_column(String(500), nullable=False, unique=True)
    title: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    # denormalized ArtCategory.name
    category: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    artist: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    # column names match the public JSON keys
    xHandle: Mapped[str | None] = mapped_column(String(200), nullable=True)
    xUrl: Mapped[str | None] = mapped_column(String(500), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)
