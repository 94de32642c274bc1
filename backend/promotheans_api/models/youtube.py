from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from promotheans_api.db.base import Base
from promotheans_api.models.users import _utcnow

SINGLETON_ID = 1


class YoutubeVideo(Base):
    __tablename__ = "youtube_video"
    __table_args__ = (CheckConstraint("id = 1", name="ck_youtube_video_singleton"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=False, default=SINGLETON_ID)
    video_id: Mapped[str] = mapped_column(String(50), nullable=False)
    video_url: Mapped[str] = mapped_column(String(500), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)
