from datetime import datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from promotheans_api.db.base import Base
from promotheans_api.models.users import _utcnow


class AssetCleanupFailure(Base):
    """An orphaned asset that could not be removed from its storage backend."""

    __tablename__ = "asset_cleanup_failures"

    id: Mapped[int] = mapped_column(primary_key=True)
    image_path: Mapped[str] = mapped_column(String(500), nullable=False, index=True)
    backend: Mapped[str] = mapped_column(String(20), nullable=False)
    error: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)
