from __future__ import annotations

import re

from sqlalchemy.ext.asyncio import AsyncSession

from promotheans_api.core.errors import NotFound, ValidationError
from promotheans_api.models.youtube import SINGLETON_ID, YoutubeVideo

_URL_PATTERNS = (
    re.compile(r"(?:youtube\.com/watch\?v=|youtu\.be/|youtube\.com/embed/)([^&\n?#]+)"),
    re.compile(r"youtube\.com/v/([^&\n?#]+)"),
    re.compile(r"youtube\.com/.*[?&]v=([^&\n?#]+)"),
)
_BARE_ID = re.compile(r"^[a-zA-Z0-9_-]{11}$")


def extract_video_id(value: str | None) -> str | None:
    """Pull the video id out of a YouTube URL, or accept a bare 11-character id."""
    if not value:
        return None
    value = value.strip()
    for pattern in _URL_PATTERNS:
        m = pattern.search(value)
        if m and m.group(1):
            return m.group(1)
    if _BARE_ID.match(value):
        return value
    return None


class YoutubeSettingRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self) -> YoutubeVideo:
        video = await self.db.get(YoutubeVideo, SINGLETON_ID)
        if video is None:
            raise NotFound("YouTube video not found")
        return video

    async def update(self, video_url: str | None) -> YoutubeVideo:
        if not video_url:
            raise ValidationError("Video URL is required")
        video_id = extract_video_id(video_url)
        if not video_id:
            raise ValidationError("Invalid YouTube URL. Please provide a valid YouTube video URL.")

        video = await self.get()
        video.video_id = video_id
        video.video_url = video_url
        await self.db.commit()
        await self.db.refresh(video)
        return video

    async def ensure_default(self, video_id: str, video_url: str) -> bool:
        """Create the singleton row if it is missing. Returns True when created."""
        if await self.db.get(YoutubeVideo, SINGLETON_ID) is not None:
            return False
        self.db.add(YoutubeVideo(id=SINGLETON_ID, video_id=video_id, video_url=video_url))
        await self.db.commit()
        return True
