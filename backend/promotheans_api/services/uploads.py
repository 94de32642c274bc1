from __future__ import annotations

import posixpath
import re
import time
from dataclasses import dataclass
from typing import Callable

from promotheans_api.core.errors import ValidationError
from promotheans_api.services.storage import StorageBackend

ASSET_PREFIX = "assets/community_art"

_NON_ALNUM = re.compile(r"[^A-Za-z0-9]")


def sanitize(value: str | None) -> str:
    if not value:
        return "unknown"
    return _NON_ALNUM.sub("_", value).lower()


def build_filename(artist: str | None, category: str | None, original_name: str | None, timestamp_ms: int) -> str:
    """`<artist>_<category>_<millis><ext>` with both names reduced to [a-z0-9_]."""
    artist = (artist or "unknown").strip()
    category = (category or "art").strip()
    ext = posixpath.splitext(original_name or "")[1]
    return f"{sanitize(artist)[:30]}_{sanitize(category)[:20]}_{timestamp_ms}{ext}"


def asset_path(filename: str) -> str:
    return f"{ASSET_PREFIX}/{filename}"


@dataclass
class StoredUpload:
    path: str
    filename: str
    size: int
    uploaded_via: str


class UploadResolver:
    """Validates an uploaded image and writes it through the active backend."""

    def __init__(self, storage: StorageBackend, max_bytes: int, clock: Callable[[], float] = time.time):
        self.storage = storage
        self.max_bytes = max_bytes
        self._clock = clock

    def check(self, content_type: str | None, size: int) -> None:
        if not (content_type or "").lower().startswith("image/"):
            raise ValidationError("Only image files are allowed!")
        if size > self.max_bytes:
            limit_mb = self.max_bytes / (1024 * 1024)
            raise ValidationError(f"File too large. Maximum size is {limit_mb:g}MB.")

    def store(
        self,
        data: bytes,
        content_type: str | None,
        original_name: str | None,
        artist: str | None = None,
        category: str | None = None,
    ) -> StoredUpload:
        self.check(content_type, len(data))
        filename = build_filename(artist, category, original_name, int(self._clock() * 1000))
        self.storage.save(filename, data)
        return StoredUpload(
            path=asset_path(filename),
            filename=filename,
            size=len(data),
            uploaded_via=self.storage.name,
        )
