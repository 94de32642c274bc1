"""
Cleanup of image files that no longer belong to a CommunityArt record.

Record and file live in different stores, so the two are not updated
atomically: the record change is committed first and file removal is
best-effort. Failed removals are logged and written to the
``asset_cleanup_failures`` table where admins can review them.
"""

from __future__ import annotations

import logging
import posixpath

from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from promotheans_api.models.audit_logs import AssetCleanupFailure
from promotheans_api.services.storage import StorageBackend
from promotheans_api.services.uploads import ASSET_PREFIX

logger = logging.getLogger(__name__)

_MARKER = "community_art/"


def filename_from_path(image_path: str) -> str:
    if _MARKER in image_path:
        return image_path.rsplit(_MARKER, 1)[1]
    return posixpath.basename(image_path.replace("\\", "/"))


def canonical_asset_path(image_path: str) -> str:
    """Rewrite local spellings such as ``/assets/community_art/x.png`` to ``assets/community_art/x.png``.

    Absolute URLs are returned unchanged.
    """
    image_path = image_path.strip()
    if "://" in image_path or _MARKER not in image_path:
        return image_path
    return f"{ASSET_PREFIX}/{filename_from_path(image_path)}"


class AssetLifecycleManager:
    def __init__(self, storage: StorageBackend, db: AsyncSession):
        self.storage = storage
        self.db = db

    async def discard(self, image_path: str | None) -> bool:
        """Remove the file behind `image_path`. Never raises."""
        if not image_path:
            return False

        filename = filename_from_path(image_path)
        try:
            return await run_in_threadpool(self.storage.delete, filename)
        except Exception as e:
            logger.warning(
                "Could not delete %s from %s backend: %s",
                filename, self.storage.name, e,
            )
            await self._record_failure(image_path, str(e) or e.__class__.__name__)
            return False

    async def replace(self, old_path: str | None, new_path: str | None) -> bool:
        # both paths can name the same file when spelled differently
        if old_path and new_path and filename_from_path(old_path) != filename_from_path(new_path):
            return await self.discard(old_path)
        return False

    async def _record_failure(self, image_path: str, error: str) -> None:
        try:
            self.db.add(AssetCleanupFailure(image_path=image_path, backend=self.storage.name, error=error))
            await self.db.commit()
        except Exception:
            logger.exception("Could not record cleanup failure for %s", image_path)
            await self.db.rollback()
