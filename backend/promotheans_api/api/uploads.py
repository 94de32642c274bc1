from __future__ import annotations

from fastapi import APIRouter, Depends, File, Form, UploadFile
from starlette.concurrency import run_in_threadpool

from promotheans_api.api.deps import get_current_user, get_upload_resolver
from promotheans_api.core.errors import ValidationError
from promotheans_api.services.uploads import UploadResolver

router = APIRouter(prefix="/upload", tags=["upload"])


@router.post("/community-art", dependencies=[Depends(get_current_user)])
async def upload_community_art(
    image: UploadFile | None = File(None),
    artist: str | None = Form(None),
    category: str | None = Form(None),
    resolver: UploadResolver = Depends(get_upload_resolver),
):
    if image is None:
        raise ValidationError("No file uploaded")

    resolver.check(image.content_type, 0)
    # one byte past the limit is enough to know the file is too large
    data = await image.read(resolver.max_bytes + 1)

    stored = await run_in_threadpool(
        resolver.store, data, image.content_type, image.filename, artist, category
    )
    return {
        "success": True,
        "path": stored.path,
        "filename": stored.filename,
        "size": stored.size,
        "uploadedVia": stored.uploaded_via,
    }
