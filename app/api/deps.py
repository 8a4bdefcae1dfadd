from functools import lru_cache

from fastapi import Header, HTTPException

from app.core.config import get_settings
from app.core.pipeline import ResumePipeline
from app.core.storage import CandidateStore, UploadStore


@lru_cache
def get_pipeline() -> ResumePipeline:
    settings = get_settings()
    return ResumePipeline(CandidateStore(), UploadStore(settings.UPLOAD_DIR), settings=settings)


def get_owner_id(x_user_id: str | None = Header(default=None)) -> str:
    """Acting user. Authentication happens upstream; we only need the id."""
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=401, detail="Missing X-User-Id header.")
    return x_user_id.strip()
