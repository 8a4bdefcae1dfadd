from typing import List
from pathlib import Path

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from fastapi.responses import JSONResponse

from app.api.deps import get_owner_id, get_pipeline
from app.core.config import get_settings
from app.core.pipeline import ResumePipeline, UploadedResume
from app.core.schemas import BatchSummary, ItemFailure

router = APIRouter(prefix="/upload", tags=["upload"])


async def _read_upload(file: UploadFile) -> UploadedResume:
    """Pre-validate one file the way the upload collaborator is expected to."""
    settings = get_settings()
    filename = file.filename or ""
    extension = Path(filename).suffix.lower().lstrip(".")
    if extension not in settings.ALLOWED_EXTENSIONS:
        allowed = ", ".join(e.upper() for e in settings.ALLOWED_EXTENSIONS)
        raise HTTPException(status_code=415, detail=f"Only {allowed} files are allowed: {filename}")

    raw = await file.read()
    if len(raw) > settings.MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=413, detail=f"File too large: {filename}")
    return UploadedResume(content=raw, extension=extension, filename=filename)


@router.post(
    "/resume",
    response_model=BatchSummary,
    status_code=201,
    summary="Upload Resume",
    description="Extract, split, parse and score one resume file (PDF, DOC, DOCX or TXT). A file may hold several resumes.",
    responses={
        400: {"description": "No candidate could be stored; the body is the batch summary"},
        401: {"description": "Missing X-User-Id header"},
        413: {"description": "File too large"},
        415: {"description": "Unsupported file extension"},
    },
)
async def upload_resume(
    resume: UploadFile = File(..., description="Resume file"),
    owner_id: str = Depends(get_owner_id),
    pipeline: ResumePipeline = Depends(get_pipeline),
):
    upload = await _read_upload(resume)
    summary = pipeline.process_batch([upload], owner_id)
    if summary.successful == 0:
        return JSONResponse(status_code=400, content=summary.model_dump(mode="json"))
    return summary


@router.post(
    "/bulk-resumes",
    response_model=BatchSummary,
    summary="Bulk Upload Resumes",
    description="Process several resume files in one request. Failures, including rejected extensions and oversize files, are reported per file/chunk and never abort the batch.",
)
async def upload_bulk_resumes(
    resumes: List[UploadFile] = File(..., description="Resume files"),
    owner_id: str = Depends(get_owner_id),
    pipeline: ResumePipeline = Depends(get_pipeline),
):
    settings = get_settings()
    if not resumes:
        raise HTTPException(status_code=400, detail="No files uploaded.")
    if len(resumes) > settings.MAX_BULK_FILES:
        raise HTTPException(status_code=400, detail=f"At most {settings.MAX_BULK_FILES} files per upload.")

    # A rejected file is reported like any other failed item and does not stop the rest
    summary = BatchSummary()
    uploads = []
    for f in resumes:
        try:
            uploads.append(await _read_upload(f))
        except HTTPException as exc:
            summary.record_failure(ItemFailure(filename=f.filename or "", error=exc.detail))
    return pipeline.process_batch(uploads, owner_id, summary=summary)
