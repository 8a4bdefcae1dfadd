import logging

from fastapi import FastAPI

from app.api.routes.job_roles import router as job_roles_router
from app.api.routes.upload import router as upload_router
from app.core.config import get_settings

logging.basicConfig(
    level=get_settings().LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Resume Screener (Candidate Ingestion & Scoring Service)",
    description="Deterministic resume ingestion: extracts text from PDF/DOCX/TXT uploads, splits multi-resume documents, parses candidate facts and scores them against weighted job roles",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)

app.include_router(upload_router)
app.include_router(job_roles_router)

@app.get("/", tags=["health"])
def root():
    return {"service": "resume-screener", "status": "running"}

@app.get("/health", tags=["health"])
def health():
    return {"status": "ok"}
