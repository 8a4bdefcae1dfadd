from functools import lru_cache
from typing import List, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="RESUME_", env_file=".env", extra="ignore")

    # --- Upload collaborator ---
    UPLOAD_DIR: str = Field(default="uploads", description="Directory where accepted resume files are stored")
    MAX_UPLOAD_BYTES: int = Field(default=10 * 1024 * 1024, description="Per-file size limit")
    MAX_BULK_FILES: int = Field(default=10, description="Most files accepted by one bulk upload")
    ALLOWED_EXTENSIONS: List[str] = Field(default_factory=lambda: ["pdf", "doc", "docx", "txt"])

    # --- Segmenter ---
    MIN_CHUNK_CHARS: int = Field(default=100, description="Shortest trimmed span kept as a resume chunk")
    BOUNDARY_MIN_GAP: int = Field(
        default=50,
        description="A paragraph break is only used as a split point if it lies this far past the previous split",
    )
    HEADER_MARKER_SET: Literal["labeled", "document-title"] = Field(
        default="labeled",
        description="'labeled' = Name:/Role:/Contact: lines, 'document-title' = Curriculum Vitae/Resume/Bio-data/CV lines",
    )

    # --- Field parser ---
    MAX_PLAUSIBLE_YEARS: int = Field(default=50, description="Experience mentions above this are ignored")

    LOG_LEVEL: str = Field(default="INFO")


@lru_cache
def get_settings() -> Settings:
    return Settings()
