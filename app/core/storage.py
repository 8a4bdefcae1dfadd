"""
Storage collaborators used by the pipeline.

CandidateStore holds job roles and persisted candidates per owner (in memory,
guarded by a lock since FastAPI runs sync work in a threadpool). UploadStore
owns the resume files on disk.
"""

from pathlib import Path
from typing import Dict, List, Optional
from uuid import uuid4
import logging
import threading

from app.core.errors import StorageError
from app.core.schemas import CandidateRecord, CandidateScoreSummary, JobRoleDefinition
from app.core.text_normalization import normalize_email


logger = logging.getLogger(__name__)


class CandidateStore:
    def __init__(self):
        self._lock = threading.Lock()
        self._job_roles: Dict[str, JobRoleDefinition] = {}
        self._candidates: Dict[str, CandidateRecord] = {}

    # --- job roles ---

    def list_job_roles(self, owner_id: str, active_only: bool = False) -> List[JobRoleDefinition]:
        with self._lock:
            return [
                r for r in self._job_roles.values()
                if r.owner_id == owner_id and (r.is_active or not active_only)
            ]

    def get_job_role(self, owner_id: str, role_id: str) -> Optional[JobRoleDefinition]:
        with self._lock:
            role = self._job_roles.get(role_id)
        return role if role is not None and role.owner_id == owner_id else None

    def find_job_role_by_title(self, owner_id: str, title: str) -> Optional[JobRoleDefinition]:
        with self._lock:
            for role in self._job_roles.values():
                if role.owner_id == owner_id and role.title == title:
                    return role
        return None

    def save_job_role(self, role: JobRoleDefinition) -> JobRoleDefinition:
        with self._lock:
            self._job_roles[role.id] = role
        return role

    # --- candidates ---

    def find_candidate_by_email(self, owner_id: str, email: str) -> Optional[CandidateRecord]:
        key = normalize_email(email)
        with self._lock:
            for candidate in self._candidates.values():
                if candidate.owner_id == owner_id and candidate.email == key:
                    return candidate
        return None

    def list_candidates(self, owner_id: str) -> List[CandidateRecord]:
        with self._lock:
            return [c for c in self._candidates.values() if c.owner_id == owner_id]

    def add_candidate(self, record: CandidateRecord) -> CandidateRecord:
        with self._lock:
            if record.id in self._candidates:
                raise StorageError(f"Candidate {record.id} already stored")
            self._candidates[record.id] = record
        return record

    def update_scores(self, candidate_id: str, summary: CandidateScoreSummary) -> CandidateRecord:
        with self._lock:
            current = self._candidates.get(candidate_id)
            if current is None:
                raise StorageError(f"Candidate {candidate_id} not found")
            updated = current.model_copy(update={
                "job_role_scores": summary.per_role_scores,
                "best_match_role_id": summary.best_match_role_id,
                "best_match_score": summary.best_match_score,
            })
            self._candidates[candidate_id] = updated
        return updated


class UploadStore:
    """Resume files on disk, under a single upload directory."""

    def __init__(self, root: str | Path):
        self.root = Path(root)

    def save(self, original_filename: str, content: bytes) -> str:
        suffix = Path(original_filename or "").suffix.lower()
        path = self.root / f"{uuid4().hex}{suffix}"
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)
        except OSError as exc:
            raise StorageError(f"Could not store uploaded file: {exc}") from exc
        return str(path)

    def delete(self, path: str) -> None:
        try:
            Path(path).unlink(missing_ok=True)
        except OSError as exc:
            logger.warning("could not delete uploaded file %s: %s", path, exc)

    def exists(self, path: str) -> bool:
        return Path(path).exists()
