"""
Pipeline Orchestrator: uploaded files -> scored, persisted candidates.

Per file:  Received -> Extracted -> Segmented -> per chunk (Parsed -> Validated
-> Scored -> Persisted) -> Done, with Failed(reason) reachable from any state.

Files are processed one after another. A failing file or chunk is recorded in
the BatchSummary and processing moves on; nothing short of a programming error
in this module aborts a batch. Emails stored earlier in the same batch are
threaded through explicitly so duplicate detection sees them.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Set
import logging

from app.core.config import Settings, get_settings
from app.core.errors import DuplicateError, ResumePipelineError, ValidationError
from app.core.field_parser import parse
from app.core.schemas import (
    BatchSummary,
    CandidateFacts,
    CandidateRecord,
    ItemFailure,
    ItemSuccess,
    JobRoleDefinition,
)
from app.core.scoring import score_all
from app.core.segmenter import SegmenterConfig, segment
from app.core.storage import CandidateStore, UploadStore
from app.core.text_extractor import extract, format_for_extension
from app.core.text_normalization import normalize_email
from app.core.vocabulary import Vocabulary


logger = logging.getLogger(__name__)


@dataclass
class UploadedResume:
    """One file handed over by the upload collaborator."""
    content: bytes
    extension: str
    filename: str


class ResumePipeline:
    def __init__(
        self,
        store: CandidateStore,
        uploads: UploadStore,
        settings: Optional[Settings] = None,
        vocabulary: Optional[Vocabulary] = None,
    ):
        settings = settings or get_settings()
        segmenter_config = SegmenterConfig.from_settings(settings)
        if vocabulary is not None:
            segmenter_config = SegmenterConfig(
                min_chunk_chars=segmenter_config.min_chunk_chars,
                boundary_min_gap=segmenter_config.boundary_min_gap,
                vocabulary=vocabulary,
            )
        self.store = store
        self.uploads = uploads
        self.segmenter_config = segmenter_config
        self.vocabulary = segmenter_config.vocabulary
        self.max_plausible_years = settings.MAX_PLAUSIBLE_YEARS

    def process_batch(
        self,
        files: Iterable[UploadedResume],
        owner_id: str,
        summary: Optional[BatchSummary] = None,
    ) -> BatchSummary:
        """Process files in order; pass `summary` to extend one that already holds rejected uploads."""
        summary = summary if summary is not None else BatchSummary()
        job_roles = self.store.list_job_roles(owner_id, active_only=True)
        seen_emails: Set[str] = set()

        for upload in files:
            try:
                self.process_file(upload, owner_id, job_roles, seen_emails, summary)
            except Exception as exc:
                logger.exception("unexpected error processing %s", upload.filename)
                summary.record_failure(ItemFailure(filename=upload.filename, error=f"Error processing resume: {exc}"))

        logger.info(
            "batch for owner %s: %d stored, %d failed",
            owner_id, summary.successful, summary.failed,
        )
        return summary

    def process_file(
        self,
        upload: UploadedResume,
        owner_id: str,
        job_roles: List[JobRoleDefinition],
        seen_emails: Set[str],
        summary: BatchSummary,
    ) -> int:
        """Run one file through the pipeline; returns how many candidates were stored."""
        path: Optional[str] = None
        try:
            path = self.uploads.save(upload.filename, upload.content)
            text = extract(upload.content, format_for_extension(upload.extension))
        except ResumePipelineError as exc:
            self._record_failure(summary, upload.filename, exc.message)
            if path:
                self.uploads.delete(path)
            return 0

        chunks = segment(text, self.segmenter_config)
        numbered = len(chunks) > 1
        stored = 0
        try:
            for index, chunk in enumerate(chunks, start=1):
                chunk_no = index if numbered else None
                try:
                    record = self._process_chunk(chunk, upload.filename, path, owner_id, job_roles, seen_emails)
                except ResumePipelineError as exc:
                    self._record_failure(summary, upload.filename, exc.message, chunk_no)
                    continue
                except Exception as exc:
                    logger.exception("unexpected error in %s chunk %s", upload.filename, index)
                    self._record_failure(summary, upload.filename, f"Error processing resume: {exc}", chunk_no)
                    continue

                seen_emails.add(record.email)
                stored += 1
                summary.record_success(ItemSuccess(
                    filename=upload.filename,
                    candidate_id=record.id,
                    name=record.name,
                    email=record.email,
                    best_match_score=record.best_match_score,
                ))
        finally:
            # Stored candidates share the file; with none stored it is dropped
            if stored == 0:
                self.uploads.delete(path)

        logger.info("%s: %d chunk(s), %d candidate(s) stored", upload.filename, len(chunks), stored)
        return stored

    def _process_chunk(
        self,
        chunk: str,
        filename: str,
        path: str,
        owner_id: str,
        job_roles: List[JobRoleDefinition],
        seen_emails: Set[str],
    ) -> CandidateRecord:
        facts = parse(chunk, self.vocabulary, self.max_plausible_years)

        missing = [field for field in ("name", "email") if not getattr(facts, field)]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

        email = normalize_email(facts.email)
        if email in seen_emails or self.store.find_candidate_by_email(owner_id, email) is not None:
            raise DuplicateError(f"Candidate with email {email} already exists")

        scores = score_all(facts, job_roles, self.vocabulary)
        record = CandidateRecord(
            owner_id=owner_id,
            name=facts.name.strip(),
            email=email,
            phone=facts.phone,
            resume_file_name=filename,
            resume_path=path,
            extracted_text=facts.raw_text,
            skills=facts.skills,
            experience_years=facts.experience_years,
            education=facts.education,
            job_role_scores=scores.per_role_scores,
            best_match_role_id=scores.best_match_role_id,
            best_match_score=scores.best_match_score,
        )
        return self.store.add_candidate(record)

    def rescore_candidates(self, owner_id: str) -> int:
        """Re-score every stored candidate of an owner against the owner's active roles."""
        job_roles = self.store.list_job_roles(owner_id, active_only=True)
        candidates = self.store.list_candidates(owner_id)
        for candidate in candidates:
            facts = CandidateFacts(
                name=candidate.name,
                email=candidate.email,
                phone=candidate.phone,
                skills=candidate.skills,
                experience_years=candidate.experience_years,
                education=candidate.education,
                raw_text=candidate.extracted_text,
            )
            self.store.update_scores(candidate.id, score_all(facts, job_roles, self.vocabulary))
        logger.info("rescored %d candidate(s) for owner %s against %d role(s)", len(candidates), owner_id, len(job_roles))
        return len(candidates)

    @staticmethod
    def _record_failure(summary: BatchSummary, filename: str, error: str, chunk: Optional[int] = None) -> None:
        logger.warning("%s%s failed: %s", filename, f" chunk {chunk}" if chunk else "", error)
        summary.record_failure(ItemFailure(filename=filename, error=error, chunk=chunk))
