"""
Error taxonomy for the resume ingestion pipeline.

Every per-item failure is one of these. The orchestrator records the message
verbatim in the batch summary, so messages are written for an HR user, not a
developer.
"""


class ResumePipelineError(Exception):
    """Base class for all recoverable per-item pipeline failures."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnsupportedFormatError(ResumePipelineError):
    """Declared file format is not one the extractor knows."""


class ExtractionError(ResumePipelineError):
    """Extractor failed or produced no usable text."""


class ValidationError(ResumePipelineError):
    """Parsed candidate facts are missing a required field (name or email)."""


class DuplicateError(ResumePipelineError):
    """A candidate with the same email already exists for the owner."""


class StorageError(ResumePipelineError):
    """Persistence failed. Surfaced to the caller, never retried here."""
