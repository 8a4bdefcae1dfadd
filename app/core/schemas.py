from datetime import datetime, timezone
from typing import List, Literal, Optional
from uuid import uuid4

from pydantic import BaseModel, Field


DocumentFormat = Literal["text", "pdf", "docx-like", "legacy-doc"]
ExperienceLevel = Literal["entry", "mid", "senior", "lead"]
MatchType = Literal["direct", "text"]
CandidateStatus = Literal["new", "reviewed", "shortlisted", "rejected", "hired"]


class EducationEntry(BaseModel):
    """Education entry in candidate facts."""
    degree: str = ""  # Raw matched line from the Education section
    institution: str = ""  # Reserved, never populated by the heuristic parser
    year: str = ""  # Reserved, never populated by the heuristic parser


class CandidateFacts(BaseModel):
    name: str = ""
    email: str = ""
    phone: str = ""
    skills: List[str] = Field(default_factory=list, description="Lowercase terms from the skill vocabulary, deduplicated")
    experience_years: int = Field(default=0, ge=0, description="Largest plausible 'N years of experience' mention")
    education: List[EducationEntry] = Field(default_factory=list)
    raw_text: str = Field(default="", description="Full chunk text the facts were parsed from")


class RequiredSkill(BaseModel):
    skill: str
    weight: float = Field(default=1.0, ge=0.1, le=5.0)


class JobRoleDefinition(BaseModel):
    id: str = Field(default_factory=lambda: uuid4().hex)
    owner_id: str = ""
    title: str
    description: str = ""
    department: str = ""
    required_skills: List[RequiredSkill] = Field(default_factory=list)
    experience_level: ExperienceLevel = "mid"
    is_active: bool = True


class MatchedSkill(BaseModel):
    skill: str
    weight: float
    match_type: MatchType


class ScoreBreakdown(BaseModel):
    skills_score: float = Field(default=0.0, ge=0.0, description="Weighted skill coverage scaled to 0-80, unrounded")
    experience_bonus: int = Field(default=0, ge=0)
    education_bonus: int = Field(default=0, ge=0)


class ScoreResult(BaseModel):
    job_role_id: str
    score: int = Field(..., ge=0, le=100)
    matched_skills: List[MatchedSkill] = Field(default_factory=list)
    breakdown: ScoreBreakdown = Field(default_factory=ScoreBreakdown)


class CandidateScoreSummary(BaseModel):
    per_role_scores: List[ScoreResult] = Field(default_factory=list)
    best_match_role_id: Optional[str] = None
    best_match_score: int = 0


class CandidateRecord(BaseModel):
    """Persisted candidate, as handed to the storage collaborator."""
    id: str = Field(default_factory=lambda: uuid4().hex)
    owner_id: str
    name: str
    email: str
    phone: str = ""
    resume_file_name: str
    resume_path: str
    extracted_text: str
    skills: List[str] = Field(default_factory=list)
    experience_years: int = 0
    education: List[EducationEntry] = Field(default_factory=list)
    job_role_scores: List[ScoreResult] = Field(default_factory=list)
    best_match_role_id: Optional[str] = None
    best_match_score: int = 0
    status: CandidateStatus = "new"
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ItemSuccess(BaseModel):
    filename: str
    candidate_id: str
    name: str
    email: str
    best_match_score: int


class ItemFailure(BaseModel):
    filename: str
    error: str
    chunk: Optional[int] = Field(default=None, description="1-based chunk index when the failure is per-chunk")


class BatchResults(BaseModel):
    successful: List[ItemSuccess] = Field(default_factory=list)
    failed: List[ItemFailure] = Field(default_factory=list)


class BatchSummary(BaseModel):
    total: int = 0
    successful: int = 0
    failed: int = 0
    results: BatchResults = Field(default_factory=BatchResults)

    def record_success(self, item: ItemSuccess) -> None:
        self.results.successful.append(item)
        self.successful += 1
        self.total += 1

    def record_failure(self, item: ItemFailure) -> None:
        self.results.failed.append(item)
        self.failed += 1
        self.total += 1
