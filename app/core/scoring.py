"""
Scoring Engine: CandidateFacts x JobRoleDefinition -> 0-100 match score.

Score composition:
  skills      0-80  weighted share of required skills found (direct or in text)
  experience  0-10  candidate years vs. the role's experience level
  education   0-10  relevant degree subject (10) or any degree (5)

Only the skills component is rounded (half up); the bonuses are integers.
"""

from typing import Iterable, List, Optional
import math

from app.core.schemas import (
    CandidateFacts,
    CandidateScoreSummary,
    JobRoleDefinition,
    MatchedSkill,
    ScoreBreakdown,
    ScoreResult,
)
from app.core.vocabulary import DEFAULT_VOCABULARY, Vocabulary


SKILLS_MAX = 80


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def experience_bonus(level: str, years: int) -> int:
    if level == "entry":
        return 10 if years <= 2 else 5 if years <= 5 else 0
    if level == "mid":
        return 10 if 2 <= years <= 7 else 5
    if level == "senior":
        return 10 if years >= 5 else 5 if years >= 3 else 0
    if level == "lead":
        return 10 if years >= 8 else 5 if years >= 5 else 0
    return 0


def education_bonus(facts: CandidateFacts, vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> int:
    if not facts.education:
        return 0
    for entry in facts.education:
        degree = entry.degree.lower()
        if any(term in degree for term in vocabulary.relevant_education_terms):
            return 10
    return 5


def match_skills(facts: CandidateFacts, job_role: JobRoleDefinition) -> List[MatchedSkill]:
    """Required skills the candidate has, with how each one was found."""
    candidate_skills = {s.lower() for s in facts.skills}
    candidate_text = facts.raw_text.lower()

    matched = []
    for required in job_role.required_skills:
        skill = required.skill.lower()
        direct = skill in candidate_skills
        if direct or skill in candidate_text:
            matched.append(MatchedSkill(
                skill=required.skill,
                weight=required.weight,
                match_type="direct" if direct else "text",
            ))
    return matched


def score(facts: CandidateFacts, job_role: JobRoleDefinition, vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> ScoreResult:
    if not job_role.required_skills:
        return ScoreResult(job_role_id=job_role.id, score=0)

    matched = match_skills(facts, job_role)
    total_weight = sum(r.weight for r in job_role.required_skills)
    matched_weight = sum(m.weight for m in matched)
    skills_score = matched_weight / total_weight * SKILLS_MAX if total_weight > 0 else 0.0

    exp_bonus = experience_bonus(job_role.experience_level, facts.experience_years)
    edu_bonus = education_bonus(facts, vocabulary)
    final = min(100, max(0, round_half_up(skills_score) + exp_bonus + edu_bonus))

    return ScoreResult(
        job_role_id=job_role.id,
        score=final,
        matched_skills=matched,
        breakdown=ScoreBreakdown(
            skills_score=skills_score,
            experience_bonus=exp_bonus,
            education_bonus=edu_bonus,
        ),
    )


def score_all(
    facts: CandidateFacts,
    job_roles: Iterable[JobRoleDefinition],
    vocabulary: Vocabulary = DEFAULT_VOCABULARY,
) -> CandidateScoreSummary:
    """Score every role; the best match is the first role with the strictly highest score."""
    results: List[ScoreResult] = []
    best_id: Optional[str] = None
    best_score = 0
    for role in job_roles:
        result = score(facts, role, vocabulary)
        results.append(result)
        if result.score > best_score:
            best_score = result.score
            best_id = role.id

    return CandidateScoreSummary(
        per_role_scores=results,
        best_match_role_id=best_id,
        best_match_score=best_score,
    )
