import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from app.api.deps import get_owner_id, get_pipeline
from app.core.default_roles import DEFAULT_JOB_ROLES
from app.core.pipeline import ResumePipeline
from app.core.schemas import ExperienceLevel, JobRoleDefinition, RequiredSkill

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/job-roles", tags=["job-roles"])


class JobRoleIn(BaseModel):
    title: str = Field(..., min_length=1)
    description: str = ""
    department: str = ""
    required_skills: List[RequiredSkill] = Field(default_factory=list)
    experience_level: ExperienceLevel = "mid"
    is_active: bool = True


class InitializeDefaultsResponse(BaseModel):
    message: str
    created_job_roles: List[JobRoleDefinition]


@router.get("", response_model=List[JobRoleDefinition], summary="List Job Roles")
def list_job_roles(
    owner_id: str = Depends(get_owner_id),
    pipeline: ResumePipeline = Depends(get_pipeline),
):
    return pipeline.store.list_job_roles(owner_id)


@router.post("", response_model=JobRoleDefinition, status_code=201, summary="Create Job Role")
def create_job_role(
    body: JobRoleIn,
    owner_id: str = Depends(get_owner_id),
    pipeline: ResumePipeline = Depends(get_pipeline),
):
    """Create a role, then re-score the owner's candidates against all active roles."""
    if pipeline.store.find_job_role_by_title(owner_id, body.title) is not None:
        raise HTTPException(status_code=400, detail="Job role with this title already exists")

    role = pipeline.store.save_job_role(JobRoleDefinition(owner_id=owner_id, **body.model_dump()))
    pipeline.rescore_candidates(owner_id)
    return role


@router.put("/{role_id}", response_model=JobRoleDefinition, summary="Update Job Role")
def update_job_role(
    role_id: str,
    body: JobRoleIn,
    owner_id: str = Depends(get_owner_id),
    pipeline: ResumePipeline = Depends(get_pipeline),
):
    existing = pipeline.store.get_job_role(owner_id, role_id)
    if existing is None:
        raise HTTPException(status_code=404, detail="Job role not found")

    clash = pipeline.store.find_job_role_by_title(owner_id, body.title)
    if clash is not None and clash.id != role_id:
        raise HTTPException(status_code=400, detail="Job role with this title already exists")

    role = pipeline.store.save_job_role(JobRoleDefinition(id=role_id, owner_id=owner_id, **body.model_dump()))
    pipeline.rescore_candidates(owner_id)
    return role


@router.post("/initialize-defaults", response_model=InitializeDefaultsResponse, summary="Seed Default Job Roles")
def initialize_defaults(
    owner_id: str = Depends(get_owner_id),
    pipeline: ResumePipeline = Depends(get_pipeline),
):
    created = []
    for data in DEFAULT_JOB_ROLES:
        if pipeline.store.find_job_role_by_title(owner_id, data["title"]) is None:
            created.append(pipeline.store.save_job_role(JobRoleDefinition(owner_id=owner_id, **data)))
    if created:
        pipeline.rescore_candidates(owner_id)
    logger.info("seeded %d default job role(s) for owner %s", len(created), owner_id)
    return InitializeDefaultsResponse(
        message=f"Initialized {len(created)} default job roles",
        created_job_roles=created,
    )
