"""
Job description endpoints - save and list postings used for job match analysis
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from careercrafter.app.core.dependencies import get_current_user, get_db
from careercrafter.app.models.user import User
from careercrafter.app.schemas.job_description import (
    JobDescriptionCreate,
    JobDescriptionOut,
    job_description_model_to_payload,
)
from careercrafter.app.services import job_description_service

router = APIRouter()


@router.post("", response_model=JobDescriptionOut)
def create_job_description(
    payload: JobDescriptionCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    job = job_description_service.create_job_description(db, current_user, payload)
    return job_description_model_to_payload(job)


@router.get("", response_model=list[JobDescriptionOut])
def list_job_descriptions(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Current user's saved job descriptions, newest first."""
    return [
        job_description_model_to_payload(j)
        for j in job_description_service.list_job_descriptions(db, current_user)
    ]
