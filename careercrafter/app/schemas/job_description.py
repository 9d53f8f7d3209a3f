"""
Job description schemas
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class JobDescriptionCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    company: Optional[str] = None
    description: str = Field(min_length=1)
    requirements: List[str] = Field(default_factory=list)


class JobDescriptionOut(JobDescriptionCreate):
    id: int
    userId: int
    createdAt: Optional[datetime] = None


def job_description_model_to_payload(job) -> JobDescriptionOut:
    return JobDescriptionOut(
        id=job.id,
        userId=job.user_id,
        title=job.title,
        company=job.company,
        description=job.description,
        requirements=list(job.requirements or []),
        createdAt=job.created_at,
    )
