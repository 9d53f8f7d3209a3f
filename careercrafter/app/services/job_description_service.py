"""
Job description service - saved postings used as job-match targets
"""
from sqlalchemy.orm import Session

from careercrafter.app.models.job_description import JobDescription
from careercrafter.app.models.user import User
from careercrafter.app.schemas.job_description import JobDescriptionCreate


def create_job_description(db: Session, user: User, payload: JobDescriptionCreate) -> JobDescription:
    job = JobDescription(
        user_id=user.id,
        title=payload.title,
        company=payload.company,
        description=payload.description,
        requirements=list(payload.requirements),
    )
    db.add(job)
    db.commit()
    db.refresh(job)
    return job


def list_job_descriptions(db: Session, user: User) -> list[JobDescription]:
    return (
        db.query(JobDescription)
        .filter(JobDescription.user_id == user.id)
        .order_by(JobDescription.created_at.desc(), JobDescription.id.desc())
        .all()
    )
