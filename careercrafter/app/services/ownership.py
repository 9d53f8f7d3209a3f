"""
Ownership checks shared by every resume-scoped route.

Resume lookups answer 404 for both "missing" and "someone else's" so a caller
can't probe which resume ids exist. Section lookups (work experience, education,
skills by their own id) answer 404 only when the row is missing and 403 when it
belongs to another user's resume.
"""
from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from careercrafter.app.core.logging_config import get_logger
from careercrafter.app.models.job_description import JobDescription
from careercrafter.app.models.resume import Resume
from careercrafter.app.models.user import User
from careercrafter.app.services import resume_service

logger = get_logger("services.ownership")


def get_owned_resume(db: Session, resume_id: int, user: User) -> Resume:
    resume = resume_service.get_resume(db, resume_id)
    if not resume or resume.user_id != user.id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Resume not found")
    return resume


def get_owned_section_entry(db: Session, model, entry_id: int, user: User, label: str):
    entry = resume_service.get_section_entry(db, model, entry_id)
    if not entry:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{label} not found")
    resume = resume_service.get_resume(db, entry.resume_id)
    if not resume or resume.user_id != user.id:
        logger.warning(
            "Forbidden section access user_id=%s table=%s entry_id=%s",
            user.id,
            model.__tablename__,
            entry_id,
        )
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
    return entry


def get_owned_job_description(db: Session, job_id: int, user: User) -> JobDescription:
    job = db.query(JobDescription).filter(JobDescription.id == job_id).first()
    if not job or job.user_id != user.id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job description not found")
    return job
