"""
Resume service - resume rows, their sections, and the aggregate "full resume" view.
Used by /api/resumes, the section routes, AI job-match analysis and PDF export.
"""
import asyncio
from datetime import datetime

from sqlalchemy import func
from sqlalchemy.orm import Session

from careercrafter.app.core.logging_config import get_logger
from careercrafter.app.models.job_description import JobDescription
from careercrafter.app.models.resume import Education, PersonalInfo, Resume, Skill, WorkExperience
from careercrafter.app.models.user import User
from careercrafter.app.schemas.resume import (
    PersonalInfoIn,
    ResumeCreate,
    ResumeDetail,
    ResumeUpdate,
    education_model_to_payload,
    payload_to_columns,
    personal_info_model_to_payload,
    resume_model_to_payload,
    skill_model_to_payload,
    work_experience_model_to_payload,
)

logger = get_logger("services.resume")


# --- Resumes ---
def list_resumes(db: Session, user: User) -> list[Resume]:
    """User's resumes, most recently updated first."""
    return (
        db.query(Resume)
        .filter(Resume.user_id == user.id)
        .order_by(Resume.updated_at.desc(), Resume.id.desc())
        .all()
    )


def get_resume(db: Session, resume_id: int) -> Resume | None:
    return db.query(Resume).filter(Resume.id == resume_id).first()


def create_resume(db: Session, user: User, payload: ResumeCreate) -> Resume:
    resume = Resume(user_id=user.id, title=payload.title, is_active=payload.isActive)
    db.add(resume)
    db.commit()
    db.refresh(resume)
    logger.info("Resume created user_id=%s resume_id=%s", user.id, resume.id)
    return resume


def update_resume(db: Session, resume: Resume, payload: ResumeUpdate) -> Resume:
    data = payload_to_columns(payload, partial=True)
    if data.get("title") is not None:
        resume.title = data["title"]
    if data.get("is_active") is not None:
        resume.is_active = data["is_active"]
    resume.updated_at = datetime.utcnow()
    db.commit()
    db.refresh(resume)
    return resume


def delete_resume(db: Session, resume: Resume) -> None:
    """Delete a resume and every section row it owns, in one transaction."""
    resume_id = resume.id
    try:
        db.delete(resume)
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info("Resume deleted resume_id=%s", resume_id)


# --- Personal info ---
def get_personal_info(db: Session, resume_id: int) -> PersonalInfo | None:
    return db.query(PersonalInfo).filter(PersonalInfo.resume_id == resume_id).first()


def upsert_personal_info(db: Session, resume_id: int, payload: PersonalInfoIn) -> PersonalInfo:
    """Create or replace the single personal-info row of a resume."""
    info = get_personal_info(db, resume_id)
    if not info:
        info = PersonalInfo(resume_id=resume_id)
        db.add(info)
    for key, value in payload_to_columns(payload).items():
        setattr(info, key, value)
    db.commit()
    db.refresh(info)
    return info


# --- Sections (work experience, education, skills) ---
def list_work_experience(db: Session, resume_id: int) -> list[WorkExperience]:
    return (
        db.query(WorkExperience)
        .filter(WorkExperience.resume_id == resume_id)
        .order_by(
            WorkExperience.order.asc(),
            WorkExperience.start_year.desc(),
            WorkExperience.start_month.desc(),
            WorkExperience.id.asc(),
        )
        .all()
    )


def list_education(db: Session, resume_id: int) -> list[Education]:
    return (
        db.query(Education)
        .filter(Education.resume_id == resume_id)
        .order_by(
            Education.order.asc(),
            Education.start_year.desc(),
            Education.start_month.desc(),
            Education.id.asc(),
        )
        .all()
    )


def list_skills(db: Session, resume_id: int) -> list[Skill]:
    return (
        db.query(Skill)
        .filter(Skill.resume_id == resume_id)
        .order_by(Skill.order.asc(), Skill.name.asc())
        .all()
    )


def get_section_entry(db: Session, model, entry_id: int):
    return db.query(model).filter(model.id == entry_id).first()


def create_section_entry(db: Session, model, resume_id: int, payload):
    entry = model(resume_id=resume_id, **payload_to_columns(payload))
    db.add(entry)
    db.commit()
    db.refresh(entry)
    return entry


def update_section_entry(db: Session, entry, payload):
    """Apply only the fields the client sent. Nulls for required columns are ignored."""
    columns = entry.__table__.columns
    for key, value in payload_to_columns(payload, partial=True).items():
        if value is None and not columns[key].nullable:
            continue
        setattr(entry, key, value)
    if getattr(entry, "is_present", False):
        entry.end_month = None
        entry.end_year = None
    db.commit()
    db.refresh(entry)
    return entry


def delete_section_entry(db: Session, entry) -> None:
    db.delete(entry)
    db.commit()


# --- Aggregate view ---
def _load_personal_info(db: Session, resume_id: int):
    info = get_personal_info(db, resume_id)
    return personal_info_model_to_payload(info) if info else None


def _load_work_experience(db: Session, resume_id: int):
    return [work_experience_model_to_payload(e) for e in list_work_experience(db, resume_id)]


def _load_education(db: Session, resume_id: int):
    return [education_model_to_payload(e) for e in list_education(db, resume_id)]


def _load_skills(db: Session, resume_id: int):
    return [skill_model_to_payload(s) for s in list_skills(db, resume_id)]


def _run_in_own_session(bind, loader, resume_id: int):
    # Sessions are not thread-safe; each concurrent fetch gets its own.
    with Session(bind=bind) as session:
        return loader(session, resume_id)


async def get_resume_with_details(db: Session, resume_id: int) -> ResumeDetail | None:
    """
    Resume joined with personal info, work experience, education and skills.
    The four section fetches run concurrently; any failure fails the whole view.
    Returns None when the resume doesn't exist.
    """
    resume = get_resume(db, resume_id)
    if not resume:
        return None
    base = resume_model_to_payload(resume)
    bind = db.get_bind()
    personal_info, work_experience, education, skills = await asyncio.gather(
        asyncio.to_thread(_run_in_own_session, bind, _load_personal_info, resume_id),
        asyncio.to_thread(_run_in_own_session, bind, _load_work_experience, resume_id),
        asyncio.to_thread(_run_in_own_session, bind, _load_education, resume_id),
        asyncio.to_thread(_run_in_own_session, bind, _load_skills, resume_id),
    )
    return ResumeDetail(
        **base.model_dump(),
        personalInfo=personal_info,
        workExperience=work_experience,
        education=education,
        skills=skills,
    )


# --- Dashboard ---
def get_user_stats(db: Session, user: User) -> dict:
    """Counts shown on the dashboard."""
    total_resumes = db.query(func.count(Resume.id)).filter(Resume.user_id == user.id).scalar() or 0
    active_resumes = (
        db.query(func.count(Resume.id))
        .filter(Resume.user_id == user.id, Resume.is_active.is_(True))
        .scalar()
        or 0
    )
    total_jobs = (
        db.query(func.count(JobDescription.id)).filter(JobDescription.user_id == user.id).scalar() or 0
    )
    return {
        "totalResumes": total_resumes,
        "activeResumes": active_resumes,
        "totalJobDescriptions": total_jobs,
    }
