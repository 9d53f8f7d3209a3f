"""
Resume endpoints - resume CRUD, nested section creation, aggregate view and PDF export
"""
import asyncio
from urllib.parse import quote

from fastapi import APIRouter, Depends, status
from fastapi.responses import Response
from sqlalchemy.orm import Session

from careercrafter.app.core.dependencies import get_current_user, get_db, get_document_exporter
from careercrafter.app.core.logging_config import get_logger
from careercrafter.app.models.resume import Education, Skill, WorkExperience
from careercrafter.app.models.user import User
from careercrafter.app.schemas.resume import (
    EducationIn,
    EducationOut,
    MessageResponse,
    PersonalInfoIn,
    PersonalInfoOut,
    ResumeCreate,
    ResumeDetail,
    ResumeOut,
    ResumeUpdate,
    SkillIn,
    SkillOut,
    WorkExperienceIn,
    WorkExperienceOut,
    education_model_to_payload,
    personal_info_model_to_payload,
    resume_model_to_payload,
    skill_model_to_payload,
    work_experience_model_to_payload,
)
from careercrafter.app.services import resume_service
from careercrafter.app.services.ownership import get_owned_resume
from careercrafter.app.services.pdf_generator import ResumeDocumentExporter

logger = get_logger("api.resumes")
router = APIRouter()


@router.get("", response_model=list[ResumeOut])
def list_resumes(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """List the current user's resumes, most recently updated first."""
    return [resume_model_to_payload(r) for r in resume_service.list_resumes(db, current_user)]


@router.post("", response_model=ResumeOut)
def create_resume(
    payload: ResumeCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    resume = resume_service.create_resume(db, current_user, payload)
    return resume_model_to_payload(resume)


@router.get("/{resume_id}", response_model=ResumeDetail)
async def get_resume(
    resume_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Full resume: personal info, work experience, education and skills."""
    get_owned_resume(db, resume_id, current_user)
    return await resume_service.get_resume_with_details(db, resume_id)


@router.put("/{resume_id}", response_model=ResumeOut)
def update_resume(
    resume_id: int,
    payload: ResumeUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Update title and/or active flag."""
    resume = get_owned_resume(db, resume_id, current_user)
    resume = resume_service.update_resume(db, resume, payload)
    return resume_model_to_payload(resume)


@router.delete("/{resume_id}", response_model=MessageResponse)
def delete_resume(
    resume_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Delete a resume together with all of its sections."""
    resume = get_owned_resume(db, resume_id, current_user)
    resume_service.delete_resume(db, resume)
    return {"message": "Resume deleted successfully"}


@router.api_route("/{resume_id}/personal-info", methods=["POST", "PUT"], response_model=PersonalInfoOut)
def upsert_personal_info(
    resume_id: int,
    payload: PersonalInfoIn,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Create or replace the resume's personal info."""
    get_owned_resume(db, resume_id, current_user)
    info = resume_service.upsert_personal_info(db, resume_id, payload)
    return personal_info_model_to_payload(info)


@router.post("/{resume_id}/work-experience", response_model=WorkExperienceOut)
def create_work_experience(
    resume_id: int,
    payload: WorkExperienceIn,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    get_owned_resume(db, resume_id, current_user)
    entry = resume_service.create_section_entry(db, WorkExperience, resume_id, payload)
    return work_experience_model_to_payload(entry)


@router.post("/{resume_id}/education", response_model=EducationOut)
def create_education(
    resume_id: int,
    payload: EducationIn,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    get_owned_resume(db, resume_id, current_user)
    entry = resume_service.create_section_entry(db, Education, resume_id, payload)
    return education_model_to_payload(entry)


@router.post("/{resume_id}/skills", response_model=SkillOut)
def create_skill(
    resume_id: int,
    payload: SkillIn,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    get_owned_resume(db, resume_id, current_user)
    entry = resume_service.create_section_entry(db, Skill, resume_id, payload)
    return skill_model_to_payload(entry)


@router.post("/{resume_id}/export", status_code=status.HTTP_200_OK)
async def export_resume(
    resume_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    exporter: ResumeDocumentExporter = Depends(get_document_exporter),
):
    """Download the resume as a PDF attachment."""
    get_owned_resume(db, resume_id, current_user)
    detail = await resume_service.get_resume_with_details(db, resume_id)
    document = await asyncio.to_thread(exporter.export, detail)
    ascii_name = document.filename.encode("ascii", "ignore").decode() or "resume.pdf"
    logger.info("Resume export user_id=%s resume_id=%s", current_user.id, resume_id)
    return Response(
        content=document.content,
        media_type=document.media_type,
        headers={
            "Content-Disposition": (
                f'attachment; filename="{ascii_name}"; filename*=UTF-8\'\'{quote(document.filename)}'
            )
        },
    )
