"""
Section entry endpoints - update/delete a single work experience, education or skill by its own id.
The owning resume must belong to the caller (403 otherwise).
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from careercrafter.app.core.dependencies import get_current_user, get_db
from careercrafter.app.models.resume import Education, Skill, WorkExperience
from careercrafter.app.models.user import User
from careercrafter.app.schemas.resume import (
    EducationOut,
    EducationUpdate,
    MessageResponse,
    SkillOut,
    SkillUpdate,
    WorkExperienceOut,
    WorkExperienceUpdate,
    education_model_to_payload,
    skill_model_to_payload,
    work_experience_model_to_payload,
)
from careercrafter.app.services import resume_service
from careercrafter.app.services.ownership import get_owned_section_entry

router = APIRouter()


# --- Work experience ---
@router.put("/work-experience/{entry_id}", response_model=WorkExperienceOut)
def update_work_experience(
    entry_id: int,
    payload: WorkExperienceUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    entry = get_owned_section_entry(db, WorkExperience, entry_id, current_user, "Work experience")
    entry = resume_service.update_section_entry(db, entry, payload)
    return work_experience_model_to_payload(entry)


@router.delete("/work-experience/{entry_id}", response_model=MessageResponse)
def delete_work_experience(
    entry_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    entry = get_owned_section_entry(db, WorkExperience, entry_id, current_user, "Work experience")
    resume_service.delete_section_entry(db, entry)
    return {"message": "Work experience deleted successfully"}


# --- Education ---
@router.put("/education/{entry_id}", response_model=EducationOut)
def update_education(
    entry_id: int,
    payload: EducationUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    entry = get_owned_section_entry(db, Education, entry_id, current_user, "Education")
    entry = resume_service.update_section_entry(db, entry, payload)
    return education_model_to_payload(entry)


@router.delete("/education/{entry_id}", response_model=MessageResponse)
def delete_education(
    entry_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    entry = get_owned_section_entry(db, Education, entry_id, current_user, "Education")
    resume_service.delete_section_entry(db, entry)
    return {"message": "Education deleted successfully"}


# --- Skills ---
@router.put("/skills/{entry_id}", response_model=SkillOut)
def update_skill(
    entry_id: int,
    payload: SkillUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    entry = get_owned_section_entry(db, Skill, entry_id, current_user, "Skill")
    entry = resume_service.update_section_entry(db, entry, payload)
    return skill_model_to_payload(entry)


@router.delete("/skills/{entry_id}", response_model=MessageResponse)
def delete_skill(
    entry_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    entry = get_owned_section_entry(db, Skill, entry_id, current_user, "Skill")
    resume_service.delete_section_entry(db, entry)
    return {"message": "Skill deleted successfully"}
