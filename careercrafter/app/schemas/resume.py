"""
Resume Pydantic schemas - camelCase fields match the resume builder frontend
"""
import re
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

# --- Resume ---
class ResumeCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    isActive: bool = True


class ResumeUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    isActive: Optional[bool] = None


class ResumeOut(BaseModel):
    id: int
    userId: int
    title: str
    isActive: bool = True
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None


# --- Personal info ---
class PersonalInfoIn(BaseModel):
    fullName: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    website: Optional[str] = None
    linkedin: Optional[str] = None
    github: Optional[str] = None
    summary: Optional[str] = None

    model_config = {"extra": "ignore"}


class PersonalInfoOut(PersonalInfoIn):
    id: int
    resumeId: int


# --- Dated sections (work experience, education) ---
class _DatedEntry(BaseModel):
    """Shared start/end handling. isPresent wins over any end date."""
    startMonth: int = Field(ge=1, le=12)
    startYear: int = Field(ge=1900, le=2100)
    endMonth: Optional[int] = Field(None, ge=1, le=12)
    endYear: Optional[int] = Field(None, ge=1900, le=2100)
    isPresent: bool = False
    achievements: List[str] = Field(default_factory=list)
    order: int = 0

    model_config = {"extra": "ignore"}

    @model_validator(mode="after")
    def _present_clears_end(self):
        if self.isPresent:
            self.endMonth = None
            self.endYear = None
        return self


class WorkExperienceIn(_DatedEntry):
    jobTitle: str = Field(min_length=1, max_length=255)
    company: str = Field(min_length=1, max_length=255)
    location: Optional[str] = None
    description: Optional[str] = None


class EducationIn(_DatedEntry):
    institution: str = Field(min_length=1, max_length=255)
    degree: str = Field(min_length=1, max_length=255)
    fieldOfStudy: Optional[str] = None
    gpa: Optional[str] = Field(None, max_length=16)


class _DatedEntryUpdate(BaseModel):
    startMonth: Optional[int] = Field(None, ge=1, le=12)
    startYear: Optional[int] = Field(None, ge=1900, le=2100)
    endMonth: Optional[int] = Field(None, ge=1, le=12)
    endYear: Optional[int] = Field(None, ge=1900, le=2100)
    isPresent: Optional[bool] = None
    achievements: Optional[List[str]] = None
    order: Optional[int] = None

    model_config = {"extra": "ignore"}


class WorkExperienceUpdate(_DatedEntryUpdate):
    jobTitle: Optional[str] = Field(None, min_length=1, max_length=255)
    company: Optional[str] = Field(None, min_length=1, max_length=255)
    location: Optional[str] = None
    description: Optional[str] = None


class EducationUpdate(_DatedEntryUpdate):
    institution: Optional[str] = Field(None, min_length=1, max_length=255)
    degree: Optional[str] = Field(None, min_length=1, max_length=255)
    fieldOfStudy: Optional[str] = None
    gpa: Optional[str] = Field(None, max_length=16)


class WorkExperienceOut(WorkExperienceIn):
    id: int
    resumeId: int


class EducationOut(EducationIn):
    id: int
    resumeId: int


# --- Skills ---
class SkillIn(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    category: Optional[str] = None
    proficiency: int = Field(3, ge=1, le=5)
    order: int = 0

    model_config = {"extra": "ignore"}


class SkillUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    category: Optional[str] = None
    proficiency: Optional[int] = Field(None, ge=1, le=5)
    order: Optional[int] = None

    model_config = {"extra": "ignore"}


class SkillOut(SkillIn):
    id: int
    resumeId: int


# --- Aggregate view ---
class ResumeDetail(ResumeOut):
    """Resume row joined with all of its sections"""
    personalInfo: Optional[PersonalInfoOut] = None
    workExperience: List[WorkExperienceOut] = Field(default_factory=list)
    education: List[EducationOut] = Field(default_factory=list)
    skills: List[SkillOut] = Field(default_factory=list)


class MessageResponse(BaseModel):
    message: str


# --- Conversions ---
def _to_snake(name: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()


def payload_to_columns(payload: BaseModel, partial: bool = False) -> dict:
    """Convert a camelCase payload to DB column kwargs. partial=True keeps only fields the client sent."""
    data = payload.model_dump(exclude_unset=partial)
    return {_to_snake(key): value for key, value in data.items()}


def resume_model_to_payload(resume) -> ResumeOut:
    return ResumeOut(
        id=resume.id,
        userId=resume.user_id,
        title=resume.title,
        isActive=bool(resume.is_active) if resume.is_active is not None else True,
        createdAt=resume.created_at,
        updatedAt=resume.updated_at,
    )


def personal_info_model_to_payload(info) -> PersonalInfoOut:
    return PersonalInfoOut(
        id=info.id,
        resumeId=info.resume_id,
        fullName=info.full_name,
        email=info.email,
        phone=info.phone,
        location=info.location,
        website=info.website,
        linkedin=info.linkedin,
        github=info.github,
        summary=info.summary,
    )


def work_experience_model_to_payload(exp) -> WorkExperienceOut:
    return WorkExperienceOut(
        id=exp.id,
        resumeId=exp.resume_id,
        jobTitle=exp.job_title,
        company=exp.company,
        location=exp.location,
        startMonth=exp.start_month,
        startYear=exp.start_year,
        endMonth=exp.end_month,
        endYear=exp.end_year,
        isPresent=bool(exp.is_present),
        description=exp.description,
        achievements=list(exp.achievements or []),
        order=exp.order or 0,
    )


def education_model_to_payload(edu) -> EducationOut:
    return EducationOut(
        id=edu.id,
        resumeId=edu.resume_id,
        institution=edu.institution,
        degree=edu.degree,
        fieldOfStudy=edu.field_of_study,
        startMonth=edu.start_month,
        startYear=edu.start_year,
        endMonth=edu.end_month,
        endYear=edu.end_year,
        isPresent=bool(edu.is_present),
        gpa=edu.gpa,
        achievements=list(edu.achievements or []),
        order=edu.order or 0,
    )


def skill_model_to_payload(skill) -> SkillOut:
    return SkillOut(
        id=skill.id,
        resumeId=skill.resume_id,
        name=skill.name,
        category=skill.category,
        proficiency=skill.proficiency if skill.proficiency is not None else 3,
        order=skill.order or 0,
    )
