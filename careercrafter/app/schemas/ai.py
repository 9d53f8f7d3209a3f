"""
AI enhancement request/response schemas.

Every response carries `degraded`: True when the model's answer couldn't be
read in the expected shape and a fallback value was returned instead.
"""
from typing import Any, List, Optional

from pydantic import BaseModel, Field, model_validator


class EnhanceSummaryIn(BaseModel):
    personalInfo: dict[str, Any] = Field(default_factory=dict)
    workExperience: List[dict[str, Any]] = Field(default_factory=list)
    skills: List[dict[str, Any]] = Field(default_factory=list)
    jobDescription: Optional[str] = None


class ExperienceContext(BaseModel):
    jobTitle: str = ""
    company: str = ""
    description: Optional[str] = None

    model_config = {"extra": "ignore"}


class EnhanceExperienceIn(BaseModel):
    experience: ExperienceContext
    jobDescription: Optional[str] = None


class AnalyzeJobMatchIn(BaseModel):
    resumeId: int
    jobDescription: Optional[str] = None
    jobDescriptionId: Optional[int] = None

    @model_validator(mode="after")
    def _needs_job_description(self):
        if not (self.jobDescription or "").strip() and self.jobDescriptionId is None:
            raise ValueError("Provide jobDescription or jobDescriptionId")
        return self


class SuggestSkillsIn(BaseModel):
    currentSkills: List[str] = Field(default_factory=list)
    jobDescription: str = Field(min_length=1)


class SummaryResult(BaseModel):
    summary: str
    degraded: bool = False


class ExperienceEnhancement(BaseModel):
    achievements: List[str] = Field(default_factory=list)
    degraded: bool = False


class JobMatchAnalysis(BaseModel):
    matchScore: int = 0
    missingSkills: List[str] = Field(default_factory=list)
    strengths: List[str] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)
    degraded: bool = False


class SkillSuggestions(BaseModel):
    suggestions: List[str] = Field(default_factory=list)
    degraded: bool = False
