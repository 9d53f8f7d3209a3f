"""
AI enhancement endpoints - summary, experience bullets, job match analysis, skill suggestions.
Upstream model failures surface as 502; unreadable model output comes back with degraded=true.
"""
import asyncio

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from careercrafter.app.core.dependencies import get_ai_gateway, get_current_user, get_db
from careercrafter.app.core.exceptions import UpstreamServiceError
from careercrafter.app.core.logging_config import get_logger
from careercrafter.app.models.user import User
from careercrafter.app.schemas.ai import (
    AnalyzeJobMatchIn,
    EnhanceExperienceIn,
    EnhanceSummaryIn,
    ExperienceEnhancement,
    JobMatchAnalysis,
    SkillSuggestions,
    SuggestSkillsIn,
    SummaryResult,
)
from careercrafter.app.services import resume_service
from careercrafter.app.services.ai_service import AIEnhancementGateway
from careercrafter.app.services.ownership import get_owned_job_description, get_owned_resume

logger = get_logger("api.ai")
router = APIRouter()


def _upstream_failure(action: str, user: User, exc: UpstreamServiceError) -> HTTPException:
    logger.warning("AI %s failed user_id=%s error=%s", action, user.id, exc.message)
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=f"Failed to {action}")


@router.post("/enhance-summary", response_model=SummaryResult)
def enhance_summary(
    payload: EnhanceSummaryIn,
    current_user: User = Depends(get_current_user),
    gateway: AIEnhancementGateway = Depends(get_ai_gateway),
):
    """Write a 2-3 sentence professional summary from the given sections."""
    try:
        return gateway.enhance_summary(
            payload.personalInfo,
            payload.workExperience,
            payload.skills,
            payload.jobDescription,
        )
    except UpstreamServiceError as e:
        raise _upstream_failure("enhance summary", current_user, e)


@router.post("/enhance-experience", response_model=ExperienceEnhancement)
def enhance_experience(
    payload: EnhanceExperienceIn,
    current_user: User = Depends(get_current_user),
    gateway: AIEnhancementGateway = Depends(get_ai_gateway),
):
    """Rewrite one work experience as 3-5 achievement bullets."""
    try:
        return gateway.enhance_experience(payload.experience.model_dump(), payload.jobDescription)
    except UpstreamServiceError as e:
        raise _upstream_failure("enhance experience", current_user, e)


@router.post("/analyze-job-match", response_model=JobMatchAnalysis)
async def analyze_job_match(
    payload: AnalyzeJobMatchIn,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    gateway: AIEnhancementGateway = Depends(get_ai_gateway),
):
    """
    Score one of the caller's resumes against a job description.

    - **resumeId**: resume to analyse
    - **jobDescription**: job posting text, or
    - **jobDescriptionId**: id of a saved job description
    """
    get_owned_resume(db, payload.resumeId, current_user)
    job_description = (payload.jobDescription or "").strip()
    if not job_description:
        job_description = get_owned_job_description(db, payload.jobDescriptionId, current_user).description

    resume = await resume_service.get_resume_with_details(db, payload.resumeId)
    try:
        analysis = await asyncio.to_thread(gateway.analyze_job_match, resume, job_description)
    except UpstreamServiceError as e:
        raise _upstream_failure("analyze job match", current_user, e)
    logger.info(
        "Job match analysed user_id=%s resume_id=%s score=%s degraded=%s",
        current_user.id,
        payload.resumeId,
        analysis.matchScore,
        analysis.degraded,
    )
    return analysis


@router.post("/suggest-skills", response_model=SkillSuggestions)
def suggest_skills(
    payload: SuggestSkillsIn,
    current_user: User = Depends(get_current_user),
    gateway: AIEnhancementGateway = Depends(get_ai_gateway),
):
    """Suggest skills the job asks for that aren't listed yet."""
    try:
        return gateway.suggest_skills(payload.currentSkills, payload.jobDescription)
    except UpstreamServiceError as e:
        raise _upstream_failure("suggest skills", current_user, e)
