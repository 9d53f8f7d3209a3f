"""
AI enhancement: resume summary, experience bullets, job-match analysis, skill suggestions.

Prompt building and response reconciliation live in AIEnhancementGateway. The
model itself sits behind TextGenerator, so any chat-completions backend (or a
fake in tests) can be plugged in.
"""
from __future__ import annotations

import json
import re
from typing import Any, Protocol

from openai import APIStatusError, OpenAI, OpenAIError

from careercrafter.app.core.config import (
    AI_EXPERIENCE_MAX_TOKENS,
    AI_JOB_MATCH_MAX_TOKENS,
    AI_SKILLS_MAX_TOKENS,
    AI_SUMMARY_MAX_TOKENS,
    JOB_MATCH_FALLBACK_SCORE,
    JOB_MATCH_FALLBACK_STRENGTH,
    JOB_MATCH_FALLBACK_SUGGESTION,
    Settings,
)
from careercrafter.app.core.exceptions import UpstreamServiceError
from careercrafter.app.core.logging_config import get_logger
from careercrafter.app.schemas.ai import (
    ExperienceEnhancement,
    JobMatchAnalysis,
    SkillSuggestions,
    SummaryResult,
)
from careercrafter.app.schemas.resume import ResumeDetail

logger = get_logger("services.ai")

Message = dict[str, str]

SUMMARY_SYSTEM_PROMPT = (
    "You are a professional resume writer. Create compelling, ATS-friendly professional "
    "summaries that highlight relevant experience and skills."
)
SUMMARY_PROMPT = """Based on the following information, write a professional summary (2-3 sentences) that would be perfect for a resume. Focus on key achievements, skills, and career highlights. Make it engaging and professional.

Personal Info: {personal_info}
Work Experience: {work_experience}
Skills: {skills}
{target_job}"""

EXPERIENCE_SYSTEM_PROMPT = (
    "You are a professional resume writer. Create impactful bullet points for work experience "
    "that show quantifiable achievements and use action verbs. Format as a JSON array of strings."
)
EXPERIENCE_PROMPT = """Enhance the following work experience into 3-5 powerful bullet points that demonstrate impact and achievements. Use metrics where possible and start with strong action verbs. Return as JSON array only.

Job Title: {job_title}
Company: {company}
Current Description: {description}
{target_job}"""

JOB_MATCH_SYSTEM_PROMPT = (
    "You are an expert ATS system and recruiter. Analyze resumes against job descriptions and "
    "provide detailed matching analysis. Return response as valid JSON only."
)
JOB_MATCH_PROMPT = """Analyze the following resume against the job description and provide a detailed match analysis. Return a JSON object with:
- matchScore: number (0-100)
- missingSkills: array of skills mentioned in job but missing from resume
- strengths: array of strong matching points
- suggestions: array of improvement suggestions

Resume:
Personal Info: {personal_info}
Work Experience: {work_experience}
Education: {education}
Skills: {skills}

Job Description: {job_description}"""

SKILLS_SYSTEM_PROMPT = (
    "You are a career advisor. Suggest relevant skills based on job descriptions that would "
    "strengthen a candidate's profile. Return as JSON array of skill names only."
)
SKILLS_PROMPT = """Current Skills: {current_skills}

Job Description: {job_description}

Suggest 5-8 additional skills that would be valuable for this role but are not already listed. Return as JSON array of skill names only."""

_BULLET_MARKER = re.compile(r"^[•-]\s*")


class TextGenerator(Protocol):
    """Anything that turns chat messages into generated text."""

    def generate_text(self, messages: list[Message], max_tokens: int = 500) -> str: ...


class OpenAIChatGenerator:
    """TextGenerator backed by an OpenAI-compatible chat completions endpoint. No retries."""

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str | None = None,
        temperature: float = 0.7,
        timeout: float = 30,
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url or None
        self.temperature = temperature
        self.timeout = timeout
        self._client: OpenAI | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "OpenAIChatGenerator":
        return cls(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            base_url=settings.openai_base_url,
            temperature=settings.openai_temperature,
            timeout=settings.http_request_timeout,
        )

    def _get_client(self) -> OpenAI:
        if self._client is None:
            self._client = OpenAI(
                api_key=self.api_key,
                base_url=self.base_url,
                timeout=self.timeout,
                max_retries=0,
            )
        return self._client

    def generate_text(self, messages: list[Message], max_tokens: int = 500) -> str:
        if not self.api_key:
            raise UpstreamServiceError("AI service is not configured")
        try:
            resp = self._get_client().chat.completions.create(
                model=self.model,
                messages=messages,
                max_tokens=max_tokens,
                temperature=self.temperature,
            )
        except APIStatusError as e:
            logger.warning("AI request failed model=%s status=%s", self.model, e.status_code)
            raise UpstreamServiceError(f"AI service error: {e.status_code}", status_code=e.status_code) from e
        except OpenAIError as e:
            logger.warning("AI request failed model=%s error=%s", self.model, e)
            raise UpstreamServiceError(f"AI service unavailable: {e}") from e
        if not resp.choices:
            return ""
        return resp.choices[0].message.content or ""

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None


def _dump(value: Any) -> str:
    return json.dumps(value, default=str, ensure_ascii=False)


def _parse_json(content: str) -> Any:
    """json.loads after removing a Markdown code fence around the whole text. Raises ValueError."""
    text = (content or "").strip()
    text = re.sub(r"^```\w*\n?", "", text)
    text = re.sub(r"\n?```$", "", text).strip()
    return json.loads(text)


def _string_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(item).strip() for item in value if item is not None and str(item).strip()]


def _score(value: Any) -> int:
    try:
        score = int(round(float(value)))
    except (TypeError, ValueError):
        return 0
    return max(0, min(100, score))


def _bullets_from_lines(content: str) -> list[str]:
    bullets = []
    for line in (content or "").split("\n"):
        stripped = line.strip()
        if stripped.startswith("•") or stripped.startswith("-"):
            bullet = _BULLET_MARKER.sub("", stripped)
            if bullet:
                bullets.append(bullet)
    return bullets


def _target_job(job_description: str | None, label: str) -> str:
    job_description = (job_description or "").strip()
    return f"{label}: {job_description}" if job_description else ""


class AIEnhancementGateway:
    """Builds prompts from resume data and turns model output into typed results."""

    def __init__(self, generator: TextGenerator):
        self.generator = generator

    def enhance_summary(
        self,
        personal_info: dict,
        work_experience: list[dict],
        skills: list[dict],
        job_description: str | None = None,
    ) -> SummaryResult:
        """Generated summary text, verbatim. Upstream errors propagate."""
        messages = [
            {"role": "system", "content": SUMMARY_SYSTEM_PROMPT},
            {
                "role": "user",
                "content": SUMMARY_PROMPT.format(
                    personal_info=_dump(personal_info),
                    work_experience=_dump(work_experience),
                    skills=_dump(skills),
                    target_job=_target_job(job_description, "Target Job"),
                ),
            },
        ]
        return SummaryResult(summary=self.generator.generate_text(messages, AI_SUMMARY_MAX_TOKENS))

    def enhance_experience(self, experience: dict, job_description: str | None = None) -> ExperienceEnhancement:
        """
        3-5 achievement bullets. A JSON array is used as-is; anything else falls
        back to the lines that start with a bullet or dash marker.
        """
        messages = [
            {"role": "system", "content": EXPERIENCE_SYSTEM_PROMPT},
            {
                "role": "user",
                "content": EXPERIENCE_PROMPT.format(
                    job_title=experience.get("jobTitle") or "",
                    company=experience.get("company") or "",
                    description=experience.get("description") or "",
                    target_job=_target_job(job_description, "Target Job Description"),
                ),
            },
        ]
        content = self.generator.generate_text(messages, AI_EXPERIENCE_MAX_TOKENS)
        try:
            parsed = _parse_json(content)
        except ValueError:
            parsed = None
        if isinstance(parsed, list):
            return ExperienceEnhancement(achievements=_string_list(parsed))

        logger.warning("Experience bullets were not a JSON array; using line fallback")
        return ExperienceEnhancement(achievements=_bullets_from_lines(content), degraded=True)

    def analyze_job_match(self, resume: ResumeDetail, job_description: str) -> JobMatchAnalysis:
        """
        Match analysis of a full resume against a job description. Fields missing
        from the model's JSON default independently; unreadable output returns
        the static fallback analysis.
        """
        messages = [
            {"role": "system", "content": JOB_MATCH_SYSTEM_PROMPT},
            {
                "role": "user",
                "content": JOB_MATCH_PROMPT.format(
                    personal_info=_dump(resume.personalInfo.model_dump() if resume.personalInfo else None),
                    work_experience=_dump([e.model_dump() for e in resume.workExperience]),
                    education=_dump([e.model_dump() for e in resume.education]),
                    skills=_dump([s.model_dump() for s in resume.skills]),
                    job_description=job_description,
                ),
            },
        ]
        content = self.generator.generate_text(messages, AI_JOB_MATCH_MAX_TOKENS)
        try:
            analysis = _parse_json(content)
        except ValueError as e:
            logger.warning("Failed to parse job match analysis resume_id=%s error=%s", resume.id, e)
            analysis = None
        if not isinstance(analysis, dict):
            return JobMatchAnalysis(
                matchScore=JOB_MATCH_FALLBACK_SCORE,
                missingSkills=[],
                strengths=[JOB_MATCH_FALLBACK_STRENGTH],
                suggestions=[JOB_MATCH_FALLBACK_SUGGESTION],
                degraded=True,
            )
        return JobMatchAnalysis(
            matchScore=_score(analysis.get("matchScore", 0)),
            missingSkills=_string_list(analysis.get("missingSkills")),
            strengths=_string_list(analysis.get("strengths")),
            suggestions=_string_list(analysis.get("suggestions")),
        )

    def suggest_skills(self, current_skills: list[str], job_description: str) -> SkillSuggestions:
        """Skill names worth adding for the job. Unreadable output gives an empty list."""
        messages = [
            {"role": "system", "content": SKILLS_SYSTEM_PROMPT},
            {
                "role": "user",
                "content": SKILLS_PROMPT.format(
                    current_skills=", ".join(current_skills),
                    job_description=job_description,
                ),
            },
        ]
        content = self.generator.generate_text(messages, AI_SKILLS_MAX_TOKENS)
        try:
            parsed = _parse_json(content)
        except ValueError:
            parsed = None
        if not isinstance(parsed, list):
            logger.warning("Skill suggestions were not a JSON array; returning none")
            return SkillSuggestions(suggestions=[], degraded=True)
        return SkillSuggestions(suggestions=_string_list(parsed))

    def close(self) -> None:
        close = getattr(self.generator, "close", None)
        if callable(close):
            close()
