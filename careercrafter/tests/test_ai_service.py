"""Unit tests for AIEnhancementGateway response handling and OpenAIChatGenerator error mapping"""
from types import SimpleNamespace
from unittest.mock import MagicMock

import httpx
import openai
import pytest

from careercrafter.app.core.config import (
    AI_EXPERIENCE_MAX_TOKENS,
    AI_JOB_MATCH_MAX_TOKENS,
    JOB_MATCH_FALLBACK_SCORE,
)
from careercrafter.app.core.exceptions import UpstreamServiceError
from careercrafter.app.schemas.resume import ResumeDetail, SkillOut
from careercrafter.app.services.ai_service import AIEnhancementGateway, OpenAIChatGenerator


def _resume() -> ResumeDetail:
    return ResumeDetail(
        id=7,
        userId=1,
        title="Platform Engineer",
        skills=[SkillOut(id=1, resumeId=7, name="Python", proficiency=4)],
    )


@pytest.fixture
def generator(text_generator):
    return text_generator


@pytest.fixture
def gateway(generator):
    return AIEnhancementGateway(generator)


# --- enhance_summary ---
def test_summary_is_returned_verbatim(gateway, generator):
    generator.queue("  Seasoned engineer. Ships reliable systems.  ")
    result = gateway.enhance_summary({"fullName": "Jane"}, [], [], None)
    assert result.summary == "  Seasoned engineer. Ships reliable systems.  "
    assert result.degraded is False


def test_summary_prompt_mentions_target_job(gateway, generator):
    generator.queue("ok")
    gateway.enhance_summary({}, [], [], "Senior SRE at Example")
    user_prompt = generator.calls[0]["messages"][1]["content"]
    assert "Target Job: Senior SRE at Example" in user_prompt


def test_summary_propagates_upstream_error(gateway, generator):
    generator.error = UpstreamServiceError("down")
    with pytest.raises(UpstreamServiceError):
        gateway.enhance_summary({}, [], [], None)


# --- enhance_experience ---
def test_experience_json_array(gateway, generator):
    generator.queue('["Cut build time 50%", "Led a team of 4"]')
    result = gateway.enhance_experience({"jobTitle": "Engineer", "company": "Acme"})
    assert result.achievements == ["Cut build time 50%", "Led a team of 4"]
    assert result.degraded is False
    assert generator.calls[0]["max_tokens"] == AI_EXPERIENCE_MAX_TOKENS


def test_experience_json_in_code_fence(gateway, generator):
    generator.queue('```json\n["Automated deploys"]\n```')
    result = gateway.enhance_experience({"jobTitle": "Engineer", "company": "Acme"})
    assert result.achievements == ["Automated deploys"]
    assert result.degraded is False


def test_experience_fence_only_stripped_at_edges(gateway, generator):
    generator.queue('```json\n["Added ```make lint``` to CI"]\n```')
    result = gateway.enhance_experience({"jobTitle": "Engineer", "company": "Acme"})
    assert result.achievements == ["Added ```make lint``` to CI"]
    assert result.degraded is False


def test_experience_falls_back_to_marked_lines(gateway, generator):
    generator.queue("Here you go:\n• Built the thing\n- Scaled the thing\nThanks!")
    result = gateway.enhance_experience({"jobTitle": "Engineer", "company": "Acme"})
    assert result.achievements == ["Built the thing", "Scaled the thing"]
    assert result.degraded is True


def test_experience_fallback_can_be_empty(gateway, generator):
    generator.queue("No bullets at all.")
    result = gateway.enhance_experience({"jobTitle": "Engineer", "company": "Acme"})
    assert result.achievements == []
    assert result.degraded is True


# --- analyze_job_match ---
def test_job_match_returns_model_fields_exactly(gateway, generator):
    generator.queue('{"matchScore": 72, "missingSkills": ["Kubernetes"], "strengths": [], "suggestions": []}')
    result = gateway.analyze_job_match(_resume(), "Needs Kubernetes")
    assert result.matchScore == 72
    assert result.missingSkills == ["Kubernetes"]
    assert result.strengths == []
    assert result.suggestions == []
    assert result.degraded is False
    assert generator.calls[0]["max_tokens"] == AI_JOB_MATCH_MAX_TOKENS


def test_job_match_prompt_includes_resume_and_job(gateway, generator):
    generator.queue("{}")
    gateway.analyze_job_match(_resume(), "Go and gRPC required")
    prompt = generator.calls[0]["messages"][1]["content"]
    assert "Job Description: Go and gRPC required" in prompt
    assert "Python" in prompt


def test_job_match_missing_fields_default_independently(gateway, generator):
    generator.queue('{"strengths": ["Strong Python"]}')
    result = gateway.analyze_job_match(_resume(), "jd")
    assert result.matchScore == 0
    assert result.missingSkills == []
    assert result.strengths == ["Strong Python"]
    assert result.suggestions == []
    assert result.degraded is False


def test_job_match_score_is_clamped(gateway, generator):
    generator.queue('{"matchScore": 140}')
    assert gateway.analyze_job_match(_resume(), "jd").matchScore == 100


def test_job_match_non_json_uses_fallback(gateway, generator):
    generator.queue("I think this is a decent match overall.")
    result = gateway.analyze_job_match(_resume(), "jd")
    assert result.matchScore == JOB_MATCH_FALLBACK_SCORE == 75
    assert result.missingSkills == []
    assert len(result.strengths) == 1 and result.strengths[0]
    assert len(result.suggestions) == 1 and result.suggestions[0]
    assert result.degraded is True


def test_job_match_upstream_error_is_not_masked(gateway, generator):
    generator.error = UpstreamServiceError("timeout")
    with pytest.raises(UpstreamServiceError):
        gateway.analyze_job_match(_resume(), "jd")


# --- suggest_skills ---
def test_suggest_skills_json(gateway, generator):
    generator.queue('["Terraform", "AWS"]')
    result = gateway.suggest_skills(["Python"], "Cloud role")
    assert result.suggestions == ["Terraform", "AWS"]
    assert result.degraded is False
    assert "Current Skills: Python" in generator.calls[0]["messages"][1]["content"]


def test_suggest_skills_non_json_is_empty(gateway, generator):
    generator.queue("You should learn Terraform and AWS.")
    result = gateway.suggest_skills(["Python"], "Cloud role")
    assert result.suggestions == []
    assert result.degraded is True


# --- OpenAIChatGenerator ---
def _openai_generator(api_key="sk-test"):
    gen = OpenAIChatGenerator(api_key=api_key, model="gpt-4o-mini")
    gen._client = MagicMock()
    return gen


def test_generator_without_api_key_raises():
    gen = OpenAIChatGenerator(api_key="", model="gpt-4o-mini")
    with pytest.raises(UpstreamServiceError):
        gen.generate_text([{"role": "user", "content": "hi"}])


def test_generator_returns_message_content():
    gen = _openai_generator()
    gen._client.chat.completions.create.return_value = SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content="hello"))]
    )
    assert gen.generate_text([{"role": "user", "content": "hi"}], max_tokens=50) == "hello"
    kwargs = gen._client.chat.completions.create.call_args.kwargs
    assert kwargs["max_tokens"] == 50
    assert kwargs["model"] == "gpt-4o-mini"


def test_generator_maps_status_error():
    gen = _openai_generator()
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    response = httpx.Response(503, request=request)
    gen._client.chat.completions.create.side_effect = openai.APIStatusError(
        "unavailable", response=response, body=None
    )
    with pytest.raises(UpstreamServiceError) as exc_info:
        gen.generate_text([{"role": "user", "content": "hi"}])
    assert exc_info.value.status_code == 503


def test_generator_maps_connection_error():
    gen = _openai_generator()
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    gen._client.chat.completions.create.side_effect = openai.APIConnectionError(request=request)
    with pytest.raises(UpstreamServiceError):
        gen.generate_text([{"role": "user", "content": "hi"}])
