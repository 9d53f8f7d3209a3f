"""Tests for PUT/DELETE on work experience, education and skills, including ownership checks"""
import pytest

from careercrafter.app.models.resume import Education, Skill, WorkExperience


@pytest.fixture
def work_entry(db_session, resume):
    entry = WorkExperience(
        resume_id=resume.id,
        job_title="Engineer",
        company="Acme",
        start_month=1,
        start_year=2020,
        end_month=12,
        end_year=2022,
        achievements=["Shipped v1"],
    )
    db_session.add(entry)
    db_session.commit()
    db_session.refresh(entry)
    return entry


@pytest.fixture
def foreign_education(db_session, other_resume):
    entry = Education(
        resume_id=other_resume.id,
        institution="Elsewhere U",
        degree="BA",
        start_month=9,
        start_year=2011,
    )
    db_session.add(entry)
    db_session.commit()
    db_session.refresh(entry)
    return entry


def test_update_work_experience_partial(client, auth_headers, work_entry):
    r = client.put(
        f"/api/work-experience/{work_entry.id}",
        json={"company": "Acme Corp", "achievements": ["Shipped v1", "Shipped v2"]},
        headers=auth_headers,
    )
    assert r.status_code == 200
    data = r.json()
    assert data["company"] == "Acme Corp"
    assert data["jobTitle"] == "Engineer"
    assert data["achievements"] == ["Shipped v1", "Shipped v2"]
    assert data["endYear"] == 2022


def test_update_to_present_clears_end_date(client, auth_headers, work_entry, db_session):
    entry_id = work_entry.id
    r = client.put(f"/api/work-experience/{entry_id}", json={"isPresent": True}, headers=auth_headers)
    assert r.status_code == 200
    assert r.json()["endMonth"] is None
    assert r.json()["endYear"] is None

    db_session.expire_all()
    stored = db_session.query(WorkExperience).filter(WorkExperience.id == entry_id).first()
    assert stored.end_month is None
    assert stored.end_year is None


def test_update_ignores_null_for_required_field(client, auth_headers, work_entry):
    r = client.put(f"/api/work-experience/{work_entry.id}", json={"jobTitle": None}, headers=auth_headers)
    assert r.status_code == 200
    assert r.json()["jobTitle"] == "Engineer"


def test_delete_work_experience(client, auth_headers, work_entry, db_session):
    entry_id = work_entry.id
    r = client.delete(f"/api/work-experience/{entry_id}", headers=auth_headers)
    assert r.status_code == 200
    assert r.json()["message"] == "Work experience deleted successfully"
    db_session.expire_all()
    assert db_session.query(WorkExperience).filter(WorkExperience.id == entry_id).count() == 0


def test_update_missing_entry_is_404(client, auth_headers):
    r = client.put("/api/education/424242", json={"degree": "PhD"}, headers=auth_headers)
    assert r.status_code == 404


def test_update_foreign_education_is_403(client, auth_headers, foreign_education, db_session):
    entry_id = foreign_education.id
    r = client.put(f"/api/education/{entry_id}", json={"degree": "PhD"}, headers=auth_headers)
    assert r.status_code == 403

    db_session.expire_all()
    stored = db_session.query(Education).filter(Education.id == entry_id).first()
    assert stored.degree == "BA"


def test_delete_foreign_education_is_403(client, auth_headers, foreign_education):
    r = client.delete(f"/api/education/{foreign_education.id}", headers=auth_headers)
    assert r.status_code == 403


def test_foreign_resume_is_404_not_403(client, auth_headers, other_resume):
    """Resume-level lookups never reveal that another user's resume exists."""
    r = client.get(f"/api/resumes/{other_resume.id}", headers=auth_headers)
    assert r.status_code == 404
    r = client.post(f"/api/resumes/{other_resume.id}/skills", json={"name": "Rust"}, headers=auth_headers)
    assert r.status_code == 404
    r = client.delete(f"/api/resumes/{other_resume.id}", headers=auth_headers)
    assert r.status_code == 404


def test_owner_can_edit_own_entry(client, other_auth_headers, foreign_education):
    r = client.put(f"/api/education/{foreign_education.id}", json={"gpa": "3.8"}, headers=other_auth_headers)
    assert r.status_code == 200
    assert r.json()["gpa"] == "3.8"


def test_skill_update_and_delete(client, auth_headers, resume, db_session):
    skill = Skill(resume_id=resume.id, name="Python", proficiency=3)
    db_session.add(skill)
    db_session.commit()
    skill_id = skill.id

    r = client.put(f"/api/skills/{skill_id}", json={"proficiency": 5, "category": "Languages"}, headers=auth_headers)
    assert r.status_code == 200
    assert r.json()["proficiency"] == 5
    assert r.json()["category"] == "Languages"

    r = client.put(f"/api/skills/{skill_id}", json={"proficiency": 0}, headers=auth_headers)
    assert r.status_code == 422

    r = client.delete(f"/api/skills/{skill_id}", headers=auth_headers)
    assert r.status_code == 200
    assert r.json()["message"] == "Skill deleted successfully"


def test_null_order_keeps_aggregate_ordering(client, auth_headers, resume, db_session):
    """An explicit null order is ignored, so start date still breaks ties in the aggregate."""
    base = {"company": "Acme", "startMonth": 1, "order": 0}
    client.post(f"/api/resumes/{resume.id}/work-experience", json={**base, "jobTitle": "new", "startYear": 2022}, headers=auth_headers)
    r = client.post(f"/api/resumes/{resume.id}/work-experience", json={**base, "jobTitle": "old", "startYear": 2010}, headers=auth_headers)
    old_id = r.json()["id"]

    r = client.put(f"/api/work-experience/{old_id}", json={"order": None, "isPresent": None}, headers=auth_headers)
    assert r.status_code == 200
    assert r.json()["order"] == 0
    assert r.json()["isPresent"] is False

    db_session.expire_all()
    stored = db_session.query(WorkExperience).filter(WorkExperience.id == old_id).first()
    assert stored.order == 0
    assert stored.is_present is False

    r = client.get(f"/api/resumes/{resume.id}", headers=auth_headers)
    assert [e["jobTitle"] for e in r.json()["workExperience"]] == ["new", "old"]


def test_null_skill_proficiency_is_ignored(client, auth_headers, resume):
    r = client.post(f"/api/resumes/{resume.id}/skills", json={"name": "SQL", "proficiency": 4}, headers=auth_headers)
    r = client.put(f"/api/skills/{r.json()['id']}", json={"proficiency": None, "order": None}, headers=auth_headers)
    assert r.status_code == 200
    assert r.json()["proficiency"] == 4
    assert r.json()["order"] == 0
