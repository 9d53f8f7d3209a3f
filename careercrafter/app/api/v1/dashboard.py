"""
Dashboard API - per-user resume and job description counts.
"""
from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from careercrafter.app.core.dependencies import get_current_user, get_db
from careercrafter.app.models.user import User
from careercrafter.app.services.resume_service import get_user_stats

router = APIRouter()


class DashboardStats(BaseModel):
    totalResumes: int
    activeResumes: int
    totalJobDescriptions: int


@router.get("/stats", response_model=DashboardStats)
def dashboard_stats(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return get_user_stats(db, current_user)
