"""
Page routes.

Public pages (landing, login, register) and the role dashboards. The
gatekeeper middleware decides who reaches which of them; the dashboards
additionally resolve the session through the auth service.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from app.api.v1.auth import get_current_user
from app.schemas.auth import UserPublic

router = APIRouter()


def _require_role(user: UserPublic, role: str) -> UserPublic:
    if user.role != role:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Unauthorized role access.",
        )
    return user


@router.get("/")
async def home():
    return {"page": "home"}


@router.get("/login")
async def login_page():
    return {"page": "login"}


@router.get("/register")
async def register_page():
    return {"page": "register"}


@router.get("/job-seeker/dashboard")
async def job_seeker_dashboard(current_user: UserPublic = Depends(get_current_user)):
    """Job seeker landing page after login."""
    user = _require_role(current_user, "job-seeker")
    return {"page": "job-seeker-dashboard", "user": user}


@router.get("/recruiter/dashboard")
async def recruiter_dashboard(current_user: UserPublic = Depends(get_current_user)):
    """Recruiter landing page after login."""
    user = _require_role(current_user, "recruiter")
    return {"page": "recruiter-dashboard", "user": user}
