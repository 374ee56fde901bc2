"""Profile endpoints."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from portfolio.api.schemas import (
    EducationResponse,
    ExperienceResponse,
    ProfileResponse,
    ProjectResponse,
    SkillResponse,
)
from portfolio.db import PortfolioRepository, User, get_db

router = APIRouter()


def _profile_response(user: User) -> ProfileResponse:
    return ProfileResponse(
        id=user.id,
        name=user.name,
        bio=user.bio or "",
        skills=[SkillResponse.model_validate(s) for s in user.skills],
        experiences=[ExperienceResponse.model_validate(e) for e in user.experiences],
        education=[EducationResponse.model_validate(e) for e in user.education],
        projects=[ProjectResponse.model_validate(p) for p in user.projects],
    )


@router.get("", response_model=ProfileResponse)
def get_owner_profile(db: Session = Depends(get_db)):
    """Get the portfolio owner's public profile."""
    owner = PortfolioRepository(db).get_owner()
    if not owner:
        raise HTTPException(status_code=404, detail="Profile not found")
    return _profile_response(owner)


@router.get("/{user_id}", response_model=ProfileResponse)
def get_profile(user_id: str, db: Session = Depends(get_db)):
    """Get a user's profile."""
    user = PortfolioRepository(db).get_user(user_id)
    if not user:
        raise HTTPException(status_code=404, detail="Profile not found")
    return _profile_response(user)
