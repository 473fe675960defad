"""Seller profile API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from labexchange.api.dependencies import get_current_user
from labexchange.database import get_db
from labexchange.models.profile import Profile
from labexchange.models.user import User
from labexchange.schemas.profile import ProfileLookup, ProfileResponse, ProfileUpdate

router = APIRouter(prefix="/api/v1/profiles", tags=["profiles"])


def require_self(user_id: int, user: User) -> None:
    if user_id != user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You can only access your own profile",
        )


@router.get("/{user_id}", response_model=ProfileLookup)
def get_profile(
    user_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get the caller's profile. A missing row is not an error."""
    require_self(user_id, current_user)
    profile = db.query(Profile).filter(Profile.user_id == user_id).first()
    if profile is None:
        return ProfileLookup(profile=None)
    return ProfileLookup(profile=ProfileResponse.model_validate(profile))


@router.put("/{user_id}", response_model=ProfileResponse)
def update_profile(
    user_id: int,
    profile_data: ProfileUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Update the caller's profile, creating the row on first save."""
    require_self(user_id, current_user)
    profile = db.query(Profile).filter(Profile.user_id == user_id).first()
    if profile is None:
        profile = Profile(user_id=user_id)
        db.add(profile)

    profile.full_name = profile_data.full_name
    profile.company = profile_data.company

    db.commit()
    db.refresh(profile)
    return profile
