from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError
from app.database import get_db
from app.models.profile import Profile
from app.models.user import User
from app.routers.auth_deps import get_current_user
from app.schemas.profile import ProfileResponse, ProfileUpdate

router = APIRouter(prefix="/profile", tags=["Profile"])


def _get_profile(db: Session) -> Profile:
    profile = db.query(Profile).first()
    if not profile:
        raise NotFoundError("Profile not found")
    return profile


@router.get("", response_model=ProfileResponse)
def get_profile(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return _get_profile(db)


@router.patch("", response_model=ProfileResponse)
def update_profile(
    update_data: ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Update display name and contact email. The login email is not changed."""
    profile = _get_profile(db)
    for field, value in update_data.model_dump(exclude_unset=True).items():
        setattr(profile, field, value)
    db.commit()
    db.refresh(profile)
    return profile
