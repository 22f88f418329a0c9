"""
User profile API endpoints
"""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
import logging

from app.api.deps import get_current_member
from app.database import get_db
from app.exceptions import NotFoundError
from app.models import User
from app.schemas.user import UserProfile, UserUpdate
from app.utils.security import TokenIdentity

router = APIRouter(prefix="/api/users", tags=["users"])
logger = logging.getLogger(__name__)


def _load_user(db: Session, user_id: str) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFoundError("User not found")
    return user


@router.get("/me", response_model=UserProfile)
async def get_profile(
    identity: TokenIdentity = Depends(get_current_member),
    db: Session = Depends(get_db)
):
    """Profile of the authenticated user"""

    try:
        return UserProfile.model_validate(_load_user(db, identity.user_id))

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to fetch profile: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to fetch profile")


@router.patch("/me", response_model=UserProfile)
async def update_profile(
    changes: UserUpdate,
    identity: TokenIdentity = Depends(get_current_member),
    db: Session = Depends(get_db)
):
    """Update name and/or picture; omitted fields are kept"""

    try:
        user = _load_user(db, identity.user_id)

        for field, value in changes.model_dump(exclude_unset=True).items():
            setattr(user, field, value)

        db.commit()
        db.refresh(user)

        logger.info(f"Profile updated: {user.id}")
        return UserProfile.model_validate(user)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to update profile: {str(e)}")
        db.rollback()
        raise HTTPException(status_code=500, detail="Failed to update profile")
