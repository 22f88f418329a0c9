"""
College directory API endpoints
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
import logging

from app.api.deps import get_current_admin
from app.database import get_db
from app.exceptions import NotFoundError, ValidationError
from app.models import College
from app.schemas.college import CollegeCreate, CollegeOut
from app.utils.security import TokenIdentity

router = APIRouter(prefix="/api/colleges", tags=["colleges"])
logger = logging.getLogger(__name__)


@router.get("", response_model=List[CollegeOut])
async def list_colleges(db: Session = Depends(get_db)):
    """All colleges, alphabetically"""

    try:
        colleges = db.query(College).order_by(College.name.asc()).all()
        return [CollegeOut.model_validate(c) for c in colleges]

    except Exception as e:
        logger.error(f"Failed to fetch colleges: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to fetch colleges")


@router.get("/{college_id}", response_model=CollegeOut)
async def get_college(college_id: str, db: Session = Depends(get_db)):
    try:
        college = db.query(College).filter(College.id == college_id).first()
        if not college:
            raise NotFoundError("College not found")

        return CollegeOut.model_validate(college)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to fetch college: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to fetch college")


@router.post("", response_model=CollegeOut, status_code=201)
async def create_college(
    request: CollegeCreate,
    identity: TokenIdentity = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    """Add a college to the directory (admin only)"""

    if not request.name:
        raise ValidationError("name is required")

    try:
        college = College(**request.model_dump())

        db.add(college)
        db.commit()
        db.refresh(college)

        logger.info(f"College created: {college.id} ({college.name})")
        return CollegeOut.model_validate(college)

    except Exception as e:
        logger.error(f"Failed to create college: {str(e)}")
        db.rollback()
        raise HTTPException(status_code=500, detail="Failed to create college")
