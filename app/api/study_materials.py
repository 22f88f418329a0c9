"""
Study material API endpoints
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
import logging

from app.api.deps import get_current_admin
from app.database import get_db
from app.exceptions import NotFoundError, ValidationError
from app.models import StudyMaterial
from app.schemas.study_material import StudyMaterialCreate, StudyMaterialOut
from app.utils.security import TokenIdentity

router = APIRouter(prefix="/api/study-materials", tags=["study-materials"])
logger = logging.getLogger(__name__)


@router.get("", response_model=List[StudyMaterialOut])
async def list_study_materials(db: Session = Depends(get_db)):
    """All study materials, newest first"""

    try:
        materials = db.query(StudyMaterial).order_by(StudyMaterial.created_at.desc()).all()
        return [StudyMaterialOut.model_validate(m) for m in materials]

    except Exception as e:
        logger.error(f"Failed to fetch study materials: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to fetch study materials")


@router.get("/section/{section}", response_model=List[StudyMaterialOut])
async def list_by_section(section: str, db: Session = Depends(get_db)):
    """Study materials for one exam section, newest first"""

    try:
        materials = db.query(StudyMaterial).filter(
            StudyMaterial.section == section
        ).order_by(StudyMaterial.created_at.desc()).all()

        return [StudyMaterialOut.model_validate(m) for m in materials]

    except Exception as e:
        logger.error(f"Failed to fetch study materials for section {section}: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to fetch study materials")


@router.get("/{material_id}", response_model=StudyMaterialOut)
async def get_study_material(material_id: str, db: Session = Depends(get_db)):
    try:
        material = db.query(StudyMaterial).filter(StudyMaterial.id == material_id).first()
        if not material:
            raise NotFoundError("Study material not found")

        return StudyMaterialOut.model_validate(material)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to fetch study material: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to fetch study material")


@router.post("", response_model=StudyMaterialOut, status_code=201)
async def create_study_material(
    request: StudyMaterialCreate,
    identity: TokenIdentity = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    """Publish a study material (admin only)"""

    if not request.title or not request.section:
        raise ValidationError("title and section are required")

    try:
        material = StudyMaterial(**request.model_dump())

        db.add(material)
        db.commit()
        db.refresh(material)

        logger.info(f"Study material created: {material.id}")
        return StudyMaterialOut.model_validate(material)

    except Exception as e:
        logger.error(f"Failed to create study material: {str(e)}")
        db.rollback()
        raise HTTPException(status_code=500, detail="Failed to create study material")
