"""
Performance analytics API endpoints
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
import logging

from app.api.deps import get_current_member
from app.database import get_db
from app.schemas.analytics import AnalyticsOut, AnalyticsUpdate
from app.schemas.test_attempt import TestAttemptListItem
from app.services.analytics_service import analytics_service
from app.services.test_attempt_service import test_attempt_service
from app.utils.security import TokenIdentity

router = APIRouter(prefix="/api/analytics", tags=["analytics"])
logger = logging.getLogger(__name__)

RECENT_TESTS_LIMIT = 5


@router.get("", response_model=AnalyticsOut)
@router.post("", response_model=AnalyticsOut)
async def get_analytics(
    identity: TokenIdentity = Depends(get_current_member),
    db: Session = Depends(get_db)
):
    """
    Get the caller's analytics, creating an empty record on first access

    Returns:
    - Totals (tests, score, time spent)
    - Accuracy and average score
    """

    try:
        analytics = analytics_service.get_or_create(db, identity.user_id)
        return AnalyticsOut.model_validate(analytics)

    except Exception as e:
        logger.error(f"Failed to fetch analytics: {str(e)}")
        db.rollback()
        raise HTTPException(status_code=500, detail="Failed to fetch analytics")


@router.get("/recent-tests", response_model=List[TestAttemptListItem])
async def get_recent_tests(
    identity: TokenIdentity = Depends(get_current_member),
    db: Session = Depends(get_db)
):
    """The caller's five most recent attempts"""

    try:
        attempts = test_attempt_service.list_for_user(
            db, identity.user_id, limit=RECENT_TESTS_LIMIT
        )
        return [TestAttemptListItem.model_validate(a) for a in attempts]

    except Exception as e:
        logger.error(f"Failed to fetch recent tests: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to fetch recent tests")


@router.post("/update", response_model=AnalyticsOut)
async def update_analytics(
    request: AnalyticsUpdate,
    identity: TokenIdentity = Depends(get_current_member),
    db: Session = Depends(get_db)
):
    """Fold a completed test's result into the caller's analytics"""

    try:
        logger.info(f"Recording result of test {request.test_id} for user {identity.user_id}")

        analytics = analytics_service.record_result(
            db,
            identity.user_id,
            score=request.score,
            total_marks=request.total_marks,
            time_taken=request.time_taken
        )
        return AnalyticsOut.model_validate(analytics)

    except Exception as e:
        logger.error(f"Failed to update analytics: {str(e)}")
        db.rollback()
        raise HTTPException(status_code=500, detail="Failed to update analytics")
