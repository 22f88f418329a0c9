"""
Analytics service for the per-user performance aggregate
"""
import logging
from typing import Any, Dict, Optional

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models import Analytics

logger = logging.getLogger(__name__)


class AnalyticsService:
    """Service for reading and updating a user's rolling analytics row"""

    def get_or_create(self, db: Session, user_id: str) -> Analytics:
        """
        Return the user's analytics row, creating an all-zero one on first access

        Args:
            db: Database session
            user_id: Owner of the row

        Returns:
            The single Analytics row for the user
        """
        analytics = db.query(Analytics).filter(Analytics.user_id == user_id).first()
        if analytics:
            return analytics

        analytics = Analytics(
            user_id=user_id,
            total_tests=0,
            total_score=0.0,
            total_time_spent=0,
            accuracy=0.0,
            average_score=0.0
        )
        db.add(analytics)

        try:
            db.commit()
        except IntegrityError:
            # Another request created the row first
            db.rollback()
            logger.info(f"Analytics row for user {user_id} created concurrently, re-reading")
            return db.query(Analytics).filter(Analytics.user_id == user_id).one()

        db.refresh(analytics)
        logger.info(f"Analytics initialized for user {user_id}")
        return analytics

    def record_result(
        self,
        db: Session,
        user_id: str,
        score: Optional[float],
        total_marks: Optional[float],
        time_taken: Optional[int]
    ) -> Analytics:
        """
        Fold one completed test into the user's aggregate

        The increments and derived fields are sent as a single UPDATE whose
        right-hand sides reference the stored columns, so the database
        evaluates read and write together.

        accuracy     = new_total_score * 100 / (new_total_tests * total_marks)
        averageScore = new_total_score / new_total_tests

        Both derived fields are left unchanged when total_marks is not given.
        """
        analytics = self.get_or_create(db, user_id)

        score = float(score or 0)
        time_taken = int(time_taken or 0)

        new_total_tests = Analytics.total_tests + 1
        new_total_score = Analytics.total_score + score

        values: Dict[str, Any] = {
            "total_tests": new_total_tests,
            "total_score": new_total_score,
            "total_time_spent": Analytics.total_time_spent + time_taken,
        }

        if total_marks:
            values["accuracy"] = new_total_score * 100.0 / (new_total_tests * float(total_marks))
            values["average_score"] = new_total_score / new_total_tests

        db.execute(
            update(Analytics)
            .where(Analytics.id == analytics.id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        db.commit()
        db.refresh(analytics)

        logger.info(
            f"Analytics updated for user {user_id}: tests={analytics.total_tests}, "
            f"accuracy={analytics.accuracy:.2f}"
        )
        return analytics


# Global instance
analytics_service = AnalyticsService()
