"""
Test catalogue API endpoints
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload
import logging

from app.api.deps import get_current_admin, get_optional_user
from app.database import get_db
from app.exceptions import NotFoundError, ValidationError
from app.models import Question, Test, TestAttempt
from app.schemas.test import TestCreate, TestDetail, TestSummary
from app.utils.security import TokenIdentity

router = APIRouter(prefix="/api/tests", tags=["tests"])
logger = logging.getLogger(__name__)


@router.get("", response_model=List[TestSummary])
async def list_tests(
    identity: Optional[TokenIdentity] = Depends(get_optional_user),
    db: Session = Depends(get_db)
):
    """
    List all tests, newest first

    Each entry carries its question count. Signed-in users also get how
    many times they have attempted each test.
    """

    try:
        rows = db.query(
            Test,
            func.count(Question.id)
        ).outerjoin(
            Question, Question.test_id == Test.id
        ).group_by(
            Test.id
        ).order_by(
            Test.created_at.desc()
        ).all()

        attempt_counts = None
        if identity and not identity.is_guest:
            attempt_counts = dict(
                db.query(TestAttempt.test_id, func.count(TestAttempt.id))
                .filter(TestAttempt.user_id == identity.user_id)
                .group_by(TestAttempt.test_id)
                .all()
            )

        summaries = []
        for test, question_count in rows:
            summary = TestSummary.model_validate(test)
            summary.question_count = question_count
            if attempt_counts is not None:
                summary.attempt_count = attempt_counts.get(test.id, 0)
            summaries.append(summary)

        return summaries

    except Exception as e:
        logger.error(f"Failed to fetch tests: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to fetch tests")


@router.get("/{test_id}", response_model=TestDetail)
async def get_test(test_id: str, db: Session = Depends(get_db)):
    """
    Get a test with its questions

    Correct answers are never part of this response.
    """

    try:
        test = db.query(Test).options(
            selectinload(Test.questions)
        ).filter(Test.id == test_id).first()

        if not test:
            raise NotFoundError("Test not found")

        return TestDetail.model_validate(test)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to fetch test: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to fetch test")


@router.post("", response_model=TestSummary, status_code=201)
async def create_test(
    request: TestCreate,
    identity: TokenIdentity = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    """
    Publish a new test with its questions (admin only)

    Questions keep the order they were submitted in.
    """

    if not request.title or not request.section:
        raise ValidationError("title and section are required")

    try:
        test = Test(
            title=request.title,
            section=request.section,
            difficulty=request.difficulty,
            duration=request.duration,
            total_marks=request.total_marks,
            questions=[
                Question(
                    position=index,
                    question_text=q.question_text,
                    options=q.options,
                    correct_answer=q.correct_answer,
                    marks=q.marks,
                    explanation=q.explanation
                )
                for index, q in enumerate(request.questions)
            ]
        )

        db.add(test)
        db.commit()
        db.refresh(test)

        logger.info(f"Test created by {identity.user_id}: {test.id} ({len(request.questions)} questions)")

        summary = TestSummary.model_validate(test)
        summary.question_count = len(request.questions)
        return summary

    except Exception as e:
        logger.error(f"Failed to create test: {str(e)}")
        db.rollback()
        raise HTTPException(status_code=500, detail="Failed to create test")
