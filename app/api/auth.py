"""
Authentication API endpoints
"""
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException
from sqlalchemy.orm import Session
import logging

from app.api.deps import get_auth_service
from app.database import get_db
from app.exceptions import UnauthorizedError
from app.schemas.auth import (
    AuthResponse, AuthUser, GoogleAuthRequest, LoginRequest,
    RegisterRequest, VerifyResponse
)
from app.services.auth_service import AuthService
from app.utils.security import extract_bearer_token

router = APIRouter(prefix="/api/auth", tags=["auth"])
logger = logging.getLogger(__name__)


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(
    request: RegisterRequest,
    db: Session = Depends(get_db),
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Register with email and password

    - Rejects an email that is already registered
    - Name defaults to the local part of the email
    """

    try:
        user, token = auth_service.register(
            db, request.email, request.password, request.name
        )
        return AuthResponse(user=AuthUser.model_validate(user), token=token)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Registration failed: {str(e)}")
        db.rollback()
        raise HTTPException(status_code=500, detail="Registration failed")


@router.post("/login", response_model=AuthResponse)
async def login(
    request: LoginRequest,
    db: Session = Depends(get_db),
    auth_service: AuthService = Depends(get_auth_service)
):
    """Exchange email and password for a bearer token"""

    try:
        user, token = auth_service.login(db, request.email, request.password)
        return AuthResponse(user=AuthUser.model_validate(user), token=token)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Login failed: {str(e)}")
        raise HTTPException(status_code=500, detail="Login failed")


@router.post("/guest", response_model=AuthResponse)
async def guest_login(auth_service: AuthService = Depends(get_auth_service)):
    """Issue a short-lived guest token (no user is stored)"""

    try:
        user, token = auth_service.guest()
        return AuthResponse(user=AuthUser(**user), token=token)

    except Exception as e:
        logger.error(f"Guest login failed: {str(e)}")
        raise HTTPException(status_code=500, detail="Guest login failed")


@router.post("/verify", response_model=VerifyResponse)
async def verify_token(
    authorization: Optional[str] = Header(None),
    db: Session = Depends(get_db),
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Resolve the bearer token to its user

    Guest tokens are answered without a database lookup.
    """

    token = extract_bearer_token(authorization)
    if not token:
        raise UnauthorizedError("No token provided")

    try:
        identity = auth_service.decode_token(token)
        user = auth_service.verify(db, identity)
        return VerifyResponse(user=AuthUser(**user))

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Token verification failed: {str(e)}")
        raise UnauthorizedError("Invalid token")


@router.post("/google", response_model=AuthResponse)
async def google_login(
    request: GoogleAuthRequest,
    db: Session = Depends(get_db),
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Sign in with a Google profile

    Finds the user by email or provisions a password-less account.
    """

    try:
        user, token = auth_service.google_login(
            db,
            email=request.email,
            google_id=request.google_id,
            name=request.name,
            picture=request.picture
        )
        return AuthResponse(user=AuthUser.model_validate(user), token=token)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Google authentication failed: {str(e)}")
        db.rollback()
        raise HTTPException(status_code=500, detail="Google authentication failed")
