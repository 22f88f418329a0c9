"""
Request dependencies for authentication

Every variant decodes the bearer header through the same
AuthService.decode_token call; they differ only in what they do when
the token is absent or not acceptable.
"""
import logging
from typing import Optional

from fastapi import Depends, Header, Request

from app.exceptions import ForbiddenError, UnauthorizedError
from app.services.auth_service import AuthService
from app.utils.security import TokenIdentity, extract_bearer_token

logger = logging.getLogger(__name__)


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def get_current_user(
    authorization: Optional[str] = Header(None),
    auth_service: AuthService = Depends(get_auth_service)
) -> TokenIdentity:
    """Fail closed: no valid token, no access"""
    token = extract_bearer_token(authorization)
    if not token:
        raise UnauthorizedError("No token provided")

    return auth_service.decode_token(token)


def get_optional_user(
    authorization: Optional[str] = Header(None),
    auth_service: AuthService = Depends(get_auth_service)
) -> Optional[TokenIdentity]:
    """Fail open: missing or bad tokens proceed unauthenticated"""
    token = extract_bearer_token(authorization)
    if not token:
        return None

    try:
        return auth_service.decode_token(token)
    except UnauthorizedError as e:
        logger.debug(f"Ignoring unusable token on optional route: {e.detail}")
        return None


def get_current_member(
    identity: TokenIdentity = Depends(get_current_user)
) -> TokenIdentity:
    """Authenticated identity backed by a persisted user (no guests)"""
    if identity.is_guest:
        raise ForbiddenError("Guest accounts cannot perform this action")
    return identity


def get_current_admin(
    identity: TokenIdentity = Depends(get_current_member)
) -> TokenIdentity:
    if not identity.is_admin:
        raise ForbiddenError("Admin access required")
    return identity
