"""
Bearer token helpers shared by the auth service and route dependencies
"""
from dataclasses import dataclass
from typing import Optional

GUEST_ROLE = "guest"
ADMIN_ROLE = "admin"
DEFAULT_ROLE = "student"


@dataclass
class TokenIdentity:
    """Claims carried by a verified bearer token"""
    user_id: str
    role: str
    email: Optional[str] = None

    @property
    def is_guest(self) -> bool:
        return self.role == GUEST_ROLE

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """
    Pull the token out of an ``Authorization: Bearer <token>`` header

    Returns None when the header is absent or not a bearer credential.
    """
    if not authorization:
        return None

    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None

    return token.strip()
