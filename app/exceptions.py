"""
Error taxonomy shared by routes and services

Each error is an HTTPException so route handlers can let it pass through
their ``except HTTPException: raise`` guard untouched.
"""
from fastapi import HTTPException


class ValidationError(HTTPException):
    """Missing or invalid required field"""

    def __init__(self, detail: str = "Invalid request"):
        super().__init__(status_code=400, detail=detail)


class UnauthorizedError(HTTPException):
    """Missing, invalid or expired token, or bad credentials"""

    def __init__(self, detail: str = "Unauthorized"):
        super().__init__(status_code=401, detail=detail)


class ForbiddenError(HTTPException):
    """Authenticated, but not allowed to touch the resource"""

    def __init__(self, detail: str = "Forbidden"):
        super().__init__(status_code=403, detail=detail)


class NotFoundError(HTTPException):
    def __init__(self, detail: str = "Not found"):
        super().__init__(status_code=404, detail=detail)


class ConflictError(HTTPException):
    """Duplicate unique key (reported as 400 like other client errors)"""

    def __init__(self, detail: str = "Already exists"):
        super().__init__(status_code=400, detail=detail)
