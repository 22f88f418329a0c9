"""
Authentication service - password hashing, bearer tokens and account flows
"""
import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Tuple

import jwt
from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.config import Settings
from app.exceptions import ConflictError, UnauthorizedError, ValidationError
from app.models import User
from app.utils.security import DEFAULT_ROLE, GUEST_ROLE, TokenIdentity

logger = logging.getLogger(__name__)


class AuthService:
    """
    Issues and validates bearer tokens for registered, OAuth and guest users

    Stateless apart from the persisted user rows; one instance is built per
    application from its settings.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self.pwd_context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=settings.BCRYPT_ROUNDS
        )

    # --- passwords -------------------------------------------------------

    def hash_password(self, password: str) -> str:
        return self.pwd_context.hash(password)

    def verify_password(self, plain: str, hashed: str) -> bool:
        try:
            return self.pwd_context.verify(plain, hashed)
        except ValueError:
            # Unrecognised hash format
            return False

    # --- tokens ----------------------------------------------------------

    def create_token(
        self,
        user_id: str,
        role: str,
        email: Optional[str] = None,
        expires_days: Optional[int] = None
    ) -> str:
        """
        Sign a bearer token for the given identity

        Args:
            user_id: Persisted user id, or synthesized guest id
            role: Role claim (student, admin, guest)
            email: Optional email claim
            expires_days: Validity window, defaults to TOKEN_EXPIRE_DAYS

        Returns:
            Encoded JWT
        """
        days = expires_days if expires_days is not None else self.settings.TOKEN_EXPIRE_DAYS
        payload: Dict[str, Any] = {
            "userId": user_id,
            "role": role,
            "exp": datetime.now(timezone.utc) + timedelta(days=days),
        }
        if email:
            payload["email"] = email

        return jwt.encode(
            payload,
            self.settings.JWT_SECRET,
            algorithm=self.settings.JWT_ALGORITHM
        )

    def decode_token(self, token: str) -> TokenIdentity:
        """
        Verify signature and expiry and return the carried identity

        Raises:
            UnauthorizedError: token is expired, tampered with or malformed
        """
        try:
            payload = jwt.decode(
                token,
                self.settings.JWT_SECRET,
                algorithms=[self.settings.JWT_ALGORITHM]
            )
        except jwt.ExpiredSignatureError:
            raise UnauthorizedError("Token expired")
        except jwt.InvalidTokenError:
            raise UnauthorizedError("Invalid token")

        user_id = payload.get("userId")
        if not user_id:
            raise UnauthorizedError("Invalid token")

        return TokenIdentity(
            user_id=str(user_id),
            role=payload.get("role") or DEFAULT_ROLE,
            email=payload.get("email")
        )

    def issue_for_user(self, user: User) -> str:
        return self.create_token(user.id, user.role, email=user.email)

    # --- account flows ---------------------------------------------------

    def register(
        self,
        db: Session,
        email: Optional[str],
        password: Optional[str],
        name: Optional[str] = None
    ) -> Tuple[User, str]:
        """Create a password account and sign a token for it"""

        if not email or not password:
            raise ValidationError("Email and password are required")

        existing = db.query(User).filter(User.email == email).first()
        if existing:
            logger.warning(f"Registration rejected, email already in use: {email}")
            raise ConflictError("User already exists")

        user = User(
            email=email,
            password=self.hash_password(password),
            name=name or email.split("@")[0],
            role=DEFAULT_ROLE
        )
        db.add(user)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            logger.warning(f"Registration lost race for email: {email}")
            raise ConflictError("User already exists")
        db.refresh(user)

        logger.info(f"User registered: {user.id}")
        return user, self.issue_for_user(user)

    def login(
        self,
        db: Session,
        email: Optional[str],
        password: Optional[str]
    ) -> Tuple[User, str]:
        """Check credentials and sign a token"""

        if not email or not password:
            raise ValidationError("Email and password are required")

        user = db.query(User).filter(User.email == email).first()
        if not user or user.is_oauth_only:
            logger.warning(f"Login failed for {email}")
            raise UnauthorizedError("Invalid credentials")

        if not self.verify_password(password, user.password):
            logger.warning(f"Login failed for {email}")
            raise UnauthorizedError("Invalid credentials")

        logger.info(f"User logged in: {user.id}")
        return user, self.issue_for_user(user)

    def guest(self) -> Tuple[Dict[str, Any], str]:
        """Sign a short-lived token for a synthesized, unpersisted identity"""
        guest_id = f"guest-{uuid.uuid4().hex[:7]}"
        token = self.create_token(
            guest_id,
            GUEST_ROLE,
            expires_days=self.settings.GUEST_TOKEN_EXPIRE_DAYS
        )
        logger.info(f"Guest session issued: {guest_id}")
        return self.guest_profile(guest_id), token

    @staticmethod
    def guest_profile(guest_id: str) -> Dict[str, Any]:
        return {"id": guest_id, "name": "Guest", "role": GUEST_ROLE}

    def verify(self, db: Session, identity: TokenIdentity) -> Dict[str, Any]:
        """
        Resolve a decoded token to its user

        Guest identities are answered from the token alone; everyone else
        must still exist in the database.
        """
        if identity.is_guest:
            return self.guest_profile(identity.user_id)

        user = db.query(User).filter(User.id == identity.user_id).first()
        if not user:
            raise UnauthorizedError("User not found")

        return {
            "id": user.id,
            "email": user.email,
            "name": user.name,
            "role": user.role,
            "picture": user.picture,
        }

    def google_login(
        self,
        db: Session,
        email: Optional[str],
        google_id: Optional[str],
        name: Optional[str] = None,
        picture: Optional[str] = None
    ) -> Tuple[User, str]:
        """Find or create the account behind a Google sign-in"""

        if not email or not google_id:
            raise ValidationError("Email and googleId are required")

        user = db.query(User).filter(User.email == email).first()

        holder = db.query(User).filter(User.google_id == google_id).first()
        if holder and (user is None or holder.id != user.id):
            logger.warning(f"Google account {google_id} already linked to {holder.id}")
            raise ConflictError("Google account already linked to another user")

        if not user:
            user = User(
                email=email,
                name=name or email.split("@")[0],
                password=None,
                role=DEFAULT_ROLE,
                google_id=google_id,
                picture=picture
            )
            db.add(user)
            logger.info(f"Provisioning OAuth user for {email}")
        else:
            if not user.google_id:
                user.google_id = google_id
            if picture and not user.picture:
                user.picture = picture

        db.commit()
        db.refresh(user)

        return user, self.issue_for_user(user)
