"""Auth service — password hashing and account flows."""

import hashlib
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import structlog
from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError

from smartdine.config import get_settings
from smartdine.core.exceptions import (
    AccountDeactivatedException,
    EntityNotFoundException,
    UnauthorizedException,
    ValidationException,
)
from smartdine.domain.models.user import User, UserRole
from smartdine.domain.repositories.user_repository import UserRepository
from smartdine.domain.schemas.auth import ProfileUpdate, UserCreate

settings = get_settings()
logger = structlog.get_logger(__name__)
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def hash_token(token: str) -> str:
    """Digest stored in place of one-time tokens."""
    return hashlib.sha256(token.encode()).hexdigest()


def _new_one_time_token() -> tuple[str, str]:
    token = secrets.token_hex(32)
    return token, hash_token(token)


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Registration:
    user: User
    verification_token: Optional[str] = None


def create_user(
    repo: UserRepository,
    name: str,
    email: str,
    password: str,
    phone: Optional[str] = None,
    role: UserRole = UserRole.OWNER,
    verified: bool = False,
) -> User:
    return repo.create({
        "name": name,
        "email": email.strip().lower(),
        "phone": phone,
        "password_hash": hash_password(password),
        "role": role,
        "is_email_verified": verified,
    })


def register_user(repo: UserRepository, body: UserCreate) -> Registration:
    """Create an owner account and start email verification.

    With AUTO_VERIFY_EMAIL the verification step is completed immediately,
    since no mail service delivers the token.
    """
    if repo.get_by_email(body.email):
        raise ValidationException("User already exists with this email address")

    try:
        user = create_user(repo, name=body.name, email=body.email, password=body.password, phone=body.phone)
    except IntegrityError as exc:
        # a concurrent registration won the unique email index
        raise ValidationException("User already exists with this email address") from exc

    token, digest = _new_one_time_token()
    user.email_verification_token = digest
    user.email_verification_expires = _now() + timedelta(hours=settings.EMAIL_VERIFICATION_EXPIRATION_HOURS)

    if settings.AUTO_VERIFY_EMAIL:
        user.is_email_verified = True
        user.email_verification_token = None
        user.email_verification_expires = None
        token = None

    user = repo.save(user)
    logger.info("User registered", user_id=user.id, verified=user.is_email_verified)
    return Registration(user=user, verification_token=token)


def authenticate_user(repo: UserRepository, email: str, password: str) -> User:
    user = repo.get_by_email(email)
    if not user or not verify_password(password, user.password_hash):
        logger.info("Login rejected", reason="invalid_credentials")
        raise UnauthorizedException("Invalid email or password")
    if not user.is_active:
        logger.info("Login rejected", reason="deactivated", user_id=user.id)
        raise AccountDeactivatedException()
    if not user.is_email_verified:
        logger.info("Login rejected", reason="unverified", user_id=user.id)
        raise UnauthorizedException("Please verify your email address before logging in.")

    user.last_login = _now()
    return repo.save(user)


def update_profile(repo: UserRepository, user: User, body: ProfileUpdate) -> User:
    for field, value in body.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(user, field, value)
    return repo.save(user)


def change_password(repo: UserRepository, user: User, current_password: str, new_password: str) -> User:
    if not verify_password(current_password, user.password_hash):
        raise UnauthorizedException("Current password is incorrect")
    user.password_hash = hash_password(new_password)
    user = repo.save(user)
    logger.info("Password changed", user_id=user.id)
    return user


def request_password_reset(repo: UserRepository, email: str) -> str:
    """Store a reset digest and return the raw token for delivery."""
    user = repo.get_by_email(email)
    if not user:
        raise EntityNotFoundException("No user found with that email address")

    token, digest = _new_one_time_token()
    user.password_reset_token = digest
    user.password_reset_expires = _now() + timedelta(minutes=settings.PASSWORD_RESET_EXPIRATION_MINUTES)
    repo.save(user)
    logger.info("Password reset requested", user_id=user.id)
    return token


def reset_password(repo: UserRepository, token: str, new_password: str) -> User:
    user = repo.get_by_reset_token(hash_token(token), _now())
    if not user:
        raise ValidationException("Token is invalid or has expired")

    user.password_hash = hash_password(new_password)
    user.password_reset_token = None
    user.password_reset_expires = None
    user = repo.save(user)
    logger.info("Password reset completed", user_id=user.id)
    return user


def verify_email(repo: UserRepository, token: str) -> User:
    user = repo.get_by_verification_token(hash_token(token), _now())
    if not user:
        raise ValidationException("Token is invalid or has expired")

    user.is_email_verified = True
    user.email_verification_token = None
    user.email_verification_expires = None
    return repo.save(user)


def ensure_admin(repo: UserRepository, email: str, password: str) -> Optional[User]:
    """Create the bootstrap admin account if it does not exist yet."""
    if repo.get_by_email(email):
        return None
    admin = create_user(repo, name="Admin", email=email, password=password, role=UserRole.ADMIN, verified=True)
    logger.info("Default admin user created", email=admin.email)
    return admin
