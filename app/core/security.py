# app/core/security.py
import hashlib
import hmac
import logging
import secrets
from datetime import datetime, timedelta, timezone

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import func
from sqlalchemy.orm import Session

from app.core.config import Settings, get_settings
from app.db.base import get_db, utcnow
from app.db.models.user import AdminSession, User

logger = logging.getLogger(__name__)

_PBKDF2_ITERATIONS = 260_000
bearer_scheme = HTTPBearer(auto_error=False)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def find_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(func.lower(User.email) == normalize_email(email)).first()


def hash_password(password: str) -> str:
    salt = secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt.encode("utf-8"), _PBKDF2_ITERATIONS)
    return f"pbkdf2_sha256${_PBKDF2_ITERATIONS}${salt}${digest.hex()}"


def verify_password(password: str, password_hash: str) -> bool:
    try:
        algorithm, iterations, salt, expected = password_hash.split("$")
    except ValueError:
        return False
    if algorithm != "pbkdf2_sha256":
        return False
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt.encode("utf-8"), int(iterations))
    return hmac.compare_digest(digest.hex(), expected)


def _as_aware(value: datetime) -> datetime:
    # SQLite hands back naive datetimes
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def create_session(db: Session, user: User) -> AdminSession:
    ttl = timedelta(minutes=get_settings().session_ttl_minutes)
    session = AdminSession(
        token=secrets.token_urlsafe(32),
        user_id=user.id,
        expires_at=utcnow() + ttl,
    )
    db.add(session)
    db.commit()
    db.refresh(session)
    logger.info("Admin session opened for user %s", user.id)
    return session


def get_current_session(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> AdminSession:
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")

    session = db.query(AdminSession).filter(AdminSession.token == credentials.credentials).first()
    if not session:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid session")

    if _as_aware(session.expires_at) <= utcnow():
        db.delete(session)
        db.commit()
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Session expired")

    return session


def get_current_user(session: AdminSession = Depends(get_current_session)) -> User:
    return session.user


def require_admin(current_user: User = Depends(get_current_user)) -> User:
    if current_user.role != "admin":
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin only")
    return current_user


def ensure_admin_account(db: Session, settings: Settings | None = None) -> User | None:
    """Create the bootstrap admin from settings when it does not exist yet."""

    settings = settings or get_settings()
    if not settings.admin_email or not settings.admin_password:
        return None

    user = find_user_by_email(db, settings.admin_email)
    if user:
        return user

    user = User(
        email=normalize_email(settings.admin_email),
        name="Administrator",
        password_hash=hash_password(settings.admin_password),
        role="admin",
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Bootstrap admin account created")
    return user
