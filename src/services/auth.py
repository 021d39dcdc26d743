"""Identity resolution from JWT bearer tokens.

Tokens are issued by the login service; this service only verifies them and
maps the subject to a user.
"""

from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from sqlalchemy.orm import Session

from src.config import get_settings
from src.models.user import User

settings = get_settings()


def create_access_token(user_id: str, expires_minutes: int | None = None) -> str:
    """Create a signed token whose subject is ``user_id``."""
    lifetime = expires_minutes or settings.jwt_expiration_minutes
    claims = {
        "sub": user_id,
        "exp": datetime.now(UTC) + timedelta(minutes=lifetime),
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_token_subject(token: str) -> str | None:
    """Return the user id a token was issued for, or None if it is invalid."""
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None
    return payload.get("sub") or None


def resolve_user(db: Session, token: str) -> User | None:
    """Map a bearer token to an existing user."""
    user_id = decode_token_subject(token)
    if user_id is None:
        return None
    return db.query(User).filter(User.id == user_id).first()
