from datetime import datetime, timedelta, timezone

import jwt

from booksmart.core import config


def create_access_token(subject: str, name: str | None = None, expires_minutes: int | None = None) -> str:
    expire_minutes = config.JWT_EXPIRES_MINUTES if expires_minutes is None else expires_minutes
    issued_at = datetime.now(timezone.utc)
    payload = {"sub": subject, "iat": issued_at, "exp": issued_at + timedelta(minutes=expire_minutes)}
    if name:
        payload["name"] = name
    return jwt.encode(payload, config.JWT_SECRET_KEY, algorithm=config.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict:
    return jwt.decode(token, config.JWT_SECRET_KEY, algorithms=[config.JWT_ALGORITHM])


def read_subject(token: str | None) -> str | None:
    """Return the token's subject, or None for a missing, expired or tampered token."""
    if not token:
        return None
    try:
        payload = decode_access_token(token)
    except jwt.PyJWTError:
        return None
    return payload.get("sub") or None
