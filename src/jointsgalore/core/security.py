"""Credential comparison and session token helpers."""
from __future__ import annotations

import hmac
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from jointsgalore.core.settings import Settings, settings


def credentials_match(stored: str | None, supplied: str) -> bool:
    """Compare a stored credential against a supplied one.

    Credentials are opaque strings compared verbatim; no hashing is applied.
    """
    if stored is None:
        return False
    return hmac.compare_digest(stored.encode("utf-8"), supplied.encode("utf-8"))


def create_access_token(username: str, config: Settings | None = None) -> str:
    """Create a signed session token whose subject is ``username``."""
    config = config or settings
    expire = datetime.now(UTC) + timedelta(minutes=config.access_token_expire_minutes)
    to_encode: dict[str, object] = {"sub": username, "exp": expire}
    encoded_jwt: str = jwt.encode(to_encode, config.secret_key, algorithm=config.jwt_algorithm)
    return encoded_jwt


def decode_access_token(token: str, config: Settings | None = None) -> str | None:
    """Return the username carried by ``token`` or ``None`` if it is invalid."""
    config = config or settings
    try:
        payload = jwt.decode(token, config.secret_key, algorithms=[config.jwt_algorithm])
    except JWTError:
        return None
    subject = payload.get("sub")
    return subject if isinstance(subject, str) else None
