from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
from jwt import InvalidTokenError

from partsdesk.core.config import settings
from partsdesk.core.exceptions import UnauthorizedError

logger = logging.getLogger(__name__)

REQUIRED_CLAIMS = ("userId", "email", "name", "role")


@dataclass(frozen=True)
class AuthIdentity:
    """Caller identity decoded from a bearer token. Lives for one request."""

    userId: str
    email: str
    name: str
    role: str

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


def _extract_bearer(authorization: str | None) -> str | None:
    if not authorization:
        return None
    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer" or not parts[1]:
        return None
    return parts[1]


def decode_identity(token: str, secret: str | None = None) -> AuthIdentity | None:
    try:
        payload = jwt.decode(
            token,
            secret or settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
        )
    except InvalidTokenError:
        # Expired and forged tokens land here alike; the caller only learns "unauthenticated".
        return None
    if any(not isinstance(payload.get(claim), str) or not payload.get(claim) for claim in REQUIRED_CLAIMS):
        return None
    return AuthIdentity(**{claim: payload[claim] for claim in REQUIRED_CLAIMS})


def verify_token(authorization: str | None) -> AuthIdentity | None:
    """Return the identity carried by an ``Authorization`` header, or None."""
    token = _extract_bearer(authorization)
    if token is None:
        return None
    return decode_identity(token)


def require_auth(authorization: str | None) -> AuthIdentity:
    """Same decision as ``verify_token`` but raises ``UnauthorizedError``."""
    identity = verify_token(authorization)
    if identity is None:
        raise UnauthorizedError()
    return identity


def create_access_token(
    identity: AuthIdentity | dict[str, Any],
    expires_minutes: int | None = None,
    secret: str | None = None,
) -> str:
    claims = identity.to_dict() if isinstance(identity, AuthIdentity) else dict(identity)
    now = datetime.now(timezone.utc)
    minutes = settings.ACCESS_TOKEN_EXPIRE_MINUTES if expires_minutes is None else expires_minutes
    payload = {**claims, "iat": now, "exp": now + timedelta(minutes=minutes)}
    return jwt.encode(payload, secret or settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)
