"""JWT access token creation and validation.

Uses python-jose for JWT encoding/decoding. Tokens are signed with the
application SECRET_KEY using HS256 and carry the caller's identity and
active organization.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import jwt

from ..config import get_settings

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"


def create_access_token(
    user_id: str,
    username: str,
    org_id: str,
    support_access: bool = False,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Create a signed access token.

    Args:
        user_id: Identifier for the ``sub`` claim.
        username: Display name included in payload.
        org_id: The caller's active organization.
        support_access: Whether the caller may read organizations they don't belong to.
        expires_delta: Custom expiry. Falls back to config ``access_token_expire_minutes``.

    Returns:
        Encoded JWT string.
    """
    settings = get_settings()
    now = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)

    payload: Dict[str, Any] = {
        "sub": user_id,
        "username": username,
        "org": org_id,
        "support_access": support_access,
        "type": "access",
        "iat": now,
        "exp": now + expires_delta,
    }
    return jwt.encode(payload, settings.secret_key, algorithm=ALGORITHM)


def decode_token(token: str) -> Dict[str, Any]:
    """Decode and validate a JWT token.

    Validates signature and expiry. Returns the full payload dict on success.

    Raises:
        JWTError: On invalid signature, expired token, or malformed JWT.
    """
    settings = get_settings()
    return jwt.decode(token, settings.secret_key, algorithms=[ALGORITHM])
