"""Caller authentication and organization access checks.

Every dashboard endpoint resolves the caller from a Bearer JWT, then verifies
that the caller may read their active organization before any statistics are
loaded.
"""

import logging
from dataclasses import dataclass

from fastapi import Depends, Request
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from ..database.connection import get_db_session
from ..database.statistics_store import StatisticsStore
from ..errors import AuthenticationError, OrgAccessError, OrgNotFoundError
from ..observability.logging import set_log_context
from .tokens import decode_token

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthContext:
    """Resolved identity from a valid access token."""

    user_id: str
    username: str
    active_org_id: str
    support_access: bool = False


def authenticate_token(token: str) -> AuthContext:
    """Validate ``token`` and build the caller's ``AuthContext``.

    Raises:
        AuthenticationError: On a bad signature, expired token or missing claims.
    """
    try:
        payload = decode_token(token)
    except JWTError as e:
        raise AuthenticationError(f"Invalid token: {e}") from e

    if payload.get("type") != "access":
        raise AuthenticationError("Token is not an access token")

    user_id = payload.get("sub")
    org_id = payload.get("org")
    if not user_id or not org_id:
        raise AuthenticationError("Token is missing user or organization")

    return AuthContext(
        user_id=user_id,
        username=payload.get("username") or user_id,
        active_org_id=org_id,
        support_access=bool(payload.get("support_access", False)),
    )


async def get_current_user(request: Request) -> AuthContext:
    """FastAPI dependency: authenticate the ``Authorization: Bearer`` header."""
    auth_header = request.headers.get("authorization", "")
    if not auth_header.startswith("Bearer "):
        logger.warning("Api authentication failed for %s: missing Bearer token", request.url.path)
        raise AuthenticationError("Missing or invalid Authorization header")

    try:
        user = authenticate_token(auth_header[7:])
    except AuthenticationError as e:
        logger.warning("Api authentication failed for %s: %s", request.url.path, e)
        raise

    set_log_context(org_id=user.active_org_id, user_id=user.user_id)
    return user


async def get_statistics_store(
    session: AsyncSession = Depends(get_db_session),
) -> StatisticsStore:
    return StatisticsStore(session)


async def check_user_org_access(store: StatisticsStore, user: AuthContext) -> None:
    """Verify that ``user`` may read their active organization.

    Access is granted when the user is a member of the organization, or when
    the user has support access (audit-logged).

    Raises:
        OrgNotFoundError: If the organization does not exist.
        OrgAccessError: If the user is neither a member nor a support user.
    """
    org = await store.get_org(user.active_org_id)
    if org is None:
        logger.error("Failed retrieving org %s", user.active_org_id)
        raise OrgNotFoundError(user.active_org_id)

    if await store.is_member(user.active_org_id, user.user_id):
        return

    if user.support_access:
        logger.info(
            "AUDIT: user %s (%s) is accessing org %s (%s) with support access",
            user.username,
            user.user_id,
            org.name,
            org.id,
        )
        return

    logger.warning("User %s isn't a part of org %s", user.user_id, org.id)
    raise OrgAccessError("User attempting to access an organization they're not a part of")


async def require_org_access(
    user: AuthContext = Depends(get_current_user),
    store: StatisticsStore = Depends(get_statistics_store),
) -> AuthContext:
    """FastAPI dependency: authenticated caller with access to their org."""
    await check_user_org_access(store, user)
    return user
