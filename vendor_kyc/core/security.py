"""Bearer-token verification and the authenticated ``Actor``.

Tokens are issued by the identity provider and signed with the shared
``JWT_SECRET``. This module only verifies them and turns the claims into an
``Actor`` that services use for ownership and role checks.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from vendor_kyc.core.config import settings
from vendor_kyc.core.exceptions import ForbiddenError, UnauthorizedError

logger = logging.getLogger(__name__)

_bearer = HTTPBearer(auto_error=False)


class Role(str, Enum):
    VENDOR = "vendor"
    ADMIN = "admin"


@dataclass(frozen=True)
class Actor:
    user_id: str
    email: str
    role: Role
    name: str | None = None

    @property
    def is_reviewer(self) -> bool:
        return self.role is Role.ADMIN


def decode_token(token: str) -> Actor:
    """Verify *token* and return the actor it identifies.

    Raises :class:`UnauthorizedError` for expired, tampered, or incomplete tokens.
    """
    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError:
        raise UnauthorizedError("Token has expired")
    except jwt.InvalidTokenError as exc:
        logger.info("Rejected bearer token: %s", exc)
        raise UnauthorizedError("Invalid token")

    try:
        role = Role(claims.get("role"))
    except ValueError:
        raise UnauthorizedError("Token carries an unknown role")

    email = (claims.get("email") or "").strip().lower()
    if not email:
        raise UnauthorizedError("Token is missing the email claim")

    return Actor(
        user_id=str(claims["sub"]),
        email=email,
        role=role,
        name=claims.get("name"),
    )


async def get_current_actor(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
) -> Actor:
    """FastAPI dependency: the actor behind the ``Authorization: Bearer`` header."""
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise UnauthorizedError()
    return decode_token(credentials.credentials)


def require_role(role: Role):
    """Dependency factory that rejects actors without *role* before the handler runs.

    Services still re-check the role at the point of mutation.
    """

    async def _dependency(actor: Actor = Depends(get_current_actor)) -> Actor:
        if actor.role is not role:
            raise ForbiddenError(f"This action requires the '{role.value}' role")
        return actor

    return _dependency
