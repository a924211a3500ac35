"""
Actor Resolver
panel_eval/services/actor_resolver.py

Turns an opaque credential into an Actor. Token issuance and password
handling live outside this service; JwtActorResolver only verifies.

Expected claims:
    sub                 actor id
    role                CONTRIBUTOR | DECISION_MAKER | ADMIN
    exp                 expiry (required)
    name                optional display name
    can_access_chat     optional bool
    can_print_reports   optional bool
    can_export_data     optional bool
"""

from abc import ABC, abstractmethod
from typing import Optional

import jwt
import structlog

from panel_eval.core.exceptions import InvalidCredential, Unauthenticated
from panel_eval.models.actor import Actor, PermissionFlags
from panel_eval.models.enumerations import Role

logger = structlog.get_logger(__name__)

BEARER_PREFIX = "Bearer "


def bearer_credential(authorization: Optional[str]) -> Optional[str]:
    """Extract the token from an ``Authorization: Bearer <token>`` header value."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX):].strip()
    return token or None


class ActorResolver(ABC):
    @abstractmethod
    def resolve(self, credential: Optional[str]) -> Actor:
        """
        Raises:
            Unauthenticated: no credential supplied
            InvalidCredential: credential cannot be verified
        """


class JwtActorResolver(ActorResolver):
    """Verify HS-signed JWTs with PyJWT."""

    def __init__(self, secret: Optional[str], algorithm: str = "HS256"):
        self.secret = secret
        self.algorithm = algorithm

    def resolve(self, credential: Optional[str]) -> Actor:
        if not credential:
            raise Unauthenticated()
        if not self.secret:
            logger.error("jwt_secret_not_configured")
            raise InvalidCredential()

        try:
            claims = jwt.decode(
                credential,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["sub", "exp"]},
            )
        except jwt.ExpiredSignatureError:
            raise InvalidCredential("Credential expired") from None
        except jwt.InvalidTokenError:
            raise InvalidCredential() from None

        try:
            role = Role(str(claims.get("role", "")))
        except ValueError:
            raise InvalidCredential() from None

        return Actor(
            actor_id=str(claims["sub"]),
            role=role,
            name=claims.get("name"),
            permissions=PermissionFlags(
                can_access_chat=bool(claims.get("can_access_chat", False)),
                can_print_reports=bool(claims.get("can_print_reports", False)),
                can_export_data=bool(claims.get("can_export_data", False)),
            ),
        )
