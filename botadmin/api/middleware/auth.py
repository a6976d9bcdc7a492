"""JWT authentication dependencies for API requests.

Tokens are issued elsewhere; this module only verifies them and turns
their claims into an `Actor`.
"""

import os
from collections.abc import Mapping
from typing import Annotated, Any

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from pydantic import ValidationError

from botadmin.api.dependencies import SettingsDep
from botadmin.api.exceptions import AuthenticationRequiredError
from botadmin.botconfig.models import Actor
from botadmin.config.settings import Settings
from botadmin.observability.logging import get_logger

logger = get_logger(__name__)

# Security scheme for OpenAPI docs
security_scheme = HTTPBearer(auto_error=False)


class JWTSecretNotConfiguredError(RuntimeError):
    """Raised when the signing secret environment variable is unset."""


def get_jwt_secret(settings: Settings) -> str:
    """Read the signing secret from the configured environment variable."""
    secret = os.environ.get(settings.auth.secret_env_var)
    if not secret:
        raise JWTSecretNotConfiguredError(
            f"{settings.auth.secret_env_var} environment variable not set"
        )
    return secret


def actor_from_claims(claims: Mapping[str, Any]) -> Actor:
    """Build an Actor from token claims.

    The display name falls back to firstName + lastName when no `name`
    claim is present.

    Raises:
        ValidationError: If id, name or email is missing or malformed
    """
    name = claims.get("name") or " ".join(
        part for part in (claims.get("firstName"), claims.get("lastName")) if part
    )
    return Actor(
        id=str(claims.get("sub") or claims.get("id") or ""),
        name=name,
        email=claims.get("email") or "",
        role=claims.get("role"),
    )


def decode_actor(token: str, settings: Settings) -> Actor:
    """Verify a bearer token and extract the caller identity.

    Raises:
        AuthenticationRequiredError: If the token is invalid or its claims incomplete
    """
    try:
        claims = jwt.decode(
            token,
            get_jwt_secret(settings),
            algorithms=[settings.auth.algorithm],
        )
        return actor_from_claims(claims)
    except JWTError as e:
        logger.warning("auth_jwt_error", error=str(e))
        raise AuthenticationRequiredError("Invalid or expired token") from None
    except ValidationError as e:
        logger.warning("auth_invalid_claims", error_count=e.error_count())
        raise AuthenticationRequiredError() from None


async def get_optional_actor(
    request: Request,
    settings: SettingsDep,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security_scheme)],
) -> Actor | None:
    """Resolve the caller if a valid token was sent; anonymous otherwise.

    A bad token on an optional-auth route is treated as anonymous, and so
    is any token while no signing secret is configured.
    """
    if credentials is None:
        return None

    try:
        actor = decode_actor(credentials.credentials, settings)
    except AuthenticationRequiredError:
        logger.debug("auth_optional_token_ignored", path=request.url.path)
        return None
    except JWTSecretNotConfiguredError as e:
        logger.warning("auth_secret_not_configured", error=str(e), path=request.url.path)
        return None

    logger.debug("auth_success", user_id=actor.id, role=actor.role)
    return actor


async def require_actor(
    request: Request,
    settings: SettingsDep,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security_scheme)],
) -> Actor:
    """Resolve the caller, rejecting the request with 401 if there is none."""
    if credentials is None:
        logger.warning("auth_missing_token", path=request.url.path)
        raise AuthenticationRequiredError("Access token required")

    actor = decode_actor(credentials.credentials, settings)
    logger.debug("auth_success", user_id=actor.id, role=actor.role)
    return actor


# Type aliases for dependency injection
OptionalActorDep = Annotated[Actor | None, Depends(get_optional_actor)]
ActorDep = Annotated[Actor, Depends(require_actor)]
