"""Security utilities: bearer token validation and owner resolution.

Tokens are issued by the authentication service; this module only verifies
the signature and extracts the subject, which is the transaction owner id.
"""

import structlog
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from spendwise.config import settings
from spendwise.core.exceptions import AuthenticationError

logger = structlog.get_logger()


def decode_access_token(token: str) -> dict:
    """Decode and validate an access token signed with the shared secret."""
    try:
        return jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError as e:
        logger.info("token_rejected", reason=str(e))
        raise AuthenticationError("Invalid or expired token") from e


def create_access_token(owner_id: str, **claims) -> str:
    """Sign a token for ``owner_id`` (used by tooling and tests)."""
    payload = {"sub": owner_id, **claims}
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


# ── Auth Dependencies ─────────────────────────────
security_scheme = HTTPBearer(auto_error=False)


async def get_current_owner_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(security_scheme),
) -> str:
    """FastAPI dependency: resolve the caller's owner id from the bearer token."""
    if credentials is None:
        raise AuthenticationError()

    payload = decode_access_token(credentials.credentials)

    owner_id = payload.get("sub")
    if not owner_id:
        raise AuthenticationError("Token missing subject")

    return str(owner_id)
