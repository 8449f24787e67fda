"""
ng-codefix Server Authentication

API key-based authentication against the keys configured in settings.
With no keys configured the server runs open (local development).
"""

import logging
from fastapi import Depends, HTTPException, status
from fastapi.security import APIKeyHeader, HTTPBearer, HTTPAuthorizationCredentials
from pydantic import BaseModel
from typing import Optional
from packaging import version

from .settings import settings

logger = logging.getLogger(__name__)


# Security headers
api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)
client_version_header = APIKeyHeader(name="X-NgCodefix-Client-Version", auto_error=False)
bearer_scheme = HTTPBearer(auto_error=False)


class ClientContext(BaseModel):
    """
    Authenticated client context.
    """
    api_key: Optional[str] = None
    client_version: Optional[str] = None
    auth_required: bool = True


def _extract_api_key(
    api_key: Optional[str],
    bearer: Optional[HTTPAuthorizationCredentials],
) -> Optional[str]:
    if bearer and bearer.scheme and bearer.scheme.lower() == "bearer":
        return bearer.credentials
    return api_key


async def get_current_client(
    api_key: Optional[str] = Depends(api_key_header),
    bearer: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    client_version: Optional[str] = Depends(client_version_header),
) -> ClientContext:
    """
    Validate API key and return client context.
    """
    _check_client_version(client_version)

    if not settings.api_keys:
        return ClientContext(client_version=client_version, auth_required=False)

    raw_key = _extract_api_key(api_key, bearer)

    # Check if API key is provided
    if not raw_key:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing API key. Provide X-API-Key header or Authorization: Bearer <token>.",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if raw_key in settings.api_keys:
        return ClientContext(api_key=raw_key, client_version=client_version)

    # No valid authentication found
    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid API key.",
        headers={"WWW-Authenticate": "Bearer"},
    )


def _check_client_version(client_version: Optional[str]) -> None:
    """Enforce minimum client version if configured."""
    if settings.min_client_version and client_version:
        try:
            if version.parse(client_version) < version.parse(settings.min_client_version):
                raise HTTPException(
                    status_code=status.HTTP_426_UPGRADE_REQUIRED,
                    detail=f"Client version {client_version} is too old. Minimum required: {settings.min_client_version}.",
                )
        except version.InvalidVersion:
            # Invalid version string - allow through but log
            logger.info("Ignoring unparseable client version %r", client_version)
