# assessment_tax/api/deps.py
"""
Shared FastAPI dependencies used across route modules.

Admin routes are protected with HTTP Basic credentials compared in constant
time against the configured admin username and password.
"""

import hmac
import logging

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from assessment_tax.config.settings import Settings
from assessment_tax.domain.models.allowance_config import AllowanceRegistry

logger = logging.getLogger("api.deps")

_basic = HTTPBasic()


def get_settings(request: Request) -> Settings:
    """Settings the running app was built with."""
    return request.app.state.settings


def get_allowance_registry(request: Request) -> AllowanceRegistry:
    """The allowance-cap registry owned by the running app."""
    return request.app.state.allowance_registry


def _matches(supplied: str, expected: str) -> bool:
    return hmac.compare_digest(supplied.encode("utf-8"), expected.encode("utf-8"))


async def require_admin(
    credentials: HTTPBasicCredentials = Depends(_basic),
    settings: Settings = Depends(get_settings),
) -> str:
    """
    Verify the caller is the configured admin.

    Returns the admin username. Raises HTTP 401 on bad credentials;
    missing credentials are rejected by ``HTTPBasic`` itself.
    """
    # Both comparisons always run
    user_ok = _matches(credentials.username, settings.ADMIN_USERNAME)
    password_ok = _matches(credentials.password, settings.ADMIN_PASSWORD)
    if user_ok and password_ok:
        return credentials.username

    logger.warning("Invalid admin credentials for user %r", credentials.username)
    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid admin credentials.",
        headers={"WWW-Authenticate": "Basic"},
    )
