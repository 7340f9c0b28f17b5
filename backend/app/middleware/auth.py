"""
Authentication Middleware.

FastAPI dependency that resolves the admin session from the Bearer token.
"""
import logging

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.exceptions import SolariaAPIException
from app.models.admin import AdminSession
from app.services.admin_auth import get_admin_auth_service
from app.utils.logger import bind_context

logger = logging.getLogger(__name__)

# HTTP Bearer token scheme
security = HTTPBearer(auto_error=False)


async def get_current_admin(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> AdminSession:
    """
    Get the authenticated admin from the Bearer token.

    Returns:
        AdminSession: Passed explicitly to the handlers that call the factura API

    Raises:
        HTTPException: 401 without a valid token, 403 for non-admin identities

    Example:
        ```python
        @router.get("/me")
        async def me(admin: AdminSession = Depends(get_current_admin)):
            return admin
        ```
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        admin = await get_admin_auth_service().authenticate(credentials.credentials)
    except SolariaAPIException as e:
        headers = {"WWW-Authenticate": "Bearer"} if e.status_code == status.HTTP_401_UNAUTHORIZED else None
        raise HTTPException(status_code=e.status_code, detail=e.detail, headers=headers)

    bind_context(admin_email=admin.email)
    return admin
