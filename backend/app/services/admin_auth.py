"""
Admin Authentication Service.

The admin signs in with the external identity provider (Firebase Auth) and
sends its ID token. This service verifies the token with the Firebase Admin
SDK and checks that it belongs to the configured admin account.
"""
import logging
from typing import Optional

import firebase_admin
from firebase_admin import auth, credentials, initialize_app
from firebase_admin.exceptions import FirebaseError

from app.config import settings
from app.exceptions import AuthenticationError, SolariaAPIException
from app.models.admin import AdminSession

logger = logging.getLogger(__name__)


class NotAdminError(SolariaAPIException):
    """Raised when a valid identity is not the configured admin."""

    def __init__(self, detail: str = "Insufficient permissions"):
        super().__init__(detail=detail, status_code=403)


class AdminAuthService:
    """
    Verifies admin ID tokens.

    Example:
        ```python
        service = get_admin_auth_service()
        admin = await service.authenticate(id_token)
        ```
    """

    def __init__(self, admin_email: Optional[str] = None):
        self.admin_email = (admin_email or settings.admin_email or "").strip().lower()
        self._initialized = False

    def _init_firebase(self) -> None:
        """
        Initialize the Firebase Admin SDK once.

        Uses the credentials file when configured, Application Default
        Credentials otherwise.
        """
        if self._initialized:
            return
        if not settings.firebase_enabled:
            raise AuthenticationError("Admin authentication is not configured")

        try:
            if firebase_admin._apps:
                self._initialized = True
                return

            options = {"projectId": settings.firebase_project_id} if settings.firebase_project_id else None
            if settings.firebase_credentials_path:
                logger.info(f"Initializing Firebase with credentials: {settings.firebase_credentials_path}")
                initialize_app(credentials.Certificate(settings.firebase_credentials_path), options)
            else:
                logger.info("Initializing Firebase with Application Default Credentials")
                initialize_app(options=options)

            self._initialized = True
        except (ValueError, FirebaseError, OSError) as e:
            logger.error(f"Failed to initialize Firebase: {e}")
            raise AuthenticationError(f"Failed to initialize Firebase: {e}")

    async def verify_token(self, id_token: str) -> dict:
        """
        Verify a Firebase ID token.

        Raises:
            AuthenticationError: Token invalid, expired or revoked
        """
        self._init_firebase()
        try:
            return auth.verify_id_token(id_token)
        except auth.ExpiredIdTokenError:
            raise AuthenticationError("ID token has expired")
        except auth.RevokedIdTokenError:
            raise AuthenticationError("ID token has been revoked")
        except auth.InvalidIdTokenError:
            raise AuthenticationError("Invalid ID token")
        except (ValueError, FirebaseError) as e:
            logger.error(f"Token verification failed: {e}")
            raise AuthenticationError(f"Token verification failed: {e}")

    def authorize(self, decoded_token: dict) -> AdminSession:
        """
        Turn a verified token into an admin session.

        Raises:
            NotAdminError: Email missing or not the admin account
        """
        email = (decoded_token.get("email") or "").strip().lower()
        if not self.admin_email or email != self.admin_email:
            logger.warning(f"Rejected non-admin identity: {decoded_token.get('uid')}")
            raise NotAdminError()
        return AdminSession(uid=decoded_token["uid"], email=email)

    async def authenticate(self, id_token: str) -> AdminSession:
        decoded = await self.verify_token(id_token)
        return self.authorize(decoded)


# Singleton instance
_admin_auth_service: Optional[AdminAuthService] = None


def get_admin_auth_service() -> AdminAuthService:
    """Get singleton admin auth service instance."""
    global _admin_auth_service
    if _admin_auth_service is None:
        _admin_auth_service = AdminAuthService()
    return _admin_auth_service
