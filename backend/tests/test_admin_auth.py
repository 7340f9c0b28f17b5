"""
Tests for admin authentication.

Firebase token verification is mocked; no network calls are made.
"""
from unittest.mock import patch

import pytest
from fastapi import HTTPException
from fastapi.security import HTTPAuthorizationCredentials
from firebase_admin import auth as firebase_auth

from app.exceptions import AuthenticationError
from app.middleware.auth import get_current_admin
from app.services.admin_auth import AdminAuthService, NotAdminError

ADMIN_EMAIL = "admin@solaria.cr"


@pytest.fixture
def auth_service():
    service = AdminAuthService(admin_email=ADMIN_EMAIL)
    service._initialized = True
    return service


class TestAdminAuthService:

    @pytest.mark.asyncio
    async def test_authenticate_admin(self, auth_service):
        decoded = {"uid": "admin-uid", "email": "Admin@Solaria.cr"}
        with patch.object(firebase_auth, "verify_id_token", return_value=decoded):
            session = await auth_service.authenticate("valid_token")
        assert session.uid == "admin-uid"
        assert session.email == ADMIN_EMAIL

    @pytest.mark.asyncio
    async def test_other_user_is_forbidden(self, auth_service):
        decoded = {"uid": "u2", "email": "someone@gmail.com"}
        with patch.object(firebase_auth, "verify_id_token", return_value=decoded):
            with pytest.raises(NotAdminError) as exc_info:
                await auth_service.authenticate("valid_token")
        assert exc_info.value.status_code == 403

    def test_token_without_email_is_forbidden(self, auth_service):
        with pytest.raises(NotAdminError):
            auth_service.authorize({"uid": "anonymous"})

    def test_no_admin_configured(self):
        service = AdminAuthService(admin_email="")
        service.admin_email = ""
        with pytest.raises(NotAdminError):
            service.authorize({"uid": "u", "email": ""})

    @pytest.mark.asyncio
    async def test_invalid_token(self, auth_service):
        with patch.object(
            firebase_auth, "verify_id_token", side_effect=firebase_auth.InvalidIdTokenError("Invalid token")
        ):
            with pytest.raises(AuthenticationError) as exc_info:
                await auth_service.verify_token("invalid_token")
        assert exc_info.value.detail == "Invalid ID token"
        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_expired_token(self, auth_service):
        with patch.object(
            firebase_auth, "verify_id_token", side_effect=firebase_auth.ExpiredIdTokenError("Expired", None)
        ):
            with pytest.raises(AuthenticationError) as exc_info:
                await auth_service.verify_token("expired_token")
        assert exc_info.value.detail == "ID token has expired"

    @pytest.mark.asyncio
    async def test_firebase_disabled(self):
        service = AdminAuthService(admin_email=ADMIN_EMAIL)
        with patch("app.services.admin_auth.settings.firebase_enabled", False):
            with pytest.raises(AuthenticationError) as exc_info:
                await service.verify_token("any")
        assert "not configured" in exc_info.value.detail


class TestGetCurrentAdmin:

    @pytest.mark.asyncio
    async def test_missing_credentials(self):
        with pytest.raises(HTTPException) as exc_info:
            await get_current_admin(None)
        assert exc_info.value.status_code == 401
        assert exc_info.value.headers == {"WWW-Authenticate": "Bearer"}

    @pytest.mark.asyncio
    async def test_valid_credentials(self, auth_service):
        creds = HTTPAuthorizationCredentials(scheme="Bearer", credentials="valid_token")
        decoded = {"uid": "admin-uid", "email": ADMIN_EMAIL}
        with patch("app.middleware.auth.get_admin_auth_service", return_value=auth_service), \
                patch.object(firebase_auth, "verify_id_token", return_value=decoded):
            session = await get_current_admin(creds)
        assert session.email == ADMIN_EMAIL

    @pytest.mark.asyncio
    async def test_non_admin_maps_to_403(self, auth_service):
        creds = HTTPAuthorizationCredentials(scheme="Bearer", credentials="valid_token")
        decoded = {"uid": "u2", "email": "someone@gmail.com"}
        with patch("app.middleware.auth.get_admin_auth_service", return_value=auth_service), \
                patch.object(firebase_auth, "verify_id_token", return_value=decoded):
            with pytest.raises(HTTPException) as exc_info:
                await get_current_admin(creds)
        assert exc_info.value.status_code == 403
        assert exc_info.value.headers is None
