"""
Admin Session Router

Identity of the signed-in admin and static form data for the admin UI.
Sign-in itself happens against the identity provider.
"""
from fastapi import APIRouter, Depends

from app.config import settings
from app.middleware.auth import get_current_admin
from app.models.admin import AdminSession
from app.models.customer import COUNTRY_CODES, IdentificationType

router = APIRouter()


@router.get("/me", response_model=AdminSession)
async def get_admin_profile(admin: AdminSession = Depends(get_current_admin)):
    """Current admin session."""
    return admin


@router.get("/form-options")
async def get_form_options(admin: AdminSession = Depends(get_current_admin)):
    """Choices for the factura form."""
    return {
        "country_codes": [{"code": code, "country": country} for code, country in COUNTRY_CODES],
        "default_country_code": settings.default_country_code,
        "identification_types": [t.value for t in IdentificationType],
    }
