"""
Customer request model.

Validation rules for the "generar factura" / customer registration form.
Field names are accepted in the camelCase the admin UI posts.
"""
import re
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

ID_MIN_DIGITS = 9
ID_MAX_DIGITS = 12
BUSINESS_ID_MIN_DIGITS = 10
PHONE_MIN_DIGITS = 8
PHONE_MAX_DIGITS = 15

# (dialing code, country), most used first
COUNTRY_CODES: tuple[tuple[str, str], ...] = (
    ("+506", "Costa Rica"),
    ("+1", "United States"),
    ("+1", "Canada"),
    ("+44", "United Kingdom"),
    ("+49", "Germany"),
    ("+33", "France"),
    ("+39", "Italy"),
    ("+34", "Spain"),
    ("+91", "India"),
    ("+86", "China"),
    ("+81", "Japan"),
    ("+82", "South Korea"),
    ("+61", "Australia"),
    ("+55", "Brazil"),
    ("+52", "Mexico"),
    ("+7", "Russia"),
    ("+92", "Pakistan"),
)

_DIGITS = re.compile(r"^[0-9]+$")
_NON_DIGITS = re.compile(r"[^0-9]")
_COUNTRY_CODE = re.compile(r"^\+?[0-9]{1,4}$")


class IdentificationType(str, Enum):
    """Identification document type codes used by the fiscal authority."""

    FISICA = "01"
    JURIDICA = "02"
    DIMEX = "03"
    NITE = "04"


class CustomerRequest(BaseModel):
    """
    Validated customer data for a factura request.

    is_business is declared before the fields whose rules depend on it so
    their validators can read it.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    identification_id: str = Field(default="", description="Customer record id, empty for new customers")
    full_name: str = Field(..., min_length=2, max_length=100, description="Customer full name")
    identification_type: IdentificationType = Field(default=IdentificationType.FISICA)
    is_business: bool = Field(default=False, description="Invoice issued to a company")
    identification_number: str = Field(..., description="Identification number, digits only")
    email: EmailStr = Field(..., description="Customer email address")
    phone_number: Optional[str] = Field(default=None, description="Phone number, stored as digits")
    country_code: Optional[str] = Field(default=None, description="Dialing code such as +506")
    business_name: Optional[str] = Field(default=None, validate_default=True)

    @field_validator("identification_number")
    @classmethod
    def validate_identification_number(cls, v: str, info: ValidationInfo) -> str:
        """Digits only, 9 to 12 of them, at least 10 for companies."""
        if not _DIGITS.match(v):
            raise ValueError("Solo se permiten números")
        if len(v) < ID_MIN_DIGITS:
            raise ValueError(f"El ID debe tener al menos {ID_MIN_DIGITS} dígitos")
        if len(v) > ID_MAX_DIGITS:
            raise ValueError(f"El ID no debe tener más de {ID_MAX_DIGITS} dígitos")
        if info.data.get("is_business") and len(v) < BUSINESS_ID_MIN_DIGITS:
            raise ValueError(
                f"El ID debe tener al menos {BUSINESS_ID_MIN_DIGITS} dígitos si es una empresa."
            )
        return v

    @field_validator("phone_number")
    @classmethod
    def validate_phone_number(cls, v: Optional[str]) -> Optional[str]:
        if not v:
            return None
        digits = _NON_DIGITS.sub("", v)
        if len(digits) < PHONE_MIN_DIGITS:
            raise ValueError(f"El teléfono debe tener al menos {PHONE_MIN_DIGITS} dígitos")
        if len(digits) > PHONE_MAX_DIGITS:
            raise ValueError(f"El teléfono no debe tener más de {PHONE_MAX_DIGITS} dígitos")
        return digits

    @field_validator("country_code")
    @classmethod
    def validate_country_code(cls, v: Optional[str]) -> Optional[str]:
        if not v:
            return None
        if not _COUNTRY_CODE.match(v):
            raise ValueError("Código de país inválido")
        return v if v.startswith("+") else f"+{v}"

    @field_validator("business_name")
    @classmethod
    def validate_business_name(cls, v: Optional[str], info: ValidationInfo) -> Optional[str]:
        if info.data.get("is_business"):
            if not v:
                raise ValueError("El nombre de la empresa es obligatorio.")
            return v
        return v or None
