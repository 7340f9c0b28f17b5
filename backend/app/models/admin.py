"""Admin identity passed explicitly to request-issuing components."""

from pydantic import BaseModel, Field


class AdminSession(BaseModel):
    """Verified admin identity for the current request."""

    uid: str = Field(..., description="Identity provider user ID")
    email: str = Field(..., description="Admin email address")
