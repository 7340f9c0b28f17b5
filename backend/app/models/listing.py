"""
Read-only records returned by the factura API, and the page envelope used
for list endpoints.

Upstream records use mixed field naming (_id, BusinessName, totalAmount);
aliases map them, unknown fields are kept.
"""
from datetime import datetime
from typing import Generic, Optional, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class FacturaFile(BaseModel):
    """Stored factura file reference."""

    path: str


class Customer(BaseModel):
    """Customer as listed by GET /api/v1/admin/customer."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str = Field(..., alias="_id")
    customer_id: Optional[str] = Field(None, alias="customerId")
    name: str = ""
    email: Optional[str] = None
    code: Optional[str] = None
    phone_number: Optional[str] = Field(None, alias="phoneNumber")
    is_business: bool = Field(False, alias="isBusiness")
    business_name: Optional[str] = Field(None, alias="BusinessName")
    role: Optional[str] = None
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    facturas: list[FacturaFile] = Field(default_factory=list)


class Transaction(BaseModel):
    """Transaction as listed by GET /api/v1/get."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str = Field(..., alias="_id")
    total_amount: float = Field(0, alias="totalAmount")
    table_id: Optional[str] = None
    created_at: Optional[datetime] = Field(None, alias="createdAt")


class Factura(BaseModel):
    """Generated factura record as listed by GET /api/v1/getAllFactura."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str = Field(..., alias="_id")
    customer: Union[Customer, str, None] = Field(None, alias="customerId")
    is_business: bool = Field(False, alias="isBusiness")
    solaria_invoice_id: Optional[str] = Field(None, alias="SolariaInvoiceId")
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    path: Optional[str] = None


class Page(BaseModel, Generic[T]):
    """One page of a list. per_page and total are unknown for lists paginated upstream."""

    items: list[T]
    page: int
    per_page: Optional[int] = None
    total: Optional[int] = None
    total_pages: int
