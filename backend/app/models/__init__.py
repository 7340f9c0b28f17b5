"""Pydantic models for the Solaria Admin API."""

from app.models.admin import AdminSession
from app.models.customer import COUNTRY_CODES, CustomerRequest, IdentificationType
from app.models.document import DecodedInvoiceDocument
from app.models.listing import Customer, Factura, FacturaFile, Page, Transaction

__all__ = [
    "AdminSession",
    "COUNTRY_CODES",
    "Customer",
    "CustomerRequest",
    "DecodedInvoiceDocument",
    "Factura",
    "FacturaFile",
    "IdentificationType",
    "Page",
    "Transaction",
]
