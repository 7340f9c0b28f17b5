"""
Customer search, form pre-fill and client-side pagination for lists that
the factura API returns in full.
"""
import math
from typing import Iterable, Sequence, TypeVar

from pydantic import ValidationError

from app.config import settings
from app.models.customer import COUNTRY_CODES
from app.models.listing import Customer, Page
from app.utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


def filter_by_name(customers: Iterable[Customer], query: str | None) -> list[Customer]:
    """Case-insensitive substring match on the customer name."""
    customers = list(customers)
    needle = (query or "").strip().lower()
    if not needle:
        return customers
    return [c for c in customers if needle in (c.name or "").lower()]


def split_phone_number(phone: str | None, code: str | None) -> tuple[str, str]:
    """
    Split a stored phone number into (dialing code, local number).

    The stored code is matched against the known dialing codes, longest
    first so +506 wins over +5x codes. Unknown codes fall back to the default.
    """
    phone = (phone or "").strip()
    code = (code or "").strip()
    known = sorted({c for c, _ in COUNTRY_CODES}, key=len, reverse=True)
    for candidate in known:
        if code.startswith(candidate):
            if phone.startswith(candidate):
                phone = phone[len(candidate):].strip()
            return candidate, phone
    return settings.default_country_code, phone


def prefill_from_customer(customer: Customer) -> dict:
    """Form values for a customer picked from the suggestions list."""
    code, phone = split_phone_number(customer.phone_number, customer.code)
    return {
        "identificationId": customer.id,
        "fullName": customer.name,
        "email": customer.email or "",
        "identificationNumber": customer.customer_id or "",
        "phoneNumber": phone,
        "countryCode": code,
        "isBusiness": customer.is_business,
        "businessName": customer.business_name or "",
    }


def paginate(items: Sequence[T], page: int = 1, per_page: int | None = None) -> Page[T]:
    """
    Slice an in-memory list into pages.

    Pages are 1-based; a page past the end is empty rather than an error.
    """
    per_page = per_page or settings.items_per_page
    page = max(page, 1)
    start = (page - 1) * per_page
    return Page(
        items=list(items[start:start + per_page]),
        page=page,
        per_page=per_page,
        total=len(items),
        total_pages=math.ceil(len(items) / per_page),
    )


def parse_records(model: type[T], rows: Iterable[dict]) -> list[T]:
    """Validate upstream rows, skipping the ones that do not fit the model."""
    records = []
    for row in rows:
        try:
            records.append(model.model_validate(row))
        except ValidationError as e:
            logger.warning("Skipping malformed record", model=model.__name__, errors=e.error_count())
    return records
