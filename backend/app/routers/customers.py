from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Query, Request
from starlette.concurrency import run_in_threadpool

from app.config import settings
from app.exceptions import CustomerNotFoundError
from app.limiter import limiter
from app.middleware.auth import get_current_admin
from app.models.admin import AdminSession
from app.models.customer import CustomerRequest
from app.models.listing import Customer, Page
from app.services.customer_lookup import filter_by_name, paginate, parse_records, prefill_from_customer
from app.services.factura_client import FacturaAPIClient, get_factura_client
from app.services.form_validator import validate_customer_request

router = APIRouter()


@router.get("", response_model=Page[Customer])
@limiter.limit(settings.rate_limit_listing)
async def list_customers(
    request: Request,
    search: Optional[str] = Query(None, description="Case-insensitive match on the customer name"),
    page: int = Query(1, ge=1),
    per_page: Optional[int] = Query(None, ge=1, le=100),
    admin: AdminSession = Depends(get_current_admin),
    client: FacturaAPIClient = Depends(get_factura_client),
):
    """
    List customers.

    The factura API returns every customer; filtering and pagination happen here.
    """
    rows = await run_in_threadpool(client.get_all_customers)
    customers = filter_by_name(parse_records(Customer, rows), search)
    return paginate(customers, page, per_page)


@router.get("/{customer_id}/prefill")
async def prefill_customer_form(
    customer_id: str,
    admin: AdminSession = Depends(get_current_admin),
    client: FacturaAPIClient = Depends(get_factura_client),
):
    """Form values for generating a factura for an existing customer."""
    rows = await run_in_threadpool(client.get_all_customers)
    for customer in parse_records(Customer, rows):
        if customer.id == customer_id:
            return prefill_from_customer(customer)
    raise CustomerNotFoundError(customer_id)


@router.post("/validate", response_model=CustomerRequest, response_model_by_alias=True)
async def validate_customer(
    form: dict[str, Any] = Body(...),
    admin: AdminSession = Depends(get_current_admin),
):
    """Validate customer form values without contacting the factura API."""
    return validate_customer_request(form)
