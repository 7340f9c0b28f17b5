from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from starlette.concurrency import run_in_threadpool

from app.config import settings
from app.limiter import limiter
from app.middleware.auth import get_current_admin
from app.models.admin import AdminSession
from app.models.listing import Page, Transaction
from app.services.customer_lookup import paginate, parse_records
from app.services.factura_client import FacturaAPIClient, get_factura_client

router = APIRouter()


@router.get("", response_model=Page[Transaction])
@limiter.limit(settings.rate_limit_listing)
async def list_transactions(
    request: Request,
    page: int = Query(1, ge=1),
    per_page: Optional[int] = Query(None, ge=1, le=100),
    admin: AdminSession = Depends(get_current_admin),
    client: FacturaAPIClient = Depends(get_factura_client),
):
    """List transactions, paginated locally."""
    rows = await run_in_threadpool(client.get_all_transactions)
    return paginate(parse_records(Transaction, rows), page, per_page)
