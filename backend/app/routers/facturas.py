from typing import Any

from fastapi import APIRouter, Body, Depends, Query, Request
from fastapi.responses import JSONResponse, Response
from starlette.concurrency import run_in_threadpool

from app.config import settings
from app.limiter import limiter
from app.middleware.auth import get_current_admin
from app.models.admin import AdminSession
from app.models.listing import Factura, Page
from app.services.customer_lookup import parse_records
from app.services.factura_client import FacturaAPIClient, get_factura_client
from app.services.workflow import FacturaWorkflow, failure_payload

router = APIRouter()


@router.get("", response_model=Page[Factura])
@limiter.limit(settings.rate_limit_listing)
async def list_facturas(
    request: Request,
    page: int = Query(1, ge=1, description="Page number, paginated by the factura API"),
    admin: AdminSession = Depends(get_current_admin),
    client: FacturaAPIClient = Depends(get_factura_client),
):
    """List generated facturas, newest first as returned by the factura API."""
    data = await run_in_threadpool(client.get_all_facturas, page)
    items = parse_records(Factura, data["data"])
    return Page[Factura](
        items=items,
        page=page,
        total_pages=data["totalPages"],
    )


@router.post(
    "",
    responses={
        200: {"content": {"application/xml": {}}, "description": "Generated factura XML"},
        422: {"description": "Field-level validation errors"},
        502: {"description": "Factura API failure or unreadable response document"},
    },
)
@limiter.limit(settings.rate_limit_factura)
async def generate_factura(
    request: Request,
    form: dict[str, Any] = Body(..., description="Form values including transactionId"),
    admin: AdminSession = Depends(get_current_admin),
    client: FacturaAPIClient = Depends(get_factura_client),
):
    """
    Generate the factura for a transaction and return its XML as a download.

    On failure the body carries the error and an error notification; the
    factura may already exist upstream when the failure happened while
    reading the returned document.
    """
    workflow = FacturaWorkflow(client=client, admin=admin)
    result = await run_in_threadpool(workflow.run, form, form.get("transactionId"))

    if not result.succeeded:
        return JSONResponse(status_code=result.error.status_code, content=failure_payload(result))

    document = result.document
    return Response(
        content=document.xml_content,
        media_type=document.media_type,
        headers={"Content-Disposition": document.content_disposition},
    )


@router.get("/file")
@limiter.limit(settings.rate_limit_listing)
async def download_factura_file(
    request: Request,
    path: str = Query(..., description="File path from a factura record"),
    admin: AdminSession = Depends(get_current_admin),
    client: FacturaAPIClient = Depends(get_factura_client),
):
    """Proxy a stored factura file from the factura API as a download."""
    content, content_type, filename = await run_in_threadpool(client.fetch_file, path)
    return Response(
        content=content,
        media_type=content_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
