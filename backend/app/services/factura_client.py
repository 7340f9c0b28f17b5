"""
Factura API client.

Thin requests-based client for the external factura backend. The backend
owns numbering, taxes and XML signing; this client only shapes payloads
and reports failures.
"""
from typing import Any, Optional
from urllib.parse import quote

import requests

from app.config import settings
from app.exceptions import InvalidReferenceError, RequestFailedError, UpstreamListError
from app.models.admin import AdminSession
from app.models.customer import CustomerRequest
from app.services.document_extractor import sanitize_filename
from app.utils.logger import get_logger

logger = get_logger(__name__)

SEND_FACTURA_PATH = "/api/v1/send-factura/{transaction_id}"
TRANSACTIONS_PATH = "/api/v1/get"
CUSTOMERS_PATH = "/api/v1/admin/customer"
FACTURAS_PATH = "/api/v1/getAllFactura"


def build_factura_payload(request: CustomerRequest) -> dict[str, Any]:
    """Map a validated request onto the factura API field names."""
    return {
        "Nombre": request.full_name,
        "Numero": request.identification_number,
        "CorreoElectronico": request.email,
        "phoneNumber": request.phone_number or "",
        "code": request.country_code or "",
        "isBusiness": request.is_business,
        "BusinessName": request.business_name or "",
    }


def _as_dict(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def _describe(exc: requests.RequestException) -> str:
    """Best human-readable message for a failed call."""
    response = exc.response
    if response is None:
        return str(exc)
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return f"{response.status_code}: {body['message']}"
    return str(exc)


class FacturaAPIClient:
    """
    Client for the factura backend.

    Every call is a single attempt; retry policy belongs to the caller.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        api_token: str | None = None,
        session: requests.Session | None = None,
    ):
        self.base_url = (base_url or settings.factura_api_base).rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()
        if api_token:
            self._session.headers["Authorization"] = f"Bearer {api_token}"

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _get_json(self, path: str, resource: str, params: dict | None = None) -> Any:
        try:
            resp = self._session.get(self._url(path), params=params, timeout=self.timeout)
            resp.raise_for_status()
            return resp.json()
        except requests.RequestException as e:
            logger.error("List request failed", resource=resource, error=str(e))
            raise UpstreamListError(resource, _describe(e)) from e

    # ==================== LISTS ====================

    def get_all_transactions(self) -> list[dict]:
        data = _as_dict(self._get_json(TRANSACTIONS_PATH, "transactions"))
        return _as_dict(data.get("result")).get("data") or []

    def get_all_customers(self) -> list[dict]:
        data = _as_dict(self._get_json(CUSTOMERS_PATH, "customers"))
        return data.get("result") or []

    def get_all_facturas(self, page: int = 1) -> dict:
        """Returns {"data": [...], "totalPages": n} as paginated by the backend."""
        data = _as_dict(self._get_json(FACTURAS_PATH, "facturas", params={"page": page}))
        return {"data": data.get("data") or [], "totalPages": data.get("totalPages") or 1}

    def fetch_file(self, path: str) -> tuple[bytes, str, str]:
        """
        Download a stored factura file.

        Args:
            path: Server path from a factura record, e.g. /facturas/123.pdf

        Returns:
            tuple: (content, content type, file name)
        """
        if not path or not path.startswith("/") or ".." in path.split("/"):
            raise InvalidReferenceError("Invalid factura path")
        try:
            resp = self._session.get(self._url(path), timeout=self.timeout)
            resp.raise_for_status()
        except requests.RequestException as e:
            logger.error("Factura file download failed", path=path, error=str(e))
            raise UpstreamListError("factura file", _describe(e)) from e
        filename = sanitize_filename(path.rsplit("/", 1)[-1]) or "factura.pdf"
        content_type = resp.headers.get("Content-Type", "application/octet-stream")
        return resp.content, content_type, filename

    # ==================== SUBMISSION ====================

    def send_factura(
        self,
        request: CustomerRequest,
        transaction_id: Any,
        admin: Optional[AdminSession] = None,
    ) -> Any:
        """
        Ask the backend to generate the factura for a transaction.

        Args:
            request: Validated customer data
            transaction_id: Transaction the factura is issued for
            admin: Admin on whose behalf the call is made

        Returns:
            The decoded JSON response body, None when it is not JSON

        Raises:
            InvalidReferenceError: transaction_id missing, blank or not a string
            RequestFailedError: Network error or non-2xx response
        """
        if not isinstance(transaction_id, str) or not transaction_id.strip():
            raise InvalidReferenceError()

        url = self._url(SEND_FACTURA_PATH.format(transaction_id=quote(transaction_id, safe="")))
        log = logger.bind(
            transaction_id=transaction_id,
            admin_email=admin.email if admin else None,
            is_business=request.is_business,
        )
        log.info("Sending factura request")
        try:
            resp = self._session.post(url, json=build_factura_payload(request), timeout=self.timeout)
            resp.raise_for_status()
        except requests.RequestException as e:
            log.error("Factura request failed", error=str(e))
            raise RequestFailedError(_describe(e)) from e

        # Accepted upstream; an unreadable body is left to the document extractor
        try:
            body = resp.json()
        except ValueError:
            log.warning("Factura response body is not JSON", content_type=resp.headers.get("Content-Type"))
            body = None

        log.info("Factura request accepted", status_code=resp.status_code)
        return body


# Shared instance
_factura_client: Optional[FacturaAPIClient] = None


def get_factura_client() -> FacturaAPIClient:
    """Get the shared factura API client (FastAPI dependency)."""
    global _factura_client
    if _factura_client is None:
        _factura_client = FacturaAPIClient(
            base_url=settings.factura_api_base,
            timeout=settings.factura_api_timeout,
            api_token=settings.factura_api_token,
        )
    return _factura_client
