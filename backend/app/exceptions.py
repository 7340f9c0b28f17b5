"""Custom exceptions for the Solaria Admin API."""

from fastapi import HTTPException, status


class SolariaAPIException(HTTPException):
    """Base exception for Solaria Admin API errors."""

    def __init__(self, detail: str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR):
        super().__init__(status_code=status_code, detail=detail)


class ValidationError(SolariaAPIException):
    """Raised when form input fails validation. Carries field-level messages."""

    def __init__(self, errors: dict[str, list[str]], detail: str = "Invalid form data"):
        super().__init__(detail=detail, status_code=status.HTTP_422_UNPROCESSABLE_ENTITY)
        self.errors = errors


class InvalidReferenceError(SolariaAPIException):
    """Raised when the transaction identifier is missing or not a string."""

    def __init__(self, detail: str = "Invalid transaction ID"):
        super().__init__(detail=detail, status_code=status.HTTP_400_BAD_REQUEST)


class RequestFailedError(SolariaAPIException):
    """Raised when the factura API call fails (network error or non-2xx)."""

    def __init__(self, detail: str):
        super().__init__(
            detail=f"Error in sending data to factura: {detail}",
            status_code=status.HTTP_502_BAD_GATEWAY,
        )


class UpstreamListError(SolariaAPIException):
    """Raised when a read-only list cannot be fetched from the factura API."""

    def __init__(self, resource: str, detail: str):
        super().__init__(
            detail=f"Error in getting {resource}: {detail}",
            status_code=status.HTTP_502_BAD_GATEWAY,
        )


class DocumentError(SolariaAPIException):
    """
    Base for failures while extracting the XML document from a successful response.

    The factura may already exist upstream when one of these is raised.
    """

    def __init__(self, detail: str):
        super().__init__(detail=detail, status_code=status.HTTP_502_BAD_GATEWAY)


class MissingDocumentError(DocumentError):
    """Raised when the response has no solaria.RespuestaXML field."""

    def __init__(self, detail: str = "No se recibió RespuestaXML del API"):
        super().__init__(detail)


class MalformedDocumentError(DocumentError):
    """Raised when RespuestaXML is too short to hold a base64 payload."""

    def __init__(self, length: int):
        super().__init__(
            f"RespuestaXML no contiene la cadena base64 esperada (longitud {length})"
        )


class DecodeError(DocumentError):
    """Raised when the base64 payload cannot be decoded to text."""

    def __init__(self, detail: str):
        super().__init__(f"Error al procesar el documento: {detail}")


class AuthenticationError(SolariaAPIException):
    """Raised when the admin identity token cannot be verified."""

    def __init__(self, detail: str):
        super().__init__(detail=detail, status_code=status.HTTP_401_UNAUTHORIZED)


class CustomerNotFoundError(SolariaAPIException):
    """Raised when a customer id is not in the customer list."""

    def __init__(self, customer_id: str):
        super().__init__(
            detail=f"Customer not found: {customer_id}",
            status_code=status.HTTP_404_NOT_FOUND,
        )
