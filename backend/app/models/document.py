"""Decoded factura XML document offered for download."""

from pydantic import BaseModel

XML_MEDIA_TYPE = "application/xml"


class DecodedInvoiceDocument(BaseModel):
    """
    XML document decoded from RespuestaXML.

    Built per successful request and sent straight to the client; it is
    never stored by this service.
    """

    consecutive_number: str
    xml_content: str

    @property
    def filename(self) -> str:
        return f"factura_{self.consecutive_number}.xml"

    @property
    def media_type(self) -> str:
        return XML_MEDIA_TYPE

    @property
    def content_disposition(self) -> str:
        return f'attachment; filename="{self.filename}"'
