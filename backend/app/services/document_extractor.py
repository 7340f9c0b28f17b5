"""
Extraction of the signed factura XML from a send-factura response.

The factura API returns the document inside solaria.RespuestaXML: a vendor
prefix of fixed length followed by the base64-encoded XML. All knowledge of
that layout lives in split_respuesta_xml.
"""
import base64
import binascii
import re
import time
from typing import Any, Optional

import lxml.etree as ET

from app.exceptions import DecodeError, MalformedDocumentError, MissingDocumentError
from app.models.document import DecodedInvoiceDocument
from app.utils.logger import get_logger

logger = get_logger(__name__)

# Fixed by the factura API: the base64 payload starts at the 68th character
RESPUESTA_XML_OFFSET = 67

_CONSECUTIVO_TAG = re.compile(r"<NumeroConsecutivo>(.*?)</NumeroConsecutivo>", re.DOTALL)
_UNSAFE_FILENAME_CHARS = re.compile(r"[^\w.-]", re.ASCII)
_XML_PARSER = ET.XMLParser(resolve_entities=False, no_network=True)


def sanitize_filename(name: str) -> str:
    """Replace characters that are unsafe in a Content-Disposition filename."""
    return _UNSAFE_FILENAME_CHARS.sub("_", name)


def split_respuesta_xml(raw: str) -> str:
    """
    Return the base64 payload of a RespuestaXML value.

    Raises:
        MalformedDocumentError: The value is too short to contain a payload
    """
    if len(raw) < RESPUESTA_XML_OFFSET + 1:
        raise MalformedDocumentError(len(raw))
    return raw[RESPUESTA_XML_OFFSET:]


def decode_payload(payload: str) -> str:
    """Decode a base64 payload to text. Embedded whitespace and missing padding are tolerated."""
    compact = "".join(payload.split())
    compact += "=" * (-len(compact) % 4)
    try:
        return base64.b64decode(compact, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as e:
        raise DecodeError(str(e)) from e


def find_consecutive_number(xml_text: str) -> Optional[str]:
    """
    Find the NumeroConsecutivo value in a decoded document.

    The literal tag is tried first; namespace-prefixed elements are found
    by parsing the document.
    """
    match = _CONSECUTIVO_TAG.search(xml_text)
    if match:
        return match.group(1).strip() or None

    try:
        root = ET.fromstring(xml_text.encode("utf-8"), parser=_XML_PARSER)
    except ET.XMLSyntaxError:
        return None
    values = root.xpath("//*[local-name()='NumeroConsecutivo']/text()")
    if values:
        return str(values[0]).strip() or None
    return None


def timestamp_stem() -> str:
    """Milliseconds since the epoch, used when the document has no number."""
    return str(int(time.time() * 1000))


def extract_document(body: Any) -> DecodedInvoiceDocument:
    """
    Build the downloadable document from a send-factura response body.

    Args:
        body: Decoded JSON body, expected {"solaria": {"RespuestaXML": str}}

    Returns:
        DecodedInvoiceDocument: Named factura_{consecutivo}.xml

    Raises:
        MissingDocumentError: No solaria.RespuestaXML in the body
        MalformedDocumentError: RespuestaXML shorter than 68 characters
        DecodeError: Payload is not valid base64 / UTF-8
    """
    solaria = body.get("solaria") if isinstance(body, dict) else None
    raw = solaria.get("RespuestaXML") if isinstance(solaria, dict) else None
    if not isinstance(raw, str) or not raw:
        raise MissingDocumentError()

    xml_text = decode_payload(split_respuesta_xml(raw))

    consecutivo = find_consecutive_number(xml_text)
    if consecutivo is None:
        logger.warning("NumeroConsecutivo not found, naming file by timestamp")
        consecutivo = timestamp_stem()

    document = DecodedInvoiceDocument(
        consecutive_number=sanitize_filename(consecutivo),
        xml_content=xml_text,
    )
    logger.info("Factura document extracted", filename=document.filename, size=len(xml_text))
    return document
