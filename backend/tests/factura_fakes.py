"""Fake factura API responses shared by the tests."""

import base64
import json

import requests

# 67 characters of vendor prefix before the base64 payload
VENDOR_PREFIX = "MensajeHacienda;clave=50601012500310123456700100001010000000001;".ljust(67, "0")[:67]

SAMPLE_FACTURA_XML = (
    '<?xml version="1.0" encoding="utf-8"?>'
    '<FacturaElectronica xmlns="https://cdn.comprobanteselectronicos.go.cr/xml-schemas/v4.3/facturaElectronica">'
    "<Clave>50601012500310123456700100001010000001234100000001</Clave>"
    "<NumeroConsecutivo>1234</NumeroConsecutivo>"
    "<FechaEmision>2025-01-01T10:00:00-06:00</FechaEmision>"
    "</FacturaElectronica>"
)


def make_respuesta_xml(xml_text: str, suffix: str = "") -> str:
    """RespuestaXML value wrapping xml_text the way the factura API does."""
    return VENDOR_PREFIX + base64.b64encode(xml_text.encode("utf-8")).decode("ascii") + suffix


def make_factura_body(xml_text: str = SAMPLE_FACTURA_XML, message: str | None = None) -> dict:
    body = {"solaria": {"RespuestaXML": make_respuesta_xml(xml_text)}}
    if message is not None:
        body["message"] = message
    return body


def make_response(
    body=None,
    status_code: int = 200,
    content: bytes | None = None,
    content_type: str = "application/json",
    url: str = "http://factura.test",
) -> requests.Response:
    """Real requests.Response carrying the given body."""
    response = requests.Response()
    response.status_code = status_code
    response.reason = "OK" if status_code < 400 else "Error"
    response.url = url
    response._content = content if content is not None else json.dumps(body).encode("utf-8")
    response.headers["Content-Type"] = content_type
    return response
