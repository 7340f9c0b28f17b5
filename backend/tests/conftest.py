"""Pytest configuration and fixtures."""

import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

# Add backend to path
backend_dir = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(backend_dir))

from app.limiter import limiter
from app.main import app
from app.middleware.auth import get_current_admin
from app.models.admin import AdminSession
from app.services.factura_client import FacturaAPIClient, get_factura_client

FACTURA_API_BASE = "http://factura.test"


@pytest.fixture
def admin() -> AdminSession:
    return AdminSession(uid="admin-uid", email="admin@solaria.cr")


@pytest.fixture
def fake_session() -> MagicMock:
    """Stand-in for requests.Session; set .get/.post return values per test."""
    session = MagicMock()
    session.headers = {}
    return session


@pytest.fixture
def factura_client(fake_session) -> FacturaAPIClient:
    return FacturaAPIClient(base_url=FACTURA_API_BASE, session=fake_session)


@pytest.fixture
def client(admin, factura_client):
    """FastAPI test client signed in as the admin, talking to the fake factura API."""
    limiter.reset()
    app.dependency_overrides[get_current_admin] = lambda: admin
    app.dependency_overrides[get_factura_client] = lambda: factura_client
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def anonymous_client(factura_client):
    """FastAPI test client without admin credentials."""
    limiter.reset()
    app.dependency_overrides[get_factura_client] = lambda: factura_client
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def valid_form() -> dict:
    """Factura form as posted by the admin UI."""
    return {
        "transactionId": "abc123",
        "identificationId": "cust-1",
        "fullName": "María Rodríguez",
        "identificationNumber": "112340567",
        "email": "maria.rodriguez@gmail.com",
        "phoneNumber": "8888-1234",
        "countryCode": "+506",
        "isBusiness": False,
        "businessName": "",
    }


@pytest.fixture
def business_form(valid_form) -> dict:
    return {
        **valid_form,
        "fullName": "Carlos Jiménez",
        "identificationNumber": "3101123456",
        "identificationType": "02",
        "isBusiness": True,
        "businessName": "Solaria Servicios S.A.",
    }
