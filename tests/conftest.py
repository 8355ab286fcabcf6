"""Pytest fixtures for cuentica tests."""

from typing import Any

import pytest

from cuentica import AsyncCuenticaClient, CuenticaClient


@pytest.fixture
def api_token() -> str:
    """Return a test API token."""
    return "test-token"


@pytest.fixture
def base_url() -> str:
    """Return the base API URL."""
    return "https://api.cuentica.com"


@pytest.fixture
def sync_client(api_token: str):
    """Create a sync CuenticaClient for testing."""
    client = CuenticaClient(api_token)
    yield client
    client.close()


@pytest.fixture
async def async_client(api_token: str):
    """Create an async CuenticaClient for testing."""
    client = AsyncCuenticaClient(api_token)
    yield client
    await client.close()


@pytest.fixture
def mock_company() -> dict[str, Any]:
    """Return mock company data."""
    return {"id": 1, "name": "Test Company"}


@pytest.fixture
def mock_customer() -> dict[str, Any]:
    """Return mock customer data."""
    return {
        "id": 1,
        "name": "Test Customer",
        "cif": "12345678Z",
        "email": "customer@example.com",
    }


@pytest.fixture
def mock_invoice() -> dict[str, Any]:
    """Return mock invoice data."""
    return {
        "id": 10,
        "customer": 1,
        "date": "2024-03-01",
        "issued": True,
        "invoice_lines": [
            {"concept": "Consulting", "quantity": 2, "amount": 100.0, "tax": 21},
            {"concept": "Hosting", "quantity": 1, "amount": 50.0, "tax": 21},
        ],
        "tags": ["important"],
    }


@pytest.fixture
def mock_transfer() -> dict[str, Any]:
    """Return mock transfer data."""
    return {
        "id": 7,
        "amount": 1000.0,
        "date": "2024-01-15",
        "origin_account": 123,
        "destination_account": 456,
        "payment_method": "wire_transfer",
    }
