import inspect

import pytest
from httpx import AsyncClient, ASGITransport

from app.main import app
from app.core.config import settings


@pytest.fixture
async def test_client():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
def valid_contact_data():
    return {
        "firstName": "Jane",
        "lastName": "Smith",
        "email": "jane.smith@example.com",
        "phone": "07700 900123",
        "preferredContactMethod": "email",
        "bestTimeToCall": "morning",
        "marketingConsent": False,
        "termsAccepted": True
    }


@pytest.fixture
def valid_purchase_data():
    return {
        "propertyPrice": 300000,
        "propertyAddress": "12 High Street, Leeds",
        "propertyPostcode": "LS1 4AP",
        "propertyType": "house",
        "tenure": "freehold",
        "purchaseType": "standard",
        "isFirstTimeBuyer": False,
        "isBuyToLet": False,
        "hasMortgage": True,
        "mortgageLender": "Nationwide",
        "numberOfBuyers": 2
    }


@pytest.fixture
def valid_sale_data():
    return {
        "propertyPrice": 250000,
        "propertyAddress": "4 Mill Lane, York",
        "propertyPostcode": "YO1 7HH",
        "tenure": "leasehold",
        "hasMortgage": False,
        "numberOfSellers": 1
    }


@pytest.fixture
def both_quote_data(valid_purchase_data, valid_sale_data, valid_contact_data):
    return {
        "transactionType": "both",
        "purchase": valid_purchase_data,
        "sale": valid_sale_data,
        "contact": valid_contact_data
    }


@pytest.fixture
def webhook_url(monkeypatch):
    url = "http://crm.test/enquiries"
    monkeypatch.setattr(settings, "WEBHOOK_URL", url)
    return url


@pytest.fixture
def app_settings():
    """Return application settings"""
    return settings


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
    config.addinivalue_line(
        "markers", "pricing: marks tests related to pricing"
    )
    config.addinivalue_line(
        "markers", "webhooks: marks tests related to webhooks"
    )


def pytest_collection_modifyitems(config, items):
    """
    Modify test collection to handle asyncio tests
    """
    for item in items:
        if inspect.iscoroutinefunction(getattr(item, "function", None)):
            item.add_marker(pytest.mark.asyncio)
