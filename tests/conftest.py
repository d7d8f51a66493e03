"""
Configurator Test Fixtures
==========================

Shared fixtures for all test modules.
"""

import pytest
from unittest.mock import AsyncMock

from configurator.config import ConfiguratorConfig
from configurator.models.catalog import Catalog, Package
from configurator.pricing.currency import CurrencyContext


# ============================================
# CONFIG
# ============================================

@pytest.fixture
def test_config():
    """Config with no navigation delay."""
    return ConfiguratorConfig(step_delay_seconds=0)


# ============================================
# CATALOG
# ============================================

@pytest.fixture
def custom_package():
    """A customizable package priced at 100 USD."""
    return Package.model_validate({
        "id": 1,
        "title": "Custom Pro",
        "description": "Build your own bundle",
        "price": 100,
        "testPeriodDays": 14,
        "type": "custom",
        "isCustomizable": True,
        "currency": "USD",
        "multiCurrencyPrices": '{"EUR": 92.5, "ZAR": 1850}',
    })


@pytest.fixture
def standard_package():
    """A non-customizable package priced at 49 USD."""
    return Package.model_validate({
        "id": 2,
        "title": "Growth",
        "price": 49,
        "isCustomizable": False,
        "multiCurrencyPrices": "",
    })


@pytest.fixture
def catalog_data():
    """Storefront features response in its native camelCase shape."""
    return {
        "coreFeatures": [
            {"id": 1, "name": "Inventory", "description": "Stock tracking", "basePrice": 20, "isRequired": True},
            {
                "id": 2,
                "name": "Reporting",
                "description": "Sales reports",
                "basePrice": 30,
                "isRequired": False,
                "multiCurrencyPrices": {"EUR": 27},
            },
        ],
        "addOns": [
            {"id": 10, "name": "SMS Alerts", "price": 15, "features": "sms, email", "dependencies": None},
            {
                "id": 11,
                "name": "Migration",
                "price": 25,
                "multiCurrencyPrices": {"EUR": 22.5},
                "features": ["import", ""],
                "dependencies": "Inventory",
            },
        ],
        "usageBasedPricing": [
            {
                "id": 20,
                "featureId": 1,
                "name": "API Calls",
                "unit": "calls",
                "minValue": 1000,
                "maxValue": 100000,
                "defaultValue": 1000,
                "pricePerUnit": 0.01,
            },
            {
                "id": 21,
                "featureId": 2,
                "name": "Seats",
                "unit": "seats",
                "minValue": 1,
                "maxValue": 50,
                "defaultValue": 1,
                "pricePerUnit": 2,
            },
        ],
    }


@pytest.fixture
def catalog(catalog_data):
    return Catalog.from_api(catalog_data)


@pytest.fixture
def usd():
    return CurrencyContext(code="USD", rate=1.0)


# ============================================
# COLLABORATORS
# ============================================

@pytest.fixture
def mock_persistence():
    """Persistence collaborator that accepts every submission."""
    persistence = AsyncMock()
    persistence.submit_selection = AsyncMock(return_value={"status": "ok"})
    return persistence


# ============================================
# CONTROLLERS
# ============================================

@pytest.fixture
def controller(custom_package, catalog, usd, mock_persistence, test_config):
    """Controller for the customizable package."""
    from configurator.wizard.controller import ConfigurationController

    return ConfigurationController(
        package=custom_package,
        catalog=catalog,
        currency=usd,
        persistence=mock_persistence,
        config=test_config,
        session_id="test-session",
    )


@pytest.fixture
def standard_controller(standard_package, catalog, usd, mock_persistence, test_config):
    """Controller for the standard package (add-ons only)."""
    from configurator.wizard.controller import ConfigurationController

    return ConfigurationController(
        package=standard_package,
        catalog=Catalog(add_ons=catalog.add_ons),
        currency=usd,
        persistence=mock_persistence,
        config=test_config,
        session_id="test-standard",
    )
