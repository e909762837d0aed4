"""Shared fixtures: a freshly seeded store and an app built around it."""

from typing import Any, Dict

import pytest
from fastapi.testclient import TestClient

from ppa_deals_api.app.core.db import init_db
from ppa_deals_api.app.main import create_app
from ppa_deals_api.app.services.deal_service import DealStore


@pytest.fixture
def store() -> DealStore:
    return init_db(seed=True)


@pytest.fixture
def client(store: DealStore) -> TestClient:
    return TestClient(create_app(store=store))


@pytest.fixture
def valid_payload() -> Dict[str, Any]:
    """A complete deal payload as a client would send it."""
    return {
        "seller": "Wind Farm Ltd",
        "buyer": "Data Centre Inc",
        "country": "Ireland",
        "technology": "Onshore Wind",
        "capacity": "75",
        "term": "15 years",
        "date": "2021-08-01",
    }
