"""
In‑memory deal data and the store dependency for FastAPI routes.

There is no database: deals live in a ``DealStore`` created once per
application by ``init_db`` and kept on ``app.state``.  ``get_store``
hands that store to route handlers, so tests can build an app around
their own store.
"""

import logging
from copy import deepcopy
from typing import Any, Dict, List

from fastapi import Request

from ppa_deals_api.app.services.deal_service import DealStore

logger = logging.getLogger(__name__)


# Mock PPA deals loaded at startup.
SEED_DEALS: List[Dict[str, Any]] = [
    {
        "id": 1,
        "seller": "Generic Utility Co",
        "buyer": "Buyer Industries",
        "country": "Germany",
        "technology": "Solar",
        "capacity": 15,
        "term": "12 months",
        "date": "2021-07-07",
    },
    {
        "id": 2,
        "seller": "Generator X",
        "buyer": "XYZ Tech Corp",
        "country": "Belgium",
        "technology": "Offshore Wind",
        "capacity": 500,
        "term": "5 years",
        "date": "2021-07-07",
    },
    {
        "id": 3,
        "seller": "Another Power Seller",
        "buyer": "Large Corporate Co",
        "country": "France",
        "technology": "Onshore Wind",
        "capacity": 50,
        "term": "12 months",
        "date": "2021-07-06",
    },
    {
        "id": 4,
        "seller": "Generator X",
        "buyer": "Large Corporate Co",
        "country": "United Kingdom",
        "technology": "Solar",
        "capacity": 20,
        "term": "5 years",
        "date": "2021-07-06",
    },
    {
        "id": 5,
        "seller": "ABC Energy 123",
        "buyer": "XYZ Tech Corp",
        "country": "Spain",
        "technology": "Solar",
        "capacity": 150,
        "term": "10 years",
        "date": "2021-07-05",
    },
]


def init_db(seed: bool = True) -> DealStore:
    """Create a deal store, filled with the mock deals when ``seed`` is set."""
    store = DealStore(deepcopy(SEED_DEALS) if seed else None)
    logger.info("Initialised deal store with %d deals", len(store))
    return store


def get_store(request: Request) -> DealStore:
    """FastAPI dependency returning the application's deal store."""
    return request.app.state.deal_store
