"""
In‑memory store for PPA deals.

``DealStore`` owns an ordered list of deal records and exposes the
operations used by the API: existence checks, filtered listing,
lookup by id, payload validation, creation, full replacement and
deletion.  Identifiers are compared loosely, so the string ``"1"``
matches the stored integer ``1``; anything that does not look like an
integer matches no deal.

Every operation runs under a single lock so that handlers executed on
worker threads never interleave mutations of the collection.
"""

from __future__ import annotations

import logging
import re
import threading
from typing import Any, Dict, Iterable, List, Mapping, Optional

from ppa_deals_api.app.core.exceptions import DealNotFoundError
from ppa_deals_api.app.schemas.deal import DealRead

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("seller", "buyer", "country", "technology", "capacity", "term", "date")

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_int(value: Any) -> Optional[int]:
    """Parse the leading integer of ``value``.

    Strings are truncated at the first non‑digit (``"15.7"`` and
    ``"15MW"`` both give ``15``), floats are truncated towards zero.
    Returns ``None`` when no integer can be read.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            return None
        return int(value)
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        if match:
            try:
                return int(match.group(1))
            except ValueError:
                # past the interpreter's int/str digit limit
                return None
    return None


def coerce_id(value: Any) -> Optional[int]:
    """Return ``value`` as an integer id, or ``None`` if it is not one."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
        return int(number) if number.is_integer() else None
    return None


def loosely_equal(stored: Any, expected: Any) -> bool:
    """Compare a stored field value with a (usually string) query value.

    Numbers are compared numerically against numeric strings, so
    ``15 == "15"`` and ``15 == "15.0"``; everything else is compared by
    its string form.
    """
    if stored is None:
        return False
    if isinstance(stored, (int, float)) and not isinstance(stored, bool) and isinstance(expected, str):
        try:
            return float(expected.strip()) == stored
        except ValueError:
            return False
    return stored == expected or str(stored) == str(expected)


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict, set)):
        return len(value) == 0
    return False


def _is_scalar(value: Any) -> bool:
    return isinstance(value, (str, int, float)) and not isinstance(value, bool)


class DealStore:
    """Owns the deal collection and serialises access to it."""

    def __init__(self, deals: Optional[Iterable[Mapping[str, Any]]] = None) -> None:
        self._lock = threading.RLock()
        self._deals: List[DealRead] = []
        for deal in deals or ():
            self._deals.append(DealRead(**dict(deal)))

    def __len__(self) -> int:
        with self._lock:
            return len(self._deals)

    def exists(self, deal_id: Any) -> bool:
        """Return ``True`` if a deal with ``deal_id`` is stored."""
        wanted = coerce_id(deal_id)
        if wanted is None:
            return False
        with self._lock:
            return any(deal.id == wanted for deal in self._deals)

    def list(self, filters: Optional[Mapping[str, Any]] = None) -> List[DealRead]:
        """Return deals matching every ``field -> value`` pair in ``filters``.

        Without filters the whole collection is returned in insertion
        order.  A key that names no deal field matches nothing.
        """
        with self._lock:
            if not filters:
                return list(self._deals)
            return [deal for deal in self._deals if self._matches(deal, filters)]

    def get_by_id(self, deal_id: Any) -> List[DealRead]:
        """Return a list holding the deal with ``deal_id``, or an empty list."""
        wanted = parse_int(deal_id)
        if wanted is None:
            return []
        with self._lock:
            return [deal for deal in self._deals if deal.id == wanted]

    @staticmethod
    def validate(payload: Mapping[str, Any]) -> bool:
        """Check that every required field is present and non‑empty.

        Extra keys are ignored.  Values must be strings or numbers, and
        ``capacity`` must also yield an integer, since it is stored as one.
        """
        if not isinstance(payload, Mapping):
            return False
        for field in REQUIRED_FIELDS:
            if field not in payload or _is_empty(payload[field]):
                return False
            if not _is_scalar(payload[field]):
                return False
        return parse_int(payload["capacity"]) is not None

    def create(self, payload: Mapping[str, Any]) -> DealRead:
        """Append a new deal built from a validated payload and return it."""
        with self._lock:
            new_id = max((deal.id for deal in self._deals), default=0) + 1
            deal = self._build(new_id, payload)
            self._deals.append(deal)
        logger.info("Created deal %s", new_id)
        return deal

    def update_by_id(self, deal_id: Any, payload: Mapping[str, Any]) -> DealRead:
        """Replace every field of an existing deal, keeping its id.

        Raises ``DealNotFoundError`` when no deal has ``deal_id``.
        """
        wanted = coerce_id(deal_id)
        with self._lock:
            index = self._index_of(wanted)
            if index is None:
                raise DealNotFoundError()
            deal = self._build(wanted, payload)
            self._deals[index] = deal
        logger.info("Updated deal %s", wanted)
        return deal

    def delete_by_id(self, deal_id: Any) -> List[DealRead]:
        """Remove the deal with ``deal_id`` and return the remaining deals."""
        wanted = coerce_id(deal_id)
        with self._lock:
            before = len(self._deals)
            self._deals = [deal for deal in self._deals if deal.id != wanted]
            removed = before - len(self._deals)
            remaining = list(self._deals)
        if removed:
            logger.info("Deleted deal %s", wanted)
        return remaining

    def _index_of(self, deal_id: Optional[int]) -> Optional[int]:
        if deal_id is None:
            return None
        for index, deal in enumerate(self._deals):
            if deal.id == deal_id:
                return index
        return None

    @staticmethod
    def _matches(deal: DealRead, filters: Mapping[str, Any]) -> bool:
        record: Dict[str, Any] = deal.model_dump()
        for key, value in filters.items():
            if key not in record or not loosely_equal(record[key], value):
                return False
        return True

    @staticmethod
    def _build(deal_id: int, payload: Mapping[str, Any]) -> DealRead:
        return DealRead(
            id=deal_id,
            seller=str(payload["seller"]),
            buyer=str(payload["buyer"]),
            country=str(payload["country"]),
            technology=str(payload["technology"]),
            capacity=parse_int(payload["capacity"]),
            term=str(payload["term"]),
            date=str(payload["date"]),
        )
