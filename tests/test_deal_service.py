"""Tests for the in-memory deal store."""

import threading

import pytest

from ppa_deals_api.app.core.exceptions import DealNotFoundError
from ppa_deals_api.app.services.deal_service import DealStore, loosely_equal, parse_int


def ids(deals):
    return [deal.id for deal in deals]


class TestExists:

    def test_known_and_unknown_ids(self, store: DealStore) -> None:
        assert store.exists(1)
        assert store.exists(5)
        assert not store.exists(6)
        assert not store.exists(0)

    def test_string_id_matches_integer(self, store: DealStore) -> None:
        assert store.exists("1")
        assert store.exists(" 3 ")

    def test_non_numeric_id_matches_nothing(self, store: DealStore) -> None:
        assert not store.exists("abc")
        assert not store.exists(None)
        assert not store.exists("1.5")


class TestList:

    def test_no_filter_returns_everything_in_order(self, store: DealStore) -> None:
        assert ids(store.list()) == [1, 2, 3, 4, 5]
        assert ids(store.list({})) == [1, 2, 3, 4, 5]

    def test_filter_by_technology(self, store: DealStore) -> None:
        assert ids(store.list({"technology": "Solar"})) == [1, 4, 5]

    def test_filters_are_combined(self, store: DealStore) -> None:
        assert ids(store.list({"seller": "Generator X", "technology": "Solar"})) == [4]

    def test_numeric_field_matches_query_string(self, store: DealStore) -> None:
        assert ids(store.list({"capacity": "500"})) == [2]
        assert ids(store.list({"id": "3"})) == [3]

    def test_unknown_key_excludes_everything(self, store: DealStore) -> None:
        assert store.list({"colour": "green"}) == []

    def test_no_match_is_empty(self, store: DealStore) -> None:
        assert store.list({"country": "Atlantis"}) == []

    def test_returned_list_is_a_copy(self, store: DealStore) -> None:
        deals = store.list()
        deals.clear()
        assert len(store) == 5


class TestGetById:

    def test_returns_single_deal(self, store: DealStore) -> None:
        deals = store.get_by_id(3)
        assert len(deals) == 1
        deal = deals[0]
        assert deal.seller == "Another Power Seller"
        assert deal.country == "France"
        assert deal.technology == "Onshore Wind"

    def test_missing_id_returns_empty(self, store: DealStore) -> None:
        assert store.get_by_id(42) == []
        assert store.get_by_id("not-a-number") == []

    def test_leading_integer_is_parsed(self, store: DealStore) -> None:
        assert ids(store.get_by_id("2")) == [2]
        assert ids(store.get_by_id("2abc")) == [2]


class TestValidate:

    def test_empty_payload_is_invalid(self) -> None:
        assert not DealStore.validate({})

    def test_complete_payload_is_valid(self, valid_payload) -> None:
        assert DealStore.validate(valid_payload)

    def test_extra_fields_are_ignored(self, valid_payload) -> None:
        valid_payload["comment"] = "extra"
        assert DealStore.validate(valid_payload)

    @pytest.mark.parametrize("field", ["seller", "buyer", "country", "technology", "capacity", "term", "date"])
    def test_missing_field_is_invalid(self, valid_payload, field) -> None:
        del valid_payload[field]
        assert not DealStore.validate(valid_payload)

    @pytest.mark.parametrize("value", ["", "   ", None, []])
    def test_empty_value_is_invalid(self, valid_payload, value) -> None:
        valid_payload["buyer"] = value
        assert not DealStore.validate(valid_payload)

    def test_numeric_capacity_is_valid(self, valid_payload) -> None:
        valid_payload["capacity"] = 0
        assert DealStore.validate(valid_payload)

    def test_non_numeric_capacity_is_invalid(self, valid_payload) -> None:
        valid_payload["capacity"] = "lots"
        assert not DealStore.validate(valid_payload)

    def test_non_mapping_is_invalid(self) -> None:
        assert not DealStore.validate(["seller"])

    def test_capacity_with_too_many_digits_is_invalid(self, valid_payload) -> None:
        valid_payload["capacity"] = "1" * 5000
        assert DealStore.validate(valid_payload) is False

    @pytest.mark.parametrize("value", [{"a": 1}, ["x"], True])
    def test_non_scalar_value_is_invalid(self, valid_payload, value) -> None:
        valid_payload["seller"] = value
        assert not DealStore.validate(valid_payload)

    def test_numeric_text_field_is_stored_as_text(self, store: DealStore, valid_payload) -> None:
        valid_payload["term"] = 12
        assert DealStore.validate(valid_payload)
        assert store.create(valid_payload).term == "12"


class TestCreate:

    def test_assigns_next_id_and_appends(self, store: DealStore, valid_payload) -> None:
        deal = store.create(valid_payload)
        assert deal.id == 6
        assert len(store) == 6
        assert store.list()[-1] == deal

    def test_capacity_is_truncated_to_int(self, store: DealStore, valid_payload) -> None:
        valid_payload["capacity"] = "75.9"
        assert store.create(valid_payload).capacity == 75

    def test_id_follows_maximum_not_count(self, store: DealStore, valid_payload) -> None:
        store.delete_by_id(2)
        assert store.create(valid_payload).id == 6

    def test_empty_store_starts_at_one(self, valid_payload) -> None:
        store = DealStore()
        assert store.create(valid_payload).id == 1
        assert store.create(valid_payload).id == 2

    def test_created_deal_can_be_fetched(self, store: DealStore, valid_payload) -> None:
        deal = store.create(valid_payload)
        assert store.get_by_id(deal.id) == [deal]


class TestUpdate:

    def test_replaces_fields_and_keeps_id(self, store: DealStore, valid_payload) -> None:
        deal = store.update_by_id(1, valid_payload)
        assert deal.id == 1
        assert deal.seller == "Wind Farm Ltd"
        assert deal.capacity == 75
        assert len(store) == 5
        assert store.get_by_id(1) == [deal]
        assert ids(store.list()) == [1, 2, 3, 4, 5]

    def test_string_id_is_stored_as_int(self, store: DealStore, valid_payload) -> None:
        deal = store.update_by_id("2", valid_payload)
        assert deal.id == 2
        assert isinstance(deal.id, int)

    def test_missing_id_raises(self, store: DealStore, valid_payload) -> None:
        with pytest.raises(DealNotFoundError):
            store.update_by_id(99, valid_payload)
        assert ids(store.list()) == [1, 2, 3, 4, 5]


class TestDelete:

    def test_removes_only_that_deal(self, store: DealStore) -> None:
        remaining = store.delete_by_id(2)
        assert ids(remaining) == [1, 3, 4, 5]
        assert not store.exists(2)

    def test_second_delete_is_a_no_op(self, store: DealStore) -> None:
        first = store.delete_by_id(2)
        second = store.delete_by_id(2)
        assert first == second

    def test_string_id(self, store: DealStore) -> None:
        assert ids(store.delete_by_id("5")) == [1, 2, 3, 4]


class TestHelpers:

    @pytest.mark.parametrize("value,expected", [
        (15, 15),
        ("15", 15),
        ("15.7", 15),
        ("15MW", 15),
        (" -3", -3),
        (15.9, 15),
        ("MW15", None),
        ("", None),
        (None, None),
        (True, None),
        ("9" * 5000, None),
    ])
    def test_parse_int(self, value, expected) -> None:
        assert parse_int(value) == expected

    def test_loosely_equal(self) -> None:
        assert loosely_equal(15, "15")
        assert loosely_equal(15, "15.0")
        assert loosely_equal("Solar", "Solar")
        assert not loosely_equal("Solar", "solar")
        assert not loosely_equal(15, "fifteen")
        assert not loosely_equal(None, "x")


class TestConcurrency:

    def test_parallel_creates_get_unique_ids(self, valid_payload) -> None:
        store = DealStore()
        workers, per_worker = 8, 200

        def create_many() -> None:
            for _ in range(per_worker):
                store.create(valid_payload)

        threads = [threading.Thread(target=create_many) for _ in range(workers)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        deal_ids = ids(store.list())
        assert len(store) == workers * per_worker
        assert len(set(deal_ids)) == workers * per_worker
        assert sorted(deal_ids) == list(range(1, workers * per_worker + 1))
