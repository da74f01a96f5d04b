"""
Tests for the DataStore.

These tests verify that the data store loads the JSON fixtures and
honours the find/persist contract used by the orchestrator.
"""

import json

import pytest

from shared.data_store import DataStore
from shared.errors import LookupFailure, PersistenceFailure
from shared.models import Customer, Offer, Product, Purchase


class TestDataStoreFind:
    """Tests for find(kind, id)."""

    def test_find_product(self, data_store: DataStore, mesh_kit_product_id: int):
        product = data_store.find(Product, mesh_kit_product_id)

        assert product.id == mesh_kit_product_id
        assert product.name == "Mesh WiFi Kit"
        assert product.category == "networking"
        assert product.price == 399.0

    def test_find_customer(self, data_store: DataStore, alice: Customer):
        assert data_store.find(Customer, 1) == alice

    def test_find_missing_product_raises(self, data_store: DataStore):
        with pytest.raises(LookupFailure) as exc_info:
            data_store.find(Product, 999)

        assert exc_info.value.kind == "Product"
        assert exc_info.value.entity_id == 999
        assert "not found" in str(exc_info.value)

    def test_find_unsupported_kind_raises(self, data_store: DataStore):
        with pytest.raises(LookupFailure) as exc_info:
            data_store.find(Purchase, 1)

        assert "Unsupported" in str(exc_info.value)

    def test_find_persisted_offer(self, data_store: DataStore, alice: Customer):
        offer = Offer(customer=alice, product=Product(id=2))
        data_store.persist(offer)

        assert data_store.find(Offer, offer.key) == offer


class TestDataStoreReads:
    """Tests for the read helpers."""

    def test_get_customers(self, data_store: DataStore):
        customers = data_store.get_customers()

        assert len(customers) == 5
        assert [c.id for c in customers] == [1, 2, 3, 4, 5]

    def test_get_nonexistent_customer(self, data_store: DataStore):
        assert data_store.get_customer(999) is None

    def test_get_products_in_category(self, data_store: DataStore):
        products = data_store.get_products_in_category("networking")

        assert {p.id for p in products} == {1, 2}

    def test_get_buyers_of(self, data_store: DataStore):
        # Router (1) was bought by Alice then Carol
        assert data_store.get_buyers_of({1}) == [1, 3]

    def test_get_buyers_of_deduplicates(self, data_store: DataStore):
        assert data_store.get_buyers_of({1, 2, 3}) == [1, 2, 3, 5, 4]

    def test_missing_data_dir_is_empty(self, tmp_path):
        store = DataStore(data_dir=tmp_path / "nothing-here")

        assert store.get_customers() == []
        assert store.get_purchases() == []


class TestDataStorePersist:
    """Tests for persist(entity)."""

    def test_persist_offer(self, data_store: DataStore, alice: Customer):
        offer = Offer(customer=alice, product=Product(id=2))

        data_store.persist(offer)

        assert data_store.get_offers() == [offer]
        assert data_store.get_offers_for_product(2) == [offer]
        assert data_store.get_offers_for_product(3) == []

    def test_persist_is_idempotent(self, data_store: DataStore, alice: Customer):
        offer = Offer(customer=alice, product=Product(id=2))

        data_store.persist(offer)
        data_store.persist(Offer(customer=alice, product=Product(id=2)))

        assert len(data_store.get_offers()) == 1

    def test_persist_non_offer_raises(self, data_store: DataStore, alice: Customer):
        with pytest.raises(PersistenceFailure):
            data_store.persist(alice)

    def test_offers_are_in_memory_by_default(self, data_store: DataStore, data_dir, alice):
        data_store.persist(Offer(customer=alice, product=Product(id=2)))

        assert not (data_dir / DataStore.OFFERS_FILE).exists()

    def test_write_through(self, tmp_path, alice: Customer, carol: Customer):
        store = DataStore(data_dir=tmp_path, write_through=True)
        first = Offer(customer=alice, product=Product(id=2, name="Mesh WiFi Kit"))
        second = Offer(customer=carol, product=Product(id=2, name="Mesh WiFi Kit"))

        store.persist(first)
        store.persist(second)

        saved = json.loads((tmp_path / DataStore.OFFERS_FILE).read_text())
        assert [o["customer"]["id"] for o in saved] == [1, 3]

        # A fresh store picks the offers back up
        reopened = DataStore(data_dir=tmp_path, write_through=True)
        assert reopened.get_offers() == [first, second]

    def test_write_failure_raises_persistence_failure(self, tmp_path, alice: Customer):
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("")
        store = DataStore(data_dir=blocker, write_through=True)

        offer = Offer(customer=alice, product=Product(id=2))

        with pytest.raises(PersistenceFailure):
            store.persist(offer)

        # A failed persist leaves nothing behind
        assert store.get_offers() == []
        with pytest.raises(LookupFailure):
            store.find(Offer, offer.key)

    def test_failed_write_is_not_saved_by_later_persist(
        self, tmp_path, monkeypatch, alice: Customer, carol: Customer
    ):
        store = DataStore(data_dir=tmp_path, write_through=True)
        first = Offer(customer=alice, product=Product(id=2))
        second = Offer(customer=carol, product=Product(id=2))

        def broken_open(*args, **kwargs):
            raise OSError("disk full")

        monkeypatch.setattr("shared.data_store.open", broken_open, raising=False)
        with pytest.raises(PersistenceFailure):
            store.persist(first)
        monkeypatch.undo()

        store.persist(second)

        saved = json.loads((tmp_path / DataStore.OFFERS_FILE).read_text())
        assert [o["customer"]["id"] for o in saved] == [3]
        assert store.get_offers() == [second]

    @pytest.mark.parametrize("contents", [
        "{not json",
        '[{"customer": {"id": 1}}]',
        '["not an offer"]',
    ])
    def test_unreadable_offers_file_raises_persistence_failure(
        self, tmp_path, alice: Customer, contents: str
    ):
        (tmp_path / DataStore.OFFERS_FILE).write_text(contents)
        store = DataStore(data_dir=tmp_path, write_through=True)

        with pytest.raises(PersistenceFailure) as exc_info:
            store.persist(Offer(customer=alice, product=Product(id=2)))

        assert DataStore.OFFERS_FILE in str(exc_info.value)
        # The broken file is left untouched
        assert (tmp_path / DataStore.OFFERS_FILE).read_text() == contents

    def test_reload_discards_in_memory_offers(self, data_store: DataStore, alice: Customer):
        data_store.persist(Offer(customer=alice, product=Product(id=2)))

        data_store.reload()

        assert data_store.get_offers() == []
