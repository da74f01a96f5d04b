"""
JSON-backed record store for the customer analysis system.

This module provides the data access layer consumed by the orchestrator.
Reads come from JSON fixture files; offers written through `persist` are
kept in memory and, optionally, written back to `offers.json`.

Design decisions:
- Fixtures are lazily loaded on first access
- Lookups go through `find(kind, id)` and raise LookupFailure on a miss
- Offers are keyed by (product, customer) so persisting twice is idempotent
- No locking: the store is owned by a single caller at a time
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional, Protocol, TypeVar

from pydantic import BaseModel

from shared.errors import LookupFailure, PersistenceFailure
from shared.models import Customer, Offer, Product, Purchase

logger = logging.getLogger("data_store")

EntityT = TypeVar("EntityT", bound=BaseModel)


class RecordStore(Protocol):
    """Durable lookup and write of entities."""

    def find(self, kind: type[EntityT], entity_id: Any) -> EntityT:
        """Return the entity of `kind` with `entity_id` or raise LookupFailure."""
        ...

    def persist(self, entity: BaseModel) -> None:
        """Durably store `entity` or raise PersistenceFailure."""
        ...


class DataStore:
    """
    Central data store that loads JSON fixtures and records offers.

    Fixture files in the data directory:
    - customers.json: list of Customer records
    - products.json: list of Product records
    - purchases.json: list of {customer_id, product_id} records
    - offers.json: written by `persist` when write_through is enabled
    """

    OFFERS_FILE = "offers.json"

    def __init__(self, data_dir: Optional[Path] = None, write_through: bool = False):
        """
        Initialize the data store.

        Args:
            data_dir: Path to the data directory containing JSON fixtures.
                     Defaults to ./data relative to project root.
            write_through: If True, every persisted offer is also written
                     to offers.json in the data directory.
        """
        if data_dir is None:
            data_dir = Path(__file__).parent.parent / "data"

        self.data_dir = Path(data_dir)
        self.write_through = write_through

        self._customers: Optional[dict[int, Customer]] = None
        self._products: Optional[dict[int, Product]] = None
        self._purchases: Optional[list[Purchase]] = None
        self._offers: Optional[dict[str, Offer]] = None

    # =========================================================================
    # Data Loading (lazy)
    # =========================================================================

    def _load_json(self, filename: str) -> list[dict]:
        """Load a JSON fixture file."""
        filepath = self.data_dir / filename
        if not filepath.exists():
            return []
        with open(filepath, "r") as f:
            return json.load(f)

    def _ensure_customers_loaded(self):
        if self._customers is None:
            data = self._load_json("customers.json")
            self._customers = {c["id"]: Customer(**c) for c in data}

    def _ensure_products_loaded(self):
        if self._products is None:
            data = self._load_json("products.json")
            self._products = {p["id"]: Product(**p) for p in data}

    def _ensure_purchases_loaded(self):
        if self._purchases is None:
            data = self._load_json("purchases.json")
            self._purchases = [Purchase(**p) for p in data]

    def _ensure_offers_loaded(self):
        """
        Offers start empty unless write-through left a previous file behind.

        Raises:
            PersistenceFailure: If that file cannot be read or parsed
        """
        if self._offers is None:
            try:
                data = self._load_json(self.OFFERS_FILE) if self.write_through else []
                offers = [Offer(**o) for o in data]
            except (OSError, ValueError, TypeError) as e:
                # ValueError covers JSONDecodeError and pydantic's ValidationError
                raise PersistenceFailure(
                    f"Failed to load {self.data_dir / self.OFFERS_FILE}: {e}"
                ) from e
            self._offers = {offer.key: offer for offer in offers}

    # =========================================================================
    # Record Store Contract
    # =========================================================================

    def find(self, kind: type[EntityT], entity_id: Any) -> EntityT:
        """
        Look up an entity by kind and id.

        Args:
            kind: The model class to look up (Customer, Product or Offer)
            entity_id: Identifier of the entity; for offers this is Offer.key

        Raises:
            LookupFailure: If the kind is not stored here or the id is unknown
        """
        if kind is Customer:
            self._ensure_customers_loaded()
            entity = self._customers.get(entity_id)
        elif kind is Product:
            self._ensure_products_loaded()
            entity = self._products.get(entity_id)
        elif kind is Offer:
            self._ensure_offers_loaded()
            entity = self._offers.get(entity_id)
        else:
            raise LookupFailure(
                getattr(kind, "__name__", str(kind)),
                entity_id,
                message=f"Unsupported entity kind: {kind!r}",
            )

        if entity is None:
            logger.debug(f"{kind.__name__} {entity_id!r} not found")
            raise LookupFailure(kind.__name__, entity_id)
        return entity

    def persist(self, entity: BaseModel) -> None:
        """
        Durably store an entity.

        Only offers are writable; catalog and customer data are read-only
        fixtures.

        Raises:
            PersistenceFailure: If the entity is not an Offer or the
                offers file cannot be read or written; the offer is
                not stored in that case
        """
        if not isinstance(entity, Offer):
            raise PersistenceFailure(
                f"Cannot persist {type(entity).__name__}: only offers are writable"
            )

        self._ensure_offers_loaded()
        offers = {**self._offers, entity.key: entity}

        # The offer only becomes visible once the file write has succeeded
        if self.write_through:
            self._write_offers(offers)

        self._offers = offers
        logger.info(f"Persisted {entity}")

    def _write_offers(self, offers: dict[str, Offer]) -> None:
        filepath = self.data_dir / self.OFFERS_FILE
        payload = [offer.model_dump(mode="json") for offer in offers.values()]
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            with open(filepath, "w") as f:
                json.dump(payload, f, indent=2)
        except OSError as e:
            raise PersistenceFailure(f"Failed to write {filepath}: {e}") from e

    # =========================================================================
    # Customer Operations
    # =========================================================================

    def get_customer(self, customer_id: int) -> Optional[Customer]:
        """Get a customer by ID, or None."""
        self._ensure_customers_loaded()
        return self._customers.get(customer_id)

    def get_customers(self) -> list[Customer]:
        """Get all customers in fixture order."""
        self._ensure_customers_loaded()
        return list(self._customers.values())

    # =========================================================================
    # Product Operations
    # =========================================================================

    def get_product(self, product_id: int) -> Optional[Product]:
        """Get a product by ID, or None."""
        self._ensure_products_loaded()
        return self._products.get(product_id)

    def get_products(self) -> list[Product]:
        self._ensure_products_loaded()
        return list(self._products.values())

    def get_products_in_category(self, category: str) -> list[Product]:
        self._ensure_products_loaded()
        return [p for p in self._products.values() if p.category == category]

    # =========================================================================
    # Purchase Operations
    # =========================================================================

    def get_purchases(self) -> list[Purchase]:
        self._ensure_purchases_loaded()
        return list(self._purchases)

    def get_buyers_of(self, product_ids: set[int]) -> list[int]:
        """
        Customer IDs who bought any of the given products.

        Returned in first-purchase order, without duplicates.
        """
        self._ensure_purchases_loaded()
        buyers: list[int] = []
        for purchase in self._purchases:
            if purchase.product_id in product_ids and purchase.customer_id not in buyers:
                buyers.append(purchase.customer_id)
        return buyers

    # =========================================================================
    # Offer Operations
    # =========================================================================

    def get_offers(self) -> list[Offer]:
        """Get all persisted offers in persist order."""
        self._ensure_offers_loaded()
        return list(self._offers.values())

    def get_offers_for_product(self, product_id: int) -> list[Offer]:
        self._ensure_offers_loaded()
        return [o for o in self._offers.values() if o.product.id == product_id]

    # =========================================================================
    # Utility Methods
    # =========================================================================

    def reload(self):
        """
        Force reload all data from JSON files.

        In-memory offers are discarded unless write-through saved them.
        """
        self._customers = None
        self._products = None
        self._purchases = None
        self._offers = None


# Module-level singleton for convenience
# In tests, create a new DataStore instance with test fixtures
_default_store: Optional[DataStore] = None


def get_data_store() -> DataStore:
    """Get the default data store singleton."""
    global _default_store
    if _default_store is None:
        _default_store = DataStore()
    return _default_store
