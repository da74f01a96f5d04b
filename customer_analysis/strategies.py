"""
Analysis strategies: given a product, decide which customers are interested.

A strategy is anything with an `interesting_customers(product)` method that
returns a list of customers or raises AnalysisFailure. The implementations
here are simple reference strategies over the fixture data; real deployments
plug in their own.
"""

import logging
from typing import Iterable, Protocol

from shared.data_store import DataStore
from shared.errors import AnalysisFailure, CannotInterpretInput
from shared.models import Customer, Product

logger = logging.getLogger("analysis_strategies")


class AnalysisStrategy(Protocol):
    """Maps a product to a list of interested customers, or fails."""

    def interesting_customers(self, product: Product) -> list[Customer]:
        """
        Raises:
            AnalysisFailure: If no customer list can be produced
        """
        ...


class PurchaseHistoryStrategy:
    """
    Customers who bought another product from the same category.

    Customers who already own the product are left out. Results follow the
    order of the purchase history.
    """

    name = "purchase-history"

    def __init__(self, data_store: DataStore):
        self.data_store = data_store

    def interesting_customers(self, product: Product) -> list[Customer]:
        if not product.category:
            raise CannotInterpretInput(
                "Product has no category", strategy=self.name, product_id=product.id
            )

        related = {
            p.id for p in self.data_store.get_products_in_category(product.category)
            if p.id != product.id
        }
        buyers = self.data_store.get_buyers_of(related)
        if not buyers:
            raise CannotInterpretInput(
                f"No purchase history for category '{product.category}'",
                strategy=self.name,
                product_id=product.id,
            )

        owners = set(self.data_store.get_buyers_of({product.id}))
        customers = []
        for customer_id in buyers:
            if customer_id in owners:
                continue
            customer = self.data_store.get_customer(customer_id)
            if customer is not None:
                customers.append(customer)

        logger.info(
            f"{self.name}: {len(customers)} customers for {product.display_name} "
            f"(category '{product.category}')"
        )
        return customers


class CreditThresholdStrategy:
    """
    Customers who can afford the product, richest first.

    A customer qualifies when their credit is at least price * min_ratio.
    """

    name = "credit-threshold"

    def __init__(self, data_store: DataStore, min_ratio: float = 1.0):
        if min_ratio <= 0:
            raise ValueError(f"min_ratio must be positive, got {min_ratio}")
        self.data_store = data_store
        self.min_ratio = min_ratio

    def interesting_customers(self, product: Product) -> list[Customer]:
        if product.price is None:
            raise CannotInterpretInput(
                "Product has no price", strategy=self.name, product_id=product.id
            )

        threshold = product.price * self.min_ratio
        customers = [c for c in self.data_store.get_customers() if c.credit >= threshold]
        if not customers:
            raise AnalysisFailure(
                f"No customer has credit of at least {threshold:.2f}",
                strategy=self.name,
                product_id=product.id,
            )

        customers.sort(key=lambda c: c.credit, reverse=True)
        logger.info(f"{self.name}: {len(customers)} customers for {product.display_name}")
        return customers


class StaticStrategy:
    """Always returns the same customers. Handy for demos and tests."""

    name = "static"

    def __init__(self, customers: Iterable[Customer]):
        self.customers = list(customers)

    def interesting_customers(self, product: Product) -> list[Customer]:
        return list(self.customers)


def default_strategies(data_store: DataStore) -> list[AnalysisStrategy]:
    """The default fallback chain: purchase history first, then credit."""
    return [
        PurchaseHistoryStrategy(data_store),
        CreditThresholdStrategy(data_store),
    ]
