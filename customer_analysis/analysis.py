"""
Customer analysis orchestrator.

CustomerAnalysis ties the collaborators together:

1. Look the product up in the record store
2. Ask the analysis strategies, in order, for interested customers
3. For each customer, build an offer, persist it, then announce it

Failure handling:
- AnalysisFailure raised by a strategy is handed to the failure handler and
  the next strategy is tried with the same product
- If every strategy fails, no customers are returned and no offers are made
- Lookup, persistence and notification failures propagate to the caller
- An offer is only announced after persist has returned
"""

import logging
from typing import Any, Sequence

from customer_analysis.error_handler import FailureHandler
from customer_analysis.strategies import AnalysisStrategy
from shared.channels import NotificationChannel
from shared.data_store import RecordStore
from shared.errors import AnalysisFailure
from shared.models import Customer, Offer, Product

logger = logging.getLogger("customer_analysis")


def _strategy_name(strategy: AnalysisStrategy) -> str:
    return getattr(strategy, "name", type(strategy).__name__)


class CustomerAnalysis:
    """
    Finds customers interested in a product and makes them offers.

    Example usage:
        analysis = CustomerAnalysis(
            strategies=default_strategies(store),
            store=store,
            channel=NewsListChannel(),
            failure_handler=LoggingFailureHandler(),
        )
        analysis.prepare_offer_for_product(1)
    """

    def __init__(
        self,
        strategies: Sequence[AnalysisStrategy],
        store: RecordStore,
        channel: NotificationChannel,
        failure_handler: FailureHandler,
    ):
        """
        Args:
            strategies: Strategies to try, in order; fixed for this instance
            store: Record store used to look up products and persist offers
            channel: Channel that announces persisted offers
            failure_handler: Receives every AnalysisFailure a strategy raises
        """
        self.strategies = tuple(strategies)
        self.store = store
        self.channel = channel
        self.failure_handler = failure_handler

    def find_interesting_customers(self, product: Product) -> list[Customer]:
        """
        Return the customers chosen by the first strategy that succeeds.

        Strategies after the successful one are not invoked. Each failing
        strategy's AnalysisFailure goes to the failure handler unwrapped.

        Returns:
            The successful strategy's result as-is, or an empty list if
            every strategy failed
        """
        for strategy in self.strategies:
            try:
                customers = strategy.interesting_customers(product)
            except AnalysisFailure as failure:
                logger.info(f"Strategy {_strategy_name(strategy)} failed, trying next")
                self.failure_handler.handle(failure)
                continue

            logger.info(
                f"Strategy {_strategy_name(strategy)} selected "
                f"{len(customers)} customers"
            )
            return customers

        logger.warning(
            f"All {len(self.strategies)} strategies failed for product "
            f"{getattr(product, 'id', product)!r}; no customers selected"
        )
        return []

    def prepare_offer_for_product(self, product_id: Any) -> None:
        """
        Make an offer to every interested customer for a product.

        Offers are handled one at a time: persist, then send.

        Raises:
            LookupFailure: If the product does not exist
            PersistenceFailure: If an offer cannot be stored; that offer is
                not announced and no further offers are made
            NotificationFailure: If the channel fails to announce an offer
        """
        product = self.store.find(Product, product_id)
        customers = self.find_interesting_customers(product)

        for customer in customers:
            offer = Offer(customer=customer, product=product)
            self.store.persist(offer)
            self.channel.send(offer)

        logger.info(f"Prepared {len(customers)} offers for product {product_id!r}")
