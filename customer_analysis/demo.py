"""
Demonstration scripts for the customer analysis system.

These functions show strategy fallback and offer preparation in action.
Run them to see strategies being tried and offers being announced.
"""

import logging

from customer_analysis.analysis import CustomerAnalysis
from customer_analysis.error_handler import LoggingFailureHandler
from customer_analysis.strategies import default_strategies
from shared.channels import NewsListChannel
from shared.data_store import DataStore
from shared.models import Product

# Configure logging to see what's happening
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(name)-24s | %(levelname)-5s | %(message)s",
    datefmt="%H:%M:%S",
)


def _build_analysis() -> tuple[CustomerAnalysis, DataStore, NewsListChannel, LoggingFailureHandler]:
    data_store = DataStore()
    channel = NewsListChannel()
    failure_handler = LoggingFailureHandler()
    analysis = CustomerAnalysis(
        strategies=default_strategies(data_store),
        store=data_store,
        channel=channel,
        failure_handler=failure_handler,
    )
    return analysis, data_store, channel, failure_handler


def run_fallback_demo():
    """
    Demonstrate strategy fallback.

    Product 4 (4K Monitor Pro) has no purchase history in its category, so
    the purchase-history strategy fails and the credit strategy answers.
    Product 5 (Gift Card) has neither category nor price, so every strategy
    fails and no customers are selected.
    """
    print("\n" + "=" * 70)
    print("DEMO: Strategy Fallback")
    print("=" * 70 + "\n")

    analysis, data_store, _, failure_handler = _build_analysis()

    for product_id in (4, 5):
        product = data_store.find(Product, product_id)
        print("-" * 70)
        print(f"ACTION: Finding interesting customers for {product.display_name}")
        print("-" * 70 + "\n")

        customers = analysis.find_interesting_customers(product)

        print(f"\nSelected {len(customers)} customers:")
        for customer in customers:
            print(f"  - {customer.name} (credit {customer.credit})")
        print()

    print(f"Failures handled: {failure_handler.get_handled_count()}")
    for failure in failure_handler.handled:
        print(f"  - {type(failure).__name__}: {failure}")


def run_offers_demo():
    """
    Demonstrate offer preparation.

    Each offer is persisted in the data store and only then announced on
    the news list.
    """
    print("\n" + "=" * 70)
    print("DEMO: Prepare Offers for Mesh WiFi Kit (product 2)")
    print("=" * 70 + "\n")

    analysis, data_store, channel, _ = _build_analysis()

    analysis.prepare_offer_for_product(2)

    print("\n" + "-" * 70)
    print("RESULTS:")
    print("-" * 70)
    print(f"Offers persisted: {len(data_store.get_offers_for_product(2))}")
    print(f"Offers announced: {channel.get_sent_count()}")
    for msg in channel.sent_messages:
        print(f"  {msg}")


if __name__ == "__main__":
    run_fallback_demo()
    run_offers_demo()
