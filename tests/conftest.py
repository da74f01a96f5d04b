"""
Shared pytest fixtures for the customer analysis tests.

These fixtures provide consistent test data and reset state between tests.
"""

import pytest
from pathlib import Path

from customer_analysis.analysis import CustomerAnalysis
from customer_analysis.error_handler import LoggingFailureHandler
from customer_analysis.strategies import default_strategies
from shared.channels import NewsListChannel
from shared.data_store import DataStore
from shared.models import Customer, Product


@pytest.fixture
def data_dir() -> Path:
    """Path to the fixture data directory."""
    return Path(__file__).parent.parent / "data"


@pytest.fixture
def data_store(data_dir: Path) -> DataStore:
    """
    Fresh DataStore instance for each test.

    Uses the real JSON fixtures but creates a new instance
    so tests don't interfere with each other.
    """
    return DataStore(data_dir=data_dir)


@pytest.fixture
def news_list() -> NewsListChannel:
    """Fresh NewsListChannel for each test."""
    return NewsListChannel(fail_rate=0.0)


@pytest.fixture
def failure_handler() -> LoggingFailureHandler:
    return LoggingFailureHandler()


@pytest.fixture
def analysis(
    data_store: DataStore,
    news_list: NewsListChannel,
    failure_handler: LoggingFailureHandler,
) -> CustomerAnalysis:
    """CustomerAnalysis wired to the fixture data and default strategies."""
    return CustomerAnalysis(
        strategies=default_strategies(data_store),
        store=data_store,
        channel=news_list,
        failure_handler=failure_handler,
    )


# =============================================================================
# Entity Fixtures
# =============================================================================

@pytest.fixture
def alice() -> Customer:
    """Alice Johnson (id 1) - bought the router, credit 5000."""
    return Customer(id=1, name="Alice Johnson", credit=5000)


@pytest.fixture
def carol() -> Customer:
    """Carol White (id 3) - bought the router, richest customer."""
    return Customer(id=3, name="Carol White", credit=12000)


@pytest.fixture
def product() -> Product:
    """A bare product, as the orchestrator sees it."""
    return Product(id=0)


@pytest.fixture
def mesh_kit_product_id() -> int:
    """Mesh WiFi Kit - networking; Alice and Carol bought the router."""
    return 2


@pytest.fixture
def monitor_product_id() -> int:
    """4K Monitor Pro - no purchase history in 'displays', falls back to credit."""
    return 4


@pytest.fixture
def gift_card_product_id() -> int:
    """Gift Card - no category and no price, every default strategy fails."""
    return 5
