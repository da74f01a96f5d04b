"""
FastAPI application for the customer analysis system.

This application provides:
1. Analysis endpoints to see which customers a product would be offered to
2. Offer endpoints that persist and announce offers for a product
3. Data endpoints for exploring the fixtures

Run with:
    uv run uvicorn api.main:app --reload

Then visit http://localhost:8000/docs for interactive API documentation.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional, Sequence

from fastapi import Depends, FastAPI, HTTPException
from pydantic import BaseModel

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(name)-24s | %(levelname)-5s | %(message)s",
    datefmt="%H:%M:%S",
)

from customer_analysis.analysis import CustomerAnalysis
from customer_analysis.error_handler import LoggingFailureHandler
from customer_analysis.strategies import AnalysisStrategy, default_strategies
from shared.channels import NewsListChannel
from shared.data_store import DataStore, get_data_store
from shared.errors import LookupFailure, NotificationFailure, PersistenceFailure
from shared.models import Customer, Offer, Product

logger = logging.getLogger("customer_analysis_api")


# Response models
class OffersResult(BaseModel):
    """Offers recorded for a product after preparing them."""
    product_id: int
    offers: list[Offer]
    announced: int


class FailureRecord(BaseModel):
    """A strategy failure seen by the failure handler."""
    kind: str
    strategy: Optional[str]
    product_id: Optional[int]
    message: str


# Application lifespan
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown."""
    logging.info("Starting Customer Analysis API")
    yield
    logging.info("Shutting down")


app = FastAPI(
    title="Customer Analysis",
    description="""
    Select customers interested in a product, then persist and announce an
    offer for each of them.

    Analysis strategies are tried in order; the first one that succeeds
    decides the customers. Failed strategies are recorded and can be
    inspected under `/failures`.
    """,
    version="1.0.0",
    lifespan=lifespan,
)

# Module-level instances (would use proper DI in production)
_data_store: Optional[DataStore] = None
_channel: Optional[NewsListChannel] = None
_failure_handler: Optional[LoggingFailureHandler] = None
_strategies: Optional[Sequence[AnalysisStrategy]] = None


def get_store() -> DataStore:
    global _data_store
    if _data_store is None:
        _data_store = get_data_store()
    return _data_store


def get_channel() -> NewsListChannel:
    global _channel
    if _channel is None:
        _channel = NewsListChannel()
    return _channel


def get_failure_handler() -> LoggingFailureHandler:
    global _failure_handler
    if _failure_handler is None:
        _failure_handler = LoggingFailureHandler()
    return _failure_handler


def get_analysis(
    data_store: DataStore = Depends(get_store),
    channel: NewsListChannel = Depends(get_channel),
    failure_handler: LoggingFailureHandler = Depends(get_failure_handler),
) -> CustomerAnalysis:
    """Build the orchestrator from the current module state."""
    strategies = _strategies if _strategies is not None else default_strategies(data_store)
    return CustomerAnalysis(
        strategies=strategies,
        store=data_store,
        channel=channel,
        failure_handler=failure_handler,
    )


def reset_api_state(
    data_store: Optional[DataStore] = None,
    channel: Optional[NewsListChannel] = None,
    failure_handler: Optional[LoggingFailureHandler] = None,
    strategies: Optional[Sequence[AnalysisStrategy]] = None,
) -> None:
    """Reset API state (for testing)."""
    global _data_store, _channel, _failure_handler, _strategies
    _data_store = data_store
    _channel = channel
    _failure_handler = failure_handler
    _strategies = strategies


# =============================================================================
# Health Check
# =============================================================================

@app.get("/health", tags=["Health"])
def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "customer-analysis"}


# =============================================================================
# Analysis & Offers
# =============================================================================

@app.get(
    "/products/{product_id}/interesting-customers",
    response_model=list[Customer],
    tags=["Analysis"],
)
def interesting_customers(
    product_id: int,
    data_store: DataStore = Depends(get_store),
    analysis: CustomerAnalysis = Depends(get_analysis),
):
    """
    List the customers the first successful strategy selects for a product.

    Nothing is persisted or announced. An empty list means every strategy
    failed; see `/failures` for why.
    """
    try:
        product = data_store.find(Product, product_id)
    except LookupFailure as e:
        raise HTTPException(status_code=404, detail=str(e))
    return analysis.find_interesting_customers(product)


@app.post("/products/{product_id}/offers", response_model=OffersResult, tags=["Offers"])
def prepare_offers(
    product_id: int,
    data_store: DataStore = Depends(get_store),
    channel: NewsListChannel = Depends(get_channel),
    analysis: CustomerAnalysis = Depends(get_analysis),
):
    """
    Prepare offers for a product.

    Every selected customer gets an offer that is persisted and then
    announced on the news list.
    """
    sent_before = channel.get_sent_count()
    try:
        analysis.prepare_offer_for_product(product_id)
    except LookupFailure as e:
        raise HTTPException(status_code=404, detail=str(e))
    except (PersistenceFailure, NotificationFailure) as e:
        logger.error(f"Preparing offers for product {product_id} failed: {e}")
        raise HTTPException(status_code=503, detail=str(e))

    return OffersResult(
        product_id=product_id,
        offers=data_store.get_offers_for_product(product_id),
        announced=channel.get_sent_count() - sent_before,
    )


@app.get("/failures", response_model=list[FailureRecord], tags=["Analysis"])
def list_failures(failure_handler: LoggingFailureHandler = Depends(get_failure_handler)):
    """Strategy failures recorded since startup."""
    return [
        FailureRecord(
            kind=type(failure).__name__,
            strategy=failure.strategy,
            product_id=failure.product_id,
            message=str(failure),
        )
        for failure in failure_handler.handled
    ]


# =============================================================================
# Data Endpoints (for exploration)
# =============================================================================

@app.get("/data/customers", response_model=list[Customer], tags=["Data"])
def get_customers(data_store: DataStore = Depends(get_store)):
    """Get all customers in the system."""
    return data_store.get_customers()


@app.get("/data/products", response_model=list[Product], tags=["Data"])
def get_products(data_store: DataStore = Depends(get_store)):
    """Get all products in the system."""
    return data_store.get_products()


@app.get("/data/offers", response_model=list[Offer], tags=["Data"])
def get_offers(data_store: DataStore = Depends(get_store)):
    """Get all offers persisted so far."""
    return data_store.get_offers()
