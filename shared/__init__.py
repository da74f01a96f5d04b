"""
Shared infrastructure for the customer analysis system.

This package contains the collaborators the orchestrator depends on:
- Domain models (Customer, Product, Offer)
- Error types
- Record store for JSON-backed persistence
- Mock news list notification channel
- Offer announcement templates
"""

from shared.models import Customer, Product, Purchase, Offer
from shared.errors import (
    CustomerAnalysisError,
    AnalysisFailure,
    CannotInterpretInput,
    LookupFailure,
    PersistenceFailure,
    NotificationFailure,
)
from shared.data_store import DataStore, RecordStore
from shared.channels import NewsListChannel, NotificationChannel, NotificationResult

__all__ = [
    "Customer",
    "Product",
    "Purchase",
    "Offer",
    "CustomerAnalysisError",
    "AnalysisFailure",
    "CannotInterpretInput",
    "LookupFailure",
    "PersistenceFailure",
    "NotificationFailure",
    "DataStore",
    "RecordStore",
    "NewsListChannel",
    "NotificationChannel",
    "NotificationResult",
]
