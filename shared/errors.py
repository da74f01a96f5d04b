"""
Exception types for the customer analysis system.

Only AnalysisFailure (and its subclasses) is recoverable: the orchestrator
catches it, hands it to the failure handler and moves on to the next
strategy. Every other error propagates to the caller unchanged.
"""

from typing import Any, Optional


class CustomerAnalysisError(Exception):
    """Base class for all errors raised by this project."""


# =============================================================================
# Analysis failures - raised by strategies, recoverable by fallback
# =============================================================================

class AnalysisFailure(CustomerAnalysisError):
    """
    A strategy could not produce a customer list for a product.

    Attributes:
        strategy: Name of the strategy that raised the failure
        product_id: The product the strategy was asked about (if known)
    """

    def __init__(
        self,
        message: str = "Analysis failed",
        strategy: Optional[str] = None,
        product_id: Optional[Any] = None,
    ):
        super().__init__(message)
        self.strategy = strategy
        self.product_id = product_id

    def __str__(self) -> str:
        message = super().__str__()
        if self.strategy:
            return f"[{self.strategy}] {message}"
        return message


class CannotInterpretInput(AnalysisFailure):
    """The strategy does not understand the shape or category of the product."""


# =============================================================================
# Store and channel failures - always propagate
# =============================================================================

class LookupFailure(CustomerAnalysisError):
    """The record store could not resolve the requested entity."""

    def __init__(self, kind: str, entity_id: Any, message: Optional[str] = None):
        super().__init__(message or f"{kind} not found: {entity_id}")
        self.kind = kind
        self.entity_id = entity_id


class PersistenceFailure(CustomerAnalysisError):
    """The record store could not durably store an entity."""


class NotificationFailure(CustomerAnalysisError):
    """The notification channel failed to announce an offer."""
