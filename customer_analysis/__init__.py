"""
Customer analysis: pick interested customers for a product and make offers.

Key components:
- CustomerAnalysis: Orchestrates strategy fallback and persist-then-send offers
- Analysis strategies: Pluggable ways of choosing customers
- LoggingFailureHandler: Records strategies that failed
"""

from customer_analysis.analysis import CustomerAnalysis
from customer_analysis.error_handler import FailureHandler, LoggingFailureHandler
from customer_analysis.strategies import (
    AnalysisStrategy,
    CreditThresholdStrategy,
    PurchaseHistoryStrategy,
    StaticStrategy,
    default_strategies,
)

__all__ = [
    "CustomerAnalysis",
    "FailureHandler",
    "LoggingFailureHandler",
    "AnalysisStrategy",
    "CreditThresholdStrategy",
    "PurchaseHistoryStrategy",
    "StaticStrategy",
    "default_strategies",
]
