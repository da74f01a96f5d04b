"""
HTTP API for the customer analysis system.

This package provides a single FastAPI application that exposes:
- Analysis endpoints (which customers would get an offer)
- Offer endpoints (persist and announce offers)
- Data exploration endpoints
"""

from api.main import app

__all__ = ["app"]
