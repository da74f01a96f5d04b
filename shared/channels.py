"""
Mock notification channel for offer announcements.

The news list channel simulates publishing offers to customers by logging
the output. In a real system this would integrate with a mailing list or
push service.

Design decisions:
- All sends are logged to console for visibility
- The channel tracks sent messages for test assertions
- Synchronous; a failed delivery raises NotificationFailure
- Channel failures can be simulated for testing
"""

import logging
import random
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, Protocol

from shared.errors import NotificationFailure
from shared.models import Offer
from shared.templates import render_offer

# Configure logging for notification channels
logger = logging.getLogger("notifications")
handler = logging.StreamHandler()
handler.setFormatter(logging.Formatter(
    "%(asctime)s | %(levelname)s | %(message)s",
    datefmt="%H:%M:%S"
))
logger.addHandler(handler)
logger.setLevel(logging.INFO)


class NotificationChannel(Protocol):
    """Best-effort announcement of a persisted offer."""

    def send(self, offer: Offer) -> object:
        """Announce the offer, raising on failure."""
        ...


@dataclass
class NotificationResult:
    """
    Result of an announcement attempt.

    Captures success/failure and metadata for debugging and testing.
    """
    success: bool
    offer: Offer
    headline: str
    body: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    error: Optional[str] = None

    @property
    def recipient(self) -> int:
        return self.offer.customer.id

    def __str__(self) -> str:
        status = "✓" if self.success else "✗"
        return f"{status} NEWS to {self.offer.customer.name}: {self.headline}"


class NewsListChannel:
    """
    Mock news list channel.

    Logs offer announcements to console and tracks them for test assertions.
    Can simulate failures for testing error handling.
    """

    def __init__(self, fail_rate: float = 0.0):
        """
        Initialize the news list channel.

        Args:
            fail_rate: Probability of send failure (0.0 to 1.0), for testing.
        """
        self.fail_rate = fail_rate
        self.sent_messages: list[NotificationResult] = []

    def send(self, offer: Offer) -> NotificationResult:
        """
        Announce an offer (mock implementation).

        Returns:
            NotificationResult for the successful send

        Raises:
            NotificationFailure: If the (simulated) delivery failed
        """
        headline, body = render_offer(offer)

        if random.random() < self.fail_rate:
            result = NotificationResult(
                success=False,
                offer=offer,
                headline=headline,
                body=body,
                error="Simulated news list delivery failure",
            )
            self.sent_messages.append(result)
            logger.error(f"[NEWS FAILED] To: {offer.customer.name} | Error: {result.error}")
            raise NotificationFailure(f"Failed to announce {offer}: {result.error}")

        result = NotificationResult(
            success=True,
            offer=offer,
            headline=headline,
            body=body,
        )
        logger.info(f"[NEWS] To: {offer.customer.name} | {headline}")
        logger.debug(f"[NEWS BODY] {body}")

        self.sent_messages.append(result)
        return result

    def get_sent_count(self) -> int:
        """Get the number of messages sent (for testing)."""
        return len(self.sent_messages)

    def get_successful_sends(self) -> list[NotificationResult]:
        return [m for m in self.sent_messages if m.success]

    def clear_history(self):
        """Clear sent message history (useful between tests)."""
        self.sent_messages.clear()

    def find_message_to(self, customer_id: int) -> Optional[NotificationResult]:
        """Find a message sent to a specific customer."""
        for msg in self.sent_messages:
            if msg.recipient == customer_id:
                return msg
        return None
