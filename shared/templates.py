"""
Offer announcement templates.

Templates support variable substitution using Python's string formatting.
A template has a headline (subject) and a longer body; the news list
channel renders both for every offer it announces.
"""

from dataclasses import dataclass

from shared.models import Offer


@dataclass
class OfferTemplate:
    """An announcement template with a headline and a body."""
    headline: str
    body: str

    def render(self, **kwargs) -> tuple[str, str]:
        """
        Render the template with provided variables.

        Returns:
            Tuple of (headline, body)
        """
        return (
            self.headline.format(**kwargs),
            self.body.format(**kwargs),
        )


OFFER_TEMPLATE = OfferTemplate(
    headline="A new offer for you: {product_name}",
    body="""Hi {customer_name},

We picked {product_name} for you{price_line}.

Reply to this message or visit your account to take up the offer.

Thanks,
The Sales Team""",
)


def format_price(price) -> str:
    """Format a price for display, or an empty string if unknown."""
    if price is None:
        return ""
    return f"${price:,.2f}"


def render_offer(offer: Offer, template: OfferTemplate = OFFER_TEMPLATE) -> tuple[str, str]:
    """
    Render the announcement for an offer.

    Returns:
        Tuple of (headline, body)
    """
    price = format_price(offer.product.price)
    return template.render(
        customer_name=offer.customer.name,
        product_name=offer.product.display_name,
        price_line=f" at {price}" if price else "",
    )
