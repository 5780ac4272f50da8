"""
Payment bridge - Stripe integration.

Forwards an amount to Stripe and hands back the PaymentIntent client secret
the card page needs to finish the payment in the browser.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Any

import stripe

from .errors import ProviderError
from .logging import get_logger

log = get_logger(__name__)


def to_minor_units(total: str) -> int:
    """Convert a two-decimal total such as ``"12.50"`` to cents."""
    cents = (Decimal(str(total)) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return int(cents)


def create_payment_intent(
    amount: int,
    currency: str = "eur",
    metadata: dict[str, Any] | None = None,
    api_key: str | None = None,
) -> str:
    """
    Create a Stripe PaymentIntent and return its client secret.

    Args:
        amount: Amount in minor units (cents)
        currency: Currency code (default: EUR)
        metadata: Additional metadata to attach to the payment (e.g., order_id)
        api_key: Stripe secret key; falls back to the module-level ``stripe.api_key``

    Returns:
        The opaque client secret for the frontend

    Raises:
        ProviderError: If the Stripe API call fails
    """
    params: dict[str, Any] = {
        "amount": amount,
        "currency": currency,
        "automatic_payment_methods": {"enabled": True},
        "metadata": metadata or {},
    }
    if api_key:
        params["api_key"] = api_key

    try:
        intent = stripe.PaymentIntent.create(**params)
    except stripe.StripeError as e:
        log.error("payment intent for {} {} failed: {}", amount, currency, e)
        raise ProviderError(
            message=str(e.user_message or e),
            code=getattr(e, "code", None),
        ) from e

    log.info("payment intent {} created for {} {}", intent.id, amount, currency)
    return intent.client_secret
