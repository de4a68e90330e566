"""Stripe integration for one-off membership payments."""

from __future__ import annotations

import time

import stripe
from fastapi import HTTPException
from loguru import logger
from starlette.concurrency import run_in_threadpool

from .config import settings

# ---------------------------------------------------------------------------
# Provider
# ---------------------------------------------------------------------------


class PaymentProvider:
    """Creates PaymentIntents; the client confirms them out-of-band."""

    def __init__(self, api_key: str, currency: str = "usd") -> None:
        self._client = stripe.StripeClient(api_key)
        self._currency = currency

    async def create_payment_intent(self, amount_cents: int) -> str:
        """Return the client secret of a new card PaymentIntent."""

        start = time.perf_counter()
        try:
            intent = await run_in_threadpool(
                self._client.payment_intents.create,
                params={
                    "amount": amount_cents,
                    "currency": self._currency,
                    "payment_method_types": ["card"],
                },
            )
        except stripe.StripeError as exc:
            duration = (time.perf_counter() - start) * 1000
            logger.warning(
                "Stripe PaymentIntent for {amount} failed after {duration:.2f} ms: {error}",
                amount=amount_cents,
                duration=duration,
                error=exc,
            )
            raise HTTPException(status_code=502, detail="Payment provider error") from exc

        duration = (time.perf_counter() - start) * 1000
        logger.debug(
            "Stripe PaymentIntent {intent} for {amount} created in {duration:.2f} ms",
            intent=intent.id,
            amount=amount_cents,
            duration=duration,
        )
        return intent.client_secret


# ---------------------------------------------------------------------------
# Shared instance
# ---------------------------------------------------------------------------

_provider: PaymentProvider | None = None


def get_payment_provider() -> PaymentProvider:
    global _provider
    if _provider is None:
        if not settings.stripe_secret_key:
            raise HTTPException(status_code=503, detail="Payments are not configured")
        _provider = PaymentProvider(settings.stripe_secret_key, settings.payment_currency)
    return _provider
