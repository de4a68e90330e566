from __future__ import annotations

from loguru import logger

from resource_query import Resource, ResourceQueryEngine, UpdateOutcome

from ._documents import doc_to_model, utcnow
from .models import Payment, PaymentCreate
from .users import upgrade_badge


async def record_payment(
    engine: ResourceQueryEngine,
    email: str,
    payload: PaymentCreate,
) -> tuple[Payment, UpdateOutcome]:
    """Store the payment history entry, then move the payer to the gold badge."""

    doc = payload.model_dump(by_alias=True)
    doc.update({"email": email, "timestamp": utcnow()})
    doc["_id"] = await engine.insert(Resource.PAYMENTS, doc)
    outcome = await upgrade_badge(engine, email)
    if not outcome.found:
        logger.warning("Payment {transaction} for unknown user {email}", transaction=payload.transaction_id, email=email)
    return doc_to_model(Payment, doc), outcome
