"""Payment intent creation and payment history."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from access_guard import Identity, require_identity
from brainshare_repo import Payment, PaymentCreate, record_payment
from resource_query import ClientInputError, ResourceQueryEngine, UpdateOutcome

from .deps import get_engine
from .stripe_client import PaymentProvider, get_payment_provider

router = APIRouter(tags=["payments"])


class PaymentIntentRequest(BaseModel):
    price: float = Field(gt=0)


class PaymentReceipt(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    payment: Payment
    user_update: UpdateOutcome


@router.post("/create-payment-intent")
async def create_payment_intent(
    payload: PaymentIntentRequest,
    identity: Identity = Depends(require_identity),
    provider: PaymentProvider = Depends(get_payment_provider),
):
    amount = round(payload.price * 100)
    if amount < 1:
        raise ClientInputError("price is below the smallest chargeable amount")
    client_secret = await provider.create_payment_intent(amount)
    return {"clientSecret": client_secret}


@router.post("/payments", response_model=PaymentReceipt, status_code=201)
async def save_payment(
    payload: PaymentCreate,
    identity: Identity = Depends(require_identity),
    engine: ResourceQueryEngine = Depends(get_engine),
):
    """Record a completed payment for the caller and upgrade them to gold."""

    payment, outcome = await record_payment(engine, identity.email, payload)
    return PaymentReceipt(payment=payment, user_update=outcome)
