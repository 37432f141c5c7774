from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
import stripe

from exceptions.payments import ProviderError
from payments.models import (
    IntentFound,
    IntentNotFound,
    ProviderErrorCategoryEnum,
    ProviderFailure
)
from payments.stripe import StripePaymentProvider

SECRET_KEY = "sk_test_51Abcdefghijklmnop"


def stripe_intent(**overrides):
    values = {
        "id": "pi_123",
        "client_secret": "pi_123_secret_456",
        "created": 1792224000,
        "livemode": False,
        "amount": 15000,
        "currency": "usd",
        "status": "requires_payment_method",
    }
    values.update(overrides)
    return SimpleNamespace(**values)


@pytest.fixture
def provider() -> StripePaymentProvider:
    return StripePaymentProvider(secret_key=SECRET_KEY)


@pytest.fixture
def create_async(monkeypatch) -> AsyncMock:
    mock = AsyncMock(return_value=stripe_intent())
    monkeypatch.setattr(stripe.PaymentIntent, "create_async", mock)
    return mock


@pytest.fixture
def retrieve_async(monkeypatch) -> AsyncMock:
    mock = AsyncMock(return_value=stripe_intent(status="succeeded"))
    monkeypatch.setattr(stripe.PaymentIntent, "retrieve_async", mock)
    return mock


@pytest.mark.unit
@pytest.mark.asyncio
async def test_create_intent_passes_secret_per_request(provider, create_async):
    params = {
        "amount": 15000,
        "currency": "usd",
        "automatic_payment_methods": {"enabled": True},
        "metadata": {"created_at": "2026-10-17T09:30:00.000Z"},
    }

    record = await provider.create_intent(params)

    create_async.assert_awaited_once_with(api_key=SECRET_KEY, **params)
    assert record.id == "pi_123"
    assert record.client_secret == "pi_123_secret_456"
    assert record.created_at == 1792224000
    assert record.is_live_mode is False
    assert record.amount_minor_units == 15000
    assert record.currency_code == "usd"
    assert stripe.api_key != SECRET_KEY


@pytest.mark.unit
@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error, category",
    [
        (
            stripe.CardError("Your card was declined.", None, "card_declined"),
            ProviderErrorCategoryEnum.CARD_ERROR
        ),
        (
            stripe.InvalidRequestError("Invalid currency: zzz", "currency"),
            ProviderErrorCategoryEnum.INVALID_REQUEST
        ),
        (
            stripe.RateLimitError("Too many requests"),
            ProviderErrorCategoryEnum.RATE_LIMIT
        ),
        (
            stripe.APIConnectionError("Could not connect"),
            ProviderErrorCategoryEnum.API_CONNECTION
        ),
        (
            stripe.APIError("An unknown error occurred"),
            ProviderErrorCategoryEnum.API_ERROR
        ),
        (
            stripe.StripeError("Something odd"),
            ProviderErrorCategoryEnum.UNKNOWN
        ),
    ]
)
async def test_create_intent_classifies_stripe_errors(
    provider,
    create_async,
    error,
    category
):
    create_async.side_effect = error

    with pytest.raises(ProviderError) as exc_info:
        await provider.create_intent({"amount": 100, "currency": "usd"})

    assert exc_info.value.failure.category is category
    assert exc_info.value.failure.message == error.user_message


@pytest.mark.unit
@pytest.mark.asyncio
async def test_failure_messages_never_contain_the_secret(provider, create_async):
    create_async.side_effect = stripe.AuthenticationError(
        f"Invalid API Key provided: {SECRET_KEY}"
    )

    with pytest.raises(ProviderError) as exc_info:
        await provider.create_intent({"amount": 100, "currency": "usd"})

    failure = exc_info.value.failure
    assert failure.category is ProviderErrorCategoryEnum.AUTHENTICATION
    assert SECRET_KEY not in failure.message
    assert "[REDACTED]" in failure.message


@pytest.mark.unit
@pytest.mark.asyncio
async def test_create_intent_rejects_malformed_response(provider, create_async):
    create_async.return_value = SimpleNamespace(id="pi_123")

    with pytest.raises(ProviderError) as exc_info:
        await provider.create_intent({"amount": 100, "currency": "usd"})

    assert exc_info.value.failure.category is ProviderErrorCategoryEnum.API_ERROR


@pytest.mark.unit
@pytest.mark.asyncio
async def test_retrieve_intent_found(provider, retrieve_async):
    outcome = await provider.retrieve_intent("pi_123")

    retrieve_async.assert_awaited_once_with("pi_123", api_key=SECRET_KEY)
    assert isinstance(outcome, IntentFound)
    assert outcome.record.status == "succeeded"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_retrieve_intent_resource_missing_is_not_found(
    provider,
    retrieve_async
):
    retrieve_async.side_effect = stripe.InvalidRequestError(
        "No such payment_intent: 'pi_missing'",
        "intent",
        code="resource_missing"
    )

    outcome = await provider.retrieve_intent("pi_missing")

    assert outcome == IntentNotFound(intent_id="pi_missing")


@pytest.mark.unit
@pytest.mark.asyncio
async def test_retrieve_intent_other_invalid_request_is_failure(
    provider,
    retrieve_async
):
    retrieve_async.side_effect = stripe.InvalidRequestError(
        "Invalid string: pi_...",
        "intent",
        code="parameter_invalid_string"
    )

    outcome = await provider.retrieve_intent("pi_...")

    assert isinstance(outcome, ProviderFailure)
    assert outcome.category is ProviderErrorCategoryEnum.INVALID_REQUEST
    assert outcome.code == "parameter_invalid_string"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_retrieve_intent_api_error_is_failure(provider, retrieve_async):
    retrieve_async.side_effect = stripe.APIError("Stripe is down")

    outcome = await provider.retrieve_intent("pi_123")

    assert outcome == ProviderFailure(
        category=ProviderErrorCategoryEnum.API_ERROR,
        message="Stripe is down"
    )


@pytest.mark.unit
@pytest.mark.asyncio
async def test_retrieve_intent_malformed_response_is_failure(
    provider,
    retrieve_async
):
    retrieve_async.return_value = stripe_intent(amount="a lot")

    outcome = await provider.retrieve_intent("pi_123")

    assert isinstance(outcome, ProviderFailure)
    assert outcome.category is ProviderErrorCategoryEnum.API_ERROR
