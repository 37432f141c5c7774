import os
from datetime import datetime, timezone
from typing import AsyncGenerator, Any

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport

from config.dependencies import get_payment_intent_service
from config.settings import get_settings, BaseAppSettings
from main import create_app
from payments.intents import PaymentIntentService
from payments.secrets import SecretResolver
from security.interfaces import CallerTokenManagerInterface
from security.manager import CallerTokenManager
from tests.doubles.fakes.payments import FakePaymentProvider

FIXED_NOW = datetime(2026, 10, 17, 9, 30, 0, 123000, tzinfo=timezone.utc)


@pytest.fixture(scope="session")
def app() -> FastAPI:
    """
    Session-scoped fixture to create and return a FastAPI app instance for testing.
    Sets the environment variable to 'testing' before app creation.
    """
    os.environ["ENVIRONMENT"] = "testing"
    return create_app()


@pytest.fixture(scope="session")
def settings(app) -> BaseAppSettings:
    """
    Session-scoped fixture to provide application settings.
    Depends on the app fixture so the testing environment is selected.
    """
    return get_settings()


@pytest.fixture(scope="function")
def payment_provider_fake() -> FakePaymentProvider:
    """Provide a fake payment provider for testing."""
    return FakePaymentProvider()


@pytest.fixture(scope="function")
def secret_resolver() -> SecretResolver:
    """Provide a secret resolver backed by a structured config only."""
    return SecretResolver(
        config={"stripe": {"secret_key": "sk_test_123"}},
        environ={}
    )


@pytest.fixture(scope="function")
def provider_factory_calls() -> list[str]:
    """Collect the secret keys the provider factory was called with."""
    return []


@pytest.fixture(scope="function")
def intent_service(
    secret_resolver,
    payment_provider_fake,
    provider_factory_calls
) -> PaymentIntentService:
    """Provide a payment intent service wired to the fake provider."""
    def provider_factory(secret_key: str) -> FakePaymentProvider:
        provider_factory_calls.append(secret_key)
        return payment_provider_fake

    return PaymentIntentService(
        secret_resolver=secret_resolver,
        provider_factory=provider_factory,
        clock=lambda: FIXED_NOW
    )


@pytest.fixture(scope="function")
def token_manager(settings: BaseAppSettings) -> CallerTokenManagerInterface:
    """
    Function-scoped fixture to provide a caller token manager for issuing and
    verifying tokens. Uses settings from BaseAppSettings.
    """
    return CallerTokenManager(
        secret_key=settings.SECRET_KEY_ACCESS,
        algorithm=settings.JWT_SIGNING_ALGORITHM,
        issuer=settings.CALLER_TOKEN_ISSUER,
        expires_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES
    )


@pytest_asyncio.fixture(scope="function")
async def client(
    app,
    intent_service,
) -> AsyncGenerator[AsyncClient, Any]:
    """
    Provide an asynchronous HTTP client for testing.
    Overrides app dependencies with test doubles.
    """
    app.dependency_overrides[get_payment_intent_service] = lambda: intent_service

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as async_client:
        yield async_client

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def require_auth(app, settings):
    """Enable the authentication gate for the duration of a test."""
    gated_settings = settings.model_copy(update={"PAYMENTS_REQUIRE_AUTH": True})
    app.dependency_overrides[get_settings] = lambda: gated_settings
    yield gated_settings
    app.dependency_overrides.pop(get_settings, None)
