import os
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from config.settings import BaseAppSettings, get_settings
from exceptions.payments import PaymentAuthenticationError
from exceptions.security import BaseSecurityError, TokenExpiredError
from payments.intents import PaymentIntentService, ProviderFactory
from payments.secrets import SecretResolver
from payments.stripe import StripePaymentProvider
from routers.errors import payment_error_to_http
from security.interfaces import CallerTokenManagerInterface
from security.manager import CallerTokenManager

bearer_scheme = HTTPBearer(auto_error=False)

_secret_resolvers: dict[str, SecretResolver] = {}


def get_token_manager(
    settings: BaseAppSettings = Depends(get_settings)
) -> CallerTokenManagerInterface:
    """Get the caller token manager configured from application settings.

    Args:
        settings (BaseAppSettings): Application settings containing token configuration.

    Returns:
        CallerTokenManagerInterface: Configured caller token manager.
    """
    return CallerTokenManager(
        secret_key=settings.SECRET_KEY_ACCESS,
        algorithm=settings.JWT_SIGNING_ALGORITHM,
        issuer=settings.CALLER_TOKEN_ISSUER,
        expires_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES
    )


async def authorize_caller(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(
        bearer_scheme
    ),
    settings: BaseAppSettings = Depends(get_settings),
    token_manager: CallerTokenManagerInterface = Depends(get_token_manager)
) -> Optional[str]:
    """Apply the optional authentication gate.

    When ``PAYMENTS_REQUIRE_AUTH`` is off every caller is accepted, guests
    included, and any Authorization header is ignored.

    Args:
        credentials (Optional[HTTPAuthorizationCredentials]): Bearer credentials, if sent.
        settings (BaseAppSettings): Application settings.
        token_manager (CallerTokenManagerInterface): Caller token verifier.

    Returns:
        Optional[str]: The caller ID, or None when the gate is off.

    Raises:
        HTTPException: If the gate is on and the token is missing,
            expired or invalid (401 Unauthorized).
    """
    if not settings.PAYMENTS_REQUIRE_AUTH:
        return None

    if not credentials:
        raise payment_error_to_http(
            PaymentAuthenticationError(
                "User must be authenticated to call this operation"
            )
        )
    try:
        return token_manager.verify_caller_token(credentials.credentials)
    except TokenExpiredError:
        raise payment_error_to_http(
            PaymentAuthenticationError("Token has expired")
        )
    except BaseSecurityError:
        raise payment_error_to_http(
            PaymentAuthenticationError("Could not validate credentials")
        )


def get_secret_resolver(
    settings: BaseAppSettings = Depends(get_settings)
) -> SecretResolver:
    """Get the secret resolver for the configured runtime config.

    Resolvers are kept per runtime config path so the resolved secret is
    cached for the lifetime of the process.

    Args:
        settings (BaseAppSettings): Application settings with the runtime config path.

    Returns:
        SecretResolver: The shared secret resolver.
    """
    path = settings.RUNTIME_CONFIG_PATH
    if path not in _secret_resolvers:
        _secret_resolvers[path] = SecretResolver(
            config_path=path,
            environ=os.environ
        )
    return _secret_resolvers[path]


def get_payment_provider_factory() -> ProviderFactory:
    """Get the factory building Stripe provider clients from a secret key.

    Returns:
        ProviderFactory: Callable creating a provider for a secret key.
    """
    return StripePaymentProvider


def get_payment_intent_service(
    secret_resolver: SecretResolver = Depends(get_secret_resolver),
    provider_factory: ProviderFactory = Depends(get_payment_provider_factory)
) -> PaymentIntentService:
    """Get the payment intent service.

    Args:
        secret_resolver (SecretResolver): Provider secret key source.
        provider_factory (ProviderFactory): Provider client factory.

    Returns:
        PaymentIntentService: Service implementing the payment operations.
    """
    return PaymentIntentService(
        secret_resolver=secret_resolver,
        provider_factory=provider_factory
    )
