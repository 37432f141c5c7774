import os
from pathlib import Path

from pydantic_settings import BaseSettings


class BaseAppSettings(BaseSettings):
    """Base application settings configuration.

    This class contains the core configuration settings for the Booking
    Payments service: runtime config location, the optional authentication
    gate and logging. It inherits from Pydantic's BaseSettings for
    automatic environment variable loading and validation.

    The Stripe secret key is deliberately not a settings field; it is
    resolved by ``payments.secrets.SecretResolver`` from the runtime config
    document first and the ``STRIPE_SECRET_KEY`` environment variable second.
    """
    BASE_DIR: Path = Path(__file__).parent.parent
    SERVICE_NAME: str = os.getenv("SERVICE_NAME", "booking-payments")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    RUNTIME_CONFIG_PATH: str = os.getenv(
        "RUNTIME_CONFIG_PATH",
        str(BASE_DIR / ".runtimeconfig.json")
    )

    PAYMENTS_REQUIRE_AUTH: bool = os.getenv(
        "PAYMENTS_REQUIRE_AUTH", "False"
    ).lower() == "true"
    SECRET_KEY_ACCESS: str = os.getenv(
        "SECRET_KEY_ACCESS",
        str(os.urandom(32))
    )
    JWT_SIGNING_ALGORITHM: str = os.getenv("JWT_SIGNING_ALGORITHM", "HS256")
    CALLER_TOKEN_ISSUER: str = os.getenv("CALLER_TOKEN_ISSUER", "booking-app")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = int(
        os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 30)
    )


class Settings(BaseAppSettings):
    """Production settings configuration."""
    pass


class TestingSettings(BaseAppSettings):
    """Testing settings configuration.

    Uses a fixed access token key so tokens minted by test fixtures verify,
    and points the runtime config at a path that never exists.
    """
    SECRET_KEY_ACCESS: str = "testing-access-secret"
    RUNTIME_CONFIG_PATH: str = str(
        Path(__file__).parent.parent / "tests" / ".runtimeconfig.missing.json"
    )


def get_settings() -> BaseAppSettings:
    """Return the settings instance based on the ENVIRONMENT variable.

    If the ENVIRONMENT environment variable is set to 'testing', this function returns
    an instance of TestingSettings. For any other value (including when unset), it returns
    an instance of Settings.

    Returns:
        BaseAppSettings: The settings instance appropriate for the current environment.
    """
    environment = os.getenv("ENVIRONMENT", "developing")
    if environment == "testing":
        return TestingSettings()
    return Settings()
