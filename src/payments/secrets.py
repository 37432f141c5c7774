import json
import logging
import os
from pathlib import Path
from typing import Any, Mapping, Optional

from exceptions.payments import ConfigurationError

logger = logging.getLogger(__name__)

STRIPE_SECRET_KEY_ENV = "STRIPE_SECRET_KEY"


def load_runtime_config(path: str) -> dict:
    """Load the structured runtime configuration document.

    The document is a JSON object grouped by service, for example
    ``{"stripe": {"secret_key": "sk_live_..."}}``. A missing file is an
    empty configuration.

    Args:
        path (str): Path to the JSON document.

    Returns:
        dict: The parsed configuration.

    Raises:
        ConfigurationError: If the file exists but is not a JSON object.
    """
    config_path = Path(path)
    if not config_path.is_file():
        return {}
    try:
        config = json.loads(config_path.read_text(encoding="utf-8"))
    except ValueError:
        raise ConfigurationError(f"Runtime config at {path} is not valid JSON")
    if not isinstance(config, dict):
        raise ConfigurationError(f"Runtime config at {path} must be an object")
    return config


class SecretResolver:
    """Resolve the payment provider secret key.

    Structured runtime configuration takes priority over the environment.
    The first successful lookup is cached for the lifetime of the resolver.
    Until then, a runtime config file is re-read on every lookup so a file
    created after startup is picked up.
    """

    def __init__(
        self,
        config: Optional[Mapping[str, Any]] = None,
        config_path: Optional[str] = None,
        environ: Optional[Mapping[str, str]] = None,
        env_var: str = STRIPE_SECRET_KEY_ENV
    ) -> None:
        """Initialize the secret resolver.

        Args:
            config (Optional[Mapping[str, Any]]): Structured runtime config.
            config_path (Optional[str]): Path of a runtime config document,
                used when no config mapping is given.
            environ (Optional[Mapping[str, str]]): Environment mapping,
                ``os.environ`` when omitted.
            env_var (str): Name of the environment variable holding the key.
        """
        self._config = config
        self._config_path = config_path
        self._environ = os.environ if environ is None else environ
        self._env_var = env_var
        self._secret: Optional[str] = None

    def _load_config(self) -> Mapping[str, Any]:
        if self._config is not None:
            return self._config
        if self._config_path is not None:
            return load_runtime_config(self._config_path)
        return {}

    def _from_config(self) -> Optional[str]:
        section = self._load_config().get("stripe")
        if not isinstance(section, Mapping):
            return None
        value = section.get("secret_key")
        if isinstance(value, str) and value.strip():
            return value.strip()
        return None

    def _from_environ(self) -> Optional[str]:
        value = self._environ.get(self._env_var)
        if value and value.strip():
            return value.strip()
        return None

    def resolve_secret(self) -> str:
        """Return the provider secret key.

        Returns:
            str: The secret key.

        Raises:
            ConfigurationError: If neither source yields a non-empty key, or
                the runtime config file is not a JSON object.
        """
        if self._secret is None:
            secret = self._from_config() or self._from_environ()
            if secret is None:
                logger.error(
                    "Payment provider secret key is not configured",
                    extra={"operation": "resolveSecret"}
                )
                raise ConfigurationError()
            self._secret = secret
        return self._secret
