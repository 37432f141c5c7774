import logging
from typing import Dict, Any

import stripe
from pydantic import ValidationError

from exceptions.payments import ProviderError
from payments.interfaces import PaymentProviderInterface
from payments.models import (
    IntentFound,
    IntentLookup,
    IntentNotFound,
    PaymentIntentRecord,
    ProviderErrorCategoryEnum,
    ProviderFailure
)

logger = logging.getLogger(__name__)

RESOURCE_MISSING = "resource_missing"

# Checked in order, subclasses before their parents.
_ERROR_CATEGORIES = (
    (stripe.CardError, ProviderErrorCategoryEnum.CARD_ERROR),
    (stripe.InvalidRequestError, ProviderErrorCategoryEnum.INVALID_REQUEST),
    (stripe.IdempotencyError, ProviderErrorCategoryEnum.INVALID_REQUEST),
    (stripe.RateLimitError, ProviderErrorCategoryEnum.RATE_LIMIT),
    (stripe.APIConnectionError, ProviderErrorCategoryEnum.API_CONNECTION),
    (stripe.AuthenticationError, ProviderErrorCategoryEnum.AUTHENTICATION),
    (stripe.PermissionError, ProviderErrorCategoryEnum.AUTHENTICATION),
    (stripe.APIError, ProviderErrorCategoryEnum.API_ERROR),
)


class StripePaymentProvider(PaymentProviderInterface):
    """Stripe payment provider implementation.

    This class implements the PaymentProviderInterface on top of the Stripe
    SDK's async API. The secret key is passed with every request instead of
    being set on the global ``stripe`` module, so providers built with
    different keys can coexist in one process.

    Stripe errors never escape this class: creation failures are raised as
    ``ProviderError`` and retrieval failures are returned as
    ``ProviderFailure`` values.
    """

    def __init__(self, secret_key: str) -> None:
        """Initialize the Stripe payment provider.

        Args:
            secret_key (str): Stripe secret key for API authentication.
        """
        self._secret_key = secret_key

    def _redact(self, message: str) -> str:
        return message.replace(self._secret_key, "[REDACTED]")

    def _to_failure(self, error: stripe.StripeError) -> ProviderFailure:
        """Classify a Stripe error.

        Args:
            error (stripe.StripeError): The error raised by the SDK.

        Returns:
            ProviderFailure: The provider-agnostic failure.
        """
        category = ProviderErrorCategoryEnum.UNKNOWN
        for error_class, error_category in _ERROR_CATEGORIES:
            if isinstance(error, error_class):
                category = error_category
                break
        message = error.user_message or str(error) or "Unknown error"
        return ProviderFailure(
            category=category,
            message=self._redact(message),
            code=error.code
        )

    @staticmethod
    def _to_record(intent: Any) -> PaymentIntentRecord:
        """Project a Stripe PaymentIntent onto the non-sensitive record.

        Args:
            intent (Any): The PaymentIntent object returned by the SDK.

        Returns:
            PaymentIntentRecord: The projected record.
        """
        return PaymentIntentRecord(
            id=intent.id,
            client_secret=intent.client_secret,
            created_at=intent.created,
            is_live_mode=intent.livemode,
            amount_minor_units=intent.amount,
            currency_code=intent.currency,
            status=intent.status
        )

    async def create_intent(
        self,
        params: Dict[str, Any]
    ) -> PaymentIntentRecord:
        """Create a Stripe payment intent.

        Args:
            params (Dict[str, Any]): PaymentIntent creation parameters.

        Returns:
            PaymentIntentRecord: The created payment intent.

        Raises:
            ProviderError: If Stripe rejects the request or returns a
                malformed payment intent.
        """
        try:
            intent = await stripe.PaymentIntent.create_async(
                api_key=self._secret_key,
                **params
            )
        except stripe.StripeError as e:
            raise ProviderError(self._to_failure(e))

        try:
            return self._to_record(intent)
        except (AttributeError, ValidationError):
            logger.error(
                "Malformed payment intent returned by Stripe",
                extra={"operation": "createIntent", "category": "api_error"}
            )
            raise ProviderError(
                ProviderFailure(
                    category=ProviderErrorCategoryEnum.API_ERROR,
                    message="Malformed payment intent response"
                )
            )

    async def retrieve_intent(self, intent_id: str) -> IntentLookup:
        """Retrieve a Stripe payment intent.

        Args:
            intent_id (str): ID of the payment intent.

        Returns:
            IntentLookup: The tagged lookup outcome.
        """
        try:
            intent = await stripe.PaymentIntent.retrieve_async(
                intent_id,
                api_key=self._secret_key
            )
        except stripe.InvalidRequestError as e:
            if e.code == RESOURCE_MISSING:
                return IntentNotFound(intent_id=intent_id)
            return self._to_failure(e)
        except stripe.StripeError as e:
            return self._to_failure(e)

        try:
            return IntentFound(record=self._to_record(intent))
        except (AttributeError, ValidationError):
            logger.error(
                "Malformed payment intent returned by Stripe",
                extra={"operation": "retrieveIntent", "category": "api_error"}
            )
            return ProviderFailure(
                category=ProviderErrorCategoryEnum.API_ERROR,
                message="Malformed payment intent response"
            )
