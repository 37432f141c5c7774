import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict

from exceptions.payments import PaymentError, ProviderError
from payments.errors import (
    OperationEnum,
    translate_exception,
    translate_provider_failure
)
from payments.interfaces import PaymentProviderInterface
from payments.models import (
    IntentNotFound,
    PaymentIntentRecord,
    PaymentIntentRequest,
    ProviderFailure,
    ValidationResult
)
from payments.secrets import SecretResolver
from validation.payments import (
    validate_create_payload,
    validate_lookup_payload
)

logger = logging.getLogger(__name__)

ProviderFactory = Callable[[str], PaymentProviderInterface]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def build_create_params(
    request: PaymentIntentRequest,
    created_at: datetime
) -> Dict[str, Any]:
    """Build the provider payload for a payment intent creation request.

    The server timestamp is stamped into the metadata after the caller's
    entries, so a caller-supplied ``created_at`` is overwritten.

    Args:
        request (PaymentIntentRequest): The validated creation request.
        created_at (datetime): Server time of the request, in UTC.

    Returns:
        Dict[str, Any]: The creation payload.
    """
    timestamp = created_at.astimezone(timezone.utc).isoformat(
        timespec="milliseconds"
    ).replace("+00:00", "Z")
    params: Dict[str, Any] = {
        "amount": request.amount_minor_units,
        "currency": request.currency_code,
        "automatic_payment_methods": {"enabled": True},
        "metadata": {**request.metadata, "created_at": timestamp},
    }
    if request.customer_email:
        params["receipt_email"] = request.customer_email
    return params


class PaymentIntentService:
    """Create and validate payment intents for bookings.

    Each call validates the request body, resolves the provider secret and
    builds a provider client with it before making exactly one provider
    call. Nothing is shared between calls apart from the secret resolver.
    """

    def __init__(
        self,
        secret_resolver: SecretResolver,
        provider_factory: ProviderFactory,
        clock: Callable[[], datetime] = utc_now
    ) -> None:
        """Initialize the payment intent service.

        Args:
            secret_resolver (SecretResolver): Provider secret key source.
            provider_factory (ProviderFactory): Builds a provider client
                from a secret key.
            clock (Callable[[], datetime]): Source of the server timestamp.
        """
        self._secret_resolver = secret_resolver
        self._provider_factory = provider_factory
        self._clock = clock

    def _provider(self) -> PaymentProviderInterface:
        return self._provider_factory(self._secret_resolver.resolve_secret())

    async def create_payment_intent(self, data: Any) -> PaymentIntentRecord:
        """Create a payment intent for a booking.

        Args:
            data (Any): The decoded creation request body.

        Returns:
            PaymentIntentRecord: The non-sensitive projection of the intent.

        Raises:
            PaymentError: On invalid input, missing configuration or any
                provider failure.
        """
        operation = OperationEnum.CREATE_INTENT
        request = validate_create_payload(data)
        provider = self._provider()
        params = build_create_params(request, self._clock())

        try:
            record = await provider.create_intent(params)
        except ProviderError as e:
            logger.warning(
                "Payment intent creation failed",
                extra={
                    "operation": operation.value,
                    "category": e.failure.category.value
                }
            )
            raise translate_provider_failure(e.failure, operation) from e
        except PaymentError:
            raise
        except Exception as e:
            raise translate_exception(e, operation) from e

        logger.info(
            "Payment intent created",
            extra={"operation": operation.value, "intent_id": record.id}
        )
        return record

    async def validate_payment_intent(self, data: Any) -> ValidationResult:
        """Check whether an existing payment intent can back a booking.

        An unknown ID is not an error: it yields a negative result with the
        ``not_found`` status.

        Args:
            data (Any): The decoded lookup request body.

        Returns:
            ValidationResult: Usability of the intent and its echoed fields.

        Raises:
            PaymentError: On invalid input, missing configuration or any
                provider failure other than a missing intent.
        """
        operation = OperationEnum.VALIDATE_INTENT
        intent_id = validate_lookup_payload(data)
        provider = self._provider()

        try:
            outcome = await provider.retrieve_intent(intent_id)
        except PaymentError:
            raise
        except Exception as e:
            raise translate_exception(e, operation) from e

        if isinstance(outcome, IntentNotFound):
            logger.info(
                "Payment intent not found",
                extra={"operation": operation.value, "intent_id": intent_id}
            )
            return ValidationResult.not_found()

        if isinstance(outcome, ProviderFailure):
            logger.warning(
                "Payment intent validation failed",
                extra={
                    "operation": operation.value,
                    "category": outcome.category.value
                }
            )
            raise translate_provider_failure(outcome, operation)

        return ValidationResult.from_record(outcome.record)
