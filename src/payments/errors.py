"""Translation of payment provider failures into caller-facing errors."""
import logging
from enum import Enum

from exceptions.payments import (
    PaymentError,
    PaymentPreconditionError,
    PaymentProcessingError,
    PaymentValidationError
)
from payments.models import ProviderErrorCategoryEnum, ProviderFailure

logger = logging.getLogger(__name__)


class OperationEnum(str, Enum):
    CREATE_INTENT = "createPaymentIntent"
    VALIDATE_INTENT = "validatePaymentIntent"


_FALLBACK_PREFIXES = {
    OperationEnum.CREATE_INTENT: "Failed to create payment intent",
    OperationEnum.VALIDATE_INTENT: "Failed to validate payment intent",
}


def translate_provider_failure(
    failure: ProviderFailure,
    operation: OperationEnum
) -> PaymentError:
    """Map a classified provider failure to a payment error.

    Card and invalid request failures are only meaningful while creating an
    intent. During validation every failure is an internal error, since a
    missing intent never reaches this function.

    Args:
        failure (ProviderFailure): The classified provider failure.
        operation (OperationEnum): The operation that failed.

    Returns:
        PaymentError: The error to raise to the caller.
    """
    message = failure.message or "Unknown error"

    if operation is OperationEnum.CREATE_INTENT:
        if failure.category is ProviderErrorCategoryEnum.CARD_ERROR:
            return PaymentPreconditionError(f"Card error: {message}")
        if failure.category is ProviderErrorCategoryEnum.INVALID_REQUEST:
            return PaymentValidationError(f"Invalid request: {message}")
        if failure.category is ProviderErrorCategoryEnum.API_ERROR:
            return PaymentProcessingError(f"Stripe API error: {message}")

    return PaymentProcessingError(
        f"{_FALLBACK_PREFIXES[operation]}: {message}"
    )


def translate_exception(
    error: Exception,
    operation: OperationEnum
) -> PaymentError:
    """Map any exception raised while handling an operation to a payment error.

    Payment errors are already typed and pass through unchanged.

    Args:
        error (Exception): The exception to translate.
        operation (OperationEnum): The operation that failed.

    Returns:
        PaymentError: The error to raise to the caller.
    """
    if isinstance(error, PaymentError):
        return error
    logger.exception(
        "Unclassified failure",
        extra={"operation": operation.value, "category": "unclassified"}
    )
    return PaymentProcessingError(
        f"{_FALLBACK_PREFIXES[operation]}: {str(error) or 'Unknown error'}"
    )
