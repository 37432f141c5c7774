from enum import Enum

from payments.models import ProviderFailure


class ErrorKindEnum(str, Enum):
    """Caller-facing error kinds.

    The values follow the callable-function status vocabulary so that
    booking clients can branch on them without knowing the provider.
    """
    INVALID_ARGUMENT = "invalid-argument"
    FAILED_PRECONDITION = "failed-precondition"
    INTERNAL = "internal"
    UNAUTHENTICATED = "unauthenticated"


class PaymentError(Exception):
    """Base exception class for payment-related errors.

    This is the parent class for all payment exceptions in the service.
    Subclasses only differ by their error kind.
    """
    kind: ErrorKindEnum = ErrorKindEnum.INTERNAL

    def __init__(self, message: str | None = None) -> None:
        """Initialize the base payment error.

        Args:
            message (str, optional): Custom error message. Defaults to generic message.
        """
        if message is None:
            message = "A payment error occurred."
        super().__init__(message)
        self.message = message


class PaymentValidationError(PaymentError):
    """Exception raised when request data fails validation.

    Always raised before any call to the payment provider is made.
    """
    kind = ErrorKindEnum.INVALID_ARGUMENT


class PaymentPreconditionError(PaymentError):
    """Exception raised when the payment cannot proceed in the current state.

    Covers a declined or otherwise unusable payment method reported by the
    provider during creation.
    """
    kind = ErrorKindEnum.FAILED_PRECONDITION


class ConfigurationError(PaymentPreconditionError):
    """Exception raised when the provider secret key is not configured."""

    def __init__(
        self,
        message: str = (
            "Stripe secret key not configured. Please set it in runtime "
            "config or environment variables."
        )
    ) -> None:
        super().__init__(message)


class PaymentProcessingError(PaymentError):
    """Exception raised when payment processing fails on the provider side.

    Rate limiting, outages, malformed provider responses and any failure
    that could not be classified end up here.
    """
    kind = ErrorKindEnum.INTERNAL


class PaymentAuthenticationError(PaymentError):
    """Exception raised when the authentication gate rejects a caller."""
    kind = ErrorKindEnum.UNAUTHENTICATED


class ProviderError(Exception):
    """Exception raised by a payment provider client when a call fails.

    Wraps the classified provider failure so that it can be translated into
    a caller-facing payment error at the handler boundary.
    """

    def __init__(self, failure: ProviderFailure) -> None:
        super().__init__(failure.message)
        self.failure = failure
