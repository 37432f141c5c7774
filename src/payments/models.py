from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, PositiveInt

NOT_FOUND_STATUS = "not_found"
NOT_FOUND_MESSAGE = "Payment intent not found"

# Statuses in which a booking may proceed.
USABLE_STATUSES = frozenset(
    {
        "succeeded",
        "processing",
        "requires_capture",
        "requires_confirmation",
        "requires_payment_method",
    }
)


class PaymentIntentRequest(BaseModel):
    """Validated request for creating a payment intent.

    Instances are built by ``validation.payments.validate_create_payload``
    which enforces the caller-facing error messages; the field constraints
    here keep the model from ever holding an invalid shape.
    """
    amount_minor_units: PositiveInt
    currency_code: str = Field(min_length=1)
    customer_email: Optional[str] = None
    metadata: Dict[str, str] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True, strict=True)


class PaymentIntentRecord(BaseModel):
    """Non-sensitive projection of a provider payment intent."""
    id: str
    client_secret: str
    created_at: int
    is_live_mode: bool
    amount_minor_units: int
    currency_code: str
    status: str

    model_config = ConfigDict(frozen=True)

    @property
    def is_usable(self) -> bool:
        return self.status in USABLE_STATUSES


class ValidationResult(BaseModel):
    """Outcome of validating an existing payment intent."""
    is_usable: bool
    status: str
    amount_minor_units: Optional[int] = None
    currency_code: Optional[str] = None
    id: Optional[str] = None
    error: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_record(cls, record: PaymentIntentRecord) -> "ValidationResult":
        return cls(
            is_usable=record.is_usable,
            status=record.status,
            amount_minor_units=record.amount_minor_units,
            currency_code=record.currency_code,
            id=record.id
        )

    @classmethod
    def not_found(cls) -> "ValidationResult":
        return cls(
            is_usable=False,
            status=NOT_FOUND_STATUS,
            error=NOT_FOUND_MESSAGE
        )


class ProviderErrorCategoryEnum(str, Enum):
    """Provider-agnostic classification of payment provider failures."""
    CARD_ERROR = "card_error"
    INVALID_REQUEST = "invalid_request"
    API_ERROR = "api_error"
    RATE_LIMIT = "rate_limit"
    API_CONNECTION = "api_connection"
    AUTHENTICATION = "authentication"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class IntentFound:
    record: PaymentIntentRecord


@dataclass(frozen=True)
class IntentNotFound:
    intent_id: str


@dataclass(frozen=True)
class ProviderFailure:
    category: ProviderErrorCategoryEnum
    message: str
    code: Optional[str] = None


IntentLookup = Union[IntentFound, IntentNotFound, ProviderFailure]
