from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from payments.models import PaymentIntentRecord, ValidationResult

from .exapmles.payments import (
    payment_intent_response_schema_example,
    validate_payment_intent_response_schema_example
)


class PaymentIntentResponseSchema(BaseModel):
    id: str
    client_secret: str = Field(alias="clientSecret")
    created: int
    livemode: bool
    amount: int
    currency: str
    status: str

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": payment_intent_response_schema_example
        }
    )

    @classmethod
    def from_record(
        cls,
        record: PaymentIntentRecord
    ) -> "PaymentIntentResponseSchema":
        return cls(
            id=record.id,
            client_secret=record.client_secret,
            created=record.created_at,
            livemode=record.is_live_mode,
            amount=record.amount_minor_units,
            currency=record.currency_code,
            status=record.status
        )


class ValidatePaymentIntentResponseSchema(BaseModel):
    valid: bool
    status: str
    amount: Optional[int] = None
    currency: Optional[str] = None
    id: Optional[str] = None
    error: Optional[str] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": validate_payment_intent_response_schema_example
        }
    )

    @classmethod
    def from_result(
        cls,
        result: ValidationResult
    ) -> "ValidatePaymentIntentResponseSchema":
        return cls(
            valid=result.is_usable,
            status=result.status,
            amount=result.amount_minor_units,
            currency=result.currency_code,
            id=result.id,
            error=result.error
        )
