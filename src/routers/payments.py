import json
from typing import Any, Optional

from fastapi import APIRouter, Depends, Request, status

from config.dependencies import authorize_caller, get_payment_intent_service
from exceptions.payments import PaymentError
from payments.intents import PaymentIntentService
from routers.errors import payment_error_to_http
from schemas.exapmles.payments import (
    create_payment_intent_schema_example,
    payment_intent_not_found_response_example,
    validate_payment_intent_schema_example,
    validate_payment_intent_response_schema_example
)
from schemas.payments import (
    PaymentIntentResponseSchema,
    ValidatePaymentIntentResponseSchema
)

router = APIRouter()


async def read_json_body(request: Request) -> Any:
    """Decode the JSON request body.

    An empty or malformed body is treated as absent so the payment
    validators report it with their own messages.

    Args:
        request (Request): The incoming request.

    Returns:
        Any: The decoded body, or None when it cannot be decoded.
    """
    payload = await request.body()
    if not payload:
        return None
    try:
        return json.loads(payload)
    except ValueError:
        return None


def json_request_body(example: dict) -> dict:
    return {
        "requestBody": {
            "required": True,
            "content": {"application/json": {"example": example}}
        }
    }


unauthorized_response = {
    "description": "Authentication required and missing or invalid "
                   "(only when PAYMENTS_REQUIRE_AUTH is enabled)",
    "content": {
        "application/json": {
            "example": {
                "detail": {
                    "status": "UNAUTHENTICATED",
                    "message": "User must be authenticated to call this operation"
                }
            }
        }
    }
}


@router.post(
    "/create-intent/",
    response_model=PaymentIntentResponseSchema,
    status_code=status.HTTP_200_OK,
    openapi_extra=json_request_body(create_payment_intent_schema_example),
    summary="Create payment intent",
    description="Create a payment intent for a booking. The returned client "
                "secret lets the client complete the payment with the "
                "payment provider directly.",
    responses={
        200: {
            "description": "Payment intent created successfully",
            "content": {
                "application/json": {
                    "example": {
                        "id": "pi_3QxYz2LkdIwHu7ix0Abc1234",
                        "clientSecret": "pi_3QxYz2LkdIwHu7ix0Abc1234_secret_4dGh7TqWm9",
                        "created": 1792224000,
                        "livemode": False,
                        "amount": 15000,
                        "currency": "usd",
                        "status": "requires_payment_method"
                    }
                }
            }
        },
        400: {
            "description": "Invalid request data, card error or payment "
                           "provider not configured",
            "content": {
                "application/json": {
                    "example": {
                        "detail": {
                            "status": "INVALID_ARGUMENT",
                            "message": "Valid amount (in cents) is required"
                        }
                    }
                }
            }
        },
        401: unauthorized_response,
        500: {
            "description": "Payment provider error",
            "content": {
                "application/json": {
                    "example": {
                        "detail": {
                            "status": "INTERNAL",
                            "message": "Stripe API error: An unknown error occurred"
                        }
                    }
                }
            }
        }
    }
)
async def create_payment_intent(
    data: Any = Depends(read_json_body),
    caller: Optional[str] = Depends(authorize_caller),
    intent_service: PaymentIntentService = Depends(get_payment_intent_service)
) -> PaymentIntentResponseSchema:
    """Create a payment intent for a booking.

    Args:
        data (Any): Payment intent creation data.
        caller (Optional[str]): Caller ID when the authentication gate is on.
        intent_service (PaymentIntentService): Payment intent service dependency.

    Returns:
        PaymentIntentResponseSchema: Payment intent details for client-side processing.
    """
    try:
        record = await intent_service.create_payment_intent(data)
    except PaymentError as e:
        raise payment_error_to_http(e)

    return PaymentIntentResponseSchema.from_record(record)


@router.post(
    "/validate-intent/",
    response_model=ValidatePaymentIntentResponseSchema,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
    openapi_extra=json_request_body(validate_payment_intent_schema_example),
    summary="Validate payment intent",
    description="Check whether an existing payment intent is in a status "
                "that allows the booking to proceed. An unknown payment "
                "intent ID is reported as a negative result, not an error.",
    responses={
        200: {
            "description": "Payment intent checked",
            "content": {
                "application/json": {
                    "examples": {
                        "found": {
                            "summary": "Payment intent found",
                            "value": validate_payment_intent_response_schema_example
                        },
                        "not_found": {
                            "summary": "Payment intent not found",
                            "value": payment_intent_not_found_response_example
                        }
                    }
                }
            }
        },
        400: {
            "description": "Missing payment intent ID or payment provider "
                           "not configured",
            "content": {
                "application/json": {
                    "example": {
                        "detail": {
                            "status": "INVALID_ARGUMENT",
                            "message": "Payment intent ID is required"
                        }
                    }
                }
            }
        },
        401: unauthorized_response,
        500: {
            "description": "Payment provider error",
            "content": {
                "application/json": {
                    "example": {
                        "detail": {
                            "status": "INTERNAL",
                            "message": "Failed to validate payment intent: Too many requests"
                        }
                    }
                }
            }
        }
    }
)
async def validate_payment_intent(
    data: Any = Depends(read_json_body),
    caller: Optional[str] = Depends(authorize_caller),
    intent_service: PaymentIntentService = Depends(get_payment_intent_service)
) -> ValidatePaymentIntentResponseSchema:
    """Validate an existing payment intent.

    Args:
        data (Any): Payment intent lookup data.
        caller (Optional[str]): Caller ID when the authentication gate is on.
        intent_service (PaymentIntentService): Payment intent service dependency.

    Returns:
        ValidatePaymentIntentResponseSchema: Usability of the payment intent.
    """
    try:
        result = await intent_service.validate_payment_intent(data)
    except PaymentError as e:
        raise payment_error_to_http(e)

    return ValidatePaymentIntentResponseSchema.from_result(result)
