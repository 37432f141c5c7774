import json
from collections.abc import Mapping
from typing import Any

from exceptions.payments import PaymentValidationError
from payments.models import PaymentIntentRequest


def validate_amount(amount: Any) -> int:
    """Validate a payment amount given in minor currency units.

    Booleans are rejected even though they are integers in Python. Floats
    are accepted only when they hold a whole number.

    Args:
        amount (Any): The raw amount from the request body.

    Returns:
        int: The amount in minor units.

    Raises:
        PaymentValidationError: If the amount is missing, not a number or
            not strictly positive.
    """
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        raise PaymentValidationError("Valid amount (in cents) is required")
    if isinstance(amount, float) and not amount.is_integer():
        raise PaymentValidationError("Valid amount (in cents) is required")
    if amount <= 0:
        raise PaymentValidationError("Valid amount (in cents) is required")
    return int(amount)


def validate_currency(currency: Any) -> str:
    """Validate a currency code and normalize it to lowercase.

    Args:
        currency (Any): The raw currency from the request body.

    Returns:
        str: The lowercase currency code.

    Raises:
        PaymentValidationError: If the currency is missing or blank.
    """
    if not isinstance(currency, str) or not currency.strip():
        raise PaymentValidationError("Currency is required")
    return currency.strip().lower()


def validate_metadata_value(value: Any) -> str:
    """Validate a single metadata value.

    Numbers are spelled the way they appear in JSON. Nulls, booleans and
    nested containers are rejected rather than stringified.

    Args:
        value (Any): The raw metadata value.

    Returns:
        str: The metadata value as a string.

    Raises:
        PaymentValidationError: If the value is not a string or a number.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return json.dumps(value)
    raise PaymentValidationError("Metadata values must be strings or numbers")


def validate_create_payload(data: Any) -> PaymentIntentRequest:
    """Validate a payment intent creation request body.

    Args:
        data (Any): The decoded JSON request body.

    Returns:
        PaymentIntentRequest: The typed creation request.

    Raises:
        PaymentValidationError: On the first failing check.
    """
    if not isinstance(data, Mapping):
        raise PaymentValidationError("Request data is required")

    amount = validate_amount(data.get("amount"))
    currency = validate_currency(data.get("currency"))

    customer_email = data.get("customerEmail")
    if customer_email is not None and not isinstance(customer_email, str):
        raise PaymentValidationError("Customer email must be a string")

    metadata = data.get("metadata")
    if metadata is None:
        metadata = {}
    elif not isinstance(metadata, Mapping):
        raise PaymentValidationError("Metadata must be an object")

    return PaymentIntentRequest(
        amount_minor_units=amount,
        currency_code=currency,
        customer_email=customer_email or None,
        metadata={
            str(key): validate_metadata_value(value)
            for key, value in metadata.items()
        }
    )


def validate_lookup_payload(data: Any) -> str:
    """Validate a payment intent lookup request body.

    Args:
        data (Any): The decoded JSON request body.

    Returns:
        str: The payment intent ID to look up.

    Raises:
        PaymentValidationError: If the ID is missing or not a non-empty string.
    """
    intent_id = data.get("paymentIntentId") if isinstance(data, Mapping) else None
    if not isinstance(intent_id, str) or not intent_id:
        raise PaymentValidationError("Payment intent ID is required")
    return intent_id
