from typing import Dict, Any

create_payment_intent_schema_example: Dict[str, Any] = {
    "amount": 15000,
    "currency": "usd",
    "customerEmail": "guest@example.com",
    "metadata": {
        "appointmentDate": "2026-11-02",
        "serviceId": "deep-tissue-60"
    }
}

payment_intent_response_schema_example: Dict[str, Any] = {
    "id": "pi_3QxYz2LkdIwHu7ix0Abc1234",
    "clientSecret": "pi_3QxYz2LkdIwHu7ix0Abc1234_secret_4dGh7TqWm9",
    "created": 1792224000,
    "livemode": False,
    "amount": 15000,
    "currency": "usd",
    "status": "requires_payment_method"
}

validate_payment_intent_schema_example: Dict[str, Any] = {
    "paymentIntentId": "pi_3QxYz2LkdIwHu7ix0Abc1234"
}

validate_payment_intent_response_schema_example: Dict[str, Any] = {
    "valid": True,
    "status": "succeeded",
    "amount": 15000,
    "currency": "usd",
    "id": "pi_3QxYz2LkdIwHu7ix0Abc1234"
}

payment_intent_not_found_response_example: Dict[str, Any] = {
    "valid": False,
    "status": "not_found",
    "error": "Payment intent not found"
}
