from fastapi import HTTPException, status

from exceptions.payments import ErrorKindEnum, PaymentError

ERROR_KIND_STATUS_CODES = {
    ErrorKindEnum.INVALID_ARGUMENT: status.HTTP_400_BAD_REQUEST,
    ErrorKindEnum.FAILED_PRECONDITION: status.HTTP_400_BAD_REQUEST,
    ErrorKindEnum.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKindEnum.UNAUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
}


def payment_error_to_http(error: PaymentError) -> HTTPException:
    """Convert a payment error into an HTTP exception.

    The response detail carries the error kind as an upper-case status
    (e.g. ``INVALID_ARGUMENT``) next to the human-readable message.

    Args:
        error (PaymentError): The payment error to convert.

    Returns:
        HTTPException: The HTTP exception to raise from a route.
    """
    headers = None
    if error.kind is ErrorKindEnum.UNAUTHENTICATED:
        headers = {"WWW-Authenticate": "Bearer"}
    return HTTPException(
        status_code=ERROR_KIND_STATUS_CODES[error.kind],
        detail={"status": error.kind.name, "message": error.message},
        headers=headers
    )
