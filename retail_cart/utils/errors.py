from fastapi import HTTPException, status

from retail_cart.exceptions import (
    AuthenticationRequired,
    CartApiError,
    CartError,
    NoResponseError,
    OrderSubmissionError,
    OrderValidationError,
    UnsupportedCartOperation,
)


def to_http_error(error: CartError) -> HTTPException:
    if isinstance(error, AuthenticationRequired):
        return HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=error.message,
            headers={"WWW-Authenticate": "Bearer"},
        )

    if isinstance(error, UnsupportedCartOperation):
        return HTTPException(status.HTTP_409_CONFLICT, error.message)

    if isinstance(error, OrderValidationError):
        return HTTPException(
            422,
            {"message": error.message, "errors": error.errors},
        )

    if isinstance(error, OrderSubmissionError):
        if error.kind == OrderSubmissionError.NO_RESPONSE:
            return HTTPException(
                status.HTTP_504_GATEWAY_TIMEOUT,
                {"message": error.message, "kind": error.kind},
            )
        return HTTPException(
            status.HTTP_502_BAD_GATEWAY,
            {"message": error.message, "kind": error.kind},
        )

    if isinstance(error, NoResponseError):
        return HTTPException(status.HTTP_504_GATEWAY_TIMEOUT, error.message)

    # upstream refused the forwarded token
    if isinstance(error, CartApiError) and error.status_code == 401:
        return HTTPException(status.HTTP_401_UNAUTHORIZED, error.message)

    return HTTPException(status.HTTP_502_BAD_GATEWAY, error.message)
