from typing import Any, List, Optional


class CartError(Exception):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AuthenticationRequired(CartError):
    """Raised before any request when no credential is available."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)


class CartApiError(CartError):
    def __init__(self, message: str, status_code: Optional[int] = None, body: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class NoResponseError(CartApiError):
    def __init__(self, message: str = "No response from server. Please try again."):
        super().__init__(message)


class UnsupportedCartOperation(CartError):
    pass


class OrderSubmissionError(CartError):
    REJECTED = "rejected"
    FAILED = "failed"
    NO_RESPONSE = "no_response"

    def __init__(self, message: str, kind: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.kind = kind
        self.status_code = status_code


class OrderValidationError(CartError):
    def __init__(self, errors: List[str]):
        super().__init__("; ".join(errors) or "Order payload is invalid")
        self.errors = errors
