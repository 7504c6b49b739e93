# storefront/core/errors.py
"""
Business-level exceptions raised by the cart and checkout domain.

Models raise these and never build HTTP errors themselves; services catch
them and convert them with `raise_http`.
"""

from fastapi import HTTPException, status


class StorefrontError(Exception):
    """Base exception for all storefront business errors."""

    def __init__(self, message: str = "Storefront error"):
        self.message = message
        super().__init__(self.message)


class EmptyCartError(StorefrontError):
    """Raised when checkout is entered with nothing in the cart."""

    def __init__(self):
        super().__init__("Cart is empty")


class CheckoutValidationError(StorefrontError):
    """Raised when required checkout or order fields are missing."""

    def __init__(self, missing: list[str], message: str = "Required fields are missing"):
        self.missing = missing
        super().__init__(message)


class InvalidTransitionError(StorefrontError):
    """Raised when a checkout action is not allowed from the current step."""

    def __init__(self, current: str, action: str):
        self.current = current
        self.action = action
        super().__init__(f"Invalid checkout transition: {action} from {current}")


class PricingInProgressError(StorefrontError):
    """Raised when a step completion is attempted while pricing is pending."""

    def __init__(self):
        super().__init__("Delivery pricing is already in progress")


def raise_http(error: StorefrontError, status_code: int = status.HTTP_400_BAD_REQUEST):
    """Convert a business exception to an HTTP exception."""
    if isinstance(error, CheckoutValidationError):
        raise HTTPException(
            status_code=status_code,
            detail={"message": error.message, "missing": error.missing},
        )
    raise HTTPException(status_code=status_code, detail=error.message)
