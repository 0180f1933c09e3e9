# storefront/domain/errors.py
"""
Domain errors raised by the service layer.

Every error carries the HTTP status the API answers with, so routers do not
have to translate them one by one (see the handler in ``storefront.main``).
"""


class StorefrontError(Exception):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


# --- sesje ---

class InvalidToken(StorefrontError):
    status_code = 401


class SessionExpired(StorefrontError):
    status_code = 401


class AlreadyLoggedIn(StorefrontError):
    status_code = 409


# --- konta ---

class AccountNotFound(StorefrontError):
    status_code = 404


class AccountAlreadyExists(StorefrontError):
    status_code = 409


class VerificationFailed(StorefrontError):
    status_code = 403


class NotOwner(StorefrontError):
    status_code = 403


class AddressNotFound(StorefrontError):
    status_code = 404


# --- katalog ---

class ProductNotFound(StorefrontError):
    status_code = 404


class ProductUnavailable(StorefrontError):
    status_code = 409


class InsufficientStock(StorefrontError):
    status_code = 409


# --- koszyk / wishlist ---

class CartNotFound(StorefrontError):
    status_code = 404


class CartEmpty(StorefrontError):
    status_code = 400


class EmptyCart(CartEmpty):
    """Checkout attempted with no line items."""


class ItemNotFound(StorefrontError):
    status_code = 404


class DuplicateWishlistItem(StorefrontError):
    status_code = 409


# --- zamówienia ---

class OrderNotFound(StorefrontError):
    status_code = 404


class AlreadyCancelled(StorefrontError):
    status_code = 409


# --- recenzje ---

class ReviewNotFound(StorefrontError):
    status_code = 404


class DuplicateReview(StorefrontError):
    status_code = 409


class InvalidRating(StorefrontError):
    status_code = 400


# --- alerty magazynowe ---

class AlertNotFound(StorefrontError):
    status_code = 404


class AlertAlreadyExists(StorefrontError):
    status_code = 409
