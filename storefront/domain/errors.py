# storefront/domain/errors.py
"""
Typowane bledy domeny. Warstwa HTTP mapuje je 1:1 na status i stabilny kod.
"""


class StorefrontError(Exception):
    status_code = 500
    code = "INTERNAL"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class Unauthenticated(StorefrontError):
    status_code = 401
    code = "UNAUTHENTICATED"

    def __init__(self, message: str = "Unauthenticated"):
        super().__init__(message)


class InvalidInput(StorefrontError):
    status_code = 400
    code = "INVALID_INPUT"

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class InvalidQuantity(InvalidInput):
    code = "INVALID_QUANTITY"

    def __init__(self, message: str = "Quantity must be a positive integer"):
        super().__init__(message, field="quantity")


class EmptyOrder(InvalidInput):
    code = "EMPTY_ORDER"

    def __init__(self, message: str = "Order must contain at least one item"):
        super().__init__(message, field="items")


class InvalidParameter(InvalidInput):
    code = "INVALID_PARAMETER"


class NotFound(StorefrontError):
    status_code = 404
    code = "NOT_FOUND"


class VariantNotFound(NotFound):
    code = "VARIANT_NOT_FOUND"

    def __init__(self, variant_id: int | None = None):
        self.variant_id = variant_id
        if variant_id is None:
            super().__init__("Variant not found")
        else:
            super().__init__(f"Variant {variant_id} not found")


class LineNotFound(NotFound):
    code = "CART_ITEM_NOT_FOUND"

    def __init__(self, line_id: int | None = None):
        self.line_id = line_id
        super().__init__("Cart item not found")


class OrderNotFound(NotFound):
    code = "ORDER_NOT_FOUND"

    def __init__(self, order_id: int | None = None):
        self.order_id = order_id
        super().__init__("Order not found")


class AddressNotFound(NotFound):
    code = "ADDRESS_NOT_FOUND"

    def __init__(self, address_id: int | None = None):
        self.address_id = address_id
        super().__init__("Address not found")


class ProductNotFound(NotFound):
    code = "PRODUCT_NOT_FOUND"

    def __init__(self, product_id: int | None = None):
        self.product_id = product_id
        super().__init__("Product not found")


class InsufficientStock(StorefrontError):
    """Naruszenie reguly biznesowej (stan magazynu), nie blad walidacji."""

    status_code = 400
    code = "INSUFFICIENT_STOCK"

    def __init__(self, variant_id: int | None = None, message: str | None = None):
        self.variant_id = variant_id
        if message is None:
            message = "Insufficient stock" if variant_id is None else f"Insufficient stock for variant {variant_id}"
        super().__init__(message)


class RateLimited(StorefrontError):
    status_code = 429
    code = "RATE_LIMITED"

    def __init__(self, message: str = "Too many requests, please try again later."):
        super().__init__(message)
