"""
Common Errors

Centralized error messages and the storefront exception hierarchy.
"""

# Cart errors
ERROR_CORRUPT_SNAPSHOT = "Cart snapshot is not a well-formed list of cart lines"
ERROR_EMPTY_CART = "Faltan datos del carrito o está vacío."

# Order errors
ERROR_STOCK_UNAVAILABLE = "Stock no disponible para {name}. Por favor, revisa tu carrito."
ERROR_INTERNAL = "Error interno del servidor"

# Product errors
ERROR_PRODUCT_NOT_FOUND = "Product not found"
ERROR_INVALID_PAGE = "Número de página inválido."


class StorefrontError(Exception):
    """Base class for storefront errors."""


class PersistenceLoadError(StorefrontError):
    """Persisted cart snapshot could not be parsed into cart lines."""

    def __init__(self, message: str = ERROR_CORRUPT_SNAPSHOT):
        super().__init__(message)


class InvalidOrderError(StorefrontError):
    """Order payload is empty or has no total."""

    def __init__(self, message: str = ERROR_EMPTY_CART):
        super().__init__(message)


class StockUnavailableError(StorefrontError):
    """Stock check failed for one of the order lines."""

    def __init__(self, item_name: str):
        self.item_name = item_name
        super().__init__(ERROR_STOCK_UNAVAILABLE.format(name=item_name))


class OrderSubmissionError(StorefrontError):
    """Order or order items could not be written to the backend."""
