"""
Repository Pattern for Database Operations

- ProductRepository: catalog listing, search, admin product management
- OrderRepository: stock checks, orders and order items
"""
from .product_repo import ProductRepository, PRODUCTS_PER_PAGE
from .order_repo import OrderRepository

__all__ = [
    "ProductRepository",
    "OrderRepository",
    "PRODUCTS_PER_PAGE",
]
