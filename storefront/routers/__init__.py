"""
FastAPI Routers Package

All routers are included in api/index.py.
"""

from storefront.routers.products import router as products_router
from storefront.routers.orders import router as orders_router

__all__ = [
    "products_router",
    "orders_router",
]
