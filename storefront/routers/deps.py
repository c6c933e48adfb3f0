"""
Shared Dependencies for Routers

Lazy-loaded singletons to keep serverless cold starts cheap.
"""

from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from storefront.services.repositories import OrderRepository, ProductRepository


# ==================== LAZY SINGLETONS ====================

_product_repo: Optional["ProductRepository"] = None
_order_repo: Optional["OrderRepository"] = None


def get_product_repo() -> "ProductRepository":
    """Get or create ProductRepository singleton (lazy loaded)"""
    global _product_repo
    if _product_repo is None:
        from storefront.db import get_supabase_sync
        from storefront.services.repositories import ProductRepository
        _product_repo = ProductRepository(get_supabase_sync())
    return _product_repo


def get_order_repo() -> "OrderRepository":
    """Get or create OrderRepository singleton (lazy loaded)"""
    global _order_repo
    if _order_repo is None:
        from storefront.db import get_supabase_sync
        from storefront.services.repositories import OrderRepository
        _order_repo = OrderRepository(get_supabase_sync())
    return _order_repo
