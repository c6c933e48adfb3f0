"""
Storefront Core Module

- cart: session cart store with snapshot persistence
- checkout: WhatsApp order message and order submission
- db: Supabase and Upstash Redis clients
- services: money helpers and Supabase repositories
- routers: FastAPI endpoints

Note: imports are lazy to keep serverless cold starts cheap.
"""

__all__ = [
    "get_supabase_sync",
    "get_redis_sync",
    "CartStore",
]


def __getattr__(name):
    """Lazy attribute access for clean serverless loading."""
    if name == "get_supabase_sync":
        from storefront.db import get_supabase_sync
        return get_supabase_sync
    elif name == "get_redis_sync":
        from storefront.db import get_redis_sync
        return get_redis_sync
    elif name == "CartStore":
        from storefront.cart import CartStore
        return CartStore
    raise AttributeError(f"module 'storefront' has no attribute '{name}'")
