"""Cart package: models, snapshot storage, and the session cart store."""
from .models import CartLine, CartState, LineKind, line_from_product
from .service import CartStore, CART_STORAGE_KEY
from .storage import MemoryStorage, RedisStorage, SnapshotStorage

__all__ = [
    "CartLine",
    "CartState",
    "LineKind",
    "line_from_product",
    "CartStore",
    "CART_STORAGE_KEY",
    "MemoryStorage",
    "RedisStorage",
    "SnapshotStorage",
]
