"""Cart store: session cart state with snapshot persistence."""
import os
from typing import Callable, List, Optional

from storefront.errors import PersistenceLoadError
from storefront.logging import get_logger, sanitize_cart_key, sanitize_id_for_logging
from .models import CartLine, CartState
from .storage import SnapshotStorage

logger = get_logger(__name__)

CART_STORAGE_KEY = os.environ.get("CART_STORAGE_KEY", "vida_animada_cart")

Subscriber = Callable[[CartState], None]


class CartStore:
    """
    Owns the cart for one session.

    Features:
    - Hydrates once from storage; corrupt snapshots fall back to an empty cart
    - Writes the full snapshot after every mutation
    - Notifies subscribers synchronously with the new state

    Create one instance per session and pass it to whoever needs the cart.
    """

    def __init__(
        self,
        storage: SnapshotStorage,
        key: str = CART_STORAGE_KEY,
        autoload: bool = True,
    ):
        self.storage = storage
        self.key = key
        self._state = CartState()
        self._subscribers: List[Subscriber] = []
        self._loaded = False
        if autoload:
            self.load()

    @property
    def state(self) -> CartState:
        return self._state

    def load(self) -> CartState:
        """Hydrate from storage. Never raises; a bad snapshot yields an empty cart."""
        if self._loaded:
            return self._state
        self._loaded = True

        try:
            raw = self.storage.load(self.key)
        except Exception as e:
            logger.error(f"Failed to read cart snapshot '{sanitize_cart_key(self.key)}': {e}")
            return self._state

        if not raw:
            return self._state

        try:
            self._state = CartState.from_snapshot(raw)
        except PersistenceLoadError as e:
            logger.warning(f"Corrupted cart snapshot '{sanitize_cart_key(self.key)}', starting empty: {e}")
            self._state = CartState()
        else:
            logger.info(f"Loaded cart '{sanitize_cart_key(self.key)}' with {len(self._state)} lines")
        return self._state

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a callback for state changes. Returns an unsubscribe function."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _commit(self, new_state: CartState) -> CartState:
        # Persist first: if the write raises, memory keeps the old state
        saved = self.storage.save(self.key, new_state.to_snapshot())
        if not saved:
            logger.warning(f"Storage did not confirm save of cart '{sanitize_cart_key(self.key)}'")
        self._state = new_state

        for callback in list(self._subscribers):
            try:
                callback(new_state)
            except Exception:
                logger.exception("Cart subscriber failed")
        return new_state

    # Commands

    def add_to_cart(self, item: CartLine) -> CartState:
        """Add one unit of item; an existing line with the same identity is incremented."""
        logger.debug(f"Add {sanitize_id_for_logging(item.identity)} to cart")
        return self._commit(self._state.add(item))

    def remove_from_cart(self, identity) -> CartState:
        """Remove the line; absent identity is a no-op."""
        return self._commit(self._state.remove(identity))

    def update_quantity(self, identity, new_quantity: int) -> CartState:
        """Set the quantity exactly; anything below 1 removes the line."""
        return self._commit(self._state.set_quantity(identity, new_quantity))

    def clear_cart(self) -> CartState:
        return self._commit(CartState())

    # Queries

    def total_items(self) -> int:
        return self._state.total_items

    def total_price(self):
        return self._state.total_price

    def display_total(self):
        return self._state.display_total

    def get_line(self, identity) -> Optional[CartLine]:
        return self._state.get(identity)
