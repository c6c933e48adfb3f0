"""Checkout: submit the cart as an order, then empty it."""
from dataclasses import dataclass
from decimal import Decimal

from storefront.cart.service import CartStore
from storefront.errors import InvalidOrderError
from storefront.logging import get_logger
from storefront.services.repositories import OrderRepository
from .message import build_whatsapp_url

logger = get_logger(__name__)


@dataclass(frozen=True)
class CheckoutResult:
    order_id: object
    whatsapp_url: str
    total: Decimal


class CheckoutService:
    """Hands the cart to the order backend and clears it once confirmed."""

    def __init__(self, store: CartStore, orders: OrderRepository):
        self.store = store
        self.orders = orders

    async def checkout(self) -> CheckoutResult:
        """
        Submit the current cart.

        The cart is cleared only after the order is stored; on any error it
        is left untouched and the error propagates.
        """
        state = self.store.state
        if state.is_empty:
            raise InvalidOrderError()

        # Built before clearing: the message needs the lines
        url = build_whatsapp_url(state)
        total = state.display_total

        order_id = await self.orders.submit(list(state), total)
        self.store.clear_cart()

        logger.info(f"Checkout complete: order {order_id}, total {total}")
        return CheckoutResult(order_id=order_id, whatsapp_url=url, total=total)
