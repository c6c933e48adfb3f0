"""Order Repository - Order operations."""
import asyncio
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Union

import httpx
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from .base import BaseRepository
from storefront.cart.models import CartLine
from storefront.errors import InvalidOrderError, OrderSubmissionError, StockUnavailableError
from storefront.logging import get_logger
from storefront.models import OrderItemType, OrderLineIn
from storefront.services.money import to_float

logger = get_logger(__name__)

ORDER_STATUS_PENDING = "pendiente"


def _as_item(line: Union[CartLine, OrderLineIn]) -> OrderLineIn:
    if isinstance(line, OrderLineIn):
        return line
    return OrderLineIn.from_cart_line(line)


class OrderRepository(BaseRepository):
    """Order database operations."""

    @retry(
        reraise=True,
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.3, min=0.3, max=3),
        retry=retry_if_exception_type(httpx.TransportError),
    )
    async def check_stock(self, item: OrderLineIn) -> bool:
        """Ask the backend whether `item.quantity` units are available."""
        result = self.client.rpc("check_stock_availability", {
            "item_id": item.id,
            "item_type": item.type.value,
            "quantity_wanted": item.quantity,
            "component_variant_ids": list(item.component_variant_ids),
        }).execute()
        return bool(result.data)

    async def _is_available(self, item: OrderLineIn) -> bool:
        try:
            return await self.check_stock(item)
        except Exception as e:
            logger.warning(f"Stock check failed for {item.id}: {e}")
            return False

    async def create_order(self, total: Decimal) -> Dict[str, Any]:
        """Insert the order header. Orders always start pending."""
        result = self.client.table("orders").insert({
            "total_price": to_float(total),
            "status": ORDER_STATUS_PENDING,
        }).execute()
        return result.data[0]

    async def create_order_items(self, order_id, items: Iterable[OrderLineIn]) -> None:
        """Insert one order_items row per item. Bundles reference their product."""
        rows: List[Dict[str, Any]] = [
            {
                "order_id": order_id,
                "unit_price": to_float(item.price),
                "quantity": item.quantity,
                "product_id": item.id if item.type is not OrderItemType.VARIANT else None,
                "product_variant_id": item.id if item.type is OrderItemType.VARIANT else None,
            }
            for item in items
        ]
        self.client.table("order_items").insert(rows).execute()

    async def delete_order(self, order_id) -> None:
        self.client.table("orders").delete().eq("id", order_id).execute()

    async def submit(self, lines: List[Union[CartLine, OrderLineIn]], total: Decimal):
        """
        Create a pending order with its items.

        Stock is checked for all items at once but not decremented here.
        If the items cannot be written, the order header is deleted again.

        Returns:
            The new order id

        Raises:
            InvalidOrderError: no lines, no total, or a quantity below 1
            StockUnavailableError: an item is not available
            OrderSubmissionError: backend write failed
        """
        items = [_as_item(line) for line in lines]
        if not items or not total or any(item.quantity < 1 for item in items):
            raise InvalidOrderError()

        availability = await asyncio.gather(*(self._is_available(item) for item in items))
        for item, available in zip(items, availability):
            if not available:
                raise StockUnavailableError(item.name or "un producto")
        logger.info("Stock check OK for order")

        try:
            order = await self.create_order(total)
        except Exception as e:
            logger.error(f"Failed to create order: {e}")
            raise OrderSubmissionError(str(e)) from e
        order_id = order["id"]
        logger.info(f"Order created (pending): {order_id}")

        try:
            await self.create_order_items(order_id, items)
        except Exception as e:
            logger.error(f"Failed to insert items, rolling back order {order_id}: {e}")
            try:
                await self.delete_order(order_id)
            except Exception as rollback_error:
                logger.error(f"Rollback of order {order_id} failed: {rollback_error}")
            raise OrderSubmissionError(str(e)) from e

        logger.info(f"Order {order_id} items inserted")
        return order_id
