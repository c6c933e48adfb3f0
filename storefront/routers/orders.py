"""
Orders API Router

Receives the cart at checkout and records a pending order.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from storefront.errors import (
    ERROR_INTERNAL,
    InvalidOrderError,
    StockUnavailableError,
)
from storefront.logging import get_logger
from storefront.models import CreateOrderRequest, CreateOrderResponse
from storefront.services.repositories import OrderRepository
from .deps import get_order_repo

logger = get_logger(__name__)

router = APIRouter(tags=["orders"])


@router.post("/api/create-order", response_model=CreateOrderResponse)
async def create_order(
    request: CreateOrderRequest,
    repo: OrderRepository = Depends(get_order_repo),
):
    """Create a pending order from posted cart lines. Returns {orderId}."""
    try:
        order_id = await repo.submit(request.cart_items, request.total)
    except InvalidOrderError as e:
        return JSONResponse(status_code=400, content={"error": str(e)})
    except StockUnavailableError as e:
        logger.warning(f"Stock check failed while creating order: {e.item_name}")
        return JSONResponse(status_code=409, content={"error": str(e)})
    except Exception as e:
        logger.error(f"Error in /api/create-order: {e}")
        return JSONResponse(
            status_code=500,
            content={"error": ERROR_INTERNAL, "details": str(e)},
        )

    return CreateOrderResponse(order_id=order_id)
