"""
Products API Router

Public endpoints for the product catalog.
"""

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import JSONResponse

from storefront.errors import ERROR_INVALID_PAGE, ERROR_INTERNAL, ERROR_PRODUCT_NOT_FOUND
from storefront.logging import get_logger
from storefront.services.repositories import ProductRepository
from .deps import get_product_repo

logger = get_logger(__name__)

router = APIRouter(tags=["products"])


@router.get("/api/products")
async def get_products(
    page: str = Query("1"),
    category: str = Query("todos"),
    sort: str = Query("default"),
    repo: ProductRepository = Depends(get_product_repo),
):
    """Paginated product listing (12 per page)."""
    try:
        page_number = int(page)
    except ValueError:
        page_number = 0
    if page_number < 1:
        raise HTTPException(status_code=400, detail=ERROR_INVALID_PAGE)

    try:
        result = await repo.list_page(page=page_number, category=category, sort=sort)
    except Exception as e:
        logger.error(f"API Error fetching products: {e}")
        return JSONResponse(
            status_code=500,
            content={"message": ERROR_INTERNAL, "details": str(e)},
        )

    return result.model_dump(by_alias=True)


@router.get("/api/products/search")
async def search_products(
    q: str = Query(""),
    repo: ProductRepository = Depends(get_product_repo),
):
    """Search products by name or description."""
    products = await repo.search(q)
    return {"products": products, "searchTerm": q}


@router.get("/api/products/{product_id}")
async def get_product(
    product_id: str,
    repo: ProductRepository = Depends(get_product_repo),
):
    """Product with its variants."""
    product = await repo.get_with_variants(product_id)
    if not product:
        raise HTTPException(status_code=404, detail=ERROR_PRODUCT_NOT_FOUND)
    return product.model_dump(mode="json")
