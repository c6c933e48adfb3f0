"""Product Repository - Product catalog operations."""
from typing import Any, Dict, List, Optional

from .base import BaseRepository
from storefront.logging import get_logger, sanitize_string_for_logging
from storefront.models import Product, ProductPage

logger = get_logger(__name__)

PRODUCTS_PER_PAGE = 12
PRODUCT_IMAGES_BUCKET = "product-images"

# Listing cards only need a thumbnail from variants or bundle components
LISTING_COLUMNS = (
    "id, name, base_price, product_type, image_url, category, tag, "
    "product_variants (variant_image_url), "
    "bundle_links ( product_variants ( variant_image_url ) )"
)

# sort key -> (column, descending)
SORT_ORDERS = {
    "price-asc": ("base_price", False),
    "price-desc": ("base_price", True),
    "name-asc": ("name", False),
    "default": ("id", True),
}


class ProductRepository(BaseRepository):
    """Product database operations."""

    async def list_page(
        self,
        page: int = 1,
        category: str = "todos",
        sort: str = "default",
    ) -> ProductPage:
        """Get one page of products, filtered by category and sorted."""
        if page < 1:
            raise ValueError(f"Invalid page number: {page}")

        start_index = (page - 1) * PRODUCTS_PER_PAGE
        end_index = start_index + PRODUCTS_PER_PAGE - 1

        query = self.client.table("products").select(LISTING_COLUMNS, count="exact")
        if category != "todos":
            query = query.eq("category", category)

        column, desc = SORT_ORDERS.get(sort, SORT_ORDERS["default"])
        query = query.order(column, desc=desc)

        result = query.range(start_index, end_index).execute()
        count = result.count or 0

        return ProductPage(
            products=result.data or [],
            total_products=count,
            current_page=page,
            has_next_page=end_index < count - 1,
        )

    async def search(self, term: str, limit: int = 50) -> List[Dict[str, Any]]:
        """Search products by name or description (case-insensitive)."""
        term = (term or "").strip()
        if not term:
            return []

        pattern = f"%{term}%"
        result = self.client.table("products").select(
            "id, name, base_price, product_type, image_url, tag, "
            "product_variants (variant_image_url), "
            "bundle_links (product_variants (variant_image_url))"
        ).or_(
            f"name.ilike.{pattern},description.ilike.{pattern}"
        ).limit(limit).execute()

        logger.debug(f"Search '{sanitize_string_for_logging(term)}' -> {len(result.data or [])} products")
        return result.data or []

    async def get_with_variants(self, product_id) -> Optional[Product]:
        """Get product by ID together with its variants."""
        result = self.client.table("products").select(
            "*, product_variants (*)"
        ).eq("id", product_id).execute()

        if not result.data:
            return None
        return Product(**result.data[0])

    async def list_ids(self) -> List[str]:
        """IDs of every product (product page pre-rendering)."""
        result = self.client.table("products").select("id").execute()
        return [str(p["id"]) for p in result.data or []]

    # ==================== ADMIN ====================

    async def list_all(self) -> List[Product]:
        """All products, newest first."""
        result = self.client.table("products").select("*").order("id", desc=True).execute()
        return [Product(**p) for p in result.data or []]

    async def create(self, data: Dict[str, Any]) -> Product:
        """Create new product."""
        result = self.client.table("products").insert(data).execute()
        logger.info(f"Created product {result.data[0]['id']}")
        return Product(**result.data[0])

    async def update(self, product_id, data: Dict[str, Any]) -> Optional[Product]:
        """Update product."""
        result = self.client.table("products").update(data).eq("id", product_id).execute()
        return Product(**result.data[0]) if result.data else None

    async def delete(self, product_id) -> bool:
        """Delete product. Returns False when nothing matched."""
        result = self.client.table("products").delete().eq("id", product_id).execute()
        return bool(result.data)

    async def upload_image(self, file_name: str, content: bytes) -> str:
        """Upload a product image and return its public URL."""
        bucket = self.client.storage.from_(PRODUCT_IMAGES_BUCKET)
        bucket.upload(file_name, content)
        return bucket.get_public_url(file_name)
