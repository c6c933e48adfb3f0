"""Pytest configuration and fixtures"""
import os
import pytest
from decimal import Decimal
from unittest.mock import Mock

# Set test environment variables
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test_key")
os.environ.setdefault("UPSTASH_REDIS_REST_URL", "https://test.upstash.io")
os.environ.setdefault("UPSTASH_REDIS_REST_TOKEN", "test_token")

from storefront.cart import CartLine, CartStore, MemoryStorage


@pytest.fixture
def mock_supabase_client():
    """Mock Supabase client"""
    client = Mock()

    # Mock table operations
    table_mock = Mock()
    table_mock.select.return_value = table_mock
    table_mock.insert.return_value = table_mock
    table_mock.update.return_value = table_mock
    table_mock.delete.return_value = table_mock
    table_mock.eq.return_value = table_mock
    table_mock.or_.return_value = table_mock
    table_mock.limit.return_value = table_mock
    table_mock.order.return_value = table_mock
    table_mock.range.return_value = table_mock
    table_mock.execute.return_value = Mock(data=[], count=0)

    client.table.return_value = table_mock
    client.rpc.return_value = table_mock

    return client


@pytest.fixture
def storage():
    """Empty in-memory snapshot storage"""
    return MemoryStorage()


@pytest.fixture
def store(storage):
    """Cart store over in-memory storage"""
    return CartStore(storage)


@pytest.fixture
def mug():
    """Simple product line"""
    return CartLine.simple(identity="12", name="Taza Gato", price=Decimal("10.00"), image_url="/img/taza.png")


@pytest.fixture
def shirt_red_s():
    """Variant line: red, size S"""
    return CartLine.variant(
        identity="v-101", name="Remera Perro", price=Decimal("5.50"),
        image_url="/img/remera-roja.png", color_name="Rojo", size="S",
    )


@pytest.fixture
def shirt_red_m():
    """Variant line: red, size M"""
    return CartLine.variant(
        identity="v-102", name="Remera Perro", price=Decimal("5.50"),
        image_url="/img/remera-roja.png", color_name="Rojo", size="M",
    )


@pytest.fixture
def sample_product():
    """Sample product row with variants"""
    return {
        "id": 7,
        "name": "Remera Perro",
        "description": "Remera de algodón",
        "base_price": 5.5,
        "product_type": "VARIANT",
        "image_url": "/img/remera.png",
        "category": "remeras",
        "tag": None,
        "product_variants": [
            {"id": 101, "product_id": 7, "color_name": "Rojo", "size": "S", "stock": 3, "image_url": "/img/remera-roja.png"},
            {"id": 102, "product_id": 7, "color_name": "Rojo", "size": "M", "stock": 0, "image_url": None},
            {"id": 103, "product_id": 7, "color_name": "Azul", "size": "S", "stock": 1, "image_url": "/img/remera-azul.png"},
        ],
    }
