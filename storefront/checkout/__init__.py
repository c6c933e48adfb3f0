"""Checkout package: WhatsApp message handoff and order submission."""
from .message import build_order_message, build_whatsapp_url
from .service import CheckoutResult, CheckoutService

__all__ = [
    "build_order_message",
    "build_whatsapp_url",
    "CheckoutResult",
    "CheckoutService",
]
