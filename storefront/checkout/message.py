"""
WhatsApp order message.

The storefront has no payment step: checkout opens a WhatsApp chat with the
shop, pre-filled with the order summary built here.

Message layout:
    greeting

    📦 *Product*            one block per product name, first-seen order
       Cantidad: 2          simple products
       Color: Rojo          variant products, one pair per color
       Talles:  3u S, 2u M
       Subtotal: $20.00

    -------------------------
    *TOTAL DEL PEDIDO: $25.50*

    closing line
"""

import os
from collections import OrderedDict
from decimal import Decimal
from typing import Dict, List
from urllib.parse import quote

from storefront.cart.models import CartLine, CartState
from storefront.services.money import format_money

WHATSAPP_PHONE = os.environ.get("WHATSAPP_PHONE", "3804882298")
STORE_NAME = "Vida Animada"
NO_COLOR = "Sin Color"
SEPARATOR = "-------------------------"


def _group_by_name(state: CartState) -> "OrderedDict[str, List[CartLine]]":
    groups: "OrderedDict[str, List[CartLine]]" = OrderedDict()
    for line in state:
        groups.setdefault(line.name, []).append(line)
    return groups


def _variant_block(lines: List[CartLine]) -> List[str]:
    colors: Dict[str, List[str]] = OrderedDict()
    for line in lines:
        color = line.color_name or NO_COLOR
        colors.setdefault(color, []).append(f" {line.quantity}u {line.size or ''}")

    block = []
    for color, sizes in colors.items():
        block.append(f"   Color: {color}")
        block.append(f"   Talles: {','.join(sizes)}")
    return block


def build_order_message(state: CartState, store_name: str = STORE_NAME) -> str:
    """Compose the plain-text order summary for the shop."""
    parts = [f"¡Hola {store_name}! 👋 Me gustaría hacer el siguiente pedido:", ""]

    for name, lines in _group_by_name(state).items():
        subtotal = sum((line.subtotal for line in lines), Decimal("0"))
        parts.append(f"📦 *{name.strip()}*")
        # The first line decides how the whole group is listed
        if lines[0].is_variant:
            parts.extend(_variant_block(lines))
        else:
            parts.append(f"   Cantidad: {lines[0].quantity}")
        parts.append(f"   Subtotal: {format_money(subtotal)}")
        parts.append("")

    parts.append(SEPARATOR)
    parts.append(f"*TOTAL DEL PEDIDO: {format_money(state.display_total)}*")
    parts.append("")
    parts.append("¡Espero su respuesta para coordinar el pago y envío! Gracias 😊")
    return "\n".join(parts)


def build_whatsapp_url(state: CartState, phone: str = WHATSAPP_PHONE) -> str:
    """wa.me link that opens a chat with the order message pre-filled."""
    if state.is_empty:
        raise ValueError("Cannot build an order message for an empty cart")
    return f"https://wa.me/{phone}?text={quote(build_order_message(state), safe='')}"
