"""
Tests for cart models
"""

import json
import pytest
from decimal import Decimal
from storefront.cart import CartLine, CartState, LineKind
from storefront.errors import PersistenceLoadError


class TestCartLine:
    """Tests for CartLine dataclass."""

    def test_simple_line(self, mug):
        """Simple lines carry no color or size."""
        assert mug.kind is LineKind.SIMPLE
        assert mug.color_name is None
        assert mug.size is None
        assert mug.quantity == 1

    def test_simple_line_drops_descriptors(self):
        """A simple line never keeps color/size even if given."""
        line = CartLine(identity="1", name="X", price=Decimal("1"), color_name="Rojo", size="S")
        assert line.color_name is None
        assert line.size is None

    def test_variant_line(self, shirt_red_s):
        """Variant lines are keyed on the variant id."""
        assert shirt_red_s.is_variant
        assert shirt_red_s.identity == "v-101"
        assert shirt_red_s.color_name == "Rojo"

    def test_numeric_identity_normalized(self):
        """Integer ids from the database become strings."""
        line = CartLine.simple(identity=42, name="X", price=1)
        assert line.identity == "42"
        assert line.price == Decimal("1")

    def test_float_price_is_exact(self):
        """Float prices go through str to avoid binary noise."""
        line = CartLine.simple(identity="1", name="X", price=5.5)
        assert line.price == Decimal("5.5")

    def test_subtotal(self, mug):
        """Subtotal is price times quantity."""
        assert mug.with_quantity(3).subtotal == Decimal("30.00")

    def test_to_dict_simple(self, mug):
        """Simple records omit color and size."""
        data = mug.to_dict()
        assert data["identity"] == "12"
        assert data["kind"] == "SIMPLE"
        assert data["price"] == "10.00"
        assert "color_name" not in data

    def test_to_dict_variant(self, shirt_red_s):
        """Variant records carry color and size."""
        data = shirt_red_s.to_dict()
        assert data["kind"] == "VARIANT"
        assert data["size"] == "S"

    def test_from_dict(self):
        """Test deserialization from dict."""
        line = CartLine.from_dict({
            "identity": "v-1",
            "name": "Remera",
            "price": "5.50",
            "image_url": "/img.png",
            "kind": "VARIANT",
            "color_name": "Azul",
            "size": "L",
            "quantity": 2,
        })
        assert line.kind is LineKind.VARIANT
        assert line.quantity == 2
        assert line.price == Decimal("5.50")

    def test_from_dict_legacy_variant(self):
        """Records without kind use id and are variants when they have a color."""
        line = CartLine.from_dict({
            "id": 55, "name": "Remera", "price": 5.5, "image_url": "/x.png",
            "color_name": "Rojo", "size": "M", "quantity": 1,
        })
        assert line.identity == "55"
        assert line.kind is LineKind.VARIANT

    def test_from_dict_legacy_simple(self):
        """Empty descriptors on a legacy record mean a simple product."""
        line = CartLine.from_dict({
            "id": 9, "name": "Lapicera", "price": 2, "color_name": "", "quantity": 4,
        })
        assert line.kind is LineKind.SIMPLE
        assert line.color_name is None

    @pytest.mark.parametrize("record", [
        "not a dict",
        {"name": "X", "price": "1", "quantity": 1},
        {"identity": "1", "price": "1", "quantity": 1},
        {"identity": "1", "name": "X", "quantity": 1},
        {"identity": "1", "name": "X", "price": "abc", "quantity": 1},
        {"identity": "1", "name": "X", "price": "-1", "quantity": 1},
        {"identity": "1", "name": "X", "price": "1", "quantity": 0},
        {"identity": "1", "name": "X", "price": "1", "quantity": "2"},
        {"identity": "1", "name": "X", "price": "1", "quantity": 1, "kind": "BUNDLE"},
        {"identity": "1", "name": "X", "price": "1", "quantity": 1, "size": 40},
    ])
    def test_from_dict_rejects_malformed(self, record):
        """Malformed records raise PersistenceLoadError."""
        with pytest.raises(PersistenceLoadError):
            CartLine.from_dict(record)


class TestCartState:
    """Tests for CartState transitions and totals."""

    def test_empty_state(self):
        """Test creating an empty cart."""
        state = CartState()
        assert state.is_empty
        assert state.total_items == 0
        assert state.total_price == 0

    def test_add_new_line(self, mug):
        """Adding a new identity appends it with quantity 1."""
        state = CartState().add(mug.with_quantity(5))
        assert len(state) == 1
        assert state.get("12").quantity == 1

    def test_add_accumulates(self, mug):
        """Adding the same identity twice yields one line with quantity 2."""
        state = CartState().add(mug).add(mug)
        assert len(state) == 1
        assert state.get("12").quantity == 2

    def test_add_keeps_existing_fields(self, mug):
        """Incrementing leaves name and price of the existing line untouched."""
        renamed = CartLine.simple(identity="12", name="Otro", price=Decimal("99"))
        state = CartState().add(mug).add(renamed)
        line = state.get("12")
        assert line.name == "Taza Gato"
        assert line.price == Decimal("10.00")

    def test_variants_are_distinct_lines(self, shirt_red_s, shirt_red_m):
        """Two variants of one product are separate lines."""
        state = CartState().add(shirt_red_s).add(shirt_red_m)
        assert len(state) == 2

    def test_insertion_order_preserved(self, mug, shirt_red_s, shirt_red_m):
        """Updates do not reorder lines."""
        state = CartState().add(mug).add(shirt_red_s).add(shirt_red_m).add(mug)
        state = state.set_quantity("v-101", 7)
        assert [line.identity for line in state] == ["12", "v-101", "v-102"]

    def test_set_quantity_exact(self, mug):
        """Quantity is set, not incremented."""
        state = CartState().add(mug).set_quantity("12", 4)
        assert state.get("12").quantity == 4

    def test_set_quantity_boundary(self, mug):
        """1 keeps the line, 0 removes it."""
        state = CartState().add(mug).add(mug)
        assert state.set_quantity("12", 1).get("12").quantity == 1
        assert state.set_quantity("12", 0).get("12") is None
        assert state.set_quantity("12", -3).is_empty

    def test_set_quantity_absent_is_noop(self, mug):
        """Unknown identities are ignored."""
        state = CartState().add(mug)
        assert state.set_quantity("nope", 3) == state

    def test_remove_idempotent(self, mug, shirt_red_s):
        """Removing twice equals removing once."""
        state = CartState().add(mug).add(shirt_red_s)
        once = state.remove("12")
        assert once.remove("12") == once
        assert [line.identity for line in once] == ["v-101"]

    def test_totals(self):
        """[10.00 x2, 5.50 x1] -> 3 items, 25.50."""
        state = CartState((
            CartLine.simple("a", "A", Decimal("10.00")).with_quantity(2),
            CartLine.simple("b", "B", Decimal("5.50")),
        ))
        assert state.total_items == 3
        assert state.total_price == Decimal("25.50")
        assert state.display_total == Decimal("25.50")

    def test_total_not_rounded_until_display(self):
        """Sub-cent prices accumulate before rounding."""
        line = CartLine.simple("a", "A", Decimal("0.333")).with_quantity(3)
        state = CartState((line,))
        assert state.total_price == Decimal("0.999")
        assert state.display_total == Decimal("1.00")


class TestSnapshot:
    """Snapshot serialization."""

    def test_round_trip(self, mug, shirt_red_s, shirt_red_m):
        """Serialize then parse yields an equal state."""
        state = CartState().add(mug).add(shirt_red_s).add(mug).add(shirt_red_m)
        restored = CartState.from_snapshot(state.to_snapshot())
        assert restored == state
        assert [line.quantity for line in restored] == [2, 1, 1]

    def test_snapshot_is_plain_list(self, mug):
        """Snapshot is a JSON list of records."""
        data = json.loads(CartState().add(mug).to_snapshot())
        assert isinstance(data, list)
        assert data[0]["identity"] == "12"

    @pytest.mark.parametrize("raw", [
        "{not json",
        '{"identity": "1"}',
        "42",
        '[{"identity": "1", "name": "X", "price": "1"}]',
        '[{"identity": "1", "name": "X", "price": "1", "quantity": 1},'
        ' {"identity": "1", "name": "Y", "price": "2", "quantity": 1}]',
    ])
    def test_from_snapshot_rejects(self, raw):
        """Anything but a list of unique well-formed lines is rejected."""
        with pytest.raises(PersistenceLoadError):
            CartState.from_snapshot(raw)
