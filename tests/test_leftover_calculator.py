"""Tests for leftover calculation from stock sheets and orders."""

import math

import pytest

from offcut_tracker.leftovers.calculator import calculate_leftovers, parse_size, summarize_leftovers
from offcut_tracker.models.leftover import LeftoverPiece
from offcut_tracker.models.records import Order, OrderItem, StockSheet


# =============================================================================
# parse_size
# =============================================================================


class TestParseSize:
    def test_length_and_width(self):
        assert parse_size("2440x1220") == (2440.0, 1220.0)

    def test_surrounding_whitespace(self):
        assert parse_size(" 2440 x 1220 ") == (2440.0, 1220.0)

    def test_missing_width_is_zero(self):
        assert parse_size("2440") == (2440.0, 0.0)

    def test_uppercase_separator_is_not_split(self):
        assert parse_size("2440X1220") == (2440.0, 0.0)

    def test_non_numeric_token_is_nan(self):
        length, width = parse_size("abcx1220")
        assert math.isnan(length)
        assert width == 1220.0

    def test_empty_string(self):
        length, width = parse_size("")
        assert math.isnan(length)
        assert width == 0.0


# =============================================================================
# calculate_leftovers
# =============================================================================


class TestCalculateLeftovers:
    def test_partially_used_sheet(self, plywood_sheet, plywood_order, products):
        pieces = calculate_leftovers([plywood_sheet], [plywood_order], products)

        assert len(pieces) == 1
        piece = pieces[0]
        assert piece.id == "leftover-S1"
        assert piece.sheet_id == "S1"
        assert piece.product_id == "P1"
        assert piece.product_name == "Plywood 18mm"
        assert piece.original_length == 2440
        assert piece.original_width == 1220
        assert piece.total_area == pytest.approx(2.9768)
        assert piece.used_area == pytest.approx(1.2)
        assert piece.remaining_area == pytest.approx(1.7768)
        assert piece.date_created == "2024-03-01"
        assert piece.status == "available"
        assert piece.from_orders == ["ORD-001"]

    def test_remaining_dimensions_shrink_width_only(self, plywood_sheet, plywood_order, products):
        piece = calculate_leftovers([plywood_sheet], [plywood_order], products)[0]

        assert piece.remaining_length == 2440
        assert piece.remaining_width == pytest.approx(1220 * (1 - 1.2 / 2.9768))

    @pytest.mark.parametrize("status,expected", [
        ("available", "available"),
        ("in-use", "available"),
        ("used", "used"),
        ("leftover", "used"),
    ])
    def test_status_follows_sheet_status(self, status, expected, plywood_order, products):
        sheet = StockSheet(id="S1", product_id="P1", size="2440x1220", status=status)

        piece = calculate_leftovers([sheet], [plywood_order], products)[0]

        assert piece.status == expected

    def test_sheet_without_usage_has_no_leftover(self, plywood_sheet, products):
        other = Order(order_ref="ORD-002", items=[OrderItem(product_id="P2", length=500, width=500, qty=1)])

        assert calculate_leftovers([plywood_sheet], [other], products) == []

    def test_fully_consumed_sheet_has_no_leftover(self, plywood_sheet, products):
        order = Order(order_ref="ORD-003", items=[OrderItem(product_id="P1", length=2440, width=1220, qty=1)])
        diagnostics = []

        pieces = calculate_leftovers([plywood_sheet], [order], products, diagnostics)

        assert pieces == []
        assert [w.kind for w in diagnostics] == ["over-consumed"]

    def test_missing_product_is_skipped_silently(self, plywood_order, products):
        sheet = StockSheet(id="S9", product_id="UNKNOWN", size="2440x1220")

        assert calculate_leftovers([sheet], [plywood_order], products) == []

    def test_missing_product_reported_to_diagnostics(self, plywood_order, products):
        sheet = StockSheet(id="S9", product_id="UNKNOWN", size="2440x1220")
        diagnostics = []

        calculate_leftovers([sheet], [plywood_order], products, diagnostics)

        assert len(diagnostics) == 1
        assert diagnostics[0].sheet_id == "S9"
        assert diagnostics[0].kind == "missing-product"

    def test_malformed_size_produces_no_leftover(self, plywood_order, products):
        sheet = StockSheet(id="S1", product_id="P1", size="large")
        diagnostics = []

        pieces = calculate_leftovers([sheet], [plywood_order], products, diagnostics)

        assert pieces == []
        assert [w.kind for w in diagnostics] == ["malformed-size"]

    @pytest.mark.parametrize("size", ["2440", "2440x0", "0x1220"])
    def test_zero_area_size_is_only_reported_as_malformed(self, size, plywood_order, products):
        sheet = StockSheet(id="S1", product_id="P1", size=size)
        diagnostics = []

        pieces = calculate_leftovers([sheet], [plywood_order], products, diagnostics)

        assert pieces == []
        assert [w.kind for w in diagnostics] == ["malformed-size"]

    def test_order_refs_are_deduplicated_in_first_seen_order(self, plywood_sheet, products):
        orders = [
            Order(order_ref="ORD-B", items=[
                OrderItem(product_id="P1", length=100, width=100, qty=1),
                OrderItem(product_id="P1", length=200, width=100, qty=2),
            ]),
            Order(order_ref="ORD-A", items=[OrderItem(product_id="P1", length=100, width=100, qty=1)]),
            Order(order_ref="ORD-B", items=[OrderItem(product_id="P1", length=100, width=100, qty=1)]),
        ]

        piece = calculate_leftovers([plywood_sheet], orders, products)[0]

        assert piece.from_orders == ["ORD-B", "ORD-A"]
        assert piece.used_area == pytest.approx((10000 + 40000 + 10000 + 10000) / 1e6)

    def test_only_matching_items_count(self, plywood_sheet, products):
        order = Order(order_ref="ORD-004", items=[
            OrderItem(product_id="P1", length=1000, width=1000, qty=1),
            OrderItem(product_id="P2", length=1000, width=1000, qty=1),
        ])

        piece = calculate_leftovers([plywood_sheet], [order], products)[0]

        assert piece.used_area == pytest.approx(1.0)

    def test_every_sheet_of_a_product_sees_all_usage(self, plywood_order, products):
        sheets = [
            StockSheet(id="S1", product_id="P1", size="2440x1220"),
            StockSheet(id="S2", product_id="P1", size="3050x1220"),
        ]

        pieces = calculate_leftovers(sheets, [plywood_order], products)

        assert [p.sheet_id for p in pieces] == ["S1", "S2"]
        assert all(p.used_area == pytest.approx(1.2) for p in pieces)

    def test_area_conservation_and_positivity(self, products):
        sheets = [
            StockSheet(id="S1", product_id="P1", size="2440x1220"),
            StockSheet(id="S2", product_id="P2", size="1830x915"),
            StockSheet(id="S3", product_id="P2", size="1200x600"),
        ]
        orders = [
            Order(order_ref="O1", items=[OrderItem(product_id="P1", length=333, width=777, qty=3)]),
            Order(order_ref="O2", items=[OrderItem(product_id="P2", length=450, width=300, qty=4)]),
        ]

        pieces = calculate_leftovers(sheets, orders, products)

        assert len(pieces) == 3
        for piece in pieces:
            assert piece.remaining_area > 0
            assert piece.used_area > 0
            assert piece.total_area == pytest.approx(piece.used_area + piece.remaining_area)

    def test_inputs_are_not_mutated(self, plywood_sheet, plywood_order, products):
        before = (plywood_sheet.to_dict(), plywood_order.to_dict(), [p.to_dict() for p in products])

        calculate_leftovers([plywood_sheet], [plywood_order], products)

        assert (plywood_sheet.to_dict(), plywood_order.to_dict(), [p.to_dict() for p in products]) == before

    def test_repeated_calls_return_equal_fresh_results(self, plywood_sheet, plywood_order, products):
        first = calculate_leftovers([plywood_sheet], [plywood_order], products)
        second = calculate_leftovers([plywood_sheet], [plywood_order], products)

        assert first == second
        assert first[0] is not second[0]

    def test_accepts_generators(self, plywood_sheet, plywood_order, products):
        pieces = calculate_leftovers(
            (s for s in [plywood_sheet]),
            (o for o in [plywood_order]),
            (p for p in products),
        )

        assert len(pieces) == 1


# =============================================================================
# Aggregates
# =============================================================================


def _piece(sheet_id: str, remaining: float, status: str) -> LeftoverPiece:
    return LeftoverPiece(
        id=f"leftover-{sheet_id}", sheet_id=sheet_id, product_id="P1", product_name="Plywood",
        original_length=2000, original_width=1000, remaining_length=2000, remaining_width=500,
        total_area=2.0, used_area=2.0 - remaining, remaining_area=remaining,
        date_created="", status=status,
    )


class TestSummary:
    def test_summarize_leftovers(self):
        pieces = [_piece("S1", 1.0, "available"), _piece("S2", 0.5, "used"), _piece("S3", 0.25, "available")]

        summary = summarize_leftovers(pieces)

        assert summary.count == 3
        assert summary.total_remaining_area == pytest.approx(1.75)
        assert summary.available_count == 2
        assert summary.used_count == 1

    def test_empty_summary(self):
        summary = summarize_leftovers([])

        assert summary.count == 0
        assert summary.total_remaining_area == 0.0

    def test_utilization_percent(self):
        assert _piece("S1", 0.5, "available").utilization_percent == pytest.approx(75.0)
