"""
Leftover (offcut) calculation for stock sheets.

Every stock sheet whose product is used by at least one order item yields one
leftover record holding the area still unused after all those items are cut.
Results are recomputed from scratch on every call; inputs are never mutated.
"""
import logging
from typing import Iterable, List, Optional, Tuple

from offcut_tracker.config import MM2_PER_M2
from offcut_tracker.models.leftover import (
    STATUS_AVAILABLE,
    STATUS_USED,
    LeftoverPiece,
    LeftoverSummary,
    LeftoverWarning,
)
from offcut_tracker.models.records import Order, Product, StockSheet, parse_number

logger = logging.getLogger(__name__)

_CONSUMED_STATUSES = ('leftover', 'used')


def parse_size(size: str) -> Tuple[float, float]:
    """Split ``"<length>x<width>"``; missing parts are 0, unreadable ones NaN."""
    tokens = str(size).split('x')
    length = parse_number(tokens[0]) if len(tokens) > 0 else 0.0
    width = parse_number(tokens[1]) if len(tokens) > 1 else 0.0
    return length, width


def _collect_usage(product_id: str, orders: Iterable[Order]) -> Tuple[float, List[str]]:
    used_area = 0.0
    refs = []
    for order in orders:
        for item in order.items:
            if item.product_id != product_id:
                continue
            used_area += item.length * item.width * item.qty / MM2_PER_M2
            refs.append(order.order_ref)
    # dict keeps first-seen order
    return used_area, list(dict.fromkeys(refs))


def _warn(diagnostics: Optional[list], sheet_id: str, kind: str, message: str):
    logger.debug("Sheet %s: %s", sheet_id, message)
    if diagnostics is not None:
        diagnostics.append(LeftoverWarning(sheet_id=sheet_id, kind=kind, message=message))


def calculate_leftovers(stock_sheets: Iterable[StockSheet],
                        orders: Iterable[Order],
                        products: Iterable[Product],
                        diagnostics: Optional[list] = None) -> List[LeftoverPiece]:
    """
    Derive the leftover pieces for all stock sheets.

    Args:
        stock_sheets: Stock sheet snapshot
        orders: Orders with their line items
        products: Product catalogue used to resolve sheet products
        diagnostics: Optional list that receives a LeftoverWarning for every
            sheet skipped or degraded because of bad data

    Returns:
        List[LeftoverPiece]: One piece per sheet with usage and remaining area,
        in stock sheet order
    """
    orders = list(orders)
    warnings_before = len(diagnostics) if diagnostics is not None else 0
    products_by_id = {}
    for product in products:
        products_by_id.setdefault(product.id, product)

    pieces = []
    for sheet in stock_sheets:
        product = products_by_id.get(sheet.product_id)
        if product is None:
            _warn(diagnostics, sheet.id, 'missing-product',
                  f"product '{sheet.product_id}' not found")
            continue

        length, width = parse_size(sheet.size)
        total_area = length * width / MM2_PER_M2
        size_ok = total_area > 0
        if not size_ok:
            _warn(diagnostics, sheet.id, 'malformed-size', f"unusable size '{sheet.size}'")

        used_area, from_orders = _collect_usage(sheet.product_id, orders)
        remaining_area = total_area - used_area

        if size_ok and used_area > 0 and not remaining_area > 0:
            _warn(diagnostics, sheet.id, 'over-consumed',
                  f"orders use {used_area:.4f} m² of a {total_area:.4f} m² sheet")

        if not (remaining_area > 0 and used_area > 0):
            continue

        utilization_ratio = used_area / total_area
        status = STATUS_USED if sheet.status in _CONSUMED_STATUSES else STATUS_AVAILABLE
        pieces.append(LeftoverPiece(
            id=f"leftover-{sheet.id}",
            sheet_id=sheet.id,
            product_id=sheet.product_id,
            product_name=product.name,
            original_length=length,
            original_width=width,
            remaining_length=length,
            remaining_width=width * (1 - utilization_ratio),
            total_area=total_area,
            used_area=used_area,
            remaining_area=remaining_area,
            date_created=sheet.date_received,
            status=status,
            from_orders=from_orders,
        ))

    if diagnostics is not None and len(diagnostics) > warnings_before:
        logger.warning("Leftover calculation reported %d data problem(s)",
                       len(diagnostics) - warnings_before)
    logger.info("Computed %d leftover piece(s)", len(pieces))
    return pieces


def summarize_leftovers(pieces: Iterable[LeftoverPiece]) -> LeftoverSummary:
    summary = LeftoverSummary()
    for piece in pieces:
        summary.count += 1
        summary.total_remaining_area += piece.remaining_area
        if piece.status == STATUS_AVAILABLE:
            summary.available_count += 1
        elif piece.status == STATUS_USED:
            summary.used_count += 1
    return summary
