"""
Business records supplied by the data layer: products, stock sheets and orders.
"""
import json
import logging
import math
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from offcut_tracker.config import MM2_PER_M2

logger = logging.getLogger(__name__)

STOCK_STATUSES = ('available', 'in-use', 'used', 'leftover')

_NUMBER_PREFIX = re.compile(r'^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?')


def parse_number(value: Any) -> float:
    """Parse like a lenient spreadsheet cell: longest numeric prefix, else NaN."""
    if isinstance(value, bool):
        return float('nan')
    if isinstance(value, (int, float)):
        return float(value)
    if value is None:
        return float('nan')
    match = _NUMBER_PREFIX.match(str(value).lstrip())
    if not match:
        return float('nan')
    return float(match.group(0))


def _pick(row: Dict[str, Any], *keys: str, default: Any = "") -> Any:
    for key in keys:
        value = row.get(key)
        if value is not None and value != "":
            return value
    return default


def _number(row: Dict[str, Any], *keys: str) -> float:
    value = parse_number(_pick(row, *keys, default=0))
    return value if math.isfinite(value) else 0.0


def _text(row: Dict[str, Any], *keys: str) -> str:
    return str(_pick(row, *keys, default=""))


@dataclass
class Product:
    id: str
    name: str
    category_id: str = ""
    length: float = 0.0
    width: float = 0.0
    thickness: str = ""
    unit_price: float = 0.0
    notes: str = ""

    @classmethod
    def from_dict(cls, row: Dict[str, Any]) -> 'Product':
        return cls(
            id=_text(row, 'id', 'Product ID'),
            name=_text(row, 'name', 'Name', 'Material'),
            category_id=_text(row, 'categoryId', 'Category ID'),
            length=_number(row, 'length', 'Length (mm)'),
            width=_number(row, 'width', 'Width (mm)'),
            thickness=_text(row, 'thickness', 'Thickness'),
            unit_price=_number(row, 'unitPrice', 'unitCost', 'Unit Price', 'Unit Cost'),
            notes=_text(row, 'notes', 'Notes'),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'categoryId': self.category_id,
            'length': self.length,
            'width': self.width,
            'thickness': self.thickness,
            'unitPrice': self.unit_price,
            'notes': self.notes
        }


@dataclass
class StockSheet:
    id: str
    product_id: str
    size: str
    date_received: str = ""
    status: str = 'available'
    purchase_id: str = ""
    factory_id: str = ""
    batch_ref: str = ""
    notes: str = ""

    @classmethod
    def from_dict(cls, row: Dict[str, Any]) -> 'StockSheet':
        status = _text(row, 'status', 'Status').strip().lower() or 'available'
        return cls(
            id=_text(row, 'id', 'Sheet ID'),
            product_id=_text(row, 'productId', 'Product ID', 'material', 'Material'),
            size=_text(row, 'size', 'Size (mm)', 'Size'),
            date_received=_text(row, 'dateReceived', 'Date Received', 'Date'),
            status=status,
            purchase_id=_text(row, 'purchaseId', 'Purchase ID'),
            factory_id=_text(row, 'factoryId', 'Factory ID'),
            batch_ref=_text(row, 'batchRef', 'Batch Ref', 'Batch/Ref'),
            notes=_text(row, 'notes', 'Notes'),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'productId': self.product_id,
            'size': self.size,
            'dateReceived': self.date_received,
            'status': self.status,
            'purchaseId': self.purchase_id,
            'factoryId': self.factory_id,
            'batchRef': self.batch_ref,
            'notes': self.notes
        }


@dataclass
class OrderItem:
    product_id: str
    length: float
    width: float
    qty: float
    id: str = ""
    unit_cost: float = 0.0
    unit_sale_price: float = 0.0
    notes: str = ""

    @property
    def area_m2(self) -> float:
        return self.length * self.width * self.qty / MM2_PER_M2

    @property
    def total_cost(self) -> float:
        return self.qty * self.unit_cost

    @property
    def total_sale(self) -> float:
        return self.qty * self.unit_sale_price

    @property
    def profit(self) -> float:
        return self.total_sale - self.total_cost

    @classmethod
    def from_dict(cls, row: Dict[str, Any]) -> 'OrderItem':
        return cls(
            product_id=_text(row, 'productId', 'Product ID', 'material', 'Material'),
            length=_number(row, 'length', 'Length (mm)'),
            width=_number(row, 'width', 'Width (mm)'),
            qty=_number(row, 'qty', 'Qty'),
            id=_text(row, 'id'),
            unit_cost=_number(row, 'unitCost', 'Unit Cost'),
            unit_sale_price=_number(row, 'unitSalePrice', 'Unit Sale Price'),
            notes=_text(row, 'notes', 'Notes'),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'productId': self.product_id,
            'length': self.length,
            'width': self.width,
            'qty': self.qty,
            'unitCost': self.unit_cost,
            'unitSalePrice': self.unit_sale_price,
            'notes': self.notes
        }


@dataclass
class Order:
    order_ref: str
    items: List[OrderItem] = field(default_factory=list)
    id: str = ""
    date: str = ""
    customer_id: str = ""
    customer_name: str = ""
    notes: str = ""

    @property
    def total_cost(self) -> float:
        return sum(item.total_cost for item in self.items)

    @property
    def total_sale(self) -> float:
        return sum(item.total_sale for item in self.items)

    @property
    def profit(self) -> float:
        return self.total_sale - self.total_cost

    @classmethod
    def from_dict(cls, row: Dict[str, Any]) -> 'Order':
        """
        Build an order from a data-layer row.

        Rows carrying an ``items`` list are multi-item orders. Anything else is a
        legacy single-item row whose piece is described by ``Piece Size (mm)``.
        """
        order_ref = _text(row, 'orderRef', 'Order Ref')
        if isinstance(row.get('items'), list):
            items = [OrderItem.from_dict(item) for item in _rows(row['items'], 'items')]
        else:
            items = _legacy_items(row, order_ref)
        return cls(
            order_ref=order_ref,
            items=items,
            id=_text(row, 'id', 'Order Ref', 'orderRef'),
            date=_text(row, 'date', 'Date'),
            customer_id=_text(row, 'customerId', 'Customer ID'),
            customer_name=_text(row, 'customerName', 'Customer'),
            notes=_text(row, 'notes', 'Notes'),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'orderRef': self.order_ref,
            'date': self.date,
            'customerId': self.customer_id,
            'customerName': self.customer_name,
            'items': [item.to_dict() for item in self.items],
            'notes': self.notes
        }


def _legacy_items(row: Dict[str, Any], order_ref: str) -> List[OrderItem]:
    product_id = _text(row, 'Product ID', 'productId', 'Material', 'material')
    if not product_id:
        return []
    length = width = 0.0
    piece_size = _pick(row, 'Piece Size (mm)', 'pieceSize', default="")
    if isinstance(piece_size, str):
        parts = piece_size.split('x')
        if len(parts) == 2:
            length = parse_number(parts[0])
            width = parse_number(parts[1])
            length = length if math.isfinite(length) else 0.0
            width = width if math.isfinite(width) else 0.0
    return [OrderItem(
        product_id=product_id,
        length=length,
        width=width,
        qty=_number(row, 'Qty', 'qty'),
        id=f"{order_ref}-item-1",
        unit_cost=_number(row, 'Unit Cost', 'unitCost'),
        unit_sale_price=_number(row, 'Unit Sale Price', 'unitSalePrice'),
    )]


@dataclass
class BusinessData:
    products: List[Product] = field(default_factory=list)
    stock_sheets: List[StockSheet] = field(default_factory=list)
    orders: List[Order] = field(default_factory=list)

    @classmethod
    def from_dict(cls, document: Dict[str, Any]) -> 'BusinessData':
        if not isinstance(document, dict):
            raise ValueError(f"Expected a JSON object at the top level, got {type(document).__name__}")
        return cls(
            products=[Product.from_dict(row) for row in _rows(document.get('products'), 'products')],
            stock_sheets=[StockSheet.from_dict(row) for row in _rows(document.get('stock'), 'stock')],
            orders=[Order.from_dict(row) for row in _rows(document.get('orders'), 'orders')],
        )


def _rows(value: Any, section: str) -> List[Dict[str, Any]]:
    """Rows of one section; anything that is not an object is skipped."""
    if value is None:
        return []
    if not isinstance(value, list):
        logger.warning("Ignoring '%s': expected a list, got %s", section, type(value).__name__)
        return []
    rows = [row for row in value if isinstance(row, dict)]
    if len(rows) < len(value):
        logger.warning("Skipped %d malformed row(s) in '%s'", len(value) - len(rows), section)
    return rows


def load_records(path: str, encoding: Optional[str] = 'utf-8') -> BusinessData:
    with open(path, encoding=encoding) as handle:
        document = json.load(handle)
    return BusinessData.from_dict(document)
