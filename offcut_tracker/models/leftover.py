"""
Leftover (offcut) records derived from stock sheets and orders.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List

STATUS_AVAILABLE = 'available'
STATUS_USED = 'used'


@dataclass
class LeftoverPiece:
    id: str
    sheet_id: str
    product_id: str
    product_name: str
    original_length: float
    original_width: float
    remaining_length: float
    remaining_width: float
    total_area: float
    used_area: float
    remaining_area: float
    date_created: str
    status: str
    from_orders: List[str] = field(default_factory=list)

    @property
    def utilization_percent(self) -> float:
        if not self.total_area:
            return 0.0
        return self.used_area / self.total_area * 100

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'sheetId': self.sheet_id,
            'productId': self.product_id,
            'productName': self.product_name,
            'originalLength': self.original_length,
            'originalWidth': self.original_width,
            'remainingLength': self.remaining_length,
            'remainingWidth': self.remaining_width,
            'totalArea': self.total_area,
            'usedArea': self.used_area,
            'remainingArea': self.remaining_area,
            'dateCreated': self.date_created,
            'status': self.status,
            'fromOrders': list(self.from_orders)
        }


@dataclass
class LeftoverWarning:
    """A data-shape problem met while computing leftovers; never raised."""
    sheet_id: str
    kind: str  # "missing-product", "malformed-size", "over-consumed"
    message: str


@dataclass
class LeftoverSummary:
    count: int = 0
    total_remaining_area: float = 0.0
    available_count: int = 0
    used_count: int = 0
