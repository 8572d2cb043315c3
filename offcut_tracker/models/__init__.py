from offcut_tracker.models.layout import ArrangeResult, GridLayout, PlacementResult, Rectangle
from offcut_tracker.models.leftover import LeftoverPiece, LeftoverSummary, LeftoverWarning
from offcut_tracker.models.records import (
    BusinessData,
    Order,
    OrderItem,
    Product,
    StockSheet,
    load_records,
)
