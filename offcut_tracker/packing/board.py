"""
Interactive layout board: the piece list behind the visualizer.
"""
from typing import List, Optional

from offcut_tracker.config import CANVAS_HEIGHT, CANVAS_WIDTH, SHEET_WIDTH_MM
from offcut_tracker.models.layout import ArrangeResult, PlacementResult, Rectangle
from offcut_tracker.packing import engine


class PackingBoard:
    def __init__(self, sheet_width_mm: float = SHEET_WIDTH_MM,
                 canvas_width: float = CANVAS_WIDTH, canvas_height: float = CANVAS_HEIGHT):
        self.canvas_width = canvas_width
        self.canvas_height = canvas_height
        self.sheet_width_mm = sheet_width_mm
        self.scale = engine.scale_factor(canvas_width, sheet_width_mm)
        self.rectangles: List[Rectangle] = []

    def set_sheet_width(self, sheet_width_mm: float):
        """Change the mm span of the canvas; affects pieces added afterwards."""
        self.scale = engine.scale_factor(self.canvas_width, sheet_width_mm)
        self.sheet_width_mm = sheet_width_mm

    @property
    def is_empty(self) -> bool:
        return not self.rectangles

    def add_piece(self, width_mm: float, height_mm: float, label: Optional[str] = None) -> PlacementResult:
        result = engine.place_piece(
            self.rectangles, width_mm, height_mm, label,
            scale=self.scale,
            canvas_width=self.canvas_width,
            canvas_height=self.canvas_height,
        )
        self.rectangles = result.rectangles
        return result

    def auto_arrange(self) -> ArrangeResult:
        result = engine.auto_arrange(self.rectangles, self.canvas_width, self.canvas_height)
        self.rectangles = result.rectangles
        return result

    def remove(self, index: int):
        self.rectangles = engine.remove_rectangle(self.rectangles, index)

    def clear(self):
        self.rectangles = engine.clear_rectangles()

    def utilization(self) -> float:
        return engine.calculate_utilization(self.rectangles, self.canvas_width, self.canvas_height)

    def utilization_text(self) -> str:
        return engine.format_utilization(self.utilization())

    def problems(self) -> List[str]:
        return engine.validate_placements(self.rectangles, self.canvas_width, self.canvas_height)
