"""
Layout models for the sheet visualizer: placed rectangles and placement results.
"""
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class Rectangle:
    x: float
    y: float
    width: float
    height: float
    label: str
    color: str

    @property
    def x2(self) -> float:
        return self.x + self.width

    @property
    def y2(self) -> float:
        return self.y + self.height

    @property
    def area(self) -> float:
        return self.width * self.height

    def overlaps(self, other: 'Rectangle') -> bool:
        # Shared edges are not an overlap
        return not (self.x2 <= other.x or
                    other.x2 <= self.x or
                    self.y2 <= other.y or
                    other.y2 <= self.y)

    def moved_to(self, x: float, y: float) -> 'Rectangle':
        return replace(self, x=x, y=y)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'x': self.x,
            'y': self.y,
            'width': self.width,
            'height': self.height,
            'label': self.label,
            'color': self.color
        }


@dataclass
class PlacementResult:
    success: bool
    rectangles: List[Rectangle]
    rectangle: Optional[Rectangle] = None
    message: str = ""


@dataclass
class ArrangeResult:
    rectangles: List[Rectangle]
    dropped: List[Rectangle] = field(default_factory=list)


@dataclass
class GridLayout:
    """Uniform grid of identical pieces on a sheet, in mm."""
    pieces_per_row: int
    pieces_per_column: int
    total_pieces: int
    used_width: float
    used_height: float
    leftover_width: float
    leftover_height: float
