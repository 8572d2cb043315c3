"""
Grid-scan placement engine for the sheet layout visualizer.

Pieces are placed on a fixed-size canvas by scanning candidate top-left corners
on a grid and taking the first one that overlaps nothing already placed. This is
a heuristic, not an optimal packer.
"""
import logging
import math
from typing import List, Optional, Sequence, Tuple

from offcut_tracker.config import (
    ARRANGE_GRID_STEP,
    CANVAS_HEIGHT,
    CANVAS_WIDTH,
    MANUAL_GRID_STEP,
    PALETTE,
)
from offcut_tracker.models.layout import ArrangeResult, GridLayout, PlacementResult, Rectangle

logger = logging.getLogger(__name__)


def rects_overlap(r1: Rectangle, r2: Rectangle) -> bool:
    return r1.overlaps(r2)


def scale_factor(canvas_width: float, sheet_width_mm: float) -> float:
    if not (sheet_width_mm > 0 and math.isfinite(sheet_width_mm)):
        raise ValueError(f"Sheet width must be a positive finite number, got {sheet_width_mm}")
    return canvas_width / sheet_width_mm


def _grid_positions(limit: float, step: int) -> range:
    if math.isnan(limit) or limit < 0:
        return range(0)
    return range(0, int(math.floor(limit)) + 1, step)


def can_place(x: float, y: float, width: float, height: float,
              placed: Sequence[Rectangle]) -> bool:
    candidate = Rectangle(x, y, width, height, "", "")
    for rect in placed:
        if rects_overlap(candidate, rect):
            return False
    return True


def find_first_fit(width: float, height: float, placed: Sequence[Rectangle],
                   canvas_width: float = CANVAS_WIDTH,
                   canvas_height: float = CANVAS_HEIGHT,
                   step: int = MANUAL_GRID_STEP) -> Optional[Tuple[float, float]]:
    """Row-major scan (y outer, x inner) for the first overlap-free corner."""
    for y in _grid_positions(canvas_height - height, step):
        for x in _grid_positions(canvas_width - width, step):
            if can_place(x, y, width, height, placed):
                return x, y
    return None


def place_piece(rectangles: Sequence[Rectangle], width_mm: float, height_mm: float,
                label: Optional[str] = None, scale: float = 1.0,
                canvas_width: float = CANVAS_WIDTH,
                canvas_height: float = CANVAS_HEIGHT,
                step: int = MANUAL_GRID_STEP) -> PlacementResult:
    """
    Add one piece at the first free grid position.

    Args:
        rectangles: Pieces already on the canvas
        width_mm: Piece width in mm
        height_mm: Piece height in mm
        label: Optional label, defaults to "Piece <n>"
        scale: Canvas units per mm

    Returns:
        PlacementResult: success flag, the new list and the placed rectangle.
        On failure the list is returned unchanged.
    """
    current = list(rectangles)
    if not (width_mm > 0 and height_mm > 0):
        return PlacementResult(False, current, message=f"Invalid piece size {width_mm}x{height_mm} mm")

    width = width_mm * scale
    height = height_mm * scale
    if not (width > 0 and height > 0 and math.isfinite(width) and math.isfinite(height)):
        return PlacementResult(False, current, message=f"Piece size {width_mm}x{height_mm} mm does not scale onto the canvas")
    position = find_first_fit(width, height, current, canvas_width, canvas_height, step)
    if position is None:
        logger.info("No room for a %gx%g mm piece (%d placed)", width_mm, height_mm, len(current))
        return PlacementResult(False, current, message="Not enough space to place this piece")

    count = len(current)
    rect = Rectangle(
        x=position[0],
        y=position[1],
        width=width,
        height=height,
        label=label or f"Piece {count + 1}",
        color=PALETTE[count % len(PALETTE)],
    )
    current.append(rect)
    return PlacementResult(True, current, rectangle=rect)


def auto_arrange(rectangles: Sequence[Rectangle],
                 canvas_width: float = CANVAS_WIDTH,
                 canvas_height: float = CANVAS_HEIGHT,
                 step: int = ARRANGE_GRID_STEP) -> ArrangeResult:
    """
    Re-place every piece largest-first on a finer grid.

    Pieces keep their size, label and colour; their old positions are ignored.
    Equal areas keep their current relative order. A piece that no longer fits
    is left out of the arrangement and reported in ``dropped``.
    """
    ordered = sorted(rectangles, key=lambda r: r.area, reverse=True)
    arranged = []
    dropped = []
    for rect in ordered:
        position = find_first_fit(rect.width, rect.height, arranged, canvas_width, canvas_height, step)
        if position is None:
            dropped.append(rect)
            continue
        arranged.append(rect.moved_to(*position))
    if dropped:
        logger.warning("Auto-arrange dropped %d piece(s): %s",
                       len(dropped), ", ".join(r.label for r in dropped))
    return ArrangeResult(arranged, dropped)


def remove_rectangle(rectangles: Sequence[Rectangle], index: int) -> List[Rectangle]:
    current = list(rectangles)
    if 0 <= index < len(current):
        del current[index]
    return current


def clear_rectangles() -> List[Rectangle]:
    return []


def calculate_utilization(rectangles: Sequence[Rectangle],
                          canvas_width: float = CANVAS_WIDTH,
                          canvas_height: float = CANVAS_HEIGHT) -> float:
    canvas_area = canvas_width * canvas_height
    if canvas_area <= 0:
        return 0.0
    used_area = sum(r.width * r.height for r in rectangles)
    return used_area / canvas_area * 100


def format_utilization(value: float) -> str:
    return f"{value:.2f}"


def calculate_grid_layout(sheet_width: float, sheet_height: float,
                          piece_width: float, piece_height: float) -> GridLayout:
    """How many identical pieces fit in straight rows and columns on a sheet."""
    if piece_width > 0 and piece_height > 0:
        per_row = max(0, int(sheet_width // piece_width))
        per_column = max(0, int(sheet_height // piece_height))
    else:
        per_row = per_column = 0
    used_width = per_row * piece_width if per_row else 0
    used_height = per_column * piece_height if per_column else 0
    return GridLayout(
        pieces_per_row=per_row,
        pieces_per_column=per_column,
        total_pieces=per_row * per_column,
        used_width=used_width,
        used_height=used_height,
        leftover_width=sheet_width - used_width,
        leftover_height=sheet_height - used_height,
    )


def validate_placements(rectangles: Sequence[Rectangle],
                        canvas_width: float = CANVAS_WIDTH,
                        canvas_height: float = CANVAS_HEIGHT) -> List[str]:
    problems = []
    for rect in rectangles:
        if rect.x < 0 or rect.y < 0 or rect.x2 > canvas_width or rect.y2 > canvas_height:
            problems.append(f"{rect.label} is outside the canvas")
    for i in range(len(rectangles)):
        for j in range(i + 1, len(rectangles)):
            if rects_overlap(rectangles[i], rectangles[j]):
                problems.append(f"{rectangles[i].label} <-> {rectangles[j].label} overlap")
    return problems
