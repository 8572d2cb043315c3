from offcut_tracker.packing.board import PackingBoard
from offcut_tracker.packing.engine import (
    auto_arrange,
    calculate_grid_layout,
    calculate_utilization,
    find_first_fit,
    format_utilization,
    place_piece,
    rects_overlap,
    validate_placements,
)
