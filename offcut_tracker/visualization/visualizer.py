"""
Canvas rendering for the sheet layout visualizer.
"""
import tkinter as tk
from typing import Callable, Optional, Sequence

from offcut_tracker.config import CANVAS_HEIGHT, CANVAS_WIDTH, COLORS
from offcut_tracker.models.layout import GridLayout, Rectangle


class LayoutVisualizer:
    def __init__(self, canvas: tk.Canvas, canvas_width: float = CANVAS_WIDTH,
                 canvas_height: float = CANVAS_HEIGHT,
                 on_hover: Optional[Callable[[Optional[Rectangle]], None]] = None):
        self.canvas = canvas
        self.canvas_width = canvas_width
        self.canvas_height = canvas_height
        self.on_hover = on_hover
        self.rectangles: Sequence[Rectangle] = []
        self.current_hover = None
        self.canvas.config(width=canvas_width, height=canvas_height, bg=COLORS['CANVAS_BG'])
        self.canvas.bind("<Motion>", self.on_canvas_motion)
        self.canvas.bind("<Leave>", self.on_canvas_leave)

    def draw(self, rectangles: Sequence[Rectangle], selected: Optional[int] = None):
        self.rectangles = list(rectangles)
        self.canvas.delete("all")
        self.canvas.create_rectangle(
            0, 0, self.canvas_width, self.canvas_height,
            outline=COLORS['CANVAS_BORDER'], width=2
        )
        for index, rect in enumerate(self.rectangles):
            outline = COLORS['HIGHLIGHT'] if index == selected else COLORS['OUTLINE']
            self.canvas.create_rectangle(
                rect.x, rect.y, rect.x2, rect.y2,
                fill=rect.color, outline=outline,
                width=3 if index == selected else 1,
                stipple="gray75", tags=("piece",)
            )
            self.canvas.create_text(
                rect.x + rect.width / 2, rect.y + rect.height / 2,
                text=rect.label, fill="white", font=("Arial", 9, "bold")
            )

    def draw_grid_layout(self, layout: GridLayout, scale: float):
        """Overlay a uniform grid of pieces with the leftover strips shaded."""
        self.canvas.delete("grid")
        if not layout.total_pieces:
            return
        piece_w = layout.used_width / layout.pieces_per_row * scale
        piece_h = layout.used_height / layout.pieces_per_column * scale
        for row in range(layout.pieces_per_column):
            for col in range(layout.pieces_per_row):
                self.canvas.create_rectangle(
                    col * piece_w, row * piece_h, (col + 1) * piece_w, (row + 1) * piece_h,
                    outline=COLORS['OUTLINE'], dash=(4, 2), tags=("grid",)
                )
        if layout.leftover_width > 0:
            self.canvas.create_rectangle(
                layout.used_width * scale, 0,
                (layout.used_width + layout.leftover_width) * scale,
                (layout.used_height + layout.leftover_height) * scale,
                fill=COLORS['LEFTOVER_AREA'], stipple="gray25", outline="", tags=("grid",)
            )
        if layout.leftover_height > 0:
            self.canvas.create_rectangle(
                0, layout.used_height * scale,
                layout.used_width * scale,
                (layout.used_height + layout.leftover_height) * scale,
                fill=COLORS['LEFTOVER_AREA'], stipple="gray25", outline="", tags=("grid",)
            )

    def rectangle_at(self, x: float, y: float) -> Optional[Rectangle]:
        # Topmost first
        for rect in reversed(self.rectangles):
            if rect.x <= x <= rect.x2 and rect.y <= y <= rect.y2:
                return rect
        return None

    def on_canvas_motion(self, event):
        found = self.rectangle_at(self.canvas.canvasx(event.x), self.canvas.canvasy(event.y))
        if found is not self.current_hover:
            self.current_hover = found
            if self.on_hover:
                self.on_hover(found)

    def on_canvas_leave(self, event):
        self.current_hover = None
        if self.on_hover:
            self.on_hover(None)


def describe_rectangle(rect: Rectangle, scale: float) -> str:
    return (f"{rect.label}: {rect.width / scale:.0f} x {rect.height / scale:.0f} mm "
            f"at ({rect.x / scale:.0f}, {rect.y / scale:.0f}) mm")
