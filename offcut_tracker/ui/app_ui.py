"""
Tkinter UI for the offcut tracker.
"""
import logging
import threading
import tkinter as tk
from tkinter import Canvas, filedialog, messagebox, ttk

from offcut_tracker.config import GOOGLE_SERVICE_ACCOUNT_FILE, SHEET_WIDTH_MM
from offcut_tracker.export.google_sheets import GoogleSheetsExporter
from offcut_tracker.leftovers.calculator import calculate_leftovers, summarize_leftovers
from offcut_tracker.models.records import load_records
from offcut_tracker.packing.board import PackingBoard
from offcut_tracker.packing.engine import calculate_grid_layout
from offcut_tracker.visualization.visualizer import LayoutVisualizer, describe_rectangle

logger = logging.getLogger(__name__)


class OffcutTrackerApp:
    def __init__(self, root):
        self.root = root
        self.root.title("Offcut Tracker")
        self.root.geometry("1100x720")
        self.root.columnconfigure(0, weight=1)
        self.root.rowconfigure(0, weight=1)

        self.board = PackingBoard(sheet_width_mm=SHEET_WIDTH_MM)
        self.leftovers = []
        self.warnings = []

        notebook = ttk.Notebook(self.root)
        notebook.grid(row=0, column=0, sticky="nsew", padx=10, pady=10)
        self.visualizer_tab = ttk.Frame(notebook)
        self.leftovers_tab = ttk.Frame(notebook)
        notebook.add(self.visualizer_tab, text="Visualizer")
        notebook.add(self.leftovers_tab, text="Leftovers")

        self.status_bar = ttk.Label(self.root, text="Welcome to the offcut tracker!", relief=tk.SUNKEN, anchor="w")
        self.status_bar.grid(row=1, column=0, sticky="ew")

        self.build_visualizer_tab()
        self.build_leftovers_tab()
        self.refresh_layout()

    # Visualizer tab

    def build_visualizer_tab(self):
        tab = self.visualizer_tab
        tab.columnconfigure(1, weight=1)
        tab.rowconfigure(0, weight=1)

        # Create a frame for the sheet and piece inputs
        controls = ttk.LabelFrame(tab, text="Sheet & Piece Dimensions")
        controls.grid(row=0, column=0, sticky="nsw", padx=5, pady=5)

        self.sheet_width_var = tk.StringVar(value=f"{SHEET_WIDTH_MM:g}")
        self.piece_width_var = tk.StringVar(value="600")
        self.piece_height_var = tk.StringVar(value="400")
        self.piece_label_var = tk.StringVar()
        fields = [
            ("Sheet width (mm):", self.sheet_width_var),
            ("Piece width (mm):", self.piece_width_var),
            ("Piece height (mm):", self.piece_height_var),
            ("Label:", self.piece_label_var),
        ]
        for row, (text, var) in enumerate(fields):
            ttk.Label(controls, text=text).grid(row=row, column=0, sticky="w", padx=5, pady=3)
            ttk.Entry(controls, textvariable=var, width=14).grid(row=row, column=1, padx=5, pady=3)

        # Create buttons for piece operations
        buttons = [
            ("Add Piece", self.add_piece),
            ("Auto Arrange", self.auto_arrange),
            ("Remove Selected", self.remove_piece),
            ("Clear All", self.clear_pieces),
            ("Grid Estimate", self.show_grid_estimate),
            ("Export Layout", self.export_layout),
        ]
        for offset, (text, command) in enumerate(buttons):
            ttk.Button(controls, text=text, command=command).grid(
                row=len(fields) + offset, column=0, columnspan=2, sticky="ew", padx=5, pady=2)

        # Create a listbox for the placed pieces
        self.pieces_listbox = tk.Listbox(controls, height=12)
        self.pieces_listbox.grid(row=len(fields) + len(buttons), column=0, columnspan=2, sticky="nsew", padx=5, pady=5)
        self.pieces_listbox.bind("<<ListboxSelect>>", lambda event: self.refresh_layout())

        self.utilization_label = ttk.Label(controls, text="")
        self.utilization_label.grid(row=len(fields) + len(buttons) + 1, column=0, columnspan=2, sticky="w", padx=5)

        # Create a canvas for the layout preview
        canvas_frame = ttk.LabelFrame(tab, text="Cutting Layout Preview")
        canvas_frame.grid(row=0, column=1, sticky="nsew", padx=5, pady=5)
        canvas = Canvas(canvas_frame, highlightthickness=0)
        canvas.pack(padx=10, pady=10)
        self.visualizer = LayoutVisualizer(canvas, self.board.canvas_width, self.board.canvas_height,
                                           on_hover=self.on_piece_hover)

    def read_dimensions(self):
        sheet_width = float(self.sheet_width_var.get())
        width = float(self.piece_width_var.get())
        height = float(self.piece_height_var.get())
        return sheet_width, width, height

    def apply_sheet_width(self, sheet_width):
        if sheet_width != self.board.sheet_width_mm:
            self.board.set_sheet_width(sheet_width)

    def add_piece(self):
        try:
            sheet_width, width, height = self.read_dimensions()
            self.apply_sheet_width(sheet_width)
        except ValueError:
            messagebox.showerror("Error", "Please enter valid positive numbers for the dimensions.")
            return
        result = self.board.add_piece(width, height, self.piece_label_var.get().strip() or None)
        if not result.success:
            messagebox.showwarning("Cannot place piece", result.message)
            return
        self.piece_label_var.set("")
        self.refresh_layout()

    def auto_arrange(self):
        if self.board.is_empty:
            return
        result = self.board.auto_arrange()
        self.refresh_layout()
        if result.dropped:
            names = ", ".join(rect.label for rect in result.dropped)
            self.status_bar.config(text=f"Auto arrange left out: {names}")

    def selected_index(self):
        selection = self.pieces_listbox.curselection()
        return selection[0] if selection else None

    def remove_piece(self):
        index = self.selected_index()
        if index is not None:
            self.board.remove(index)
            self.refresh_layout()

    def clear_pieces(self):
        self.board.clear()
        self.refresh_layout()

    def show_grid_estimate(self):
        try:
            sheet_width, width, height = self.read_dimensions()
            self.apply_sheet_width(sheet_width)
        except ValueError:
            messagebox.showerror("Error", "Please enter valid positive numbers for the dimensions.")
            return
        sheet_height = self.board.canvas_height / self.board.scale
        layout = calculate_grid_layout(sheet_width, sheet_height, width, height)
        self.refresh_layout()
        self.visualizer.draw_grid_layout(layout, self.board.scale)
        self.status_bar.config(text=(
            f"Grid: {layout.pieces_per_row} per row x {layout.pieces_per_column} per column = "
            f"{layout.total_pieces} pieces | leftover {layout.leftover_width:g} x {layout.leftover_height:g} mm"))

    def refresh_layout(self):
        selected = self.selected_index()
        self.pieces_listbox.delete(0, tk.END)
        for rect in self.board.rectangles:
            self.pieces_listbox.insert(tk.END, describe_rectangle(rect, self.board.scale))
        if selected is not None and selected < len(self.board.rectangles):
            self.pieces_listbox.selection_set(selected)
        else:
            selected = None
        self.visualizer.draw(self.board.rectangles, selected)
        self.utilization_label.config(text=f"Utilization: {self.board.utilization_text()}%")
        self.refresh_status()

    def on_piece_hover(self, rect):
        if rect is None:
            self.refresh_status()
        else:
            self.status_bar.config(text=describe_rectangle(rect, self.board.scale))

    def refresh_status(self):
        self.status_bar.config(text=f"Sheet width: {self.board.sheet_width_mm:g} mm | "
                                    f"Pieces: {len(self.board.rectangles)}")

    def export_layout(self):
        if self.board.is_empty:
            messagebox.showwarning("Warning", "Please add pieces before exporting.")
            return
        rectangles = list(self.board.rectangles)
        utilization = self.board.utilization_text()
        self.run_in_background(lambda exporter: exporter.export_layout(rectangles, utilization))

    # Leftovers tab

    def build_leftovers_tab(self):
        tab = self.leftovers_tab
        tab.columnconfigure(0, weight=1)
        tab.rowconfigure(2, weight=1)

        # Create a toolbar for loading and exporting data
        toolbar = ttk.Frame(tab)
        toolbar.grid(row=0, column=0, sticky="ew", padx=5, pady=5)
        ttk.Button(toolbar, text="Load Data...", command=self.load_data).pack(side=tk.LEFT, padx=5)
        ttk.Button(toolbar, text="Export Leftovers", command=self.export_leftovers).pack(side=tk.LEFT, padx=5)

        self.summary_label = ttk.Label(tab, text="No data loaded")
        self.summary_label.grid(row=1, column=0, sticky="w", padx=10)

        # Create a treeview for the leftover pieces
        columns = ("sheet", "product", "original", "remaining", "area", "utilization", "status", "orders")
        headings = ("Sheet", "Product", "Original (mm)", "Remaining (mm)", "Leftover Area (m²)",
                    "Utilization", "Status", "From Orders")
        self.leftovers_treeview = ttk.Treeview(tab, columns=columns, show="headings")
        for column, heading in zip(columns, headings):
            self.leftovers_treeview.heading(column, text=heading)
            self.leftovers_treeview.column(column, width=110)
        self.leftovers_treeview.grid(row=2, column=0, sticky="nsew", padx=5, pady=5)
        scrollbar = ttk.Scrollbar(tab, orient="vertical", command=self.leftovers_treeview.yview)
        scrollbar.grid(row=2, column=1, sticky="ns")
        self.leftovers_treeview.configure(yscrollcommand=scrollbar.set)

    def load_data(self):
        path = filedialog.askopenfilename(filetypes=[("JSON data", "*.json"), ("All files", "*.*")])
        if not path:
            return
        try:
            data = load_records(path)
        except (OSError, ValueError, TypeError) as e:
            logger.error("Could not load %s: %s", path, e)
            messagebox.showerror("Error", f"Could not load data: {e}")
            return
        self.warnings = []
        self.leftovers = calculate_leftovers(data.stock_sheets, data.orders, data.products, self.warnings)
        self.update_leftovers_view()

    def update_leftovers_view(self):
        self.leftovers_treeview.delete(*self.leftovers_treeview.get_children())
        for piece in self.leftovers:
            self.leftovers_treeview.insert("", "end", values=(
                piece.sheet_id,
                piece.product_name,
                f"{piece.original_length:g} x {piece.original_width:g}",
                f"{piece.remaining_length:g} x {piece.remaining_width:.0f}",
                f"{piece.remaining_area:.2f}",
                f"{piece.utilization_percent:.1f}%",
                piece.status,
                ", ".join(piece.from_orders),
            ))
        summary = summarize_leftovers(self.leftovers)
        self.summary_label.config(text=(
            f"Total leftovers: {summary.count} | Total leftover area: {summary.total_remaining_area:.2f} m² | "
            f"Available: {summary.available_count} | Used: {summary.used_count} | "
            f"Data warnings: {len(self.warnings)}"))

    def export_leftovers(self):
        if not self.leftovers:
            messagebox.showwarning("Warning", "Please load data with leftovers before exporting.")
            return
        pieces = list(self.leftovers)
        self.run_in_background(lambda exporter: exporter.export_leftovers(pieces))

    # Export

    def run_in_background(self, export):
        export_thread = threading.Thread(target=self.run_export, args=(export,), daemon=True)
        export_thread.start()

    def run_export(self, export):
        exporter = GoogleSheetsExporter(GOOGLE_SERVICE_ACCOUNT_FILE)
        spreadsheet_id = export(exporter)
        if spreadsheet_id:
            self.root.after(0, messagebox.showinfo, "Success", f"Exported to Google Sheets ({spreadsheet_id}).")
        else:
            self.root.after(0, messagebox.showerror, "Export failed", "See the log for details.")
