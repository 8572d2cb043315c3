"""
Configuration and constants for the offcut tracker.
"""
import os

from dotenv import load_dotenv

load_dotenv()

# Visualizer canvas, in canvas units
CANVAS_WIDTH = 600
CANVAS_HEIGHT = 400
MANUAL_GRID_STEP = 50
ARRANGE_GRID_STEP = 10

# Sheet width the canvas span represents, in mm
SHEET_WIDTH_MM = float(os.getenv('SHEET_WIDTH_MM', '2440'))

DEFAULT_SHEET_SIZES = [(2440, 1220), (3050, 1220), (2500, 1250), (3000, 1500)]

PALETTE = [
    "#3b82f6",
    "#ef4444",
    "#10b981",
    "#f59e0b",
    "#8b5cf6",
    "#ec4899",
    "#14b8a6",
    "#f97316",
]
COLORS = {
    'CANVAS_BG': "#f0f0f0",
    'CANVAS_BORDER': "#9ca3af",
    'OUTLINE': "#1e40af",
    'LEFTOVER_AREA': "#f97316",
    'HIGHLIGHT': "#111827",
}

MM2_PER_M2 = 1000000

GOOGLE_SERVICE_ACCOUNT_FILE = os.getenv('GOOGLE_SERVICE_ACCOUNT_FILE', 'service_account.json')
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()
