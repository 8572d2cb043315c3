"""
Google Sheets export of leftover reports and sheet layouts.
"""
import logging
import time
from typing import List, Optional, Sequence

from google.oauth2 import service_account
from googleapiclient.discovery import build

from offcut_tracker.leftovers.calculator import summarize_leftovers
from offcut_tracker.models.layout import Rectangle
from offcut_tracker.models.leftover import LeftoverPiece

logger = logging.getLogger(__name__)

SCOPES = ['https://www.googleapis.com/auth/drive',
          'https://www.googleapis.com/auth/spreadsheets']

LEFTOVER_HEADER = ["Leftover ID", "Sheet ID", "Product", "Original (mm)", "Remaining (mm)",
                   "Total Area (m²)", "Used Area (m²)", "Remaining Area (m²)",
                   "Utilization %", "Status", "Date", "From Orders"]
LAYOUT_HEADER = ["#", "Label", "X", "Y", "Width", "Height", "Color"]


def leftover_rows(pieces: Sequence[LeftoverPiece]) -> List[List[str]]:
    summary = summarize_leftovers(pieces)
    rows = [
        ["Total Leftovers", str(summary.count)],
        ["Total Leftover Area (m²)", f"{summary.total_remaining_area:.2f}"],
        ["Available", str(summary.available_count)],
        ["Used", str(summary.used_count)],
        [],
        LEFTOVER_HEADER,
    ]
    for piece in pieces:
        rows.append([
            piece.id,
            piece.sheet_id,
            piece.product_name,
            f"{piece.original_length:g}x{piece.original_width:g}",
            f"{piece.remaining_length:g}x{piece.remaining_width:.0f}",
            f"{piece.total_area:.4f}",
            f"{piece.used_area:.4f}",
            f"{piece.remaining_area:.4f}",
            f"{piece.utilization_percent:.1f}%",
            piece.status,
            piece.date_created,
            ", ".join(piece.from_orders)
        ])
    return rows


def layout_rows(rectangles: Sequence[Rectangle], utilization: str) -> List[List[str]]:
    rows = [["Utilization %", utilization], [], LAYOUT_HEADER]
    for i, rect in enumerate(rectangles, 1):
        rows.append([str(i), rect.label, f"{rect.x:g}", f"{rect.y:g}",
                     f"{rect.width:g}", f"{rect.height:g}", rect.color])
    return rows


class GoogleSheetsExporter:
    def __init__(self, service_account_file: str):
        self.service_account_file = service_account_file
        self.credentials = None
        self.service = None

    def authenticate(self) -> bool:
        if self.service is not None:
            return True
        try:
            self.credentials = service_account.Credentials.from_service_account_file(
                self.service_account_file, scopes=SCOPES)
            self.service = build('sheets', 'v4', credentials=self.credentials)
            return True
        except Exception as e:
            logger.error("Google authentication failed: %s", e)
            return False

    def export_leftovers(self, pieces: Sequence[LeftoverPiece], filename: Optional[str] = None):
        if filename is None:
            filename = "Leftovers_" + time.strftime("%d-%m-%Y")
        return self._export(filename, "Leftovers", leftover_rows(pieces))

    def export_layout(self, rectangles: Sequence[Rectangle], utilization: str,
                      filename: Optional[str] = None):
        if filename is None:
            filename = "Sheet_Layout_" + time.strftime("%d-%m-%Y")
        return self._export(filename, "Layout", layout_rows(rectangles, utilization))

    def _export(self, filename: str, tab_title: str, rows: List[List[str]]):
        """Create a spreadsheet holding ``rows``; returns its id, or False on failure."""
        if not self.authenticate():
            return False
        try:
            spreadsheet = self.service.spreadsheets().create(
                body={'properties': {'title': filename}}).execute()
            spreadsheet_id = spreadsheet['spreadsheetId']
            first_sheet_id = spreadsheet['sheets'][0]['properties']['sheetId']
            self.service.spreadsheets().batchUpdate(
                spreadsheetId=spreadsheet_id,
                body={'requests': [{
                    "updateSheetProperties": {
                        "properties": {"sheetId": first_sheet_id, "title": tab_title},
                        "fields": "title"
                    }
                }]}
            ).execute()
            self.service.spreadsheets().values().update(
                spreadsheetId=spreadsheet_id,
                range=f"'{tab_title}'!A1",
                valueInputOption="RAW",
                body={'values': rows}
            ).execute()
            self.service.spreadsheets().batchUpdate(
                spreadsheetId=spreadsheet_id,
                body={'requests': [{
                    "autoResizeDimensions": {
                        "dimensions": {"dimension": "COLUMNS", "sheetId": first_sheet_id}
                    }
                }]}
            ).execute()
            logger.info("Exported %d row(s) to spreadsheet %s", len(rows), spreadsheet_id)
            return spreadsheet_id
        except Exception as e:
            logger.error("Export failed: %s", e)
            return False
