from offcut_tracker.export.google_sheets import GoogleSheetsExporter, layout_rows, leftover_rows
