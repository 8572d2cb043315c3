"""
Entry point for the offcut tracker app.
"""
import logging
import tkinter as tk

from offcut_tracker.config import LOG_LEVEL
from offcut_tracker.ui.app_ui import OffcutTrackerApp


def main():
    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    root = tk.Tk()
    app = OffcutTrackerApp(root)
    root.mainloop()


if __name__ == "__main__":
    main()
