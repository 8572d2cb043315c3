"""
Offcut tracking and sheet layout tools for a sheet-material cutting business.
"""

__version__ = "0.1.0"
