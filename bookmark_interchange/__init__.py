"""
Bookmark Interchange - Netscape bookmark import and HTML/JSON/CSV export.
"""

__version__ = "1.0.0"
