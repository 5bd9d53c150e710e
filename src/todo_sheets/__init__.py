"""Session task list with spreadsheet export/import."""

__version__ = "0.1.0"
