"""
Spreadsheet bridge.

Components:
- schema.py: sheet/column names, sentinels, accepted extensions
- writer.py: tasks -> .xlsx bytes (openpyxl)
- reader.py: .xlsx/.xls bytes -> ImportedTask rows (openpyxl / xlrd)
- importer.py: the single async import boundary, merges into the store
"""
