# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Use:
- .env (local, gitignored)
- config_local.py (local safe overrides, gitignored)

This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TODO_APP_NAME": "App display name (default: todo-sheets).",
    "TODO_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Connectors
    "TODO_CONSOLE_ENABLED": "Enable the interactive console (true/false, default: true).",
    # Paths (gitignored)
    "TODO_DATA_DIR": "Local data directory for the log file (default: .local/todo_sheets).",
    "TODO_EXPORT_DIR": "Where /export writes when no path is given (default: <data_dir>).",
    "TODO_EXPORT_FILENAME": "Default export file name (default: TodoList.xlsx).",
    # View
    "TODO_PAGE_SIZE": "Tasks per page (default: 6, minimum 1).",
    # Spreadsheet layout (cosmetic)
    "TODO_SHEET_NAME": "Name of the exported sheet (default: Tasks).",
    "TODO_MIN_TASK_COLUMN_WIDTH": "Minimum width of the Task column (default: 10).",
    "TODO_COMPLETED_COLUMN_WIDTH": "Width of the Completed column (default: 12).",
    "TODO_HEADER_FONT_COLOR": "Header font color, hex RGB (default: FFFFFF).",
    "TODO_HEADER_FILL_COLOR": "Header fill color, hex RGB (default: 228B22).",
    "TODO_HEADER_FONT_SIZE": "Header font size (default: 16).",
}
