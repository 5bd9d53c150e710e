# src/todo_sheets/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Nothing required at import time; every field has a default.
- Module-level constants are exported for quick scripts.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

ENV_PREFIX = "TODO"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _load_dotenv_if_available() -> None:
    """Load .env locally if python-dotenv is installed. Safe no-op otherwise."""
    try:
        from dotenv import load_dotenv  # type: ignore
    except Exception:
        return
    load_dotenv(override=False)


_load_dotenv_if_available()


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def _env_hex(name: str, default: str) -> str:
    raw = _env(name, default).strip().lstrip("#")
    if len(raw) == 6 and all(c in "0123456789abcdefABCDEF" for c in raw):
        return raw.upper()
    return default


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Connector flags ----
    console_enabled: bool

    # ---- Local paths (ignored by git) ----
    data_dir: Path
    export_dir: Path
    export_filename: str

    # ---- View ----
    page_size: int

    # ---- Spreadsheet layout ----
    sheet_name: str
    min_task_column_width: int
    completed_column_width: int
    header_font_color: str
    header_fill_color: str
    header_font_size: int

    @property
    def export_path(self) -> Path:
        return self.export_dir / self.export_filename

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "todo-sheets").strip() or "todo-sheets"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        console_enabled = _env_bool(_k("CONSOLE_ENABLED"), True)

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/todo_sheets"))
        export_dir = _env_path(_k("EXPORT_DIR"), data_dir)
        export_filename = _env(_k("EXPORT_FILENAME"), "TodoList.xlsx").strip() or "TodoList.xlsx"

        page_size = max(1, _env_int(_k("PAGE_SIZE"), 6))

        sheet_name = _env(_k("SHEET_NAME"), "Tasks").strip() or "Tasks"
        min_task_column_width = max(1, _env_int(_k("MIN_TASK_COLUMN_WIDTH"), 10))
        completed_column_width = max(1, _env_int(_k("COMPLETED_COLUMN_WIDTH"), 12))
        header_font_color = _env_hex(_k("HEADER_FONT_COLOR"), "FFFFFF")
        header_fill_color = _env_hex(_k("HEADER_FILL_COLOR"), "228B22")
        header_font_size = max(1, _env_int(_k("HEADER_FONT_SIZE"), 16))

        return Settings(
            app_name=app_name,
            log_level=log_level,
            console_enabled=console_enabled,
            data_dir=data_dir,
            export_dir=export_dir,
            export_filename=export_filename,
            page_size=page_size,
            sheet_name=sheet_name,
            min_task_column_width=min_task_column_width,
            completed_column_width=completed_column_width,
            header_font_color=header_font_color,
            header_fill_color=header_fill_color,
            header_font_size=header_font_size,
        )


SETTINGS = Settings.from_env()

# ---- Optional local overrides (never committed) ----
# Prefer .env; use config_local.py only for a couple of quick switches.
try:
    import config_local as _config_local  # type: ignore

    if hasattr(_config_local, "PAGE_SIZE"):
        object.__setattr__(SETTINGS, "page_size", max(1, int(_config_local.PAGE_SIZE)))  # type: ignore[misc]
    if hasattr(_config_local, "CONSOLE_ENABLED"):
        object.__setattr__(SETTINGS, "console_enabled", bool(_config_local.CONSOLE_ENABLED))  # type: ignore[misc]
except ImportError:
    pass


def get_settings() -> Settings:
    return SETTINGS


# --------------------------------------------------------------------------------------
# Module-level constants.
# --------------------------------------------------------------------------------------

APP_NAME = SETTINGS.app_name
LOG_LEVEL = SETTINGS.log_level

CONSOLE_ENABLED = SETTINGS.console_enabled

DATA_DIR = SETTINGS.data_dir
EXPORT_DIR = SETTINGS.export_dir
EXPORT_FILENAME = SETTINGS.export_filename

PAGE_SIZE = SETTINGS.page_size
SHEET_NAME = SETTINGS.sheet_name
