# src/todo_sheets/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then runs the console connector.
The task list lives only for this session; use /export and /import to keep it.
"""

from __future__ import annotations

import logging

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    log_dir = getattr(settings, "data_dir", ".local/todo_sheets")
    setup_logging(log_dir=log_dir, console_level=console_level)

    logger.info("Starting %s...", getattr(settings, "app_name", "todo-sheets"))

    state = create_initial_state(settings=settings)

    try:
        if settings.console_enabled:
            run_console_loop(state)
        else:
            logger.info("Console disabled (TODO_CONSOLE_ENABLED=false); nothing to run.")
    finally:
        if state.task_store.count_tasks():
            logger.info(
                "Session ended with %d task(s) not persisted unless exported.",
                state.task_store.count_tasks(),
            )
        logger.info("Bye.")


if __name__ == "__main__":
    main()
