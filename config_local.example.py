# config_local.example.py

"""
Example local overrides.

Usage:
  1) Copy this file to `config_local.py`
  2) Adjust values for your machine
  3) Never commit `config_local.py` (it is gitignored)

Prefer `.env` for anything else. Only the names below are read.
"""

# Example: show more tasks per page
# PAGE_SIZE = 10

# Example: start without the interactive console
# CONSOLE_ENABLED = False
