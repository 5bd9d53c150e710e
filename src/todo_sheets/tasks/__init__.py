"""
Task subsystem.

Components:
- task_models.py: data structures (Task, ImportedTask, TaskSummary, Rejection)
- task_store.py: in-memory store enforcing uniqueness and lock rules
- task_api.py: small high-level helpers used by the command layer
"""
