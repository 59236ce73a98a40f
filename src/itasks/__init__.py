"""iTasks: task-list core (validation, submission, list reconciliation)."""

__version__ = "0.1.0"
