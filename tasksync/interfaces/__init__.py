"""User-facing interfaces for tasksync (CLI)."""
