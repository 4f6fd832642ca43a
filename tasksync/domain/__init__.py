"""Domain layer for tasksync.

Pure models and functions for task groups and group actions:

- task: tasks, pagination metadata, group identity checks
- action: action catalog and invocation lifecycle
- shared: Result monad and base domain event
"""
