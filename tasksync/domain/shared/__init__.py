"""Shared domain utilities.

- Result monad for explicit error handling
- Base domain event infrastructure

Example usage:
    >>> from tasksync.domain.shared import Ok, Err, Result, is_ok
    >>>
    >>> def parse_limit(raw: str) -> Result[int, str]:
    ...     if not raw.isdigit():
    ...         return Err(f"Not a page size: {raw}")
    ...     return Ok(int(raw))
"""

from tasksync.domain.shared.events import DomainEvent
from tasksync.domain.shared.result import (
    Err,
    Ok,
    Result,
    is_err,
    is_ok,
)

__all__ = [
    # Result monad
    "Ok",
    "Err",
    "Result",
    "is_ok",
    "is_err",
    # Domain events
    "DomainEvent",
]
