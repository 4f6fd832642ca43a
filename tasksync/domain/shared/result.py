"""Result monad for explicit error handling across layer boundaries.

Operations that can fail for expected reasons (an HTTP request that
returns 500, an action name that is not in the catalog, a lifecycle
transition that is not allowed from the current state) return either
``Ok`` or ``Err`` instead of raising.

Example usage:
    >>> def lookup(catalog: dict[str, str], name: str) -> Result[str, str]:
    ...     if name not in catalog:
    ...         return Err(f"Unknown action: {name}")
    ...     return Ok(catalog[name])
    ...
    >>> result = lookup({"retrigger": "Retrigger"}, "retrigger")
    >>> if is_ok(result):
    ...     print(result.value)
    Retrigger
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """A successful result.

    Attributes:
        value: The success value of type T.
    """

    value: T


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """A failed result.

    Attributes:
        error: The error value. Usually a message, but submission
            failures carry whatever the collaborator rejected with.
    """

    error: E


# Using Union here as TypeVar aliases don't work with | syntax at runtime
Result = Union[Ok[T], Err[E]]  # noqa: UP007


def is_ok(result: Ok[T] | Err[E]) -> bool:
    """Return True if the result is Ok."""
    return isinstance(result, Ok)


def is_err(result: Ok[T] | Err[E]) -> bool:
    """Return True if the result is Err."""
    return isinstance(result, Err)
