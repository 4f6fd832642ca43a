"""Action domain - group actions and their invocation lifecycle.

All exports are pure (no I/O, no side effects).

Key Types:
    ActionDescriptor - An advertised, invocable operation
    CatalogEntry - Group action with its default input document
    ActionCatalog - Ordered group actions with name lookup
    InvocationPhase / InvocationState - The single action invocation

Catalog Functions:
    schema_defaults - Default value described by a JSON schema
    default_input_document - Default input rendered as YAML
    build_catalog - Filter and deduplicate group actions
    derive_catalog - Rebuild only when the group changed

Lifecycle Functions:
    select_action, begin_submit, fail_submit, complete_submit, close_dialog
"""

from .catalog import build_catalog, default_input_document, derive_catalog, schema_defaults
from .lifecycle import (
    begin_submit,
    close_dialog,
    complete_submit,
    fail_submit,
    select_action,
)
from .models import (
    KNOWN_ACTION_KINDS,
    ActionCatalog,
    ActionDescriptor,
    CatalogEntry,
    InvocationPhase,
    InvocationState,
)

__all__ = [
    # Models
    "KNOWN_ACTION_KINDS",
    "ActionDescriptor",
    "CatalogEntry",
    "ActionCatalog",
    "InvocationPhase",
    "InvocationState",
    # Catalog
    "schema_defaults",
    "default_input_document",
    "build_catalog",
    "derive_catalog",
    # Lifecycle
    "select_action",
    "begin_submit",
    "fail_submit",
    "complete_submit",
    "close_dialog",
]
