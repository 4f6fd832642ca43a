"""Group action catalog derivation.

Builds the list of actions offered for a whole task group from the
descriptors advertised for it, and renders each action's default input
document as editable YAML.
"""

import copy
import logging
from collections.abc import Iterable
from typing import Any

import yaml

from tasksync.domain.action.models import ActionCatalog, ActionDescriptor, CatalogEntry

logger = logging.getLogger(__name__)

_REF_PREFIX = "#/definitions/"


def _resolve_ref(ref: str, definitions: dict[str, Any]) -> Any:
    if not ref.startswith(_REF_PREFIX):
        return None
    return definitions.get(ref[len(_REF_PREFIX):])


def _merge_all_of(schema: dict[str, Any], definitions: dict[str, Any]) -> dict[str, Any]:
    """Fold ``allOf`` branches into one schema; later branches win, properties merge."""
    merged = {key: value for key, value in schema.items() if key != "allOf"}
    for branch in schema["allOf"]:
        if isinstance(branch, dict) and isinstance(branch.get("$ref"), str):
            branch = _resolve_ref(branch["$ref"], definitions)
        if not isinstance(branch, dict):
            continue
        for key, value in branch.items():
            if key == "properties" and isinstance(value, dict):
                merged["properties"] = {**merged.get("properties", {}), **value}
            else:
                merged[key] = value
    return merged


def schema_defaults(schema: Any, definitions: dict[str, Any] | None = None) -> Any:
    """Collect the default value described by a JSON schema.

    An explicit ``default`` wins. Otherwise ``allOf`` branches are merged
    and local ``#/definitions/...`` references are followed. Objects are
    built from the defaults of their properties (properties without one
    are left out, empty objects are kept). Arrays default to ``[]``, to
    the defaults of a tuple-style ``items`` list, or to ``minItems``
    copies of the ``items`` default. Anything else has no default.

    Args:
        schema: JSON schema fragment.
        definitions: Definitions of the root schema, for ``$ref`` lookups.

    Returns:
        The default value, or None if the schema describes none.

    Examples:
        >>> schema_defaults({"type": "object", "properties": {"n": {"default": 1}}})
        {'n': 1}
        >>> schema_defaults({"type": "array", "items": {"default": 0}, "minItems": 2})
        [0, 0]
    """
    if not isinstance(schema, dict):
        return None
    if definitions is None:
        definitions = schema.get("definitions") or {}

    if "default" in schema:
        return copy.deepcopy(schema["default"])

    if isinstance(schema.get("allOf"), list):
        return schema_defaults(_merge_all_of(schema, definitions), definitions)

    ref = schema.get("$ref")
    if isinstance(ref, str):
        return schema_defaults(_resolve_ref(ref, definitions), definitions)

    properties = schema.get("properties")
    if schema.get("type") == "object" or isinstance(properties, dict):
        result: dict[str, Any] = {}
        for key, prop in (properties or {}).items():
            value = schema_defaults(prop, definitions)
            if value is not None:
                result[key] = value
        return result

    if schema.get("type") == "array":
        items = schema.get("items")
        if isinstance(items, list):
            values = [schema_defaults(item, definitions) for item in items]
            return [value for value in values if value is not None]
        item_default = schema_defaults(items, definitions)
        if item_default is None:
            return []
        count = schema.get("minItems") or 0
        return [copy.deepcopy(item_default) for _ in range(count)]

    return None


def default_input_document(schema: dict[str, Any] | None) -> str:
    """Render the default input of an action schema as YAML.

    A missing or malformed schema yields an empty document.

    Args:
        schema: The action's input schema, if any.

    Returns:
        YAML text the user can edit before submitting.
    """
    try:
        defaults = schema_defaults(schema or {})
    except RecursionError:
        logger.warning("Action schema has circular references, using empty input")
        defaults = None
    return yaml.safe_dump(defaults or {}, default_flow_style=False, sort_keys=False)


def build_catalog(task_group_id: str, actions: Iterable[ActionDescriptor]) -> ActionCatalog:
    """Build the group action catalog.

    Keeps group-level descriptors (empty context) in their given order
    and only the first one for each name; later descriptors with the
    same name (older versions of an action) are dropped.

    Args:
        task_group_id: Group the catalog is built for.
        actions: Descriptors advertised for the group.

    Returns:
        ActionCatalog with one entry per distinct group action name.
    """
    entries: list[CatalogEntry] = []
    seen: set[str] = set()

    for action in actions:
        if not action.is_group_action or action.name in seen:
            continue
        seen.add(action.name)
        entries.append(
            CatalogEntry(
                action=action,
                default_input=default_input_document(action.input_schema),
            )
        )

    return ActionCatalog(task_group_id=task_group_id, entries=entries)


def derive_catalog(
    previous_group_id: str | None,
    task_group_id: str,
    actions: Iterable[ActionDescriptor] | None,
) -> ActionCatalog | None:
    """Derive a new catalog when the group changed and its actions arrived.

    Args:
        previous_group_id: Group the current catalog was built for.
        task_group_id: Group now active.
        actions: Descriptors for the active group, or None if they have
            not arrived yet.

    Returns:
        A new ActionCatalog, or None if the current one still applies or
        there is nothing to build from yet.
    """
    if actions is None or task_group_id == previous_group_id:
        return None
    return build_catalog(task_group_id, actions)
