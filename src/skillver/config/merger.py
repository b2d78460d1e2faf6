"""
Configuration layering for Skillver.

Each config source is merged onto the previous one. List settings such as
``hook.tool_names`` can be extended with a ``+`` prefixed key or reduced
with a ``-`` prefixed key instead of being replaced wholesale.
"""

from typing import Any


def _merge_list(current: Any, items: list[Any], append: bool) -> list[Any]:
    existing = current if isinstance(current, list) else []
    if append:
        return existing + [item for item in items if item not in existing]
    return [item for item in existing if item not in items]


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """
    Layer one config mapping onto another.

    - ``+key: [...]`` appends the missing items to ``key``
    - ``-key: [...]`` removes the items from ``key``
    - ``key: null`` drops ``key`` so the model default applies
    - nested sections merge key by key; anything else replaces

    Args:
        base: Config collected so far. Not modified.
        override: Config from the next source.

    Returns:
        The merged mapping.

    Examples:
        >>> deep_merge({"hook": {"tool_names": ["Write", "Edit"]}},
        ...            {"hook": {"+tool_names": ["MultiEdit"]}})
        {'hook': {'tool_names': ['Write', 'Edit', 'MultiEdit']}}
    """
    merged = dict(base)

    for key, value in override.items():
        prefix, name = key[:1], key[1:]
        if prefix in ("+", "-") and isinstance(value, list):
            if prefix == "-" and not isinstance(merged.get(name), list):
                continue
            merged[name] = _merge_list(merged.get(name), value, append=prefix == "+")
        elif value is None:
            merged.pop(key, None)
        elif isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value

    return merged


def set_nested_value(config: dict[str, Any], key_path: str, value: Any) -> dict[str, Any]:
    """Set ``section.key`` style paths in place, creating sections as needed."""
    *sections, leaf = key_path.split(".")
    node = config
    for section in sections:
        if not isinstance(node.get(section), dict):
            node[section] = {}
        node = node[section]
    node[leaf] = value
    return config
