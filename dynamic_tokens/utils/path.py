"""Dot-path helpers for documents and update diffs.

``resolve_path`` walks a document from its root (mappings by key, dataclasses
and other objects by attribute). ``get_property`` additionally accepts diff
payloads whose keys are already flattened (``{"system.attributes.hp.value": 3}``).
``set_property`` and ``merge_object`` build new persistent maps; nothing here
mutates its input.
"""

from typing import Any, Mapping, Optional, Tuple

from pyrsistent import freeze, pmap
from pyrsistent.typing import PMap

from dynamic_tokens.types import AttributePath


def _child(obj: Any, key: str) -> Any:
    if obj is None:
        return None
    if isinstance(obj, Mapping):
        return obj.get(key)
    return getattr(obj, key, None)


def resolve_path(obj: Any, path: AttributePath) -> Any:
    """Return the value at ``path`` under ``obj`` or ``None`` if any segment is missing."""
    current = obj
    for key in path.split("."):
        current = _child(current, key)
        if current is None:
            return None
    return current


def _lookup(obj: Any, path: AttributePath) -> Tuple[bool, Any]:
    if not isinstance(obj, Mapping):
        return False, None
    if path in obj:
        return True, obj[path]
    parts = path.split(".")
    for i in range(1, len(parts)):
        head = ".".join(parts[:i])
        if head in obj:
            found, value = _lookup(obj[head], ".".join(parts[i:]))
            if found:
                return True, value
    return False, None


def get_property(obj: Any, path: AttributePath) -> Optional[Any]:
    """Value at ``path`` in a diff whose keys may be nested, dotted or mixed."""
    return _lookup(obj, path)[1]


def has_property(obj: Any, path: AttributePath) -> bool:
    """True if a diff carries a (possibly ``None``) value at ``path``."""
    return _lookup(obj, path)[0]


def set_property(data: PMap[str, Any], path: AttributePath, value: Any) -> PMap[str, Any]:
    """Return ``data`` with ``value`` stored at ``path``, creating maps as needed."""
    head, _, rest = path.partition(".")
    if not rest:
        return data.set(head, freeze(value))
    child = data.get(head)
    if not isinstance(child, Mapping):
        child = pmap()
    return data.set(head, set_property(pmap(child), rest, value))


def expand_object(flat: Mapping[str, Any]) -> PMap[str, Any]:
    """Expand dotted keys into nested persistent maps."""
    expanded: PMap[str, Any] = pmap()
    for key, value in flat.items():
        if isinstance(value, Mapping):
            value = expand_object(value)
        expanded = set_property(expanded, key, value)
    return expanded


def merge_object(original: PMap[str, Any], changes: Mapping[str, Any]) -> PMap[str, Any]:
    """Deep-merge ``changes`` (nested or dotted) into ``original``."""
    merged = original
    for key, value in expand_object(changes).items():
        current = merged.get(key)
        if isinstance(value, Mapping) and isinstance(current, Mapping):
            merged = merged.set(key, merge_object(pmap(current), value))
        else:
            merged = merged.set(key, value)
    return merged
