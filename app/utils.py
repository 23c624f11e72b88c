import copy
from typing import Any, Mapping

_MISSING = object()


def get_by_path(data: Any, path: str, default: Any = None) -> Any:
    """
    Resolves a dotted path like `result.instance.requestor.reference` in nested dicts and lists.
    Numeric segments index into lists. Returns `default` when any segment cannot be resolved.
    """
    current = data
    for segment in path.split("."):
        if isinstance(current, Mapping):
            current = current.get(segment, _MISSING)
        elif isinstance(current, list) and segment.isdigit():
            index = int(segment)
            current = current[index] if index < len(current) else _MISSING
        else:
            return default

        if current is _MISSING:
            return default

    return current


def has_path(data: Any, path: str) -> bool:
    return get_by_path(data, path, _MISSING) is not _MISSING


def set_by_path(data: dict[str, Any], path: str, value: Any) -> None:
    segments = path.split(".")
    current = data
    for segment in segments[:-1]:
        nested = current.get(segment)
        if not isinstance(nested, dict):
            nested = {}
            current[segment] = nested
        current = nested
    current[segments[-1]] = value


def unset_by_path(data: dict[str, Any], path: str) -> None:
    segments = path.split(".")
    current: Any = data
    for segment in segments[:-1]:
        current = current.get(segment) if isinstance(current, dict) else None
        if current is None:
            return
    if isinstance(current, dict):
        current.pop(segments[-1], None)


def deep_merge(base: Mapping[str, Any], update: Mapping[str, Any]) -> dict[str, Any]:
    """
    Returns a new dict with `update` merged into `base`. Nested dicts are merged, every other
    value in `update` replaces the one in `base`. Keys only present in `base` are kept.
    """
    merged = copy.deepcopy(dict(base))
    for key, value in update.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), Mapping):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged
