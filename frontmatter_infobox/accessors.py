from __future__ import annotations

import logging
from typing import Any, List, Optional

from .paths import DEFAULT_SEPARATOR, split_path

logger = logging.getLogger(__name__)


class PathNotFound(LookupError):
    """A path segment or list element could not be located in the tree."""

    def __init__(self, path: str, segment: str):
        super().__init__(f"Invalid path {path!r}: cannot resolve segment {segment!r}")
        self.path = path
        self.segment = segment


def _find_element_with_key(items: List[Any], key: str) -> Optional[dict]:
    """Return the first dict in `items` that has `key` (first match wins).

    Nested lists are searched depth-first, matching how flattening treats
    a list inside a list as adding no segment.
    """
    for item in items:
        if isinstance(item, dict):
            if key in item:
                return item
        elif isinstance(item, list):
            found = _find_element_with_key(item, key)
            if found is not None:
                return found
    return None


def apply_path_update(data: Any, path: str, value: Any, sep: str = DEFAULT_SEPARATOR) -> None:
    """Set `value` at `path` inside `data`, mutating it in place.

    Segments are always dict keys, even when they look numeric. When a
    segment names a list, the following segment picks the list element
    that contains it as a key, so paths stay valid when elements are
    reordered.

    Raises PathNotFound without touching `data` if the path cannot be
    resolved.
    """
    keys = split_path(path, sep)
    if not keys:
        raise PathNotFound(path, '')
    current = data

    for i, key in enumerate(keys[:-1]):
        if not isinstance(current, dict) or key not in current:
            raise PathNotFound(path, key)

        nxt = current[key]
        if isinstance(nxt, list):
            next_key = keys[i + 1]
            nxt = _find_element_with_key(nxt, next_key)
            if nxt is None:
                raise PathNotFound(path, next_key)
        current = nxt

    last_key = keys[-1]
    if isinstance(current, list):
        target = _find_element_with_key(current, last_key)
        if target is None:
            raise PathNotFound(path, last_key)
        target[last_key] = value
    elif isinstance(current, dict):
        current[last_key] = value
    else:
        raise PathNotFound(path, last_key)


def set_value_by_path(data: Any, path: str, value: Any, sep: str = DEFAULT_SEPARATOR) -> bool:
    """Write `value` back into nested frontmatter.

    Returns False and leaves `data` unchanged when the path no longer
    resolves (the document may have changed since it was flattened).
    """
    try:
        apply_path_update(data, path, value, sep)
    except PathNotFound as e:
        logger.warning("Skipping write-back: %s", e)
        return False
    return True


def get_value_by_path(data: Any, path: str, sep: str = DEFAULT_SEPARATOR, default: Any = None) -> Any:
    """Read the value at `path` using the same addressing as set_value_by_path."""
    keys = split_path(path, sep)
    current = data
    for i, key in enumerate(keys):
        if isinstance(current, list):
            current = _find_element_with_key(current, key)
            if current is None:
                return default
        if not isinstance(current, dict) or key not in current:
            return default
        current = current[key]
        if isinstance(current, list) and i + 1 < len(keys):
            current = _find_element_with_key(current, keys[i + 1])
            if current is None:
                return default
    return current
