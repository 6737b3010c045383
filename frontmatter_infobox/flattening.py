from __future__ import annotations

from typing import Any, Dict, List, Tuple

from .paths import DEFAULT_SEPARATOR, join_path


def flatten_properties(data: Any, sep: str = DEFAULT_SEPARATOR) -> List[Tuple[str, Any]]:
    """Flatten nested frontmatter into (path, value) pairs.

    Takes nested yaml like this::

        image: name.jpg
        nested:
          - child1:
              - grandchild1: bobby
              - grandchild2: alice
          - child2: greg

    and produces, in input order::

        [('image', 'name.jpg'),
         ('nested.child1.grandchild1', 'bobby'),
         ('nested.child1.grandchild2', 'alice'),
         ('nested.child2', 'greg')]

    Lists add no segment of their own. A bare scalar inside a list is
    emitted under the list's path, so sibling scalars share one path.
    """
    entries: List[Tuple[str, Any]] = []
    _collect_entries(data, '', sep, entries)
    return entries


def _collect_entries(data: Any, parent_key: str, sep: str, entries: List[Tuple[str, Any]]) -> None:
    if isinstance(data, dict):
        for k, v in data.items():
            current_key = join_path(parent_key, k, sep)
            if isinstance(v, (dict, list)):
                _collect_entries(v, current_key, sep, entries)
            else:
                entries.append((current_key, v))
    elif isinstance(data, list):
        for item in data:
            if isinstance(item, (dict, list)):
                _collect_entries(item, parent_key, sep, entries)
            elif parent_key:
                entries.append((parent_key, item))


def flatten_to_mapping(data: Any, sep: str = DEFAULT_SEPARATOR) -> Dict[str, Any]:
    """Flatten into an ordered dict of path -> value.

    Colliding paths collapse and the last value wins, e.g.
    ``{'tags': ['red', 'blue']}`` becomes ``{'tags': 'blue'}``. The table
    shows one editable cell per path, so this collapse is kept as is.
    """
    flat: Dict[str, Any] = {}
    for path, value in flatten_properties(data, sep):
        flat[path] = value
    return flat
