from __future__ import annotations

from typing import Any, List

DEFAULT_SEPARATOR = '.'


def split_path(path: str, sep: str = DEFAULT_SEPARATOR) -> List[str]:
    """Split a path on the separator.

    Segments are never unescaped: the separator is a setting chosen so it
    does not occur inside property names.
    """
    if not sep:
        raise ValueError("Path separator must not be empty.")
    if path is None:
        return []
    if not isinstance(path, str):
        path = str(path)
    return path.split(sep)


def join_path(parent: str, key: Any, sep: str = DEFAULT_SEPARATOR) -> str:
    if not isinstance(key, str):
        key = str(key)
    return f"{parent}{sep}{key}" if parent else key
