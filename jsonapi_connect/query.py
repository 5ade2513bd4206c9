"""
Path and query-parameter composition for JSON:API requests.

Every request path is ``<version>/<endpoint>``. Query parameters are the
caller's filters plus an optional ``include`` entry, compacted so that no
empty key is ever transmitted.
"""

from typing import Any, Dict, Iterable, Mapping, Optional, Union

IncludeSpec = Union[str, Iterable[str], None]


def is_empty(value: Any) -> bool:
    """True for ``None``, ``""`` and empty lists, tuples, sets and mappings."""
    if value is None:
        return True
    if isinstance(value, (str, bytes, list, tuple, set, frozenset, dict)):
        return len(value) == 0
    return False


def compact(params: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Return a copy of ``params`` without empty values.

    Non-empty values are passed through unchanged, so ``compact`` is
    idempotent.
    """
    if not params:
        return {}
    return {key: value for key, value in params.items() if not is_empty(value)}


def normalize_include(include: IncludeSpec) -> Optional[str]:
    """Turn relationship paths into the comma-separated ``include`` value.

    A string is returned as-is; an iterable of paths is comma-joined after
    dropping empty entries. Returns ``None`` when nothing remains.

    Examples:
        "books" -> "books"
        ["books", "photos.title"] -> "books,photos.title"
    """
    if include is None:
        return None
    if isinstance(include, str):
        return include or None
    joined = ",".join(str(path).strip() for path in include if not is_empty(path))
    return joined or None


def compose_query(
    query: Optional[Mapping[str, Any]] = None,
    include: IncludeSpec = None,
) -> Dict[str, Any]:
    """Merge ``query`` with ``include`` and compact the result.

    An ``include`` argument overrides an ``include`` key inside ``query``
    only when it is non-empty.
    """
    merged: Dict[str, Any] = dict(query or {})
    include_value = normalize_include(include)
    if include_value is not None:
        merged["include"] = include_value
    return compact(merged)


def join_path(version: str, endpoint: Optional[str] = None) -> str:
    """Build ``<version>/<endpoint>``, ignoring surrounding slashes.

    >>> join_path("v1", "/authors/1/")
    'v1/authors/1'
    >>> join_path("v1")
    'v1'
    """
    segments = [version.strip("/")]
    if endpoint:
        endpoint = endpoint.strip("/")
        if endpoint:
            segments.append(endpoint)
    return "/".join(segments)
