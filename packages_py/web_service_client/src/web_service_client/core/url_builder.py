"""
URL builder for web_service_client.

Combines path segments and (name, value) pairs into one request path:

    ("Name", None)    => ""            entry dropped
    ("Name", "")      => "Name"        command flag
    ("Name", "  ")    => "Name"        blank degrades to command flag
    ("Name", "a b")   => "Name=a+b"
    ("Name", True)    => "Name=true"
    ("Name", 6)       => "Name=6"
"""
from enum import Enum
from typing import Any, Iterable, List, Tuple, Union

from ..types import QueryEntry

# Applied in order; "%" and "+" are not in the table so one pass never
# re-escapes its own output.
_ESCAPES: Tuple[Tuple[str, str], ...] = (
    (" ", "+"),
    ("&", "%26"),
    ("/", "%2F"),
    ("=", "%3D"),
    ("?", "%3F"),
    ("@", "%40"),
    ("[", "%5B"),
    ("]", "%5D"),
)


def escape(text: str) -> str:
    """Escape a query name or value with the fixed escape table."""
    for char, replacement in _ESCAPES:
        text = text.replace(char, replacement)
    return text


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        value = value.value
    text = value if isinstance(value, str) else str(value).strip()
    if not text.strip():
        return ""
    return escape(text)


def query_entry(name: str, value: Any) -> str:
    """Render one query entry. ``value`` must not be None."""
    formatted = _format_value(value)
    if not formatted:
        return escape(name)
    return f"{escape(name)}={formatted}"


def combine_query(entries: Iterable[QueryEntry]) -> str:
    """Join entries with '&', dropping None values and keeping caller order."""
    rendered = (query_entry(name, value) for name, value in entries if value is not None)
    return "&".join(entry for entry in rendered if entry.strip())


def combine_path(*segments: str) -> str:
    """Join path segments with '/' after trimming slashes from each."""
    return "/".join(segment.strip("/") for segment in segments)


def combine_url(*parts: Union[str, QueryEntry]) -> str:
    """Combine path segments and query entries into one request path.

    Positional strings are path segments, positional 2-tuples are query
    entries. At least one path segment is required.

    Example:
        combine_url("demo", "rest", "//xxxx//", "yyy", ("list", "a"), ("add", 6))
        # 'demo/rest/xxxx/yyy?list=a&add=6'
    """
    segments: List[str] = []
    entries: List[QueryEntry] = []
    for part in parts:
        if isinstance(part, str):
            segments.append(part)
        elif isinstance(part, tuple) and len(part) == 2:
            entries.append(part)
        else:
            raise TypeError(f"combine_url: expected str or (name, value) tuple, got {part!r}")

    if not segments:
        raise ValueError("combine_url requires at least one path segment")

    url = combine_path(*segments)
    query = combine_query(entries)
    if not query:
        return url.rstrip("?&")
    if url.endswith(("?", "&")):
        return f"{url}{query}"
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{query}"
