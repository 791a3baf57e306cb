"""In-memory cache of parsed media queries."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mediamatch.matcher.parser import AST


class ParseCache:
    """Maps exact query strings to their parsed AST.

    Entries are never evicted; queries are expected to be a small, bounded set
    of literal strings such as stylesheet breakpoints. Two threads racing on
    the same query may both parse it, the last write wins and both results
    are equal.
    """

    def __init__(self) -> None:
        self._entries: dict[str, AST] = {}
        self._lock = threading.Lock()

    def get(self, query: str) -> AST | None:
        """Return the cached AST for a query, or None."""
        return self._entries.get(query)

    def put(self, query: str, ast: AST) -> None:
        """Store the AST for a query."""
        with self._lock:
            self._entries[query] = ast

    def clear(self) -> None:
        """Drop every cached entry."""
        with self._lock:
            self._entries.clear()

    def __contains__(self, query: object) -> bool:
        return query in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"ParseCache(entries={len(self._entries)})"


# Global cache instance (lazy-created)
_cache: ParseCache | None = None


def get_cache() -> ParseCache:
    """Get or create the process-wide parse cache."""
    global _cache
    if _cache is None:
        _cache = ParseCache()
    return _cache


def reset_cache() -> ParseCache:
    """Replace the process-wide parse cache with an empty one.

    Returns:
        The new cache instance.
    """
    global _cache
    _cache = ParseCache()
    return _cache
