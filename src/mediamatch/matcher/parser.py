"""Media query parser.

Parses CSS media query lists like:
- screen
- not print
- only screen and (min-width: 48em)
- (orientation: landscape) and (max-device-width: 1024px)
- screen and (-webkit-min-device-pixel-ratio: 2), (min-resolution: 192dpi)

Each comma-separated query becomes a QueryNode; queries are OR-ed together
and the expressions inside a query are AND-ed. Values are kept as written,
units are only converted when matching.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum

from pyparsing import (
    CaselessKeyword,
    Opt,
    ParseBaseException,
    ParserElement,
    Regex,
    Suppress,
    identchars,
)

from mediamatch.logging import get_logger
from mediamatch.matcher.cache import ParseCache, get_cache

logger = get_logger(__name__)

# Enable packrat parsing for performance
ParserElement.enable_packrat()

_RE_COMMENTS = re.compile(r"/\*[^*]*\*+(?:[^/][^*]*\*+)*/")

# -webkit-min-device-pixel-ratio, min--moz-device-pixel-ratio, max-width...
_RE_FEATURE = re.compile(r"^(?:-(?:webkit|moz|o)-)?(?:(min|max)-)?(?:-moz-)?(.+)$")


class Modifier(str, Enum):
    """Range modifiers."""

    MIN = "min"
    MAX = "max"


@dataclass
class Expression:
    """A single parenthesized feature test, e.g. ``(min-width: 48em)``."""

    feature: str
    modifier: Modifier | None = None
    value: str | None = None

    def __repr__(self) -> str:
        name = f"{self.modifier.value}-{self.feature}" if self.modifier else self.feature
        if self.value is None:
            return f"({name})"
        return f"({name}: {self.value})"


@dataclass
class QueryNode:
    """One comma-separated query: an optional ``not``, a media type and AND-ed expressions."""

    type: str = "all"
    inverse: bool = False
    expressions: list[Expression] = field(default_factory=list)

    def __repr__(self) -> str:
        parts = ["not " + self.type if self.inverse else self.type]
        parts.extend(repr(e) for e in self.expressions)
        return " and ".join(parts)


# Type alias for a parsed query list
AST = list[QueryNode]


class MediaQuerySyntaxError(ValueError):
    """Raised when a media query does not follow the media query grammar."""

    def __init__(self, clause: str, query: str | None = None) -> None:
        self.clause = clause
        self.query = clause if query is None else query
        super().__init__(f'Invalid CSS media query: "{clause}"')


class MediaQueryParser:
    """Parser for media query lists."""

    def __init__(self, cache: ParseCache | None = None):
        """Initialize the parser grammar.

        Args:
            cache: Cache to store parsed queries in. Defaults to the
                process-wide cache.
        """
        self._cache = cache
        self._query, self._group, self._expression = self._build_parser()

    @property
    def cache(self) -> ParseCache:
        """The cache this parser reads from and writes to."""
        return self._cache if self._cache is not None else get_cache()

    def _build_parser(self) -> tuple[ParserElement, ParserElement, ParserElement]:
        """Build the pyparsing grammar.

        Returns:
            The query grammar, the expression group scanner and the
            expression grammar.
        """
        # Media type (screen, print, all...)
        media_type = Regex(r"[_a-z][-\w]*", flags=re.IGNORECASE).set_results_name("type")

        # Leading keyword, "only" is accepted and ignored; "not-foo" is a type
        keyword_chars = identchars + "-"
        prefix = (
            CaselessKeyword("not", ident_chars=keyword_chars) | CaselessKeyword("only", ident_chars=keyword_chars)
        ).set_results_name("prefix")

        # Parenthesized group, only scanned here and parsed as an expression later
        group = Regex(r"\([^)]+\)")

        # Everything after "and" is scanned for groups
        rest = Regex(r".*", flags=re.DOTALL).set_results_name("rest")

        query = ((Opt(prefix) + media_type) | group.set_results_name("group")) + Opt(
            CaselessKeyword("and") + rest
        )

        # Expression: ( feature [: value] )
        feature = Regex(r"[_a-z-][-_a-z0-9]*", flags=re.IGNORECASE).set_results_name("feature")
        value = Regex(r"[^)]+").set_results_name("value")
        expression = Suppress("(") + feature + Opt(Suppress(":") + value) + Suppress(")")

        return query, group, expression

    def _parse_expression(self, text: str, clause: str, query: str) -> Expression:
        """Parse one parenthesized group into an Expression."""
        try:
            result = self._expression.parse_string(text, parse_all=True)
        except ParseBaseException as e:
            raise MediaQuerySyntaxError(clause, query) from e

        modifier, name = _RE_FEATURE.match(result["feature"].lower()).groups()
        value = result.get("value")

        return Expression(
            feature=name,
            modifier=Modifier(modifier) if modifier else None,
            value=value.strip() if value is not None else None,
        )

    def _parse_clause(self, clause: str, query: str) -> QueryNode:
        """Parse one comma-separated query into a QueryNode."""
        # Remove comments first
        clause = _RE_COMMENTS.sub("", clause).strip()

        try:
            result = self._query.parse_string(clause, parse_all=True)
        except ParseBaseException as e:
            raise MediaQuerySyntaxError(clause, query) from e

        prefix = result.get("prefix")
        media_type = result.get("type")
        node = QueryNode(
            type=media_type.lower() if media_type else "all",
            inverse=prefix is not None and prefix.lower() == "not",
        )

        text = (result.get("group", "") + result.get("rest", "")).strip()
        if not text:
            return node

        groups = [tokens[0] for tokens, _, _ in self._group.scan_string(text)]
        if not groups:
            raise MediaQuerySyntaxError(clause, query)

        node.expressions = [self._parse_expression(g, clause, query) for g in groups]
        return node

    def parse(self, query: str) -> AST:
        """Parse a media query list.

        Args:
            query: The media query list to parse.

        Returns:
            One QueryNode per comma-separated query.

        Raises:
            MediaQuerySyntaxError: If any of the queries is invalid.
        """
        cache = self.cache
        cached = cache.get(query)
        if cached is not None:
            return cached

        ast = [self._parse_clause(clause, query) for clause in query.split(",")]

        cache.put(query, ast)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Parsed media query", query=query, nodes=len(ast))
        return ast


# Global parser instance
_parser: MediaQueryParser | None = None


def get_parser() -> MediaQueryParser:
    """Get or create the global parser instance."""
    global _parser
    if _parser is None:
        _parser = MediaQueryParser()
    return _parser


def parse(query: str, cache: ParseCache | None = None) -> AST:
    """Parse a media query list.

    Convenience function using the global parser.

    Example:
        >>> parse("screen and (min-width: 48em)")
        [screen and (min-width: 48em)]

    Args:
        query: The media query list to parse.
        cache: Optional cache to use instead of the process-wide one.

    Returns:
        Parsed AST.
    """
    if cache is not None:
        return MediaQueryParser(cache).parse(query)
    return get_parser().parse(query)
