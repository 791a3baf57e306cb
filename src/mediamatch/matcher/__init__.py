"""Matcher module for mediamatch.

Provides media query parsing, unit normalization and matching.
"""

from mediamatch.matcher.cache import ParseCache, get_cache, reset_cache
from mediamatch.matcher.evaluator import MediaEvaluator, match
from mediamatch.matcher.parser import (
    AST,
    Expression,
    MediaQueryParser,
    MediaQuerySyntaxError,
    Modifier,
    QueryNode,
    parse,
)

__all__ = [
    "AST",
    "Expression",
    "MediaEvaluator",
    "MediaQueryParser",
    "MediaQuerySyntaxError",
    "Modifier",
    "ParseCache",
    "QueryNode",
    "get_cache",
    "match",
    "parse",
    "reset_cache",
]
