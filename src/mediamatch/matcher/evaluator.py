"""Evaluator for matching media queries against environment values."""

from __future__ import annotations

import math
from typing import Any, Mapping

from mediamatch.matcher.parser import AST, Expression, Modifier, QueryNode, parse
from mediamatch.matcher.units import to_count, to_decimal, to_dpi, to_px
from mediamatch.values import FeatureKind, MediaValues, classify_feature, to_value_bag

# Values that make a keyword feature false in boolean context, e.g. (hover)
_FALSE_KEYWORDS = frozenset({"none", "no-preference", "0"})

_NORMALIZERS = {
    FeatureKind.LENGTH: to_px,
    FeatureKind.RESOLUTION: to_dpi,
    FeatureKind.RATIO: to_decimal,
}


class MediaEvaluator:
    """Evaluator for a parsed media query list."""

    def __init__(self, ast: AST):
        """Initialize with a parsed query list.

        Args:
            ast: Parsed query list from MediaQueryParser.
        """
        self.ast = ast

    @classmethod
    def from_string(cls, query: str) -> "MediaEvaluator":
        """Create an evaluator from a media query string.

        Args:
            query: Media query list to parse.

        Returns:
            MediaEvaluator instance.

        Raises:
            MediaQuerySyntaxError: If the query is invalid.
        """
        return cls(parse(query))

    def matches(self, values: Mapping[Any, Any] | MediaValues | None) -> bool:
        """Check if the environment described by ``values`` matches the query list.

        Args:
            values: Feature values of the environment.

        Returns:
            True if at least one query in the list matches.
        """
        bag = to_value_bag(values)
        return any(self._evaluate_node(node, bag) for node in self.ast)

    def _evaluate_node(self, node: QueryNode, bag: Mapping[str, Any]) -> bool:
        """Evaluate one comma-separated query.

        ``not`` inverts the combined expression result, but a type mismatch
        can only be turned into a match by ``not`` itself.
        """
        type_match = node.type == "all" or bag.get("type") == node.type

        if type_match == node.inverse:
            return False

        expressions_match = all(self._evaluate_expression(e, bag) for e in node.expressions)
        return expressions_match != node.inverse

    def _evaluate_expression(self, expr: Expression, bag: Mapping[str, Any]) -> bool:
        """Evaluate a single feature test.

        Args:
            expr: The expression to evaluate.
            bag: Environment values keyed by feature name.

        Returns:
            True if the expression matches.
        """
        value = bag.get(expr.feature)

        # Missing values never match, zero does
        if _is_missing(value):
            return False

        kind = classify_feature(expr.feature)

        match kind:
            case FeatureKind.LENGTH | FeatureKind.RESOLUTION | FeatureKind.RATIO:
                normalize = _NORMALIZERS[kind]
                return self._compare(normalize(value), normalize(expr.value), expr.modifier)
            case FeatureKind.COUNT:
                return self._compare(to_count(value, 0), to_count(expr.value, 1), expr.modifier)
            case _:
                return self._equals(value, expr.value)

    def _compare(self, actual: float, expected: float, modifier: Modifier | None) -> bool:
        """Compare normalized numbers, tolerating unit conversion rounding."""
        close = math.isclose(actual, expected, rel_tol=1e-9, abs_tol=1e-9)
        match modifier:
            case Modifier.MIN:
                return close or actual > expected
            case Modifier.MAX:
                return close or actual < expected
            case _:
                return close

    def _equals(self, actual: Any, expected: str | None) -> bool:
        """Case-insensitive textual comparison for keyword features."""
        if expected is None:
            return _keyword(actual) not in _FALSE_KEYWORDS
        return _keyword(actual) == _keyword(expected)


def _is_missing(value: Any) -> bool:
    if value is None or value == "":
        return True
    return isinstance(value, float) and math.isnan(value)


def _keyword(value: Any) -> str:
    """Stringify a value the way it would be written in CSS."""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip().lower()


def match(query: str | AST, values: Mapping[Any, Any] | MediaValues | None) -> bool:
    """Check whether a media query list matches the given environment values.

    Convenience function for one-off evaluations.

    Example:
        >>> match("screen and (min-width: 48em)", {"type": "screen", "width": 1024})
        True

    Args:
        query: Media query string, or an AST returned by ``parse``.
        values: Feature values of the environment.

    Returns:
        True if the query matches.

    Raises:
        MediaQuerySyntaxError: If ``query`` is a string that cannot be parsed.
    """
    ast = parse(query) if isinstance(query, str) else query
    return MediaEvaluator(ast).matches(values)
