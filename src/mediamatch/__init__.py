"""mediamatch - Evaluate CSS media queries outside the browser.

Parses media query lists such as ``screen and (min-width: 48em)`` and checks
them against a set of environment values, e.g. for server-side rendering or
responsive image selection.
"""

from mediamatch.matcher import (
    AST,
    Expression,
    MediaEvaluator,
    MediaQueryParser,
    MediaQuerySyntaxError,
    Modifier,
    ParseCache,
    QueryNode,
    match,
    parse,
)
from mediamatch.matcher.units import (
    get_root_font_size,
    root_font_size,
    set_root_font_size,
    to_decimal,
    to_dpi,
    to_px,
)
from mediamatch.values import FeatureKind, MediaFeature, MediaValues, classify_feature

__version__ = "0.1.0"

__all__ = [
    "AST",
    "Expression",
    "FeatureKind",
    "MediaEvaluator",
    "MediaFeature",
    "MediaQueryParser",
    "MediaQuerySyntaxError",
    "MediaValues",
    "Modifier",
    "ParseCache",
    "QueryNode",
    "__version__",
    "classify_feature",
    "get_root_font_size",
    "match",
    "parse",
    "root_font_size",
    "set_root_font_size",
    "to_decimal",
    "to_dpi",
    "to_px",
]
