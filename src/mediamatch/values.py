"""Media feature names and the environment value bag.

A value bag maps feature names (``width``, ``resolution``, ``orientation``...)
to the concrete values of the environment being tested. Numbers stay numbers
and text stays text; how a value is interpreted is decided by the feature's
kind, not by its runtime type.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping, Union

from pydantic import BaseModel, ConfigDict, Field

FeatureValue = Union[int, float, str]


class MediaFeature(str, Enum):
    """Media features with a known evaluation rule."""

    WIDTH = "width"
    HEIGHT = "height"
    DEVICE_WIDTH = "device-width"
    DEVICE_HEIGHT = "device-height"
    RESOLUTION = "resolution"
    ASPECT_RATIO = "aspect-ratio"
    DEVICE_ASPECT_RATIO = "device-aspect-ratio"
    DEVICE_PIXEL_RATIO = "device-pixel-ratio"
    GRID = "grid"
    COLOR = "color"
    COLOR_GAMUT = "color-gamut"
    COLOR_INDEX = "color-index"
    MONOCHROME = "monochrome"
    PREFERS_COLOR_SCHEME = "prefers-color-scheme"
    PREFERS_CONTRAST = "prefers-contrast"
    PREFERS_REDUCED_MOTION = "prefers-reduced-motion"
    FORCED_COLORS = "forced-colors"
    INVERTED_COLORS = "inverted-colors"
    HOVER = "hover"
    POINTER = "pointer"
    ANY_HOVER = "any-hover"
    ANY_POINTER = "any-pointer"
    ORIENTATION = "orientation"


class FeatureKind(str, Enum):
    """How a feature's values are normalized before comparison."""

    LENGTH = "length"
    RESOLUTION = "resolution"
    RATIO = "ratio"
    COUNT = "count"
    OPAQUE = "opaque"


FEATURE_KINDS: dict[str, FeatureKind] = {
    MediaFeature.WIDTH.value: FeatureKind.LENGTH,
    MediaFeature.HEIGHT.value: FeatureKind.LENGTH,
    MediaFeature.DEVICE_WIDTH.value: FeatureKind.LENGTH,
    MediaFeature.DEVICE_HEIGHT.value: FeatureKind.LENGTH,
    MediaFeature.RESOLUTION.value: FeatureKind.RESOLUTION,
    MediaFeature.ASPECT_RATIO.value: FeatureKind.RATIO,
    MediaFeature.DEVICE_ASPECT_RATIO.value: FeatureKind.RATIO,
    MediaFeature.DEVICE_PIXEL_RATIO.value: FeatureKind.RATIO,
    MediaFeature.GRID.value: FeatureKind.COUNT,
    MediaFeature.COLOR.value: FeatureKind.COUNT,
    MediaFeature.COLOR_INDEX.value: FeatureKind.COUNT,
    MediaFeature.MONOCHROME.value: FeatureKind.COUNT,
}


def classify_feature(feature: str | MediaFeature) -> FeatureKind:
    """Return the kind of a feature; unknown names are opaque."""
    if isinstance(feature, MediaFeature):
        feature = feature.value
    return FEATURE_KINDS.get(feature, FeatureKind.OPAQUE)


class MediaValues(BaseModel):
    """Concrete values describing an environment.

    Fields accept both the CSS names (``device-width``) and the Python names
    (``device_width``). Keys that are not known features are kept, so custom
    features can still be matched textually.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    media_type: str | None = Field(default=None, alias="type", description="Media type (screen, print...)")

    # Lengths
    width: FeatureValue | None = Field(default=None, description="Viewport width")
    height: FeatureValue | None = Field(default=None, description="Viewport height")
    device_width: FeatureValue | None = Field(default=None, alias="device-width")
    device_height: FeatureValue | None = Field(default=None, alias="device-height")

    # Resolution and ratios
    resolution: FeatureValue | None = Field(default=None, description="Resolution (dpi unless suffixed)")
    aspect_ratio: FeatureValue | None = Field(default=None, alias="aspect-ratio")
    device_aspect_ratio: FeatureValue | None = Field(default=None, alias="device-aspect-ratio")
    device_pixel_ratio: FeatureValue | None = Field(default=None, alias="device-pixel-ratio")

    # Counts
    grid: FeatureValue | None = Field(default=None, description="1 for grid devices, 0 otherwise")
    color: FeatureValue | None = Field(default=None, description="Bits per color component")
    color_index: FeatureValue | None = Field(default=None, alias="color-index")
    monochrome: FeatureValue | None = Field(default=None, description="Bits per pixel of a monochrome device")

    # Keywords
    color_gamut: FeatureValue | None = Field(default=None, alias="color-gamut")
    prefers_color_scheme: FeatureValue | None = Field(default=None, alias="prefers-color-scheme")
    prefers_contrast: FeatureValue | None = Field(default=None, alias="prefers-contrast")
    prefers_reduced_motion: FeatureValue | None = Field(default=None, alias="prefers-reduced-motion")
    forced_colors: FeatureValue | None = Field(default=None, alias="forced-colors")
    inverted_colors: FeatureValue | None = Field(default=None, alias="inverted-colors")
    hover: FeatureValue | None = Field(default=None)
    pointer: FeatureValue | None = Field(default=None)
    any_hover: FeatureValue | None = Field(default=None, alias="any-hover")
    any_pointer: FeatureValue | None = Field(default=None, alias="any-pointer")
    orientation: FeatureValue | None = Field(default=None, description="portrait or landscape")

    def as_bag(self) -> dict[str, FeatureValue]:
        """Return the set values keyed by CSS feature name."""
        return self.model_dump(by_alias=True, exclude_none=True)


def to_value_bag(values: Mapping[Any, Any] | MediaValues | None) -> dict[str, Any]:
    """Normalize any supported value bag into a plain dict keyed by feature name.

    The caller's mapping is copied, never mutated.
    """
    if values is None:
        return {}
    if isinstance(values, MediaValues):
        return values.as_bag()
    return {(key.value if isinstance(key, Enum) else str(key)): value for key, value in values.items()}


__all__ = [
    "FEATURE_KINDS",
    "FeatureKind",
    "FeatureValue",
    "MediaFeature",
    "MediaValues",
    "classify_feature",
    "to_value_bag",
]
