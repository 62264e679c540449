"""
Constants and enums for the token system.

No magic strings - use enums and Literal types for constrained values.
"""

from enum import Enum


class TokenLayer(str, Enum):
    """
    Tiers of the token cascade.

    Order matters: a layer may only reference layers before it.
    """

    PRIMITIVE = "primitive"  # Raw values (palette, scales)
    SEMANTIC = "semantic"  # Purpose-named remappings
    COMPONENT = "component"  # Per-widget overrides


class ThemeMode(str, Enum):
    """Supported colour themes."""

    LIGHT = "light"
    DARK = "dark"
    HIGH_CONTRAST = "high-contrast"


class DensityLevel(str, Enum):
    """Supported spacing densities."""

    COMPACT = "compact"
    DEFAULT = "default"
    COMFORTABLE = "comfortable"


# Fixed layer order - later layers may reference earlier ones, never the reverse
LAYER_ORDER: tuple[TokenLayer, ...] = (
    TokenLayer.PRIMITIVE,
    TokenLayer.SEMANTIC,
    TokenLayer.COMPONENT,
)

THEME_ORDER: tuple[ThemeMode, ...] = (
    ThemeMode.LIGHT,
    ThemeMode.DARK,
    ThemeMode.HIGH_CONTRAST,
)

DENSITY_ORDER: tuple[DensityLevel, ...] = (
    DensityLevel.COMPACT,
    DensityLevel.DEFAULT,
    DensityLevel.COMFORTABLE,
)

# Spacing multiplier and display label per density
DENSITY_MULTIPLIERS: dict[DensityLevel, tuple[float, str]] = {
    DensityLevel.COMPACT: (0.85, "Compact"),
    DensityLevel.DEFAULT: (1.0, "Default"),
    DensityLevel.COMFORTABLE: (1.15, "Comfortable"),
}

# Token path that carries the density multiplier in every variant
DENSITY_MULTIPLIER_PATH = "density.multiplier"

# Document markers
VALUE_KEY = "$value"
TYPE_KEY = "$type"
DESCRIPTION_KEY = "$description"
EXTENSIONS_KEY = "$extensions"
METADATA_PREFIX = "$"

# Selector attributes
THEME_ATTRIBUTE = "data-theme"
DENSITY_ATTRIBUTE = "data-density"

# Document file suffixes understood by the store
DOCUMENT_SUFFIXES = (".json", ".yaml", ".yml")

# Metadata documents
MANIFEST_DOCUMENT = "component-manifest"
EXAMPLES_DOCUMENT = "usage-examples"

# Scalar values a token can hold after parsing
TokenValue = str | int | float


class ErrorMessages:
    """Standardized error messages."""

    LAYER_MISSING = "No documents found for layer '{layer}'."
    UNREADABLE = "Cannot read token document '{source}': {reason}"
    NOT_STRUCTURED = "Token document '{source}' is not valid structured data: {reason}"
    NOT_A_MAPPING = "Token document '{source}' must contain a mapping at '{path}'."
    LEAF_WITH_CHILDREN = "Token '{path}' in '{source}' has both '$value' and child groups."
    DUPLICATE_NAME = "Tokens '{first}' and '{second}' in '{source}' flatten to the same name."
    BAD_VALUE = "Token '{path}' in '{source}' has an unsupported value: {value!r}"
    BAD_METADATA = "Token '{path}' in '{source}' has a non-string {key}: {value!r}"
    NAME_CLASH = "Documents '{first}' and '{second}' share the name '{stem}'."
    BAD_REFERENCE = "Token '{path}' in '{source}' has a malformed reference: {value!r}"
    LEGACY_REFERENCE = (
        "Token '{path}' in '{source}' uses '$'-prefixed reference {value!r}; "
        "use '{{{suggestion}}}' instead."
    )


class SuccessMessages:
    """Standardized success messages."""

    STYLESHEET_WRITTEN = "Wrote stylesheet ({count} variants) to {path}."
    TYPES_WRITTEN = "Wrote type module to {path}."
