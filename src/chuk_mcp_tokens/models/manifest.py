"""
Component manifest models - read-only metadata for documentation.

Entries are parsed from the component manifest and usage-examples
documents and never change for the lifetime of the process.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

# Shown by documentation pages when a component has no manifest entry
NO_MANIFEST_DATA = "No manifest data yet for this component."

# Placeholder for empty props-table cells
EMPTY_CELL = "-"


def _display(value: Any) -> str:
    if value is None or value == "":
        return EMPTY_CELL
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def title_case(slug: str) -> str:
    """'date-range-picker' -> 'Date Range Picker'."""
    return " ".join(part[:1].upper() + part[1:] for part in slug.split("-"))


class PropDescriptor(BaseModel):
    """One documented prop of a component."""

    name: str
    type: str | None = None
    default: Any = None
    description: str | None = None

    model_config = {"frozen": True}


class PropRow(BaseModel):
    """A props-table row with every cell rendered as text."""

    name: str
    type: str = EMPTY_CELL
    default: str = EMPTY_CELL
    description: str = EMPTY_CELL

    model_config = {"frozen": True}

    @classmethod
    def from_descriptor(cls, prop: PropDescriptor) -> PropRow:
        return cls(
            name=prop.name,
            type=_display(prop.type),
            default=_display(prop.default),
            description=_display(prop.description),
        )


class AccessibilityInfo(BaseModel):
    """Accessibility notes carried in the manifest."""

    role: str | None = None
    keyboard_navigation: list[str] = Field(default_factory=list, alias="keyboardNavigation")
    aria_support: list[str] = Field(default_factory=list, alias="ariaSupport")
    wcag: str | None = None

    model_config = {"frozen": True, "populate_by_name": True}


class UsageExample(BaseModel):
    """A usage example, matched to components by name."""

    id: str = ""
    intent: str = ""
    component: str | None = None
    components: list[str] = Field(default_factory=list)
    code: str | None = None
    explanation: str | None = None

    model_config = {"frozen": True}

    @classmethod
    def from_document(cls, example_id: str, data: dict[str, Any]) -> UsageExample:
        """Flatten an examples-document entry (intent + solution block)."""
        solution = data.get("solution") or {}
        components = solution.get("components")
        return cls(
            id=example_id,
            intent=data.get("intent", ""),
            component=solution.get("component"),
            components=components if isinstance(components, list) else [],
            code=solution.get("code"),
            explanation=solution.get("explanation"),
        )

    def mentions(self, component_name: str) -> bool:
        """
        Whether this example applies to `component_name`.

        A single `component` field takes precedence; the `components`
        list is consulted only when it is absent.
        """
        if self.component:
            return self.component == component_name
        return component_name in self.components


class ComponentManifestEntry(BaseModel):
    """Metadata for one UI component."""

    slug: str
    name: str
    description: str = ""
    category: str | None = None
    props: list[PropDescriptor] = Field(default_factory=list)
    accessibility: AccessibilityInfo | None = None
    examples: list[UsageExample] = Field(default_factory=list)

    model_config = {"frozen": True}

    @classmethod
    def from_document(cls, slug: str, data: dict[str, Any]) -> ComponentManifestEntry:
        """Parse a manifest entry; props arrive keyed by prop name."""
        raw_props = data.get("props")
        if not isinstance(raw_props, dict):
            raw_props = {}
        props = [
            PropDescriptor.model_validate(
                {**(prop_data if isinstance(prop_data, dict) else {}), "name": prop_name}
            )
            for prop_name, prop_data in raw_props.items()
        ]
        raw_examples = data.get("examples")
        if not isinstance(raw_examples, list):
            raw_examples = []
        # Inline examples are solution blocks with an optional intent
        examples = [
            UsageExample.from_document(
                f"{slug}-{index}", {"intent": example.get("intent", ""), "solution": example}
            )
            for index, example in enumerate(raw_examples)
            if isinstance(example, dict)
        ]
        return cls(
            slug=slug,
            name=data.get("name") or title_case(slug),
            description=data.get("description", ""),
            category=data.get("category"),
            props=props,
            accessibility=data.get("accessibility"),
            examples=examples,
        )


class ComponentSummary(BaseModel):
    """Slug and display name for component listings."""

    slug: str
    name: str

    model_config = {"frozen": True}


class ColorSwatch(BaseModel):
    """A colour token for swatch listings."""

    name: str
    value: str

    model_config = {"frozen": True}
