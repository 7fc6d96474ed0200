"""Design schema: the persisted description of a dashboard."""

from enum import Enum
from typing import Any

import pydantic
from pydantic import BaseModel, ConfigDict, Field, field_validator
from returns.pipeline import is_successful
from returns.result import Failure, Result, Success

from ..core.errors import SchemaValidationError
from ..core.validate import ValidationResult


MAX_COMPONENTS = 30
MIN_FONT_SCALE = 0.8
MAX_FONT_SCALE = 2.0
MIN_COLUMNS = 1
MAX_COLUMNS = 3


class Theme(str, Enum):
    """Color theme."""

    LIGHT = "light"
    DARK = "dark"


class Spacing(str, Enum):
    """Whitespace density."""

    COMPACT = "compact"
    NORMAL = "normal"
    SPACIOUS = "spacious"


class DesignStyle(str, Enum):
    """Named visual language matched by class name in the renderer."""

    MINIMAL = "minimal"
    NETFLIX = "netflix"
    UBER = "uber"
    DEFAULT = "default"


class CardStyle(str, Enum):
    """Card presentation."""

    MINIMAL = "minimal"
    IMAGE_HEAVY = "image-heavy"
    COMPACT = "compact"


class ComponentType(str, Enum):
    """Closed set of renderable components."""

    TABLE = "table"
    CHART = "chart"
    KPI = "kpi"
    CARD = "card"
    GRID = "grid"


class DesignModel(BaseModel):
    """Base for design models: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")


class Styles(DesignModel):
    """Global look of the dashboard. Unknown keys are rejected."""

    model_config = ConfigDict(extra="forbid")

    theme: Theme = Theme.LIGHT
    font_scale: float = Field(default=1.0, ge=MIN_FONT_SCALE, le=MAX_FONT_SCALE, alias="fontScale")
    spacing: Spacing = Spacing.NORMAL
    design_style: DesignStyle | None = Field(default=None, alias="designStyle")
    app_style: str | None = Field(default=None, alias="appStyle")
    card_style: CardStyle | None = Field(default=None, alias="cardStyle")


class StylePatch(DesignModel):
    """Partial Styles carried by set_style; every field optional."""

    model_config = ConfigDict(extra="forbid")

    theme: Theme | None = None
    font_scale: float | None = Field(default=None, ge=MIN_FONT_SCALE, le=MAX_FONT_SCALE, alias="fontScale")
    spacing: Spacing | None = None
    design_style: DesignStyle | None = Field(default=None, alias="designStyle")
    app_style: str | None = Field(default=None, alias="appStyle")
    card_style: CardStyle | None = Field(default=None, alias="cardStyle")

    def to_json_dict(self) -> dict[str, Any]:
        """Only the fields the caller actually sent, camelCase."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


class Layout(DesignModel):
    """Column count and render order.

    `order` may reference ids that no longer exist in `components`; the
    renderer skips them.
    """

    columns: int = Field(default=1, ge=MIN_COLUMNS, le=MAX_COLUMNS)
    order: list[str] = Field(default_factory=list)


class Component(DesignModel):
    """One visual unit. `props` is open; each renderer defines its vocabulary."""

    id: str
    type: ComponentType
    props: dict[str, Any] = Field(default_factory=dict)


class Design(DesignModel):
    """Root document persisted per user."""

    styles: Styles
    layout: Layout
    components: list[Component] = Field(max_length=MAX_COMPONENTS)

    @field_validator("components")
    @classmethod
    def validate_unique_ids(cls, components: list[Component]) -> list[Component]:
        seen: set[str] = set()
        for component in components:
            if component.id in seen:
                raise ValueError(f"Duplicate component id: {component.id}")
            seen.add(component.id)
        return components

    def component(self, component_id: str) -> Component | None:
        """Find a component by id."""
        for component in self.components:
            if component.id == component_id:
                return component
        return None

    def to_json_dict(self) -> dict[str, Any]:
        """Wire shape: camelCase keys, unset optional styles omitted."""
        data = self.model_dump(mode="json", by_alias=True)
        data["styles"] = {k: v for k, v in data["styles"].items() if v is not None}
        return data


def schema_error(kind: str, e: pydantic.ValidationError) -> SchemaValidationError:
    errors = e.errors(include_url=False, include_context=False, include_input=False)
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()))
    message = f"Invalid {kind}: {first.get('msg', 'validation failed')}"
    if location:
        message += f" at {location}"
    return SchemaValidationError(message, errors=errors)


def validate_design(raw: Any) -> Design:
    """
    Validate raw data (dict, JSON text, or Design) into a Design.

    Args:
        raw: Parsed JSON value, JSON string/bytes, or an existing Design

    Returns:
        Validated Design with defaults applied

    Raises:
        SchemaValidationError: If the data violates the design schema
    """
    if isinstance(raw, Design):
        return raw
    try:
        if isinstance(raw, (str, bytes)):
            return Design.model_validate_json(raw)
        return Design.model_validate(raw)
    except pydantic.ValidationError as e:
        raise schema_error("design", e) from e


def check_design(raw: Any) -> Result[Design, ValidationResult]:
    """
    Validate a design (Result pattern version).

    Returns:
        Success with the Design, or Failure with the first error and details
    """
    try:
        return Success(validate_design(raw))
    except SchemaValidationError as e:
        first = e.errors[0] if e.errors else {}
        field = ".".join(str(part) for part in first.get("loc", ())) or None
        return Failure(ValidationResult(str(e), field, tuple(e.errors)))


def is_valid_design(raw: Any) -> bool:
    """True if raw data validates as a Design."""
    return is_successful(check_design(raw))
