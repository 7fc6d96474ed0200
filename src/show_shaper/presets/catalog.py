"""Built-in brand presets.

Each preset bundles style overrides, a layout suggestion and per-component
overrides. The table is validated once at import and never mutated.
"""

from types import MappingProxyType
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field

from ..schema.design import (
    MAX_COLUMNS,
    MAX_FONT_SCALE,
    MIN_COLUMNS,
    MIN_FONT_SCALE,
    ComponentType,
    Theme,
)


class PresetModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="forbid")


class PresetStyles(PresetModel):
    """Theme, font scale and per-type class tokens."""

    theme: Theme
    font_scale: float = Field(ge=MIN_FONT_SCALE, le=MAX_FONT_SCALE, alias="fontScale")
    app_class: str | None = Field(default=None, alias="appClass")
    card_class: str | None = Field(default=None, alias="cardClass")
    table_class: str | None = Field(default=None, alias="tableClass")
    chart_class: str | None = Field(default=None, alias="chartClass")

    def class_for(self, component_type: ComponentType | str) -> str | None:
        """Class token applied to a component of the given type, if any."""
        kind = ComponentType(component_type)
        if kind is ComponentType.TABLE:
            return self.table_class
        if kind is ComponentType.CHART:
            return self.chart_class
        if kind in (ComponentType.CARD, ComponentType.GRID):
            return self.card_class
        return None


class PresetLayout(PresetModel):
    columns: int = Field(ge=MIN_COLUMNS, le=MAX_COLUMNS)
    suggested_order: tuple[str, ...] | None = Field(default=None, alias="suggestedOrder")


class ComponentOverride(PresetModel):
    """Applied only to components that already exist under `id`."""

    id: str
    type: ComponentType | None = None
    props: Mapping[str, Any] | None = None


class Preset(PresetModel):
    key: str
    styles: PresetStyles
    layout: PresetLayout
    component_overrides: tuple[ComponentOverride, ...] = Field(default=(), alias="componentOverrides")


_RAW_PRESETS: dict[str, dict[str, Any]] = {
    "spotify": {
        "styles": {
            "theme": "dark",
            "fontScale": 1,
            "appClass": "bg-black text-white",
            "cardClass": "bg-gray-900 rounded-lg border-green-500",
            "tableClass": "bg-black text-white border-green-500",
            "chartClass": "bg-black text-[#1DB954]",
        },
        "layout": {"columns": 1, "suggestedOrder": ["table1", "chart1", "kpi1"]},
    },
    "doordash": {
        "styles": {
            "theme": "light",
            "fontScale": 1,
            "appClass": "bg-white text-gray-900",
            "cardClass": "bg-white rounded-lg border-red-400 shadow-sm",
            "tableClass": "bg-white text-gray-900 border-[#FF3008]",
            "chartClass": "bg-white text-[#FF3008]",
        },
        "layout": {"columns": 2, "suggestedOrder": ["table1", "card1", "chart1"]},
    },
    "uber": {
        "styles": {
            "theme": "light",
            "fontScale": 1,
            "appClass": "bg-white text-black",
            "cardClass": "bg-gray-50 rounded-lg border-gray-200 shadow-sm",
            "tableClass": "bg-white text-black border-gray-200",
            "chartClass": "bg-white text-black",
        },
        "layout": {"columns": 1, "suggestedOrder": ["table1", "kpi1", "chart1"]},
    },
    "netflix": {
        "styles": {
            "theme": "dark",
            "fontScale": 1,
            "appClass": "bg-[#141414] text-white",
            "cardClass": "bg-gray-900 rounded border-red-600",
            "tableClass": "bg-[#141414] text-white border-red-600",
            "chartClass": "bg-[#141414] text-[#E50914]",
        },
        "layout": {"columns": 1, "suggestedOrder": ["card1", "chart1", "kpi1"]},
        "componentOverrides": [
            {"id": "table1", "type": "card", "props": {"style": "image-heavy", "columns": 3}},
        ],
    },
    "applemusic": {
        "styles": {
            "theme": "dark",
            "fontScale": 1.1,
            "appClass": "bg-gray-950 text-white",
            "cardClass": "bg-gray-900 rounded-xl border-pink-500",
            "tableClass": "bg-gray-900 text-white border-pink-500",
            "chartClass": "bg-gray-900 text-pink-500",
        },
        "layout": {"columns": 2, "suggestedOrder": ["card1", "chart1", "table1"]},
    },
    "youtube": {
        "styles": {
            "theme": "light",
            "fontScale": 1,
            "appClass": "bg-white text-gray-900",
            "cardClass": "bg-white rounded-lg border-red-500 shadow-sm",
            "tableClass": "bg-white text-gray-900 border-red-500",
            "chartClass": "bg-white text-[#FF0000]",
        },
        "layout": {"columns": 3, "suggestedOrder": ["card1", "chart1", "table1"]},
    },
}


def _load_presets() -> Mapping[str, Preset]:
    presets = {key: Preset.model_validate({"key": key, **raw}) for key, raw in _RAW_PRESETS.items()}
    return MappingProxyType(presets)


PRESETS: Mapping[str, Preset] = _load_presets()


def normalize_key(key: str) -> str:
    return key.strip().lower()


def get_preset(key: str) -> Preset | None:
    """Look up a preset by key (case-insensitive). None when unknown."""
    return PRESETS.get(normalize_key(key))


def preset_keys() -> tuple[str, ...]:
    return tuple(PRESETS)


# Presets that also force a named designStyle
STYLED_PRESETS = frozenset({"netflix", "uber"})
