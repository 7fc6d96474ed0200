"""Preset catalog tests."""

import pytest

from show_shaper.presets import PRESETS, STYLED_PRESETS, get_preset, preset_keys
from show_shaper.schema import ComponentType, Theme


@pytest.mark.unit
def test_six_builtin_presets():
    assert set(preset_keys()) == {"spotify", "doordash", "uber", "netflix", "applemusic", "youtube"}
    assert STYLED_PRESETS == {"netflix", "uber"}


@pytest.mark.unit
def test_lookup_is_case_insensitive():
    assert get_preset("NetFlix") is PRESETS["netflix"]
    assert get_preset(" spotify ") is PRESETS["spotify"]
    assert get_preset("myspace") is None


@pytest.mark.unit
def test_netflix_bundle():
    netflix = PRESETS["netflix"]

    assert netflix.styles.theme is Theme.DARK
    assert netflix.layout.columns == 1
    assert netflix.layout.suggested_order == ("card1", "chart1", "kpi1")
    assert len(netflix.component_overrides) == 1
    override = netflix.component_overrides[0]
    assert override.id == "table1"
    assert override.type is ComponentType.CARD
    assert dict(override.props) == {"style": "image-heavy", "columns": 3}


@pytest.mark.unit
@pytest.mark.parametrize(
    "key,theme,font_scale,columns",
    [
        ("spotify", "dark", 1.0, 1),
        ("doordash", "light", 1.0, 2),
        ("uber", "light", 1.0, 1),
        ("applemusic", "dark", 1.1, 2),
        ("youtube", "light", 1.0, 3),
    ],
)
def test_preset_styles_and_layout(key, theme, font_scale, columns):
    preset = PRESETS[key]
    assert preset.styles.theme.value == theme
    assert preset.styles.font_scale == font_scale
    assert preset.layout.columns == columns
    assert preset.component_overrides == ()


@pytest.mark.unit
def test_class_tokens_by_component_type():
    styles = PRESETS["spotify"].styles
    assert styles.class_for("table") == styles.table_class
    assert styles.class_for("chart") == styles.chart_class
    assert styles.class_for("card") == styles.card_class
    assert styles.class_for(ComponentType.GRID) == styles.card_class
    assert styles.class_for("kpi") is None


@pytest.mark.unit
def test_catalog_is_immutable():
    with pytest.raises(TypeError):
        PRESETS["custom"] = PRESETS["uber"]
    with pytest.raises(Exception):
        PRESETS["uber"].layout.columns = 3
