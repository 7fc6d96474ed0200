"""Path resolver tests."""

import pytest
from jmespath.exceptions import JMESPathError

from show_shaper.engine import ShorthandPath, parse_shorthand, query_first, resolve_component_id
from show_shaper.engine.paths import to_jmespath


@pytest.mark.unit
@pytest.mark.parametrize(
    "path,expected",
    [
        ("/components[id=table1]", ShorthandPath("table1", False)),
        ("/components[id=table1]/props", ShorthandPath("table1", True)),
        ('/components[id="chart1"]', ShorthandPath("chart1", False)),
        ("/components[id='chart1']/props", ShorthandPath("chart1", True)),
        ("  /components[id=kpi1]  ", ShorthandPath("kpi1", False)),
    ],
)
def test_parse_shorthand(path, expected):
    assert parse_shorthand(path) == expected


@pytest.mark.unit
@pytest.mark.parametrize(
    "path",
    ["styles", "$.styles", "/components[id=]", "/components[id=a]/other", "components[?id=='a']"],
)
def test_parse_shorthand_rejects_other_dialects(path):
    assert parse_shorthand(path) is None


@pytest.mark.unit
@pytest.mark.parametrize(
    "path,expected",
    [
        ("styles", "styles"),
        ("$.styles", "styles"),
        ("$", "@"),
        ('$.components[?(@.id=="chart1")]', "components[?id=='chart1']"),
        ("$.components[?(@.id=='chart1')].props", "components[?id=='chart1'].props"),
    ],
)
def test_to_jmespath(path, expected):
    assert to_jmespath(path) == expected


@pytest.mark.unit
def test_query_first_returns_reference(starter):
    """Results point into the searched tree."""
    assert query_first("styles", starter) is starter["styles"]
    assert query_first("components[?id=='chart1']", starter) is starter["components"][1]
    assert query_first("$.layout", starter) is starter["layout"]


@pytest.mark.unit
def test_query_first_no_match(starter):
    assert query_first("components[?id=='ghost']", starter) is None
    assert query_first("nothing", starter) is None


@pytest.mark.unit
def test_query_first_malformed_raises(starter):
    with pytest.raises(JMESPathError):
        query_first("components[?", starter)


@pytest.mark.unit
def test_resolve_shorthand(starter):
    assert resolve_component_id("/components[id=table1]", starter) == "table1"
    assert resolve_component_id("/components[id=table1]/props", starter) == "table1"
    assert resolve_component_id("/components[id=ghost]", starter) is None


@pytest.mark.unit
def test_resolve_query(starter):
    assert resolve_component_id("components[?id=='kpi1']", starter) == "kpi1"
    assert resolve_component_id('$.components[?(@.id=="chart1")]', starter) == "chart1"
    assert resolve_component_id("components[?type=='chart']", starter) == "chart1"


@pytest.mark.unit
@pytest.mark.parametrize("path", ["styles", "layout.order", "components[?", "/styles", ""])
def test_resolve_never_raises(starter, path):
    """Non-component matches and parse errors resolve to None."""
    assert resolve_component_id(path, starter) is None
