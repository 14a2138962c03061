import pytest

from choropleth import (
    annotateCountyLayer,
    annotateTractLayer,
    buildCountyPopup,
    buildLegendEntries,
    buildTractPopup,
    formatIncomeLabel,
    formatPovertyLabel,
    povertyColor,
)
from config import getConfig

CONFIG = getConfig()


def color(pct):
    return povertyColor(pct, CONFIG.POVERTY_THRESHOLDS, CONFIG.MISSING_DATA_COLOR)


@pytest.mark.parametrize("pct, expected", [
    (0, "#2ca25f"),
    (9.99, "#2ca25f"),
    (10, "#99d8c9"),
    (19.9, "#99d8c9"),
    (20, "#ffffb2"),
    (30, "#fecc5c"),
    (39.9, "#fecc5c"),
    (40, "#de2d26"),
    (85, "#de2d26"),
    ("12.5", "#99d8c9"),
])
def test_poverty_bands(pct, expected):
    assert color(pct) == expected


@pytest.mark.parametrize("pct", [None, "", "N/A", float("nan"), float("inf"), True])
def test_missing_poverty_is_grey(pct):
    assert color(pct) == "#cccccc"


def test_custom_threshold_table():
    table = ((5, "low"), (50, "high"))
    assert povertyColor(3, table, "none") == "low"
    assert povertyColor(7, table, "none") == "high"
    assert povertyColor(99, table, "none") == "high"


def test_legend_entries():
    entries = buildLegendEntries(CONFIG.POVERTY_THRESHOLDS, CONFIG.MISSING_DATA_COLOR)
    assert entries == [
        ("< 10%", "#2ca25f"),
        ("10-20%", "#99d8c9"),
        ("20-30%", "#ffffb2"),
        ("30-40%", "#fecc5c"),
        ("40%+", "#de2d26"),
        ("No data", "#cccccc"),
    ]


def test_labels():
    assert formatPovertyLabel(12.345) == "12.3%"
    assert formatPovertyLabel(None) == "N/A"
    assert formatIncomeLabel(45000) == "$45,000"
    assert formatIncomeLabel("52000.5") == "$52,000.5"
    assert formatIncomeLabel("abc") == "N/A"


def test_popups():
    assert buildCountyPopup({"NAME": "Elkhart"}) == "<strong>Elkhart County</strong>"
    assert buildCountyPopup({}) == "<strong>County County</strong>"

    popup = buildTractPopup({"NAMELSAD": "Census Tract 5", "PovertyPct": 8, "MedianIncomeNum": 61000})
    assert popup == "<b>Census Tract 5</b><br>Poverty: 8.0%<br>Median Income: $61,000"
    assert buildTractPopup(None).startswith("<b>Tract</b>")


def test_annotate_layers():
    counties = {"type": "FeatureCollection", "features": [
        {"type": "Feature", "properties": {"NAME": "Marshall"}, "geometry": None},
    ]}
    tracts = {"type": "FeatureCollection", "features": [
        {"type": "Feature", "properties": {"NAME": "1", "PovertyPct": 25}, "geometry": None},
        {"type": "Feature", "properties": None, "geometry": None},
    ]}

    county_layer = annotateCountyLayer(counties)
    props = county_layer["features"][0]["properties"]
    assert props["_style"] == {"weight": 3, "color": "blue", "fillOpacity": 0.15}
    assert props["_popup"] == "<strong>Marshall County</strong>"

    tract_layer = annotateTractLayer(tracts, CONFIG.POVERTY_THRESHOLDS, CONFIG.MISSING_DATA_COLOR)
    first, second = (f["properties"] for f in tract_layer["features"])
    assert first["_style"]["fillColor"] == "#ffffb2"
    assert first["_style"]["weight"] == 1
    assert second["_style"]["fillColor"] == "#cccccc"
    assert "_style" not in tracts["features"][0]["properties"]
