from chart_data import buildPieSlices, formatCategoryLabel, formatSliceTooltip


def test_category_labels():
    assert formatCategoryLabel("baked_goods") == "BAKED GOODS"
    assert formatCategoryLabel("individual_meal_lbs") == "INDIVIDUAL MEAL LBS"


def test_zero_categories_are_dropped():
    slices = buildPieSlices({"proteins": 10, "starch": 0, "veg": 5.0})
    assert [s["key"] for s in slices] == ["proteins", "veg"]
    assert [s["label"] for s in slices] == ["PROTEINS", "VEG"]


def test_percentages_and_tooltips():
    slices = buildPieSlices({"proteins": 10, "veg": 5})
    assert slices[0]["tooltip"] == "PROTEINS: 10.00 lbs (66.7%)"
    assert set(slices[0]) == {"key", "label", "value", "tooltip"}
    assert slices[1]["tooltip"] == "VEG: 5.00 lbs (33.3%)"


def test_no_positive_totals_gives_no_slices():
    assert buildPieSlices({"proteins": 0, "dairy": -3}) == []


def test_tooltip_with_zero_total():
    assert formatSliceTooltip("VEG", 0, 0) == "VEG: 0.00 lbs (0.0%)"
