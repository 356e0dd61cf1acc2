"""
Tests for the matplotlib chart helpers.

Charts are drawn on a bare Figure, so no display is needed.
"""
import pytest
from matplotlib.figure import Figure

from water_quality.charts import (
    QUICK_VIEWS,
    draw_chart,
    draw_overview,
    draw_quick_view,
    find_column,
    plottable_pairs,
)
from water_quality.csv_parser import parse
from water_quality.statistics import filter_by_range


@pytest.fixture
def ax():
    return Figure().add_subplot(111)


def quick_view(key):
    return next(view for view in QUICK_VIEWS if view.key == key)


class TestFindColumn:
    """Header lookup by keyword."""

    def test_case_insensitive(self):
        assert find_column(["Site", "PH Level"], ("ph",)) == "PH Level"

    def test_first_match_wins(self):
        assert find_column(["Water Temp", "Air Temperature"], ("temp", "temperature")) == "Water Temp"

    def test_no_match(self):
        assert find_column(["Site"], ("turb",)) is None


class TestPlottablePairs:
    """Pairs with text on the Y side are dropped."""

    def test_numeric_x(self):
        assert plottable_pairs([1.0, 2.0, 3.0], [4.0, "x", 6.0]) == ([1.0, 3.0], [4.0, 6.0])

    def test_text_x_becomes_labels(self):
        assert plottable_pairs(["a", 2.0], [1.0, 2.0]) == (["a", "2.0"], [1.0, 2.0])


class TestDrawChart:
    """Main chart drawing."""

    def test_scatter_title_and_points(self, ax, sample_table):
        title = draw_chart(ax, sample_table, "Temperature (C)", "pH", "scatter")
        assert title == "pH vs Temperature (C)"
        assert ax.get_title() == title
        assert len(ax.collections[0].get_offsets()) == 3

    def test_line_chart(self, ax, sample_table):
        draw_chart(ax, sample_table, "Temperature (C)", "pH", "line")
        assert len(ax.lines) == 1
        assert list(ax.lines[0].get_ydata()) == [7.2, 7.4, 6.9]

    def test_bar_chart_with_text_x(self, ax, sample_table):
        draw_chart(ax, sample_table, "Site", "Temperature (C)", "bar")
        assert len(ax.patches) == 4

    def test_box_plot(self, ax, sample_table):
        draw_chart(ax, sample_table, "Site", "pH", "box")
        assert [label.get_text() for label in ax.get_xticklabels()] == ["pH"]

    def test_unknown_type_falls_back_to_scatter(self, ax, sample_table):
        draw_chart(ax, sample_table, "Temperature (C)", "pH", "pie")
        assert len(ax.collections) == 1

    def test_filtered_rows(self, ax, sample_table):
        rows = filter_by_range(sample_table, "pH", 7.0, 8.0)
        draw_chart(ax, sample_table, "Temperature (C)", "pH", "line", rows=rows)
        assert list(ax.lines[0].get_ydata()) == [7.2, 7.4]


class TestQuickViews:
    """Overview and histogram shortcuts."""

    def test_overview_plots_first_three_numeric_columns(self, ax, sample_table):
        assert draw_overview(ax, sample_table) is True
        assert ax.get_title() == "Water Quality Overview"
        assert len(ax.lines) == 3

    def test_overview_needs_two_numeric_columns(self, ax):
        assert draw_overview(ax, parse("name,v\na,1")) is False

    @pytest.mark.parametrize(
        "key, title",
        [
            ("ph", "pH Distribution"),
            ("temperature", "Temperature Distribution"),
            ("dissolvedOxygen", "Dissolved Oxygen Distribution"),
            ("turbidity", "Turbidity Distribution"),
        ],
    )
    def test_histograms(self, ax, sample_table, key, title):
        assert draw_quick_view(ax, sample_table, quick_view(key)) is True
        assert ax.get_title() == title
        assert ax.get_ylabel() == "Frequency"

    def test_missing_column(self, ax):
        assert draw_quick_view(ax, parse("Site,Flow\na,1"), quick_view("turbidity")) is False
