"""
Matplotlib chart helpers.

Every function draws onto an `Axes` it is given, so the same code feeds the
Qt canvas in the desktop app and a bare `Figure` in the tests. Values come
straight from the parsed table: text cells on the Y side are skipped, and
the X side is treated as categories as soon as one cell is not a number.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from matplotlib.axes import Axes

from . import settings
from .csv_parser import Cell, Table, is_numeric


@dataclass(frozen=True)
class QuickView:
    """A histogram shortcut for a well-known water quality parameter."""

    key: str
    label: str
    keywords: Tuple[str, ...]


# Order matters: the first header containing any keyword wins.
QUICK_VIEWS = [
    QuickView("ph", "pH", ("ph",)),
    QuickView("temperature", "Temperature", ("temp", "temperature")),
    QuickView("dissolvedOxygen", "Dissolved Oxygen", ("oxygen", "do")),
    QuickView("turbidity", "Turbidity", ("turbidity", "turb")),
]


def find_column(headers: Sequence[str], keywords: Sequence[str]) -> Optional[str]:
    """First header that contains one of `keywords` (case-insensitive)."""
    for header in headers:
        lowered = header.lower()
        if any(keyword in lowered for keyword in keywords):
            return header
    return None


def _style(ax: Axes, title: str, x_label: str, y_label: str) -> None:
    ax.set_title(title)
    ax.set_xlabel(x_label)
    ax.set_ylabel(y_label)
    ax.set_facecolor(settings.PLOT_BACKGROUND)


def plottable_pairs(x_data: Sequence[Cell], y_data: Sequence[Cell]) -> Tuple[list, List[float]]:
    """
    Keep the (x, y) pairs where y is a number.

    Matplotlib cannot mix numbers and strings on one axis, so x falls back
    to string labels when any remaining x cell is text.
    """
    pairs = [(x, y) for x, y in zip(x_data, y_data) if is_numeric(y)]
    xs = [x for x, _ in pairs]
    ys = [y for _, y in pairs]
    if not all(is_numeric(x) for x in xs):
        xs = [str(x) for x in xs]
    return xs, ys


def scatter_plot(ax: Axes, x_data, y_data, x_label: str, y_label: str, title: str) -> None:
    xs, ys = plottable_pairs(x_data, y_data)
    ax.scatter(
        xs,
        ys,
        s=64,
        color=settings.PRIMARY_COLOR,
        alpha=0.7,
        edgecolors=settings.EDGE_COLOR,
        linewidths=1,
        label="Data Points",
    )
    _style(ax, title, x_label, y_label)


def line_chart(ax: Axes, x_data, y_data, x_label: str, y_label: str, title: str) -> None:
    xs, ys = plottable_pairs(x_data, y_data)
    ax.plot(
        xs,
        ys,
        color=settings.PRIMARY_COLOR,
        linewidth=2,
        marker="o",
        markersize=6,
        markerfacecolor=settings.EDGE_COLOR,
        label="Values",
    )
    # Filled down to zero, like an area chart. Category axes are left unfilled.
    if all(is_numeric(x) for x in xs):
        ax.fill_between(xs, ys, 0, color=settings.FILL_COLOR)
    _style(ax, title, x_label, y_label)


def bar_chart(ax: Axes, x_data, y_data, x_label: str, y_label: str, title: str) -> None:
    xs, ys = plottable_pairs(x_data, y_data)
    ax.bar(xs, ys, color=settings.PRIMARY_COLOR, edgecolor=settings.EDGE_COLOR, linewidth=1, label="Values")
    _style(ax, title, x_label, y_label)


def box_plot(ax: Axes, datasets: Sequence[Sequence[Cell]], names: Sequence[str], y_label: str, title: str) -> None:
    cleaned = [[value for value in values if is_numeric(value)] for values in datasets]
    ax.boxplot(
        cleaned,
        patch_artist=True,
        boxprops={"facecolor": settings.FILL_COLOR, "edgecolor": settings.PRIMARY_COLOR},
    )
    ax.set_xticks(range(1, len(names) + 1))
    ax.set_xticklabels(list(names))
    _style(ax, title, "", y_label)


def multi_line_chart(
    ax: Axes, x_data, datasets: Dict[str, Sequence[Cell]], x_label: str, y_label: str, title: str
) -> None:
    palette = settings.LINE_PALETTE
    for index, (label, values) in enumerate(datasets.items()):
        xs, ys = plottable_pairs(x_data, values)
        ax.plot(xs, ys, color=palette[index % len(palette)], linewidth=2, marker="o", markersize=5, label=label)
    ax.legend()
    _style(ax, title, x_label, y_label)


def histogram(ax: Axes, data: Sequence[Cell], label: str, title: str) -> None:
    values = [value for value in data if is_numeric(value)]
    ax.hist(values, color=settings.PRIMARY_COLOR, label=label)
    _style(ax, title, label, "Frequency")


CHART_FUNCTIONS = {
    "scatter": scatter_plot,
    "line": line_chart,
    "bar": bar_chart,
}


def draw_chart(ax: Axes, table: Table, x_axis: str, y_axis: str, chart_type: str, rows=None) -> str:
    """
    Draw the main chart for the selected axes and return its title.

    `rows` lets the caller pass a filtered subset of the table; box plots
    only look at the Y column. Unknown chart types fall back to scatter.
    """
    source = table.rows if rows is None else rows
    x_data = [row.get(x_axis) for row in source]
    y_data = [row.get(y_axis) for row in source]
    title = f"{y_axis} vs {x_axis}"

    ax.clear()
    if chart_type == "box":
        box_plot(ax, [y_data], [y_axis], y_axis, title)
    else:
        draw = CHART_FUNCTIONS.get(chart_type, scatter_plot)
        draw(ax, x_data, y_data, x_axis, y_axis, title)
    return title


def draw_overview(ax: Axes, table: Table, limit: int = settings.OVERVIEW_COLUMN_LIMIT) -> bool:
    """
    Plot the first few numeric columns against the row index.

    Returns False (and draws nothing) when there are fewer than two numeric
    columns.
    """
    numeric_columns = table.numeric_column_names()
    if len(numeric_columns) < 2:
        return False

    x_data = list(range(len(table.rows)))
    datasets = {column: table.column_values(column) for column in numeric_columns[:limit]}
    ax.clear()
    multi_line_chart(ax, x_data, datasets, "Index", "Value", "Water Quality Overview")
    return True


def draw_quick_view(ax: Axes, table: Table, view: QuickView) -> bool:
    """Histogram for `view`; False when no matching column exists."""
    column = find_column(table.headers, view.keywords)
    if column is None:
        return False

    ax.clear()
    histogram(ax, table.column_values(column), view.label, f"{view.label} Distribution")
    return True
