"""
PyQt5 desktop window for exploring water quality CSV files.

Same flow as the browser version of the tool:
- pick a CSV with the file dialog or drop it onto the window,
- read and parse it on a worker thread so the window does not freeze,
- fill the axis selectors, the stats panel and draw a first chart.

A failed load never touches the table that is already on screen.
"""
import logging
import math
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from PyQt5.QtCore import QThread, QTimer, pyqtSignal
from PyQt5.QtWidgets import (
    QApplication,
    QComboBox,
    QFileDialog,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from matplotlib.backends.backend_qt5agg import FigureCanvasQTAgg as FigureCanvas
from matplotlib.figure import Figure

from . import settings
from .charts import QUICK_VIEWS, draw_chart, draw_overview, draw_quick_view
from .csv_parser import CSVParseError, CSVReadError, Table, load_file
from .reports import write_summary_pdf
from .statistics import column_stats, filter_by_range

logger = logging.getLogger(__name__)


@dataclass
class LoadResult:
    ok: bool
    error_message: Optional[str]
    table: Optional[Table]
    source_name: str


class LoadWorker(QThread):
    """Background job that reads and parses one CSV file."""

    finished_with_result = pyqtSignal(object)

    def __init__(self, file_path: str):
        super().__init__()
        self.file_path = file_path

    def run(self) -> None:
        source_name = Path(self.file_path).name
        try:
            table = load_file(self.file_path)
            result = LoadResult(ok=True, error_message=None, table=table, source_name=source_name)
        except CSVReadError as exc:
            result = LoadResult(ok=False, error_message=str(exc), table=None, source_name=source_name)
        except CSVParseError as exc:
            result = LoadResult(
                ok=False,
                error_message=f"Error parsing CSV: {exc}",
                table=None,
                source_name=source_name,
            )
        except Exception as exc:  # noqa: BLE001
            # The GUI thread must always get a result back, whatever went wrong.
            logger.exception("Unexpected error while loading %s", self.file_path)
            result = LoadResult(
                ok=False,
                error_message=f"Error loading file: {exc}",
                table=None,
                source_name=source_name,
            )

        # Hand the result back to the GUI thread.
        self.finished_with_result.emit(result)


class ChartCanvas(FigureCanvas):
    """Matplotlib canvas that hosts every chart in the window."""

    def __init__(self, parent: Optional[QWidget] = None):
        self.fig = Figure(figsize=(6, 4), facecolor="white")
        super().__init__(self.fig)
        self.setParent(parent)
        self.ax = self.fig.add_subplot(111)
        self.show_placeholder()

    def show_placeholder(self) -> None:
        self.ax.clear()
        self.ax.text(
            0.5,
            0.5,
            "Load a CSV file to see a chart",
            ha="center",
            va="center",
            fontsize=10,
            transform=self.ax.transAxes,
        )
        self.ax.set_xticks([])
        self.ax.set_yticks([])
        self.draw()

    def refresh(self) -> None:
        self.fig.tight_layout()
        self.draw()


def summary_lines(table: Table) -> List[str]:
    """Text for the stats panel: table size plus mean/range for a few numeric columns."""
    lines = [
        f"Total rows: {len(table.rows)}",
        f"Total columns: {len(table.headers)}",
    ]
    for column in table.numeric_column_names()[: settings.SUMMARY_COLUMN_LIMIT]:
        stats = column_stats(table, column)
        if stats is None:
            continue
        shown = stats.display()
        lines.append(f"{column}: mean {shown['mean']} | range {shown['min']}-{shown['max']}")
    return lines


def parse_range_limits(low_text: str, high_text: str) -> Optional[Tuple[float, float]]:
    """
    (min, max) from the range inputs; None when both are empty.

    An empty side is open-ended. Raises ValueError for text that is not a
    finite number ("nan" and "inf" included).
    """
    low_text = low_text.strip()
    high_text = high_text.strip()
    if not low_text and not high_text:
        return None

    low = float(low_text) if low_text else -math.inf
    high = float(high_text) if high_text else math.inf
    if (low_text and not math.isfinite(low)) or (high_text and not math.isfinite(high)):
        raise ValueError("range limits must be finite")
    return low, high


class MainWindow(QWidget):
    def __init__(self):
        super().__init__()
        self.setWindowTitle(settings.WINDOW_TITLE)
        self.setMinimumSize(1000, 650)
        self.setAcceptDrops(True)

        self.table: Optional[Table] = None
        self.source_name: str = ""
        self.current_worker: Optional[LoadWorker] = None

        self._message_timer = QTimer(self)
        self._message_timer.setSingleShot(True)
        self._message_timer.timeout.connect(lambda: self.info_label.setText(""))

        self._build_ui()
        self._set_controls_enabled(False)

    def _build_ui(self) -> None:
        main_layout = QVBoxLayout()
        main_layout.setContentsMargins(16, 16, 16, 16)
        main_layout.setSpacing(12)

        title = QLabel(settings.WINDOW_TITLE)
        title.setStyleSheet(f"color: {settings.TITLE_COLOR}; font-size: 20px; font-weight: 600;")
        main_layout.addWidget(title)

        subtitle = QLabel("Open or drop a CSV file of measurements, then pick axes and a chart type.")
        subtitle.setStyleSheet("color: #cbd5f5; font-size: 11px;")
        main_layout.addWidget(subtitle)

        button_style = (
            f"background-color: {settings.ACCENT_COLOR}; color: {settings.WINDOW_BACKGROUND}; "
            "padding: 6px 12px; border-radius: 4px;"
        )
        input_style = (
            f"background-color: {settings.WINDOW_BACKGROUND}; color: white; "
            "border: 1px solid #374151; padding: 4px;"
        )

        # File row: browse, file name, clear, export.
        file_row = QHBoxLayout()
        self.browse_button = QPushButton("Browse...")
        self.browse_button.setStyleSheet(button_style)
        self.browse_button.clicked.connect(self.on_select_file)

        self.file_path_label = QLabel("No file selected (you can also drop a .csv here)")
        self.file_path_label.setStyleSheet("color: #9ca3af; font-size: 10px;")

        self.clear_button = QPushButton("Clear")
        self.clear_button.setStyleSheet(button_style)
        self.clear_button.clicked.connect(self.on_clear)

        self.export_button = QPushButton("Export PDF summary")
        self.export_button.setStyleSheet(button_style)
        self.export_button.clicked.connect(self.on_export_pdf)

        file_row.addWidget(self.browse_button)
        file_row.addWidget(self.file_path_label, stretch=1)
        file_row.addWidget(self.export_button)
        file_row.addWidget(self.clear_button)
        main_layout.addLayout(file_row)

        # Status line for errors and success messages.
        self.info_label = QLabel("")
        self.info_label.setStyleSheet(f"color: {settings.ERROR_TEXT_COLOR}; font-size: 11px;")
        main_layout.addWidget(self.info_label)

        # Chart controls.
        controls = QFormLayout()
        self.x_axis_select = QComboBox()
        self.y_axis_select = QComboBox()
        self.chart_type_select = QComboBox()
        self.chart_type_select.addItems(settings.CHART_TYPES)
        if settings.DEFAULT_CHART_TYPE in settings.CHART_TYPES:
            self.chart_type_select.setCurrentText(settings.DEFAULT_CHART_TYPE)
        for combo in (self.x_axis_select, self.y_axis_select, self.chart_type_select):
            combo.setStyleSheet(input_style)

        range_row = QHBoxLayout()
        self.range_min_input = QLineEdit()
        self.range_min_input.setPlaceholderText("Min (optional)")
        self.range_max_input = QLineEdit()
        self.range_max_input.setPlaceholderText("Max (optional)")
        for line_edit in (self.range_min_input, self.range_max_input):
            line_edit.setStyleSheet(input_style)
            range_row.addWidget(line_edit)

        self.update_chart_button = QPushButton("Update Chart")
        self.update_chart_button.setStyleSheet(button_style)
        self.update_chart_button.clicked.connect(self.update_chart)

        controls.addRow(self._form_label("X axis:"), self.x_axis_select)
        controls.addRow(self._form_label("Y axis:"), self.y_axis_select)
        controls.addRow(self._form_label("Chart type:"), self.chart_type_select)
        controls.addRow(self._form_label("Y range:"), range_row)
        controls.addRow(self.update_chart_button)

        # Quick views.
        quick_row = QHBoxLayout()
        self.quick_view_buttons: List[QPushButton] = []
        overview_button = QPushButton("Overview")
        overview_button.clicked.connect(self.on_overview)
        self.quick_view_buttons.append(overview_button)
        for view in QUICK_VIEWS:
            button = QPushButton(view.label)
            button.clicked.connect(lambda _checked=False, v=view: self.on_quick_view(v))
            self.quick_view_buttons.append(button)
        for button in self.quick_view_buttons:
            button.setStyleSheet(button_style)
            quick_row.addWidget(button)
        quick_row.addStretch()

        # Bottom: controls + stats on the left, chart on the right.
        bottom_row = QHBoxLayout()
        left_column = QVBoxLayout()
        left_column.addLayout(controls)

        self.stats_label = QLabel("No statistics yet.\nLoad a CSV to see results.")
        self.stats_label.setWordWrap(True)
        self.stats_label.setStyleSheet("color: #e5e7eb; font-size: 11px;")
        left_column.addWidget(self.stats_label)
        left_column.addStretch()

        self.chart_canvas = ChartCanvas(self)
        bottom_row.addLayout(left_column, stretch=1)
        bottom_row.addWidget(self.chart_canvas, stretch=3)

        main_layout.addLayout(quick_row)
        main_layout.addLayout(bottom_row)

        self.setLayout(main_layout)
        self.setStyleSheet(f"background-color: {settings.WINDOW_BACKGROUND};")

    def _form_label(self, text: str) -> QLabel:
        label = QLabel(text)
        label.setStyleSheet("color: #e5e7eb; font-size: 11px;")
        return label

    def _set_controls_enabled(self, enabled: bool) -> None:
        widgets = [
            self.x_axis_select,
            self.y_axis_select,
            self.chart_type_select,
            self.range_min_input,
            self.range_max_input,
            self.update_chart_button,
            self.export_button,
            self.clear_button,
            *self.quick_view_buttons,
        ]
        for widget in widgets:
            widget.setEnabled(enabled)

    # ---- loading ----

    def on_select_file(self) -> None:
        file_path, _ = QFileDialog.getOpenFileName(
            self, "Select water quality CSV", "", "CSV files (*.csv);;All files (*.*)"
        )
        if file_path:
            self.load(file_path)

    def dragEnterEvent(self, event) -> None:  # noqa: N802 (Qt naming)
        if event.mimeData().hasUrls():
            event.acceptProposedAction()

    def dropEvent(self, event) -> None:  # noqa: N802 (Qt naming)
        urls = event.mimeData().urls()
        file_path = urls[0].toLocalFile() if urls else ""
        if file_path.lower().endswith(".csv"):
            event.acceptProposedAction()
            self.load(file_path)
        else:
            self._show_error("Please drop a CSV file")

    def _is_loading(self) -> bool:
        return self.current_worker is not None and self.current_worker.isRunning()

    def load(self, file_path: str) -> None:
        # One load at a time; the running worker must stay referenced until it finishes.
        if self._is_loading():
            self._show_error("Please wait for the current file to finish loading")
            return

        self.file_path_label.setText(file_path)
        self.browse_button.setEnabled(False)
        self.browse_button.setText("Loading...")
        self.clear_button.setEnabled(False)
        self.setAcceptDrops(False)

        self.current_worker = LoadWorker(file_path)
        self.current_worker.finished_with_result.connect(self.on_load_finished)
        self.current_worker.start()

    def on_load_finished(self, result: LoadResult) -> None:
        self.browse_button.setEnabled(True)
        self.browse_button.setText("Browse...")
        self.clear_button.setEnabled(self.table is not None)
        self.setAcceptDrops(True)

        if not result.ok:
            logger.warning("Could not load %s: %s", result.source_name, result.error_message)
            self._show_error(result.error_message or "Loading failed.")
            return

        try:
            lines = summary_lines(result.table)
        except Exception as exc:  # noqa: BLE001
            logger.exception("Could not summarise %s", result.source_name)
            self._show_error(f"Error computing statistics: {exc}")
            return

        self.table = result.table
        self.source_name = result.source_name
        self._initialize_controls()
        self.stats_label.setText("\n".join(lines))
        self.update_chart()
        self._show_success(f"Loaded {len(self.table.rows)} rows of data")

    def _initialize_controls(self) -> None:
        all_columns = self.table.column_names()
        numeric_columns = self.table.numeric_column_names()

        self.x_axis_select.clear()
        self.x_axis_select.addItems(all_columns)
        self.y_axis_select.clear()
        self.y_axis_select.addItems(numeric_columns)

        if numeric_columns:
            self.y_axis_select.setCurrentText(numeric_columns[0])
        if len(numeric_columns) > 1:
            self.x_axis_select.setCurrentText(numeric_columns[1])

        self.range_min_input.clear()
        self.range_max_input.clear()
        self._set_controls_enabled(True)

    # ---- charts ----

    def _draw(self, draw, *args, **kwargs):
        """Run one chart helper; drawing errors end up in the status line."""
        try:
            drawn = draw(self.chart_canvas.ax, *args, **kwargs)
        except Exception as exc:  # noqa: BLE001
            logger.exception("Chart drawing failed")
            self.chart_canvas.ax.clear()
            self.chart_canvas.draw()
            self._show_error(f"Error creating chart: {exc}")
            return None
        self.chart_canvas.refresh()
        return drawn

    def update_chart(self) -> None:
        if self.table is None:
            return

        x_axis = self.x_axis_select.currentText()
        y_axis = self.y_axis_select.currentText()
        if not x_axis or not y_axis:
            self._show_error("Please select both axes")
            return

        try:
            limits = parse_range_limits(self.range_min_input.text(), self.range_max_input.text())
        except ValueError:
            self._show_error("Range limits must be numbers")
            return

        rows = None
        if limits is not None:
            rows = filter_by_range(self.table, y_axis, *limits)

        self._draw(
            draw_chart,
            self.table,
            x_axis,
            y_axis,
            self.chart_type_select.currentText(),
            rows=rows,
        )

    def on_overview(self) -> None:
        if not self._has_numeric_data():
            return
        self._draw(draw_overview, self.table)

    def on_quick_view(self, view) -> None:
        if not self._has_numeric_data():
            return
        if self._draw(draw_quick_view, self.table, view) is False:
            self._show_error(f"{view.label} column not found")

    def _has_numeric_data(self) -> bool:
        if self.table is None or not self.table.numeric_column_names():
            self._show_error("No numeric data available")
            return False
        return True

    # ---- clear / export ----

    def on_clear(self) -> None:
        self.table = None
        self.source_name = ""
        self.x_axis_select.clear()
        self.y_axis_select.clear()
        self.range_min_input.clear()
        self.range_max_input.clear()
        self.file_path_label.setText("No file selected (you can also drop a .csv here)")
        self.stats_label.setText("No statistics yet.\nLoad a CSV to see results.")
        self.chart_canvas.show_placeholder()
        self._set_controls_enabled(False)
        self._show_success("All data cleared")

    def on_export_pdf(self) -> None:
        if self.table is None:
            return
        default_name = f"{Path(self.source_name).stem or 'water_quality'}_summary.pdf"
        file_path, _ = QFileDialog.getSaveFileName(self, "Save PDF summary", default_name, "PDF files (*.pdf)")
        if not file_path:
            return
        try:
            write_summary_pdf(self.table, file_path, self.source_name)
        except OSError as exc:
            self._show_error(f"Could not write PDF: {exc}")
            return
        self._show_success(f"Summary saved to {file_path}")

    # ---- messages ----

    def _show_error(self, message: str) -> None:
        self._show_message(message, settings.ERROR_TEXT_COLOR, settings.ERROR_MESSAGE_MS)

    def _show_success(self, message: str) -> None:
        self._show_message(message, settings.SUCCESS_TEXT_COLOR, settings.SUCCESS_MESSAGE_MS)

    def _show_message(self, message: str, color: str, timeout_ms: int) -> None:
        self.info_label.setStyleSheet(f"color: {color}; font-size: 11px;")
        self.info_label.setText(message)
        self._message_timer.start(timeout_ms)


def main() -> None:
    logging.basicConfig(level=settings.LOG_LEVEL)
    app = QApplication(sys.argv)
    window = MainWindow()
    window.show()
    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
