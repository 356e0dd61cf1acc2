"""
Settings for the Water Quality Data Visualizer.

Plain module-level constants, in the same spirit as a small Django
settings file. A few of them can be overridden through environment
variables so the desktop app can be tweaked without editing code.
"""
import os

# Logging level for the whole app (DEBUG shows a line per parse).
LOG_LEVEL = os.getenv("WQ_LOG_LEVEL", "INFO")

# How many numeric columns get a card in the stats panel.
SUMMARY_COLUMN_LIMIT = int(os.getenv("WQ_SUMMARY_COLUMN_LIMIT", "3"))

# How many numeric columns the "Overview" quick view plots together.
OVERVIEW_COLUMN_LIMIT = int(os.getenv("WQ_OVERVIEW_COLUMN_LIMIT", "3"))

# Chart types offered in the drop-down, in display order.
CHART_TYPES = ["scatter", "line", "bar", "box"]
DEFAULT_CHART_TYPE = os.getenv("WQ_DEFAULT_CHART_TYPE", "scatter")

# How long status messages stay visible (milliseconds).
ERROR_MESSAGE_MS = 5000
SUCCESS_MESSAGE_MS = 3000

# Chart colours – one accent blue plus a palette for multi-line charts.
PRIMARY_COLOR = "#0066cc"
EDGE_COLOR = "#0052a3"
FILL_COLOR = (0.0, 0.4, 0.8, 0.2)
PLOT_BACKGROUND = (0.94, 0.94, 0.94, 0.5)
LINE_PALETTE = ["#0066cc", "#ff7700", "#00aa00", "#cc0000", "#9900cc"]

# Window colours (slate background, teal accents).
WINDOW_BACKGROUND = "#020617"
ACCENT_COLOR = "#0891b2"
TITLE_COLOR = "#0f766e"
ERROR_TEXT_COLOR = "#fecaca"
SUCCESS_TEXT_COLOR = "#bbf7d0"

WINDOW_TITLE = "Water Quality Data Visualizer"
