"""
Chart tabs widget (right side) for Chartboard.

One tab per entry in ``chart_registry.CHARTS``, each hosting a
matplotlib FigureCanvas with a navigation toolbar and export buttons.

Every redraw is a full prepare + render pass.  Resizes are debounced
through a single-shot timer per tab, so a drag that fires many resize
events costs one redraw.  Clicking a bar in the colour bar chart
toggles the shared ``SelectionBridge``; the bar chart and the heatmap
re-prepare from it.
"""

import os
import sys

from PySide6.QtCore import QTimer
from PySide6.QtWidgets import (
    QFileDialog, QHBoxLayout, QLabel, QMessageBox, QPushButton,
    QTabWidget, QVBoxLayout, QWidget,
)

import matplotlib
matplotlib.use('QtAgg')
from matplotlib.backends.backend_qtagg import (
    FigureCanvasQTAgg as FigureCanvas,
    NavigationToolbar2QT as NavigationToolbar,
)
from matplotlib.figure import Figure

from .chart_registry import CHARTS, ChartDefinition
from .constants import DARK_COLORS, RESIZE_DEBOUNCE_MS
from .export import copy_to_clipboard, export_png, render_chart_figure
from .interaction import HandlerBinding
from .pipeline import records_from_rows
from .selection import SelectionBridge
from .theme import apply_dark_plot_style


class _ChartTab(QWidget):
    """Single chart tab with figure canvas, toolbar, and export buttons."""

    def __init__(self, chart: ChartDefinition, parent=None):
        super().__init__(parent)
        self._chart = chart
        self._records = None
        self._options = {}
        self._error = None
        self._on_select = None
        self._binding = HandlerBinding()

        self._resize_timer = QTimer(self)
        self._resize_timer.setSingleShot(True)
        self._resize_timer.setInterval(RESIZE_DEBOUNCE_MS)
        self._resize_timer.timeout.connect(self.redraw)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.setSpacing(4)

        # ── Toolbar row ──────────────────────────────────────────────
        toolbar_row = QHBoxLayout()
        toolbar_row.setSpacing(4)

        self._fig = Figure(figsize=chart.figsize)
        self._fig.set_facecolor(DARK_COLORS['bg_alt'])
        self._canvas = FigureCanvas(self._fig)
        self._toolbar = NavigationToolbar(self._canvas, self)

        toolbar_row.addWidget(self._toolbar)
        toolbar_row.addStretch()

        self._btn_copy = QPushButton("Copy to Clipboard")
        self._btn_copy.setFixedHeight(28)
        self._btn_copy.setStyleSheet("font-size: 11px; padding: 2px 8px;")
        self._btn_copy.clicked.connect(lambda *_: self._on_copy())
        toolbar_row.addWidget(self._btn_copy)

        self._btn_export = QPushButton("Export PNG...")
        self._btn_export.setFixedHeight(28)
        self._btn_export.setStyleSheet("font-size: 11px; padding: 2px 8px;")
        self._btn_export.clicked.connect(lambda *_: self._on_export())
        toolbar_row.addWidget(self._btn_export)

        layout.addLayout(toolbar_row)

        # ── Error banner ─────────────────────────────────────────────
        self._lbl_error = QLabel()
        self._lbl_error.setObjectName("chartError")
        self._lbl_error.setWordWrap(True)
        self._lbl_error.setVisible(False)
        layout.addWidget(self._lbl_error)

        # ── Canvas ───────────────────────────────────────────────────
        layout.addWidget(self._canvas, 1)

        self._draw_message("Load data to display this chart")

    @property
    def chart(self) -> ChartDefinition:
        return self._chart

    @property
    def fig(self) -> Figure:
        return self._fig

    @property
    def canvas(self) -> FigureCanvas:
        return self._canvas

    @property
    def records(self):
        return self._records

    @property
    def options(self) -> dict:
        return dict(self._options)

    def set_select_handler(self, on_select) -> None:
        self._on_select = on_select

    def set_records(self, records, options: dict) -> None:
        self._records = records
        self._options = dict(options)
        self._error = None
        self._lbl_error.setVisible(False)
        self.redraw()

    def update_options(self, **changes) -> None:
        self._options.update(changes)
        if self._records is not None:
            self.redraw()

    def show_error(self, message: str) -> None:
        """Replace the chart with a visible error message."""
        self._records = None
        self._error = message
        self._lbl_error.setText(message)
        self._lbl_error.setVisible(True)
        self._draw_message(f"Could not load data:\n{message}", error=True)

    def clear(self) -> None:
        self._records = None
        self._error = None
        self._lbl_error.setVisible(False)
        self._draw_message("Load data to display this chart")

    def redraw(self) -> None:
        """Prepare and render the chart from the current records."""
        if self._records is None:
            return
        kwargs = {}
        if self._on_select is not None:
            kwargs['on_select'] = self._on_select
        try:
            data = self._chart.prepare(self._records, self._options)
            handlers = self._chart.render(
                self._fig, data, for_export=False, **kwargs
            )
        except Exception as exc:
            print(f"[Chartboard] {self._chart.key} render failed: {exc}",
                  file=sys.stderr)
            self._binding.release()
            self._draw_message(f"Render failed:\n{exc}", error=True)
            return
        self._binding.rebind(self._canvas, handlers)
        self._canvas.draw_idle()

    def _draw_message(self, text: str, error: bool = False) -> None:
        self._binding.release()
        self._fig.clf()
        ax = self._fig.add_subplot(111)
        ax.text(
            0.5, 0.5, text, transform=ax.transAxes, ha='center', va='center',
            fontsize=9, wrap=True,
            color=DARK_COLORS['red'] if error else DARK_COLORS['fg_dim'],
        )
        ax.axis('off')
        self._canvas.draw_idle()

    def resizeEvent(self, event):
        super().resizeEvent(event)
        # Restarting the timer collapses a burst into one redraw
        self._resize_timer.start()

    def _on_copy(self):
        if copy_to_clipboard(self._fig):
            self.window().statusBar().showMessage(
                "Chart copied to clipboard", 3000
            )
        else:
            QMessageBox.warning(self, "Copy Failed",
                                "Could not copy chart to clipboard.")

    def _on_export(self):
        path, _ = QFileDialog.getSaveFileName(
            self, "Export Chart as PNG",
            f"{self._chart.key}.png", "PNG Files (*.png);;All Files (*)",
        )
        if not path:
            return
        if not path.lower().endswith('.png'):
            path += '.png'
        try:
            export_png(self._fig, path)
            self.window().statusBar().showMessage(
                f"Exported to {os.path.basename(path)}", 3000
            )
        except (OSError, ValueError) as exc:
            QMessageBox.critical(
                self, "Export Error", f"Failed to export: {exc}"
            )


class ChartTabsWidget(QTabWidget):
    """Tabbed container for every registered chart."""

    def __init__(self, bridge: SelectionBridge, parent=None):
        super().__init__(parent)
        self._bridge = bridge
        self._config = {}
        self._tabs = {}

        apply_dark_plot_style()

        for chart in CHARTS:
            tab = _ChartTab(chart)
            if chart.selection_role == 'producer':
                tab.set_select_handler(self._select_later)
            self._tabs[chart.key] = tab
            self.addTab(tab, chart.tab_label)

        self._unsubscribe = bridge.subscribe(self._on_selection_changed)

    @property
    def tabs(self) -> dict:
        return dict(self._tabs)

    def set_data(self, rows_by_dataset: dict, errors: dict, config: dict) -> None:
        """Rebuild every chart from freshly loaded rows.

        Parameters
        ----------
        rows_by_dataset : dict
            ``{dataset: [row dict, ...]}`` from the load worker.
        errors : dict
            ``{dataset: message}`` for sources that failed to load.
        config : dict
            From ``ConfigPanel.get_config()``.
        """
        self._config = dict(config)
        # New data invalidates the old selection
        self._bridge.clear()
        apply_dark_plot_style()

        for tab in self._tabs.values():
            dataset = tab.chart.spec.dataset
            if dataset in errors:
                tab.show_error(errors[dataset])
            elif dataset in rows_by_dataset:
                records = records_from_rows(
                    rows_by_dataset[dataset], tab.chart.spec,
                )
                tab.set_records(records, self._options())
            else:
                tab.clear()

    def update_config(self, config: dict) -> None:
        self._config = dict(config)
        for tab in self._tabs.values():
            tab.update_options(stream_window=config.get('stream_window'))

    def current_figure(self):
        tab = self.currentWidget()
        return tab.fig if isinstance(tab, _ChartTab) else None

    def has_data(self) -> bool:
        return any(tab.records is not None for tab in self._tabs.values())

    def get_all_figures(self) -> dict:
        """Off-screen export figures for every chart that has data.

        Returns dict of ``{chart_key: Figure}``.
        """
        figures = {}
        for key, tab in self._tabs.items():
            if tab.records is not None:
                figures[key] = render_chart_figure(
                    tab.chart, tab.records, tab.options,
                )
        return figures

    def release(self) -> None:
        self._unsubscribe()

    def _options(self) -> dict:
        return {
            'selected': self._bridge.value,
            'stream_window': self._config.get('stream_window'),
        }

    def _select_later(self, category: str) -> None:
        # The bar chart is redrawn by the toggle, so it must not run
        # inside that chart's own pick callback.
        QTimer.singleShot(0, lambda: self._bridge.toggle(category))

    def _on_selection_changed(self, value) -> None:
        for tab in self._tabs.values():
            if tab.chart.selection_role in ('producer', 'consumer'):
                tab.update_options(selected=value)
