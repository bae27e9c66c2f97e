"""
Main window for Chartboard.

Hosts the ConfigPanel (left) and ChartTabsWidget (right) in a
horizontal splitter, with a menu bar and status bar.

CSV sources are fetched on a ``QThread`` per load request.  Each worker
carries a ``CancelToken``; starting a newer load or closing the window
cancels it, and results from a cancelled worker are discarded.
"""

import os
import sys

from PySide6.QtCore import QThread, Qt, Signal, Slot
from PySide6.QtGui import QAction
from PySide6.QtWidgets import (
    QFileDialog, QMainWindow, QMessageBox, QScrollArea, QSplitter,
    QVBoxLayout, QWidget,
)

from . import APP_NAME, APP_VERSION
from .constants import DATASET_LABELS
from .csv_loader import CancelToken, DataLoadError, LoadCancelled, read_rows
from .export import export_all_charts, export_png
from .gui_chart_tabs import ChartTabsWidget
from .gui_config_panel import ConfigPanel
from .selection import SelectionBridge


class LoadWorker(QThread):
    """Reads every requested source off the GUI thread."""

    # rows_by_dataset, errors_by_dataset
    loaded = Signal(object, object)

    def __init__(self, sources: dict, parent=None):
        super().__init__(parent)
        self._sources = dict(sources)
        self.token = CancelToken()

    def run(self):
        rows, errors = {}, {}
        for dataset, source in self._sources.items():
            try:
                rows[dataset] = read_rows(source, cancel=self.token)
            except LoadCancelled:
                return
            except DataLoadError as exc:
                print(f"[Chartboard] {dataset}: {exc}", file=sys.stderr)
                errors[dataset] = str(exc)
        if not self.token.cancelled:
            self.loaded.emit(rows, errors)


class ChartboardWindow(QMainWindow):
    """Main window for Chartboard."""

    def __init__(self):
        super().__init__()
        self._bridge = SelectionBridge()
        self._workers = []

        self.setWindowTitle(f"{APP_NAME} v{APP_VERSION}")
        self.setMinimumSize(1200, 800)

        self._setup_ui()
        self._setup_menu()
        self._connect_signals()

        self.statusBar().showMessage("Ready. Load CSV files to begin")

    # ── UI setup ─────────────────────────────────────────────────────

    def _setup_ui(self):
        central = QWidget()
        self.setCentralWidget(central)
        main_layout = QVBoxLayout(central)
        main_layout.setContentsMargins(4, 4, 4, 4)
        main_layout.setSpacing(4)

        splitter = QSplitter(Qt.Orientation.Horizontal)

        self._config_panel = ConfigPanel()
        scroll = QScrollArea()
        scroll.setWidget(self._config_panel)
        scroll.setWidgetResizable(True)
        scroll.setMinimumWidth(300)
        scroll.setMaximumWidth(460)

        self._chart_tabs = ChartTabsWidget(self._bridge)

        splitter.addWidget(scroll)
        splitter.addWidget(self._chart_tabs)
        splitter.setStretchFactor(0, 0)
        splitter.setStretchFactor(1, 1)
        splitter.setSizes([340, 860])

        main_layout.addWidget(splitter)

    def _setup_menu(self):
        menubar = self.menuBar()

        # ── File menu ────────────────────────────────────────────────
        file_menu = menubar.addMenu("File")

        act_load_folder = QAction("Load Folder...", self)
        act_load_folder.triggered.connect(
            lambda *_: self._config_panel.load_from_folder()
        )
        file_menu.addAction(act_load_folder)

        file_menu.addSeparator()

        act_export_current = QAction("Export Current Chart...", self)
        act_export_current.triggered.connect(
            lambda *_: self._export_current()
        )
        file_menu.addAction(act_export_current)

        act_export_all = QAction("Export All Charts...", self)
        act_export_all.triggered.connect(lambda *_: self._export_all())
        file_menu.addAction(act_export_all)

        file_menu.addSeparator()

        act_exit = QAction("Exit", self)
        act_exit.triggered.connect(self.close)
        file_menu.addAction(act_exit)

        # ── Examples menu ────────────────────────────────────────────
        examples_menu = menubar.addMenu("Examples")

        act_load_example = QAction("Load Example Datasets", self)
        act_load_example.triggered.connect(
            lambda *_: self._config_panel.load_example()
        )
        examples_menu.addAction(act_load_example)

        # ── Help menu ────────────────────────────────────────────────
        help_menu = menubar.addMenu("Help")

        act_about = QAction("About", self)
        act_about.triggered.connect(lambda *_: self._show_about())
        help_menu.addAction(act_about)

    def _connect_signals(self):
        self._config_panel.load_requested.connect(self._start_load)
        self._config_panel.config_changed.connect(
            lambda *_: self._chart_tabs.update_config(
                self._config_panel.get_config()
            )
        )
        self._config_panel.export_all_button.clicked.connect(
            lambda *_: self._export_all()
        )
        self._config_panel.clear_selection_button.clicked.connect(
            lambda *_: self._bridge.clear()
        )
        self._bridge.subscribe(self._on_selection_changed)

    # ── Loading ──────────────────────────────────────────────────────

    def _start_load(self, sources: dict):
        """Slot: start a background load, cancelling any in flight."""
        self._cancel_workers()

        worker = LoadWorker(sources, self)
        # Both signals arrive queued on the GUI thread
        worker.loaded.connect(self._on_loaded)
        worker.finished.connect(self._on_worker_finished)
        self._workers.append(worker)

        names = ", ".join(DATASET_LABELS.get(k, k) for k in sources)
        self.statusBar().showMessage(f"Loading {names}...")
        worker.start()

    @Slot(object, object)
    def _on_loaded(self, rows: dict, errors: dict):
        worker = self.sender()
        if worker is None or worker.token.cancelled:
            return

        config = self._config_panel.get_config()
        try:
            self._chart_tabs.set_data(rows, errors, config)
        except Exception as exc:
            QMessageBox.critical(
                self, "Chart Generation Error",
                f"An error occurred while generating charts:\n\n{exc}",
            )
            self.statusBar().showMessage("Chart generation failed")
            return

        total = sum(len(r) for r in rows.values())
        if errors:
            failed = ", ".join(DATASET_LABELS.get(k, k) for k in errors)
            self._config_panel.set_status(
                f"Failed to load: {failed}. Loaded {total:,} rows.", 'error'
            )
            self.statusBar().showMessage(f"Some sources failed: {failed}")
        else:
            self._config_panel.set_status(f"Loaded {total:,} rows", 'ok')
            self.statusBar().showMessage("Charts generated", 5000)
        self._config_panel.set_export_enabled(self._chart_tabs.has_data())

    @Slot()
    def _on_worker_finished(self):
        worker = self.sender()
        if worker is None:
            return
        if worker in self._workers:
            self._workers.remove(worker)
        worker.deleteLater()

    def _cancel_workers(self):
        for worker in self._workers:
            worker.token.cancel()

    def _on_selection_changed(self, value):
        self._config_panel.set_selection(value)
        if value is None:
            self.statusBar().showMessage("Selection cleared", 3000)
        else:
            self.statusBar().showMessage(f"Selected color: {value}", 3000)

    # ── Export ───────────────────────────────────────────────────────

    def _export_current(self):
        """Export the currently visible chart tab as PNG."""
        fig = self._chart_tabs.current_figure()
        if fig is None:
            QMessageBox.warning(
                self, "Nothing to Export",
                "No chart is currently displayed.",
            )
            return

        path, _ = QFileDialog.getSaveFileName(
            self, "Export Chart as PNG",
            "", "PNG Files (*.png);;All Files (*)",
        )
        if not path:
            return
        if not path.lower().endswith('.png'):
            path += '.png'
        try:
            export_png(fig, path)
            self.statusBar().showMessage(
                f"Exported to {os.path.basename(path)}", 5000
            )
        except (OSError, ValueError) as exc:
            QMessageBox.critical(
                self, "Export Error", f"Failed to export: {exc}"
            )

    def _export_all(self):
        """Export every chart with data to a folder."""
        if not self._chart_tabs.has_data():
            QMessageBox.warning(
                self, "No Data",
                "Please load CSV files before exporting.",
            )
            return

        folder = QFileDialog.getExistingDirectory(
            self, "Select Output Folder for All Charts"
        )
        if not folder:
            return

        self.statusBar().showMessage("Exporting all charts...")
        try:
            figures = self._chart_tabs.get_all_figures()
            paths = export_all_charts(figures, folder)
        except (OSError, ValueError) as exc:
            QMessageBox.critical(
                self, "Export Error",
                f"Failed to export charts:\n\n{exc}",
            )
            return
        self.statusBar().showMessage(
            f"Exported {len(paths)} charts to {os.path.basename(folder)}",
            5000,
        )
        QMessageBox.information(
            self, "Export Complete",
            f"Successfully exported {len(paths)} charts to:\n\n{folder}",
        )

    # ── Teardown ─────────────────────────────────────────────────────

    def closeEvent(self, event):
        self._cancel_workers()
        for worker in list(self._workers):
            # Network reads only observe the token between rows
            worker.wait(2000)
        self._chart_tabs.release()
        super().closeEvent(event)

    def _show_about(self):
        QMessageBox.about(
            self,
            f"About {APP_NAME}",
            f"<h3>{APP_NAME} v{APP_VERSION}</h3>"
            f"<p>Interactive charts for the used-car sales, financial "
            f"risk and student mental health datasets.</p>"
            f"<p>Click a bar in <i>Price by Color</i> to filter the "
            f"make × body heatmap by that colour; click it again to "
            f"clear the selection.</p>",
        )
