"""
Configuration panel (left side) for Chartboard.

Data-source inputs for the three datasets (local path or URL), folder
and example loading, the stream-graph year window, the current
cross-chart selection, and the Export All button.
"""

import os
import tempfile

from PySide6.QtCore import Signal
from PySide6.QtWidgets import (
    QComboBox, QFileDialog, QFormLayout, QGroupBox, QHBoxLayout, QLabel,
    QLineEdit, QMessageBox, QPushButton, QVBoxLayout, QWidget,
)

from .constants import (
    DARK_COLORS, DATASET_CARS, DATASET_FILENAMES, DATASET_FINANCIAL,
    DATASET_LABELS, DATASET_MENTAL_HEALTH, DEFAULT_STREAM_WINDOW,
    STREAM_YEAR_WINDOWS,
)


_STATUS_COLORS = {
    'info': DARK_COLORS['fg_dim'],
    'ok': DARK_COLORS['green'],
    'warn': DARK_COLORS['yellow'],
    'error': DARK_COLORS['red'],
}


class ConfigPanel(QWidget):
    """Left-side panel with data sources and chart options."""

    # Signals
    load_requested = Signal(object)  # emits {dataset: source}
    config_changed = Signal()

    _DATASETS = [DATASET_CARS, DATASET_FINANCIAL, DATASET_MENTAL_HEALTH]

    def __init__(self, parent=None):
        super().__init__(parent)
        self._selected = None
        self._setup_ui()
        self._connect_signals()

    # ── UI setup ─────────────────────────────────────────────────────

    def _setup_ui(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(6, 6, 6, 6)
        layout.setSpacing(8)

        # ── Group 1: Data Sources ────────────────────────────────────
        grp_files = QGroupBox("Data Sources")
        files_layout = QVBoxLayout(grp_files)
        files_layout.setSpacing(4)

        self._source_edits = {}
        self._browse_buttons = {}
        for key in self._DATASETS:
            lbl = QLabel(DATASET_LABELS[key])
            lbl.setStyleSheet("font-size: 11px;")
            row = QHBoxLayout()
            row.setSpacing(4)
            edit = QLineEdit()
            edit.setPlaceholderText("File path or http(s):// URL")
            edit.setStyleSheet("font-size: 11px;")
            btn = QPushButton("Browse...")
            btn.setFixedWidth(70)
            btn.setStyleSheet("font-size: 11px;")
            row.addWidget(edit, 1)
            row.addWidget(btn)
            files_layout.addWidget(lbl)
            files_layout.addLayout(row)
            self._source_edits[key] = edit
            self._browse_buttons[key] = btn

        self._btn_load = QPushButton("Load Data")
        files_layout.addWidget(self._btn_load)

        self._btn_load_folder = QPushButton("Load All from Folder...")
        self._btn_load_folder.setToolTip(
            "Select a folder containing "
            + ", ".join(DATASET_FILENAMES.values())
        )
        files_layout.addWidget(self._btn_load_folder)

        self._lbl_status = QLabel("")
        self._lbl_status.setWordWrap(True)
        files_layout.addWidget(self._lbl_status)
        self.set_status("No data loaded")

        layout.addWidget(grp_files)

        # ── Group 2: Stream Graph ────────────────────────────────────
        grp_stream = QGroupBox("Stream Graph")
        stream_layout = QFormLayout(grp_stream)
        self._cmb_window = QComboBox()
        self._cmb_window.addItems(list(STREAM_YEAR_WINDOWS))
        self._cmb_window.setCurrentText(DEFAULT_STREAM_WINDOW)
        stream_layout.addRow("Years:", self._cmb_window)
        layout.addWidget(grp_stream)

        # ── Group 3: Selection ───────────────────────────────────────
        grp_sel = QGroupBox("Color Selection")
        sel_layout = QVBoxLayout(grp_sel)
        self._lbl_selected = QLabel()
        self._lbl_selected.setWordWrap(True)
        sel_layout.addWidget(self._lbl_selected)
        self._btn_clear_selection = QPushButton("Clear Selection")
        self._btn_clear_selection.setEnabled(False)
        sel_layout.addWidget(self._btn_clear_selection)
        layout.addWidget(grp_sel)
        self.set_selection(None)

        # ── Actions ──────────────────────────────────────────────────
        c = DARK_COLORS
        self._btn_export_all = QPushButton("Export All Charts...")
        self._btn_export_all.setStyleSheet(
            f"QPushButton {{ background-color: {c['accent']}; "
            f"color: {c['bg']}; font-weight: bold; padding: 8px; }}"
            f"QPushButton:hover {{ background-color: {c['accent_hover']}; }}"
            f"QPushButton:disabled {{ background-color: {c['bg']}; "
            f"color: {c['fg_dim']}; }}"
        )
        self._btn_export_all.setEnabled(False)
        layout.addWidget(self._btn_export_all)

        self._btn_example = QPushButton("Load Example Data")
        layout.addWidget(self._btn_example)

        layout.addStretch()

    # ── Signal connections ───────────────────────────────────────────

    def _connect_signals(self):
        for key in self._DATASETS:
            self._browse_buttons[key].clicked.connect(
                lambda checked=False, k=key: self._browse_file(k)
            )
            self._source_edits[key].returnPressed.connect(
                lambda *_: self.request_load()
            )
        self._btn_load.clicked.connect(lambda *_: self.request_load())
        self._btn_load_folder.clicked.connect(lambda *_: self.load_from_folder())
        self._btn_example.clicked.connect(lambda *_: self.load_example())
        self._cmb_window.currentTextChanged.connect(
            lambda *_: self.config_changed.emit()
        )

    # ── Slot implementations ─────────────────────────────────────────

    def _browse_file(self, key):
        path, _ = QFileDialog.getOpenFileName(
            self, f"Select {DATASET_LABELS[key]} CSV File",
            "", "CSV Files (*.csv);;All Files (*)",
        )
        if path:
            self._source_edits[key].setText(path)
            self.request_load()

    def load_from_folder(self):
        folder = QFileDialog.getExistingDirectory(
            self, "Select Folder Containing CSV Files",
        )
        if not folder:
            return

        # A file missing from the folder blanks its field
        missing = []
        for key in self._DATASETS:
            filename = DATASET_FILENAMES[key]
            path = os.path.join(folder, filename)
            if os.path.isfile(path):
                self._source_edits[key].setText(path)
            else:
                self._source_edits[key].setText('')
                missing.append(filename)

        if missing:
            QMessageBox.warning(
                self, "Missing Files",
                f"The following expected files were not found in "
                f"'{os.path.basename(folder)}':\n\n"
                + "\n".join(f"  - {f}" for f in missing)
                + "\n\nCharts for these datasets will stay empty.",
            )
        self.request_load()

    def load_example(self):
        """Generate the example CSVs and load them."""
        from .example_data import generate_example_csvs

        example_dir = os.path.join(tempfile.gettempdir(), 'chartboard_example')
        paths = generate_example_csvs(example_dir)
        for key, path in paths.items():
            self._source_edits[key].setText(path)
        self.request_load()

    def request_load(self):
        sources = self.get_sources()
        if not sources:
            self.set_status("Enter at least one file path or URL", 'warn')
            return
        self.set_status("Loading...", 'info')
        self.load_requested.emit(sources)

    # ── Public API ───────────────────────────────────────────────────

    def set_status(self, text: str, level: str = 'info') -> None:
        self._lbl_status.setText(text)
        self._lbl_status.setStyleSheet(
            f"color: {_STATUS_COLORS.get(level, _STATUS_COLORS['info'])}; "
            f"font-size: 11px;"
        )

    def set_selection(self, value) -> None:
        """Show the colour currently selected in the bar chart."""
        self._selected = value
        if value is None:
            self._lbl_selected.setText(
                "None (click a bar in 'Price by Color' to filter the heatmap)"
            )
        else:
            self._lbl_selected.setText(f"Selected: {value}")
        self._btn_clear_selection.setEnabled(value is not None)

    def set_export_enabled(self, enabled: bool) -> None:
        self._btn_export_all.setEnabled(enabled)

    def get_sources(self) -> dict:
        """``{dataset: source}`` for every non-empty source field."""
        sources = {}
        for key in self._DATASETS:
            text = self._source_edits[key].text().strip()
            if text:
                sources[key] = text
        return sources

    def get_config(self) -> dict:
        """Return current configuration as a dict for the chart tabs."""
        return {
            'sources': self.get_sources(),
            'stream_window': self._cmb_window.currentText(),
            'selected': self._selected,
        }

    @property
    def export_all_button(self) -> QPushButton:
        return self._btn_export_all

    @property
    def clear_selection_button(self) -> QPushButton:
        return self._btn_clear_selection
