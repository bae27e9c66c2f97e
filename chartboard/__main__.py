"""
Entry point for Chartboard.

Usage:
    python -m chartboard
    python -m chartboard --export OUT_DIR [--cars PATH] [--financial PATH]
                         [--mental-health PATH] [--example]

Without ``--export`` the GUI starts.  With it, every chart whose
dataset was supplied is rendered off-screen and written as a PNG.
"""

import argparse
import os
import sys
import tempfile
import traceback

from . import APP_NAME, APP_VERSION
from .constants import (
    DATASET_CARS, DATASET_FINANCIAL, DATASET_MENTAL_HEALTH,
    DEFAULT_STREAM_WINDOW, STREAM_YEAR_WINDOWS,
)


def parse_args(argv=None):
    """Parse command-line arguments.

    Returns
    -------
    argparse.Namespace
    """
    parser = argparse.ArgumentParser(
        prog="chartboard",
        description=f"{APP_NAME} v{APP_VERSION}: interactive CSV charts.",
    )
    parser.add_argument(
        "--export", metavar="OUT_DIR",
        help="Render every chart headless into OUT_DIR and exit.",
    )
    parser.add_argument("--cars", metavar="PATH",
                        help="Used-car sales CSV (path or URL).")
    parser.add_argument("--financial", metavar="PATH",
                        help="Financial risk CSV (path or URL).")
    parser.add_argument("--mental-health", metavar="PATH",
                        help="Student mental health CSV (path or URL).")
    parser.add_argument(
        "--example", action="store_true",
        help="Use generated example data for any dataset not given.",
    )
    parser.add_argument(
        "--years", choices=list(STREAM_YEAR_WINDOWS),
        default=DEFAULT_STREAM_WINDOW,
        help="Year window for the colour stream graph.",
    )
    return parser.parse_args(argv)


def run_export(args) -> int:
    """Headless batch export.  Returns the process exit code."""
    import matplotlib
    matplotlib.use('Agg')

    from .export import export_datasets
    from .theme import apply_light_plot_style

    sources = {
        DATASET_CARS: args.cars,
        DATASET_FINANCIAL: args.financial,
        DATASET_MENTAL_HEALTH: args.mental_health,
    }
    if args.example:
        from .example_data import generate_example_csvs
        example = generate_example_csvs(
            os.path.join(tempfile.gettempdir(), 'chartboard_example')
        )
        for key, path in example.items():
            sources[key] = sources[key] or path
    sources = {k: v for k, v in sources.items() if v}
    if not sources:
        print("Nothing to export: pass --cars, --financial, "
              "--mental-health or --example.", file=sys.stderr)
        return 2

    apply_light_plot_style()
    paths, errors = export_datasets(
        sources, args.export, options={'stream_window': args.years},
    )
    for path in paths:
        print(path)
    # Failed sources were already reported on stderr
    return 1 if errors else 0


def _exception_hook(exc_type, exc_value, exc_tb):
    """Global exception handler to prevent silent crashes."""
    msg = ''.join(traceback.format_exception(exc_type, exc_value, exc_tb))
    print(f"Unhandled exception:\n{msg}", file=sys.stderr)

    from PySide6.QtWidgets import QApplication, QMessageBox
    if QApplication.instance() is not None:
        QMessageBox.critical(
            None, "Unhandled Error",
            f"An unexpected error occurred:\n\n"
            f"{exc_type.__name__}: {exc_value}\n\n"
            f"See console for full traceback.",
        )


def run_gui() -> int:
    """Launch the Chartboard GUI."""
    sys.excepthook = _exception_hook

    # Configure matplotlib backend before importing Qt widgets
    os.environ.setdefault("QT_API", "pyside6")
    import matplotlib
    matplotlib.use('QtAgg')

    from PySide6.QtGui import QFont, QFontDatabase
    from PySide6.QtWidgets import QApplication

    from .constants import FONT_FAMILIES
    from .gui_main import ChartboardWindow
    from .theme import get_dark_stylesheet

    app = QApplication(sys.argv[:1])
    app.setStyle("Fusion")

    font = QFont()
    for family in FONT_FAMILIES:
        if QFontDatabase.hasFamily(family):
            font.setFamily(family)
            break
    font.setPointSize(10)
    app.setFont(font)

    app.setStyleSheet(get_dark_stylesheet())

    window = ChartboardWindow()
    window.show()
    return app.exec()


def main(argv=None):
    args = parse_args(argv)
    if args.export:
        sys.exit(run_export(args))
    sys.exit(run_gui())


if __name__ == "__main__":
    main()
