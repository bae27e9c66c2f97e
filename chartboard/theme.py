"""
Theme helpers for Chartboard.

``get_dark_stylesheet`` builds the Qt stylesheet for the dark GUI;
``apply_plot_style`` pushes one of the matplotlib style dicts from
``constants`` into ``rcParams``.  Charts are drawn dark in the window
and re-coloured light for export (see ``export``).
"""

import matplotlib as mpl

from .constants import DARK_COLORS, PLOT_STYLE_DARK, PLOT_STYLE_LIGHT


def get_dark_stylesheet() -> str:
    """Qt stylesheet for the widgets Chartboard uses."""
    c = DARK_COLORS
    return f"""
    QMainWindow, QWidget {{
        background-color: {c['bg']};
        color: {c['fg']};
        font-size: 13px;
    }}
    QTabWidget::pane {{
        border: 1px solid {c['border']};
        background-color: {c['bg']};
    }}
    QTabBar::tab {{
        background-color: {c['bg_alt']};
        color: {c['fg_dim']};
        padding: 6px 14px;
        border: 1px solid {c['border']};
        border-bottom: none;
    }}
    QTabBar::tab:selected {{
        background-color: {c['bg_widget']};
        color: {c['accent']};
        border-bottom: 2px solid {c['accent']};
    }}
    QGroupBox {{
        border: 1px solid {c['border']};
        border-radius: 6px;
        margin-top: 12px;
        padding-top: 14px;
        font-weight: bold;
        color: {c['accent']};
    }}
    QGroupBox::title {{
        subcontrol-origin: margin;
        left: 10px;
        padding: 0 4px;
    }}
    QPushButton {{
        background-color: {c['bg_widget']};
        color: {c['fg']};
        border: 1px solid {c['border']};
        border-radius: 4px;
        padding: 5px 14px;
    }}
    QPushButton:hover {{
        background-color: {c['selection']};
        border-color: {c['accent_hover']};
    }}
    QPushButton:disabled {{
        color: {c['fg_dim']};
        background-color: {c['bg']};
    }}
    QLineEdit, QComboBox {{
        background-color: {c['bg_input']};
        color: {c['fg']};
        border: 1px solid {c['border']};
        border-radius: 4px;
        padding: 3px 6px;
    }}
    QLineEdit:focus, QComboBox:focus {{
        border-color: {c['accent']};
    }}
    QComboBox QAbstractItemView {{
        background-color: {c['bg_widget']};
        color: {c['fg']};
        selection-background-color: {c['selection']};
    }}
    QStatusBar {{
        background-color: {c['bg_alt']};
        color: {c['fg_dim']};
        border-top: 1px solid {c['border']};
    }}
    QMenuBar, QMenu {{
        background-color: {c['bg_alt']};
        color: {c['fg']};
    }}
    QMenuBar::item:selected, QMenu::item:selected {{
        background-color: {c['selection']};
    }}
    QToolTip {{
        background-color: {c['bg_widget']};
        color: {c['fg']};
        border: 1px solid {c['accent']};
    }}
    QLabel#chartError {{
        color: {c['red']};
        font-weight: bold;
    }}
    """


def apply_plot_style(style_dict: dict) -> None:
    """Copy *style_dict* into matplotlib ``rcParams``.

    Parameters
    ----------
    style_dict : dict
        ``PLOT_STYLE_DARK`` for the GUI or ``PLOT_STYLE_LIGHT`` for
        headless export.
    """
    for key, value in style_dict.items():
        mpl.rcParams[key] = value


def apply_dark_plot_style() -> None:
    apply_plot_style(PLOT_STYLE_DARK)


def apply_light_plot_style() -> None:
    apply_plot_style(PLOT_STYLE_LIGHT)
