"""
Export utilities for Chartboard.

PNG export with a temporary light theme (dark GUI figure → white
background file), clipboard copy, and headless batch export of every
chart for the datasets supplied.

The light theme is applied in place and undone in a ``finally`` block,
so the on-screen figure comes back exactly as it was even if saving
fails.
"""

import io
import os
import sys
from typing import Dict, List, Optional, Tuple

from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.colors import to_hex
from matplotlib.figure import Figure

from .chart_registry import CHARTS
from .constants import (
    CLIPBOARD_DPI, DARK_COLORS, EXPORT_DPI, EXPORT_WIDTH_INCHES,
    PLOT_STYLE_LIGHT,
)
from .csv_loader import CancelToken, DataLoadError, LoadCancelled, read_rows
from .pipeline import records_from_rows


# Dark-theme foreground colours that become dark text on export
_DARK_FG = frozenset(
    to_hex(c) for c in (DARK_COLORS['fg'], DARK_COLORS['fg_dim'])
)


def _save_figure_state(fig: Figure) -> dict:
    """Capture every colour ``_apply_light_theme`` changes."""
    state = {'fig_facecolor': fig.get_facecolor(), 'axes_states': []}
    for ax in fig.get_axes():
        ax_state = {
            'facecolor': ax.get_facecolor(),
            'title_color': ax.title.get_color(),
            'xlabel_color': ax.xaxis.label.get_color(),
            'ylabel_color': ax.yaxis.label.get_color(),
            'spine_colors': {
                name: spine.get_edgecolor()
                for name, spine in ax.spines.items()
            },
            'xtick_colors': [t.get_color() for t in ax.get_xticklabels()],
            'ytick_colors': [t.get_color() for t in ax.get_yticklabels()],
            'xtick_mark_color': None,
            'ytick_mark_color': None,
            'text_colors': [t.get_color() for t in ax.texts],
        }
        xticks = ax.xaxis.get_major_ticks()
        if xticks:
            ax_state['xtick_mark_color'] = xticks[0].tick1line.get_color()
        yticks = ax.yaxis.get_major_ticks()
        if yticks:
            ax_state['ytick_mark_color'] = yticks[0].tick1line.get_color()

        legend = ax.get_legend()
        if legend is not None:
            frame = legend.get_frame()
            ax_state['legend_facecolor'] = frame.get_facecolor()
            ax_state['legend_edgecolor'] = frame.get_edgecolor()
            ax_state['legend_text_colors'] = [
                t.get_color() for t in legend.get_texts()
            ]
        state['axes_states'].append(ax_state)
    return state


def _apply_light_theme(fig: Figure) -> None:
    """Recolour *fig* for a white background."""
    light = PLOT_STYLE_LIGHT
    fig.set_facecolor(light['figure.facecolor'])

    for ax in fig.get_axes():
        ax.set_facecolor(light['axes.facecolor'])
        ax.title.set_color(light['text.color'])
        ax.xaxis.label.set_color(light['axes.labelcolor'])
        ax.yaxis.label.set_color(light['axes.labelcolor'])
        for spine in ax.spines.values():
            spine.set_edgecolor(light['axes.edgecolor'])
        ax.tick_params(axis='x', colors=light['xtick.color'],
                       labelcolor=light['xtick.color'])
        ax.tick_params(axis='y', colors=light['ytick.color'],
                       labelcolor=light['ytick.color'])

        legend = ax.get_legend()
        if legend is not None:
            frame = legend.get_frame()
            frame.set_facecolor(light['legend.facecolor'])
            frame.set_edgecolor(light['legend.edgecolor'])
            for text in legend.get_texts():
                text.set_color(light['text.color'])

        # Only theme-coloured text; data labels keep their own colours
        for text in ax.texts:
            if to_hex(text.get_color()) in _DARK_FG:
                text.set_color(light['text.color'])


def _restore_figure_state(fig: Figure, state: dict) -> None:
    fig.set_facecolor(state['fig_facecolor'])

    for ax, ax_state in zip(fig.get_axes(), state['axes_states']):
        ax.set_facecolor(ax_state['facecolor'])
        ax.title.set_color(ax_state['title_color'])
        ax.xaxis.label.set_color(ax_state['xlabel_color'])
        ax.yaxis.label.set_color(ax_state['ylabel_color'])
        for name, color in ax_state['spine_colors'].items():
            ax.spines[name].set_edgecolor(color)

        # tick_params recolours labels too, so labels go back afterwards
        if ax_state['xtick_mark_color'] is not None:
            ax.tick_params(axis='x', colors=ax_state['xtick_mark_color'])
        if ax_state['ytick_mark_color'] is not None:
            ax.tick_params(axis='y', colors=ax_state['ytick_mark_color'])
        for label, color in zip(ax.get_xticklabels(), ax_state['xtick_colors']):
            label.set_color(color)
        for label, color in zip(ax.get_yticklabels(), ax_state['ytick_colors']):
            label.set_color(color)

        for text, color in zip(ax.texts, ax_state['text_colors']):
            text.set_color(color)

        legend = ax.get_legend()
        if legend is not None and 'legend_facecolor' in ax_state:
            frame = legend.get_frame()
            frame.set_facecolor(ax_state['legend_facecolor'])
            frame.set_edgecolor(ax_state['legend_edgecolor'])
            for text, color in zip(
                legend.get_texts(), ax_state['legend_text_colors']
            ):
                text.set_color(color)


def export_png(
    fig: Figure,
    filepath: str,
    *,
    dpi: int = EXPORT_DPI,
    width_inches: float = EXPORT_WIDTH_INCHES,
) -> None:
    """Write *fig* to *filepath* as a light-theme PNG.

    Parameters
    ----------
    fig : matplotlib.figure.Figure
    filepath : str
        Output path (should end with ``.png``).
    dpi : int
        Export resolution.
    width_inches : float
        Output width; height scales to keep the aspect ratio.
    """
    current_w = fig.get_figwidth()
    current_h = fig.get_figheight()
    state = _save_figure_state(fig)
    try:
        scale = width_inches / current_w if current_w > 0 else 1.0
        fig.set_size_inches(width_inches, current_h * scale)
        _apply_light_theme(fig)
        fig.savefig(
            filepath,
            dpi=dpi,
            bbox_inches='tight',
            facecolor=fig.get_facecolor(),
            edgecolor='none',
            pad_inches=0.1,
        )
    finally:
        fig.set_size_inches(current_w, current_h)
        _restore_figure_state(fig, state)


def copy_to_clipboard(fig: Figure, dpi: int = CLIPBOARD_DPI) -> bool:
    """Copy *fig* to the system clipboard as a PNG image.

    Returns ``True`` on success, ``False`` without a running
    ``QApplication``.
    """
    from PySide6.QtGui import QImage
    from PySide6.QtWidgets import QApplication

    if QApplication.instance() is None:
        return False

    buf = io.BytesIO()
    state = _save_figure_state(fig)
    try:
        _apply_light_theme(fig)
        fig.savefig(
            buf, format='png', dpi=dpi, bbox_inches='tight',
            facecolor=fig.get_facecolor(), edgecolor='none',
        )
    finally:
        _restore_figure_state(fig, state)

    img = QImage()
    img.loadFromData(buf.getvalue())
    clipboard = QApplication.clipboard()
    if clipboard is None:
        return False
    clipboard.setImage(img)
    return True


def safe_filename(name: str) -> str:
    """Reduce *name* to characters that are safe in a file name."""
    return "".join(
        c if c.isalnum() or c in '-_ ' else '_'
        for c in name
    ).strip().replace(' ', '_')


def export_all_charts(
    figures: Dict[str, Figure],
    output_dir: str,
    *,
    dpi: int = EXPORT_DPI,
    width_inches: float = EXPORT_WIDTH_INCHES,
) -> List[str]:
    """Export ``{filename_stem: Figure}`` as PNGs into *output_dir*.

    Returns
    -------
    list of str
        Paths of the written files.
    """
    os.makedirs(output_dir, exist_ok=True)
    paths = []
    for name, fig in figures.items():
        filepath = os.path.join(output_dir, f"{safe_filename(name)}.png")
        export_png(fig, filepath, dpi=dpi, width_inches=width_inches)
        paths.append(filepath)
    return paths


def render_chart_figure(chart, records, options: Optional[dict] = None) -> Figure:
    """Prepare and render *chart* onto a new off-screen figure."""
    fig = Figure(figsize=chart.figsize)
    FigureCanvasAgg(fig)
    data = chart.prepare(records, options or {})
    chart.render(fig, data, for_export=True)
    return fig


def export_datasets(
    sources: Dict[str, str],
    output_dir: str,
    *,
    options: Optional[dict] = None,
    cancel: Optional[CancelToken] = None,
    dpi: int = EXPORT_DPI,
) -> Tuple[List[str], Dict[str, str]]:
    """Render every chart whose dataset is in *sources* and export it.

    Parameters
    ----------
    sources : dict
        ``{dataset_key: path_or_url}``.  Charts for datasets not listed
        are skipped.
    output_dir : str
        Directory for the PNG files (created if missing).
    options : dict, optional
        Chart options, e.g. ``{"stream_window": "2006-2010"}``.

    Returns
    -------
    tuple
        ``(paths, errors)``: paths of the written files in chart order,
        and ``{dataset_key: message}`` for each source that could not be
        read.  Only the charts of a failed dataset are skipped.

    Raises
    ------
    LoadCancelled
        If *cancel* is set while reading.
    """
    rows_by_dataset, errors = {}, {}
    for dataset, source in sources.items():
        if not source:
            continue
        try:
            rows_by_dataset[dataset] = read_rows(source, cancel=cancel)
        except LoadCancelled:
            raise
        except DataLoadError as exc:
            print(f"[Chartboard] {dataset}: {exc}", file=sys.stderr)
            errors[dataset] = str(exc)

    figures = {}
    for chart in CHARTS:
        rows = rows_by_dataset.get(chart.spec.dataset)
        if rows is None:
            continue
        records = records_from_rows(rows, chart.spec, cancel=cancel)
        if not records:
            print(f"[Chartboard] {chart.key}: no valid rows", file=sys.stderr)
        figures[chart.key] = render_chart_figure(chart, records, options)

    return export_all_charts(figures, output_dir, dpi=dpi), errors
