"""
Stream graphs for Chartboard.

Two variants share one renderer:

- Cars sold per year by canonical colour, stacked with a silhouette
  offset (centred on zero) and viewed through a year window.
- Cars sold per year by transmission, stacked from a zero baseline.

Hovering a layer highlights it and reports the count for the year under
the cursor.
"""

from matplotlib.figure import Figure

from .aggregator import field_key, stream_matrix
from .constants import (
    CAR_COLOR_HEX, CATEGORY_CYCLE, DARK_COLORS, DEFAULT_STREAM_WINDOW,
    EXPORT_TEXT_COLOR, STREAM_YEAR_WINDOWS, TRANSMISSION_HEX, TRANSMISSIONS,
)
from .data_model import ChartData
from .layout import OFFSET_SILHOUETTE, OFFSET_ZERO, stack_layers


_BASE_ALPHA = 0.7
_DIM_ALPHA = 0.2


def prepare_color_stream(records, options=None) -> ChartData:
    """Per-year counts of each colour, silhouette-stacked."""
    options = options or {}
    window_label = options.get('stream_window') or DEFAULT_STREAM_WINDOW
    window = STREAM_YEAR_WINDOWS.get(
        window_label, STREAM_YEAR_WINDOWS[DEFAULT_STREAM_WINDOW]
    )
    matrix = stream_matrix(records, field_key('color'), 'year')
    return ChartData(
        kind='stream',
        title='Number of Cars Sold by Year in Different Colors',
        payload=matrix,
        options={
            'offset': OFFSET_SILHOUETTE,
            'palette': CAR_COLOR_HEX,
            'window': window,
            'window_label': window_label,
            'legend': False,
        },
    )


def prepare_transmission_stream(records, options=None) -> ChartData:
    """Per-year counts of manual and automatic cars, zero baseline."""
    matrix = stream_matrix(
        records, field_key('transmission'), 'year',
        series_order=TRANSMISSIONS,
    )
    return ChartData(
        kind='stream',
        title='Cars Sold by Year and Transmission',
        payload=matrix,
        options={
            'offset': OFFSET_ZERO,
            'palette': TRANSMISSION_HEX,
            'window': None,
            'legend': True,
        },
    )


def render_stream(
    fig: Figure,
    data: ChartData,
    *,
    for_export: bool = False,
) -> dict:
    """Render a stacked stream graph on *fig*.

    Returns
    -------
    dict
        ``{"motion_notify_event": handler}`` for the hover readout.
    """
    fig.clf()
    ax = fig.add_subplot(111)

    if data.is_empty:
        ax.text(0.5, 0.5, 'No valid data points',
                transform=ax.transAxes, ha='center', va='center')
        return {}

    matrix = data.payload
    palette = data.options.get('palette', {})
    layers = stack_layers(matrix, data.options.get('offset', OFFSET_ZERO))

    polys = []
    for j, layer in enumerate(layers):
        color = palette.get(layer.key, CATEGORY_CYCLE[j % len(CATEGORY_CYCLE)])
        poly = ax.fill_between(
            layer.x, layer.lower, layer.upper,
            facecolor=color, alpha=_BASE_ALPHA, linewidth=0.4,
            edgecolor='#888888' if layer.key == 'white' else color,
            label=layer.key.capitalize(), zorder=3,
        )
        polys.append(poly)

    # ── Axes ─────────────────────────────────────────────────────────
    window = data.options.get('window')
    if window is not None:
        ax.set_xlim(window[0], window[1])
    else:
        ax.set_xlim(matrix.years[0], max(matrix.years[-1], matrix.years[0] + 1))
    ax.xaxis.get_major_locator().set_params(integer=True)
    ax.grid(axis='x', linewidth=0.4, alpha=0.5, zorder=0)
    ax.set_xlabel("Time (year)", fontsize=8)
    ax.set_ylabel("Cars sold", fontsize=8)

    title = data.title
    if data.options.get('window_label'):
        title += f"\n(years: {data.options['window_label']})"
    ax.set_title(title, fontsize=10, fontweight='bold')

    if data.options.get('legend'):
        ax.legend(loc='upper left', fontsize=6.5, framealpha=0.9)

    text_color = EXPORT_TEXT_COLOR if for_export else DARK_COLORS['fg']
    readout = ax.text(
        0.01, 0.98, "", transform=ax.transAxes, ha='left', va='top',
        fontsize=7, fontweight='bold', color=text_color, zorder=5,
    )

    fig.tight_layout(pad=1.5)

    years = matrix.years

    def on_move(event):
        if event.inaxes is not ax or event.xdata is None:
            if readout.get_text():
                readout.set_text("")
                for poly in polys:
                    poly.set_alpha(_BASE_ALPHA)
                fig.canvas.draw_idle()
            return
        year = int(round(event.xdata))
        if year not in years:
            return
        i = years.index(year)
        hovered = None
        for j, layer in enumerate(layers):
            if layer.lower[i] <= event.ydata <= layer.upper[i]:
                hovered = j
                break
        for j, poly in enumerate(polys):
            poly.set_alpha(
                _BASE_ALPHA if hovered is None or j == hovered else _DIM_ALPHA
            )
        if hovered is None:
            readout.set_text("")
        else:
            key = layers[hovered].key
            count = matrix.counts[i][hovered]
            readout.set_text(f"{key} car sold in year {year} : {count}")
        fig.canvas.draw_idle()

    return {'motion_notify_event': on_move}
