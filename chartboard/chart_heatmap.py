"""
Make × body-type heatmap for Chartboard.

Counts cars per (make, body) for the colour selected in the bar chart,
or for every colour when nothing is selected.  The axes always span the
makes and body types of the full dataset, so filtering never drops a
row or column; absent combinations show as zero.
"""

import numpy as np
from matplotlib.figure import Figure

from .aggregator import complete_grid, distinct, field_key
from .constants import DARK_COLORS, EXPORT_TEXT_COLOR, HEATMAP_CMAP
from .data_model import ChartData
from .selection import category_predicate


def prepare_heatmap(records, options=None) -> ChartData:
    """Complete make × body count grid, filtered by the selected colour.

    The axes come from every record; only records with a canonical
    colour (``color`` not ``None``) are counted.
    """
    options = options or {}
    selected = options.get('selected')
    records = list(records)

    makes = distinct(records, field_key('make'))
    bodies = distinct(records, field_key('body'))
    keep = category_predicate('color', selected)
    filtered = [
        rec for rec in records if rec['color'] is not None and keep(rec)
    ]

    grid = complete_grid(
        filtered, field_key('make'), field_key('body'), makes, bodies,
    )
    if selected is None:
        title = "Car Body Type by Make (all colors)"
    else:
        title = f"Car Body Type by Make for {selected.title()} Cars"
    return ChartData(
        kind='heatmap',
        title=title,
        payload=grid,
        options={'makes': makes, 'bodies': bodies, 'selected': selected},
    )


def render_heatmap(
    fig: Figure,
    data: ChartData,
    *,
    for_export: bool = False,
) -> dict:
    """Render the count heatmap on *fig*.

    Parameters
    ----------
    fig : matplotlib.figure.Figure
        Figure to draw on (will be cleared).
    data : ChartData
        From ``prepare_heatmap``.
    for_export : bool
        If ``True``, use light-theme text colours.

    Returns
    -------
    dict
        ``{"motion_notify_event": handler}`` showing the hovered count.
    """
    fig.clf()
    ax = fig.add_subplot(111)

    makes = data.options.get('makes', ())
    bodies = data.options.get('bodies', ())
    if data.is_empty or not makes or not bodies:
        ax.text(0.5, 0.5, 'No valid data points',
                transform=ax.transAxes, ha='center', va='center')
        return {}

    # ── Build count matrix: rows = body, columns = make ─────────────
    make_idx = {m: j for j, m in enumerate(makes)}
    body_idx = {b: i for i, b in enumerate(bodies)}
    counts = np.zeros((len(bodies), len(makes)), dtype=int)
    for cell in data.payload:
        counts[body_idx[cell.column], make_idx[cell.row]] = cell.count

    vmax = max(1, int(counts.max()))
    im = ax.imshow(
        counts, cmap=HEATMAP_CMAP, vmin=0, vmax=vmax,
        aspect='auto', origin='lower', alpha=0.8,
    )

    ax.set_xticks(range(len(makes)))
    ax.set_xticklabels(makes, fontsize=6, rotation=45, ha='right')
    ax.set_yticks(range(len(bodies)))
    ax.set_yticklabels(bodies, fontsize=6)
    ax.set_xlabel("Make", fontsize=8)
    ax.set_ylabel("Body type", fontsize=8)
    ax.set_title(
        f"{data.title}\nCount of cars per combination of make and body type",
        fontsize=10, fontweight='bold',
    )
    cbar = fig.colorbar(im, ax=ax, fraction=0.04, pad=0.02)
    cbar.ax.tick_params(labelsize=6)

    text_color = EXPORT_TEXT_COLOR if for_export else DARK_COLORS['fg']
    readout = ax.text(
        0.0, 1.0, "", transform=ax.transAxes, ha='left', va='bottom',
        fontsize=7, color=text_color,
    )

    fig.tight_layout(pad=1.5)

    def on_move(event):
        if event.inaxes is not ax or event.xdata is None:
            if readout.get_text():
                readout.set_text("")
                fig.canvas.draw_idle()
            return
        col = int(round(event.xdata))
        row = int(round(event.ydata))
        if 0 <= row < counts.shape[0] and 0 <= col < counts.shape[1]:
            readout.set_text(
                f"{makes[col]} / {bodies[row]}, count: {counts[row, col]}"
            )
            fig.canvas.draw_idle()

    return {'motion_notify_event': on_move}
