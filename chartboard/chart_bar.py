"""
Ranked bar chart for Chartboard.

Average selling price per canonical car colour, highest first.  Each
bar is pickable: clicking one toggles the shared colour selection,
and the selected bar is outlined while the others fade.
"""

import math

from matplotlib.figure import Figure

from .aggregator import STAT_MEAN, aggregate, field_key
from .constants import CAR_COLOR_HEX, CATEGORY_CYCLE, SELECTION_EDGE
from .data_model import ChartData


def prepare_bar(records, options=None) -> ChartData:
    """Mean ``price`` per ``color``, ranked descending."""
    options = options or {}
    bars = aggregate(
        records, field_key('color'), STAT_MEAN, 'price', ranked=True,
    )
    return ChartData(
        kind='bar',
        title='Average Selling Price by Car Color',
        payload=bars,
        options={'selected': options.get('selected')},
    )


def render_bar(
    fig: Figure,
    data: ChartData,
    *,
    for_export: bool = False,
    on_select=None,
) -> dict:
    """Render the ranked bar chart on *fig*.

    Parameters
    ----------
    fig : matplotlib.figure.Figure
        Figure to draw on (will be cleared).
    data : ChartData
        From ``prepare_bar``.
    for_export : bool
        If ``True``, skip the selection highlight.
    on_select : callable, optional
        Called with the colour of a clicked bar.

    Returns
    -------
    dict
        ``{"pick_event": handler}`` when *on_select* is given.
    """
    fig.clf()
    ax = fig.add_subplot(111)

    if data.is_empty:
        ax.text(0.5, 0.5, 'No valid data points',
                transform=ax.transAxes, ha='center', va='center')
        return {}

    bars = data.payload
    selected = None if for_export else data.options.get('selected')
    categories = [agg.key[0] for agg in bars]
    values = [agg.value for agg in bars]

    rects = ax.bar(range(len(bars)), values, width=0.9, zorder=3)
    for i, (rect, cat) in enumerate(zip(rects, categories)):
        rect.set_facecolor(
            CAR_COLOR_HEX.get(cat, CATEGORY_CYCLE[i % len(CATEGORY_CYCLE)])
        )
        rect.set_gid(cat)
        rect.set_picker(True)
        # White paint needs an outline to be visible on a light background
        rect.set_edgecolor('black' if cat == 'white' else 'none')
        rect.set_linewidth(1.0)
        if selected is None:
            rect.set_alpha(0.7)
        elif cat == selected:
            rect.set_alpha(1.0)
            rect.set_edgecolor(SELECTION_EDGE)
            rect.set_linewidth(2.5)
        else:
            rect.set_alpha(0.25)

    # Truncated axis (as in the original dashboard) to show price spread
    low = min(values)
    high = max(values)
    floor = max(0.0, math.floor(low * 0.8 / 1000.0) * 1000.0)
    ax.set_ylim(floor, high * 1.05 if high > 0 else 1.0)

    ax.set_xticks(range(len(bars)))
    ax.set_xticklabels(categories, rotation=45, ha='right', fontsize=7)
    ax.set_xlabel('Color', fontsize=8)
    ax.set_ylabel('Average Selling Price', fontsize=8)
    title = data.title
    if selected is not None:
        title += f"\n(selected: {selected}; click again to clear)"
    ax.set_title(title, fontsize=10, fontweight='bold')
    ax.grid(axis='y', linewidth=0.4, alpha=0.5, zorder=0)

    fig.tight_layout(pad=1.5)

    if on_select is None:
        return {}

    snapshot = frozenset(categories)

    def on_pick(event):
        category = event.artist.get_gid()
        if category in snapshot:
            on_select(category)

    return {'pick_event': on_pick}
