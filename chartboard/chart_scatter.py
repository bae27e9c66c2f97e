"""
Model year vs selling price scatter plot for Chartboard.

Both axes are padded by 10 % of the data range on each side.
"""

from matplotlib.figure import Figure

from .constants import CATEGORY_CYCLE, SCATTER_PADDING
from .data_model import ChartData


def prepare_scatter(records, options=None) -> ChartData:
    points = tuple((rec['year'], rec['price']) for rec in records)
    return ChartData(
        kind='scatter',
        title='Selling Price by Model Year',
        payload=points,
    )


def _padded(lo: float, hi: float):
    span = hi - lo
    if span == 0:
        span = abs(lo) or 1.0
    return lo - span * SCATTER_PADDING, hi + span * SCATTER_PADDING


def render_scatter(
    fig: Figure,
    data: ChartData,
    *,
    for_export: bool = False,
) -> dict:
    """Render the year/price scatter plot on *fig*."""
    fig.clf()
    ax = fig.add_subplot(111)

    if data.is_empty:
        ax.text(0.5, 0.5, 'No valid data points',
                transform=ax.transAxes, ha='center', va='center')
        return {}

    years = [p[0] for p in data.payload]
    prices = [p[1] for p in data.payload]

    ax.scatter(
        years, prices,
        c=CATEGORY_CYCLE[0], s=12, alpha=0.6,
        edgecolors='white', linewidths=0.3, zorder=3,
    )
    ax.set_xlim(*_padded(min(years), max(years)))
    ax.set_ylim(*_padded(min(prices), max(prices)))
    ax.xaxis.get_major_locator().set_params(integer=True)

    ax.set_xlabel("Year", fontsize=8)
    ax.set_ylabel("Selling Price", fontsize=8)
    ax.set_title(data.title, fontsize=10, fontweight='bold')
    ax.grid(linewidth=0.4, alpha=0.5)

    fig.tight_layout(pad=1.5)
    return {}
