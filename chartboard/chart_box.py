"""
Box plot of selling price per canonical car colour for Chartboard.

Boxes span p25–p75 with a median line; whiskers reach the group
minimum and maximum (no outlier points).
"""

from matplotlib.figure import Figure

from .aggregator import box_stats, field_key
from .constants import CAR_COLOR_HEX, CATEGORY_CYCLE
from .data_model import ChartData


def prepare_box(records, options=None) -> ChartData:
    return ChartData(
        kind='box',
        title='Selling Price Distribution by Car Color',
        payload=box_stats(records, field_key('color'), 'price'),
    )


def render_box(
    fig: Figure,
    data: ChartData,
    *,
    for_export: bool = False,
) -> dict:
    """Render one box per colour on *fig*."""
    fig.clf()
    ax = fig.add_subplot(111)

    if data.is_empty:
        ax.text(0.5, 0.5, 'No valid data points',
                transform=ax.transAxes, ha='center', va='center')
        return {}

    stats = [
        {
            'label': box.key[0],
            'whislo': box.min,
            'q1': box.p25,
            'med': box.median,
            'q3': box.p75,
            'whishi': box.max,
            'fliers': [],
        }
        for box in data.payload
    ]
    artists = ax.bxp(
        stats, showfliers=False, patch_artist=True, widths=0.7,
        medianprops={'color': '#333333', 'linewidth': 1.2},
        whiskerprops={'color': '#888888'},
        capprops={'color': '#888888'},
    )
    for i, (patch, box) in enumerate(zip(artists['boxes'], data.payload)):
        color = CAR_COLOR_HEX.get(
            box.key[0], CATEGORY_CYCLE[i % len(CATEGORY_CYCLE)]
        )
        patch.set_facecolor(color)
        patch.set_edgecolor('#888888')
        patch.set_alpha(0.85)

    ax.tick_params(axis='x', labelrotation=45)
    ax.set_xlabel("Color", fontsize=8)
    ax.set_ylabel("Selling Price", fontsize=8)
    ax.set_title(data.title, fontsize=10, fontweight='bold')
    ax.grid(axis='y', linewidth=0.4, alpha=0.5)

    fig.tight_layout(pad=1.5)
    return {}
