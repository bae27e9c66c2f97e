"""
Income histograms per education level for Chartboard.

One panel per education level, all binned on the same 20 equal-width
bins over ``[0, max income]`` so the panels are directly comparable.
"""

import numpy as np
from matplotlib.figure import Figure

from .aggregator import field_key, histogram
from .constants import CATEGORY_CYCLE, EDUCATION_HEX, HISTOGRAM_BINS
from .data_model import ChartData


def prepare_histogram(records, options=None) -> ChartData:
    return ChartData(
        kind='histogram',
        title='Income Distribution by Education Level',
        payload=histogram(
            records, field_key('education'), 'income', bins=HISTOGRAM_BINS,
        ),
    )


def render_histogram(
    fig: Figure,
    data: ChartData,
    *,
    for_export: bool = False,
) -> dict:
    """Render stacked small-multiple histograms on *fig*.

    Parameters
    ----------
    fig : matplotlib.figure.Figure
        Figure to draw on (will be cleared).
    data : ChartData
        From ``prepare_histogram``.
    for_export : bool
        Unused; the histogram has no theme-dependent annotations.
    """
    fig.clf()

    if data.is_empty:
        ax = fig.add_subplot(111)
        ax.text(0.5, 0.5, 'No valid data points',
                transform=ax.transAxes, ha='center', va='center')
        return {}

    series = data.payload
    axes = fig.subplots(len(series), 1, sharex=True, squeeze=False)[:, 0]
    for i, (ax, hist) in enumerate(zip(axes, series)):
        edges = np.asarray(hist.edges)
        color = EDUCATION_HEX.get(
            hist.key, CATEGORY_CYCLE[i % len(CATEGORY_CYCLE)]
        )
        ax.bar(
            edges[:-1], hist.counts, width=np.diff(edges), align='edge',
            color=color, edgecolor='white', linewidth=0.4,
            alpha=0.85, zorder=3,
        )
        ax.set_ylabel(hist.key, fontsize=7, rotation=0, ha='right', va='center')
        ax.tick_params(axis='y', labelsize=6)
        ax.grid(axis='y', linewidth=0.4, alpha=0.5, zorder=0)

    axes[-1].set_xlabel("Income", fontsize=8)
    axes[0].set_title(data.title, fontsize=10, fontweight='bold')

    fig.tight_layout(pad=1.2)
    return {}
