"""
Parallel-coordinate plots for Chartboard.

Three datasets share one renderer:

- Financial risk: education level and risk rating (categorical), then
  income, credit score and loan amount, each binned into 20 quantile
  buckets.  Lines coloured by education level.
- Used cars: transmission (automatic / manual only), condition (one
  point per distinct grade, best at the top), odometer and selling
  price.  Lines coloured by transmission.
- Student mental health: depression, anxiety, panic attack and
  treatment answers (Yes / No).  Lines coloured by CGPA band.

Every axis is rescaled to ``[0, 1]``; categorical axes place their
categories at evenly spaced points.
"""

from collections import namedtuple

import numpy as np
from matplotlib.collections import LineCollection
from matplotlib.figure import Figure
from matplotlib.patches import Patch

from .aggregator import quantile_buckets
from .constants import (
    CATEGORY_CYCLE, CGPA_BANDS, CGPA_HEX, DARK_COLORS, EDUCATION_HEX,
    EDUCATION_LEVELS, EXPORT_TEXT_COLOR, QUANTILE_BUCKETS, RISK_RATINGS,
    TRANSMISSION_HEX, TRANSMISSIONS, YES_NO,
)
from .data_model import ChartData


# categories is None for numeric axes
Dimension = namedtuple('Dimension', ['field', 'label', 'categories'])


def prepare_financial_parallel(records, options=None) -> ChartData:
    """Financial-risk lines with numeric axes quantile-bucketed."""
    records = list(records)
    binned = {}
    for field in ('income', 'credit_score', 'loan_amount'):
        binned[field] = quantile_buckets(
            [rec[field] for rec in records], QUANTILE_BUCKETS,
        )
    rows = tuple(
        {
            'education': rec['education'],
            'risk': rec['risk'],
            'income': binned['income'][i],
            'credit_score': binned['credit_score'][i],
            'loan_amount': binned['loan_amount'][i],
        }
        for i, rec in enumerate(records)
    )
    return ChartData(
        kind='parallel',
        title='Financial Risk Profile (numeric axes in quantile buckets)',
        payload=rows,
        options={
            'dimensions': (
                Dimension('education', 'Education Level', EDUCATION_LEVELS),
                Dimension('risk', 'Risk Rating', RISK_RATINGS),
                Dimension('income', 'Income', None),
                Dimension('credit_score', 'Credit Score', None),
                Dimension('loan_amount', 'Loan Amount', None),
            ),
            'color_field': 'education',
            'palette': EDUCATION_HEX,
        },
    )


def prepare_car_parallel(records, options=None) -> ChartData:
    rows = tuple(rec.as_dict() for rec in records)
    # Ascending so the best grade sits at the top of the axis
    conditions = tuple(sorted({row['condition'] for row in rows}))
    return ChartData(
        kind='parallel',
        title='Used Cars: Transmission, Condition, Odometer and Price',
        payload=rows,
        options={
            'dimensions': (
                Dimension('transmission', 'Transmission', TRANSMISSIONS),
                Dimension('condition', 'Condition', conditions),
                Dimension('odometer', 'Odometer', None),
                Dimension('price', 'Selling Price', None),
            ),
            'color_field': 'transmission',
            'palette': TRANSMISSION_HEX,
        },
    )


def prepare_mental_health_parallel(records, options=None) -> ChartData:
    rows = tuple(rec.as_dict() for rec in records)
    return ChartData(
        kind='parallel',
        title='Student Mental Health Survey (coloured by CGPA)',
        payload=rows,
        options={
            'dimensions': (
                Dimension('depression', 'Depression', YES_NO),
                Dimension('anxiety', 'Anxiety', YES_NO),
                Dimension('panic_attack', 'Panic Attack', YES_NO),
                Dimension('treatment', 'Treatment', YES_NO),
            ),
            'color_field': 'cgpa',
            'palette': CGPA_HEX,
            'legend_order': CGPA_BANDS,
        },
    )


def _axis_scale(dim: Dimension, rows):
    """Return ``(value → [0, 1], tick positions, tick labels)`` for *dim*."""
    if dim.categories is not None:
        n = len(dim.categories)
        pos = {c: (i / (n - 1) if n > 1 else 0.5)
               for i, c in enumerate(dim.categories)}
        labels = [c if isinstance(c, str) else f"{c:g}" for c in dim.categories]
        return (lambda v: pos[v]), list(pos.values()), labels

    values = np.asarray([row[dim.field] for row in rows], dtype=float)
    lo, hi = float(values.min()), float(values.max())
    span = hi - lo

    def scale(v):
        return (v - lo) / span if span else 0.5

    return scale, [0.0, 1.0], [f"{lo:g}", f"{hi:g}"]


def render_parallel(
    fig: Figure,
    data: ChartData,
    *,
    for_export: bool = False,
) -> dict:
    """Render a parallel-coordinate plot on *fig*."""
    fig.clf()
    ax = fig.add_subplot(111)

    if data.is_empty:
        ax.text(0.5, 0.5, 'No valid data points',
                transform=ax.transAxes, ha='center', va='center')
        return {}

    rows = data.payload
    dims = data.options['dimensions']
    palette = data.options.get('palette', {})
    color_field = data.options['color_field']

    scales = [_axis_scale(dim, rows) for dim in dims]

    segments = []
    colors = []
    fallback = {}
    for row in rows:
        segments.append([
            (i, scale(row[dim.field]))
            for i, (dim, (scale, _, _)) in enumerate(zip(dims, scales))
        ])
        key = row[color_field]
        if key not in palette and key not in fallback:
            fallback[key] = CATEGORY_CYCLE[len(fallback) % len(CATEGORY_CYCLE)]
        colors.append(palette.get(key, fallback.get(key)))

    ax.add_collection(LineCollection(
        segments, colors=colors, linewidths=0.6, alpha=0.35, zorder=2,
    ))

    # ── Vertical axes with their own tick labels ────────────────────
    text_color = EXPORT_TEXT_COLOR if for_export else DARK_COLORS['fg']
    for i, (dim, (_, ticks, labels)) in enumerate(zip(dims, scales)):
        ax.axvline(i, color='#888888', linewidth=1.0, zorder=3)
        for t, label in zip(ticks, labels):
            ax.text(i + 0.03, t, label, fontsize=6, va='center',
                    color=text_color, zorder=4)

    ax.set_xlim(-0.2, len(dims) - 0.6)
    ax.set_ylim(-0.05, 1.05)
    ax.set_xticks(range(len(dims)))
    ax.set_xticklabels([dim.label for dim in dims], fontsize=7)
    ax.set_yticks([])
    for spine in ('left', 'right', 'top'):
        ax.spines[spine].set_visible(False)
    ax.set_title(data.title, fontsize=10, fontweight='bold')

    # ── Legend ────────────────────────────────────────────────────────
    present = {row[color_field] for row in rows}
    order = data.options.get('legend_order') or tuple(palette) + tuple(fallback)
    legend_elements = [
        Patch(facecolor=palette.get(key, fallback.get(key)), label=key)
        for key in order if key in present
    ]
    if legend_elements:
        ax.legend(
            handles=legend_elements, loc='upper left',
            bbox_to_anchor=(1.01, 1.0), fontsize=6, framealpha=0.9,
        )

    fig.tight_layout(pad=1.5)
    return {}
