"""
Colour → make Sankey diagram for Chartboard.

Source nodes (canonical car colours) on the left, target nodes (makes)
on the right, with one band per observed colour/make pair whose
thickness is proportional to the number of cars.
"""

from matplotlib.colors import to_rgb
from matplotlib.figure import Figure
from matplotlib.patches import PathPatch, Rectangle
from matplotlib.path import Path

from .aggregator import field_key, sankey_graph
from .constants import (
    CAR_COLOR_HEX, CATEGORY_CYCLE, DARK_COLORS, EXPORT_TEXT_COLOR,
    SANKEY_NODE_PAD,
)
from .data_model import ChartData
from .layout import sankey_layout


_NODE_WIDTH = 0.04


def contrasting_text_color(color: str) -> str:
    """Black for light fills, white for dark ones (perceived brightness)."""
    r, g, b = (c * 255 for c in to_rgb(color))
    brightness = r * 0.299 + g * 0.587 + b * 0.114
    return '#000000' if brightness > 140 else '#ffffff'


def prepare_sankey(records, options=None) -> ChartData:
    return ChartData(
        kind='sankey',
        title='Car Colors Flowing to Makes',
        payload=sankey_graph(records, field_key('color'), field_key('make')),
    )


def _band(x0, x1, y0_top, y0_bot, y1_top, y1_bot) -> Path:
    """Closed cubic-Bezier band between two vertical intervals."""
    xm = (x0 + x1) / 2.0
    verts = [
        (x0, y0_top),
        (xm, y0_top), (xm, y1_top), (x1, y1_top),
        (x1, y1_bot),
        (xm, y1_bot), (xm, y0_bot), (x0, y0_bot),
        (x0, y0_top),
    ]
    codes = [
        Path.MOVETO,
        Path.CURVE4, Path.CURVE4, Path.CURVE4,
        Path.LINETO,
        Path.CURVE4, Path.CURVE4, Path.CURVE4,
        Path.CLOSEPOLY,
    ]
    return Path(verts, codes)


def render_sankey(
    fig: Figure,
    data: ChartData,
    *,
    for_export: bool = False,
) -> dict:
    """Render the Sankey diagram on *fig*."""
    fig.clf()
    ax = fig.add_subplot(111)

    if data.is_empty:
        ax.text(0.5, 0.5, 'No valid data points',
                transform=ax.transAxes, ha='center', va='center')
        return {}

    layout = sankey_layout(data.payload, height=1.0, node_pad=SANKEY_NODE_PAD)

    node_colors = []
    for i, node in enumerate(layout.nodes):
        if node.column == 0:
            color = CAR_COLOR_HEX.get(node.name, CATEGORY_CYCLE[i % len(CATEGORY_CYCLE)])
        else:
            color = '#9399b2'
        node_colors.append(color)

    # ── Links ────────────────────────────────────────────────────────
    x_left = _NODE_WIDTH
    x_right = 1.0 - _NODE_WIDTH
    for link in layout.links:
        path = _band(
            x_left, x_right,
            link.source_y0, link.source_y1,
            link.target_y0, link.target_y1,
        )
        ax.add_patch(PathPatch(
            path, facecolor=node_colors[link.source], edgecolor='none',
            alpha=0.4, zorder=2,
        ))

    # ── Nodes and labels ─────────────────────────────────────────────
    text_color = EXPORT_TEXT_COLOR if for_export else DARK_COLORS['fg']
    for node, color in zip(layout.nodes, node_colors):
        x = 0.0 if node.column == 0 else x_right
        ax.add_patch(Rectangle(
            (x, node.y0), _NODE_WIDTH, node.y1 - node.y0,
            facecolor=color, edgecolor='#555555', linewidth=0.4, zorder=3,
        ))
        y_mid = (node.y0 + node.y1) / 2.0
        if node.y1 - node.y0 > 0.05:
            ax.text(x + _NODE_WIDTH / 2.0, y_mid, str(node.value),
                    ha='center', va='center', rotation=90, fontsize=5,
                    color=contrasting_text_color(color), zorder=4)
        if node.column == 0:
            ax.text(-0.01, y_mid, node.name, ha='right', va='center',
                    fontsize=6, color=text_color)
        else:
            ax.text(1.01, y_mid, f"{node.name} ({node.value})",
                    ha='left', va='center', fontsize=6, color=text_color)

    ax.set_xlim(-0.15, 1.15)
    ax.set_ylim(1.0 + SANKEY_NODE_PAD, -SANKEY_NODE_PAD)
    ax.axis('off')
    ax.set_title(data.title, fontsize=10, fontweight='bold')

    fig.tight_layout(pad=1.5)
    return {}
