"""
Layout adapter for Chartboard.

Turns aggregates into the geometry matplotlib draws: stacked intervals
for stream graphs and node/link bands for the Sankey diagram.  The
geometry is transient and recomputed on every render pass.
"""

from dataclasses import dataclass
from typing import Dict, List, Tuple

import numpy as np

from .data_model import SankeyGraph, StackLayer, StreamMatrix


OFFSET_ZERO = "zero"
OFFSET_SILHOUETTE = "silhouette"


def stack_layers(
    matrix: StreamMatrix,
    offset: str = OFFSET_ZERO,
) -> Tuple[StackLayer, ...]:
    """Stack the series of *matrix* in series order.

    Parameters
    ----------
    matrix : StreamMatrix
    offset : str
        ``"zero"`` puts the baseline at 0.  ``"silhouette"`` shifts each
        column down by half its total, centring the stream on 0.
    """
    if offset not in (OFFSET_ZERO, OFFSET_SILHOUETTE):
        raise ValueError(f"Unknown stack offset: {offset!r}")
    if not matrix.series or not matrix.years:
        return ()

    counts = np.asarray(matrix.counts, dtype=float)
    upper = np.cumsum(counts, axis=1)
    lower = upper - counts
    if offset == OFFSET_SILHOUETTE:
        shift = upper[:, -1] / 2.0
        lower = lower - shift[:, None]
        upper = upper - shift[:, None]

    x = tuple(float(y) for y in matrix.years)
    return tuple(
        StackLayer(
            key=key,
            x=x,
            lower=tuple(float(v) for v in lower[:, j]),
            upper=tuple(float(v) for v in upper[:, j]),
        )
        for j, key in enumerate(matrix.series)
    )


# ── Sankey ───────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class NodeBox:
    name: str
    column: int
    y0: float
    y1: float
    value: int


@dataclass(frozen=True)
class LinkBand:
    source: int
    target: int
    value: int
    source_y0: float
    source_y1: float
    target_y0: float
    target_y1: float


@dataclass(frozen=True)
class SankeyLayout:
    nodes: Tuple[NodeBox, ...]
    links: Tuple[LinkBand, ...]


def sankey_layout(
    graph: SankeyGraph,
    *,
    height: float = 1.0,
    node_pad: float = 0.02,
) -> SankeyLayout:
    """Two-column Sankey geometry, top to bottom, in *height* units.

    Node height is proportional to its flow.  Both columns share one
    value → height scale, chosen so the fuller column fits *height*
    including padding.  Link bands are stacked inside each node in link
    order.
    """
    n_nodes = len(graph.nodes)
    if n_nodes == 0:
        return SankeyLayout(nodes=(), links=())

    inflow = [0] * n_nodes
    outflow = [0] * n_nodes
    for link in graph.links:
        outflow[link.source] += link.value
        inflow[link.target] += link.value
    value = [max(i, o) for i, o in zip(inflow, outflow)]

    columns: Dict[int, List[int]] = {}
    for idx, node in enumerate(graph.nodes):
        columns.setdefault(node.column, []).append(idx)

    scale = min(
        (height - node_pad * (len(members) - 1)) / max(sum(value[i] for i in members), 1)
        for members in columns.values()
    )
    scale = max(scale, 0.0)

    y0 = [0.0] * n_nodes
    for members in columns.values():
        cursor = 0.0
        for idx in members:
            y0[idx] = cursor
            cursor += value[idx] * scale + node_pad

    nodes = tuple(
        NodeBox(
            name=node.name,
            column=node.column,
            y0=y0[i],
            y1=y0[i] + value[i] * scale,
            value=value[i],
        )
        for i, node in enumerate(graph.nodes)
    )

    source_cursor = list(y0)
    target_cursor = list(y0)
    links = []
    for link in graph.links:
        thickness = link.value * scale
        sy0 = source_cursor[link.source]
        ty0 = target_cursor[link.target]
        source_cursor[link.source] += thickness
        target_cursor[link.target] += thickness
        links.append(LinkBand(
            source=link.source,
            target=link.target,
            value=link.value,
            source_y0=sy0,
            source_y1=sy0 + thickness,
            target_y0=ty0,
            target_y1=ty0 + thickness,
        ))
    return SankeyLayout(nodes=nodes, links=tuple(links))
