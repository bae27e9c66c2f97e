"""Unit tests for stream stacking and Sankey geometry."""

from __future__ import annotations

import pytest
from pytest import approx

from chartboard.data_model import SankeyGraph, SankeyLink, SankeyNode, StreamMatrix
from chartboard.layout import OFFSET_SILHOUETTE, OFFSET_ZERO, sankey_layout, stack_layers

pytestmark = pytest.mark.unit

MATRIX = StreamMatrix(
    years=(2001, 2002, 2003),
    series=("white", "black"),
    counts=((2, 4), (0, 3), (5, 1)),
)


def test_zero_offset_stacks_from_zero() -> None:
    """The first layer starts at 0 and the last ends at the column total."""

    layers = stack_layers(MATRIX, OFFSET_ZERO)

    assert layers[0].lower == (0.0, 0.0, 0.0)
    assert layers[0].upper == (2.0, 0.0, 5.0)
    assert layers[1].lower == layers[0].upper
    assert layers[1].upper == (6.0, 3.0, 6.0)
    assert layers[0].x == (2001.0, 2002.0, 2003.0)


def test_silhouette_offset_centres_on_zero() -> None:
    """Silhouette stacking is symmetric around 0 in every column."""

    layers = stack_layers(MATRIX, OFFSET_SILHOUETTE)

    for i in range(len(MATRIX.years)):
        assert layers[0].lower[i] == approx(-layers[-1].upper[i])
    # Thickness is unchanged by the offset
    assert layers[1].upper[0] - layers[1].lower[0] == approx(4.0)


def test_unknown_offset_raises() -> None:
    """Only the two documented offsets are accepted."""

    with pytest.raises(ValueError):
        stack_layers(MATRIX, "wiggle")


def test_empty_matrix_has_no_layers() -> None:
    """No series or no years yields no layers."""

    assert stack_layers(StreamMatrix(years=(), series=(), counts=())) == ()


def _graph():
    return SankeyGraph(
        nodes=(
            SankeyNode("white", 0), SankeyNode("black", 0),
            SankeyNode("Ford", 1), SankeyNode("BMW", 1),
        ),
        links=(
            SankeyLink(0, 2, 3),
            SankeyLink(0, 3, 1),
            SankeyLink(1, 3, 4),
        ),
    )


def test_sankey_nodes_are_proportional_and_fit() -> None:
    """Node heights follow flow values and every column fits the height."""

    layout = sankey_layout(_graph(), height=1.0, node_pad=0.02)

    heights = {n.name: n.y1 - n.y0 for n in layout.nodes}
    assert heights["black"] == approx(heights["white"])
    assert heights["BMW"] == approx(heights["white"] * 5 / 4)
    assert heights["Ford"] == approx(heights["white"] * 3 / 4)
    for node in layout.nodes:
        assert 0.0 <= node.y0 <= node.y1 <= 1.0 + 1e-9


def test_sankey_links_stay_inside_their_nodes() -> None:
    """Each band starts within its source node and ends within its target."""

    layout = sankey_layout(_graph())

    for band in layout.links:
        source = layout.nodes[band.source]
        target = layout.nodes[band.target]
        assert source.y0 - 1e-9 <= band.source_y0 <= band.source_y1 <= source.y1 + 1e-9
        assert target.y0 - 1e-9 <= band.target_y0 <= band.target_y1 <= target.y1 + 1e-9
    # Bands leaving the same node are stacked, not overlapping
    assert layout.links[1].source_y0 == approx(layout.links[0].source_y1)


def test_sankey_empty_graph() -> None:
    """An empty graph lays out to nothing."""

    layout = sankey_layout(SankeyGraph(nodes=(), links=()))

    assert layout.nodes == () and layout.links == ()
