"""
Chartboard v1.0.0

Interactive dataset explorer for the used-car sales, financial-risk
and student mental-health coursework datasets.  Generates ranked bar
charts, heatmaps, stream graphs, scatter plots, box plots, histograms,
parallel-coordinate plots and a Sankey diagram.

Each chart reads its CSV through one parameterised pipeline
(load → coerce → normalise → aggregate) and is redrawn in full on
every data, selection or size change.
"""

APP_NAME = "Chartboard"
APP_VERSION = "1.0.0"
APP_DATE = "2026-10-17"
__version__ = APP_VERSION
