"""
Chart catalogue for Chartboard.

Each ``ChartDefinition`` names the dataset a chart reads, the columns
it projects, the vocabularies that canonicalise its categories, and the
prepare/render pair that turns records into a figure.  The GUI tabs,
the batch exporter and the tests all iterate ``CHARTS``.
"""

from dataclasses import dataclass
from typing import Callable, Tuple

from .chart_bar import prepare_bar, render_bar
from .chart_box import prepare_box, render_box
from .chart_heatmap import prepare_heatmap, render_heatmap
from .chart_histogram import prepare_histogram, render_histogram
from .chart_parallel import (
    prepare_car_parallel, prepare_financial_parallel,
    prepare_mental_health_parallel, render_parallel,
)
from .chart_sankey import prepare_sankey, render_sankey
from .chart_scatter import prepare_scatter, render_scatter
from .chart_stream import (
    prepare_color_stream, prepare_transmission_stream, render_stream,
)
from .constants import (
    COL_ANXIETY, COL_BODY, COL_CGPA, COL_COLOR, COL_CONDITION,
    COL_CREDIT_SCORE, COL_DEPRESSION, COL_EDUCATION, COL_INCOME,
    COL_LOAN_AMOUNT, COL_MAKE, COL_ODOMETER, COL_PANIC_ATTACK,
    COL_RISK_RATING, COL_SELLING_PRICE, COL_TRANSMISSION, COL_TREATMENT,
    COL_YEAR, DATASET_CARS, DATASET_FINANCIAL, DATASET_MENTAL_HEALTH,
)
from .data_model import FieldMap
from .normalizer import (
    CGPA_VOCABULARY, COLOR_VOCABULARY, EDUCATION_VOCABULARY,
    RISK_VOCABULARY, TRANSMISSION_VOCABULARY, YES_NO_VOCABULARY,
)
from .pipeline import PipelineSpec


@dataclass(frozen=True)
class ChartDefinition:
    """One chart: pipeline parameters plus its prepare/render pair.

    ``selection_role`` is ``"producer"`` for the chart whose clicks set
    the shared selection, ``"consumer"`` for charts filtered by it, and
    ``""`` otherwise.
    """
    key: str
    tab_label: str
    spec: PipelineSpec
    prepare: Callable
    render: Callable
    figsize: Tuple[float, float] = (7, 5)
    selection_role: str = ""


CHARTS = (
    ChartDefinition(
        key='bar',
        tab_label='Price by Color',
        spec=PipelineSpec(
            dataset=DATASET_CARS,
            field_map=FieldMap(
                categorical={'color': COL_COLOR},
                numeric={'price': COL_SELLING_PRICE},
            ),
            vocabularies=(('color', COLOR_VOCABULARY),),
        ),
        prepare=prepare_bar,
        render=render_bar,
        figsize=(6, 5),
        selection_role='producer',
    ),
    ChartDefinition(
        key='heatmap',
        tab_label='Make × Body Heatmap',
        spec=PipelineSpec(
            dataset=DATASET_CARS,
            field_map=FieldMap(
                categorical={'make': COL_MAKE, 'body': COL_BODY},
                optional={'color': COL_COLOR},
            ),
            vocabularies=(('color', COLOR_VOCABULARY),),
        ),
        prepare=prepare_heatmap,
        render=render_heatmap,
        figsize=(8, 5),
        selection_role='consumer',
    ),
    ChartDefinition(
        key='color_stream',
        tab_label='Color Stream',
        spec=PipelineSpec(
            dataset=DATASET_CARS,
            field_map=FieldMap(
                categorical={'color': COL_COLOR},
                numeric={'year': COL_YEAR},
            ),
            vocabularies=(('color', COLOR_VOCABULARY),),
        ),
        prepare=prepare_color_stream,
        render=render_stream,
        figsize=(8, 4),
    ),
    ChartDefinition(
        key='transmission_stream',
        tab_label='Transmission Stream',
        spec=PipelineSpec(
            dataset=DATASET_CARS,
            field_map=FieldMap(
                categorical={'transmission': COL_TRANSMISSION},
                numeric={'year': COL_YEAR},
            ),
            vocabularies=(('transmission', TRANSMISSION_VOCABULARY),),
        ),
        prepare=prepare_transmission_stream,
        render=render_stream,
        figsize=(8, 4),
    ),
    ChartDefinition(
        key='scatter',
        tab_label='Year vs Price',
        spec=PipelineSpec(
            dataset=DATASET_CARS,
            field_map=FieldMap(numeric={
                'year': COL_YEAR, 'price': COL_SELLING_PRICE,
            }),
        ),
        prepare=prepare_scatter,
        render=render_scatter,
        figsize=(6, 5),
    ),
    ChartDefinition(
        key='box',
        tab_label='Price Box Plot',
        spec=PipelineSpec(
            dataset=DATASET_CARS,
            field_map=FieldMap(
                categorical={'color': COL_COLOR},
                numeric={'price': COL_SELLING_PRICE},
            ),
            vocabularies=(('color', COLOR_VOCABULARY),),
        ),
        prepare=prepare_box,
        render=render_box,
        figsize=(7, 5),
    ),
    ChartDefinition(
        key='car_parallel',
        tab_label='Car Parallel',
        spec=PipelineSpec(
            dataset=DATASET_CARS,
            field_map=FieldMap(
                categorical={'transmission': COL_TRANSMISSION},
                numeric={
                    'condition': COL_CONDITION,
                    'odometer': COL_ODOMETER,
                    'price': COL_SELLING_PRICE,
                },
            ),
            vocabularies=(('transmission', TRANSMISSION_VOCABULARY),),
        ),
        prepare=prepare_car_parallel,
        render=render_parallel,
        figsize=(8, 5),
    ),
    ChartDefinition(
        key='sankey',
        tab_label='Color → Make',
        spec=PipelineSpec(
            dataset=DATASET_CARS,
            field_map=FieldMap(categorical={
                'color': COL_COLOR, 'make': COL_MAKE,
            }),
            vocabularies=(('color', COLOR_VOCABULARY),),
        ),
        prepare=prepare_sankey,
        render=render_sankey,
        figsize=(7, 7),
    ),
    ChartDefinition(
        key='income_histogram',
        tab_label='Income Histogram',
        spec=PipelineSpec(
            dataset=DATASET_FINANCIAL,
            field_map=FieldMap(
                categorical={'education': COL_EDUCATION},
                numeric={'income': COL_INCOME},
            ),
            vocabularies=(('education', EDUCATION_VOCABULARY),),
        ),
        prepare=prepare_histogram,
        render=render_histogram,
        figsize=(7, 6),
    ),
    ChartDefinition(
        key='financial_parallel',
        tab_label='Financial Parallel',
        spec=PipelineSpec(
            dataset=DATASET_FINANCIAL,
            field_map=FieldMap(
                categorical={
                    'education': COL_EDUCATION, 'risk': COL_RISK_RATING,
                },
                numeric={
                    'loan_amount': COL_LOAN_AMOUNT,
                    'credit_score': COL_CREDIT_SCORE,
                    'income': COL_INCOME,
                },
            ),
            vocabularies=(
                ('education', EDUCATION_VOCABULARY),
                ('risk', RISK_VOCABULARY),
            ),
        ),
        prepare=prepare_financial_parallel,
        render=render_parallel,
        figsize=(8, 5),
    ),
    ChartDefinition(
        key='mental_health_parallel',
        tab_label='Mental Health Parallel',
        spec=PipelineSpec(
            dataset=DATASET_MENTAL_HEALTH,
            field_map=FieldMap(categorical={
                'depression': COL_DEPRESSION,
                'anxiety': COL_ANXIETY,
                'panic_attack': COL_PANIC_ATTACK,
                'treatment': COL_TREATMENT,
                'cgpa': COL_CGPA,
            }),
            vocabularies=(
                ('depression', YES_NO_VOCABULARY),
                ('anxiety', YES_NO_VOCABULARY),
                ('panic_attack', YES_NO_VOCABULARY),
                ('treatment', YES_NO_VOCABULARY),
                ('cgpa', CGPA_VOCABULARY),
            ),
        ),
        prepare=prepare_mental_health_parallel,
        render=render_parallel,
        figsize=(8, 5),
    ),
)


def get_chart(key: str) -> ChartDefinition:
    """Look up a chart definition by key."""
    for chart in CHARTS:
        if chart.key == key:
            return chart
    raise KeyError(f"Unknown chart: {key!r}")


def charts_for_dataset(dataset: str) -> Tuple[ChartDefinition, ...]:
    return tuple(c for c in CHARTS if c.spec.dataset == dataset)
