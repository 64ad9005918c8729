# Path: report_mailer/output/charts.py
"""
Chart Rasterization

Draws a ChartSection as a PNG image with matplotlib.

Determinism:
    Figures are built on the Agg canvas (no pyplot global state), with a
    fixed size and DPI, and saved without the PNG 'Software' metadata
    entry, so the same section always yields the same bytes.

Layout:
    Bar    - grouped bars, one group per category
    Line   - one line per series over the categories
    Pizza  - one pie per series, wedges labelled by category
"""

import io
from typing import Optional, Sequence

from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure

from ..config_loader import ConfigLoader
from ..exceptions import RenderError
from ..process.models import ChartKind
from .report_models import ChartSection, NamedSeries


BAR_GROUP_WIDTH = 0.8
PNG_METADATA = {'Software': None}


def _floats(named: NamedSeries) -> list:
    return [float(value) for value in named.values]


def _draw_bar(figure: Figure, title: str, categories: Sequence[str], series: Sequence[NamedSeries]) -> None:
    ax = figure.add_subplot(1, 1, 1)
    positions = list(range(len(categories)))
    width = BAR_GROUP_WIDTH / max(len(series), 1)
    offset = -BAR_GROUP_WIDTH / 2 + width / 2
    for number, named in enumerate(series):
        shifted = [x + offset + number * width for x in positions]
        ax.bar(shifted, _floats(named), width=width, label=named.name)
    ax.set_xticks(positions)
    ax.set_xticklabels(categories)
    ax.set_title(title)
    if series:
        ax.legend()


def _draw_line(figure: Figure, title: str, categories: Sequence[str], series: Sequence[NamedSeries]) -> None:
    ax = figure.add_subplot(1, 1, 1)
    positions = list(range(len(categories)))
    for named in series:
        ax.plot(positions, _floats(named), marker='o', label=named.name)
    ax.set_xticks(positions)
    ax.set_xticklabels(categories)
    ax.set_title(title)
    if series:
        ax.legend()


def _draw_pizza(figure: Figure, title: str, categories: Sequence[str], series: Sequence[NamedSeries]) -> None:
    figure.suptitle(title)
    count = max(len(series), 1)
    for number, named in enumerate(series, start=1):
        ax = figure.add_subplot(1, count, number)
        values = _floats(named)
        if any(value < 0 for value in values):
            raise RenderError(f"Pie series '{named.name}' has negative values")
        ax.set_title(named.name)
        if sum(values) > 0:
            ax.pie(values, labels=list(categories), autopct='%1.1f%%', startangle=90)
        else:
            ax.text(0.5, 0.5, 'no data', ha='center', va='center')
            ax.set_axis_off()
        ax.set_aspect('equal')


_DRAWERS = {
    ChartKind.BAR: _draw_bar,
    ChartKind.LINE: _draw_line,
    ChartKind.PIZZA: _draw_pizza,
}


def render_chart(
    kind: ChartKind,
    title: str,
    categories: Sequence[str],
    series: Sequence[NamedSeries],
    config: Optional[ConfigLoader] = None,
) -> bytes:
    """
    Rasterize chart data to PNG.

    Args:
        kind: Bar, Line or Pizza
        title: Chart title
        categories: Category labels
        series: Series aligned with categories
        config: ConfigLoader for figure size/DPI (creates one if not provided)

    Returns:
        PNG image bytes

    Raises:
        RenderError: If the data cannot be drawn
    """
    config = config or ConfigLoader()
    figure = Figure(
        figsize=(config.get('chart_width'), config.get('chart_height')),
        dpi=config.get('chart_dpi'),
    )
    FigureCanvasAgg(figure)

    try:
        _DRAWERS[ChartKind(kind)](figure, title, categories, series)
        figure.tight_layout()
        buffer = io.BytesIO()
        figure.savefig(buffer, format='png', metadata=PNG_METADATA)
    except RenderError:
        raise
    except (ValueError, TypeError, ArithmeticError, RuntimeError) as e:
        raise RenderError(f"Cannot draw {ChartKind(kind).value} chart '{title}': {e}") from e

    return buffer.getvalue()


def render_section(section: ChartSection, config: Optional[ConfigLoader] = None) -> bytes:
    """Rasterize a ChartSection."""
    return render_chart(section.kind, section.title, section.categories, section.series, config)


__all__ = ['render_chart', 'render_section']
