import matplotlib.pyplot as plt
import pytest

from emerge_analytics.utils.visualization_utils import (
    TREND_COLORS,
    generate_filename,
    get_color_palette,
    get_curriculum_colors,
)
from emerge_analytics.visualizers import PatternVisualizer


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")


def test_top_patterns_chart_keeps_ranking_order(sample_report, tmp_path):
    visualizer = PatternVisualizer(output_dir=tmp_path)

    fig = visualizer.visualize_top_patterns(sample_report.top_error_patterns)

    ax = fig.axes[0]
    assert [bar.get_width() for bar in ax.patches] == [12, 8]
    legend_labels = [text.get_text() for text in ax.get_legend().get_texts()]
    assert legend_labels == ["Improving", "Declining"]
    assert list(tmp_path.iterdir()) == []


def test_empty_charts_show_placeholder(tmp_path):
    visualizer = PatternVisualizer(output_dir=tmp_path, theme="print")

    for draw in (
        visualizer.visualize_top_patterns,
        visualizer.visualize_cross_group_patterns,
        visualizer.visualize_curriculum_effectiveness,
    ):
        fig = draw([])
        texts = [text.get_text() for text in fig.axes[0].texts]
        assert any(text.startswith("No ") for text in texts)


def test_cross_group_chart_stacks_groups(sample_report, tmp_path):
    visualizer = PatternVisualizer(output_dir=tmp_path)

    fig = visualizer.visualize_cross_group_patterns(sample_report.cross_group_patterns)

    heights = [bar.get_height() for bar in fig.axes[0].patches]
    assert heights == [5, 2]


def test_create_report_charts_saves_every_chart(sample_report, tmp_path):
    visualizer = PatternVisualizer(output_dir=tmp_path / "charts", theme="dark", formats=["png", "svg"])

    saved = visualizer.create_report_charts(sample_report)

    assert list(saved) == [
        "top_error_patterns",
        "cross_group_patterns",
        "curriculum_effectiveness",
    ]
    files = sorted(p.name for p in (tmp_path / "charts").iterdir())
    assert "curriculum_effectiveness.png" in files
    assert "top_error_patterns.svg" in files
    assert len(files) == 6


def test_palette_and_filename_helpers():
    assert len(get_color_palette(12)) == 12
    assert set(TREND_COLORS) == {"improving", "declining", "stable"}
    assert get_curriculum_colors(["wilson", "unknown"])[1] == TREND_COLORS["stable"]
    assert generate_filename("b/d chart", prefix="week 1") == "week_1_b_d_chart"
