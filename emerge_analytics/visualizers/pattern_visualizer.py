"""
Pattern visualization module for the error-pattern analytics system.

This module provides visualization capabilities for pattern analysis
results: how often the top error patterns occur and which way they are
trending, which groups share the widespread patterns, and how effective
corrections are within each curriculum.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.figure import Figure
from matplotlib.patches import Patch

from emerge_analytics.data.models import (
    AnalysisReport,
    CrossGroupPattern,
    Curriculum,
    CurriculumInsight,
    PatternInsight,
    Trend,
)
from emerge_analytics.utils.safe_ops import truncate_text
from emerge_analytics.utils.visualization_utils import (
    TREND_COLORS,
    add_reference_line,
    create_figure,
    generate_filename,
    get_curriculum_colors,
    plot_stacked_bars,
    save_figure,
    show_no_data,
    wrap_labels,
)

# Effectiveness below this line is flagged in the curriculum chart
EFFECTIVENESS_TARGET = 50


class PatternVisualizer:
    """
    Visualizer for error-pattern analysis reports.

    Each chart method builds a figure from report data, saves it when a
    filename is given and returns the figure to the caller.
    """

    def __init__(
        self,
        output_dir: Union[str, Path] = "pattern_visualizations",
        theme: str = "default",
        formats: Optional[List[str]] = None,
    ):
        """
        Initialize the pattern visualizer.

        Args:
            output_dir: Directory charts are saved to
            theme: Theme name (default, dark, print)
            formats: File formats to save (default: png)
        """
        self._logger = logging.getLogger(self.__class__.__name__)
        self._output_dir = Path(output_dir)
        self._theme = theme
        self._formats = formats or ["png"]

        # Set default figure parameters
        self._default_figsize = (10, 6)
        self._default_dpi = 100

    def visualize_top_patterns(
        self,
        patterns: Sequence[PatternInsight],
        output_filename: Optional[str] = None,
    ) -> Figure:
        """
        Horizontal bars of occurrence counts, colored by trend.

        Bars keep the ranking order, most frequent at the top, and carry the
        pattern's correction effectiveness as a label.

        Args:
            patterns: Ranked pattern insights
            output_filename: Optional filename for saving the chart

        Returns:
            Figure: Matplotlib figure
        """
        fig, ax = create_figure(*self._default_figsize, dpi=self._default_dpi, theme=self._theme)
        ax.set_title("Top Error Patterns")

        if not patterns:
            show_no_data(ax, "No error patterns recorded")
        else:
            labels = [truncate_text(p.error_pattern, 40) for p in patterns]
            counts = np.array([p.occurrence_count for p in patterns])
            y_positions = np.arange(len(patterns))

            bars = ax.barh(
                y_positions,
                counts,
                color=[TREND_COLORS[p.trend.value] for p in patterns],
                alpha=0.85,
                zorder=3,
            )
            for bar, pattern in zip(bars, patterns):
                ax.text(
                    bar.get_width(),
                    bar.get_y() + bar.get_height() / 2,
                    f" {pattern.effectiveness_rate}% effective",
                    va="center",
                    fontsize=8,
                )

            ax.set_yticks(y_positions, labels)
            ax.invert_yaxis()
            ax.set_xlabel("Occurrences")
            wrap_labels(ax, which="y", max_length=30)

            # Legend entries only for trends that appear
            handles = [
                Patch(color=TREND_COLORS[trend.value], label=trend.value.title())
                for trend in Trend
                if any(p.trend == trend for p in patterns)
            ]
            ax.legend(handles=handles, title="Trend", loc="lower right")

        self._save(fig, output_filename)
        return fig

    def visualize_cross_group_patterns(
        self,
        cross_patterns: Sequence[CrossGroupPattern],
        output_filename: Optional[str] = None,
    ) -> Figure:
        """
        Stacked bars of each widespread pattern's occurrences per group.

        Args:
            cross_patterns: Ranked cross-group patterns
            output_filename: Optional filename for saving the chart

        Returns:
            Figure: Matplotlib figure
        """
        fig, ax = create_figure(*self._default_figsize, dpi=self._default_dpi, theme=self._theme)
        ax.set_title("Error Patterns Shared Across Groups")

        data: Dict[str, Dict[str, int]] = {}
        for cross in cross_patterns:
            label = truncate_text(cross.pattern, 35)
            data[label] = {group.group_name: group.occurrences for group in cross.groups}

        plot_stacked_bars(ax, data, legend_title="Group")
        if data:
            ax.set_ylabel("Occurrences")
            wrap_labels(ax, which="x", max_length=15)

        self._save(fig, output_filename)
        return fig

    def visualize_curriculum_effectiveness(
        self,
        insights: Sequence[CurriculumInsight],
        output_filename: Optional[str] = None,
    ) -> Figure:
        """
        Bars of average correction effectiveness per curriculum.

        Args:
            insights: Curriculum insights
            output_filename: Optional filename for saving the chart

        Returns:
            Figure: Matplotlib figure
        """
        fig, ax = create_figure(*self._default_figsize, dpi=self._default_dpi, theme=self._theme)
        ax.set_title("Correction Effectiveness by Curriculum")

        if not insights:
            show_no_data(ax, "No curriculum data recorded")
        else:
            labels = [Curriculum.get_label(insight.curriculum) for insight in insights]
            values = np.array([insight.avg_effectiveness for insight in insights])
            colors = get_curriculum_colors([insight.curriculum.value for insight in insights])
            x_positions = np.arange(len(insights))

            bars = ax.bar(x_positions, values, color=colors, alpha=0.85, zorder=3)
            for bar, insight in zip(bars, insights):
                ax.text(
                    bar.get_x() + bar.get_width() / 2,
                    bar.get_height(),
                    f"{insight.avg_effectiveness}%\n({insight.total_errors} errors)",
                    ha="center",
                    va="bottom",
                    fontsize=8,
                )

            ax.set_xticks(x_positions, labels)
            ax.set_ylim(0, 110)
            ax.set_ylabel("Correction effectiveness (%)")
            add_reference_line(ax, EFFECTIVENESS_TARGET, label=f"{EFFECTIVENESS_TARGET}% target")
            wrap_labels(ax, which="x", max_length=15)

        self._save(fig, output_filename)
        return fig

    def create_report_charts(self, report: AnalysisReport) -> Dict[str, List[str]]:
        """
        Save every chart for a report and release the figures.

        Args:
            report: Full analysis report

        Returns:
            Dict[str, List[str]]: Chart name -> saved file paths
        """
        charts = {
            "top_error_patterns": (
                self.visualize_top_patterns,
                report.top_error_patterns,
            ),
            "cross_group_patterns": (
                self.visualize_cross_group_patterns,
                report.cross_group_patterns,
            ),
            "curriculum_effectiveness": (
                self.visualize_curriculum_effectiveness,
                report.curriculum_insights,
            ),
        }

        saved: Dict[str, List[str]] = {}
        for name, (draw, data) in charts.items():
            fig = draw(data)
            saved[name] = self._save(fig, name)
            plt.close(fig)

        self._logger.info(f"Saved {len(saved)} charts to {self._output_dir}")
        return saved

    def _save(self, fig: Figure, output_filename: Optional[str]) -> List[str]:
        if not output_filename:
            return []
        return save_figure(
            fig,
            generate_filename(output_filename),
            directory=self._output_dir,
            formats=self._formats,
        )
