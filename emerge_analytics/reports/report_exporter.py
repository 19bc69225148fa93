"""
Report export for the error-pattern analytics system.

This module provides the ReportExporter class, which writes an analysis
report to disk as a JSON document, as one CSV file per report table, or as
a printable multi-page PDF.
"""

import json
import logging
import textwrap
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

import matplotlib.pyplot as plt
import pandas as pd
from matplotlib.backends.backend_pdf import PdfPages
from matplotlib.figure import Figure

from emerge_analytics.data.models import AnalysisReport, Curriculum
from emerge_analytics.utils.safe_ops import truncate_text

# Cell widths for the PDF tables
PATTERN_TEXT_WIDTH = 40
CROSS_PATTERN_TEXT_WIDTH = 35
INTERVENTION_TEXT_WIDTH = 50

# US letter, portrait
PAGE_SIZE = (8.5, 11)

SUPPORTED_FORMATS = ("json", "csv", "pdf")


def build_report_tables(report: AnalysisReport) -> Dict[str, pd.DataFrame]:
    """
    Flatten a report into one DataFrame per table.

    Cross-group patterns get one row per pattern and group. Student error
    patterns are joined into a single cell.

    Args:
        report: Analysis report

    Returns:
        Dict[str, pd.DataFrame]: Table name -> rows
    """
    patterns = pd.DataFrame(
        [insight.model_dump(mode="json") for insight in report.top_error_patterns],
        columns=[
            "error_pattern",
            "curriculum",
            "occurrence_count",
            "effectiveness_count",
            "effectiveness_rate",
            "groups_affected",
            "students_affected",
            "correction_protocol",
            "trend",
        ],
    )

    curricula = pd.DataFrame(
        [insight.model_dump(mode="json") for insight in report.curriculum_insights],
        columns=[
            "curriculum",
            "total_errors",
            "unique_patterns",
            "avg_effectiveness",
            "most_common_error",
            "least_effective_error",
        ],
    )

    cross_rows = [
        {
            "pattern": cross.pattern,
            "group_id": group.group_id,
            "group_name": group.group_name,
            "occurrences": group.occurrences,
            "total_occurrences": cross.total_occurrences,
            "suggested_intervention": cross.suggested_intervention,
        }
        for cross in report.cross_group_patterns
        for group in cross.groups
    ]
    cross_groups = pd.DataFrame(
        cross_rows,
        columns=[
            "pattern",
            "group_id",
            "group_name",
            "occurrences",
            "total_occurrences",
            "suggested_intervention",
        ],
    )

    profile_rows = []
    for profile in report.student_profiles:
        row = profile.model_dump(mode="json")
        row["error_patterns"] = "; ".join(profile.error_patterns)
        profile_rows.append(row)
    profiles = pd.DataFrame(
        profile_rows,
        columns=[
            "student_id",
            "student_name",
            "group_id",
            "group_name",
            "error_patterns",
            "total_errors",
            "correction_success_rate",
        ],
    )

    return {
        "top_error_patterns": patterns,
        "curriculum_insights": curricula,
        "cross_group_patterns": cross_groups,
        "student_profiles": profiles,
    }


class ReportExporter:
    """
    Exporter for pattern analysis reports.

    Files are written into a single output directory, which is created on
    first write.
    """

    def __init__(self, output_dir: Union[str, Path], base_name: str = "pattern-analysis-report"):
        """
        Initialize the report exporter.

        Args:
            output_dir: Directory exported files are written to
            base_name: File name stem shared by every exported file
        """
        self._logger = logging.getLogger(self.__class__.__name__)
        self._output_dir = Path(output_dir)
        self._base_name = base_name

    def export(self, report: AnalysisReport, formats: Sequence[str]) -> Dict[str, List[Path]]:
        """
        Export a report in several formats.

        Args:
            report: Analysis report
            formats: Any of "json", "csv" and "pdf"

        Returns:
            Dict[str, List[Path]]: Format -> written files

        Raises:
            ValueError: If a format is not supported
        """
        unsupported = [fmt for fmt in formats if fmt not in SUPPORTED_FORMATS]
        if unsupported:
            raise ValueError(
                f"Unsupported export format(s): {', '.join(unsupported)}; "
                f"choose from {', '.join(SUPPORTED_FORMATS)}"
            )

        written: Dict[str, List[Path]] = {}
        for fmt in formats:
            if fmt == "json":
                written[fmt] = [self.to_json(report)]
            elif fmt == "csv":
                written[fmt] = list(self.to_csv(report).values())
            else:
                written[fmt] = [self.to_pdf(report)]
        return written

    def to_json(self, report: AnalysisReport) -> Path:
        """
        Write the report as JSON with camelCase field names.

        Args:
            report: Analysis report

        Returns:
            Path: Written file
        """
        file_path = self._prepare_path(f"{self._base_name}.json")
        with open(file_path, "w", encoding="utf-8") as f:
            json.dump(report.to_dict(), f, indent=2, default=str)

        self._logger.info(f"Exported report JSON to {file_path}")
        return file_path

    def to_csv(self, report: AnalysisReport) -> Dict[str, Path]:
        """
        Write each report table to its own CSV file.

        Args:
            report: Analysis report

        Returns:
            Dict[str, Path]: Table name -> written file
        """
        written = {}
        for table_name, frame in build_report_tables(report).items():
            file_path = self._prepare_path(f"{self._base_name}_{table_name}.csv")
            frame.to_csv(file_path, index=False)
            written[table_name] = file_path

        self._logger.info(f"Exported {len(written)} report tables to {self._output_dir}")
        return written

    def to_pdf(self, report: AnalysisReport, generated_at: Optional[datetime] = None) -> Path:
        """
        Write a printable PDF of the report.

        The first page holds the summary and recommendations, followed by a
        page for the top error patterns and one for the cross-group
        patterns when either table has rows.

        Args:
            report: Analysis report
            generated_at: Timestamp printed in the header (default: now)

        Returns:
            Path: Written file
        """
        generated_at = generated_at or datetime.now()
        file_path = self._prepare_path(f"{self._base_name}.pdf")

        pages = [self._summary_page(report, generated_at)]
        if report.top_error_patterns:
            pages.append(self._top_patterns_page(report))
        if report.cross_group_patterns:
            pages.append(self._cross_group_page(report))

        with PdfPages(file_path) as pdf:
            for page_number, fig in enumerate(pages, start=1):
                fig.text(0.08, 0.03, "EMERGE Intervention Planner", fontsize=8, color="#6B7280")
                fig.text(
                    0.92,
                    0.03,
                    f"Page {page_number} of {len(pages)}",
                    fontsize=8,
                    color="#6B7280",
                    ha="right",
                )
                pdf.savefig(fig)
                plt.close(fig)

            info = pdf.infodict()
            info["Title"] = "Cross-Group Pattern Analysis"
            info["CreationDate"] = generated_at

        self._logger.info(f"Exported report PDF ({len(pages)} pages) to {file_path}")
        return file_path

    def _prepare_path(self, filename: str) -> Path:
        self._output_dir.mkdir(parents=True, exist_ok=True)
        return self._output_dir / filename

    def _new_page(self, title: str, subtitle: Optional[str] = None) -> Figure:
        fig = plt.figure(figsize=PAGE_SIZE)
        fig.text(0.08, 0.95, title, fontsize=16, weight="bold", color="#1F2937")
        if subtitle:
            fig.text(0.08, 0.925, subtitle, fontsize=10, color="#6B7280")
        return fig

    def _summary_page(self, report: AnalysisReport, generated_at: datetime) -> Figure:
        fig = self._new_page(
            "Cross-Group Pattern Analysis",
            "Error patterns and intervention recommendations",
        )
        fig.text(
            0.92,
            0.95,
            f"Generated: {generated_at.strftime('%Y-%m-%d %H:%M')}",
            fontsize=8,
            color="#6B7280",
            ha="right",
        )

        summary = report.summary
        rows = [
            ["Total Groups", str(summary.total_groups)],
            ["Total Students", str(summary.total_students)],
            ["Total Errors", str(summary.total_errors)],
            ["Avg Effectiveness", f"{summary.avg_effectiveness}%"],
            ["Sessions Analyzed", str(summary.analyzed_sessions)],
        ]
        ax = fig.add_axes([0.08, 0.7, 0.5, 0.18])
        ax.axis("off")
        ax.set_title("Summary", loc="left", fontsize=12)
        table = ax.table(cellText=rows, cellLoc="left", loc="upper left", edges="open")
        table.auto_set_font_size(False)
        table.set_fontsize(10)

        y = 0.64
        fig.text(0.08, y, "Recommendations", fontsize=12)
        y -= 0.03
        for index, recommendation in enumerate(report.recommendations, start=1):
            lines = textwrap.wrap(f"{index}. {recommendation}", width=95)
            fig.text(0.08, y, "\n".join(lines), fontsize=9, va="top")
            y -= 0.018 * len(lines) + 0.01
        return fig

    def _top_patterns_page(self, report: AnalysisReport) -> Figure:
        fig = self._new_page("Top Error Patterns")
        rows = [
            [
                truncate_text(insight.error_pattern, PATTERN_TEXT_WIDTH),
                Curriculum.get_label(insight.curriculum),
                str(insight.occurrence_count),
                f"{insight.effectiveness_rate}%",
                insight.trend.value,
            ]
            for insight in report.top_error_patterns
        ]
        self._draw_table(
            fig,
            rows,
            ["Error Pattern", "Curriculum", "Occurrences", "Effectiveness", "Trend"],
            header_color="#F59E0B",
            col_widths=[0.4, 0.22, 0.13, 0.13, 0.12],
        )
        return fig

    def _cross_group_page(self, report: AnalysisReport) -> Figure:
        fig = self._new_page("Cross-Group Patterns")
        rows = [
            [
                truncate_text(cross.pattern, CROSS_PATTERN_TEXT_WIDTH),
                str(len(cross.groups)),
                str(cross.total_occurrences),
                truncate_text(cross.suggested_intervention, INTERVENTION_TEXT_WIDTH),
            ]
            for cross in report.cross_group_patterns
        ]
        self._draw_table(
            fig,
            rows,
            ["Pattern", "Groups", "Total", "Suggested Intervention"],
            header_color="#EF4444",
            col_widths=[0.32, 0.08, 0.08, 0.52],
        )
        return fig

    def _draw_table(
        self,
        fig: Figure,
        rows: List[List[str]],
        headers: List[str],
        header_color: str,
        col_widths: List[float],
    ) -> None:
        ax = fig.add_axes([0.05, 0.1, 0.9, 0.8])
        ax.axis("off")
        table = ax.table(
            cellText=rows,
            colLabels=headers,
            colWidths=col_widths,
            cellLoc="left",
            loc="upper center",
        )
        table.auto_set_font_size(False)
        table.set_fontsize(7)
        table.scale(1, 1.4)

        for (row, _), cell in table.get_celld().items():
            if row == 0:
                cell.set_facecolor(header_color)
                cell.get_text().set_color("white")
                cell.get_text().set_weight("bold")
            elif row % 2 == 0:
                cell.set_facecolor("#F3F4F6")
