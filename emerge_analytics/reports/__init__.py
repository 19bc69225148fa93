"""
Reports package for the error-pattern analytics system.

Writes analysis reports to JSON, CSV and PDF files.
"""

from .report_exporter import ReportExporter, build_report_tables

__all__ = ["ReportExporter", "build_report_tables"]
