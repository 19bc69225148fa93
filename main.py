#!/usr/bin/env python3
"""
EMERGE Error-Pattern Analytics

This script provides the command-line interface for the cross-group
error-pattern analytics engine. It loads exported intervention data, runs
the full pattern analysis or the dashboard summary, and optionally exports
the report and renders charts.
"""

import sys
import json
import logging
import argparse
from pathlib import Path
from datetime import datetime
from typing import Callable, Dict, List, Optional, Sequence

# Import configuration
from config.settings import Settings

# Import coordinating modules
from emerge_analytics.data.data_repository import DataRepository
from emerge_analytics.analyzers import PatternAnalyzer
from emerge_analytics.reports import ReportExporter
from emerge_analytics.visualizers import PatternVisualizer


class AnalysisApp:
    """
    Main application class for the error-pattern analytics system.

    This class coordinates the application workflow:
    - Parsing command line arguments
    - Setting up logging
    - Loading the intervention data snapshot
    - Running the requested analysis
    - Exporting reports and charts
    """

    def __init__(self):
        """Initialize the application."""
        self.args = None
        self.settings = None
        self.logger = None
        self.data_repository = None
        self.analyzer = None

        # Define operations
        self.operations: Dict[str, Callable[[], bool]] = {
            "analyze": self._run_analysis,
            "summary": self._run_summary,
            "data_summary": self._run_data_summary,
        }

    def run(self, argv: Optional[Sequence[str]] = None) -> int:
        """
        Run the application.

        Args:
            argv: Command line arguments (default: sys.argv)

        Returns:
            int: Exit code (0 for success, non-zero for errors)
        """
        try:
            self._parse_arguments(argv)
            self._setup_logging()
            self._load_configuration()

            if not self._initialize_components():
                return 1

            return self._execute_requested_operation()

        except Exception as e:
            if self.logger:
                self.logger.exception(f"Unhandled exception: {e}")
            else:
                print(f"ERROR: {e}", file=sys.stderr)
            return 1

    def _parse_arguments(self, argv: Optional[Sequence[str]] = None):
        """Parse command line arguments."""
        parser = argparse.ArgumentParser(
            description="EMERGE Error-Pattern Analytics",
            formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        )

        # Configuration options
        config_group = parser.add_argument_group("Configuration Options")
        config_group.add_argument("--config", type=str, help="Path to JSON or YAML configuration file")
        config_group.add_argument(
            "--data-dir", type=str, help="Directory containing exported JSON collections"
        )
        config_group.add_argument("--log-dir", type=str, help="Directory for log files")
        config_group.add_argument("--output-dir", type=str, help="Output directory for results")

        # Analysis selection
        analysis_group = parser.add_argument_group("Analysis Selection")
        operation = analysis_group.add_mutually_exclusive_group()
        operation.add_argument(
            "--analyze", action="store_true", help="Run the full cross-group pattern analysis"
        )
        operation.add_argument(
            "--summary", action="store_true", help="Compute the dashboard pattern summary"
        )
        operation.add_argument(
            "--data-summary", action="store_true", help="Show document counts per collection"
        )

        # Output options
        output_group = parser.add_argument_group("Output Options")
        output_group.add_argument(
            "--export",
            type=str,
            help="Comma-separated report export formats (json, csv, pdf)",
        )
        output_group.add_argument(
            "--visualize", action="store_true", help="Render charts for the full analysis"
        )
        output_group.add_argument(
            "--theme",
            choices=["default", "dark", "print"],
            help="Theme for visualizations (default: from settings)",
        )
        output_group.add_argument(
            "--formats",
            type=str,
            help="Comma-separated chart formats, e.g. png,pdf,svg (default: from settings)",
        )

        # System options
        sys_group = parser.add_argument_group("System Options")
        sys_group.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

        self.args = parser.parse_args(argv)

    def _setup_logging(self):
        """Configure logging for the application."""
        log_level = logging.DEBUG if self.args.verbose else logging.INFO

        # --log-dir wins over the configured (file or environment) log directory
        if self.args.log_dir:
            log_path = Path(self.args.log_dir)
        else:
            log_path = Path(Settings(config_path=self.args.config).LOG_DIR)
        log_path.mkdir(parents=True, exist_ok=True)

        # Create log filename with timestamp
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_path / f"emerge_analytics_{timestamp}.log"

        # Configure file handler
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(log_level)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )

        # Console output goes to stderr so stdout carries only the report
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(log_level)
        console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))

        # Configure root logger
        root_logger = logging.getLogger()
        root_logger.setLevel(log_level)
        root_logger.addHandler(file_handler)
        root_logger.addHandler(console_handler)

        self.logger = logging.getLogger(self.__class__.__name__)
        self.logger.info("Logging initialized")

    def _load_configuration(self):
        """Load configuration settings and apply command line overrides."""
        self.logger.info("Loading configuration settings")
        self.settings = Settings(config_path=self.args.config)

        if self.args.data_dir:
            self.logger.info(f"Using data directory from arguments: {self.args.data_dir}")
            self.settings.set_data_dir(self.args.data_dir)

        if self.args.output_dir:
            self.logger.info(f"Using output directory from arguments: {self.args.output_dir}")
            self.settings.OUTPUT_DIR = Path(self.args.output_dir)

        if self.args.log_dir:
            self.settings.LOG_DIR = Path(self.args.log_dir)

        if self.args.theme:
            self.settings.VISUALIZATION_THEME = self.args.theme

        if self.args.formats:
            self.settings.VISUALIZATION_FORMATS = _split_list(self.args.formats)

        self.settings.create_directories()
        self.logger.info("Configuration loaded successfully")

    def _initialize_components(self) -> bool:
        """
        Load the data snapshot sources and build the analyzer.

        Returns:
            bool: True if initialization was successful, False otherwise
        """
        self.logger.info("Initializing data repository")
        self.data_repository = DataRepository(self.settings)

        if self.args.data_dir:
            result = self.data_repository.load_data_from_directory(self.args.data_dir)
            for filename, count in result.items():
                self.logger.info(f"Loaded {count} records from {filename}")
        else:
            self.logger.info("Connecting to default data sources")
            self.data_repository.connect()

        self.analyzer = PatternAnalyzer(self.data_repository, self.settings.get_thresholds())
        self.logger.info("All components initialized successfully")
        return True

    def _execute_requested_operation(self) -> int:
        """
        Execute the requested operation.

        Returns:
            int: Exit code (0 for success, non-zero for errors)
        """
        operation = self._get_requested_operation()
        if not operation:
            self.logger.error("No operation specified; use --analyze, --summary or --data-summary")
            return 1

        self.logger.info(f"Executing {operation} operation")
        try:
            if not self.operations[operation]():
                self.logger.error(f"{operation} operation failed")
                return 1
        except Exception as e:
            self.logger.exception(f"Error executing {operation} operation: {e}")
            return 1

        self.logger.info(f"{operation} operation completed successfully")
        return 0

    def _get_requested_operation(self) -> Optional[str]:
        """Determine the requested operation from command line arguments."""
        for name in self.operations:
            if getattr(self.args, name):
                return name
        return None

    # === Operations ===

    def _run_analysis(self) -> bool:
        """Run the full analysis, print it and write any requested outputs."""
        report = self.analyzer.analyze_patterns()
        _print_json(report.to_dict())

        if self.args.export:
            exporter = ReportExporter(self.settings.OUTPUT_DIR)
            written = exporter.export(report, _split_list(self.args.export))
            for fmt, paths in written.items():
                self.logger.info(f"Exported {fmt}: {', '.join(str(p) for p in paths)}")

        if self.args.visualize:
            visualizer = PatternVisualizer(
                output_dir=Path(self.settings.OUTPUT_DIR) / "charts",
                theme=self.settings.VISUALIZATION_THEME,
                formats=self.settings.VISUALIZATION_FORMATS,
            )
            visualizer.create_report_charts(report)

        return True

    def _run_summary(self) -> bool:
        """Print the dashboard pattern summary."""
        summary = self.analyzer.get_pattern_summary()
        _print_json(summary.to_dict())
        return True

    def _run_data_summary(self) -> bool:
        """Print document counts for the loaded collections."""
        _print_json(self.data_repository.get_data_summary())
        return True


def _split_list(value: str) -> List[str]:
    return [item.strip().lower() for item in value.split(",") if item.strip()]


def _print_json(data) -> None:
    print(json.dumps(data, indent=2, default=str))


def main():
    """Main function to run the analysis application."""
    app = AnalysisApp()
    return app.run()


if __name__ == "__main__":
    sys.exit(main())
