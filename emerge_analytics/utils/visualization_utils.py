"""
Visualization utilities for the error-pattern analytics system.

This module provides the shared plotting helpers used by the pattern
visualizer so that every chart gets the same figure setup, theme, colors
and file handling.

The module is organized in three functional areas:
1. Styling and Theme System - Themes, trend and curriculum colors
2. Figure Management - Creating, naming and saving figures
3. Chart Helpers - Stacked bars, reference lines and label wrapping

Dependencies:
- matplotlib
- seaborn
- numpy
"""

import logging
import re
import textwrap
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from matplotlib.figure import Figure
import seaborn as sns

# Configure logging
logger = logging.getLogger(__name__)

# Trend value -> bar color
TREND_COLORS: Dict[str, str] = {
    "improving": "#2E8B57",
    "stable": "#7A8591",
    "declining": "#C8553D",
}

# Curriculum value -> bar color
CURRICULUM_COLORS: Dict[str, str] = {
    "wilson": "#1F5FAD",
    "delta_math": "#E08E0B",
    "camino": "#6A4C93",
    "wordgen": "#2A9D8F",
    "amira": "#D1495B",
    "despegando": "#8D6E63",
}

# Seaborn palette used for anything without a fixed color (e.g. groups)
CATEGORICAL_PALETTE = "colorblind"

_BASE_THEME = {
    "figure.facecolor": "white",
    "axes.facecolor": "white",
    "axes.edgecolor": "#C4C9D0",
    "axes.grid": True,
    "grid.color": "#ECEEF1",
    "grid.linestyle": "-",
    "text.color": "#2D3136",
    "axes.labelcolor": "#2D3136",
    "xtick.color": "#2D3136",
    "ytick.color": "#2D3136",
    "font.family": "sans-serif",
}

# Theme name -> (seaborn style, rcParams overrides on the base theme)
THEMES: Dict[str, Tuple[str, Dict[str, object]]] = {
    "default": ("whitegrid", {}),
    "dark": (
        "darkgrid",
        {
            "figure.facecolor": "#1E2124",
            "axes.facecolor": "#1E2124",
            "axes.edgecolor": "#5C636B",
            "grid.color": "#3A3F45",
            "text.color": "#E9ECEF",
            "axes.labelcolor": "#E9ECEF",
            "xtick.color": "#E9ECEF",
            "ytick.color": "#E9ECEF",
        },
    ),
    "print": (
        "whitegrid",
        {
            "axes.edgecolor": "black",
            "grid.linestyle": ":",
            "text.color": "black",
            "axes.labelcolor": "black",
            "xtick.color": "black",
            "ytick.color": "black",
            "font.family": "serif",
        },
    ),
}


# ----------------------
# Styling and Themes
# ----------------------


def apply_theme(theme_name: str = "default") -> None:
    """
    Apply a named theme to matplotlib's global settings.

    Args:
        theme_name: One of THEMES; unknown names fall back to default
    """
    if theme_name not in THEMES:
        logger.warning(f"Unknown theme: {theme_name}, using default theme")
        theme_name = "default"

    style, overrides = THEMES[theme_name]
    sns.set_style(style)
    plt.rcParams.update({**_BASE_THEME, **overrides})


def get_color_palette(n_colors: int) -> List[str]:
    """
    Get n distinct hex colors from the categorical palette.

    Args:
        n_colors: Number of colors

    Returns:
        List[str]: Hex colors, cycling when n exceeds the palette size
    """
    return sns.color_palette(CATEGORICAL_PALETTE, n_colors=n_colors).as_hex()


def get_curriculum_colors(curricula: List[str]) -> List[str]:
    """
    Get the fixed color of each curriculum, in the given order.

    Args:
        curricula: Curriculum values

    Returns:
        List[str]: Hex colors; curricula without a fixed color get a neutral gray
    """
    return [CURRICULUM_COLORS.get(curriculum, TREND_COLORS["stable"]) for curriculum in curricula]


# ----------------------
# Figure Management
# ----------------------


def create_figure(
    width: float = 10.0,
    height: float = 6.0,
    dpi: int = 100,
    theme: str = "default",
) -> Tuple[Figure, Axes]:
    """
    Create a themed matplotlib figure with a single axes.

    Args:
        width: Figure width in inches
        height: Figure height in inches
        dpi: Figure resolution (dots per inch)
        theme: Theme name (default, dark, print)

    Returns:
        Tuple[Figure, Axes]: The figure and its axes
    """
    # Figures read rcParams when created
    apply_theme(theme)
    fig, ax = plt.subplots(figsize=(width, height), dpi=dpi)
    return fig, ax


def generate_filename(base_name: str, prefix: Optional[str] = None) -> str:
    """
    Build a filesystem-safe filename without extension.

    Pattern names such as "b/d reversal" contain path separators, so every
    character outside letters, digits, dot, dash and underscore becomes "_".

    Args:
        base_name: Core name for the file
        prefix: Optional prefix joined with an underscore

    Returns:
        str: Sanitized filename
    """
    filename = f"{prefix}_{base_name}" if prefix else base_name
    filename = re.sub(r"[^\w.-]", "_", filename)
    return filename.lstrip(".") or "chart"


def save_figure(
    fig: Figure,
    filename: str,
    directory: Optional[Union[str, Path]] = None,
    formats: Optional[List[str]] = None,
    dpi: int = 300,
) -> List[str]:
    """
    Save a figure to disk in multiple formats.

    Args:
        fig: Matplotlib figure to save
        filename: Base filename (without extension)
        directory: Optional directory path, created when missing
        formats: File formats to save (default: png)
        dpi: Resolution in dots per inch

    Returns:
        List[str]: Saved file paths
    """
    target_dir = Path(directory) if directory else Path(".")
    target_dir.mkdir(parents=True, exist_ok=True)
    fig.tight_layout()

    saved_files = []
    for fmt in formats or ["png"]:
        file_path = target_dir / f"{filename}.{fmt}"
        fig.savefig(file_path, format=fmt, dpi=dpi, bbox_inches="tight")
        saved_files.append(str(file_path))
        logger.info(f"Saved figure to {file_path}")

    return saved_files


# ----------------------
# Chart Helpers
# ----------------------


def show_no_data(ax: Axes, message: str = "No data available") -> None:
    """Write a centered placeholder message on an empty chart."""
    ax.text(0.5, 0.5, message, ha="center", va="center", transform=ax.transAxes)
    ax.set_xticks([])
    ax.set_yticks([])


def add_reference_line(ax: Axes, value: float, label: Optional[str] = None) -> None:
    """
    Draw a dashed horizontal line across the axes, e.g. an effectiveness target.

    Args:
        ax: Matplotlib axes
        value: Y position for the line
        label: Optional text placed just above the line at the left edge
    """
    ax.axhline(y=value, color="#666666", linestyle="--", linewidth=1.2, zorder=1)
    if label:
        ax.annotate(
            label,
            xy=(0.01, value),
            xycoords=("axes fraction", "data"),
            va="bottom",
            fontsize=8,
            color="#666666",
        )


def plot_stacked_bars(
    ax: Axes,
    data: Dict[str, Dict[str, int]],
    legend_title: Optional[str] = None,
) -> None:
    """
    Draw one bar per category, stacked by segment.

    Args:
        ax: Matplotlib axes to plot on
        data: Category -> (segment label -> value); segments missing from a
            category count as zero
        legend_title: Optional legend title
    """
    if not data:
        show_no_data(ax)
        return

    categories = list(data)
    segments = list(dict.fromkeys(segment for values in data.values() for segment in values))
    colors = get_color_palette(len(segments))

    positions = np.arange(len(categories))
    bottoms = np.zeros(len(categories))
    for segment, color in zip(segments, colors):
        heights = np.array([data[category].get(segment, 0) for category in categories])
        ax.bar(positions, heights, bottom=bottoms, color=color, label=segment, width=0.7, zorder=3)
        bottoms += heights

    ax.set_xticks(positions, categories)
    ax.legend(title=legend_title, loc="best")


def wrap_labels(ax: Axes, which: str = "x", max_length: int = 20) -> None:
    """
    Wrap long tick labels onto several lines.

    Args:
        ax: Matplotlib axes
        which: 'x', 'y' or 'both'
        max_length: Maximum characters per line
    """
    axes = {"x": [ax.xaxis], "y": [ax.yaxis], "both": [ax.xaxis, ax.yaxis]}[which]
    for axis in axes:
        labels = [
            "\n".join(textwrap.wrap(label.get_text(), width=max_length)) or label.get_text()
            for label in axis.get_ticklabels()
        ]
        axis.set_ticks(axis.get_ticklocs(), labels)
