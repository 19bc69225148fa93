from .pattern_visualizer import PatternVisualizer

__all__ = [
    "PatternVisualizer",
]
