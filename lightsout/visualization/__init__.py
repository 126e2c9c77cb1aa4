"""
Visualization tools for Lights Out.
"""

from .grid_viz import GridVisualizer

__all__ = ['GridVisualizer']
