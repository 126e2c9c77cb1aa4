"""
Lights Out puzzle engine and session statistics.
"""

__version__ = "0.1.0"
