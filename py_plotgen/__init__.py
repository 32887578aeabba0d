"""
Generative line-art patterns for pen plotters.
"""

__version__ = "0.1.0"
