"""
WaterDots: a decorative bottom-band particle field.

This package animates a dense grid of dots with a curl-noise flow field that
reacts to scroll velocity and pointer proximity, and draws them with matplotlib.
"""

from .core.engine import Handle, initialize
from .config import bottom_inch_policy

__version__ = "0.1.0"
__author__ = "WaterDots Team"

__all__ = ['initialize', 'Handle', 'bottom_inch_policy']
