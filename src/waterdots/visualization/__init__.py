"""
Visualization components for WaterDots.

This module contains the matplotlib renderer for the particle band.
"""

__all__ = ['renderer']
