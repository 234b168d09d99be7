"""
Host-side components for WaterDots: figure, event wiring and frame scheduling.
"""

__all__ = ['host']
