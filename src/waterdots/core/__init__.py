"""
Core components for WaterDots.

This module contains the scroll/pointer mode controller and the engine handle
that ties the simulation, input and rendering together.
"""

__all__ = ['mode_controller', 'engine']
