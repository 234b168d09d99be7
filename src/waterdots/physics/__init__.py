"""
Physics simulation components for WaterDots.

This module contains the particle store, the curl-noise flow field, force
composition and the integrator.
"""

__all__ = ['particle_store', 'flow_field', 'forces', 'integrator']
