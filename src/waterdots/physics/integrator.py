"""
Integrator module for WaterDots.

Advances particle velocities and positions in place. Damping is applied in the
middle of the update and again after integration; the pointer kick lands
between the two passes. Particles leaving the band are reflected at the edge.
"""

from .. import config


def reflect_at_bounds(positions, velocities, width, height):
    """
    Clamp positions into [0, width] x [0, height], bouncing velocity back.

    Args:
        positions (np.ndarray): Particle positions, modified in place
        velocities (np.ndarray): Particle velocities, modified in place
        width, height (float): Band size
    """
    for axis, limit in ((0, width), (1, height)):
        coord = positions[:, axis]
        vel = velocities[:, axis]

        low = coord < 0.0
        coord[low] = 0.0
        vel[low] *= config.BOUNCE

        high = coord > limit
        coord[high] = limit
        vel[high] *= config.BOUNCE


def integrate(store, forces):
    """
    One integration step.

    Args:
        store (dict): Particle store, updated in place
        forces (dict): Output of ``compose_forces``

    Returns:
        np.ndarray: Velocities after the step
    """
    pp = store['positions']
    vel = store['velocities']
    damping = config.DAMPING

    # Wave spring on vy first, then advection/restore on both axes
    vel[:, 1] = (vel[:, 1] + forces['wave_ay']) * damping
    vel[:] = (vel + forces['accel']) * damping

    vel += forces['kick']

    pp += vel
    vel *= damping

    reflect_at_bounds(pp, vel, store['width'], store['height'])
    return vel
