"""
Particle store module for WaterDots.

This module lays out the jittered particle grid for a band and keeps its state
in a dictionary of numpy arrays, one row per particle.
"""

import math
import numpy as np
from .. import config


def layout(width, height, rng=None):
    """
    Create the particle set for a band of the given size.

    Grid points are spaced ``CELL_X`` by ``CELL_Y`` px and each point is jittered
    by up to ``JITTER_PX`` per axis. Jittered anchors are clamped into the band so
    that base positions obey the same bounds as positions.

    Args:
        width (float): Band width in px
        height (float): Band height in px
        rng (np.random.Generator, optional): Random source for jitter and phases

    Returns:
        dict: Particle store with positions, velocities, base positions, phases
    """
    if rng is None:
        rng = np.random.default_rng()

    if width <= 0 or height <= 0:
        cols, rows = 0, 0
    else:
        cols = int(math.ceil(width / config.CELL_X))
        rows = int(math.ceil(height / config.CELL_Y))
    num_particles = cols * rows

    # Row-major grid: every row holds all columns
    grid_x = np.tile(np.arange(cols) * float(config.CELL_X), rows)
    grid_y = np.repeat(np.arange(rows) * float(config.CELL_Y), cols)

    jitter = (rng.random((num_particles, 2)) - 0.5) * (2.0 * config.JITTER_PX)
    base_positions = np.column_stack((grid_x, grid_y)) + jitter
    if num_particles:
        np.clip(base_positions[:, 0], 0.0, width, out=base_positions[:, 0])
        np.clip(base_positions[:, 1], 0.0, height, out=base_positions[:, 1])

    phases = rng.random(num_particles) * config.TWO_PI

    # Anchors and phases never change for the lifetime of the particle
    base_positions.flags.writeable = False
    phases.flags.writeable = False

    return {
        'width': float(max(width, 0)),
        'height': float(max(height, 0)),
        'positions': base_positions.copy(),
        'velocities': np.zeros((num_particles, 2)),
        'base_positions': base_positions,
        'phases': phases,
    }


def particle_count(store):
    """Number of particles in a store."""
    return len(store['positions'])


def displacement_from_base(store):
    """
    Distance of every particle from its anchor.

    Args:
        store (dict): Particle store

    Returns:
        np.ndarray: Distances, shape (N,)
    """
    return np.linalg.norm(store['positions'] - store['base_positions'], axis=1)


def within_bounds(store):
    """True when every particle lies inside the band rectangle."""
    pp = store['positions']
    if len(pp) == 0:
        return True
    return bool(np.all((pp[:, 0] >= 0.0) & (pp[:, 0] <= store['width']) &
                       (pp[:, 1] >= 0.0) & (pp[:, 1] <= store['height'])))
