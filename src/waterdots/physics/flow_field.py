"""
Flow field module for WaterDots.

This module builds a smooth value-noise scalar field from hashed lattice points
and turns it into a divergence-free ("curl-noise") vector field by rotating its
gradient by 90 degrees. Every function here is pure and works on scalars or on
numpy arrays of any matching shape.
"""

import numpy as np
from .. import config


def hash2(ix, iy):
    """
    Pseudo-random value in [0, 1) for integer lattice coordinates.

    Args:
        ix, iy: Lattice coordinates (scalars or arrays)

    Returns:
        Hash value(s) with the broadcast shape of the inputs
    """
    s = np.sin(ix * 127.1 + iy * 311.7) * 43758.5453
    return s - np.floor(s)


def smoothstep(a, b, x):
    t = np.clip((x - a) / (b - a), 0.0, 1.0)
    return t * t * (3.0 - 2.0 * t)


def lerp(a, b, t):
    return a + (b - a) * t


def value_noise(x, y, t):
    """
    Sample the time-shifted value-noise field at band coordinates.

    Args:
        x, y: Band coordinates in px (scalars or arrays)
        t (float): Field time; shifts the lattice diagonally

    Returns:
        Noise value(s) in [-1, 1]
    """
    nx = np.asarray(x, dtype=float) * config.NOISE_SCALE + t
    ny = np.asarray(y, dtype=float) * config.NOISE_SCALE + t * config.NOISE_Y_DRIFT
    x0 = np.floor(nx)
    y0 = np.floor(ny)
    u = smoothstep(0.0, 1.0, nx - x0)
    v = smoothstep(0.0, 1.0, ny - y0)

    n00 = hash2(x0, y0)
    n10 = hash2(x0 + 1.0, y0)
    n01 = hash2(x0, y0 + 1.0)
    n11 = hash2(x0 + 1.0, y0 + 1.0)

    nx0 = lerp(n00, n10, u)
    nx1 = lerp(n01, n11, u)
    return lerp(nx0, nx1, v) * 2.0 - 1.0


def noise_gradient(x, y, t, eps=None):
    """
    Central-difference gradient of the value noise (per px).

    Returns:
        tuple: (dn/dx, dn/dy)
    """
    if eps is None:
        eps = config.NOISE_EPS
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    dn_dx = (value_noise(x + eps, y, t) - value_noise(x - eps, y, t)) / (2.0 * eps)
    dn_dy = (value_noise(x, y + eps, t) - value_noise(x, y - eps, t)) / (2.0 * eps)
    return dn_dx, dn_dy


def sample_flow(x, y, t):
    """
    Divergence-free flow vector at band coordinates.

    The noise gradient (dx, dy) is rotated to (dy, -dx), so the field is the
    curl of the scalar noise and has no sources or sinks.

    Args:
        x, y: Band coordinates in px (scalars or arrays)
        t (float): Field time

    Returns:
        tuple: (fx, fy) with the broadcast shape of x and y
    """
    dn_dx, dn_dy = noise_gradient(x, y, t)
    return dn_dy, -dn_dx


def divergence(x, y, t, h=None):
    """
    Finite-difference divergence of ``sample_flow``; used for diagnostics.

    Returns:
        Divergence value(s), ideally ~0 everywhere
    """
    if h is None:
        h = config.NOISE_EPS
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    fx_plus, _ = sample_flow(x + h, y, t)
    fx_minus, _ = sample_flow(x - h, y, t)
    _, fy_plus = sample_flow(x, y + h, t)
    _, fy_minus = sample_flow(x, y - h, t)
    return (fx_plus - fx_minus) / (2.0 * h) + (fy_plus - fy_minus) / (2.0 * h)
