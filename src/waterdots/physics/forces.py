"""
Force composition module for WaterDots.

This module computes, for every particle at once, the accelerations that drive
the band: the scroll-driven wave settle, curl-noise advection while the band is
active, a spring back to the anchor while idle, and an instantaneous velocity
kick away from the pointer.
"""

import numpy as np
from .. import config
from .flow_field import sample_flow


def wave_amplitude(scroll_speed):
    """
    Vertical wave amplitude for a given |scroll velocity|.

    Args:
        scroll_speed (float): Absolute scroll velocity

    Returns:
        float: 0 when not scrolling, else clamped to [0, WAVE_MAX_AMP]
    """
    if scroll_speed <= config.SCROLL_THRESHOLD:
        return 0.0
    amp = scroll_speed * config.WAVE_GAIN + config.WAVE_BASE_AMP
    return float(min(max(amp, 0.0), config.WAVE_MAX_AMP))


def wave_target(store, t, scroll_speed):
    """
    Vertical rest position of every particle under the current wave.

    Returns:
        np.ndarray: Target y, shape (N,)
    """
    base_y = store['base_positions'][:, 1]
    amp = wave_amplitude(scroll_speed)
    if amp == 0.0:
        return base_y.copy()
    x = store['positions'][:, 0]
    phase = (x + t * config.WAVE_SPEED) / config.WAVE_LENGTH + store['phases']
    return base_y + amp * np.sin(phase)


def wave_acceleration(store, t, scroll_speed):
    """Spring acceleration toward the wave target, always applied."""
    target_y = wave_target(store, t, scroll_speed)
    return (target_y - store['positions'][:, 1]) * config.WAVE_SPRING


def flow_scale(scroll_speed):
    return min(config.FLOW_MAX_SCALE, config.FLOW_BASE_SCALE + scroll_speed * config.FLOW_SCROLL_GAIN)


def flow_acceleration(positions, t, scroll_velocity):
    """
    Curl-noise advection. The horizontal part is biased against the scroll
    direction; with no scroll the field is used as is.

    Args:
        positions (np.ndarray): Particle positions, shape (N, 2)
        t (float): Simulation time
        scroll_velocity (float): Signed scroll velocity

    Returns:
        np.ndarray: Accelerations, shape (N, 2)
    """
    speed = abs(scroll_velocity)
    tm = t * (1.0 + speed * config.FLOW_TIME_GAIN)
    fx, fy = sample_flow(positions[:, 0], positions[:, 1], tm)
    scale = flow_scale(speed)

    accel = np.empty_like(positions)
    accel[:, 0] = (fx - np.sign(scroll_velocity) * np.abs(fx)) * scale
    accel[:, 1] = fy * scale * config.FLOW_Y_FACTOR
    return accel


def restore_acceleration(store):
    """Spring back to the anchor, used while the band is idle."""
    offset = store['positions'] - store['base_positions']
    accel = np.empty_like(offset)
    accel[:, 0] = -offset[:, 0] * config.RESTORE_X
    accel[:, 1] = -offset[:, 1] * config.RESTORE_Y
    return accel


def pointer_kick(positions, pointer):
    """
    Velocity kick pushing particles away from the pointer.

    Only particles closer than ``MOUSE_INFLUENCE`` are affected. The distance is
    floored at ``MOUSE_MIN_DIST`` before dividing, so a particle sitting on the
    pointer gets no kick rather than an unbounded one.

    Args:
        positions (np.ndarray): Particle positions, shape (N, 2)
        pointer (tuple): Pointer position (x, y) in band coordinates

    Returns:
        np.ndarray: Velocity deltas, shape (N, 2)
    """
    kick = np.zeros_like(positions)
    if len(positions) == 0:
        return kick

    delta = positions - np.asarray(pointer, dtype=float)
    dist2 = np.einsum('ij,ij->i', delta, delta)
    rad = config.MOUSE_INFLUENCE
    near = dist2 < rad * rad
    if not np.any(near):
        return kick

    dist = np.maximum(config.MOUSE_MIN_DIST, np.sqrt(dist2[near]))
    strength = (1.0 - dist / rad) * config.MOUSE_STRENGTH
    kick[near] = delta[near] / dist[:, np.newaxis] * (strength * config.MOUSE_KICK)[:, np.newaxis]
    return kick


def compose_forces(store, mode, t, now):
    """
    Combine all force branches for one step.

    Flow advection and idle restore are mutually exclusive and gated by the
    same condition; the wave spring and the pointer kick are always evaluated.

    Args:
        store (dict): Particle store
        mode (ModeController): Current scroll/pointer state
        t (float): Simulation time
        now (float): Current time in ms, for the interaction window

    Returns:
        dict: 'wave_ay' (N,), 'accel' (N, 2) and 'kick' (N, 2)
    """
    positions = store['positions']
    speed = mode.scroll_speed

    if mode.flow_active(now):
        accel = flow_acceleration(positions, t, mode.scroll_velocity)
    else:
        accel = restore_acceleration(store)

    return {
        'wave_ay': wave_acceleration(store, t, speed),
        'accel': accel,
        'kick': pointer_kick(positions, mode.pointer_position),
    }
