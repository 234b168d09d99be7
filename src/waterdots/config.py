"""
Configuration module for WaterDots.

This module contains the constants and tunable parameters used throughout the
bottom-band particle animation. Values are read at call time, so a host may
retune them (e.g. ``config.DAMPING = 0.9``) while an animation is running.
"""

import math

# Grid layout
CELL_X = 4  # horizontal spacing between grid points (px)
CELL_Y = 6  # vertical spacing between grid points (px)
JITTER_PX = 0.75  # max random offset per axis applied to each grid point

# Band geometry
BAND_HEIGHT_PX = 96  # approx. the bottom inch of the viewport
BAND_VIEWPORT_FRACTION = 0.14  # band never takes more than this share of the viewport

# Damping and boundaries
DAMPING = 0.92  # applied twice per step: mid-update and after integration
BOUNCE = -0.5  # velocity factor when a particle is reflected at an edge

# Scroll / interaction mode
SCROLL_DECAY = 0.9  # per-step decay of the scroll velocity
SCROLL_THRESHOLD = 0.2  # |scroll velocity| above this counts as scrolling
INTERACTION_WINDOW_MS = 180.0  # "recently interacted" window after an event
FAR_AWAY = -9999.0  # default pointer coordinate, outside any band

# Wave settle
WAVE_BASE_AMP = 2.0
WAVE_GAIN = 0.5  # amplitude added per unit of scroll velocity
WAVE_MAX_AMP = 14.0
WAVE_LENGTH = 120.0
WAVE_SPEED = 140.0
WAVE_SPRING = 0.06

# Curl-noise flow
NOISE_SCALE = 0.02  # spatial scale of the value-noise lattice
NOISE_EPS = 0.001  # central-difference step (px)
NOISE_Y_DRIFT = 0.7  # noise y offset moves at this fraction of time
FLOW_TIME_GAIN = 0.4  # flow time runs faster while scrolling
FLOW_BASE_SCALE = 0.6
FLOW_SCROLL_GAIN = 0.12
FLOW_MAX_SCALE = 3.0
FLOW_Y_FACTOR = 0.6

# Idle restore springs
RESTORE_X = 0.08
RESTORE_Y = 0.06

# Pointer repulsion
MOUSE_INFLUENCE = 90.0  # px
MOUSE_STRENGTH = 0.16
MOUSE_MIN_DIST = 8.0  # distance floor before division
MOUSE_KICK = 6.0

# Time
TIME_SCALE = 0.0015  # simulation time units per elapsed millisecond
MAX_FRAME_DELTA_MS = 33.0  # cap after tab suspension / stalls
NOMINAL_FRAME_MS = 1000.0 / 60.0

# Drawing
DOT_RADIUS = 1.8  # px at 1x scale
DOT_COLOR = (0.0, 0.0, 0.0, 0.65)
DOT_ZORDER = 2
BACKGROUND_COLOR = 'white'

# Demo host
FRAME_INTERVAL_MS = 16  # FuncAnimation interval (~60 FPS)
SCROLL_STEP_PX = 40.0  # page pixels per mouse-wheel notch
VIEWPORT_SIZE = (1280, 720)  # default demo window size (px)
DPI = 100  # figure dpi; 1 band px == 1 screen px at this value

# Print lifecycle messages (initialize, re-layout, dispose)
VERBOSE = False

TWO_PI = 2.0 * math.pi


def bottom_inch_policy(viewport_height):
    """
    Band height used by the demo host: about one inch, but never more
    than a fixed share of the viewport.

    Args:
        viewport_height (float): Viewport height in px

    Returns:
        int: Band height in px
    """
    return int(math.floor(min(BAND_HEIGHT_PX, viewport_height * BAND_VIEWPORT_FRACTION)))
