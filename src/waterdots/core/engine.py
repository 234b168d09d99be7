"""
Engine module for WaterDots.

A ``Handle`` owns one complete animation: the particle store for the current
band, the mode controller, the renderer and the simulation clock. Every handle
is independent; there is no process-wide state besides the constants in
``waterdots.config``.
"""

import time
import queue
import numpy as np
from .. import config
from ..physics.particle_store import layout, particle_count
from ..physics.forces import compose_forces
from ..physics.integrator import integrate
from ..visualization.renderer import BandRenderer
from .mode_controller import ModeController


def _default_clock():
    return time.perf_counter() * 1000.0  # ms


def clamp_frame_delta(dt_ms):
    """Clamp an inter-frame delta to [0, MAX_FRAME_DELTA_MS]."""
    return min(max(float(dt_ms), 0.0), config.MAX_FRAME_DELTA_MS)


class Handle:
    """
    One running particle band.

    Args:
        surface: Matplotlib axes to draw on, or None for a headless simulation
        band_height_policy (callable, optional): Maps the viewport height passed to
            ``resize`` to the band height; identity when omitted
        rng (np.random.Generator, optional): Random source for particle layout
        clock (callable, optional): Returns the current time in ms
        threadsafe_input (bool): Queue input events and apply them on the
            simulation thread at the start of the next step
    """

    def __init__(self, surface=None, band_height_policy=None, rng=None, clock=None,
                 threadsafe_input=False):
        self.band_height_policy = band_height_policy
        self.rng = rng if rng is not None else np.random.default_rng()
        self._clock = clock or _default_clock
        self._events = queue.SimpleQueue() if threadsafe_input else None

        self.mode = ModeController()
        self.renderer = BandRenderer(surface)
        self.store = layout(0, 0, self.rng)

        self.elapsed_ms = 0.0
        self.last_timestamp = None
        self.scheduler = None
        self.disposed = False

        if config.VERBOSE:
            print("WaterDots handle initialized")

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------
    @property
    def width(self):
        return self.store['width']

    @property
    def height(self):
        return self.store['height']

    @property
    def time(self):
        """Simulation time driving waves and noise."""
        return self.elapsed_ms * config.TIME_SCALE

    def band_height(self, viewport_height):
        if self.band_height_policy is None:
            return viewport_height
        return self.band_height_policy(viewport_height)

    def resize(self, width, viewport_height):
        """
        Re-layout the particles for a new band size.

        The store is recreated from scratch whenever the band size changes; a
        resize to the current size keeps the running particles. With
        ``threadsafe_input`` the new layout is queued and built at the start of
        the next step, on the simulation thread.

        Args:
            width (float): Band width in px
            viewport_height (float): Viewport height, mapped through the policy
        """
        if self.disposed:
            return
        if self._events is not None:
            self._events.put((self._apply_resize, (width, viewport_height)))
        else:
            self._apply_resize(width, viewport_height)

    def _apply_resize(self, width, viewport_height):
        height = self.band_height(viewport_height)
        if self.store['width'] == max(width, 0) and self.store['height'] == max(height, 0):
            return
        self.store = layout(width, height, self.rng)
        self.renderer.set_band(self.store['width'], self.store['height'])
        if config.VERBOSE:
            print(f"WaterDots band {self.store['width']:g}x{self.store['height']:g}: "
                  f"{particle_count(self.store)} particles")

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------
    def _dispatch(self, method, *args):
        if self.disposed:
            return
        if self._events is not None:
            self._events.put((getattr(self.mode, method), args))
        else:
            getattr(self.mode, method)(*args)

    def _drain_events(self):
        # Applied in arrival order, so a resize sees the events queued before it
        if self._events is None:
            return
        while True:
            try:
                apply, args = self._events.get_nowait()
            except queue.Empty:
                return
            apply(*args)

    def on_scroll(self, delta_y, now=None):
        """Scroll delta in px since the previous scroll event."""
        self._dispatch('on_scroll', delta_y, self._clock() if now is None else now)

    def on_pointer_move(self, x, y, now=None):
        """Pointer position in band-local px."""
        self._dispatch('on_pointer_move', x, y, self._clock() if now is None else now)

    def on_touch_move(self, x, y):
        self._dispatch('on_touch_move', x, y)

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------
    def step(self, dt_ms=None, now=None):
        """
        Advance the simulation by one step and draw it.

        Args:
            dt_ms (float, optional): Wall-clock time since the previous step,
                clamped; ``config.NOMINAL_FRAME_MS`` when omitted
            now (float, optional): Current time in ms for the interaction window

        Returns:
            bool: True when a frame was drawn
        """
        if self.disposed:
            return False
        self._drain_events()

        if dt_ms is None:
            dt_ms = config.NOMINAL_FRAME_MS
        self.elapsed_ms += clamp_frame_delta(dt_ms)
        if now is None:
            now = self._clock()

        store = self.store
        forces = compose_forces(store, self.mode, self.time, now)
        integrate(store, forces)
        self.mode.decay()

        return self.renderer.draw(store)

    def frame(self, timestamp_ms):
        """
        Scheduler callback: derive the frame delta from consecutive timestamps.

        Args:
            timestamp_ms (float): Host timestamp of this frame in ms
        """
        if self.last_timestamp is None:
            dt_ms = 0.0
        else:
            dt_ms = timestamp_ms - self.last_timestamp
        self.last_timestamp = timestamp_ms
        return self.step(dt_ms)

    # ------------------------------------------------------------------
    # Teardown
    # ------------------------------------------------------------------
    def attach_scheduler(self, scheduler):
        """Remember the object driving ``frame``; it is stopped on dispose."""
        self.scheduler = scheduler

    def dispose(self):
        """Stop the scheduler and release the surface. Safe to call twice."""
        if self.disposed:
            return
        self.disposed = True
        if self.scheduler is not None:
            try:
                self.scheduler.stop()
            except Exception as e:
                print(f"Warning: Failed to stop scheduler: {e}")
            self.scheduler = None
        self.renderer.detach()
        self._events = None
        if config.VERBOSE:
            print("WaterDots handle disposed")


def initialize(surface, band_height_policy=None, **kwargs):
    """
    Create a particle band drawing on ``surface``.

    Args:
        surface: Matplotlib axes, or None to run without drawing
        band_height_policy (callable, optional): Viewport height -> band height
        **kwargs: Forwarded to ``Handle`` (rng, clock, threadsafe_input)

    Returns:
        Handle: The running band; call ``resize`` before the first step
    """
    return Handle(surface, band_height_policy=band_height_policy, **kwargs)
