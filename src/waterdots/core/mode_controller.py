"""
Mode controller module for WaterDots.

Tracks the decaying scroll velocity, the last known pointer position and the
time of the most recent interaction. The "recently interacted" flag is derived
from a timestamp on every query, so no timers are involved.
"""

import math
from .. import config


def _finite(*values):
    return all(math.isfinite(v) for v in values)


class ModeController:
    """Scroll and pointer state shared by the force composer."""

    def __init__(self):
        self.scroll_velocity = 0.0
        self.pointer_position = (config.FAR_AWAY, config.FAR_AWAY)
        self.last_interaction_at = -math.inf

    def on_scroll(self, delta_y, now):
        """
        Record a scroll event.

        Args:
            delta_y (float): Scroll delta in px since the previous event
            now (float): Event time in ms
        """
        delta_y = float(delta_y)
        if not _finite(delta_y):
            return
        self.scroll_velocity = delta_y
        self.last_interaction_at = float(now)

    def on_pointer_move(self, x, y, now):
        """
        Record a pointer move in band-local coordinates.

        Args:
            x, y (float): Pointer position in px
            now (float): Event time in ms
        """
        x, y = float(x), float(y)
        if not _finite(x, y):
            return
        self.pointer_position = (x, y)
        self.last_interaction_at = float(now)

    def on_touch_move(self, x, y):
        # Touch only moves the pointer; it does not open the interaction window
        x, y = float(x), float(y)
        if _finite(x, y):
            self.pointer_position = (x, y)

    def decay(self):
        """Per-step decay so motion settles even without new events."""
        self.scroll_velocity *= config.SCROLL_DECAY

    @property
    def scroll_speed(self):
        return abs(self.scroll_velocity)

    @property
    def is_scrolling(self):
        return self.scroll_speed > config.SCROLL_THRESHOLD

    def interaction_active(self, now):
        """True within ``INTERACTION_WINDOW_MS`` of the last scroll/pointer event."""
        return (now - self.last_interaction_at) < config.INTERACTION_WINDOW_MS

    def flow_active(self, now):
        """Gate shared by flow advection and idle restore."""
        return self.is_scrolling or self.interaction_active(now)
