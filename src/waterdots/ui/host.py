"""
Demo host module for WaterDots.

Plays the part of the web page around the band: a matplotlib figure stands in
for the viewport, its bottom strip is the band surface, and figure events
(mouse wheel, mouse motion, resize, close) are forwarded to a ``Handle``.
Frames are driven by ``FuncAnimation`` or, headless, by ``export_frames``.
"""

import os
import time
import matplotlib.pyplot as plt
from matplotlib.animation import FuncAnimation
from .. import config
from ..core.engine import initialize


class ScrollTracker:
    """Turns absolute scroll positions into per-event deltas."""

    def __init__(self, scroll_y=0.0):
        self.scroll_y = float(scroll_y)

    def update(self, scroll_y):
        """
        Args:
            scroll_y (float): New page scroll offset in px

        Returns:
            float: Offset change since the previous update
        """
        delta = float(scroll_y) - self.scroll_y
        self.scroll_y = float(scroll_y)
        return delta


class BandHost:
    """
    Figure, event wiring and frame scheduling for one particle band.

    Args:
        viewport (tuple): Viewport (width, height) in px
        band_height_policy (callable): Viewport height -> band height
        rng (np.random.Generator, optional): Random source for the layout
    """

    def __init__(self, viewport=None, band_height_policy=config.bottom_inch_policy, rng=None):
        width, height = viewport or config.VIEWPORT_SIZE
        self.fig = plt.figure(figsize=(width / config.DPI, height / config.DPI), dpi=config.DPI)
        self.fig.patch.set_facecolor(config.BACKGROUND_COLOR)
        self.ax = self.fig.add_axes([0.0, 0.0, 1.0, 0.1])

        self._start = time.perf_counter()
        self.handle = initialize(self.ax, band_height_policy=band_height_policy, rng=rng,
                                 clock=self.now)
        self.scroll = ScrollTracker()
        self.animation = None
        self.connected_handlers = []

        self.resize(width, height)

    def now(self):
        """Milliseconds since the host was created."""
        return (time.perf_counter() - self._start) * 1000.0

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------
    def resize(self, width, height):
        """Pin the band surface to the bottom of a width x height viewport."""
        self.handle.resize(width, height)
        band_fraction = self.handle.height / height if height > 0 else 0.0
        self.ax.set_position([0.0, 0.0, 1.0, band_fraction])

    def viewport_size(self):
        w_in, h_in = self.fig.get_size_inches()
        return w_in * config.DPI, h_in * config.DPI

    def to_band(self, event):
        """Display coordinates of a mouse event -> band-local px."""
        return self.ax.transData.inverted().transform((event.x, event.y))

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------
    def connect_events(self):
        """Connect all event handlers."""
        self.disconnect_events()
        try:
            canvas = self.fig.canvas
            self.connected_handlers = [
                canvas.mpl_connect('scroll_event', self._on_scroll),
                canvas.mpl_connect('motion_notify_event', self._on_mouse_move),
                canvas.mpl_connect('resize_event', self._on_resize),
                canvas.mpl_connect('close_event', self._on_close),
            ]
            print("✓ Event handlers connected successfully")
        except Exception as e:
            print(f"✗ Failed to connect event handlers: {e}")

    def disconnect_events(self):
        """Safely disconnect all event handlers."""
        for cid in self.connected_handlers:
            try:
                self.fig.canvas.mpl_disconnect(cid)
            except Exception as e:
                print(f"Warning: Failed to disconnect handler {cid}: {e}")
        self.connected_handlers.clear()

    def _on_scroll(self, event):
        # Wheel up (positive step) scrolls the page up
        delta = self.scroll.update(self.scroll.scroll_y - event.step * config.SCROLL_STEP_PX)
        self.handle.on_scroll(delta)

    def _on_mouse_move(self, event):
        if event.x is None or event.y is None:
            return
        x, y = self.to_band(event)
        self.handle.on_pointer_move(x, y)

    def _on_resize(self, event):
        self.resize(*self.viewport_size())

    def _on_close(self, event):
        self.dispose()

    # ------------------------------------------------------------------
    # Frames
    # ------------------------------------------------------------------
    def _on_frame(self, frame):
        self.handle.frame(self.now())
        return ()

    def start(self):
        """Drive frames from a matplotlib timer until the figure is closed."""
        self.connect_events()
        self.animation = FuncAnimation(self.fig, self._on_frame, interval=config.FRAME_INTERVAL_MS,
                                       blit=False, cache_frame_data=False)
        self.handle.attach_scheduler(self.animation.event_source)
        return self.animation

    def show(self):
        self.start()
        plt.show()

    def export_frames(self, output_dir, num_frames=120, scroll_frames=20, scroll_delta=24.0):
        """
        Run the simulation headless and save every frame as a PNG.

        The first ``scroll_frames`` frames receive a scroll of ``scroll_delta`` px
        each and the pointer sweeps once across the band, so the exported
        sequence shows the wave, the flow and the idle settle.

        Args:
            output_dir (str): Directory for the PNG files (created if missing)
            num_frames (int): Number of frames to simulate and save
            scroll_frames (int): Frames receiving a scroll event
            scroll_delta (float): Scroll delta per event in px

        Returns:
            list: Paths of the saved frames
        """
        width, height = self.handle.width, self.handle.height
        if width <= 0 or height <= 0:
            raise ValueError(f"Band is empty ({width:g}x{height:g}); use a larger viewport")
        os.makedirs(output_dir, exist_ok=True)
        dt = config.NOMINAL_FRAME_MS
        # Save only the band strip, not the empty viewport above it
        bbox = self.ax.get_window_extent().transformed(self.fig.dpi_scale_trans.inverted())
        paths = []
        for frame in range(num_frames):
            now = frame * dt
            if frame < scroll_frames:
                self.handle.on_scroll(scroll_delta, now=now)
            sweep = frame / max(num_frames - 1, 1)
            self.handle.on_pointer_move(sweep * width, height * 0.5, now=now)
            self.handle.step(dt, now=now)

            path = os.path.join(output_dir, f"frame_{frame:04d}.png")
            self.fig.savefig(path, dpi=config.DPI, bbox_inches=bbox,
                             facecolor=self.fig.get_facecolor())
            paths.append(path)
        return paths

    # ------------------------------------------------------------------
    # Teardown
    # ------------------------------------------------------------------
    def dispose(self):
        """Stop frames, detach events and release the band."""
        self.disconnect_events()
        self.handle.dispose()
        self.animation = None

    def close(self):
        self.dispose()
        plt.close(self.fig)
