"""
Renderer module for WaterDots.

Draws the particle band onto a matplotlib Axes, which plays the role of the
raster surface. The axes use band coordinates with y pointing down, so one data
unit is one band pixel and the dots keep a fixed radius in px.
"""

import numpy as np
from matplotlib.collections import EllipseCollection
from .. import config


class BandRenderer:
    """Draws every particle as a filled disc of fixed radius."""

    def __init__(self, ax=None):
        self.ax = None
        self._collection = None
        self._count = 0
        self._band = (0.0, 0.0)
        if ax is not None:
            self.attach(ax)

    def attach(self, ax):
        """
        Use ``ax`` as the drawing surface.

        Args:
            ax: Matplotlib axes object
        """
        self.detach()
        self.ax = ax
        ax.set_axis_off()
        ax.set_facecolor(config.BACKGROUND_COLOR)
        ax.set_autoscale_on(False)
        self.set_band(*self._band)

    def detach(self):
        """Remove our artists and drop the surface reference."""
        if self._collection is not None:
            try:
                self._collection.remove()
            except Exception:
                pass
        self._collection = None
        self._count = 0
        self.ax = None

    def has_surface(self):
        ax = self.ax
        if ax is None or ax.figure is None:
            return False
        return ax in ax.figure.axes

    def set_band(self, width, height):
        """Map the axes onto the band rectangle, y down."""
        self._band = (float(width), float(height))
        if not self.has_surface():
            return
        # Identical limits are rejected by matplotlib
        self.ax.set_xlim(0.0, max(float(width), 1.0))
        self.ax.set_ylim(max(float(height), 1.0), 0.0)

    def _rebuild(self, positions):
        if self._collection is not None:
            self._collection.remove()
            self._collection = None
        self._count = len(positions)
        if self._count == 0:
            return
        diameter = np.full(self._count, 2.0 * config.DOT_RADIUS)
        self._collection = EllipseCollection(
            diameter, diameter, np.zeros(self._count),
            units='xy',
            offsets=positions,
            offset_transform=self.ax.transData,
            facecolors=[config.DOT_COLOR],
            edgecolors='none',
            zorder=config.DOT_ZORDER,
        )
        self.ax.add_collection(self._collection, autolim=False)

    def draw(self, store):
        """
        Draw the current particle positions.

        Updates the dot artists; the raster itself is produced by the next
        canvas draw (FuncAnimation, savefig or ``capture``). Never raises:
        without a usable surface nothing is drawn this frame.

        Args:
            store (dict): Particle store

        Returns:
            bool: True when the frame was drawn
        """
        if not self.has_surface():
            return False
        try:
            positions = store['positions']
            if self._collection is None or self._count != len(positions):
                self._rebuild(positions)
            else:
                self._collection.set_offsets(positions)
        except Exception:
            return False
        return True

    def capture(self):
        """
        Render the surface's figure and return it as an RGBA array.

        Returns:
            np.ndarray or None: Array of shape (H, W, 4), None without a raster
        """
        if not self.has_surface():
            return None
        try:
            canvas = self.ax.figure.canvas
            canvas.draw()
            return np.asarray(canvas.buffer_rgba()).copy()
        except Exception:
            return None
