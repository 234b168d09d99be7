import numpy as np
import pytest
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure

from waterdots import config, initialize
from waterdots.physics.particle_store import layout
from waterdots.visualization.renderer import BandRenderer


def _surface(width=200, height=100):
    fig = Figure(figsize=(width / 100, height / 100), dpi=100)
    FigureCanvasAgg(fig)
    ax = fig.add_axes([0.0, 0.0, 1.0, 1.0])
    return fig, ax


def _single(x, y, width=200.0, height=100.0):
    return {
        'width': width,
        'height': height,
        'positions': np.array([[x, y]]),
        'velocities': np.zeros((1, 2)),
        'base_positions': np.array([[x, y]]),
        'phases': np.zeros(1),
    }


def test_draw_without_surface_is_noop(rng):
    renderer = BandRenderer(None)
    assert renderer.draw(layout(50, 20, rng)) is False
    assert renderer.capture() is None


def test_draw_places_one_disc_per_particle(rng):
    fig, ax = _surface()
    renderer = BandRenderer(ax)
    renderer.set_band(200, 100)
    store = layout(200, 100, rng)
    assert renderer.draw(store) is True
    offsets = renderer._collection.get_offsets()
    assert len(offsets) == len(store['positions']) == 50 * 17
    np.testing.assert_allclose(offsets, store['positions'])


def test_draw_updates_offsets_in_place(rng):
    fig, ax = _surface()
    renderer = BandRenderer(ax)
    store = layout(200, 100, rng)
    renderer.draw(store)
    collection = renderer._collection
    store['positions'][:] += 1.0
    renderer.draw(store)
    assert renderer._collection is collection
    np.testing.assert_allclose(collection.get_offsets(), store['positions'])


def test_draw_rebuilds_after_relayout(rng):
    fig, ax = _surface()
    renderer = BandRenderer(ax)
    renderer.draw(layout(200, 100, rng))
    renderer.draw(layout(40, 12, rng))
    assert len(renderer._collection.get_offsets()) == 10 * 2
    renderer.draw(layout(0, 0, rng))
    assert renderer._collection is None
    assert len(ax.collections) == 0


def test_capture_is_y_down_band_raster():
    fig, ax = _surface()
    renderer = BandRenderer(ax)
    renderer.set_band(200, 100)
    renderer.draw(_single(10.0, 10.0))
    image = renderer.capture()
    assert image.shape == (100, 200, 4)
    assert image[10, 10, 0] < 200   # dot near the top-left corner
    assert image[90, 10, 0] == 255  # nothing near the bottom-left corner


def test_empty_band_captures_blank(rng):
    fig, ax = _surface()
    renderer = BandRenderer(ax)
    renderer.set_band(200, 100)
    renderer.draw(layout(0, 0, rng))
    image = renderer.capture()
    assert image[..., :3].min() > 250


def test_dot_colour_is_translucent_black():
    fig, ax = _surface()
    renderer = BandRenderer(ax)
    renderer.set_band(200, 100)
    store = _single(20.0, 20.0)
    # Well separated dots so that none overlap
    store['positions'] = np.array([[20.0, 20.0], [60.0, 50.0], [150.0, 80.0]])
    renderer.draw(store)
    image = renderer.capture()
    darkest = image[..., 0].min()
    # Fully covered pixels: 65% black over white
    assert darkest == pytest.approx(255 * (1 - config.DOT_COLOR[3]), abs=3)


def test_removed_axes_degrades_silently(rng):
    fig, ax = _surface()
    renderer = BandRenderer(ax)
    fig.delaxes(ax)
    assert renderer.draw(layout(50, 20, rng)) is False
    assert renderer.capture() is None


def test_handle_draws_through_renderer(rng):
    fig, ax = _surface(400, 48)
    handle = initialize(ax, rng=rng, clock=lambda: 0.0)
    handle.resize(400, 48)
    assert handle.step(16.0, now=0.0) is True
    assert ax.get_xlim() == (0.0, 400.0)
    assert ax.get_ylim() == (48.0, 0.0)
    handle.dispose()
    assert handle.renderer.ax is None
    assert len(ax.collections) == 0
