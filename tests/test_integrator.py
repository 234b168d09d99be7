import numpy as np
import pytest

from waterdots.physics.integrator import integrate, reflect_at_bounds


def _store(position, velocity=(0.0, 0.0), width=100.0, height=100.0):
    return {
        'width': width,
        'height': height,
        'positions': np.array([position], dtype=float),
        'velocities': np.array([velocity], dtype=float),
        'base_positions': np.array([position], dtype=float),
        'phases': np.zeros(1),
    }


def test_integrate_order_and_double_damping():
    store = _store((10.0, 10.0))
    forces = {
        'wave_ay': np.array([1.0]),
        'accel': np.array([[0.5, 0.5]]),
        'kick': np.array([[0.1, 0.0]]),
    }
    integrate(store, forces)

    d = 0.92
    vy = (0.0 + 1.0) * d
    vx, vy = 0.5 * d, (vy + 0.5) * d
    vx += 0.1
    x, y = 10.0 + vx, 10.0 + vy
    np.testing.assert_allclose(store['positions'], [[x, y]])
    np.testing.assert_allclose(store['velocities'], [[vx * d, vy * d]])


def test_kick_is_damped_once():
    store = _store((50.0, 50.0))
    forces = {
        'wave_ay': np.zeros(1),
        'accel': np.zeros((1, 2)),
        'kick': np.array([[1.0, -2.0]]),
    }
    integrate(store, forces)
    np.testing.assert_allclose(store['positions'], [[51.0, 48.0]])
    np.testing.assert_allclose(store['velocities'], [[0.92, -1.84]])


def test_free_particle_decays_with_compound_damping():
    store = _store((50.0, 50.0), velocity=(1.0, 0.0))
    zero = {'wave_ay': np.zeros(1), 'accel': np.zeros((1, 2)), 'kick': np.zeros((1, 2))}
    integrate(store, zero)
    # Two damping passes per step
    assert store['velocities'][0, 0] == pytest.approx(0.92 ** 2)


def test_reflect_at_bounds():
    positions = np.array([[-1.0, 5.0], [12.0, 11.0], [4.0, -3.0]])
    velocities = np.array([[-2.0, 0.0], [3.0, 4.0], [1.0, -1.0]])
    reflect_at_bounds(positions, velocities, 10.0, 10.0)
    np.testing.assert_allclose(positions, [[0.0, 5.0], [10.0, 10.0], [4.0, 0.0]])
    np.testing.assert_allclose(velocities, [[1.0, 0.0], [-1.5, -2.0], [1.0, 0.5]])


def test_integrate_keeps_particles_in_band():
    store = _store((99.0, 1.0), velocity=(30.0, -30.0))
    zero = {'wave_ay': np.zeros(1), 'accel': np.zeros((1, 2)), 'kick': np.zeros((1, 2))}
    integrate(store, zero)
    np.testing.assert_allclose(store['positions'], [[100.0, 0.0]])
    assert store['velocities'][0, 0] < 0.0
    assert store['velocities'][0, 1] > 0.0
