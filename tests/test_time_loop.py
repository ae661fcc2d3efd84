import numpy as np
import pytest

from fvtemporal import fvc
from fvtemporal.dimensions import DIMLESS
from fvtemporal.fields import VolField
from fvtemporal.mesh import FvMesh, Time
from fvtemporal.schemes import TemporalCoefficients
from fvtemporal.time_loop import TimeLoop


@pytest.fixture
def setup():
    time = Time(delta_t=0.1)
    mesh = FvMesh(time, [1.0, 2.0, 3.0])
    phi = VolField("phi", mesh, DIMLESS, [1.0, 2.0, 3.0])
    return time, mesh, phi


def test_start_seeds_history_from_initial_condition(setup):
    time, mesh, phi = setup
    loop = TimeLoop(time, mesh, [phi])

    loop.start()

    assert phi.n_old_times == 2
    assert np.array_equal(phi.old_time().internal, phi.internal)
    assert np.array_equal(phi.old_old_time().internal, phi.internal)


def test_derivative_of_seeded_field_is_zero(setup):
    """A field at rest at t = 0 has zero second derivative before it changes."""
    time, mesh, phi = setup
    TimeLoop(time, mesh, [phi]).start()

    assert np.all(fvc.d2dt2(phi).internal == 0.0)


def test_start_is_idempotent(setup):
    time, mesh, phi = setup
    loop = TimeLoop(time, mesh, [phi])
    loop.start()
    loop.advance()
    phi.internal[:] = 9.0

    loop.start()

    assert not np.all(phi.old_time().internal == 9.0)


def test_advance_requires_start(setup):
    time, mesh, phi = setup
    with pytest.raises(RuntimeError, match="start"):
        TimeLoop(time, mesh, [phi]).advance()


def test_first_step_uses_seeded_history(setup):
    """After the first step phi0 = phi00 = initial values, so d2dt2 = (phi - phi0)/dt²."""
    time, mesh, phi = setup
    loop = TimeLoop(time, mesh, [phi])
    loop.start()
    initial = phi.internal.copy()

    loop.advance()
    phi.internal[:] = initial + 0.01

    assert np.allclose(fvc.d2dt2(phi).internal, 0.01 / 0.1 ** 2)


def test_advance_shifts_history_and_time(setup):
    time, mesh, phi = setup
    loop = TimeLoop(time, mesh, [phi])
    loop.start()

    loop.advance()
    phi.internal[:] = 10.0
    loop.advance(delta_t=0.2)
    phi.internal[:] = 20.0

    assert time.value == pytest.approx(0.3)
    assert time.delta_t == pytest.approx(0.2)
    assert time.delta_t0 == pytest.approx(0.1)
    assert np.all(phi.old_time().internal == 10.0)
    assert np.array_equal(phi.old_old_time().internal, [1.0, 2.0, 3.0])


def test_variable_steps_differentiate_a_quadratic(setup):
    """phi = t² advanced with changing steps has d2dt2 = 2 after every step."""
    time, mesh, _ = setup
    phi = VolField("phi", mesh, DIMLESS, np.zeros(mesh.n_cells))
    loop = TimeLoop(time, mesh, [phi])
    loop.start()

    loop.advance(delta_t=0.1)
    phi.internal[:] = time.value ** 2
    for dt in (0.05, 0.2, 0.15):
        loop.advance(delta_t=dt)
        phi.internal[:] = time.value ** 2
        assert np.allclose(fvc.d2dt2(phi).internal, 2.0)


def test_advance_moves_the_mesh(setup):
    time, mesh, phi = setup
    loop = TimeLoop(time, mesh, [phi])
    loop.start()

    loop.advance(new_volumes=[1.5, 2.5, 3.5])

    assert mesh.moving
    assert np.array_equal(mesh.V, [1.5, 2.5, 3.5])
    assert np.array_equal(mesh.V0, [1.0, 2.0, 3.0])


def test_run_calls_solver_once_per_step(setup):
    time, mesh, phi = setup
    loop = TimeLoop(time, mesh, [phi])
    seen = []

    n_steps = loop.run(1.0, lambda lp: seen.append(lp.time.value))

    assert n_steps == 10
    assert seen == pytest.approx([0.1 * (i + 1) for i in range(10)])
    assert time.value == pytest.approx(1.0)


def test_run_passes_new_volumes(setup):
    time, mesh, phi = setup
    loop = TimeLoop(time, mesh, [phi])

    loop.run(0.3, lambda lp: None, volumes_at=lambda t: np.full(mesh.n_cells, 1.0 + t))

    assert np.allclose(mesh.V, 1.3)
    assert np.allclose(mesh.V0, 1.2)
    assert np.allclose(mesh.V00, 1.1)


def test_loop_rejects_foreign_objects(setup):
    time, mesh, phi = setup
    with pytest.raises(ValueError, match="time controller"):
        TimeLoop(Time(delta_t=0.1), mesh, [phi])

    other_mesh = FvMesh(time, [1.0, 1.0, 1.0])
    with pytest.raises(ValueError, match="phi"):
        TimeLoop(time, other_mesh, [phi])


def test_coefficients_follow_the_loop(setup):
    time, mesh, phi = setup
    loop = TimeLoop(time, mesh, [phi])
    loop.start()
    loop.advance(delta_t=0.1)
    loop.advance(delta_t=0.3)

    assert TemporalCoefficients.from_time(time) == TemporalCoefficients.from_step_sizes(0.3, 0.1)


def test_restart_step_reaches_the_scheme():
    """After a restart with dt0 != dt the first step is differentiated with both sizes."""
    time = Time(delta_t=0.2, start_time=5.0, delta_t0=0.05)
    mesh = FvMesh(time, [1.0])
    phi = VolField("phi", mesh, DIMLESS, [0.0])
    loop = TimeLoop(time, mesh, [phi])
    loop.start()

    loop.advance()

    assert (time.delta_t, time.delta_t0) == pytest.approx((0.2, 0.05))
    assert TemporalCoefficients.from_time(time) == TemporalCoefficients.from_step_sizes(0.2, 0.05)
