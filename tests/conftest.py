import numpy as np
import pytest

from fvtemporal.dimensions import DIMLESS
from fvtemporal.fields import VolField
from fvtemporal.mesh import BoundaryPatch, FvMesh, Time

VOLUMES = np.array([1.0, 2.0, 0.5, 1.5])
VOLUMES_NEW = np.array([1.2, 2.1, 0.6, 1.4])
VOLUMES_OLD_OLD = np.array([0.9, 1.8, 0.55, 1.6])


def _patches():
    return [BoundaryPatch("outlet", 1), BoundaryPatch("inlet", 2)]


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def static_mesh():
    """Four cells of unequal volume, constant step dt = dt0 = 0.1."""
    return FvMesh(Time(delta_t=0.1), VOLUMES, _patches())


@pytest.fixture
def variable_step_mesh():
    """Static mesh with dt = 0.2 after a step of dt0 = 0.1."""
    return FvMesh(Time(delta_t=0.2, delta_t0=0.1), VOLUMES, _patches())


@pytest.fixture
def moving_mesh():
    """Deforming mesh with a full three-level volume history and variable steps."""
    mesh = FvMesh(Time(delta_t=0.2, delta_t0=0.1), VOLUMES, _patches())
    mesh.set_volume_history(V=VOLUMES_NEW, V0=VOLUMES, V00=VOLUMES_OLD_OLD)
    return mesh


@pytest.fixture
def make_field(rng):
    """
    Factory for fields with an installed old/old-old history.

    With ``levels`` the three time levels are uniform fields holding the given
    (current, old, old_old) values; otherwise every level is random. Positive
    random values are drawn when ``positive`` is set (used for densities).
    """
    def _sample(shape, positive):
        if positive:
            return rng.uniform(0.5, 2.0, size=shape)
        return rng.normal(size=shape)

    def _make(mesh, name="phi", component_shape=(), dimensions=DIMLESS, levels=None, positive=False):
        snapshots = []
        for k in range(3):
            if levels is not None:
                snapshots.append(VolField.uniform(name, mesh, dimensions, levels[k]))
                continue
            internal = _sample((mesh.n_cells,) + component_shape, positive)
            boundary = {
                p.name: _sample((p.n_faces,) + component_shape, positive)
                for p in mesh.patches.values()
            }
            snapshots.append(VolField(name, mesh, dimensions, internal, boundary))
        current, old, old_old = snapshots
        current.set_old_times(old, old_old)
        return current

    return _make
