import logging

import numpy as np
import pytest

from fvtemporal import fvc, fvm
from fvtemporal.dimensions import DIM_DENSITY, DIM_TIME, DIM_VOLUME, DIMLESS, DimensionedScalar
from fvtemporal.fields import VolField
from fvtemporal.mesh import FvMesh, Time
from fvtemporal.schemes import (
    EulerD2dt2Scheme,
    SteadyStateD2dt2Scheme,
    create_d2dt2_scheme,
    list_d2dt2_schemes,
)
from fvtemporal.schemes.d2dt2_scheme import D2dt2Scheme, register_d2dt2_scheme


def test_builtin_schemes_are_registered():
    assert {"Euler", "steadyState"} <= set(list_d2dt2_schemes())


def test_create_by_name(static_mesh):
    assert isinstance(create_d2dt2_scheme("Euler", static_mesh), EulerD2dt2Scheme)
    assert isinstance(create_d2dt2_scheme("steadyState", static_mesh), SteadyStateD2dt2Scheme)


def test_unknown_scheme_lists_valid_names(static_mesh):
    with pytest.raises(KeyError, match="Euler"):
        create_d2dt2_scheme("CrankNicolson", static_mesh)


def test_scheme_without_name_cannot_be_registered():
    with pytest.raises(ValueError, match="NAME"):
        @register_d2dt2_scheme
        class Nameless(D2dt2Scheme):
            def fvc_d2dt2(self, vf, rho=None):
                pass

            def fvm_d2dt2(self, vf, rho=None):
                pass


def test_mesh_selects_scheme_for_facades(make_field):
    mesh = FvMesh(Time(delta_t=0.1), [1.0, 2.0], d2dt2_scheme="steadyState")
    phi = make_field(mesh)

    assert np.all(fvc.d2dt2(phi).internal == 0.0)
    assert np.all(fvm.d2dt2(phi).diag == 0.0)


def test_selection_is_logged(static_mesh, make_field, caplog):
    phi = make_field(static_mesh)
    with caplog.at_level(logging.DEBUG, logger="fvtemporal"):
        fvc.d2dt2(phi)
    assert "Selecting d2dt2 scheme 'Euler'" in caplog.text


# ----------------------------------------------------------------------
# steadyState
# ----------------------------------------------------------------------

def test_steady_state_explicit_is_zero_with_transient_dimensions(static_mesh):
    u = VolField.uniform("U", static_mesh, DIMLESS, [1.0, 2.0, 3.0])
    scheme = SteadyStateD2dt2Scheme(static_mesh)

    result = scheme.fvc_d2dt2(u)

    assert result.name == "d2dt2(U)"
    assert result.internal.shape == u.internal.shape
    assert np.all(result.internal == 0.0)
    assert np.all(result.boundary["inlet"] == 0.0)
    assert result.dimensions == DIM_TIME ** -2


def test_steady_state_needs_no_history(static_mesh):
    """No old-time values are read, so an unseeded field is accepted."""
    phi = VolField.uniform("phi", static_mesh, DIMLESS, 1.0)
    scheme = SteadyStateD2dt2Scheme(static_mesh)

    op = scheme.fvm_d2dt2(phi)

    assert np.all(op.diag == 0.0)
    assert np.all(op.source == 0.0)
    assert op.dimensions == DIM_VOLUME / DIM_TIME ** 2


def test_steady_state_density_dimensions(static_mesh):
    phi = VolField.uniform("phi", static_mesh, DIMLESS, 1.0)
    rho = DimensionedScalar("rho", DIM_DENSITY, 2.0)
    scheme = SteadyStateD2dt2Scheme(static_mesh)

    assert scheme.fvc_d2dt2(phi, rho).dimensions == DIM_DENSITY / DIM_TIME ** 2
    assert scheme.fvm_d2dt2(phi, rho).dimensions == DIM_DENSITY * DIM_VOLUME / DIM_TIME ** 2
    assert scheme.fvc_d2dt2(phi, rho).name == "d2dt2(rho,phi)"
