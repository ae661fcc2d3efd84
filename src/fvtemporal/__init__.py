"""
fvtemporal
==========
Second-order time-derivative discretization for finite-volume solvers on
static and deforming unstructured meshes.

Modules:
    dimensions - physical dimension bookkeeping
    mesh       - time controller and cell volume history
    fields     - cell fields with old/old-old snapshots
    matrices   - diagonal/source operator contributions
    schemes    - Euler and steadyState d2dt2 schemes
    fvc, fvm   - explicit and implicit facades
    time_loop  - seeding and advancing the time history
"""
from fvtemporal import fvc, fvm
from fvtemporal.dimensions import DimensionedScalar, DimensionError, DimensionSet
from fvtemporal.fields import TimeHistoryError, ValueType, VolField
from fvtemporal.matrices import FvOperatorContribution
from fvtemporal.mesh import BoundaryPatch, FvMesh, Time
from fvtemporal.schemes import (
    D2dt2Scheme,
    EulerD2dt2Scheme,
    SteadyStateD2dt2Scheme,
    TemporalCoefficients,
    create_d2dt2_scheme,
    list_d2dt2_schemes,
)
from fvtemporal.time_loop import TimeLoop

__all__ = [
    "fvc",
    "fvm",
    "DimensionSet",
    "DimensionedScalar",
    "DimensionError",
    "ValueType",
    "VolField",
    "TimeHistoryError",
    "FvOperatorContribution",
    "Time",
    "BoundaryPatch",
    "FvMesh",
    "D2dt2Scheme",
    "EulerD2dt2Scheme",
    "SteadyStateD2dt2Scheme",
    "TemporalCoefficients",
    "create_d2dt2_scheme",
    "list_d2dt2_schemes",
    "TimeLoop",
]
