"""Time-derivative schemes. Importing this package registers all d2dt2 schemes."""

from fvtemporal.schemes.coefficients import TemporalCoefficients
from fvtemporal.schemes.d2dt2_scheme import (
    D2dt2Scheme,
    create_d2dt2_scheme,
    list_d2dt2_schemes,
    register_d2dt2_scheme,
)
from fvtemporal.schemes.euler import EulerD2dt2Scheme
from fvtemporal.schemes.steady_state import SteadyStateD2dt2Scheme

__all__ = [
    "TemporalCoefficients",
    "D2dt2Scheme",
    "create_d2dt2_scheme",
    "list_d2dt2_schemes",
    "register_d2dt2_scheme",
    "EulerD2dt2Scheme",
    "SteadyStateD2dt2Scheme",
]
