from __future__ import annotations

from abc import ABC, abstractmethod
import logging
import numbers
from typing import TYPE_CHECKING, Union

from fvtemporal.dimensions import DIMLESS, DimensionedScalar
from fvtemporal.fields import ValueType, VolField

if TYPE_CHECKING:
    from fvtemporal.matrices import FvOperatorContribution
    from fvtemporal.mesh import FvMesh

logger = logging.getLogger(__name__)

Density = Union[VolField, DimensionedScalar, float]


class D2dt2Scheme(ABC):
    """
    Abstract base class for second time-derivative schemes.

    A scheme is bound to a mesh and is stateless otherwise: every call reads
    the step sizes from the mesh's time controller, the volume history from
    the mesh and the field history from the fields, and returns a newly owned
    result.
    """
    NAME: str = ""

    def __init__(self, mesh: FvMesh) -> None:
        """
        Args:
            mesh: Mesh providing the time controller and the volume history.
        """
        self.mesh = mesh

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(mesh={self.mesh!r})"

    @abstractmethod
    def fvc_d2dt2(self, vf: VolField, rho: Density | None = None) -> VolField:
        """
        Explicit second time derivative of ``vf``, optionally density-weighted.

        Args:
            vf: Field with seeded old and old-old values.
            rho: Optional density; a uniform constant or a scalar field with its own history.

        Returns:
            New field named ``d2dt2(vf)`` or ``d2dt2(rho,vf)``.
        """
        pass

    @abstractmethod
    def fvm_d2dt2(self, vf: VolField, rho: Density | None = None) -> FvOperatorContribution:
        """
        Implicit second time derivative of ``vf``, optionally density-weighted.

        Args:
            vf: Unknown field with seeded old and old-old values.
            rho: Optional density; a uniform constant or a scalar field with its own history.

        Returns:
            Operator contribution with diagonal and source.
        """
        pass

    def _check_density(self, rho: Density | None) -> VolField | DimensionedScalar | None:
        """Normalize the density argument; a plain real number becomes a dimensionless constant."""
        if rho is None or isinstance(rho, DimensionedScalar):
            return rho
        if isinstance(rho, numbers.Real) and not isinstance(rho, bool):
            return DimensionedScalar("rho", DIMLESS, float(rho))
        if isinstance(rho, VolField):
            if rho.value_type is not ValueType.SCALAR:
                raise TypeError(f"Density field '{rho.name}' must be a scalar field, got {rho.value_type.name}.")
            if rho.mesh is not self.mesh:
                raise ValueError(f"Density field '{rho.name}' lives on a different mesh.")
            return rho
        raise TypeError(f"Unsupported density type: {type(rho).__name__}")

    @staticmethod
    def _result_name(vf: VolField, rho: VolField | DimensionedScalar | None) -> str:
        if rho is None:
            return f"d2dt2({vf.name})"
        return f"d2dt2({rho.name},{vf.name})"


_REGISTRY: dict[str, type[D2dt2Scheme]] = {}


def register_d2dt2_scheme(cls: type[D2dt2Scheme]) -> type[D2dt2Scheme]:
    """Class decorator to register a scheme by its NAME."""
    name = getattr(cls, "NAME", None)
    if not name:
        raise ValueError(f"{cls.__name__} must define NAME")
    _REGISTRY[name] = cls
    return cls


def create_d2dt2_scheme(name: str, mesh: FvMesh) -> D2dt2Scheme:
    """
    Instantiate the scheme registered under ``name`` for ``mesh``.

    Raises:
        KeyError: If no scheme is registered under ``name``.
    """
    cls = _REGISTRY.get(name)
    if not cls:
        raise KeyError(f"Unknown d2dt2 scheme '{name}'. Valid schemes are: {list_d2dt2_schemes()}")
    logger.debug(f"Selecting d2dt2 scheme '{name}'")
    return cls(mesh)


def list_d2dt2_schemes() -> list[str]:
    return sorted(_REGISTRY.keys())
