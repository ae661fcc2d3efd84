from fvtemporal.mesh.time import Time
from fvtemporal.mesh.mesh import BoundaryPatch, FvMesh

__all__ = [
    "Time",
    "BoundaryPatch",
    "FvMesh",
]
