from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt


def as_component_matrix(values: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    """
    View per-item values of any value type as a contiguous (n, n_components) matrix.

    A scalar field of shape (n,) becomes (n, 1), a vector field (n, 3) stays as is
    and a tensor field (n, 3, 3) becomes (n, 9). The kernels in
    :mod:`fvtemporal.schemes.kernels` only ever see this 2D layout.

    Args:
        values: Array whose first axis runs over cells (or boundary faces).

    Returns:
        A C-contiguous float64 array of shape (n, n_components).
    """
    values = np.asarray(values, dtype=np.float64)
    # Explicit component count: an empty patch (n == 0) cannot infer -1
    n_components = int(np.prod(values.shape[1:], dtype=np.int64))
    return np.ascontiguousarray(values.reshape(values.shape[0], n_components))


def scale_rows(
    weights: npt.NDArray[np.float64],
    values: npt.NDArray[np.float64],
) -> npt.NDArray[np.float64]:
    """
    Multiply each item of ``values`` by the matching per-item scalar weight.

    The weights have shape (n,), the values shape (n, *component_shape); the
    weight is broadcast over all components of the item.

    **Example**:

        weights = np.array([1.0, 2.0])
        values = np.array([[1.0, 1.0, 1.0], [3.0, 0.0, 1.0]])
        scale_rows(weights, values)
        # Output:
        # [[1. 1. 1.]
        #  [6. 0. 2.]]
    """
    weights = np.asarray(weights, dtype=np.float64)
    values = np.asarray(values, dtype=np.float64)
    return weights.reshape(weights.shape + (1,) * (values.ndim - 1)) * values

