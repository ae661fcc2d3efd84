# kernels.py
from __future__ import annotations

import numpy as np
import numpy.typing as npt
import numba as nb

# ---- JIT'd per-item kernels of the second time difference ----
#
# All field values are passed as (n, n_components) matrices, all weights as
# (n,) vectors. Every item only reads its own history, so the outer loop is
# a parallel map.


@nb.njit(cache=True, parallel=True)
def weighted_second_difference(
    vf: npt.NDArray[np.float64],
    vf0: npt.NDArray[np.float64],
    vf00: npt.NDArray[np.float64],
    w_new: npt.NDArray[np.float64],
    w_old: npt.NDArray[np.float64],
    coefft: float,
    coefft00: float,
    scale: float,
    r_volume: npt.NDArray[np.float64],
) -> npt.NDArray[np.float64]:
    """
    Explicit weighted second difference.

    out[i] = scale * (coefft*w_new[i]*(vf[i] - vf0[i])
                      - coefft00*w_old[i]*(vf0[i] - vf00[i])) * r_volume[i]

    Written in difference form so that a value constant over the three
    time levels gives exactly zero for any weights.

    Args:
        vf, vf0, vf00: Current, old and old-old values, shape (n, m).
        w_new:    Weight of the newer difference (volume and/or density sums), shape (n,).
        w_old:    Weight of the older difference, shape (n,).
        coefft:   Coefficient of the current level.
        coefft00: Coefficient of the old-old level.
        scale:    rDeltaT2 times the weighting factor (1, 1/2 or 1/4, times a constant density).
        r_volume: Inverse current cell volume, or ones where no volume weighting applies, shape (n,).

    Returns:
        out: Second time derivative, shape (n, m).
    """
    n, m = vf.shape
    out = np.empty((n, m), np.float64)
    for i in nb.prange(n):
        a = scale * coefft * w_new[i]
        b = scale * coefft00 * w_old[i]
        for j in range(m):
            out[i, j] = (a * (vf[i, j] - vf0[i, j]) - b * (vf0[i, j] - vf00[i, j])) * r_volume[i]
    return out


@nb.njit(cache=True, parallel=True)
def old_time_source(
    vf0: npt.NDArray[np.float64],
    vf00: npt.NDArray[np.float64],
    w_new: npt.NDArray[np.float64],
    w_old: npt.NDArray[np.float64],
    coefft: float,
    coefft00: float,
    scale: float,
) -> npt.NDArray[np.float64]:
    """
    Source of the implicit second time difference.

    out[i] = scale * ((coefft*w_new[i] + coefft00*w_old[i])*vf0[i]
                      - coefft00*w_old[i]*vf00[i])

    Args:
        vf0, vf00: Old and old-old values, shape (n, m).
        w_new, w_old, coefft, coefft00, scale: As in :func:`weighted_second_difference`.

    Returns:
        out: Source term, shape (n, m).
    """
    n, m = vf0.shape
    out = np.empty((n, m), np.float64)
    for i in nb.prange(n):
        a = coefft * w_new[i]
        b = coefft00 * w_old[i]
        for j in range(m):
            out[i, j] = scale * ((a + b) * vf0[i, j] - b * vf00[i, j])
    return out
