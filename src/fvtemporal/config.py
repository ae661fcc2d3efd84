"""
Configuration & Global Constants
================================
This module serves as the central registry for library-wide defaults.

Why is this file needed?
------------------------
1. Abstraction: It prevents magic numbers and scheme names from being
   scattered throughout the code.
2. Selection: It holds the default time-derivative scheme names used when a
   mesh is created without an explicit choice (like an fvSchemes dictionary).

Exports:
    DEFAULT_D2DT2_SCHEME (str): Scheme used by ``fvc.d2dt2`` / ``fvm.d2dt2``.
    DIMENSION_TOLERANCE (float): Tolerance when comparing dimension exponents.
    LOGGER_NAMESPACE (str): Root logger name of the package.
    LOG_FORMAT, LOG_DATEFMT (str): Record layout used by ``setup_logging``.
"""
import os

# Scheme selection
DEFAULT_D2DT2_SCHEME: str = os.environ.get("FVTEMPORAL_D2DT2_SCHEME", "Euler")

# Dimension checking
DIMENSION_TOLERANCE: float = 1e-10

# Logging
LOGGER_NAMESPACE: str = "fvtemporal"
LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATEFMT: str = "%H:%M:%S"

# Demo case (python -m fvtemporal)
DEMO_N_CELLS: int = 8
DEMO_OMEGA: float = 2.0  # rad/s
DEMO_DELTA_T: float = 0.01  # s
DEMO_END_TIME: float = 2.0  # s
