"""
Numerical tolerances used by validation.

Single source of truth for the floating-point slack allowed when a
parameter is compared against an exact target.
"""

import numpy as np

MACHINE_EPSILON = float(np.finfo(np.float64).eps)

# A probability vector must sum to 1 within this slack. Sums are taken
# with math.fsum, so the only error left is the rounding of the inputs.
P_SUM_TOLERANCE = 2.0 * MACHINE_EPSILON
