"""
Type aliases for Dismal.

Role fields are one-dimensional NumPy arrays indexed by agent id.
"""

from typing import TypeAlias

import numpy as np
from numpy.typing import NDArray

Float1D: TypeAlias = NDArray[np.float64]
Bool1D: TypeAlias = NDArray[np.bool_]
Idx1D: TypeAlias = NDArray[np.intp]

# === User-Friendly Type Aliases ===

Float = Float1D
"""Array of floating-point values (money, prices, quantities)."""

__all__ = [
    "Float",
    "Float1D",
    "Bool1D",
    "Idx1D",
]
