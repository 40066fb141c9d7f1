"""Rating system implementations.

- Glicko2: Glicko-2 rating system with volatility, compiled with Numba
"""

from .glicko2 import Glicko2, Glicko2Config, from_glicko2_scale, to_glicko2_scale

__all__ = [
    "Glicko2",
    "Glicko2Config",
    "to_glicko2_scale",
    "from_glicko2_scale",
]
