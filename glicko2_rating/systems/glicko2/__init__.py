"""Glicko-2 rating system implementation."""

from .glicko2 import Glicko2, Glicko2Config, from_glicko2_scale, to_glicko2_scale

__all__ = ["Glicko2", "Glicko2Config", "to_glicko2_scale", "from_glicko2_scale"]
