"""Properties module - applying property functions to generated arguments."""

from propgen.properties.base import CapturedError, Outcome, apply_property, for_all
from propgen.properties.shrinking import ShrinkResult, find_minimal

__all__ = [
    "CapturedError",
    "Outcome",
    "apply_property",
    "for_all",
    "ShrinkResult",
    "find_minimal",
]
