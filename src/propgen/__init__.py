"""
propgen - Property-based test data generation with lazy shrink trees.

Generators sample values from a random source and attach a lazy tree of
smaller candidates, so that a value falsifying a property can be narrowed
down to a minimal counterexample.
"""

__version__ = "0.1.0"

from propgen.errors import PropgenError, InvalidArgumentError, GenerationExhaustedError
from propgen.sequences.base import LazySeq
from propgen.trees.base import RoseTree, int_rose_tree
from propgen.generators.base import Generator
from propgen.generators.random_source import Random, RandomSource
from propgen.properties.base import CapturedError, Outcome, for_all
from propgen.properties.shrinking import ShrinkResult, find_minimal
from propgen.config.base import SamplingConfig

__all__ = [
    "PropgenError",
    "InvalidArgumentError",
    "GenerationExhaustedError",
    "LazySeq",
    "RoseTree",
    "int_rose_tree",
    "Generator",
    "Random",
    "RandomSource",
    "CapturedError",
    "Outcome",
    "for_all",
    "ShrinkResult",
    "find_minimal",
    "SamplingConfig",
]
