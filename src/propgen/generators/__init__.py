"""Generators module - the sampling layer of the platform.

Generators produce values together with their shrink trees:
- Generator monad (unit, fmap, bind, sized, resize)
- Random sources
- Combinators for numbers, choices, collections, strings and maps
- A registry of named built-in generators
"""

from propgen.generators.base import Generator
from propgen.generators.random_source import Random, RandomSource, rand_range
from propgen.generators.combinators import (
    MAX_RECURSION_HEIGHT,
    alpha_chars,
    alpha_num_chars,
    alpha_num_strings,
    alpha_strings,
    any_printable,
    any_value,
    arrays_of,
    ascii_chars,
    ascii_strings,
    booleans,
    chars,
    choose,
    container_types,
    elements,
    frequency,
    ints,
    maps,
    maps_with,
    neg_ints,
    not_empty,
    one_of,
    pos_ints,
    recursive,
    simple_printable_types,
    simple_types,
    strings,
    such_that,
    tuples,
)
from propgen.generators.registry import GeneratorRegistry, get_global_generator_registry

__all__ = [
    "Generator",
    "Random",
    "RandomSource",
    "rand_range",
    "MAX_RECURSION_HEIGHT",
    "alpha_chars",
    "alpha_num_chars",
    "alpha_num_strings",
    "alpha_strings",
    "any_printable",
    "any_value",
    "arrays_of",
    "ascii_chars",
    "ascii_strings",
    "booleans",
    "chars",
    "choose",
    "container_types",
    "elements",
    "frequency",
    "ints",
    "maps",
    "maps_with",
    "neg_ints",
    "not_empty",
    "one_of",
    "pos_ints",
    "recursive",
    "simple_printable_types",
    "simple_types",
    "strings",
    "such_that",
    "tuples",
    "GeneratorRegistry",
    "get_global_generator_registry",
]
