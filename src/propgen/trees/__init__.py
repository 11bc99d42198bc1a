"""Trees module - rose trees and integer shrinking."""

from propgen.trees.base import RoseTree, int_rose_tree

__all__ = [
    "RoseTree",
    "int_rose_tree",
]
