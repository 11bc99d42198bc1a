"""Sequences module - lazy, restartable sequences."""

from propgen.sequences.base import LazySeq, halves

__all__ = [
    "LazySeq",
    "halves",
]
