"""Greedy search of a shrink tree for a smaller failing value."""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

from propgen.trees.base import RoseTree

T = TypeVar("T")

logger = logging.getLogger(__name__)

DEFAULT_MAX_SHRINKS = 1000


@dataclass
class ShrinkResult(Generic[T]):
    """Result of a shrink search."""

    original: T
    smallest: T
    shrinks: int = 0
    exhausted: bool = True


def _outcome_failed(value: Any) -> bool:
    return value.failed


def find_minimal(
    tree: RoseTree[T],
    is_failure: Callable[[T], bool] | None = None,
    max_shrinks: int = DEFAULT_MAX_SHRINKS,
) -> ShrinkResult[T]:
    """Walk a failing tree toward a minimal failing root.

    At each node the first child whose root still fails is taken, until no
    child fails or max_shrinks steps have been made.

    Args:
        tree: A tree whose root fails
        is_failure: Failure test for roots; defaults to Outcome.failed
        max_shrinks: Upper bound on the number of steps

    Returns:
        ShrinkResult with the smallest failing root found; exhausted is
        False when the limit was reached with a failing child left unexplored
    """
    is_failure = is_failure or _outcome_failed
    current = tree
    shrinks = 0
    while True:
        failing = next((child for child in current.children if is_failure(child.root)), None)
        if failing is None:
            return ShrinkResult(original=tree.root, smallest=current.root, shrinks=shrinks)
        if shrinks >= max_shrinks:
            break
        current = failing
        shrinks += 1
        logger.debug("shrink step %d: %r", shrinks, current.root)
    logger.warning("shrinking stopped after %d steps", max_shrinks)
    return ShrinkResult(
        original=tree.root,
        smallest=current.root,
        shrinks=shrinks,
        exhausted=False,
    )
