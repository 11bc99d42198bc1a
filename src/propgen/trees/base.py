"""Rose trees - one generated value plus its lazy shrink candidates.

A RoseTree holds:
- A fully realized root value
- A lazy sequence of child trees, each a smaller alternative to the root

Children are alternatives to search when a root falsifies a property, not a
decomposition of the root. Trees are immutable once built.
"""

from typing import Any, Callable, Generic, Iterable, Iterator, Sequence, TypeVar

from propgen.sequences.base import LazySeq, halves

T = TypeVar("T")
U = TypeVar("U")


class RoseTree(Generic[T]):
    """A value together with its shrink search space."""

    __slots__ = ("_root", "_children")

    def __init__(self, root: T, children: Iterable["RoseTree[T]"] = ()):
        self._root = root
        self._children = children if isinstance(children, LazySeq) else LazySeq(children)

    @property
    def root(self) -> T:
        return self._root

    @property
    def children(self) -> LazySeq["RoseTree[T]"]:
        return self._children

    def __repr__(self) -> str:
        return f"RoseTree({self._root!r})"

    @classmethod
    def pure(cls, value: T) -> "RoseTree[T]":
        """A tree that cannot shrink."""
        return cls(value)

    def fmap(self, f: Callable[[T], U]) -> "RoseTree[U]":
        """Apply f to every node, lazily below the root."""
        return RoseTree(f(self._root), self._children.map(lambda child: child.fmap(f)))

    def filter(self, pred: Callable[[T], bool]) -> "RoseTree[T]":
        """Drop every subtree whose root fails pred.

        The root itself is kept as is; callers check it before filtering.
        """
        return RoseTree(
            self._root,
            self._children
            .filter(lambda child: pred(child.root))
            .map(lambda child: child.filter(pred)),
        )

    def join(self) -> "RoseTree[Any]":
        """Flatten a tree of trees.

        Shrinks of the outer tree come first, each flattened in turn, then
        the shrinks of the inner tree at the root.
        """
        inner: RoseTree[Any] = self._root
        return RoseTree(
            inner.root,
            self._children.map(lambda child: child.join()).concat(inner.children),
        )

    @staticmethod
    def zip(
        combine: Callable[[list[Any]], U],
        trees: Sequence["RoseTree[Any]"],
    ) -> "RoseTree[U]":
        """Combine a fixed number of trees into one.

        Each child shrinks exactly one position and keeps the others at
        their current root, so the number of positions never changes.
        """
        trees = list(trees)
        root = combine([tree.root for tree in trees])

        def candidates() -> Iterator[RoseTree[U]]:
            for index, tree in enumerate(trees):
                for child in tree.children:
                    yield RoseTree.zip(combine, _replace(trees, index, child))

        return RoseTree(root, LazySeq.defer(candidates))

    @staticmethod
    def shrink(
        combine: Callable[[list[Any]], U],
        trees: Sequence["RoseTree[Any]"],
    ) -> "RoseTree[U]":
        """Combine a variable number of trees into one collection tree.

        Children first try shorter collections, shortest first, then the
        same collection with a single element shrunk in place.
        """
        trees = list(trees)
        root = combine([tree.root for tree in trees])

        def candidates() -> Iterator[RoseTree[U]]:
            for remaining in _removals(trees):
                yield RoseTree.shrink(combine, remaining)
            for index, tree in enumerate(trees):
                for child in tree.children:
                    yield RoseTree.shrink(combine, _replace(trees, index, child))

        return RoseTree(root, LazySeq.defer(candidates))

    def walk(self, depth: int) -> Iterator[tuple[int, T]]:
        """Pre-order (level, value) pairs down to the given depth."""
        yield 0, self._root
        if depth <= 0:
            return
        for child in self._children:
            for level, value in child.walk(depth - 1):
                yield level + 1, value

    def to_dict(self, depth: int = 1, max_children: int | None = None) -> dict[str, Any]:
        """Nested dict view of the top of the tree.

        Only the requested depth and breadth are forced.
        """
        node: dict[str, Any] = {"root": self._root}
        if depth > 0:
            children = self._children if max_children is None else self._children.take(max_children)
            node["children"] = [child.to_dict(depth - 1, max_children) for child in children]
        return node


def _replace(trees: list[RoseTree[Any]], index: int, tree: RoseTree[Any]) -> list[RoseTree[Any]]:
    result = list(trees)
    result[index] = tree
    return result


def _removals(trees: list[RoseTree[Any]]) -> Iterator[list[RoseTree[Any]]]:
    """Shorter versions of trees, by chunks of halving size."""
    count = len(trees)
    for chunk in halves(count):
        for start in range(0, count - chunk + 1, chunk):
            yield trees[:start] + trees[start + chunk:]


def int_rose_tree(value: int, target: int = 0) -> RoseTree[int]:
    """Shrink tree for an integer, converging on target.

    The first child is target itself; every step strictly reduces the
    distance to target.
    """
    return RoseTree(
        value,
        halves(value - target).map(lambda step: int_rose_tree(value - step, target)),
    )

