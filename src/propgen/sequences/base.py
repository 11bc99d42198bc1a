"""Lazy, restartable sequences - the substrate of shrink trees.

A LazySeq:
- Pulls from its source only when a consumer asks for the next element
- Remembers every element it has realized
- Can be iterated any number of times with identical results
- Keeps raising the error that broke its source, instead of ending early

Streams (`LazySeq.stream`) skip the cache: each iteration reopens the
source and nothing realized is retained, so unbounded streams such as
samples stay in constant memory.

Everything that builds shrink trees composes these without forcing them.
"""

from itertools import chain, islice
from typing import Any, Callable, Generic, Iterable, Iterator, TypeVar

from propgen.errors import InvalidArgumentError

T = TypeVar("T")
U = TypeVar("U")


class LazySeq(Generic[T]):
    """A memoized lazy sequence.

    The source iterable is only opened on first iteration and each element
    is pulled from it at most once. Later iterations replay the cache before
    pulling anything new.
    """

    __slots__ = ("_factory", "_iterator", "_cache", "_done", "_error", "_memoize")

    def __init__(self, source: Iterable[T] = ()):
        self._factory: Callable[[], Iterable[T]] | None = lambda: source
        self._iterator: Iterator[T] | None = None
        self._cache: list[T] = []
        self._done = False
        self._error: Exception | None = None
        self._memoize = True

    @classmethod
    def defer(cls, factory: Callable[[], Iterable[T]]) -> "LazySeq[T]":
        """Create a sequence whose source is built by factory on first use."""
        seq = cls()
        seq._factory = factory
        return seq

    @classmethod
    def stream(cls, factory: Callable[[], Iterable[T]]) -> "LazySeq[T]":
        """Create an uncached sequence; factory is called on every iteration.

        Sequences derived from a stream with map, filter, take and friends
        are streams too.
        """
        seq = cls.defer(factory)
        seq._memoize = False
        return seq

    @property
    def memoized(self) -> bool:
        return self._memoize

    @classmethod
    def empty(cls) -> "LazySeq[Any]":
        return cls(())

    @classmethod
    def of(cls, *values: T) -> "LazySeq[T]":
        return cls(values)

    @classmethod
    def range(cls, lo: int, hi: int) -> "LazySeq[int]":
        """Ascending integers from lo to hi, both inclusive."""
        return cls.defer(lambda: iter(range(lo, hi + 1)))

    @classmethod
    def cycle(cls, supplier: Callable[[], Iterable[T]]) -> "LazySeq[T]":
        """Repeat the sequence produced by supplier forever.

        The supplier is re-invoked for every pass. A pass that yields
        nothing ends the cycle.
        """

        def passes() -> Iterator[T]:
            while True:
                produced = False
                for item in supplier():
                    produced = True
                    yield item
                if not produced:
                    return

        return cls.defer(passes)

    @classmethod
    def repeat(cls, n: int, value: T) -> "LazySeq[T]":
        return cls.defer(lambda: (value for _ in range(n)))

    def _pull(self) -> bool:
        """Realize one more element. Returns False once the source is spent."""
        if self._error is not None:
            raise self._error
        if self._done:
            return False
        if self._iterator is None:
            self._iterator = iter(self._factory())
            self._factory = None
        try:
            item = next(self._iterator)
        except StopIteration:
            self._done = True
            self._iterator = None
            return False
        except Exception as e:
            # a failed generator cannot be resumed
            self._error = e
            self._iterator = None
            raise
        self._cache.append(item)
        return True

    def _replay(self) -> Iterator[T]:
        index = 0
        while index < len(self._cache) or self._pull():
            yield self._cache[index]
            index += 1

    def __iter__(self) -> Iterator[T]:
        if not self._memoize:
            return iter(self._factory())
        return self._replay()

    def __add__(self, other: Iterable[T]) -> "LazySeq[T]":
        return self.concat(other)

    def __repr__(self) -> str:
        if not self._memoize:
            return "LazySeq.stream(...)"
        items = [repr(item) for item in self._cache]
        if not self._done:
            items.append("...")
        return f"LazySeq([{', '.join(items)}])"

    def _derive(self, factory: Callable[[], Iterable[U]]) -> "LazySeq[U]":
        if self._memoize:
            return LazySeq.defer(factory)
        return LazySeq.stream(factory)

    def map(self, f: Callable[[T], U]) -> "LazySeq[U]":
        return self._derive(lambda: (f(item) for item in self))

    def filter(self, pred: Callable[[T], bool]) -> "LazySeq[T]":
        return self._derive(lambda: (item for item in self if pred(item)))

    def take(self, n: int) -> "LazySeq[T]":
        return self._derive(lambda: islice(self, max(n, 0)))

    def concat(self, *others: Iterable[T]) -> "LazySeq[T]":
        return self._derive(lambda: chain(self, *others))

    def partition(self, n: int) -> "LazySeq[tuple[T, ...]]":
        """Group consecutive elements into tuples of exactly n items."""
        if n < 1:
            raise InvalidArgumentError(f"partition size must be positive, got {n}")

        def groups() -> Iterator[tuple[T, ...]]:
            iterator = iter(self)
            while True:
                group = tuple(islice(iterator, n))
                if len(group) < n:
                    return
                yield group

        return self._derive(groups)

    def take_nth(self, n: int) -> "LazySeq[T]":
        """Every nth element, starting with the first."""
        if n < 1:
            raise InvalidArgumentError(f"step must be positive, got {n}")
        return self._derive(lambda: islice(self, 0, None, n))

    def first(self) -> T | None:
        for item in self:
            return item
        return None

    def realize(self) -> list[T]:
        """Force the whole sequence into a list. Only for finite sequences."""
        return list(self)


def halves(n: int) -> LazySeq[int]:
    """n, n/2, n/4, ... truncated toward zero, stopping before 0."""

    def halving() -> Iterator[int]:
        current = n
        while current != 0:
            yield current
            current = -(-current // 2) if current < 0 else current // 2

    return LazySeq.defer(halving)
