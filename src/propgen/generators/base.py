"""Generator - the monad that sequences sampling decisions.

A Generator is a function of (RandomSource, size) to a RoseTree. It:
- Samples a root value from the random source
- Attaches the lazy tree of shrink candidates for that value
- Composes with other generators via fmap and bind

Generators never hold state, so one instance can be shared and called
any number of times.
"""

import logging
from functools import reduce
from itertools import cycle
from typing import Any, Callable, Generic, Iterable, TypeVar

from propgen.errors import GenerationExhaustedError
from propgen.generators.random_source import Random, RandomSource
from propgen.sequences.base import LazySeq
from propgen.trees.base import RoseTree

T = TypeVar("T")
U = TypeVar("U")

logger = logging.getLogger(__name__)

DEFAULT_MAX_SIZE = 100
DEFAULT_MAX_TRIES = 10


class Generator(Generic[T]):
    """A monadic generator producing lazy shrink trees."""

    __slots__ = ("_gen",)

    def __init__(self, gen: Callable[[RandomSource, int], Any]):
        self._gen = gen

    def call(self, rng: RandomSource, size: int) -> RoseTree[T]:
        """Invoke the generator with the given source and size.

        Args:
            rng: Source of randomness
            size: Magnitude hint; larger sizes widen the sampled range

        Returns:
            The generated value and its shrink tree
        """
        return self._gen(rng, size)

    __call__ = call

    # the random layer: these work on whatever the wrapped function returns,
    # public operations below lift them to trees
    # --------------------------------------------------

    @staticmethod
    def _pure_gen(value: Any) -> "Generator[Any]":
        return Generator(lambda rng, size: value)

    def _fmap_gen(self, k: Callable[[Any], Any]) -> "Generator[Any]":
        gen = self._gen
        return Generator(lambda rng, size: k(gen(rng, size)))

    def _bind_gen(self, k: Callable[[Any], "Generator[Any]"]) -> "Generator[Any]":
        gen = self._gen

        def bound(rng: RandomSource, size: int) -> Any:
            return k(gen(rng, size)).call(rng, size)

        return Generator(bound)

    @staticmethod
    def _sequence(generators: Iterable["Generator[Any]"]) -> "Generator[list[RoseTree[Any]]]":
        """Turn generators into a generator of the list of their trees."""
        generators = list(generators)
        return Generator(lambda rng, size: [gen.call(rng, size) for gen in generators])

    # monad
    # --------------------------------------------------

    @staticmethod
    def unit(value: T) -> "Generator[T]":
        """A generator that always returns value and never shrinks."""
        return Generator._pure_gen(RoseTree.pure(value))

    def fmap(self, f: Callable[[T], U]) -> "Generator[U]":
        """Map f over every value this generator produces, shrinks included."""
        return self._fmap_gen(lambda rose: rose.fmap(f))

    def bind(self, k: Callable[[T], "Generator[U]"]) -> "Generator[U]":
        """Feed the generated value to k and run the generator it returns.

        Every shrink of the original value is fed through k as well, so
        shrinking explores both the original choice and the value generated
        from it.
        """

        def from_tree(rose: RoseTree[T]) -> Generator[U]:
            def joined(rng: RandomSource, size: int) -> RoseTree[U]:
                return rose.fmap(k).fmap(lambda gen: gen.call(rng, size)).join()

            return Generator(joined)

        return self._bind_gen(from_tree)

    @staticmethod
    def sized(sized_gen: Callable[[int], "Generator[T]"]) -> "Generator[T]":
        """Build a generator from the size it is called with."""

        def gen(rng: RandomSource, size: int) -> RoseTree[T]:
            return sized_gen(size).call(rng, size)

        return Generator(gen)

    def resize(self, n: int) -> "Generator[T]":
        """A generator based on this one with size always bound to n."""
        return Generator(lambda rng, size: self.call(rng, n))

    @staticmethod
    def sequence(generators: Iterable["Generator[Any]"]) -> "Generator[list[Any]]":
        """Turn a list of generators into a generator of a list."""

        def step(acc: Generator[list[Any]], gen: Generator[Any]) -> Generator[list[Any]]:
            return acc.bind(lambda xs: gen.bind(lambda y: Generator.unit(xs + [y])))

        return reduce(step, generators, Generator.unit([]))

    # sampling
    # --------------------------------------------------

    @staticmethod
    def sizes(max_size: int) -> LazySeq[int]:
        """0, 1, ..., max_size, 0, 1, ... forever, as an uncached stream."""
        return LazySeq.stream(lambda: cycle(range(max_size + 1)))

    def samples(
        self,
        max_size: int = DEFAULT_MAX_SIZE,
        rng: RandomSource | None = None,
    ) -> LazySeq[T]:
        """An infinite stream of sampled values with sizes cycling up to max_size.

        The stream keeps no samples; each iteration draws fresh values from rng.
        """
        rng = rng if rng is not None else Random()
        return Generator.sizes(max_size).map(lambda size: self.call(rng, size).root)

    def take_samples(
        self,
        num: int = 10,
        max_size: int = DEFAULT_MAX_SIZE,
        rng: RandomSource | None = None,
    ) -> list[T]:
        """A list of num sampled values."""
        return self.samples(max_size, rng).take(num).realize()

    # fluent combinators
    # --------------------------------------------------

    def such_that(
        self,
        pred: Callable[[T], bool],
        max_tries: int = DEFAULT_MAX_TRIES,
    ) -> "Generator[T]":
        """A generator of values from this one that satisfy pred.

        At most max_tries attempts are made, the size growing by one on
        every retry. Shrinks never leave the set of values satisfying pred.

        Raises (when called):
            GenerationExhaustedError: If no attempt satisfied pred
        """

        def gen(rng: RandomSource, size: int) -> RoseTree[T]:
            for attempt in range(max_tries):
                rose = self.call(rng, size)
                if pred(rose.root):
                    return rose.filter(pred)
                logger.debug(
                    "such-that attempt %d/%d rejected %r at size %d",
                    attempt + 1, max_tries, rose.root, size,
                )
                size += 1
            logger.warning("such-that predicate unsatisfied after %d tries", max_tries)
            raise GenerationExhaustedError(max_tries)

        return Generator(gen)

    def not_empty(self, max_tries: int = DEFAULT_MAX_TRIES) -> "Generator[T]":
        """A generator of values from this one that are not empty."""
        return self.such_that(bool, max_tries)

    def into_arrays(self) -> "Generator[list[T]]":
        """A generator of lists whose elements come from this generator."""
        from propgen.generators.combinators import arrays_of

        return arrays_of(self)

    def maps_to(self, valgen: "Generator[U]") -> "Generator[dict[T, U]]":
        """A generator of dicts keyed by this generator's values."""
        from propgen.generators.combinators import maps

        return maps(self, valgen)

    def maps_from(self, keygen: "Generator[U]") -> "Generator[dict[U, T]]":
        """A generator of dicts whose values come from this generator."""
        from propgen.generators.combinators import maps

        return maps(keygen, self)
