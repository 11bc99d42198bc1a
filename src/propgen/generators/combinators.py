"""Combinators - generators built purely by composing other generators.

Covers numeric ranges, element and weighted choice, tuples, collections,
strings, maps, filtering and bounded recursive structures.
"""

from typing import Any, Callable, Sequence, TypeVar

from propgen.errors import InvalidArgumentError
from propgen.generators.base import DEFAULT_MAX_TRIES, Generator
from propgen.generators.random_source import RandomSource, rand_range
from propgen.sequences.base import LazySeq
from propgen.trees.base import RoseTree, int_rose_tree

T = TypeVar("T")
U = TypeVar("U")

MAX_RECURSION_HEIGHT = 5


def _get_args(args: tuple[Any, ...]) -> list[Any]:
    """Accept either varargs or a single list/tuple of them."""
    if len(args) == 1 and isinstance(args[0], (list, tuple)):
        return list(args[0])
    return list(args)


def _shrink_target(lower: int, upper: int) -> int:
    """The value in [lower, upper] closest to zero."""
    if lower > 0:
        return lower
    if upper < 0:
        return upper
    return 0


# numbers and choice
# --------------------------------------------------

def choose(lower: int, upper: int) -> Generator[int]:
    """Integers in the range lower to upper, inclusive.

    Shrinks toward the in-range value closest to zero, so choose(0, n)
    shrinks toward 0 and choose(5, 10) toward 5.

    Raises:
        InvalidArgumentError: If lower > upper
    """
    if lower > upper:
        raise InvalidArgumentError(f"lower bound {lower} exceeds upper bound {upper}")
    target = _shrink_target(lower, upper)

    def in_range(x: int) -> bool:
        return lower <= x <= upper

    def gen(rng: RandomSource, size: int) -> RoseTree[int]:
        value = rand_range(rng, lower, upper)
        return int_rose_tree(value, target).filter(in_range)

    return Generator(gen)


def ints() -> Generator[int]:
    """Positive or negative integers bounded by the size parameter."""
    return Generator.sized(lambda size: choose(-size, size))


def pos_ints() -> Generator[int]:
    """Non-negative integers bounded by the size parameter."""
    return ints().fmap(abs)


def neg_ints() -> Generator[int]:
    """Non-positive integers bounded by the size parameter."""
    return ints().fmap(lambda x: -abs(x))


def elements(*values: Any) -> Generator[Any]:
    """Values chosen from the given ones; shrinks toward earlier values.

    Example:
        elements("foo", "bar", "baz")
        elements(["foo", "bar", "baz"])
    """
    coll = _get_args(values)
    if not coll:
        raise InvalidArgumentError("elements() requires at least one value")
    return choose(0, len(coll) - 1).fmap(lambda index: coll[index])


def booleans() -> Generator[bool]:
    """True or False. Shrinks to False."""
    return elements(False, True)


def one_of(*generators: Generator[Any]) -> Generator[Any]:
    """Values from one randomly chosen generator.

    Shrinks toward earlier generators as well as shrinking the generated
    value itself.

    Example:
        one_of(booleans(), ints())
        one_of([booleans(), ints()])
    """
    gens = _get_args(generators)
    if len(gens) < 2:
        raise InvalidArgumentError(f"one_of() requires at least 2 generators, got {len(gens)}")
    return choose(0, len(gens) - 1).bind(lambda index: gens[index])


def frequency(*args: Any) -> Generator[Any]:
    """Values from generators picked according to their weights.

    A generator's chance is its weight divided by the sum of all weights.

    Example:
        frequency(
            5, ints(),
            3, booleans(),
            2, alpha_strings(),
        )
    """
    args_list = _get_args(args)
    if len(args_list) < 4 or len(args_list) % 2 != 0:
        raise InvalidArgumentError(
            "frequency() requires an even list of at least 4 weight/generator arguments"
        )
    flat = LazySeq(args_list)
    weights = flat.take_nth(2).realize()
    for weight in weights:
        if isinstance(weight, bool) or not isinstance(weight, int) or weight < 0:
            raise InvalidArgumentError(f"frequency() weights must be non-negative ints, got {weight!r}")
    total = sum(weights)
    if total < 1:
        raise InvalidArgumentError("frequency() requires a positive total weight")
    pairs = flat.partition(2).realize()

    def pick(rose: RoseTree[int]) -> Generator[Any]:
        n = rose.root
        for chance, gen in pairs:
            if n <= chance:
                return gen
            n -= chance
        raise AssertionError("draw outside the total weight")

    return choose(1, total)._bind_gen(pick)


# composites
# --------------------------------------------------

def tuples(*generators: Generator[Any]) -> Generator[tuple[Any, ...]]:
    """Tuples whose positions come from the given generators.

    Each position shrinks on its own; the tuple never changes length.

    Example:
        tuples(booleans(), ints())
        tuples([booleans(), ints()])
    """
    seq = Generator._sequence(_get_args(generators))
    return seq._fmap_gen(lambda roses: RoseTree.zip(tuple, roses))


def arrays_of(gen: Generator[T]) -> Generator[list[T]]:
    """Lists of values from gen, with length bounded by the size parameter.

    Shrinks both by dropping elements and by shrinking them.
    """
    length = Generator.sized(lambda size: choose(0, size))

    def of_length(num_rose: RoseTree[int]) -> Generator[list[T]]:
        seq = Generator._sequence(LazySeq.repeat(num_rose.root, gen))
        return seq._fmap_gen(lambda roses: RoseTree.shrink(list, roses))

    return length._bind_gen(of_length)


def maps(keygen: Generator[T], valgen: Generator[U]) -> Generator[dict[T, U]]:
    """Dicts with keys from keygen and values from valgen.

    Later duplicate keys overwrite earlier ones.
    """
    return tuples(keygen, valgen).into_arrays().fmap(dict)


def maps_with(schema: dict[Any, Generator[Any]]) -> Generator[dict[Any, Any]]:
    """Dicts with exactly the keys of schema, each value from its generator.

    Example:
        maps_with({"foo": booleans(), "bar": ints()})
    """
    keys = list(schema.keys())
    return tuples(list(schema.values())).fmap(lambda vals: dict(zip(keys, vals)))


def such_that(
    gen: Generator[T],
    pred: Callable[[T], bool],
    max_tries: int = DEFAULT_MAX_TRIES,
) -> Generator[T]:
    """Values from gen satisfying pred; see Generator.such_that."""
    return gen.such_that(pred, max_tries)


def not_empty(gen: Generator[T], max_tries: int = DEFAULT_MAX_TRIES) -> Generator[T]:
    return gen.not_empty(max_tries)


# characters and strings
# --------------------------------------------------

def chars() -> Generator[str]:
    """Characters with codes 0-255; may be unprintable."""
    return choose(0, 255).fmap(chr)


def ascii_chars() -> Generator[str]:
    """Printable ASCII characters."""
    return choose(32, 126).fmap(chr)


def alpha_num_chars() -> Generator[str]:
    return one_of(
        choose(48, 57),
        choose(65, 90),
        choose(97, 122),
    ).fmap(chr)


def alpha_chars() -> Generator[str]:
    return one_of(
        choose(65, 90),
        choose(97, 122),
    ).fmap(chr)


def _join(chars_list: Sequence[str]) -> str:
    return "".join(chars_list)


def strings() -> Generator[str]:
    """Strings that may contain unprintable characters."""
    return chars().into_arrays().fmap(_join)


def ascii_strings() -> Generator[str]:
    return ascii_chars().into_arrays().fmap(_join)


def alpha_num_strings() -> Generator[str]:
    return alpha_num_chars().into_arrays().fmap(_join)


def alpha_strings() -> Generator[str]:
    return alpha_chars().into_arrays().fmap(_join)


# recursive structures
# --------------------------------------------------

def simple_types() -> Generator[Any]:
    return one_of(ints(), chars(), strings(), booleans())


def simple_printable_types() -> Generator[Any]:
    return one_of(ints(), ascii_chars(), ascii_strings(), booleans())


def container_types(inner: Generator[Any]) -> Generator[Any]:
    """Lists of inner values, or dicts of them keyed by ints or strings."""
    return one_of(
        inner.into_arrays(),
        inner.maps_from(one_of(ints(), strings())),
    )


def _recursive_helper(
    container: Callable[[Generator[Any]], Generator[Any]],
    scalar: Generator[Any],
    scalar_size: int,
    children_size: int,
    height: int,
) -> Generator[Any]:
    if height == 0:
        return scalar.resize(scalar_size)
    inner = _recursive_helper(container, scalar, scalar_size, children_size, height - 1)
    return container(inner).resize(children_size)


def recursive(
    container: Callable[[Generator[Any]], Generator[Any]],
    scalar: Generator[Any],
) -> Generator[Any]:
    """Nested structures built by wrapping scalar in container.

    The nesting height is drawn from 1 to MAX_RECURSION_HEIGHT. Containers
    at every level are sized to size ** (1 / height), so the total number
    of scalars stays near size.
    """

    def at_size(size: int) -> Generator[Any]:
        def at_height(height: int) -> Generator[Any]:
            children_size = int(size ** (1 / height))
            return _recursive_helper(container, scalar, size, children_size, height)

        return choose(1, MAX_RECURSION_HEIGHT).bind(at_height)

    return Generator.sized(at_size)


def any_value() -> Generator[Any]:
    """Arbitrarily nested lists and dicts of simple values."""
    return recursive(container_types, simple_types())


def any_printable() -> Generator[Any]:
    """Like any_value, with printable characters only."""
    return recursive(container_types, simple_printable_types())
