"""Tests for the combinator library."""

import itertools
import string
from collections import Counter

import pytest

from propgen.errors import InvalidArgumentError
from propgen.generators.base import Generator
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
    strings,
    such_that,
    tuples,
)
from propgen.generators.random_source import Random
from propgen.trees.base import RoseTree


def child_roots(tree):
    return [child.root for child in tree.children]


def nodes(tree, depth):
    return [value for _, value in tree.walk(depth)]


def nesting(value):
    if isinstance(value, list):
        return 1 + max((nesting(v) for v in value), default=0)
    if isinstance(value, dict):
        return 1 + max((nesting(v) for v in value.values()), default=0)
    return 0


def leaves(value):
    if isinstance(value, list):
        for v in value:
            yield from leaves(v)
    elif isinstance(value, dict):
        for v in value.values():
            yield from leaves(v)
    else:
        yield value


@pytest.fixture
def rng():
    return Random(2024)


class TestChoose:
    """Tests for choose."""

    @pytest.mark.parametrize("lower,upper", [(0, 0), (-5, 5), (3, 9), (-9, -3), (0, 1000)])
    def test_every_node_in_range(self, rng, lower, upper):
        gen = choose(lower, upper)
        for _ in range(20):
            tree = gen.call(rng, 0)
            assert all(lower <= value <= upper for value in nodes(tree, 3))

    def test_rejects_inverted_bounds(self):
        with pytest.raises(InvalidArgumentError):
            choose(5, 2)

    def test_shrinks_toward_zero(self, fixed_source):
        tree = choose(0, 100).call(fixed_source(0.99), 0)
        assert tree.root == 99
        assert tree.children.first().root == 0

    def test_shrinks_toward_lower_bound(self, fixed_source):
        tree = choose(5, 10).call(fixed_source(0.99), 0)
        assert tree.root == 10
        assert child_roots(tree) == [5, 8, 9]

    def test_negative_range_shrinks_toward_upper_bound(self, fixed_source):
        tree = choose(-10, -3).call(fixed_source(0.0), 0)
        assert tree.root == -10
        assert tree.children.first().root == -3

    def test_shrinking_reaches_zero(self, fixed_source):
        tree = choose(0, 100).call(fixed_source(0.99), 0)
        steps = 0
        while tree.children.first() is not None:
            last = tree.children.realize()[-1]
            assert abs(last.root) < abs(tree.root)
            tree = last
            steps += 1
        assert tree.root == 0
        assert steps == 99


class TestIntegers:
    """Tests for ints, pos_ints and neg_ints."""

    def test_bounded_by_size(self, rng):
        for size in range(0, 30):
            assert -size <= ints().call(rng, size).root <= size

    def test_size_zero(self, rng):
        assert ints().call(rng, 0).root == 0

    def test_pos_ints(self, rng):
        assert all(v >= 0 for v in pos_ints().take_samples(100, rng=rng))

    def test_neg_ints(self, rng):
        assert all(v <= 0 for v in neg_ints().take_samples(100, rng=rng))


class TestElements:
    """Tests for elements and booleans."""

    def test_shrinks_toward_earlier_elements(self, fixed_source):
        tree = elements("a", "b", "c").call(fixed_source(0.99), 0)
        assert tree.root == "c"
        assert child_roots(tree) == ["a", "b"]

    def test_accepts_a_list(self, rng):
        assert elements(["x", "y"]).call(rng, 0).root in ("x", "y")

    def test_requires_values(self):
        with pytest.raises(InvalidArgumentError):
            elements()
        with pytest.raises(InvalidArgumentError):
            elements([])

    def test_booleans_shrink_to_false(self, fixed_source):
        tree = booleans().call(fixed_source(0.99), 0)
        assert tree.root is True
        assert child_roots(tree) == [False]


class TestOneOf:
    """Tests for one_of."""

    def test_requires_two_generators(self):
        with pytest.raises(InvalidArgumentError):
            one_of(ints())
        with pytest.raises(InvalidArgumentError):
            one_of()

    def test_shrinks_toward_earlier_generators_and_within(self, fixed_source):
        tree = one_of(Generator.unit("a"), choose(10, 20)).call(fixed_source(0.99), 0)
        assert tree.root == 20
        assert child_roots(tree) == ["a", 10, 15, 18, 19]

    def test_accepts_a_list(self, rng):
        value = one_of([Generator.unit(1), Generator.unit(2)]).call(rng, 0).root
        assert value in (1, 2)


class TestFrequency:
    """Tests for frequency."""

    @pytest.mark.parametrize("args", [
        (),
        (1, Generator.unit(1)),
        (1, Generator.unit(1), 2),
        (-1, Generator.unit(1), 2, Generator.unit(2)),
        (0, Generator.unit(1), 0, Generator.unit(2)),
        ("1", Generator.unit(1), 2, Generator.unit(2)),
    ])
    def test_rejects_malformed_arguments(self, args):
        with pytest.raises(InvalidArgumentError):
            frequency(*args)

    def test_approximates_weights(self):
        gen = frequency(
            5, Generator.unit("A"),
            3, Generator.unit("B"),
            2, Generator.unit("C"),
        )
        counts = Counter(gen.take_samples(10000, rng=Random(1234)))
        assert counts["A"] / 10000 == pytest.approx(0.5, abs=0.03)
        assert counts["B"] / 10000 == pytest.approx(0.3, abs=0.03)
        assert counts["C"] / 10000 == pytest.approx(0.2, abs=0.03)

    def test_zero_weight_is_never_chosen(self, rng):
        gen = frequency(0, Generator.unit("never"), 1, Generator.unit("always"))
        assert set(gen.take_samples(200, rng=rng)) == {"always"}

    def test_shrinks_within_chosen_generator(self, fixed_source):
        tree = frequency(1, Generator.unit("A"), 1, choose(0, 10)).call(fixed_source(0.99), 0)
        assert tree.root == 10
        assert child_roots(tree) == [0, 5, 8, 9]


class TestTuples:
    """Tests for tuples."""

    def test_shrinks_each_position(self, fixed_source):
        tree = tuples(choose(0, 4), elements("x", "y")).call(fixed_source(0.99), 0)
        assert tree.root == (4, "y")
        assert child_roots(tree) == [(0, "y"), (2, "y"), (3, "y"), (4, "x")]

    def test_arity_never_changes(self, rng):
        gen = tuples([ints(), ints()])
        for _ in range(10):
            tree = gen.call(rng, 20)
            assert all(len(value) == 2 for value in nodes(tree, 3))

    def test_empty(self, rng):
        assert tuples().call(rng, 10).root == ()


class TestArraysOf:
    """Tests for arrays_of."""

    def test_length_bounded_by_size(self, rng):
        for size in range(0, 20):
            assert len(arrays_of(ints()).call(rng, size).root) <= size

    def test_size_zero_is_empty(self, rng):
        assert arrays_of(ints()).call(rng, 0).root == []

    def test_shrinks_length_and_elements(self, fixed_source):
        tree = arrays_of(choose(0, 9)).call(fixed_source(0.99), 3)
        assert tree.root == [9, 9, 9]
        roots = child_roots(tree)
        assert roots[0] == []
        assert [9, 9] in roots
        assert [0, 9, 9] in roots

    def test_can_shrink_to_empty(self, rng):
        for _ in range(10):
            tree = arrays_of(ints()).call(rng, 10)
            if tree.root:
                assert tree.children.first().root == []


class TestStrings:
    """Tests for characters and strings."""

    def test_chars(self, rng):
        assert all(0 <= ord(c) <= 255 for c in chars().take_samples(200, rng=rng))

    def test_ascii_chars(self, rng):
        assert all(32 <= ord(c) <= 126 for c in ascii_chars().take_samples(200, rng=rng))

    def test_alpha_chars(self, rng):
        for c in alpha_chars().take_samples(200, rng=rng):
            assert c in string.ascii_letters

    def test_alpha_num_chars(self, rng):
        for c in alpha_num_chars().take_samples(200, rng=rng):
            assert c in string.ascii_letters + string.digits

    def test_strings(self, rng):
        for s in strings().take_samples(50, rng=rng):
            assert isinstance(s, str)
            assert all(ord(c) <= 255 for c in s)

    def test_ascii_strings(self, rng):
        for s in ascii_strings().take_samples(50, rng=rng):
            assert s.isprintable()

    def test_alpha_strings(self, rng):
        for s in alpha_strings().take_samples(50, rng=rng):
            assert all(c in string.ascii_letters for c in s)

    def test_alpha_num_strings(self, rng):
        for s in alpha_num_strings().take_samples(50, rng=rng):
            assert all(c in string.ascii_letters + string.digits for c in s)

    def test_string_shrinks_to_empty(self, rng):
        tree = ascii_strings().call(rng, 20)
        if tree.root:
            assert tree.children.first().root == ""


class TestMaps:
    """Tests for maps and maps_with."""

    def test_maps(self, rng):
        for value in maps(elements("a", "b", "c"), ints()).take_samples(30, rng=rng):
            assert isinstance(value, dict)
            assert set(value) <= {"a", "b", "c"}

    def test_later_keys_overwrite_earlier(self, rng):
        counter = itertools.count()
        values = Generator(lambda rng, size: RoseTree.pure(next(counter)))
        gen = maps(elements("k"), values)
        for _ in range(10):
            result = gen.call(rng, 10).root
            if result:
                assert result == {"k": next(counter) - 1}

    def test_maps_with_keeps_keys(self, rng):
        gen = maps_with({"flag": booleans(), "count": ints()})
        tree = gen.call(rng, 10)
        assert list(tree.root) == ["flag", "count"]
        assert all(list(value) == ["flag", "count"] for value in nodes(tree, 3))

    def test_maps_with_empty_schema(self, rng):
        assert maps_with({}).call(rng, 10).root == {}


class TestSuchThatFunctions:
    """Tests for the function forms of such_that and not_empty."""

    def test_such_that(self, rng):
        gen = such_that(ints(), lambda x: x % 2 == 0, max_tries=50)
        assert all(v % 2 == 0 for v in gen.take_samples(50, rng=rng))

    def test_not_empty(self, rng):
        gen = not_empty(arrays_of(ints()), max_tries=50)
        for size in range(5, 15):
            assert gen.call(rng, size).root != []


class TestRecursive:
    """Tests for recursive and the any generators."""

    def test_height_is_bounded(self, rng):
        gen = recursive(lambda inner: tuples(inner), Generator.unit(0))
        heights = set()
        for _ in range(100):
            value = gen.call(rng, 10).root
            height = 0
            while isinstance(value, tuple):
                value = value[0]
                height += 1
            assert value == 0
            heights.add(height)
        assert heights <= set(range(1, MAX_RECURSION_HEIGHT + 1))
        assert len(heights) > 1

    def test_scalars_get_the_full_size(self, rng):
        gen = recursive(lambda inner: tuples(inner), Generator.sized(Generator.unit))
        value = gen.call(rng, 16).root
        while isinstance(value, tuple):
            value = value[0]
        assert value == 16

    def test_any_value_nesting_is_bounded(self, rng):
        for size in range(0, 20):
            value = any_value().call(rng, size).root
            assert nesting(value) <= MAX_RECURSION_HEIGHT

    def test_any_printable(self, rng):
        for size in range(0, 20):
            for leaf in leaves(any_printable().call(rng, size).root):
                if isinstance(leaf, str):
                    assert leaf.isprintable()
