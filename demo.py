#!/usr/bin/env python3
"""
Demo script showing basic usage of propgen.

Run this script after installing the package:
    pip install -e .
    python demo.py
"""

from propgen.generators.base import Generator
from propgen.generators.combinators import (
    any_printable,
    arrays_of,
    ascii_strings,
    booleans,
    choose,
    elements,
    frequency,
    ints,
    maps_with,
    tuples,
)
from propgen.generators.random_source import Random
from propgen.properties.base import for_all
from propgen.properties.shrinking import find_minimal


def demo_sampling(rng):
    """Demonstrate sampling values from generators."""
    print("=" * 60)
    print("1. SAMPLING GENERATORS")
    print("=" * 60)

    print(f"ints:          {ints().take_samples(8, rng=rng)}")
    print(f"booleans:      {booleans().take_samples(8, rng=rng)}")
    print(f"elements:      {elements('red', 'green', 'blue').take_samples(5, rng=rng)}")
    print(f"ascii strings: {ascii_strings().take_samples(4, max_size=10, rng=rng)}")
    print()


def demo_composition(rng):
    """Demonstrate composing generators."""
    print("=" * 60)
    print("2. COMPOSING GENERATORS")
    print("=" * 60)

    user = maps_with({
        "id": choose(1, 1000),
        "name": ascii_strings().not_empty(),
        "admin": booleans(),
        "tags": arrays_of(elements("new", "vip", "banned")),
    })
    for record in user.take_samples(3, max_size=8, rng=rng):
        print(f"  {record}")

    weighted = frequency(
        8, ints(),
        2, Generator.unit(None),
    )
    print(f"Mostly ints:   {weighted.take_samples(10, rng=rng)}")

    dependent = choose(1, 5).bind(lambda n: tuples([choose(0, 9)] * n))
    print(f"Dependent:     {dependent.take_samples(4, rng=rng)}")
    print(f"Nested:        {any_printable().take_samples(3, max_size=6, rng=rng)}")
    print()


def demo_shrink_tree(rng):
    """Demonstrate the shrink tree attached to a value."""
    print("=" * 60)
    print("3. SHRINK TREES")
    print("=" * 60)

    tree = arrays_of(choose(0, 20)).call(rng, 4)
    print(f"Generated: {tree.root}")
    print("First shrink candidates:")
    for child in tree.children.take(8):
        print(f"  {child.root}")
    print()


def demo_property(rng):
    """Demonstrate checking a property and shrinking a failure."""
    print("=" * 60)
    print("4. PROPERTIES AND SHRINKING")
    print("=" * 60)

    commutative = for_all([ints(), ints()], lambda a, b: a + b == b + a)
    outcomes = commutative.take_samples(100, rng=rng)
    print(f"a + b == b + a held for {sum(o.passed for o in outcomes)}/100 samples")

    def sorted_is_stable(xs):
        return sorted(xs) == xs

    prop = for_all([arrays_of(ints())], sorted_is_stable)
    for size in range(100):
        tree = prop.call(rng, size)
        if tree.root.failed:
            result = find_minimal(tree)
            print(f"sorted(xs) == xs failed for {tree.root.args[0]}")
            print(f"  shrunk in {result.shrinks} steps to {result.smallest.args[0]}")
            break
    print()


def main():
    """Run all demos."""
    print()
    print("*" * 60)
    print("*  PROPGEN DEMO")
    print("*" * 60)
    print()

    rng = Random(42)
    demo_sampling(rng)
    demo_composition(rng)
    demo_shrink_tree(rng)
    demo_property(rng)

    print("=" * 60)
    print("DEMO COMPLETE")
    print("=" * 60)


if __name__ == "__main__":
    main()
