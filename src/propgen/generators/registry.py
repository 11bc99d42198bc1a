"""Generator Registry for looking up built-in generators by name."""

import logging
from typing import Callable

from propgen.generators.base import Generator

logger = logging.getLogger(__name__)

GeneratorFactory = Callable[[], Generator]


class GeneratorRegistry:
    """Registry of named generator factories.

    Maps short names like "ints" or "ascii-strings" to zero-argument
    factories, so generators can be selected from configuration files
    and the command line.
    """

    def __init__(self):
        self._factories: dict[str, GeneratorFactory] = {}
        self._descriptions: dict[str, str] = {}
        self._register_defaults()

    def _register_defaults(self) -> None:
        """Register the built-in generators."""
        from propgen.generators import combinators as gen

        self.register("ints", gen.ints, "Integers bounded by size")
        self.register("pos-ints", gen.pos_ints, "Non-negative integers bounded by size")
        self.register("neg-ints", gen.neg_ints, "Non-positive integers bounded by size")
        self.register("booleans", gen.booleans, "True or False, shrinks to False")
        self.register("chars", gen.chars, "Characters with codes 0-255")
        self.register("ascii-chars", gen.ascii_chars, "Printable ASCII characters")
        self.register("alpha-chars", gen.alpha_chars, "Letters")
        self.register("alpha-num-chars", gen.alpha_num_chars, "Letters and digits")
        self.register("strings", gen.strings, "Strings of characters 0-255")
        self.register("ascii-strings", gen.ascii_strings, "Printable ASCII strings")
        self.register("alpha-strings", gen.alpha_strings, "Strings of letters")
        self.register("alpha-num-strings", gen.alpha_num_strings, "Strings of letters and digits")
        self.register("any", gen.any_value, "Nested lists and dicts of simple values")
        self.register("any-printable", gen.any_printable, "Nested printable values")

    def register(self, name: str, factory: GeneratorFactory, description: str = "") -> None:
        """Register a generator factory under a name.

        Args:
            name: The lookup name
            factory: Zero-argument callable returning a Generator
            description: Human-readable description
        """
        logger.debug("registering generator %r", name)
        self._factories[name] = factory
        self._descriptions[name] = description

    def get(self, name: str) -> GeneratorFactory | None:
        """Get a generator factory by name, or None if not found."""
        return self._factories.get(name)

    def create(self, name: str) -> Generator | None:
        """Create a generator instance.

        Args:
            name: The registered name

        Returns:
            A generator or None if the name is not registered
        """
        factory = self.get(name)
        if factory is None:
            return None
        return factory()

    def describe(self, name: str) -> str:
        return self._descriptions.get(name, "")

    def list_names(self) -> list[str]:
        """List all registered generator names."""
        return list(self._factories.keys())

    def unregister(self, name: str) -> bool:
        """Remove a generator from the registry.

        Returns:
            True if removed, False if not found
        """
        if name in self._factories:
            del self._factories[name]
            self._descriptions.pop(name, None)
            return True
        return False

    def __contains__(self, name: str) -> bool:
        return name in self._factories

    def __len__(self) -> int:
        return len(self._factories)


_global_registry: GeneratorRegistry | None = None


def get_global_generator_registry() -> GeneratorRegistry:
    """Get the global generator registry singleton."""
    global _global_registry
    if _global_registry is None:
        _global_registry = GeneratorRegistry()
    return _global_registry
