"""Exceptions raised by propgen."""


class PropgenError(Exception):
    """Base class for all propgen errors."""


class InvalidArgumentError(PropgenError, ValueError):
    """A combinator was given malformed parameters."""


class GenerationExhaustedError(PropgenError, RuntimeError):
    """A such-that predicate could not be satisfied."""

    def __init__(self, max_tries: int):
        self.max_tries = max_tries
        super().__init__(
            f"couldn't satisfy such-that predicate after {max_tries} tries."
        )
