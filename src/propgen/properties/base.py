"""Property application - turning a property function into outcome records.

for_all builds a generator of Outcomes. Each Outcome records:
- The property function
- The generated arguments
- The function's return value, or the error it raised

A raised error is captured as data in the outcome instead of propagating,
so generation never aborts on a failing property.
"""

from typing import Any, Callable, Sequence

from pydantic import BaseModel, ConfigDict, Field

from propgen.generators.base import Generator
from propgen.generators.combinators import tuples


class CapturedError(BaseModel):
    """An error raised by a property function, kept as a result value."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    exception: Exception = Field(..., description="The raised exception")

    @property
    def type_name(self) -> str:
        return type(self.exception).__name__

    @property
    def message(self) -> str:
        return str(self.exception)

    def __str__(self) -> str:
        return f"{self.type_name}: {self.message}"


class Outcome(BaseModel):
    """The result of applying a property function to generated arguments."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    result: Any = Field(..., description="Return value, or a CapturedError")
    function: Callable[..., Any] = Field(..., description="The property function")
    args: tuple[Any, ...] = Field(default=(), description="Arguments the function was applied to")

    @property
    def raised(self) -> bool:
        return isinstance(self.result, CapturedError)

    @property
    def passed(self) -> bool:
        return not self.raised and bool(self.result)

    @property
    def failed(self) -> bool:
        return not self.passed


def apply_property(f: Callable[..., Any], args: Sequence[Any]) -> Outcome:
    """Apply f to args, capturing any raised Exception as the result."""
    args = tuple(args)
    try:
        result = f(*args)
    except Exception as e:
        result = CapturedError(exception=e)
    return Outcome(result=result, function=f, args=args)


def for_all(arg_generators: Sequence[Generator[Any]], f: Callable[..., Any]) -> Generator[Outcome]:
    """A generator of outcomes of f applied to generated arguments.

    Example:
        for_all([ints(), ints()], lambda a, b: a + b == b + a)
    """
    return tuples(list(arg_generators)).fmap(lambda args: apply_property(f, args))
