"""Sampling configuration.

A SamplingConfig declares how generators are sampled:
- Random seed
- Size bound and sample counts
- Retry and shrink limits
- Named generators with per-generator overrides

It contains no generation logic.
"""

from typing import Any

from pydantic import BaseModel, Field

from propgen.generators.base import DEFAULT_MAX_SIZE, DEFAULT_MAX_TRIES
from propgen.generators.random_source import Random
from propgen.properties.shrinking import DEFAULT_MAX_SHRINKS


class GeneratorConfig(BaseModel):
    """Overrides for one named generator."""

    size: int | None = Field(default=None, ge=0, description="Fixed size for this generator")
    count: int | None = Field(default=None, ge=1, description="Number of samples to take")
    options: dict[str, Any] = Field(default_factory=dict, description="Free-form options")


class SamplingConfig(BaseModel):
    """Settings for sampling and shrinking."""

    seed: int | None = Field(default=None, description="Random seed for reproducibility")
    max_size: int = Field(default=DEFAULT_MAX_SIZE, ge=0, description="Largest size sampled")
    num_samples: int = Field(default=10, ge=1, description="Samples taken per generator")
    max_tries: int = Field(
        default=DEFAULT_MAX_TRIES,
        ge=1,
        description="Attempts allowed for such-that predicates",
    )
    max_shrinks: int = Field(
        default=DEFAULT_MAX_SHRINKS,
        ge=0,
        description="Upper bound on shrink steps",
    )
    generators: dict[str, GeneratorConfig] = Field(
        default_factory=dict,
        description="Named generators to sample, with overrides",
    )

    def make_random(self) -> Random:
        """A random source seeded from this config."""
        return Random(self.seed)

    def count_for(self, name: str) -> int:
        """Number of samples to take from the named generator."""
        override = self.generators.get(name)
        if override is not None and override.count is not None:
            return override.count
        return self.num_samples

    def size_for(self, name: str) -> int | None:
        """Fixed size for the named generator, if any."""
        override = self.generators.get(name)
        return override.size if override is not None else None
