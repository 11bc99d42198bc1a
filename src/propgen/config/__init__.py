"""Config module - sampling settings and their YAML loader."""

from propgen.config.base import GeneratorConfig, SamplingConfig
from propgen.config.loader import ConfigLoader, load_config

__all__ = [
    "GeneratorConfig",
    "SamplingConfig",
    "ConfigLoader",
    "load_config",
]
