"""Config Loader for loading sampling configuration from YAML files."""

from pathlib import Path
from typing import Any

import yaml

from propgen.config.base import GeneratorConfig, SamplingConfig

SETTING_KEYS = ("seed", "max_size", "num_samples", "max_tries", "max_shrinks")


class ConfigLoader:
    """Loads sampling configuration from YAML files."""

    def load_file(self, path: Path | str) -> SamplingConfig:
        """Load a config from a YAML file.

        Args:
            path: Path to the YAML file

        Returns:
            Loaded SamplingConfig instance
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f)

        return self._parse_config(data or {})

    def load_from_string(self, content: str) -> SamplingConfig:
        """Load a config from a YAML string."""
        data = yaml.safe_load(content)
        return self._parse_config(data or {})

    def _parse_config(self, data: dict[str, Any]) -> SamplingConfig:
        """Parse config data from YAML structure.

        Generators may be given as a list of names or as a mapping of
        names to overrides.
        """
        raw_generators = data.get("generators", {}) or {}
        if isinstance(raw_generators, list):
            raw_generators = {name: {} for name in raw_generators}

        generators = {
            name: GeneratorConfig(**(overrides or {}))
            for name, overrides in raw_generators.items()
        }

        settings = {key: data[key] for key in SETTING_KEYS if key in data}
        return SamplingConfig(**settings, generators=generators)

    def save_file(self, config: SamplingConfig, path: Path | str) -> None:
        """Save a config to a YAML file.

        Args:
            config: The config to save
            path: Path for the output file
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            yaml.dump(self._config_to_dict(config), f, default_flow_style=False, sort_keys=False)

    def _config_to_dict(self, config: SamplingConfig) -> dict[str, Any]:
        """Convert a SamplingConfig to a dictionary for YAML serialization."""
        return {
            **{key: getattr(config, key) for key in SETTING_KEYS},
            "generators": {
                name: overrides.model_dump(exclude_defaults=True)
                for name, overrides in config.generators.items()
            },
        }


def load_config(path: Path | str) -> SamplingConfig:
    """Convenience function to load a config from a file."""
    loader = ConfigLoader()
    return loader.load_file(path)
