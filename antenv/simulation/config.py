"""Config — load stimulus definitions and logging level from YAML.

New pheromone kinds are data, not code: a YAML file lists them and
``EnvironmentConfig.register_stimuli`` adds them to the process-wide
registry next to the predefined ``FORAGE`` signal.

Example::

    log_level: INFO
    stimuli:
      - name: ant:env:stimulus:alarm
        decay_factor: 0.3
        radius: 2
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from antenv.errors import ConfigError
from antenv.pheromones.stimulus import StimulusType, register_stimulus

logger = logging.getLogger(__name__)

_STIMULUS_KEYS = ("name", "decay_factor")


@dataclass
class EnvironmentConfig:
    """Environment-layer configuration.

    Attributes:
        log_level: Name of the logging level for ``configure_logging``.
        stimuli: Stimulus types to register on top of the predefined ones.
    """

    log_level: str = "WARNING"
    stimuli: list[StimulusType] = field(default_factory=list)

    @classmethod
    def from_yaml(cls, path: str | Path) -> EnvironmentConfig:
        """Load configuration from a YAML file.

        Args:
            path: Path to the YAML config file.

        Returns:
            A populated EnvironmentConfig instance.

        Raises:
            FileNotFoundError: If the config file does not exist.
            ConfigError: If the document has the wrong shape.
            InvalidStimulusError: If a stimulus has out-of-range values.
        """
        path = Path(path)
        with path.open("r") as f:
            data = yaml.safe_load(f) or {}
        config = cls.from_dict(data)
        logger.info(
            "Loaded %s: %d stimulus type(s)",
            path,
            len(config.stimuli),
        )
        return config

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> EnvironmentConfig:
        """Build configuration from an already-parsed mapping.

        Raises:
            ConfigError: If the mapping has the wrong shape.
            InvalidStimulusError: If a stimulus has out-of-range values.
        """
        if not isinstance(data, Mapping):
            msg = f"config must be a mapping, got {type(data).__name__}"
            raise ConfigError(msg)

        log_level = data.get("log_level", cls.log_level)
        if not isinstance(log_level, str) or not isinstance(
            logging.getLevelName(log_level.upper()),
            int,
        ):
            msg = f"unknown log_level {log_level!r}"
            raise ConfigError(msg)

        raw = data.get("stimuli", [])
        if not isinstance(raw, list):
            msg = f"stimuli must be a list, got {type(raw).__name__}"
            raise ConfigError(msg)

        return cls(
            log_level=log_level.upper(),
            stimuli=[_parse_stimulus(i, entry) for i, entry in enumerate(raw)],
        )

    def register_stimuli(self) -> list[StimulusType]:
        """Register every configured stimulus type.

        Returns:
            The registered instances, in config order.

        Raises:
            DuplicateStimulusError: If a name clashes with a different
                existing definition.
        """
        return [register_stimulus(stimulus) for stimulus in self.stimuli]

    def configure_logging(self) -> None:
        """Install a basic root handler at ``log_level``."""
        logging.basicConfig(level=self.log_level)


def _parse_stimulus(index: int, entry: Any) -> StimulusType:
    if not isinstance(entry, Mapping):
        msg = f"stimuli[{index}] must be a mapping"
        raise ConfigError(msg)
    missing = [key for key in _STIMULUS_KEYS if key not in entry]
    if missing:
        msg = f"stimuli[{index}] missing {', '.join(missing)}"
        raise ConfigError(msg)
    return StimulusType(
        name=entry["name"],
        decay_factor=entry["decay_factor"],
        radius=entry.get("radius", 0),
    )
