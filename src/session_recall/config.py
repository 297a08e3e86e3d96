"""Plugin configuration.

The host hands the plugin a raw options mapping once at start-up.  It is
validated here into an immutable ``RecallConfig``; any invalid value fails
initialisation rather than an individual turn.

Classes
-------
- ConfigurationError  — raised for invalid or unreadable configuration
- RecallConfig        — validated, frozen plugin options

Functions
---------
- load_config  — read a YAML or JSON options file
"""
from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel


class ConfigurationError(ValueError):
    """Raised when plugin options fail validation or cannot be read."""


class RecallConfig(BaseModel):
    """Configuration parameters for session recall.

    Keys may be given in snake_case or in the host's camelCase form
    (``maxResults``, ``minScore``, ``minPromptLength``, ``agentId``).
    Unknown keys are rejected.

    Parameters
    ----------
    enabled:
        When False the plugin does not register its hook.  Default: True.
    max_results:
        Maximum number of excerpts injected per turn, 1-20.  Default: 5.
    min_score:
        Minimum decayed score an excerpt needs to be injected.  Default: 0.5.
    min_prompt_length:
        Prompts shorter than this never trigger a search.  Default: 10.
    agent_id:
        Agent scope passed to the search backend.  Default: ``"main"``.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    enabled: bool = True
    max_results: int = Field(default=5, ge=1, le=20)
    min_score: float = Field(default=0.5, ge=0.0, le=1.0)
    min_prompt_length: int = Field(default=10, ge=0)
    agent_id: str = Field(default="main", min_length=1)

    @classmethod
    def from_mapping(cls, raw: Mapping[str, object] | None) -> RecallConfig:
        """Validate ``raw`` host options into a ``RecallConfig``.

        ``None`` yields the defaults.

        Raises
        ------
        ConfigurationError
            If any option is unknown or out of range.
        """
        try:
            return cls.model_validate(dict(raw or {}))
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid session-recall options: {exc}") from exc


def load_config(path: str | Path) -> RecallConfig:
    """Read options from a YAML (or JSON) file and validate them.

    Parameters
    ----------
    path:
        File containing a single mapping of options.  An empty file yields
        the defaults.

    Returns
    -------
    RecallConfig
        The validated configuration.

    Raises
    ------
    ConfigurationError
        If the file cannot be read, is not a mapping, or fails validation.
    """
    config_path = Path(path)
    try:
        raw = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigurationError(f"Cannot read config file {config_path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Cannot parse config file {config_path}: {exc}") from exc

    if raw is None:
        return RecallConfig()
    if not isinstance(raw, Mapping):
        raise ConfigurationError(
            f"Config file {config_path} must contain a mapping, got {type(raw).__name__}."
        )
    return RecallConfig.from_mapping(raw)
