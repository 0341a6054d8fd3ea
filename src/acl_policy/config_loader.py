"""Parser settings and their YAML loader."""

from __future__ import annotations

import codecs
import logging
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from acl_policy.exceptions import ConfigLoadError
from acl_policy.suggestions import DEFAULT_SUGGESTION_CUTOFF

logger = logging.getLogger(__name__)


class ParserSettings(BaseModel):
    """Tunables for a ``parse`` invocation. Defaults suit ordinary use."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    suggestion_cutoff: float = Field(
        default=DEFAULT_SUGGESTION_CUTOFF,
        ge=0.0,
        le=1.0,
        description="Minimum similarity ratio for a \"Did you mean\" hint.",
    )
    warn_on_extra_policy_blocks: bool = Field(
        default=True,
        description="Emit a warning for each top-level policy block after the first.",
    )
    encoding: str = Field(default="utf-8", description="Text encoding of policy files.")

    @field_validator("encoding")
    @classmethod
    def _known_encoding(cls, value: str) -> str:
        try:
            codecs.lookup(value)
        except LookupError:
            raise ValueError(f"unknown encoding: {value}")
        return value


def load_parser_settings(path: Optional[Union[str, Path]] = None) -> ParserSettings:
    """Load settings from a YAML mapping, or return defaults when ``path`` is None.

    Raises:
        ConfigLoadError: If the file is missing, is not valid YAML, or holds
            unknown keys or invalid values.
    """
    if path is None:
        return ParserSettings()

    path = Path(path)
    if not path.exists():
        raise ConfigLoadError(path.name, "File not found")
    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigLoadError(path.name, f"Invalid YAML: {e}")
    except OSError as e:
        raise ConfigLoadError(path.name, str(e))

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigLoadError(path.name, "Expected a mapping of setting names to values")

    try:
        settings = ParserSettings.model_validate(data)
    except ValidationError as e:
        raise ConfigLoadError(path.name, str(e))
    logger.debug("Loaded parser settings from %s: %s", path, settings)
    return settings
