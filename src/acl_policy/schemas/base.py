"""Common schema utilities and base classes."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class SchemaBase(BaseModel):
    """Base model with common config for ACL policy schemas.

    Models are frozen: once the decoder has built them they are not mutated.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class Severity(str, Enum):
    WARNING = "warning"
    ERROR = "error"
