"""
CLI exception hierarchy.

Provides structured exceptions for CLI error handling with JSON serialization support.
"""

from dataclasses import dataclass, asdict


@dataclass
class CliError(Exception):
    """Base exception for CLI errors."""

    message: str
    exit_code: int = 2

    def __str__(self) -> str:
        """Return human-readable error message."""
        return self.message

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)
