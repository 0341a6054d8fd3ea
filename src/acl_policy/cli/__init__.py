"""Command-line interface for the ACL policy parser."""

from .exceptions import CliError
from .main import build_parser, describe_document, main, run

__all__ = ["CliError", "build_parser", "describe_document", "main", "run"]
