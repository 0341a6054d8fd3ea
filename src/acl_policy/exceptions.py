"""Exception hierarchy for the ACL policy parser.

Parsing itself reports problems as ``Diagnostic`` values; these exceptions are
used at the edges (convenience loaders, settings files, and internally to
unwind the lexer and parser on the first syntax error).
"""

from __future__ import annotations

from typing import List, Sequence

from .schemas.diagnostic import Diagnostic, error_diagnostics


class PolicyError(Exception):
    """Base exception for all ACL policy errors."""


class PolicySyntaxError(PolicyError):
    """Raised by the lexer and parser when the input is not a well-formed block document."""

    def __init__(self, diagnostic: Diagnostic) -> None:
        self.diagnostic = diagnostic
        super().__init__(diagnostic.render())


class PolicyParseError(PolicyError):
    """Raised by ``load_policy`` when parsing produced error diagnostics."""

    def __init__(self, filename: str, diagnostics: Sequence[Diagnostic]) -> None:
        self.filename = filename
        self.diagnostics: List[Diagnostic] = list(diagnostics)
        errors = error_diagnostics(self.diagnostics)
        lines = "\n".join(diag.render() for diag in errors)
        super().__init__(f"Failed to parse {filename} ({len(errors)} error(s)):\n{lines}")


class ConfigLoadError(PolicyError):
    """Raised when a parser settings file cannot be loaded."""

    def __init__(self, file_name: str, reason: str) -> None:
        self.file_name = file_name
        self.reason = reason
        super().__init__(f"Failed to load {file_name}: {reason}")
