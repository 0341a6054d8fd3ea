"""Positioned diagnostics produced by the syntax loader and the decoder."""

from __future__ import annotations

from typing import Iterable, List, Optional

from pydantic import Field

from .base import SchemaBase, Severity


class SourcePos(SchemaBase):
    line: int = Field(ge=1)
    column: int = Field(ge=1)


class SourceRange(SchemaBase):
    """A span of source text. ``end`` is exclusive on its column."""

    filename: str
    start: SourcePos
    end: SourcePos

    @classmethod
    def at(cls, filename: str, line: int, column: int, end_line: int, end_column: int) -> "SourceRange":
        return cls(
            filename=filename,
            start=SourcePos(line=line, column=column),
            end=SourcePos(line=end_line, column=end_column),
        )

    @classmethod
    def file_start(cls, filename: str) -> "SourceRange":
        return cls.at(filename, 1, 1, 1, 1)

    def through(self, other: "SourceRange") -> "SourceRange":
        """Return a range spanning from the start of this one to the end of ``other``."""
        return SourceRange(filename=self.filename, start=self.start, end=other.end)

    def __str__(self) -> str:
        if self.start.line == self.end.line:
            return f"{self.filename}:{self.start.line},{self.start.column}-{self.end.column}"
        return (
            f"{self.filename}:{self.start.line},{self.start.column}"
            f"-{self.end.line},{self.end.column}"
        )


class Diagnostic(SchemaBase):
    """A single defect in the input, renderable as ``<range>: <summary>; <detail>``.

    ``hint`` holds a suggested replacement name; when set, rendering appends
    ``Did you mean "<hint>"?`` to the detail.
    """

    severity: Severity = Field(default=Severity.ERROR)
    summary: str
    detail: str = ""
    subject: SourceRange
    hint: Optional[str] = Field(default=None)

    @property
    def filename(self) -> str:
        return self.subject.filename

    @property
    def start_line(self) -> int:
        return self.subject.start.line

    @property
    def start_column(self) -> int:
        return self.subject.start.column

    @property
    def end_line(self) -> int:
        return self.subject.end.line

    @property
    def end_column(self) -> int:
        return self.subject.end.column

    def render(self) -> str:
        text = f"{self.subject}: {self.summary}"
        if self.detail:
            text += f"; {self.detail}"
        if self.hint:
            text += f' Did you mean "{self.hint}"?'
        return text

    def __str__(self) -> str:
        return self.render()


def has_errors(diagnostics: Iterable[Diagnostic]) -> bool:
    return any(diag.severity == Severity.ERROR for diag in diagnostics)


def error_diagnostics(diagnostics: Iterable[Diagnostic]) -> List[Diagnostic]:
    return [diag for diag in diagnostics if diag.severity == Severity.ERROR]


def sort_diagnostics(diagnostics: Iterable[Diagnostic]) -> List[Diagnostic]:
    """Order diagnostics by file then start position, keeping production order on ties."""
    return sorted(
        diagnostics,
        key=lambda diag: (diag.filename, diag.start_line, diag.start_column),
    )
