from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from acl_policy.schemas.diagnostic import SourceRange

IDENT = "IDENT"
STRING = "STRING"
NUMBER = "NUMBER"
EQUALS = "EQUALS"
LBRACE = "LBRACE"
RBRACE = "RBRACE"
LBRACKET = "LBRACKET"
RBRACKET = "RBRACKET"
COMMA = "COMMA"
EOF = "EOF"

PUNCTUATION = {
    "=": EQUALS,
    "{": LBRACE,
    "}": RBRACE,
    "[": LBRACKET,
    "]": RBRACKET,
    ",": COMMA,
}


@dataclass(frozen=True)
class Token:
    type: str
    value: Optional[object]
    line: int
    column: int
    end_line: int
    end_column: int

    def range(self, filename: str) -> SourceRange:
        return SourceRange.at(filename, self.line, self.column, self.end_line, self.end_column)

    def describe(self) -> str:
        if self.type == EOF:
            return "the end of the file"
        if self.type == STRING:
            return "a quoted string"
        if self.type == NUMBER:
            return "a number"
        return f'"{self.value}"'

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"Token({self.type}, {self.value!r}, {self.line}:{self.column})"
