from __future__ import annotations

import re
from typing import List, Tuple

from acl_policy.exceptions import PolicySyntaxError
from acl_policy.schemas.diagnostic import Diagnostic, SourceRange
from acl_policy.syntax.tokens import EOF, IDENT, NUMBER, PUNCTUATION, STRING, Token


_IDENT_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_-]*")
_NUMBER_RE = re.compile(r"-?[0-9]+(\.[0-9]+)?([eE][+-]?[0-9]+)?")

_ESCAPE_TABLE = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    '"': '"',
    "\\": "\\",
}

_WHITESPACE = " \t\r\n"


class Lexer:
    """Position-tracking lexer for the policy block dialect.

    Newlines are not significant; ``#`` and ``//`` start line comments and
    ``/* ... */`` encloses a block comment.
    """

    def __init__(self, source: str, filename: str) -> None:
        self.source = source
        self.filename = filename
        self._pos = 0
        self._line = 1
        self._column = 1

    def tokenize(self) -> List[Token]:
        tokens: List[Token] = []
        while True:
            self._skip_trivia()
            if self._pos >= len(self.source):
                tokens.append(Token(EOF, None, self._line, self._column, self._line, self._column))
                return tokens
            tokens.append(self._scan_token())

    def _advance(self, count: int) -> None:
        for ch in self.source[self._pos:self._pos + count]:
            if ch == "\n":
                self._line += 1
                self._column = 1
            else:
                self._column += 1
        self._pos += count

    def _skip_trivia(self) -> None:
        source = self.source
        while self._pos < len(source):
            ch = source[self._pos]
            if ch in _WHITESPACE:
                self._advance(1)
                continue
            if ch == "#" or source.startswith("//", self._pos):
                end = source.find("\n", self._pos)
                self._advance((len(source) if end == -1 else end) - self._pos)
                continue
            if source.startswith("/*", self._pos):
                end = source.find("*/", self._pos + 2)
                if end == -1:
                    raise self._error(
                        "Unterminated comment",
                        "There is no closing marker for this block comment.",
                        self._line,
                        self._column,
                        2,
                    )
                self._advance(end + 2 - self._pos)
                continue
            return

    def _scan_token(self) -> Token:
        ch = self.source[self._pos]
        line, column = self._line, self._column

        token_type = PUNCTUATION.get(ch)
        if token_type is not None:
            self._advance(1)
            return Token(token_type, ch, line, column, line, column + 1)

        if ch == '"':
            value, consumed = self._read_string()
            self._advance(consumed)
            return Token(STRING, value, line, column, line, column + consumed)

        match = _NUMBER_RE.match(self.source, self._pos)
        if match:
            text = match.group(0)
            try:
                value = float(text) if match.group(1) or match.group(2) else int(text)
            except ValueError:
                # int() refuses literals longer than sys.get_int_max_str_digits()
                raise self._error(
                    "Invalid number",
                    "This number literal has too many digits.",
                    line,
                    column,
                    len(text),
                ) from None
            self._advance(len(text))
            return Token(NUMBER, value, line, column, line, column + len(text))

        match = _IDENT_RE.match(self.source, self._pos)
        if match:
            text = match.group(0)
            self._advance(len(text))
            return Token(IDENT, text, line, column, line, column + len(text))

        raise self._error(
            "Invalid character",
            "This character is not used within the language.",
            line,
            column,
            1,
        )

    def _read_string(self) -> Tuple[str, int]:
        """Read a quoted string at the current position.

        Returns the decoded value and the number of source characters consumed,
        including both quotes.
        """
        source = self.source
        start = self._pos
        chars: List[str] = []
        i = start + 1
        while i < len(source):
            ch = source[i]
            if ch == '"':
                return "".join(chars), i + 1 - start
            if ch == "\n":
                break
            if ch == "\\":
                escaped, consumed = self._read_escape(i, start)
                chars.append(escaped)
                i += consumed
                continue
            chars.append(ch)
            i += 1
        raise self._error(
            "Unterminated template string",
            "No closing marker was found for the string.",
            self._line,
            self._column,
            1,
        )

    def _read_escape(self, index: int, string_start: int) -> Tuple[str, int]:
        source = self.source
        column = self._column + (index - string_start)
        selector = source[index + 1] if index + 1 < len(source) else ""
        if selector in _ESCAPE_TABLE:
            return _ESCAPE_TABLE[selector], 2
        if selector == "u":
            digits = source[index + 2:index + 6]
            if len(digits) == 4 and all(c in "0123456789abcdefABCDEF" for c in digits):
                return chr(int(digits, 16)), 6
            raise self._error(
                "Invalid escape sequence",
                "The \\u escape sequence must be followed by exactly four hexadecimal digits.",
                self._line,
                column,
                2,
            )
        raise self._error(
            "Invalid escape sequence",
            f'The symbol "{selector}" is not a valid escape sequence selector.',
            self._line,
            column,
            2,
        )

    def _error(self, summary: str, detail: str, line: int, column: int, width: int) -> PolicySyntaxError:
        subject = SourceRange.at(self.filename, line, column, line, column + width)
        return PolicySyntaxError(Diagnostic(summary=summary, detail=detail, subject=subject))


def tokenize(source: str, filename: str) -> List[Token]:
    return Lexer(source, filename).tokenize()
