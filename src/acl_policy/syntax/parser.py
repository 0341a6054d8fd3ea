"""Recursive-descent parser turning lexer tokens into a syntax tree."""

from __future__ import annotations

from typing import List, Optional

from acl_policy.exceptions import PolicySyntaxError
from acl_policy.schemas.diagnostic import Diagnostic, SourceRange
from acl_policy.syntax.lexer import tokenize
from acl_policy.syntax.tokens import (
    COMMA,
    EOF,
    EQUALS,
    IDENT,
    LBRACE,
    LBRACKET,
    NUMBER,
    RBRACE,
    RBRACKET,
    STRING,
    Token,
)
from acl_policy.syntax.tree import (
    Attribute,
    Block,
    Body,
    Expression,
    File,
    Item,
    LiteralExpr,
    TupleExpr,
    VariableExpr,
)

_KEYWORD_LITERALS = {"true": True, "false": False, "null": None}

# Blocks and tuples share one budget; each level costs a few interpreter frames.
MAX_NESTING_DEPTH = 64


class Parser:
    """Parses a token stream into a ``File``.

    Raises ``PolicySyntaxError`` on the first syntax error.
    """

    def __init__(self, tokens: List[Token], filename: str) -> None:
        self.tokens = tokens
        self.filename = filename
        self._index = 0
        self._depth = 0

    def parse_file(self, source: str = "") -> File:
        body = self._parse_body(None, SourceRange.file_start(self.filename))
        return File(filename=self.filename, body=body, source=source)

    def _peek(self) -> Token:
        return self.tokens[self._index]

    def _next(self) -> Token:
        token = self.tokens[self._index]
        if token.type != EOF:
            self._index += 1
        return token

    def _range(self, token: Token) -> SourceRange:
        return token.range(self.filename)

    def _parse_body(self, open_brace: Optional[Token], missing_item_range: SourceRange) -> Body:
        items: List[Item] = []
        while True:
            token = self._peek()
            if token.type == EOF:
                if open_brace is not None:
                    raise self._error(
                        "Unclosed configuration block",
                        "There is no closing brace for this block before the end of the file. "
                        "This may be caused by incorrect brace nesting elsewhere in this file.",
                        open_brace,
                    )
                break
            if token.type == RBRACE and open_brace is not None:
                break
            if token.type != IDENT:
                raise self._error(
                    "Argument or block definition required",
                    "An argument or block definition is required here.",
                    token,
                )
            items.append(self._parse_item())

        end = self._peek()
        start = self._range(open_brace) if open_brace is not None else SourceRange.file_start(self.filename)
        return Body(items=tuple(items), range=start.through(self._range(end)), missing_item_range=missing_item_range)

    def _parse_item(self) -> Item:
        name = self._next()
        following = self._peek()
        if following.type == EQUALS:
            self._next()
            expr = self._parse_expression()
            name_range = self._range(name)
            return Attribute(name=name.value, expr=expr, name_range=name_range, range=name_range.through(expr.range))
        if following.type in (STRING, IDENT, LBRACE):
            return self._parse_block(name)
        raise self._error(
            "Argument or block definition required",
            "An argument or block definition is required here. "
            'To set an argument, use the equals sign "=" to introduce the argument value.',
            following,
        )

    def _parse_block(self, type_token: Token) -> Block:
        labels: List[str] = []
        label_ranges: List[SourceRange] = []
        while self._peek().type in (STRING, IDENT):
            label = self._next()
            labels.append(label.value)
            label_ranges.append(self._range(label))

        token = self._peek()
        if token.type != LBRACE:
            raise self._error(
                "Invalid block definition",
                'Either a quoted string block label or an opening brace ("{") is expected here.',
                token,
            )
        open_brace = self._next()

        type_range = self._range(type_token)
        def_range = type_range.through(label_ranges[-1]) if label_ranges else type_range
        self._enter(open_brace)
        body = self._parse_body(open_brace, def_range)
        self._depth -= 1
        close_brace = self._next()
        return Block(
            type=type_token.value,
            labels=tuple(labels),
            body=body,
            type_range=type_range,
            label_ranges=tuple(label_ranges),
            open_brace_range=self._range(open_brace),
            close_brace_range=self._range(close_brace),
        )

    def _parse_expression(self) -> Expression:
        token = self._peek()
        if token.type in (STRING, NUMBER):
            self._next()
            return LiteralExpr(value=token.value, range=self._range(token))
        if token.type == IDENT:
            self._next()
            if token.value in _KEYWORD_LITERALS:
                return LiteralExpr(value=_KEYWORD_LITERALS[token.value], range=self._range(token))
            return VariableExpr(name=token.value, range=self._range(token))
        if token.type == LBRACKET:
            return self._parse_tuple()
        if token.type == EOF:
            raise self._error(
                "Missing expression",
                "Expected the start of an expression, but found the end of the file.",
                token,
            )
        raise self._error(
            "Invalid expression",
            f"Expected the start of an expression, but found {token.describe()}.",
            token,
        )

    def _parse_tuple(self) -> TupleExpr:
        open_bracket = self._next()
        self._enter(open_bracket)
        items: List[Expression] = []
        while True:
            token = self._peek()
            if token.type == RBRACKET:
                close_bracket = self._next()
                break
            items.append(self._parse_expression())
            separator = self._peek()
            if separator.type == COMMA:
                self._next()
                continue
            if separator.type != RBRACKET:
                raise self._error(
                    "Missing item separator",
                    "Expected a comma to mark the beginning of the next item.",
                    separator,
                )
        self._depth -= 1
        return TupleExpr(
            items=tuple(items),
            range=self._range(open_bracket).through(self._range(close_bracket)),
        )

    def _enter(self, opening: Token) -> None:
        self._depth += 1
        if self._depth > MAX_NESTING_DEPTH:
            raise self._error(
                "Nesting too deep",
                f"Blocks and tuples may be nested at most {MAX_NESTING_DEPTH} levels deep.",
                opening,
            )

    def _error(self, summary: str, detail: str, token: Token) -> PolicySyntaxError:
        return PolicySyntaxError(Diagnostic(summary=summary, detail=detail, subject=self._range(token)))


def parse_source(source: str, filename: str) -> File:
    """Tokenize and parse ``source``. Raises ``PolicySyntaxError`` on malformed input."""
    tokens = tokenize(source, filename)
    return Parser(tokens, filename).parse_file(source)
