from pathlib import Path

import pytest

from acl_policy.exceptions import PolicySyntaxError
from acl_policy.syntax import Block, LiteralExpr, TupleExpr, VariableExpr, load_file, load_source
from acl_policy.syntax.lexer import tokenize
from acl_policy.syntax.parser import MAX_NESTING_DEPTH


def _types(source: str) -> list:
    return [token.type for token in tokenize(source, "t.hcl")]


def _syntax_error(source: str):
    file, diagnostics = load_source(source, "t.hcl")
    assert file is None
    assert len(diagnostics) == 1
    return diagnostics[0]


class TestLexer:
    def test_token_types(self) -> None:
        assert _types('node "a" { policy = "w" }') == [
            "IDENT", "STRING", "LBRACE", "IDENT", "EQUALS", "STRING", "RBRACE", "EOF",
        ]

    def test_comments_are_skipped(self) -> None:
        source = '# hash\n// slashes\n/* block\n comment */ acl = "x"'
        tokens = tokenize(source, "t.hcl")
        assert [token.type for token in tokens] == ["IDENT", "EQUALS", "STRING", "EOF"]
        assert (tokens[0].line, tokens[0].column) == (4, 13)

    def test_positions_are_one_based_with_exclusive_end(self) -> None:
        tokens = tokenize('policy {\n  acl = "read"\n}', "t.hcl")
        acl = tokens[2]
        assert (acl.line, acl.column, acl.end_line, acl.end_column) == (2, 3, 2, 6)
        read = tokens[4]
        assert (read.column, read.end_column) == (9, 15)

    def test_string_escapes(self) -> None:
        tokens = tokenize(r'x = "a\"b\nA\\"', "t.hcl")
        assert tokens[2].value == 'a"b\nA\\'

    def test_numbers(self) -> None:
        values = [token.value for token in tokenize("[-5, 2.5, 1e3]", "t.hcl") if token.type == "NUMBER"]
        assert values == [-5, 2.5, 1000.0]

    def test_identifiers_may_contain_dashes(self) -> None:
        tokens = tokenize("node-prefix", "t.hcl")
        assert tokens[0].value == "node-prefix"

    def test_invalid_escape_raises(self) -> None:
        with pytest.raises(PolicySyntaxError) as exc_info:
            tokenize(r'x = "\q"', "t.hcl")
        diag = exc_info.value.diagnostic
        assert diag.summary == "Invalid escape sequence"
        assert str(diag.subject) == "t.hcl:1,6-8"


class TestSyntaxErrors:
    def test_unterminated_string(self) -> None:
        diag = _syntax_error('acl = "read\n')
        assert str(diag) == "t.hcl:1,7-8: Unterminated template string; No closing marker was found for the string."

    def test_invalid_character(self) -> None:
        diag = _syntax_error('policy { acl = "x" ; }')
        assert str(diag) == "t.hcl:1,20-21: Invalid character; This character is not used within the language."

    def test_unterminated_block_comment(self) -> None:
        diag = _syntax_error('policy { /* acl = "x" }')
        assert diag.summary == "Unterminated comment"
        assert (diag.start_line, diag.start_column) == (1, 10)

    def test_unclosed_block(self) -> None:
        diag = _syntax_error('policy {\n  node "a" {\n')
        assert diag.summary == "Unclosed configuration block"
        assert str(diag.subject) == "t.hcl:2,12-13"

    def test_stray_closing_brace(self) -> None:
        diag = _syntax_error('policy { acl = "x" }\n}')
        assert diag.summary == "Argument or block definition required"
        assert (diag.start_line, diag.start_column) == (2, 1)

    def test_bare_identifier(self) -> None:
        diag = _syntax_error("policy { acl }")
        assert diag.summary == "Argument or block definition required"
        assert diag.detail.endswith('use the equals sign "=" to introduce the argument value.')

    def test_label_without_body(self) -> None:
        diag = _syntax_error('node "a" = "b"')
        assert diag.summary == "Invalid block definition"
        assert str(diag.subject) == "t.hcl:1,10-11"

    def test_missing_expression(self) -> None:
        diag = _syntax_error("acl =")
        assert str(diag) == (
            "t.hcl:1,6-6: Missing expression; Expected the start of an expression, but found the end of the file."
        )

    def test_invalid_expression(self) -> None:
        diag = _syntax_error("policy { acl = }")
        assert diag.detail == 'Expected the start of an expression, but found "}".'

    def test_tuple_missing_separator(self) -> None:
        diag = _syntax_error('x = ["a" "b"]')
        assert diag.summary == "Missing item separator"

    def test_oversized_integer(self) -> None:
        diag = _syntax_error("acl = " + "9" * 5000)
        assert diag.summary == "Invalid number"
        assert str(diag.subject) == "t.hcl:1,7-5007"

    def test_deeply_nested_blocks(self) -> None:
        source = 'policy { acl = "read" ' + "x { " * 400 + "}" * 400 + " }"
        diag = _syntax_error(source)
        assert diag.summary == "Nesting too deep"
        # the 64th "x" block is the 65th level; its brace is at column 23 + 63 * 4 + 2
        assert str(diag.subject) == "t.hcl:1,277-278"

    def test_deeply_nested_tuples(self) -> None:
        diag = _syntax_error("acl = " + "[" * 600 + "]" * 600)
        assert diag.summary == "Nesting too deep"
        assert str(diag.subject) == "t.hcl:1,71-72"

    def test_nesting_at_the_limit_parses(self) -> None:
        file, diagnostics = load_source("acl = " + "[" * MAX_NESTING_DEPTH + "]" * MAX_NESTING_DEPTH, "t.hcl")
        assert diagnostics == []
        assert isinstance(file.body.attributes[0].expr, TupleExpr)


class TestTree:
    def test_blocks_labels_and_attributes(self) -> None:
        file, diagnostics = load_source('policy {\n  acl = "read"\n  node "web" { policy = "write" }\n}\n', "t.hcl")
        assert diagnostics == []
        (policy,) = file.body.blocks
        assert isinstance(policy, Block)
        assert policy.type == "policy"
        assert policy.labels == ()
        assert [attr.name for attr in policy.body.attributes] == ["acl"]
        (node,) = policy.body.blocks
        assert node.labels == ("web",)
        assert str(node.def_range) == "t.hcl:3,3-13"
        assert str(node.range) == "t.hcl:3,3-34"
        assert str(policy.range) == "t.hcl:1,1-4,2"

    def test_identifier_labels(self) -> None:
        file, _ = load_source("node web { }", "t.hcl")
        assert file.body.blocks[0].labels == ("web",)

    def test_expressions(self) -> None:
        file, diagnostics = load_source('a = "s"\nb = 3\nc = false\nd = null\ne = ref\nf = ["x", 1,]\n', "t.hcl")
        assert diagnostics == []
        exprs = {attr.name: attr.expr for attr in file.body.attributes}
        assert exprs["a"] == LiteralExpr(value="s", range=exprs["a"].range)
        assert exprs["b"].value == 3
        assert exprs["c"].value is False
        assert exprs["d"].type_name == "null"
        assert isinstance(exprs["e"], VariableExpr)
        assert isinstance(exprs["f"], TupleExpr)
        assert [item.value for item in exprs["f"].items] == ["x", 1]
        assert str(exprs["f"].range) == "t.hcl:6,5-14"

    def test_items_keep_source_order(self) -> None:
        file, _ = load_source('a = "1"\nb { }\nc = "2"\nd { }\n', "t.hcl")
        names = [getattr(item, "name", None) or item.type for item in file.body.items]
        assert names == ["a", "b", "c", "d"]

    def test_byte_order_mark_is_ignored(self) -> None:
        file, diagnostics = load_source('\ufeffacl = "x"', "t.hcl")
        assert diagnostics == []
        assert file.body.attributes[0].name_range.start.column == 1


class TestLoadFile:
    def test_reads_file(self, tmp_path: Path) -> None:
        path = tmp_path / "p.hcl"
        path.write_text('policy { acl = "read" }')
        file, diagnostics = load_file(path)
        assert diagnostics == []
        assert file.filename == str(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        path = tmp_path / "missing.hcl"
        file, diagnostics = load_file(path)
        assert file is None
        assert diagnostics[0].summary == "Failed to read file"
        assert diagnostics[0].filename == str(path)

    def test_directory_is_unreadable(self, tmp_path: Path) -> None:
        file, diagnostics = load_file(tmp_path)
        assert file is None
        assert diagnostics[0].summary == "Failed to read file"

    def test_invalid_utf8(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.hcl"
        path.write_bytes(b'acl = "\xff"')
        file, diagnostics = load_file(path)
        assert file is None
        assert diagnostics[0].summary == "Invalid file encoding"
        assert diagnostics[0].detail.endswith("is not valid UTF-8.")
