"""
Unit tests for the iacmodel HCL loader.

Tests cover:
- HCL lexer tokenization
- Block and attribute line ranges
- Expression classification (literals, lists, references, unevaluated)
- Reference evaluation against literal values
- Parse error recovery
- Loading files and directories
"""

from __future__ import annotations

import pytest

from iacmodel.terraform import (
    ListLiteral,
    Literal,
    Traversal,
    Unevaluated,
    load_directory,
    load_file,
    load_path,
    load_source,
)
from iacmodel.terraform.loader import HCLLexer, TokenType


def _first_block(source: str):
    return next(load_source(source).blocks())


class TestHCLLexer:
    """Tests for HCL lexer tokenization."""

    def test_lexer_empty_content(self):
        """Test lexer handles empty content."""
        tokens = HCLLexer("").tokenize()
        assert len(tokens) == 1
        assert tokens[0].type == TokenType.EOF

    def test_lexer_simple_identifier(self):
        """Test lexer tokenizes identifiers."""
        tokens = HCLLexer("resource").tokenize()
        assert len(tokens) == 2
        assert tokens[0].type == TokenType.IDENTIFIER
        assert tokens[0].value == "resource"

    def test_lexer_string_with_escapes(self):
        """Test lexer handles escape sequences in strings."""
        tokens = HCLLexer(r'"line1\nline2\ttab"').tokenize()
        assert tokens[0].type == TokenType.STRING
        assert tokens[0].value == "line1\nline2\ttab"

    def test_lexer_keeps_interpolation(self):
        """Test interpolations stay verbatim inside strings."""
        tokens = HCLLexer('"${lookup(var.m, "k")}"').tokenize()
        assert tokens[0].type == TokenType.STRING
        assert tokens[0].value == '${lookup(var.m, "k")}'

    def test_lexer_numbers(self):
        """Test lexer tokenizes integers, floats and negatives."""
        tokens = HCLLexer("42 3.14 -100").tokenize()
        assert [t.value for t in tokens[:3]] == [42, 3.14, -100]

    def test_lexer_literals(self):
        """Test lexer tokenizes booleans and null."""
        tokens = HCLLexer("true false null").tokenize()
        assert [t.type for t in tokens[:3]] == [TokenType.BOOL, TokenType.BOOL, TokenType.NULL]
        assert tokens[0].value is True
        assert tokens[2].value is None

    def test_lexer_skips_comments(self):
        """Test lexer skips all comment styles."""
        tokens = HCLLexer("# one\n// two\n/* three\n */ name").tokenize()
        idents = [t for t in tokens if t.type == TokenType.IDENTIFIER]
        assert [t.value for t in idents] == ["name"]
        assert idents[0].line == 4

    def test_lexer_heredoc_spans_lines(self):
        """Test heredoc tokens record their first and last line."""
        tokens = HCLLexer("<<EOF\nline one\nline two\nEOF\n").tokenize()
        heredoc = tokens[0]
        assert heredoc.type == TokenType.HEREDOC
        assert heredoc.value == "line one\nline two"
        assert heredoc.line == 1
        assert heredoc.end_line == 4

    def test_lexer_operators(self):
        """Test comparison operators are single tokens."""
        tokens = HCLLexer('a == "b"').tokenize()
        assert tokens[1].type == TokenType.OPERATOR
        assert tokens[1].value == "=="


class TestBlockParsing:
    """Tests for block structure and ranges."""

    def test_resource_block(self):
        """Test resource labels become type and label."""
        block = _first_block('resource "azurerm_storage_account" "example" {\n}\n')
        assert block.kind == "resource"
        assert block.type_name == "azurerm_storage_account"
        assert block.label == "example"
        assert block.range.start_line == 1
        assert block.range.end_line == 2
        assert block.range.filename == "main.tf"

    def test_data_block(self):
        """Test data blocks keep their kind."""
        block = _first_block('data "azurerm_client_config" "current" {}\n')
        assert block.kind == "data"
        assert block.address == "data.azurerm_client_config.current"

    def test_other_top_level_blocks(self):
        """Test non-resource blocks use the keyword as type."""
        block = _first_block('variable "location" {\n  default = "westeurope"\n}\n')
        assert block.type_name == "variable"
        assert block.label == "location"

    def test_nested_block_ranges(self):
        """Test nested blocks carry their own ranges."""
        block = _first_block(
            'resource "a" "b" {\n'
            "  queue_properties {\n"
            "    logging {\n"
            "      read = true\n"
            "    }\n"
            "  }\n"
            "}\n"
        )
        queue = block.child("queue_properties")
        logging_block = queue.child("logging")
        assert (queue.range.start_line, queue.range.end_line) == (2, 6)
        assert (logging_block.range.start_line, logging_block.range.end_line) == (3, 5)
        assert logging_block.kind == "logging"
        assert logging_block.label == ""

    def test_attribute_ranges(self):
        """Test attribute ranges cover the whole value."""
        block = _first_block(
            'resource "a" "b" {\n'
            "  enabled = true\n"
            "  bypass = [\n"
            '    "Metrics",\n'
            '    "AzureServices",\n'
            "  ]\n"
            "}\n"
        )
        enabled = block.get_attribute("enabled")
        bypass = block.get_attribute("bypass")
        assert (enabled.range.start_line, enabled.range.end_line) == (2, 2)
        assert (bypass.range.start_line, bypass.range.end_line) == (3, 6)
        items = bypass.expression.items
        assert [i.range.start_line for i in items] == [4, 5]

    def test_custom_filename(self):
        """Test ranges record the given file name."""
        module_set = load_source('resource "a" "b" {}\n', filename="storage.tf")
        assert next(module_set.blocks()).range.filename == "storage.tf"


class TestExpressions:
    """Tests for expression classification."""

    def _expression(self, text: str):
        block = _first_block(f'resource "a" "b" {{\n  value = {text}\n}}\n')
        return block.get_attribute("value").expression

    def test_string_literal(self):
        """Test quoted strings are literals."""
        expression = self._expression('"TLS1_2"')
        assert isinstance(expression, Literal)
        assert expression.value == "TLS1_2"

    def test_list_literal(self):
        """Test lists keep their items."""
        expression = self._expression('["a", "b"]')
        assert isinstance(expression, ListLiteral)
        assert [i.value for i in expression.items] == ["a", "b"]

    def test_object_literal(self):
        """Test objects of literals become dict literals."""
        expression = self._expression('{ env = "prod", tier = 2 }')
        assert isinstance(expression, Literal)
        assert expression.value == {"env": "prod", "tier": 2}

    def test_reference(self):
        """Test bare references become traversals."""
        expression = self._expression("azurerm_storage_account.example.name")
        assert isinstance(expression, Traversal)
        assert expression.parts == ("azurerm_storage_account", "example", "name")

    def test_interpolated_reference(self):
        """Test a string holding only a reference becomes a traversal."""
        expression = self._expression('"${azurerm_storage_account.example.name}"')
        assert isinstance(expression, Traversal)
        assert expression.target == ("azurerm_storage_account", "example")

    def test_template_is_unevaluated(self):
        """Test string templates are not evaluated."""
        expression = self._expression('"prefix-${var.name}"')
        assert isinstance(expression, Unevaluated)

    def test_function_call_is_unevaluated(self):
        """Test function calls are not evaluated."""
        expression = self._expression('lower("ABC")')
        assert isinstance(expression, Unevaluated)
        assert expression.text == 'lower("ABC")'

    def test_index_is_unevaluated(self):
        """Test index expressions are not evaluated."""
        assert isinstance(self._expression("azurerm_storage_account.x[0].name"), Unevaluated)

    def test_splat_is_unevaluated(self):
        """Test splat expressions are not evaluated."""
        assert isinstance(self._expression("azurerm_storage_account.x.*.name"), Unevaluated)

    def test_conditional_is_unevaluated(self):
        """Test conditionals are not evaluated."""
        assert isinstance(self._expression('var.on ? "Allow" : "Deny"'), Unevaluated)

    def test_for_expression_is_unevaluated(self):
        """Test for expressions are not evaluated."""
        assert isinstance(self._expression("[for s in var.list : upper(s)]"), Unevaluated)


class TestReferenceEvaluation:
    """Tests for evaluation of references to literal values."""

    def test_resource_attribute(self):
        """Test references to literal attributes receive their value."""
        module_set = load_source(
            'resource "azurerm_storage_account" "example" {\n'
            '  name = "storageaccountname"\n'
            "}\n"
            'resource "azurerm_storage_container" "c" {\n'
            "  storage_account_name = azurerm_storage_account.example.name\n"
            "}\n"
        )
        container = module_set.find("azurerm_storage_container", "c")
        expression = container.get_attribute("storage_account_name").expression
        assert isinstance(expression, Traversal)
        assert expression.value == "storageaccountname"

    def test_locals_and_variables(self):
        """Test locals and variable defaults are evaluated."""
        module_set = load_source(
            'locals {\n  account = "fromlocal"\n}\n'
            'variable "account" {\n  default = "fromvar"\n}\n'
            'resource "t" "x" {\n'
            "  a = local.account\n"
            "  b = var.account\n"
            "  c = var.missing\n"
            "}\n"
        )
        block = module_set.find("t", "x")
        assert block.get_attribute("a").expression.value == "fromlocal"
        assert block.get_attribute("b").expression.value == "fromvar"
        assert block.get_attribute("c").expression.value is None

    def test_references_across_modules(self):
        """Test references resolve against other modules."""
        from iacmodel.terraform import build_module_set

        module_set = build_module_set(
            [
                (".", [("main.tf", 'resource "t" "x" {\n  ref = u.y.name\n}\n')]),
                ("child", [("child.tf", 'resource "u" "y" {\n  name = "n"\n}\n')]),
            ]
        )
        assert module_set.find("t", "x").get_attribute("ref").expression.value == "n"


class TestErrorRecovery:
    """Tests for parse error handling."""

    def test_malformed_block_is_skipped(self):
        """Test a broken block is reported and the next block still parses."""
        module_set = load_source(
            'resource "a" "broken" {\n'
            "  name =\n"
            "}\n"
            'resource "a" "ok" {\n'
            '  name = "fine"\n'
            "}\n"
        )
        module = module_set.root
        assert [b.label for b in module.blocks] == ["ok"]
        assert len(module.parse_errors) == 1
        assert module.parse_errors[0].startswith("main.tf:1:")

    def test_unclosed_block(self):
        """Test an unclosed block does not raise."""
        module_set = load_source('resource "a" "b" {\n  name = "x"\n')
        assert len(module_set.root.blocks) == 0
        assert module_set.root.parse_errors


class TestLoadFromDisk:
    """Tests for file and directory loading."""

    def test_load_file(self, tmp_path):
        """Test loading a single file."""
        path = tmp_path / "main.tf"
        path.write_text('resource "a" "b" {\n  name = "x"\n}\n')
        module_set = load_file(path)
        block = next(module_set.blocks())
        assert block.range.filename == str(path)

    def test_load_directory_modules(self, tmp_path):
        """Test each directory becomes one module, root first."""
        (tmp_path / "b.tf").write_text('resource "t" "second" {}\n')
        (tmp_path / "a.tf").write_text('resource "t" "first" {}\n')
        child = tmp_path / "modules" / "storage"
        child.mkdir(parents=True)
        (child / "main.tf").write_text('resource "t" "child" {}\n')
        hidden = tmp_path / ".terraform" / "modules"
        hidden.mkdir(parents=True)
        (hidden / "cached.tf").write_text('resource "t" "cached" {}\n')

        module_set = load_directory(tmp_path)
        assert len(module_set) == 2
        assert [b.label for b in module_set.root.blocks] == ["first", "second"]
        assert [b.label for b in module_set.modules[1].blocks] == ["child"]

    def test_load_directory_not_recursive(self, tmp_path):
        """Test non-recursive loading ignores subdirectories."""
        (tmp_path / "main.tf").write_text('resource "t" "x" {}\n')
        sub = tmp_path / "sub"
        sub.mkdir()
        (sub / "main.tf").write_text('resource "t" "y" {}\n')
        assert len(load_directory(tmp_path, recursive=False)) == 1

    def test_load_directory_undecodable_file(self, tmp_path):
        """Test a file that is not UTF-8 is reported and the rest still loads."""
        (tmp_path / "a.tf").write_text('resource "t" "kept" {}\n')
        (tmp_path / "b.tf").write_bytes(b'# caf\xe9\nresource "t" "lost" {}\n')
        (tmp_path / "c.tf").write_text('resource "t" "also_kept" {}\n')

        module_set = load_directory(tmp_path)
        assert [b.label for b in module_set.root.blocks] == ["kept", "also_kept"]
        assert len(module_set.root.parse_errors) == 1
        assert "b.tf" in module_set.root.parse_errors[0]

    def test_load_file_undecodable(self, tmp_path):
        """Test a single file that is not UTF-8 yields an empty module with an error."""
        path = tmp_path / "main.tf"
        path.write_bytes(b'# caf\xe9\n')
        module_set = load_file(path)
        assert len(module_set) == 1
        assert module_set.root.blocks == ()
        assert "main.tf" in module_set.root.parse_errors[0]

    def test_load_missing_directory(self, tmp_path):
        """Test a missing directory raises."""
        with pytest.raises(FileNotFoundError):
            load_directory(tmp_path / "missing")

    def test_load_path_dispatches(self, tmp_path):
        """Test load_path handles files and directories."""
        (tmp_path / "main.tf").write_text('resource "t" "x" {}\n')
        assert len(load_path(tmp_path)) == 1
        assert len(load_path(tmp_path / "main.tf")) == 1
