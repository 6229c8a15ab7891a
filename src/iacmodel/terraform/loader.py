"""
HCL source loader for iacmodel.

Builds Module Sets from Terraform (.tf) source so the adapters can run
against real files and inline fixtures. This is a minimal front end, not a
full HCL implementation: it records precise line ranges for every block,
attribute and list element, turns plain references into Traversals, and
marks everything else it cannot evaluate as Unevaluated.

Supported HCL constructs:
- Top-level and nested blocks with any number of labels
- Strings, heredocs, numbers, booleans, null, lists and objects
- References (a.b.c and "${a.b.c}")
- Comments (single-line # and //, multi-line /* */)

References of the form type.label.attribute, local.name and var.name are
given the target's literal value when there is one; nothing else is
evaluated.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field, replace
from enum import Enum, auto
from pathlib import Path
from typing import Any

from iacmodel.terraform.block import Block
from iacmodel.terraform.expressions import (
    Attribute,
    Expression,
    ListLiteral,
    Literal,
    Traversal,
    Unevaluated,
)
from iacmodel.terraform.module import Module, ModuleSet
from iacmodel.types import Range

logger = logging.getLogger(__name__)

TERRAFORM_EXTENSIONS = (".tf",)

_INTERPOLATED_REFERENCE = re.compile(r"^\$\{\s*([A-Za-z_][\w-]*(?:\.[\w-]+)+)\s*\}$")


class TokenType(Enum):
    """Token types for HCL lexer."""

    IDENTIFIER = auto()
    STRING = auto()
    NUMBER = auto()
    BOOL = auto()
    NULL = auto()
    LBRACE = auto()
    RBRACE = auto()
    LBRACKET = auto()
    RBRACKET = auto()
    LPAREN = auto()
    RPAREN = auto()
    EQUALS = auto()
    COMMA = auto()
    DOT = auto()
    COLON = auto()
    OPERATOR = auto()
    NEWLINE = auto()
    HEREDOC = auto()
    EOF = auto()


@dataclass
class Token:
    """A lexer token spanning one or more lines."""

    type: TokenType
    value: Any
    line: int
    end_line: int = 0

    def __post_init__(self) -> None:
        if not self.end_line:
            self.end_line = self.line


_PUNCTUATION = {
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "=": TokenType.EQUALS,
    ",": TokenType.COMMA,
    ".": TokenType.DOT,
    ":": TokenType.COLON,
}

_OPERATOR_CHARS = "?!<>*/%&|+-"


class HCLSyntaxError(ValueError):
    """Raised by the parser on input it cannot recover from locally."""

    pass


class HCLLexer:
    """
    Lexer for HCL (HashiCorp Configuration Language).

    Tokenizes HCL content into a stream of tokens, tracking the first and
    last line of every token.
    """

    def __init__(self, content: str) -> None:
        """Initialize the lexer with content."""
        self._content = content
        self._pos = 0
        self._line = 1
        self._tokens: list[Token] = []

    def tokenize(self) -> list[Token]:
        """Tokenize the content and return list of tokens."""
        while self._pos < len(self._content):
            self._skip_whitespace_and_comments()
            if self._pos >= len(self._content):
                break

            char = self._current()

            if char == "\n":
                self._emit(TokenType.NEWLINE, "\n")
                self._advance()
            elif char == "=" and self._peek() and self._peek() in "=>":
                self._emit(TokenType.OPERATOR, char + self._peek())
                self._advance()
                self._advance()
            elif char in _PUNCTUATION:
                self._emit(_PUNCTUATION[char], char)
                self._advance()
            elif char == '"':
                self._read_string()
            elif char == "<" and self._peek() == "<":
                self._read_heredoc()
            elif char.isdigit() or (char == "-" and self._peek().isdigit()):
                self._read_number()
            elif char.isalpha() or char == "_":
                self._read_identifier()
            elif char in _OPERATOR_CHARS:
                self._emit(TokenType.OPERATOR, char)
                self._advance()
            else:
                # Skip unknown characters
                self._advance()

        self._emit(TokenType.EOF, None)
        return self._tokens

    def _emit(self, token_type: TokenType, value: Any, line: int | None = None) -> None:
        start = line if line is not None else self._line
        self._tokens.append(Token(token_type, value, start, self._line))

    def _current(self) -> str:
        if self._pos < len(self._content):
            return self._content[self._pos]
        return ""

    def _peek(self, offset: int = 1) -> str:
        pos = self._pos + offset
        if pos < len(self._content):
            return self._content[pos]
        return ""

    def _advance(self) -> str:
        char = self._current()
        self._pos += 1
        if char == "\n":
            self._line += 1
        return char

    def _skip_whitespace_and_comments(self) -> None:
        while self._pos < len(self._content):
            char = self._current()

            if char in " \t\r":
                self._advance()
            elif char == "#" or (char == "/" and self._peek() == "/"):
                while self._current() and self._current() != "\n":
                    self._advance()
            elif char == "/" and self._peek() == "*":
                self._advance()
                self._advance()
                while self._pos < len(self._content):
                    if self._current() == "*" and self._peek() == "/":
                        self._advance()
                        self._advance()
                        break
                    self._advance()
            else:
                break

    def _read_string(self) -> None:
        """Read a quoted string, keeping ${...} interpolations verbatim."""
        line = self._line
        self._advance()  # Opening quote

        chars: list[str] = []
        depth = 0
        while self._current() and (self._current() != '"' or depth > 0):
            char = self._current()
            if char == "\\" and self._peek():
                self._advance()
                escaped = self._advance()
                chars.append({"n": "\n", "t": "\t", "r": "\r"}.get(escaped, escaped))
                continue
            if char == "$" and self._peek() == "{":
                depth += 1
            elif char == "}" and depth > 0:
                depth -= 1
            chars.append(self._advance())

        if self._current() == '"':
            self._advance()  # Closing quote

        self._emit(TokenType.STRING, "".join(chars), line)

    def _read_heredoc(self) -> None:
        """Read a heredoc string <<EOF ... EOF or <<-EOF ... EOF."""
        line = self._line
        self._advance()  # <
        self._advance()  # <

        indented = False
        if self._current() == "-":
            indented = True
            self._advance()

        delimiter = ""
        while self._current() and self._current() not in "\n\r":
            delimiter += self._advance()
        delimiter = delimiter.strip()

        if self._current() == "\n":
            self._advance()

        lines: list[str] = []
        while self._pos < len(self._content):
            content = ""
            while self._current() and self._current() != "\n":
                content += self._advance()
            if content.strip() == delimiter:
                break
            lines.append(content.lstrip() if indented else content)
            if self._current() == "\n":
                self._advance()

        self._emit(TokenType.HEREDOC, "\n".join(lines), line)

    def _read_number(self) -> None:
        value = ""
        if self._current() == "-":
            value += self._advance()

        while self._current() and (self._current().isdigit() or self._current() in ".eE"):
            if self._current() == "." and not self._peek().isdigit():
                break
            value += self._advance()

        try:
            if "." in value or "e" in value.lower():
                self._emit(TokenType.NUMBER, float(value))
            else:
                self._emit(TokenType.NUMBER, int(value))
        except ValueError:
            self._emit(TokenType.IDENTIFIER, value)

    def _read_identifier(self) -> None:
        value = ""
        while self._current() and (self._current().isalnum() or self._current() in "_-"):
            value += self._advance()

        if value == "true":
            self._emit(TokenType.BOOL, True)
        elif value == "false":
            self._emit(TokenType.BOOL, False)
        elif value == "null":
            self._emit(TokenType.NULL, None)
        else:
            self._emit(TokenType.IDENTIFIER, value)


@dataclass
class _RawBlock:
    """Mutable block under construction."""

    keyword: str
    labels: list[str]
    start_line: int
    end_line: int = 0
    attributes: list[Attribute] = field(default_factory=list)
    children: list[_RawBlock] = field(default_factory=list)


class HCLParser:
    """
    Parser for HCL token streams.

    Produces raw blocks with line ranges. A malformed top-level block is
    skipped and reported in ``errors``; parsing carries on with the next.
    """

    def __init__(self, tokens: list[Token], filename: str) -> None:
        self._tokens = tokens
        self._filename = filename
        self._pos = 0
        self._last_line = 1
        self._errors: list[str] = []

    @property
    def errors(self) -> list[str]:
        return self._errors

    def parse(self) -> list[_RawBlock]:
        """Parse all top-level blocks."""
        blocks: list[_RawBlock] = []

        while not self._is_at_end():
            self._skip_newlines()
            if self._is_at_end():
                break

            start = self._pos
            try:
                block = self._parse_block()
                if block is not None:
                    blocks.append(block)
            except HCLSyntaxError as e:
                line = self._tokens[start].line
                self._errors.append(f"{self._filename}:{line}: {e}")
                self._pos = start
                self._skip_to_next_block()

        return blocks

    def _current(self) -> Token:
        if self._pos < len(self._tokens):
            return self._tokens[self._pos]
        return self._tokens[-1]

    def _advance(self) -> Token:
        token = self._current()
        if token.type != TokenType.EOF:
            self._pos += 1
            self._last_line = token.end_line
        return token

    def _peek(self) -> Token:
        """Return the next non-newline token after the current one."""
        pos = self._pos + 1
        while pos < len(self._tokens) and self._tokens[pos].type == TokenType.NEWLINE:
            pos += 1
        return self._tokens[min(pos, len(self._tokens) - 1)]

    def _is_at_end(self) -> bool:
        return self._current().type == TokenType.EOF

    def _skip_newlines(self) -> None:
        while self._current().type == TokenType.NEWLINE:
            self._advance()

    def _skip_to_next_block(self) -> None:
        """Skip past the block that failed to parse."""
        depth = 0
        while not self._is_at_end():
            token = self._advance()
            if token.type == TokenType.LBRACE:
                depth += 1
            elif token.type == TokenType.RBRACE:
                depth -= 1
                if depth <= 0:
                    break
            elif token.type == TokenType.NEWLINE and depth == 0:
                break

    def _range(self, start_line: int, end_line: int) -> Range:
        return Range(self._filename, start_line, max(start_line, end_line))

    def _parse_block(self) -> _RawBlock | None:
        token = self._current()
        if token.type != TokenType.IDENTIFIER:
            raise HCLSyntaxError(f"Unexpected {token.type.name} at top level")

        keyword = self._advance().value
        labels: list[str] = []
        while self._current().type in (TokenType.IDENTIFIER, TokenType.STRING):
            labels.append(self._advance().value)

        if self._current().type != TokenType.LBRACE:
            raise HCLSyntaxError(f"Expected '{{' after {keyword} {' '.join(labels)}".rstrip())

        block = _RawBlock(keyword=keyword, labels=labels, start_line=token.line)
        self._parse_body(block)
        return block

    def _parse_body(self, block: _RawBlock) -> None:
        """Parse a block body including both braces."""
        self._advance()  # {
        while True:
            self._skip_newlines()
            token = self._current()

            if token.type == TokenType.RBRACE:
                self._advance()
                block.end_line = token.line
                return
            if token.type == TokenType.EOF:
                raise HCLSyntaxError(f"Unclosed block '{block.keyword}'")
            if token.type not in (TokenType.IDENTIFIER, TokenType.STRING):
                raise HCLSyntaxError(f"Unexpected {token.type.name} in '{block.keyword}' body")

            key = self._advance().value
            if self._current().type in (TokenType.EQUALS, TokenType.COLON):
                self._advance()
                expression = self._parse_expression()
                block.attributes.append(
                    Attribute(key, expression, self._range(token.line, self._last_line))
                )
                continue

            labels: list[str] = []
            while self._current().type in (TokenType.IDENTIFIER, TokenType.STRING):
                labels.append(self._advance().value)
            if self._current().type != TokenType.LBRACE:
                raise HCLSyntaxError(f"Expected '=' or '{{' after '{key}'")

            child = _RawBlock(keyword=key, labels=labels, start_line=token.line)
            self._parse_body(child)
            block.children.append(child)

    def _parse_expression(self) -> Expression:
        """Parse an attribute value up to the end of the expression."""
        self._skip_newlines()
        start_line = self._current().line
        start = self._pos
        expression = self._parse_primary()

        # Anything trailing a primary (operators, conditionals) makes the
        # whole expression unevaluable
        if self._current().type in (TokenType.OPERATOR, TokenType.COLON):
            depth = 0
            while not self._is_at_end():
                token_type = self._current().type
                if depth == 0 and token_type in (
                    TokenType.NEWLINE, TokenType.RBRACE, TokenType.RBRACKET, TokenType.COMMA,
                ):
                    break
                if token_type in (TokenType.LBRACE, TokenType.LBRACKET, TokenType.LPAREN):
                    depth += 1
                elif token_type in (TokenType.RBRACE, TokenType.RBRACKET, TokenType.RPAREN):
                    depth -= 1
                self._advance()
            return Unevaluated(self._text(start), self._range(start_line, self._last_line))

        return expression

    def _parse_primary(self) -> Expression:
        token = self._current()
        rng = self._range(token.line, token.end_line)

        if token.type == TokenType.STRING:
            self._advance()
            return _string_expression(token.value, rng)
        if token.type in (TokenType.HEREDOC, TokenType.NUMBER, TokenType.BOOL, TokenType.NULL):
            self._advance()
            return Literal(token.value, rng)
        if token.type in (TokenType.LBRACKET, TokenType.LBRACE) and _is_for_keyword(self._peek()):
            start = self._pos
            self._skip_group()
            return Unevaluated(self._text(start), self._range(token.line, self._last_line))
        if token.type == TokenType.LBRACKET:
            return self._parse_list()
        if token.type == TokenType.LBRACE:
            return self._parse_object()
        if token.type == TokenType.LPAREN:
            start = self._pos
            self._skip_group()
            return Unevaluated(self._text(start), self._range(token.line, self._last_line))
        if token.type == TokenType.IDENTIFIER:
            return self._parse_reference()
        if token.type == TokenType.OPERATOR:
            # Unary operator
            start = self._pos
            self._advance()
            self._parse_primary()
            return Unevaluated(self._text(start), self._range(token.line, self._last_line))
        raise HCLSyntaxError(f"Unexpected {token.type.name} in expression")

    def _parse_list(self) -> Expression:
        start_line = self._advance().line  # [
        items: list[Expression] = []
        while True:
            self._skip_newlines()
            if self._current().type == TokenType.RBRACKET:
                self._advance()
                break
            if self._is_at_end():
                raise HCLSyntaxError("Unclosed list")
            items.append(self._parse_expression())
            self._skip_newlines()
            if self._current().type == TokenType.COMMA:
                self._advance()
        return ListLiteral(tuple(items), self._range(start_line, self._last_line))

    def _parse_object(self) -> Expression:
        start_line = self._advance().line  # {
        values: dict[str, Any] = {}
        resolvable = True
        while True:
            self._skip_newlines()
            if self._current().type == TokenType.RBRACE:
                self._advance()
                break
            if self._current().type not in (TokenType.IDENTIFIER, TokenType.STRING):
                raise HCLSyntaxError("Expected object key")
            key = self._advance().value
            if self._current().type not in (TokenType.EQUALS, TokenType.COLON):
                raise HCLSyntaxError(f"Expected '=' after object key '{key}'")
            self._advance()
            value = self._parse_expression()
            if isinstance(value, Literal):
                values[key] = value.value
            else:
                resolvable = False
            self._skip_newlines()
            if self._current().type == TokenType.COMMA:
                self._advance()

        rng = self._range(start_line, self._last_line)
        if resolvable:
            return Literal(values, rng)
        return Unevaluated("{...}", rng)

    def _parse_reference(self) -> Expression:
        """Parse a traversal, or a function call / index expression."""
        start = self._pos
        first = self._current()
        parts = [self._advance().value]
        splat = False
        while self._current().type == TokenType.DOT:
            self._advance()
            if self._current().type == TokenType.OPERATOR and self._current().value == "*":
                splat = True
            elif self._current().type not in (TokenType.IDENTIFIER, TokenType.NUMBER):
                raise HCLSyntaxError("Expected attribute name after '.'")
            parts.append(str(self._advance().value))

        if splat or self._current().type in (TokenType.LPAREN, TokenType.LBRACKET):
            # Calls, indexes and any traversal after them, e.g. x[0].id
            while self._current().type in (TokenType.DOT, TokenType.LBRACKET, TokenType.LPAREN):
                if self._current().type == TokenType.DOT:
                    self._advance()
                    self._advance()
                else:
                    self._skip_group()
            return Unevaluated(self._text(start), self._range(first.line, self._last_line))

        return Traversal(tuple(parts), None, self._range(first.line, self._last_line))

    def _skip_group(self) -> None:
        """Skip a balanced (...) or [...] group."""
        depth = 0
        while not self._is_at_end():
            token = self._advance()
            if token.type in (TokenType.LPAREN, TokenType.LBRACKET, TokenType.LBRACE):
                depth += 1
            elif token.type in (TokenType.RPAREN, TokenType.RBRACKET, TokenType.RBRACE):
                depth -= 1
                if depth == 0:
                    return
        raise HCLSyntaxError("Unbalanced brackets")

    def _text(self, start: int) -> str:
        pieces = []
        for token in self._tokens[start:self._pos]:
            if token.type == TokenType.NEWLINE:
                continue
            pieces.append(_token_text(token))
        return "".join(pieces)


def _token_text(token: Token) -> str:
    if token.type == TokenType.STRING:
        return f'"{token.value}"'
    if token.type == TokenType.BOOL:
        return "true" if token.value else "false"
    if token.type == TokenType.NULL:
        return "null"
    if token.type == TokenType.OPERATOR:
        return f" {token.value} "
    return str(token.value)


def _is_for_keyword(token: Token) -> bool:
    return token.type == TokenType.IDENTIFIER and token.value == "for"


def _string_expression(value: str, rng: Range) -> Expression:
    match = _INTERPOLATED_REFERENCE.match(value)
    if match:
        return Traversal(tuple(match.group(1).split(".")), None, rng)
    if "${" in value:
        return Unevaluated(value, rng)
    return Literal(value, rng)


def parse_blocks(content: str, filename: str) -> tuple[list[_RawBlock], list[str]]:
    """Tokenize and parse content, returning raw blocks and parse errors."""
    tokens = HCLLexer(content).tokenize()
    parser = HCLParser(tokens, filename)
    blocks = parser.parse()
    for error in parser.errors:
        logger.warning(f"Parse error: {error}")
    return blocks, parser.errors


class _ValueTable:
    """Literal values reachable by simple references, first declaration wins."""

    def __init__(self, raw_modules: list[tuple[str, list[_RawBlock], list[str]]]) -> None:
        self._values: dict[tuple[str, ...], Any] = {}
        for _, blocks, _ in raw_modules:
            for block in blocks:
                for prefix, attributes in _addressable(block):
                    for attribute in attributes:
                        key = prefix + (attribute.name,)
                        if key not in self._values and isinstance(attribute.expression, Literal):
                            self._values[key] = attribute.expression.value

    def lookup(self, parts: tuple[str, ...]) -> Any:
        return self._values.get(parts)


def _addressable(block: _RawBlock) -> list[tuple[tuple[str, ...], list[Attribute]]]:
    if block.keyword == "resource" and len(block.labels) >= 2:
        return [((block.labels[0], block.labels[1]), block.attributes)]
    if block.keyword == "data" and len(block.labels) >= 2:
        return [(("data", block.labels[0], block.labels[1]), block.attributes)]
    if block.keyword == "locals":
        return [(("local",), block.attributes)]
    if block.keyword == "variable" and block.labels:
        defaults = [a for a in block.attributes if a.name == "default"]
        return [(("var",), [replace(a, name=block.labels[0]) for a in defaults])]
    return []


def _evaluate(expression: Expression, table: _ValueTable) -> Expression:
    if isinstance(expression, Traversal) and expression.value is None:
        value = table.lookup(expression.parts)
        if value is not None:
            return replace(expression, value=value)
    elif isinstance(expression, ListLiteral):
        return replace(expression, items=tuple(_evaluate(i, table) for i in expression.items))
    return expression


def _freeze(raw: _RawBlock, table: _ValueTable, module_path: str, filename: str, top: bool) -> Block:
    attributes = tuple(
        replace(a, expression=_evaluate(a.expression, table)) for a in raw.attributes
    )
    children = tuple(_freeze(c, table, module_path, filename, False) for c in raw.children)
    rng = Range(filename, raw.start_line, max(raw.start_line, raw.end_line))

    if top and raw.keyword in ("resource", "data") and len(raw.labels) >= 2:
        type_name, label = raw.labels[0], raw.labels[1]
    else:
        type_name, label = raw.keyword, ".".join(raw.labels)

    return Block(
        kind=raw.keyword,
        type_name=type_name,
        label=label,
        attributes=attributes,
        children=children,
        range=rng,
        module_path=module_path,
    )


def build_module_set(
    sources: list[tuple[str, list[tuple[str, str]]]],
    read_errors: dict[str, list[str]] | None = None,
) -> ModuleSet:
    """
    Build a Module Set from in-memory sources.

    Args:
        sources: ``(module_path, [(filename, content), ...])`` pairs, root first
        read_errors: Errors already collected per module path, recorded
            ahead of that module's parse errors

    Returns:
        ModuleSet with one Module per entry
    """
    read_errors = read_errors or {}
    raw_modules: list[tuple[str, list[_RawBlock], list[str]]] = []
    owners: list[list[str]] = []
    for module_path, files in sources:
        blocks: list[_RawBlock] = []
        files_of_blocks: list[str] = []
        errors: list[str] = list(read_errors.get(module_path, ()))
        for filename, content in files:
            filename = filename or "<string>"
            parsed, parse_errors = parse_blocks(content, filename)
            blocks.extend(parsed)
            files_of_blocks.extend(filename for _ in parsed)
            errors.extend(parse_errors)
        raw_modules.append((module_path, blocks, errors))
        owners.append(files_of_blocks)

    table = _ValueTable(raw_modules)
    modules = []
    for (module_path, blocks, errors), filenames in zip(raw_modules, owners):
        frozen = tuple(
            _freeze(raw, table, module_path, filename, True)
            for raw, filename in zip(blocks, filenames)
        )
        modules.append(Module(path=module_path, blocks=frozen, parse_errors=tuple(errors)))

    module_set = ModuleSet(modules)
    logger.debug(
        f"Loaded {len(modules)} module(s) with {sum(len(m) for m in modules)} block(s)"
    )
    return module_set


def load_source(content: str, filename: str = "main.tf") -> ModuleSet:
    """
    Build a single-module Module Set from HCL text.

    Args:
        content: HCL source
        filename: Virtual file name recorded in ranges

    Returns:
        ModuleSet with one Module
    """
    return build_module_set([(".", [(filename, content)])])


def load_file(file_path: str | Path) -> ModuleSet:
    """
    Build a single-module Module Set from one .tf file.

    Args:
        file_path: Path to the file

    Returns:
        ModuleSet with one Module; a file that is not valid UTF-8 yields
        an empty Module carrying the decode error in parse_errors

    Raises:
        OSError: If the file cannot be read
    """
    path = Path(file_path)
    module_path = str(path.parent)
    try:
        content = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        logger.warning(f"Failed to read {path}: {e}")
        return build_module_set(
            [(module_path, [])], {module_path: [f"{path}: failed to read file: {e}"]}
        )
    return build_module_set([(module_path, [(str(path), content)])])


def load_directory(directory: str | Path, recursive: bool = True) -> ModuleSet:
    """
    Build a Module Set from a directory tree.

    Each directory holding .tf files becomes one Module. The root
    directory comes first, then subdirectories in sorted order; files
    within a directory are read in sorted order.

    Args:
        directory: Root directory
        recursive: Whether to include subdirectories

    Returns:
        ModuleSet for the tree; files that cannot be read or decoded are
        skipped and reported in their Module's parse_errors

    Raises:
        FileNotFoundError: If the directory does not exist
    """
    root = Path(directory)
    if not root.is_dir():
        raise FileNotFoundError(f"Directory does not exist: {directory}")

    pattern = "**/*" if recursive else "*"
    by_directory: dict[Path, list[Path]] = {}
    for ext in TERRAFORM_EXTENSIONS:
        for file_path in root.glob(f"{pattern}{ext}"):
            relative = file_path.relative_to(root)
            if any(part.startswith(".") for part in relative.parts[:-1]):
                continue
            if file_path.is_file():
                by_directory.setdefault(file_path.parent, []).append(file_path)

    ordered = sorted(by_directory, key=lambda d: (d != root, str(d)))
    sources = []
    read_errors: dict[str, list[str]] = {}
    for module_dir in ordered:
        files = []
        for f in sorted(by_directory[module_dir]):
            try:
                files.append((str(f), f.read_text(encoding="utf-8")))
            except (OSError, UnicodeDecodeError) as e:
                logger.warning(f"Failed to read {f}: {e}")
                read_errors.setdefault(str(module_dir), []).append(
                    f"{f}: failed to read file: {e}"
                )
        sources.append((str(module_dir), files))
    return build_module_set(sources, read_errors)


def load_path(path: str | Path, recursive: bool = True) -> ModuleSet:
    """Load a file or a directory."""
    target = Path(path)
    if target.is_dir():
        return load_directory(target, recursive=recursive)
    return load_file(target)
