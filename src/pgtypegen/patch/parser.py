"""Tree-sitter parsing of TypeScript/JavaScript sources.

Grammars come from ``tree-sitter-typescript``, which ships two languages in
one module: ``typescript`` (also used for plain JavaScript, a syntactic
subset) and ``tsx`` (JSX-bearing sources). All offsets reported by the
resulting trees are UTF-8 byte offsets into the parsed content.
"""

from __future__ import annotations

import importlib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tree_sitter

from pgtypegen.core.errors import UnsupportedSourceError


@dataclass(frozen=True)
class Grammar:
    """Where to load one tree-sitter language from."""

    name: str
    grammar_module: str
    language_func: str
    extensions: frozenset[str] = field(default_factory=frozenset)


TYPESCRIPT = Grammar(
    name="typescript",
    grammar_module="tree_sitter_typescript",
    language_func="language_typescript",
    extensions=frozenset({"ts", "mts", "cts", "js", "mjs", "cjs"}),
)

TSX = Grammar(
    name="tsx",
    grammar_module="tree_sitter_typescript",
    language_func="language_tsx",
    extensions=frozenset({"tsx", "jsx"}),
)

GRAMMARS: tuple[Grammar, ...] = (TYPESCRIPT, TSX)


def grammar_for_path(path: Path) -> Grammar | None:
    ext = path.suffix.lower().lstrip(".")
    for grammar in GRAMMARS:
        if ext in grammar.extensions:
            return grammar
    return None


@dataclass
class ParseResult:
    """Result of parsing a file."""

    tree: Any  # Tree-sitter Tree
    language: str
    content: bytes
    error_count: int
    root_node: Any  # Tree-sitter Node


@dataclass
class TypeScriptParser:
    """Tree-sitter parser for TypeScript-family sources.

    Usage::

        parser = TypeScriptParser()
        result = parser.parse(Path("src/db.ts"), content)
        for child in result.root_node.children:
            ...
    """

    _parser: Any = field(default=None, repr=False)
    _languages: dict[str, Any] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        self._parser = tree_sitter.Parser()
        self._languages = {}

    def _get_language(self, grammar: Grammar) -> Any:
        if grammar.name in self._languages:
            return self._languages[grammar.name]
        try:
            mod = importlib.import_module(grammar.grammar_module)
            lang_fn = getattr(mod, grammar.language_func)
        except (ImportError, AttributeError) as err:
            raise ValueError(f"Language not available: {grammar.name}") from err
        lang = tree_sitter.Language(lang_fn())
        self._languages[grammar.name] = lang
        return lang

    def supports(self, path: Path) -> bool:
        return grammar_for_path(path) is not None

    def parse(self, path: Path, content: bytes | None = None) -> ParseResult:
        """Parse a file with Tree-sitter.

        Args:
            path: Path to file (used for grammar detection)
            content: File content as bytes. If None, reads from path.

        Raises:
            UnsupportedSourceError: No grammar handles the file extension.
        """
        grammar = grammar_for_path(path)
        if grammar is None:
            raise UnsupportedSourceError.extension(str(path))

        if content is None:
            content = path.read_bytes()

        self._parser.language = self._get_language(grammar)
        tree = self._parser.parse(content)

        error_count = 0
        stack = [tree.root_node]
        while stack:
            node = stack.pop()
            if node.type == "ERROR" or node.is_missing:
                error_count += 1
            stack.extend(node.children)

        return ParseResult(
            tree=tree,
            language=grammar.name,
            content=content,
            error_count=error_count,
            root_node=tree.root_node,
        )
