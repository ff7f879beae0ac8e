"""Shared fixtures for rewire pass tests."""

from __future__ import annotations

import textwrap
from typing import Callable

import pytest
from tree_sitter import Node, Parser

from jsrewire.core.scope import declared_identifiers, node_text
from jsrewire.processors.js_processor import JS_LANGUAGE, rewire


# ---------------------------------------------------------------------------
# Helper functions
# ---------------------------------------------------------------------------

def parse_module(source: str) -> Node:
    """Parse ``source`` and return the program node, failing on syntax errors."""
    tree = Parser(JS_LANGUAGE).parse(source.encode("utf-8"))
    assert not tree.root_node.has_error, f"Unparseable JavaScript:\n{source}"
    return tree.root_node


def collect_exported_names(source: str) -> list[str]:
    """List every name exported by ``source`` itself, re-exports excluded."""
    names: list[str] = []
    for statement in parse_module(source).named_children:
        if statement.type != "export_statement":
            continue
        if statement.child_by_field_name("source") is not None:
            continue
        if any(child.type == "default" for child in statement.children):
            names.append("default")
            continue

        declaration = statement.child_by_field_name("declaration")
        if declaration is None:
            for clause in statement.named_children:
                if clause.type != "export_clause":
                    continue
                for specifier in clause.named_children:
                    parts = [c for c in specifier.children if c.type != "as"]
                    names.append(node_text(parts[-1]))
        elif declaration.type in ("lexical_declaration", "variable_declaration"):
            names.extend(node_text(i) for i in declared_identifiers(declaration))
        else:
            names.append(node_text(declaration.child_by_field_name("name")))
    return names


def collect_exported_functions(source: str) -> dict[str, str]:
    """Map each exported function declaration name to its full source text."""
    functions: dict[str, str] = {}
    for statement in parse_module(source).named_children:
        if statement.type != "export_statement":
            continue
        declaration = statement.child_by_field_name("declaration")
        if declaration is not None and declaration.type == "function_declaration":
            functions[node_text(declaration.child_by_field_name("name"))] = node_text(declaration)
    return functions


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def parse_js() -> Callable[[str], Node]:
    """Fixture parsing JavaScript module source into a program node."""
    return parse_module


@pytest.fixture
def exported_names() -> Callable[[str], list[str]]:
    """Fixture listing the names a module exports."""
    return collect_exported_names


@pytest.fixture
def exported_functions() -> Callable[[str], dict[str, str]]:
    """Fixture mapping exported function names to their source."""
    return collect_exported_functions


@pytest.fixture
def rewire_js() -> Callable[..., str]:
    """Fixture rewiring dedented source and checking the output still parses."""
    def _rewire(source: str, **options) -> str:
        code = rewire(textwrap.dedent(source).strip(), **options)
        parse_module(code)
        return code
    return _rewire
