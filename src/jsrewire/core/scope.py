"""Module-level binding table built from a tree-sitter JavaScript tree.

The rewire pass only needs program-scope facts: which names are declared at
the top level, with which kind (``var``, ``let``, ``const``, ``module`` for
imports, ``hoisted`` for function declarations), and which identifiers occur
anywhere in the module so generated names never collide with them.

Example:
    >>> scope = ModuleScope(tree.root_node)
    >>> scope.get_binding("foo").kind
    'const'
    >>> scope.get_binding("foo").is_immutable
    True
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, NamedTuple, Optional

from tree_sitter import Node

from jsrewire.core.errors import RewireError
from jsrewire.utils.logger import get_logger

logger = get_logger("jsrewire.core.scope")

IMMUTABLE_KINDS = frozenset({"const", "module"})

# Node types whose text names a variable somewhere in the module
IDENTIFIER_NODE_TYPES = frozenset({
    "identifier",
    "shorthand_property_identifier",
    "shorthand_property_identifier_pattern",
})

FUNCTION_DECLARATION_TYPES = frozenset({
    "function_declaration",
    "generator_function_declaration",
})

VARIABLE_DECLARATION_TYPES = frozenset({
    "lexical_declaration",
    "variable_declaration",
})

# Nodes opening their own `var` scope
VAR_SCOPE_TYPES = frozenset({
    "function_declaration",
    "generator_function_declaration",
    "function_expression",
    "function",
    "generator_function",
    "arrow_function",
    "method_definition",
    "class_body",
})


def node_text(node: Node) -> str:
    text = node.text
    if text is None:
        raise RewireError(f"No source text available for {node.type} node")
    return text.decode("utf-8")


@dataclass
class Binding:
    """A top-level binding.

    Attributes:
        name: Bound identifier.
        kind: One of ``var``, ``let``, ``const``, ``module``, ``hoisted``.
        declaration: The ``lexical_declaration`` that introduced a ``let`` or
            ``const`` binding; needed to weaken ``const`` to ``let``.
    """

    name: str
    kind: str
    declaration: Optional[Node] = None

    @property
    def is_immutable(self) -> bool:
        return self.kind in IMMUTABLE_KINDS


class ImportBinding(NamedTuple):
    """One local name introduced by an import statement."""

    form: str  # "default", "namespace" or "named"
    local: Node
    specifier: Node


def binding_identifiers(pattern: Node) -> list[Node]:
    """Return the identifier nodes bound by a declarator name or pattern."""
    if pattern.type in ("identifier", "shorthand_property_identifier_pattern"):
        return [pattern]
    if pattern.type == "pair_pattern":
        value = pattern.child_by_field_name("value")
        return binding_identifiers(value) if value is not None else []
    if pattern.type in ("assignment_pattern", "object_assignment_pattern"):
        left = pattern.child_by_field_name("left")
        return binding_identifiers(left) if left is not None else []
    if pattern.type in ("object_pattern", "array_pattern", "rest_pattern"):
        found: list[Node] = []
        for child in pattern.named_children:
            found.extend(binding_identifiers(child))
        return found
    return []


def declared_identifiers(declaration: Node) -> list[Node]:
    """Return every identifier bound by a ``var``/``let``/``const`` declaration."""
    found: list[Node] = []
    for declarator in declaration.named_children:
        if declarator.type != "variable_declarator":
            continue
        name = declarator.child_by_field_name("name")
        if name is not None:
            found.extend(binding_identifiers(name))
    return found


def nested_var_identifiers(statement: Node) -> list[Node]:
    """Return identifiers declared with ``var`` inside the blocks of a statement.

    ``var`` is function scoped, so a declaration in a top-level block, loop
    head, ``try`` or ``switch`` body binds at module level. Function and
    class bodies are not entered.
    """
    found: list[Node] = []
    stack = [statement]
    while stack:
        node = stack.pop()
        if node.type in VAR_SCOPE_TYPES:
            continue
        if node.type == "variable_declaration":
            found.extend(declared_identifiers(node))
        elif node.type == "for_in_statement":
            # for (var x of xs)
            kind = node.child_by_field_name("kind")
            left = node.child_by_field_name("left")
            if kind is not None and kind.type == "var" and left is not None:
                found.extend(binding_identifiers(left))
        stack.extend(reversed(node.named_children))
    return found


def declaration_kind_token(declaration: Node) -> Optional[Node]:
    """Return the ``var``/``let``/``const`` keyword node of a declaration."""
    for child in declaration.children:
        if child.type in ("var", "let", "const"):
            return child
    return None


def declaration_kind(declaration: Node) -> str:
    if declaration.type == "variable_declaration":
        return "var"
    token = declaration_kind_token(declaration)
    return token.type if token is not None else "let"


def iter_import_bindings(statement: Node) -> Iterator[ImportBinding]:
    """Yield the local bindings of an ``import`` statement in source order."""
    for clause in statement.named_children:
        if clause.type != "import_clause":
            continue
        for part in clause.named_children:
            if part.type == "identifier":
                yield ImportBinding("default", part, part)
            elif part.type == "namespace_import":
                for child in part.named_children:
                    if child.type == "identifier":
                        yield ImportBinding("namespace", child, part)
            elif part.type == "named_imports":
                for specifier in part.named_children:
                    if specifier.type != "import_specifier":
                        continue
                    local = specifier.child_by_field_name("alias")
                    if local is None:
                        local = specifier.child_by_field_name("name")
                    if local is not None:
                        yield ImportBinding("named", local, specifier)


class ModuleScope:
    """Program-scope binding lookup for one module.

    Attributes:
        references: Every identifier text occurring anywhere in the module.
    """

    def __init__(self, root: Node) -> None:
        self._bindings: dict[str, Binding] = {}
        self.references: set[str] = set()
        self._collect_references(root)
        for statement in root.named_children:
            self._register_statement(statement)
        logger.debug(
            f"Module scope built: {len(self._bindings)} bindings, "
            f"{len(self.references)} identifiers"
        )

    def _collect_references(self, root: Node) -> None:
        stack = [root]
        while stack:
            node = stack.pop()
            if node.type in IDENTIFIER_NODE_TYPES:
                self.references.add(node_text(node))
            stack.extend(node.children)

    def _register_statement(self, statement: Node) -> None:
        if statement.type == "import_statement":
            for binding in iter_import_bindings(statement):
                self.register(node_text(binding.local), "module")
        elif statement.type == "export_statement":
            declaration = statement.child_by_field_name("declaration")
            if declaration is not None:
                self.register_declaration(declaration)
        elif (
            statement.type in VARIABLE_DECLARATION_TYPES
            or statement.type in FUNCTION_DECLARATION_TYPES
            or statement.type == "class_declaration"
        ):
            self.register_declaration(statement)
        else:
            for identifier in nested_var_identifiers(statement):
                name = node_text(identifier)
                if not self.has_binding(name):
                    self.register(name, "var")

    def register_declaration(self, declaration: Node) -> None:
        if declaration.type in VARIABLE_DECLARATION_TYPES:
            kind = declaration_kind(declaration)
            owner = declaration if declaration.type == "lexical_declaration" else None
            for identifier in declared_identifiers(declaration):
                self.register(node_text(identifier), kind, owner)
        elif declaration.type in FUNCTION_DECLARATION_TYPES:
            name = declaration.child_by_field_name("name")
            if name is not None:
                self.register(node_text(name), "hoisted")
        elif declaration.type == "class_declaration":
            name = declaration.child_by_field_name("name")
            if name is not None:
                self.register(node_text(name), "let")

    def register(self, name: str, kind: str, declaration: Optional[Node] = None) -> Binding:
        binding = Binding(name=name, kind=kind, declaration=declaration)
        self._bindings[name] = binding
        self.references.add(name)
        return binding

    def remove_binding(self, name: str) -> None:
        self._bindings.pop(name, None)

    def get_binding(self, name: str) -> Optional[Binding]:
        return self._bindings.get(name)

    def has_binding(self, name: str) -> bool:
        return name in self._bindings

    def weaken_to_let(self, binding: Binding) -> Optional[Node]:
        """Turn a ``const`` binding into ``let``.

        Every binding introduced by the same declaration changes kind along
        with it.

        Returns:
            The ``const`` keyword node the caller must rewrite, or None if the
            binding is not a ``const`` declared by a lexical declaration.
        """
        if binding.kind != "const" or binding.declaration is None:
            return None
        declaration = binding.declaration
        for other in self._bindings.values():
            if other.declaration is not None and other.declaration.id == declaration.id:
                other.kind = "let"
        logger.debug(f"Weakened const declaration of '{binding.name}' to let")
        return declaration_kind_token(declaration)
