"""Classification and normalization of export declarations.

Every ``export`` form is reduced to (exported name, local binding) pairs
recorded in the module state, and the declaration is rewritten just enough
that the exported value lives in a binding the generated override functions
can reassign:

- ``export default x`` with a mutable ``x`` becomes ``export { x as default }``;
- exported function declarations become ``var f = function () {...}`` hoisted
  to the top of the module plus an export specifier;
- exported class declarations become ``var C = class {...}`` in place;
- any other default export is stored in a generated ``var``;
- ``export let``/``export var`` need no rewrite;
- ``export const`` is left alone unless ``unsafe_const`` is set;
- specifiers of ``export { ... }`` pointing at constants or imports are
  redirected to a mutable copy.

Function and class names are dropped from the generated expressions so the
body's own references resolve to the module binding, which is the one an
override replaces. Name inference keeps ``f.name`` unchanged.

Re-exports (``export ... from '...'``) belong to the other module and are
never touched.
"""

from __future__ import annotations

from typing import Optional

from tree_sitter import Node

from jsrewire.core.scope import (
    FUNCTION_DECLARATION_TYPES,
    VARIABLE_DECLARATION_TYPES,
    Binding,
    declaration_kind,
    declared_identifiers,
    node_text,
)
from jsrewire.processors.rewire_context import RewireContext
from jsrewire.utils.logger import get_logger

logger = get_logger("jsrewire.processors.export_normalizer")

DEFAULT_EXPORT_NAME = "default"

# "function" and "generator_function" are the expression node names of older
# tree-sitter-javascript grammars, "function_expression" of current ones
FUNCTION_EXPRESSION_TYPES = frozenset({
    "function_expression",
    "function",
    "generator_function",
})

CLASS_TYPES = frozenset({"class_declaration", "class"})


def is_default_export(statement: Node) -> bool:
    return any(child.type == "default" for child in statement.children)


def _without_name(context: RewireContext, node: Node) -> str:
    """Source text of a function or class with its name removed."""
    name = node.child_by_field_name("name")
    text = context.editor.source
    if name is None:
        return text[node.start_byte:node.end_byte].decode("utf-8")
    head = text[node.start_byte:name.start_byte].decode("utf-8").rstrip()
    tail = text[name.end_byte:node.end_byte].decode("utf-8").lstrip()
    return f"{head} {tail}"


def _specifier(local: str, exported: str) -> str:
    return local if local == exported else f"{local} as {exported}"


class ExportNormalizer:
    """Visitor for ``export_statement`` nodes."""

    def __init__(self) -> None:
        self.logger = logger

    def visit_export_statement(self, node: Node, context: RewireContext) -> None:
        if node.child_by_field_name("source") is not None:
            self.logger.debug("Skipping re-export with explicit source")
            return

        if is_default_export(node):
            self._visit_default_export(node, context)
        else:
            self._visit_named_export(node, context)

    # ------------------------------------------------------------------
    # export default ...
    # ------------------------------------------------------------------

    def _visit_default_export(self, node: Node, context: RewireContext) -> None:
        target = node.child_by_field_name("declaration")
        if target is None:
            target = node.child_by_field_name("value")
        if target is None:
            return

        if target.type == "identifier":
            name = node_text(target)
            binding = context.scope.get_binding(name)
            if binding is not None and context.config.unsafe_const:
                self._weaken(binding, context)
            if binding is not None and not binding.is_immutable:
                # export default foo;
                context.state.add_export(DEFAULT_EXPORT_NAME, name)
                context.editor.replace_node(node, f"export {{ {name} as default }};")
                return

        if target.type in FUNCTION_DECLARATION_TYPES or target.type in FUNCTION_EXPRESSION_TYPES:
            # export default function () {}
            self._hoist_function(node, target, DEFAULT_EXPORT_NAME, context)
        elif target.type in CLASS_TYPES:
            # export default class {}
            self._inline_class(node, target, DEFAULT_EXPORT_NAME, context)
        else:
            # export default <expression>;
            local = context.allocator.generate_uid(DEFAULT_EXPORT_NAME)
            context.scope.register(local, "var")
            context.state.add_export(DEFAULT_EXPORT_NAME, local)
            context.editor.replace_node(
                node,
                f"var {local} = {context.editor.slice(target)};\n"
                f"export {{ {local} as default }};",
            )

    # ------------------------------------------------------------------
    # export <declaration> / export { ... }
    # ------------------------------------------------------------------

    def _visit_named_export(self, node: Node, context: RewireContext) -> None:
        declaration = node.child_by_field_name("declaration")
        if declaration is None:
            self._visit_export_clause(node, context)
        elif declaration.type in VARIABLE_DECLARATION_TYPES:
            self._visit_variable_declaration(declaration, context)
        elif declaration.type in FUNCTION_DECLARATION_TYPES:
            name = node_text(declaration.child_by_field_name("name"))
            self._hoist_function(node, declaration, name, context)
        elif declaration.type in CLASS_TYPES:
            name = node_text(declaration.child_by_field_name("name"))
            self._inline_class(node, declaration, name, context)

    def _visit_variable_declaration(self, declaration: Node, context: RewireContext) -> None:
        identifiers = [node_text(i) for i in declared_identifiers(declaration)]

        if declaration_kind(declaration) == "const":
            if not context.config.unsafe_const:
                self.logger.debug(f"Leaving constant export(s) {identifiers} untouched")
                return
            for name in identifiers:
                binding = context.scope.get_binding(name)
                if binding is not None:
                    self._weaken(binding, context)

        for name in identifiers:
            context.state.add_export(name, name)

    def _visit_export_clause(self, node: Node, context: RewireContext) -> None:
        clause = next((c for c in node.named_children if c.type == "export_clause"), None)
        if clause is None:
            return

        for specifier in clause.named_children:
            if specifier.type != "export_specifier":
                continue
            parts = [c for c in specifier.children if c.type != "as"]
            local_node, exported_node = parts[0], parts[-1]
            if local_node.type == "string" or exported_node.type == "string":
                self.logger.debug(f"Skipping string-named export specifier: {node_text(specifier)}")
                continue

            local = node_text(local_node)
            exported = node_text(exported_node)
            binding = context.scope.get_binding(local)
            if binding is None:
                self.logger.debug(f"No binding for exported name '{local}', skipping")
                continue

            if context.config.unsafe_const and binding.kind == "const":
                self._weaken(binding, context)
            elif binding.is_immutable:
                # const and imports
                copy = context.allocator.generate_uid(local)
                context.scope.register(copy, "var")
                context.editor.insert(node.start_byte, f"var {copy} = {local};\n")
                context.editor.replace_node(specifier, f"{copy} as {exported}")
                context.state.add_export(exported, copy)
                continue

            context.state.add_export(exported, local)

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------

    def _weaken(self, binding: Binding, context: RewireContext) -> None:
        token = context.scope.weaken_to_let(binding)
        if token is not None:
            context.editor.replace_node(token, "let")

    def _local_name(self, node: Node, context: RewireContext) -> str:
        name_node: Optional[Node] = node.child_by_field_name("name")
        if name_node is None:
            return context.allocator.generate_uid(DEFAULT_EXPORT_NAME)
        name = node_text(name_node)
        context.scope.remove_binding(name)
        return name

    def _hoist_function(
        self,
        statement: Node,
        function: Node,
        exported: str,
        context: RewireContext,
    ) -> None:
        local = self._local_name(function, context)
        context.scope.register(local, "var")
        context.state.add_export(exported, local)

        context.hoist(f"var {local} = {_without_name(context, function)};")
        context.editor.replace_node(statement, f"export {{ {_specifier(local, exported)} }};")

    def _inline_class(
        self,
        statement: Node,
        klass: Node,
        exported: str,
        context: RewireContext,
    ) -> None:
        local = self._local_name(klass, context)
        context.scope.register(local, "var")
        context.state.add_export(exported, local)

        decorators = "".join(
            context.editor.slice(child) + " "
            for child in statement.children
            if child.type == "decorator"
        )
        context.editor.replace_node(
            statement,
            f"var {local} = {decorators}{_without_name(context, klass)};\n"
            f"export {{ {_specifier(local, exported)} }};",
        )
