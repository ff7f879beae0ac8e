"""Interception of imported bindings.

Each imported binding is renamed to a private alias and the original name
is re-declared right after the import statement as a ``let`` holding the
value passed through the proxy runtime:

    import foo, { bar } from './dep';

becomes

    import _foo, { bar as _bar } from './dep';
    let foo = _rewireProxyIfNeeded(_foo, "foo");
    let bar = _rewireProxyIfNeeded(_bar, "bar");

The module body keeps using ``foo`` and ``bar``; until an override installs a
handler they behave exactly like the imported values.
"""

from __future__ import annotations

import json

from tree_sitter import Node

from jsrewire.core.scope import iter_import_bindings, node_text
from jsrewire.processors.rewire_context import RewireContext
from jsrewire.utils.logger import get_logger

logger = get_logger("jsrewire.processors.import_interceptor")

REWIRE_PREFIX = "rewire$"


class ImportInterceptor:
    """Visitor for ``import_statement`` nodes."""

    def __init__(self) -> None:
        self.logger = logger

    def visit_import_statement(self, node: Node, context: RewireContext) -> None:
        declarations: list[str] = []

        for binding in iter_import_bindings(node):
            external = node_text(binding.local)
            if external.startswith(REWIRE_PREFIX):
                # override functions imported from another rewired module
                self.logger.debug(f"Not intercepting override function import '{external}'")
                continue

            internal = context.allocator.generate_uid(external)
            context.scope.register(internal, "module")

            has_alias = binding.specifier.child_by_field_name("alias") is not None
            if binding.form == "named" and not has_alias:
                context.editor.replace_node(
                    binding.specifier,
                    f"{context.editor.slice(binding.specifier)} as {internal}",
                )
            else:
                context.editor.replace_node(binding.local, internal)

            context.state.add_import(external, internal)
            declarations.append(
                f"let {external} = {context.runtime.wrap_function}"
                f"({internal}, {json.dumps(external)});"
            )

        if declarations:
            context.editor.insert(node.end_byte, "".join("\n" + d for d in declarations))
