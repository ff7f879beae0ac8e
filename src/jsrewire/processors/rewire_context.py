"""Per-module context threaded through every visitor of the rewire pass.

The context is created when the pass enters a module and discarded once the
module has been rendered. It bundles everything the visitors share: the
configuration, the binding table, the identifier allocator, the source
editor and the descriptor accumulator.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from tree_sitter import Node

from jsrewire.core.config import RewireConfig
from jsrewire.core.identifier_allocator import IdentifierAllocator
from jsrewire.core.module_state import ModuleState
from jsrewire.core.scope import ModuleScope
from jsrewire.processors.proxy_runtime_js import (
    DEFAULT_APPLY_FUNCTION_NAME,
    DEFAULT_HANDLER_TABLE_NAME,
    DEFAULT_WRAP_FUNCTION_NAME,
    ProxyRuntimeNames,
)
from jsrewire.processors.source_editor import SourceEditor


@dataclass
class RewireContext:
    """State of one module while it is being rewired.

    Attributes:
        config: Active configuration.
        root: ``program`` node of the module.
        editor: Edits against the original source.
        scope: Top-level binding table.
        allocator: Generator of collision-free names.
        runtime: Names of the proxy runtime in this module.
        state: Export and import descriptors found so far.
    """

    config: RewireConfig
    root: Node
    editor: SourceEditor
    scope: ModuleScope
    allocator: IdentifierAllocator
    runtime: ProxyRuntimeNames
    state: ModuleState = field(default_factory=ModuleState)

    @classmethod
    def enter(cls, root: Node, source: bytes, config: RewireConfig) -> RewireContext:
        """Create a fresh context for the module rooted at ``root``."""
        scope = ModuleScope(root)
        allocator = IdentifierAllocator(scope)
        runtime = ProxyRuntimeNames(
            handler_table=allocator.reserve(DEFAULT_HANDLER_TABLE_NAME),
            wrap_function=allocator.reserve(DEFAULT_WRAP_FUNCTION_NAME),
            apply_function=allocator.reserve(DEFAULT_APPLY_FUNCTION_NAME),
        )
        return cls(
            config=config,
            root=root,
            editor=SourceEditor(source),
            scope=scope,
            allocator=allocator,
            runtime=runtime,
        )

    @property
    def _hashbang(self) -> Optional[Node]:
        first = self.root.children[0] if self.root.children else None
        if first is not None and first.type == "hash_bang_line":
            return first
        return None

    def hoist(self, statement: str) -> None:
        """Insert ``statement`` at the top of the module, after earlier hoists."""
        hashbang = self._hashbang
        if hashbang is not None:
            self.editor.insert(hashbang.end_byte, "\n" + statement)
        else:
            self.editor.insert(0, statement + "\n")

    def prepend(self, statement: str) -> None:
        """Insert ``statement`` at the very top of the module, ahead of all hoists."""
        hashbang = self._hashbang
        if hashbang is not None:
            self.editor.prepend(hashbang.end_byte, "\n" + statement)
        else:
            self.editor.prepend(0, statement + "\n")
