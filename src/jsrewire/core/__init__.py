"""Core data model of the rewire pass.

This module provides the configuration, the per-module descriptor
accumulator, the top-level binding table and the identifier allocator.

Classes:
    RewireConfig: Configuration data model
    ExportDescriptor: Exported name and the binding holding its value
    ImportDescriptor: Intercepted import and its private alias
    ModuleState: Ordered descriptors of one module
    ModuleScope: Top-level binding lookup
    IdentifierAllocator: Collision-free generated names
    RewireError: Exception for modules that cannot be rewired
    SourceParseError: Exception for sources with syntax errors
"""

from jsrewire.core.config import RewireConfig
from jsrewire.core.errors import RewireError, SourceParseError
from jsrewire.core.identifier_allocator import IdentifierAllocator
from jsrewire.core.module_state import ExportDescriptor, ImportDescriptor, ModuleState
from jsrewire.core.scope import Binding, ModuleScope

__all__ = [
    "RewireConfig",
    "ExportDescriptor",
    "ImportDescriptor",
    "ModuleState",
    "Binding",
    "ModuleScope",
    "IdentifierAllocator",
    "RewireError",
    "SourceParseError",
]
