"""Per-module accumulator of export and import descriptors.

A ModuleState is created when the pass enters a module, filled while the
top-level statements are visited and consumed once when the pass leaves the
module. It is never shared between modules or transformation runs.

Example:
    >>> state = ModuleState()
    >>> state.add_export("default", "foo")
    >>> state.add_export("default", "bar")
    >>> [e.local_name for e in state.unique_exports()]
    ['foo']
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from jsrewire.utils.logger import get_logger

logger = get_logger("jsrewire.core.module_state")


@dataclass
class ExportDescriptor:
    """An exported name and the binding currently holding its value.

    Attributes:
        exported_name: Externally visible name (``default`` for default exports).
        local_name: Module-level binding that the override function reassigns.
        original_name: Slot capturing the value at module initialization,
            assigned by the synthesizer; None until then.
    """

    exported_name: str
    local_name: str
    original_name: Optional[str] = None


@dataclass
class ImportDescriptor:
    """An intercepted import.

    Attributes:
        external_name: Name the module body uses; bound to the indirection value.
        internal_name: Allocated alias bound to the real imported value.
    """

    external_name: str
    internal_name: str


@dataclass
class ModuleState:
    """Ordered record of every export and import found in one module."""

    exports: list[ExportDescriptor] = field(default_factory=list)
    imports: list[ImportDescriptor] = field(default_factory=list)

    def add_export(self, exported_name: str, local_name: str) -> ExportDescriptor:
        descriptor = ExportDescriptor(exported_name=exported_name, local_name=local_name)
        self.exports.append(descriptor)
        logger.debug(f"Registered export '{exported_name}' -> '{local_name}'")
        return descriptor

    def add_import(self, external_name: str, internal_name: str) -> ImportDescriptor:
        descriptor = ImportDescriptor(external_name=external_name, internal_name=internal_name)
        self.imports.append(descriptor)
        logger.debug(f"Registered import '{external_name}' (alias '{internal_name}')")
        return descriptor

    def is_empty(self) -> bool:
        return not self.exports and not self.imports

    def unique_exports(self) -> list[ExportDescriptor]:
        """Return exports deduplicated by exported name, first registration wins.

        Later registrations of an already seen name are dropped silently;
        document order of the survivors is preserved.
        """
        seen: dict[str, ExportDescriptor] = {}
        for descriptor in self.exports:
            if descriptor.exported_name in seen:
                logger.debug(
                    f"Dropping duplicate export '{descriptor.exported_name}' "
                    f"-> '{descriptor.local_name}'"
                )
                continue
            seen[descriptor.exported_name] = descriptor
        return list(seen.values())
