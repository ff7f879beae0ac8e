"""Generation of override and restore functions.

Runs once per module after every top-level statement has been visited. It
reads the accumulated descriptors and emits:

1. the proxy handler table, at the very top of the module;
2. at the end of the module, a ``var`` capturing each export's value at
   initialization time, ahead of the generated functions;
3. one exported override function per export
   (``rewire`` for ``default``, ``rewire$<name>`` otherwise);
4. one exported override function per intercepted import;
5. the exported ``restore`` function;
6. the proxy runtime helpers.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Optional

from jsrewire.core.module_state import ExportDescriptor, ImportDescriptor
from jsrewire.processors.import_interceptor import REWIRE_PREFIX
from jsrewire.processors.proxy_runtime_js import (
    ProxyRuntimeNames,
    generate_handler_table,
    generate_proxy_runtime,
    object_like_test,
)
from jsrewire.processors.rewire_context import RewireContext
from jsrewire.utils.logger import get_logger

logger = get_logger("jsrewire.processors.stub_synthesizer")

DEFAULT_REWIRE_NAME = "rewire"
DEFAULT_RESTORE_NAME = "restore"
RESTORE_FALLBACK_NAME = "restore$rewire"
STUB_PARAMETER = "$stub"

INDENT = "  "


def build_export_stub(function_name: str, local: str, parameter: str) -> str:
    return (
        f"export function {function_name}({parameter}) {{\n"
        f"{INDENT}{local} = {parameter};\n"
        f"}}"
    )


def build_import_stub(
    function_name: str,
    descriptor: ImportDescriptor,
    parameter: str,
    runtime: ProxyRuntimeNames,
) -> str:
    external = descriptor.external_name
    return (
        f"export function {function_name}({parameter}) {{\n"
        f"{INDENT}{external} = {runtime.apply_function}"
        f"({external}, {json.dumps(external)}, {parameter});\n"
        f"}}"
    )


def build_restore(
    function_name: str,
    exports: list[ExportDescriptor],
    imports: list[ImportDescriptor],
    runtime: ProxyRuntimeNames,
) -> str:
    """Build the restore function.

    Exports are reassigned from their capture slots. Every handler is
    emptied, which turns each proxy back into a transparent pass-through.
    Imports whose real value is not object-like were never wrapped, so
    their external binding is re-synced from the live internal binding.
    """
    table = runtime.handler_table
    lines = [local_assignment(e) for e in exports]
    lines.append(
        f"Object.keys({table}).forEach(k1 => "
        f"Object.keys({table}[k1]).forEach(k2 => delete {table}[k1][k2]));"
    )
    for descriptor in imports:
        lines.append(f"if (!{object_like_test(descriptor.internal_name)}) {{")
        lines.append(f"{INDENT}{descriptor.external_name} = {descriptor.internal_name};")
        lines.append("}")

    body = "".join(f"{INDENT}{line}\n" for line in lines)
    return f"export function {function_name}() {{\n{body}}}"


def local_assignment(descriptor: ExportDescriptor) -> str:
    return f"{descriptor.local_name} = {descriptor.original_name};"


@dataclass
class SynthesisResult:
    """What the synthesizer emitted for one module.

    Attributes:
        export_functions: Exported name -> override function name.
        import_functions: Imported name -> override function name.
        restore_function: Restore function name, None when nothing was emitted.
    """

    export_functions: dict[str, str] = field(default_factory=dict)
    import_functions: dict[str, str] = field(default_factory=dict)
    restore_function: Optional[str] = None


class StubSynthesizer:
    """Emits the generated declarations for a fully visited module."""

    def __init__(self) -> None:
        self.logger = logger

    def synthesize(self, context: RewireContext) -> SynthesisResult:
        result = SynthesisResult()
        state = context.state
        if state.is_empty():
            self.logger.debug("No exports or imports registered, nothing to synthesize")
            return result

        allocator = context.allocator
        exports = state.unique_exports()

        # capture original values
        captures: list[str] = []
        for descriptor in exports:
            descriptor.original_name = allocator.generate_uid(descriptor.exported_name)
            captures.append(f"{descriptor.original_name} = {descriptor.local_name}")

        parameter = allocator.reserve(STUB_PARAMETER)
        functions: list[str] = []

        for descriptor in exports:
            if descriptor.exported_name == "default":
                name = allocator.reserve(DEFAULT_REWIRE_NAME, f"{REWIRE_PREFIX}default")
            else:
                name = allocator.reserve(f"{REWIRE_PREFIX}{descriptor.exported_name}")
            result.export_functions[descriptor.exported_name] = name
            functions.append(build_export_stub(name, descriptor.local_name, parameter))

        for descriptor in state.imports:
            name = allocator.reserve(f"{REWIRE_PREFIX}{descriptor.external_name}")
            result.import_functions[descriptor.external_name] = name
            functions.append(build_import_stub(name, descriptor, parameter, context.runtime))

        result.restore_function = allocator.reserve(DEFAULT_RESTORE_NAME, RESTORE_FALLBACK_NAME)
        functions.append(
            build_restore(result.restore_function, exports, state.imports, context.runtime)
        )

        context.prepend(generate_handler_table(context.runtime))

        body: list[str] = []
        if captures:
            body.append(f"var {', '.join(captures)};")
        body.extend(functions)
        body.append(generate_proxy_runtime(context.runtime))
        context.editor.append("\n" + "\n".join(body) + "\n")

        self.logger.debug(
            f"Synthesized {len(result.export_functions)} export and "
            f"{len(result.import_functions)} import override(s), "
            f"restore as '{result.restore_function}'"
        )
        return result
