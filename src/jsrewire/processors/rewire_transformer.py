"""The rewire pass over one ECMAScript module.

This module drives the transformation: it enters the module by building a
fresh RewireContext, dispatches each top-level statement in document order
to a ``visit_<node type>`` method, and leaves the module by running the
stub synthesizer and rendering the edited source.

Example:
    >>> from jsrewire.processors.js_processor import JavaScriptProcessor
    >>> parsed = JavaScriptProcessor().parse_source("export let count = 0;")
    >>> result = RewireTransformer().transform(parsed.tree, parsed.source_code)
    >>> result.export_functions
    {'count': 'rewire$count'}
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from tree_sitter import Node, Tree

from jsrewire.core.config import RewireConfig
from jsrewire.processors.export_normalizer import ExportNormalizer
from jsrewire.processors.import_interceptor import ImportInterceptor
from jsrewire.processors.rewire_context import RewireContext
from jsrewire.processors.stub_synthesizer import StubSynthesizer
from jsrewire.utils.logger import get_logger

logger = get_logger("jsrewire.processors.rewire_transformer")


@dataclass
class TransformResult:
    """Result of rewiring one module.

    Attributes:
        code: The rewired source, or None if the transformation failed.
        success: Whether the transformation completed successfully.
        export_functions: Exported name -> generated override function.
        import_functions: Imported name -> generated override function.
        restore_function: Generated restore function, None if the module
            had nothing to rewire.
        errors: Error messages describing any failure.

    Example:
        >>> result = transformer.transform(tree, source)
        >>> if result.success:
        ...     print(result.code)
        ... else:
        ...     for error in result.errors:
        ...         print(f"Error: {error}")
    """

    code: Optional[str]
    success: bool
    export_functions: dict[str, str] = field(default_factory=dict)
    import_functions: dict[str, str] = field(default_factory=dict)
    restore_function: Optional[str] = None
    errors: list[str] = field(default_factory=list)


class RewireTransformer:
    """Single-pass transformer making a module's bindings overridable.

    A transformer holds no per-module state; every ``transform`` call gets
    its own context, so one instance can process any number of modules.

    Attributes:
        config: Configuration applied to every module.
    """

    def __init__(self, config: Optional[RewireConfig] = None) -> None:
        self.config = config or RewireConfig()
        self.logger = logger
        self._exports = ExportNormalizer()
        self._imports = ImportInterceptor()
        self._synthesizer = StubSynthesizer()

    def transform(self, tree: Tree, source: str) -> TransformResult:
        """Rewire the module parsed into ``tree`` from ``source``.

        Errors are captured in the returned TransformResult rather than
        raised.
        """
        try:
            context = RewireContext.enter(tree.root_node, source.encode("utf-8"), self.config)

            for statement in tree.root_node.named_children:
                self.visit(statement, context)

            synthesis = self._synthesizer.synthesize(context)
            code = context.editor.render() if context.editor.edit_count else source

            self.logger.info(
                f"Rewired module: {len(synthesis.export_functions)} export(s), "
                f"{len(synthesis.import_functions)} import(s)"
            )
            return TransformResult(
                code=code,
                success=True,
                export_functions=synthesis.export_functions,
                import_functions=synthesis.import_functions,
                restore_function=synthesis.restore_function,
            )

        except Exception as e:
            error_msg = f"Transformation failed: {e.__class__.__name__}: {e}"
            self.logger.error(error_msg, exc_info=True)
            return TransformResult(code=None, success=False, errors=[error_msg])

    def visit(self, node: Node, context: RewireContext) -> None:
        visitor = getattr(self, f"visit_{node.type}", None)
        if visitor is not None:
            visitor(node, context)

    def visit_import_statement(self, node: Node, context: RewireContext) -> None:
        self._imports.visit_import_statement(node, context)

    def visit_export_statement(self, node: Node, context: RewireContext) -> None:
        self._exports.visit_export_statement(node, context)
