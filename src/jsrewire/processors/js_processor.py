"""JavaScript module processor: parsing and rewiring of ECMAScript source.

This module parses JavaScript module source into a tree-sitter syntax tree
and runs the rewire pass over it. Syntax errors are reported with line and
column positions instead of being silently carried into the output.

Example:
    >>> processor = JavaScriptProcessor()
    >>> result = processor.rewire_source("export default function foo() { return 1; }")
    >>> if result.success:
    ...     print(result.code)
    ... else:
    ...     for error in result.errors:
    ...         print(f"Error: {error}")
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

import tree_sitter_javascript as tsjs
from tree_sitter import Language, Node, Parser, Tree

from jsrewire.core.config import RewireConfig
from jsrewire.core.errors import RewireError, SourceParseError
from jsrewire.processors.rewire_transformer import RewireTransformer
from jsrewire.utils.logger import get_logger

JS_LANGUAGE = Language(tsjs.language())

# Stop collecting after this many syntax errors
MAX_REPORTED_ERRORS: int = 20

logger = get_logger("jsrewire.processors.js_processor")


@dataclass
class ParseResult:
    """Result of parsing JavaScript source.

    Attributes:
        tree: The parsed syntax tree, or None if parsing failed.
        source_code: Source code that was parsed.
        success: Whether the source parsed without syntax errors.
        errors: Syntax error messages with 1-based line and column.
    """

    tree: Optional[Tree]
    source_code: str
    success: bool
    errors: list[str] = field(default_factory=list)


@dataclass
class GenerateResult:
    """Result of rewiring JavaScript source.

    Attributes:
        code: Rewired source code (empty on failure).
        success: Whether rewiring succeeded.
        errors: Error messages encountered while parsing or rewiring.
        metadata: Generated function names (``export_functions``,
            ``import_functions``, ``restore_function``).
    """

    code: str
    success: bool
    errors: list[str] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)


def collect_syntax_errors(root: Node, limit: int = MAX_REPORTED_ERRORS) -> list[str]:
    """Describe every ``ERROR`` and missing node below ``root``."""
    errors: list[str] = []
    stack = [root]
    while stack and len(errors) < limit:
        node = stack.pop()
        line, column = node.start_point[0] + 1, node.start_point[1] + 1
        if node.is_missing:
            errors.append(f"Missing '{node.type}' at line {line}, column {column}")
        elif node.type == "ERROR":
            errors.append(f"Syntax error at line {line}, column {column}")
            continue
        if node.has_error:
            stack.extend(reversed(node.children))
    return errors


class JavaScriptProcessor:
    """Processor parsing and rewiring JavaScript modules.

    Attributes:
        config: Configuration passed on to the rewire pass.

    Example:
        >>> processor = JavaScriptProcessor(RewireConfig(unsafe_const=True))
        >>> parsed = processor.parse_source("export const answer = 42;")
        >>> parsed.success
        True
    """

    def __init__(self, config: Optional[RewireConfig] = None) -> None:
        self.config = config or RewireConfig()
        self.config.validate()
        self.logger = logger
        self._parser = Parser(JS_LANGUAGE)
        self._transformer = RewireTransformer(self.config)
        self.logger.debug(f"JavaScriptProcessor initialized (unsafe_const={self.config.unsafe_const})")

    def parse_source(self, source: str) -> ParseResult:
        """Parse module source into a tree-sitter tree.

        Args:
            source: JavaScript module source.

        Returns:
            ParseResult holding the tree and any syntax errors.
        """
        tree = self._parser.parse(source.encode("utf-8"))
        if tree.root_node.has_error:
            errors = collect_syntax_errors(tree.root_node)
            for error in errors:
                self.logger.error(error)
            return ParseResult(tree=None, source_code=source, success=False, errors=errors)

        self.logger.debug(f"Parsed {len(tree.root_node.named_children)} top-level statements")
        return ParseResult(tree=tree, source_code=source, success=True)

    def rewire_source(self, source: str) -> GenerateResult:
        """Parse ``source`` and run the rewire pass over it.

        Args:
            source: JavaScript module source.

        Returns:
            GenerateResult with the rewired code, or the parse or
            transformation errors.
        """
        return self.rewire_parsed(self.parse_source(source))

    def rewire_parsed(self, parsed: ParseResult) -> GenerateResult:
        """Run the rewire pass over an already parsed module."""
        if not parsed.success or parsed.tree is None:
            return GenerateResult(code="", success=False, errors=parsed.errors)

        result = self._transformer.transform(parsed.tree, parsed.source_code)
        if not result.success or result.code is None:
            return GenerateResult(code="", success=False, errors=result.errors)

        return GenerateResult(
            code=result.code,
            success=True,
            metadata={
                "export_functions": result.export_functions,
                "import_functions": result.import_functions,
                "restore_function": result.restore_function,
            },
        )


def rewire(source: str, config: Optional[RewireConfig] = None, **options: Any) -> str:
    """Rewire a module and return the new source.

    Args:
        source: JavaScript module source.
        config: Configuration to use; built from ``options`` when omitted.
        **options: Configuration options (``unsafe_const`` or ``unsafeConst``).

    Returns:
        Rewired module source.

    Raises:
        SourceParseError: If ``source`` has syntax errors.
        RewireError: If the transformation fails.
        ValueError: If the configuration is invalid.

    Example:
        >>> code = rewire("export const answer = 42;", unsafe_const=True)
        >>> "export function rewire$answer($stub)" in code
        True
    """
    if config is None:
        config = RewireConfig.from_dict(options)
    elif options:
        raise ValueError("Pass either a config or keyword options, not both")

    processor = JavaScriptProcessor(config)
    parsed = processor.parse_source(source)
    if not parsed.success:
        raise SourceParseError("Source contains syntax errors", parsed.errors)

    result = processor.rewire_parsed(parsed)
    if not result.success:
        raise RewireError("Rewiring failed", result.errors)
    return result.code
