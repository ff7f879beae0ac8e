"""Public API for the rewire processors with lazy imports.

This package avoids eager imports of the parser front end so that the pure
text generators (for example the proxy runtime) can be used without loading
the tree-sitter grammar.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any

_EXPORT_MAP: dict[str, tuple[str, str]] = {
    "JavaScriptProcessor": (
        "jsrewire.processors.js_processor",
        "JavaScriptProcessor",
    ),
    "ParseResult": (
        "jsrewire.processors.js_processor",
        "ParseResult",
    ),
    "GenerateResult": (
        "jsrewire.processors.js_processor",
        "GenerateResult",
    ),
    "rewire": (
        "jsrewire.processors.js_processor",
        "rewire",
    ),
    "RewireTransformer": (
        "jsrewire.processors.rewire_transformer",
        "RewireTransformer",
    ),
    "TransformResult": (
        "jsrewire.processors.rewire_transformer",
        "TransformResult",
    ),
    "RewireContext": (
        "jsrewire.processors.rewire_context",
        "RewireContext",
    ),
    "ExportNormalizer": (
        "jsrewire.processors.export_normalizer",
        "ExportNormalizer",
    ),
    "ImportInterceptor": (
        "jsrewire.processors.import_interceptor",
        "ImportInterceptor",
    ),
    "StubSynthesizer": (
        "jsrewire.processors.stub_synthesizer",
        "StubSynthesizer",
    ),
    "SourceEditor": (
        "jsrewire.processors.source_editor",
        "SourceEditor",
    ),
    "ProxyRuntimeNames": (
        "jsrewire.processors.proxy_runtime_js",
        "ProxyRuntimeNames",
    ),
}

__all__ = list(_EXPORT_MAP.keys())


def __getattr__(name: str) -> Any:
    """Resolve package exports lazily."""
    target = _EXPORT_MAP.get(name)
    if target is None:
        raise AttributeError(f"module 'jsrewire.processors' has no attribute {name!r}")

    module_name, attr_name = target
    module = import_module(module_name)
    value = getattr(module, attr_name)
    globals()[name] = value
    return value
