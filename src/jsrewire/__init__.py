"""Rewire ECMAScript module bindings for testing.

Transforms a module so that test code can replace its exports and intercept
its imports at runtime, then put everything back with ``restore()``.

Example:
    >>> from jsrewire import rewire
    >>> code = rewire("export default function foo() { return 1; }")
    >>> "export function rewire($stub)" in code
    True
"""

from __future__ import annotations

from importlib import import_module
from typing import Any

from jsrewire.core.config import RewireConfig
from jsrewire.core.errors import RewireError, SourceParseError

__version__ = "1.0.0"

_LAZY_EXPORTS = {
    "JavaScriptProcessor": "jsrewire.processors.js_processor",
    "rewire": "jsrewire.processors.js_processor",
}

__all__ = [
    "RewireConfig",
    "RewireError",
    "SourceParseError",
    "JavaScriptProcessor",
    "rewire",
    "__version__",
]


def __getattr__(name: str) -> Any:
    module_name = _LAZY_EXPORTS.get(name)
    if module_name is None:
        raise AttributeError(f"module 'jsrewire' has no attribute {name!r}")
    value = getattr(import_module(module_name), name)
    globals()[name] = value
    return value
