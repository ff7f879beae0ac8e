"""
JavaScript runtime generator for import interception.

This module generates the JavaScript support code that rewired modules rely
on at runtime. Each rewired module receives its own copy, so no shared
runtime package is needed by the code under test.

The generated runtime provides:

- a handler table, one entry per intercepted import whose value is
  object-like;
- ``wrap-if-needed``: wraps object-like values in a ``Proxy`` whose handler
  lives in the table, leaves primitives untouched;
- ``apply-override``: installs a replacement handler, or substitutes a
  plain value when the import was never wrapped.
"""

from __future__ import annotations

from dataclasses import dataclass

PROXY_HANDLER_DOCS_URL = (
    "https://developer.mozilla.org/en-US/docs/Web/JavaScript/Reference/"
    "Global_Objects/Proxy/Proxy#handler_functions"
)

DEFAULT_HANDLER_TABLE_NAME = "_rewireProxyHandlers"
DEFAULT_WRAP_FUNCTION_NAME = "_rewireProxyIfNeeded"
DEFAULT_APPLY_FUNCTION_NAME = "_rewireApplyProxy"


@dataclass(frozen=True)
class ProxyRuntimeNames:
    """Names under which the runtime is emitted in one module.

    Attributes:
        handler_table: Object mapping import names to proxy handlers.
        wrap_function: ``wrap-if-needed(value, name)``.
        apply_function: ``apply-override(current, name, replacement)``.
    """

    handler_table: str = DEFAULT_HANDLER_TABLE_NAME
    wrap_function: str = DEFAULT_WRAP_FUNCTION_NAME
    apply_function: str = DEFAULT_APPLY_FUNCTION_NAME


def object_like_test(expression: str) -> str:
    """Return a JavaScript condition true when ``expression`` is object-like.

    Functions and non-null objects are object-like and get wrapped;
    everything else, ``null`` included, is primitive.
    """
    return (
        f"(typeof {expression} === 'function' || "
        f"(typeof {expression} === 'object' && {expression} !== null))"
    )


def generate_handler_table(names: ProxyRuntimeNames) -> str:
    """Generate the handler table declaration.

    It has to run before any intercepted import is wrapped, so callers
    place it at the very top of the module.
    """
    return f"const {names.handler_table} = {{}};"


def generate_proxy_runtime(names: ProxyRuntimeNames) -> str:
    """
    Generate the two runtime helper functions.

    ``wrap-if-needed(obj, name)`` registers a fresh, empty handler under
    ``name`` and returns ``new Proxy(obj, handler)``: with no traps set the
    proxy forwards every operation to ``obj``. ``apply-override(maybeProxy,
    name, val)`` copies the own keys of ``val`` into that handler after
    clearing it, which redirects the trapped operations while every holder
    of the proxy keeps the same reference. Without a handler the import was
    primitive and ``val`` simply replaces it.

    Both are function declarations, so they are hoisted and may be appended
    at the end of the module.

    Args:
        names: Names allocated for the runtime in the target module.

    Returns:
        JavaScript code string containing both helper functions.

    Example:
        >>> code = generate_proxy_runtime(ProxyRuntimeNames())
        >>> "function _rewireProxyIfNeeded(obj, name)" in code
        True
    """
    table = names.handler_table
    message = (
        "'When rewiring proxied import \"' + name + '\", "
        f"a proxy handler object must be provided, see: {PROXY_HANDLER_DOCS_URL}'"
    )

    return f'''function {names.wrap_function}(obj, name) {{
  if ({object_like_test("obj")}) {{
    const handler = {table}[name] = {{}};
    return new Proxy(obj, handler);
  }}
  return obj;
}}
function {names.apply_function}(maybeProxy, name, val) {{
  const handler = {table}[name];
  if (handler && {object_like_test("val")}) {{
    Object.keys(handler).forEach(k => delete handler[k]);
    Object.keys(val).forEach(k => handler[k] = val[k]);
    return maybeProxy;
  }} else if (handler) {{
    throw new Error({message});
  }}
  return val;
}}'''
