"""Tests for the generated JavaScript proxy runtime."""

from jsrewire.processors.proxy_runtime_js import (
    PROXY_HANDLER_DOCS_URL,
    ProxyRuntimeNames,
    generate_handler_table,
    generate_proxy_runtime,
    object_like_test,
)


class TestObjectLikeTest:

    def test_null_is_not_object_like(self):
        assert object_like_test("v") == (
            "(typeof v === 'function' || (typeof v === 'object' && v !== null))"
        )


class TestGeneratedRuntime:

    def test_handler_table(self):
        assert generate_handler_table(ProxyRuntimeNames()) == "const _rewireProxyHandlers = {};"

    def test_default_names(self):
        code = generate_proxy_runtime(ProxyRuntimeNames())

        assert "function _rewireProxyIfNeeded(obj, name) {" in code
        assert "function _rewireApplyProxy(maybeProxy, name, val) {" in code
        assert "const handler = _rewireProxyHandlers[name] = {};" in code
        assert "return new Proxy(obj, handler);" in code

    def test_apply_override_replaces_handler_keys(self):
        code = generate_proxy_runtime(ProxyRuntimeNames())

        assert "Object.keys(handler).forEach(k => delete handler[k]);" in code
        assert "Object.keys(val).forEach(k => handler[k] = val[k]);" in code
        assert "return maybeProxy;" in code

    def test_error_message_names_import_and_docs(self):
        code = generate_proxy_runtime(ProxyRuntimeNames())

        assert "throw new Error('When rewiring proxied import \"' + name + '\"" in code
        assert PROXY_HANDLER_DOCS_URL in code

    def test_custom_names(self):
        names = ProxyRuntimeNames(
            handler_table="_handlers2",
            wrap_function="_wrap2",
            apply_function="_apply2",
        )
        code = generate_proxy_runtime(names)

        assert "function _wrap2(obj, name)" in code
        assert "function _apply2(maybeProxy, name, val)" in code
        assert "_handlers2[name]" in code
        assert "_rewireProxyHandlers" not in code

    def test_runtime_parses(self, parse_js):
        root = parse_js(generate_proxy_runtime(ProxyRuntimeNames()))
        assert [n.type for n in root.named_children] == [
            "function_declaration",
            "function_declaration",
        ]
