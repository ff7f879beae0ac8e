"""Tests for interception of imported bindings."""

from jsrewire.processors.js_processor import JavaScriptProcessor


class TestImportRenaming:
    """Each imported binding is renamed and re-declared through the proxy runtime."""

    def test_default_import(self, rewire_js):
        code = rewire_js("""
            import foo from './foo';
            foo();
        """)

        assert (
            "import _foo from './foo';\n"
            'let foo = _rewireProxyIfNeeded(_foo, "foo");\n'
            "foo();"
        ) in code

    def test_named_imports(self, rewire_js):
        code = rewire_js("import { a, b as c } from 'm';")

        assert (
            "import { a as _a, b as _c } from 'm';\n"
            'let a = _rewireProxyIfNeeded(_a, "a");\n'
            'let c = _rewireProxyIfNeeded(_c, "c");'
        ) in code

    def test_namespace_import(self, rewire_js):
        code = rewire_js("import * as ns from 'n';")

        assert "import * as _ns from 'n';\n" in code
        assert 'let ns = _rewireProxyIfNeeded(_ns, "ns");' in code

    def test_default_and_named_in_one_statement(self, rewire_js):
        code = rewire_js("import def, { x } from 'm';")

        assert "import _def, { x as _x } from 'm';" in code
        assert 'let def = _rewireProxyIfNeeded(_def, "def");' in code
        assert 'let x = _rewireProxyIfNeeded(_x, "x");' in code

    def test_alias_avoids_existing_names(self, rewire_js):
        code = rewire_js("""
            import foo from './foo';
            function f() { let _foo = 1; return _foo + foo; }
        """)
        assert "import _foo2 from './foo';" in code

    def test_override_imports_are_not_intercepted(self, rewire_js):
        """Test names with the override prefix pass through unchanged."""
        source = "import { rewire$foo } from './other';\nrewire$foo(1);"
        assert rewire_js(source) == source

    def test_side_effect_import_untouched(self, rewire_js):
        source = "import './polyfill';"
        assert rewire_js(source) == source


class TestImportOverrides:

    def test_override_function(self, rewire_js, exported_functions):
        code = rewire_js("import foo from './foo';")

        assert exported_functions(code)["rewire$foo"] == (
            "function rewire$foo($stub) {\n"
            '  foo = _rewireApplyProxy(foo, "foo", $stub);\n'
            "}"
        )

    def test_restore_resyncs_primitive_imports(self, rewire_js, exported_functions):
        restore = exported_functions(rewire_js("import foo from './foo';"))["restore"]

        assert (
            "  if (!(typeof _foo === 'function' || (typeof _foo === 'object' && _foo !== null))) {\n"
            "    foo = _foo;\n"
            "  }\n"
        ) in restore

    def test_metadata_lists_import_overrides(self):
        result = JavaScriptProcessor().rewire_source("import a from 'a';\nimport { b } from 'b';")

        assert result.success
        assert result.metadata["import_functions"] == {"a": "rewire$a", "b": "rewire$b"}
        assert result.metadata["export_functions"] == {}
        assert result.metadata["restore_function"] == "restore"

    def test_imported_name_also_exported(self):
        """Test an import re-exported locally gets distinct override names."""
        result = JavaScriptProcessor().rewire_source("import foo from './foo';\nexport { foo };")

        assert result.metadata["export_functions"] == {"foo": "rewire$foo"}
        assert result.metadata["import_functions"] == {"foo": "_rewire$foo"}
        assert "var _foo2 = foo;\nexport { _foo2 as foo };" in result.code
