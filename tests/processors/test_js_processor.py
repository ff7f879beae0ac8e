"""Tests for the JavaScript processor and the ``rewire`` entry point.

This test suite covers:
- Parsing and syntax error reporting
- Result objects and metadata
- Configuration handling of ``rewire``
- Failure reporting from the transformation
"""

import re

import pytest

import jsrewire
from jsrewire.core.config import RewireConfig
from jsrewire.core.errors import RewireError, SourceParseError
from jsrewire.processors.js_processor import (
    GenerateResult,
    JavaScriptProcessor,
    ParseResult,
    collect_syntax_errors,
    rewire,
)
from jsrewire.processors.rewire_transformer import RewireTransformer
from jsrewire.processors.stub_synthesizer import StubSynthesizer

ERROR_PATTERN = re.compile(r"at line \d+, column \d+$")


# ============================================================================
# Parsing
# ============================================================================


class TestParseSource:

    def test_valid_module(self):
        result = JavaScriptProcessor().parse_source("export let a = 1;")

        assert isinstance(result, ParseResult)
        assert result.success
        assert result.tree is not None
        assert result.errors == []

    def test_syntax_error_reported_with_position(self):
        result = JavaScriptProcessor().parse_source("export default function (")

        assert not result.success
        assert result.tree is None
        assert result.errors
        assert all(ERROR_PATTERN.search(error) for error in result.errors)

    def test_error_limit(self):
        processor = JavaScriptProcessor()
        tree = processor._parser.parse(b"let = ;\nlet = ;\nlet = ;")

        assert tree.root_node.has_error
        assert len(collect_syntax_errors(tree.root_node, limit=1)) == 1


# ============================================================================
# Rewiring
# ============================================================================


class TestRewireSource:

    def test_success_metadata(self):
        result = JavaScriptProcessor().rewire_source("export default function foo() { return 1; }")

        assert isinstance(result, GenerateResult)
        assert result.success
        assert result.metadata == {
            "export_functions": {"default": "rewire"},
            "import_functions": {},
            "restore_function": "restore",
        }

    def test_parse_failure_gives_empty_code(self):
        result = JavaScriptProcessor().rewire_source("import { from 'x';")

        assert not result.success
        assert result.code == ""
        assert result.errors

    def test_processor_is_reusable(self):
        """Test state from one module never leaks into the next."""
        processor = JavaScriptProcessor()
        first = processor.rewire_source("export let a = 1;")
        second = processor.rewire_source("export let b = 1;")

        assert first.metadata["export_functions"] == {"a": "rewire$a"}
        assert second.metadata["export_functions"] == {"b": "rewire$b"}
        assert "rewire$a" not in second.code

    def test_invalid_config_rejected(self):
        with pytest.raises(ValueError, match="must be a boolean"):
            JavaScriptProcessor(RewireConfig(unsafe_const=1))

    def test_transform_failure_is_captured(self, monkeypatch):
        def explode(self, context):
            raise RuntimeError("boom")

        monkeypatch.setattr(StubSynthesizer, "synthesize", explode)
        parsed = JavaScriptProcessor().parse_source("export let a = 1;")
        result = RewireTransformer().transform(parsed.tree, parsed.source_code)

        assert not result.success
        assert result.code is None
        assert result.errors == ["Transformation failed: RuntimeError: boom"]


# ============================================================================
# rewire()
# ============================================================================


class TestRewireFunction:

    def test_plugin_style_option(self):
        code = rewire("export const answer = 42;", unsafeConst=True)
        assert "export function rewire$answer($stub)" in code

    def test_config_object(self):
        code = rewire("export const answer = 42;", RewireConfig(unsafe_const=True))
        assert "export let answer = 42;" in code

    def test_config_and_options_together_rejected(self):
        with pytest.raises(ValueError, match="either a config or keyword options"):
            rewire("let a;", RewireConfig(), unsafe_const=True)

    def test_unknown_option_rejected(self):
        with pytest.raises(ValueError, match="Unknown option"):
            rewire("let a;", strict=True)

    def test_syntax_error_raises(self):
        with pytest.raises(SourceParseError) as exc_info:
            rewire("export default function (")

        assert isinstance(exc_info.value, RewireError)
        assert exc_info.value.errors

    def test_transform_failure_raises(self, monkeypatch):
        def explode(self, context):
            raise RuntimeError("boom")

        monkeypatch.setattr(StubSynthesizer, "synthesize", explode)
        with pytest.raises(RewireError, match="Rewiring failed") as exc_info:
            rewire("export let a = 1;")

        assert exc_info.value.errors == ["Transformation failed: RuntimeError: boom"]

    def test_package_level_entry_point(self):
        assert jsrewire.rewire is rewire
        assert jsrewire.JavaScriptProcessor is JavaScriptProcessor
