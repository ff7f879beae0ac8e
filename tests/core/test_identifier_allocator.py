"""Tests for collision-free name generation."""

import pytest

from jsrewire.core.identifier_allocator import IdentifierAllocator
from jsrewire.core.scope import ModuleScope


@pytest.fixture
def allocator_for(parse_js):
    """Fixture building an allocator over a parsed module."""
    def _allocator(source: str) -> IdentifierAllocator:
        return IdentifierAllocator(ModuleScope(parse_js(source)))
    return _allocator


class TestGenerateUid:

    def test_sequential_names(self, allocator_for):
        allocator = allocator_for("let x = 1;")

        assert allocator.generate_uid("default") == "_default"
        assert allocator.generate_uid("default") == "_default2"
        assert allocator.generate_uid("default") == "_default3"

    def test_skips_names_used_anywhere(self, allocator_for):
        """Test identifiers in nested scopes also count as taken."""
        allocator = allocator_for("function f() { let _foo = 1; return _foo; }")
        assert allocator.generate_uid("foo") == "_foo2"

    @pytest.mark.parametrize(
        "base, expected",
        [
            ("foo2", "_foo"),
            ("_bar", "_bar"),
            ("rewire$foo", "_rewire$foo"),
            ("a-b", "_a_b"),
            ("", "_temp"),
        ],
    )
    def test_base_is_normalized(self, allocator_for, base, expected):
        assert allocator_for("").generate_uid(base) == expected

    def test_generated_names_are_recorded(self, allocator_for):
        allocator = allocator_for("")
        name = allocator.generate_uid("x")

        assert name in allocator.generated
        assert allocator.is_taken(name)


class TestReserve:

    def test_free_name_is_used_verbatim(self, allocator_for):
        assert allocator_for("let x;").reserve("rewire") == "rewire"

    def test_reference_without_binding_does_not_block(self, allocator_for):
        allocator = allocator_for("function f() { let restore; }")
        assert allocator.reserve("restore") == "restore"

    def test_fallback_when_preferred_is_bound(self, allocator_for):
        allocator = allocator_for("const rewire = 1;")
        assert allocator.reserve("rewire", "rewire$default") == "rewire$default"

    def test_uid_when_all_candidates_taken(self, allocator_for):
        allocator = allocator_for("let restore, restore$rewire;")
        assert allocator.reserve("restore", "restore$rewire") == "_restore"

    def test_same_name_is_not_reserved_twice(self, allocator_for):
        allocator = allocator_for("")

        assert allocator.reserve("rewire$foo") == "rewire$foo"
        assert allocator.reserve("rewire$foo") == "_rewire$foo"
