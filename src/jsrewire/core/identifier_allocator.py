"""Collision-free synthetic names for one module.

Generated names follow the usual compiler convention of a leading
underscore and a numeric suffix on collision: ``_default``, ``_default2``,
``_default3``...

Example:
    >>> allocator = IdentifierAllocator(scope)
    >>> allocator.generate_uid("default")
    '_default'
    >>> allocator.generate_uid("default")
    '_default2'
"""

from __future__ import annotations

import re
from typing import Optional

from jsrewire.core.scope import ModuleScope
from jsrewire.utils.logger import get_logger

logger = get_logger("jsrewire.core.identifier_allocator")

_NON_IDENTIFIER_CHARS = re.compile(r"[^A-Za-z0-9_$]")
_TRAILING_DIGITS = re.compile(r"\d+$")


class IdentifierAllocator:
    """Hands out names unique against every identifier of a module.

    Attributes:
        generated: Names handed out so far.
    """

    def __init__(self, scope: ModuleScope) -> None:
        self._scope = scope
        self.generated: set[str] = set()

    def is_taken(self, name: str) -> bool:
        return (
            name in self.generated
            or name in self._scope.references
            or self._scope.has_binding(name)
        )

    def generate_uid(self, base: str = "temp") -> str:
        """Return ``_<base>`` or ``_<base><n>``, unused anywhere in the module."""
        stem = _NON_IDENTIFIER_CHARS.sub("_", base).lstrip("_")
        stem = _TRAILING_DIGITS.sub("", stem) or "temp"

        counter = 1
        while True:
            candidate = f"_{stem}" if counter == 1 else f"_{stem}{counter}"
            if not self.is_taken(candidate):
                self.generated.add(candidate)
                return candidate
            counter += 1

    def reserve(self, preferred: str, fallback: Optional[str] = None) -> str:
        """Claim a top-level name for generated code.

        ``preferred`` is used unless the module already binds it at the top
        level or it was handed out before; then ``fallback`` under the same
        rule; then a generated uid based on ``preferred``.
        """
        for candidate in (preferred, fallback):
            if candidate is None:
                continue
            if not self._scope.has_binding(candidate) and candidate not in self.generated:
                self.generated.add(candidate)
                return candidate
            logger.debug(f"Generated name '{candidate}' already bound, disambiguating")
        return self.generate_uid(preferred)
