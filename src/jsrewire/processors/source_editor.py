"""Text-splicing editor over the original module source.

The rewire pass never pretty-prints a tree. Every change is recorded as an
edit against byte offsets of the original source, and ``render`` splices the
edits in one go, so formatting and comments outside edited ranges survive
untouched.

Example:
    >>> editor = SourceEditor(b"export default 1;")
    >>> editor.replace(0, 17, "var _default = 1;")
    >>> editor.insert(17, "\\nexport { _default as default };")
    >>> editor.render()
    'var _default = 1;\\nexport { _default as default };'
"""

from __future__ import annotations

from dataclasses import dataclass

from tree_sitter import Node

from jsrewire.utils.logger import get_logger

logger = get_logger("jsrewire.processors.source_editor")


@dataclass
class _Edit:
    start: int
    end: int
    text: str
    order: int

    @property
    def is_insertion(self) -> bool:
        return self.start == self.end


class SourceEditor:
    """Collects edits against a source buffer and renders the result.

    Insertions at the same offset render in the order they were made, except
    for ``prepend`` which places text ahead of everything previously
    inserted there. Insertions at an offset render before a replacement
    starting at that offset. Replacements must not overlap.
    """

    def __init__(self, source: bytes) -> None:
        self.source = source
        self._edits: list[_Edit] = []
        self._counter = 0

    def _next_order(self) -> int:
        self._counter += 1
        return self._counter

    @property
    def edit_count(self) -> int:
        return len(self._edits)

    def slice(self, node: Node) -> str:
        return self.source[node.start_byte:node.end_byte].decode("utf-8")

    def replace(self, start: int, end: int, text: str) -> None:
        if not 0 <= start <= end <= len(self.source):
            raise ValueError(f"Edit range {start}:{end} outside source of {len(self.source)} bytes")
        self._edits.append(_Edit(start, end, text, self._next_order()))

    def replace_node(self, node: Node, text: str) -> None:
        self.replace(node.start_byte, node.end_byte, text)

    def insert(self, offset: int, text: str) -> None:
        self.replace(offset, offset, text)

    def prepend(self, offset: int, text: str) -> None:
        """Insert ``text`` ahead of every earlier insertion at ``offset``."""
        if not 0 <= offset <= len(self.source):
            raise ValueError(f"Offset {offset} outside source of {len(self.source)} bytes")
        self._edits.append(_Edit(offset, offset, text, -self._next_order()))

    def append(self, text: str) -> None:
        self.insert(len(self.source), text)

    def render(self) -> str:
        """Apply all edits and return the new source text.

        Raises:
            ValueError: If two replacements overlap.
        """
        edits = sorted(
            self._edits,
            key=lambda e: (e.start, 0 if e.is_insertion else 1, e.order),
        )
        parts: list[bytes] = []
        cursor = 0
        for edit in edits:
            if edit.start < cursor:
                raise ValueError(
                    f"Overlapping edits at byte {edit.start} (already consumed up to {cursor})"
                )
            parts.append(self.source[cursor:edit.start])
            parts.append(edit.text.encode("utf-8"))
            cursor = edit.end
        parts.append(self.source[cursor:])

        logger.debug(f"Rendered {len(edits)} edits")
        return b"".join(parts).decode("utf-8")
