"""
SourceBuffer: the encoded file contents that every offset refers to.

tree-sitter reports byte offsets, so the buffer is kept as UTF-8 bytes and
only decoded for the fragments we render or measure.
"""

from freezed_go_style.schemas import Offset


class SourceBuffer:
    """Byte view over one source file."""

    def __init__(self, data: bytes):
        self.data = data

    @classmethod
    def from_text(cls, text: str) -> "SourceBuffer":
        return cls(text.encode("utf-8"))

    def __len__(self) -> int:
        return len(self.data)

    def text(self, start: Offset, end: Offset) -> str:
        """Decoded source between two offsets."""
        return self.data[start:end].decode("utf-8")

    def line_start(self, offset: Offset) -> Offset:
        """Offset of the first byte of the line containing offset."""
        return Offset(self.data.rfind(b"\n", 0, offset) + 1)

    def indent_at(self, offset: Offset) -> str:
        """
        Leading whitespace of the line containing offset.

        Found by scanning backward to the line start, never by line numbers.
        """
        start = self.line_start(offset)
        line = self.data[start:offset]
        stripped = line.lstrip(b" \t")
        return line[:len(line) - len(stripped)].decode("utf-8")

    def has_newline_between(self, start: Offset, end: Offset) -> bool:
        return b"\n" in self.data[start:end]

    def find(self, needle: bytes, start: Offset, end: Offset) -> int:
        return self.data.find(needle, start, end)

    @property
    def newline(self) -> str:
        """The file's line ending convention."""
        return "\r\n" if b"\r\n" in self.data else "\n"
