"""
Line-addressable text buffers.

The document driver only needs three operations from a buffer:
line_count(), get_line(index) and set_line(index, text).
"""

import re
from typing import List, Protocol

# Line terminators preserved on round trip
_LINE_BREAK = re.compile(r'(\r\n|\r|\n)')


class TextBuffer(Protocol):
    def line_count(self) -> int: ...

    def get_line(self, index: int) -> str: ...

    def set_line(self, index: int, text: str) -> None: ...


class LineBuffer:
    """
    In-memory buffer over the lines of a text.

    Line terminators are kept aside so that to_text() reproduces the
    original text exactly when no line was changed. A trailing newline
    produces a final empty line, as in an editor.
    """

    def __init__(self, lines: List[str], endings: List[str] = None):
        self.lines = list(lines)
        if endings is None:
            endings = ['\n'] * (len(self.lines) - 1) + [''] if self.lines else []
        if len(endings) != len(self.lines):
            raise ValueError("endings must have one entry per line")
        self.endings = list(endings)
        self.modified = False

    @classmethod
    def from_text(cls, text: str) -> "LineBuffer":
        parts = _LINE_BREAK.split(text)
        return cls(parts[0::2], parts[1::2] + [''])

    def to_text(self) -> str:
        return ''.join(line + end for line, end in zip(self.lines, self.endings))

    def line_count(self) -> int:
        return len(self.lines)

    def get_line(self, index: int) -> str:
        return self.lines[index]

    def set_line(self, index: int, text: str) -> None:
        if self.lines[index] != text:
            self.lines[index] = text
            self.modified = True
