"""Display-width aware UTF-8 helpers and word wrapping."""

from __future__ import annotations

from wcwidth import wcwidth

REPLACEMENT_CHARACTER = 0xFFFD

_WCHAR_MAX = 0x7FFFFFFF
_CODE_POINT_MAX = 0x10FFFF
_WORD_BREAKS = frozenset(" \n\t")


def _sequence_length(lead: int) -> int:
    """Return the length of a UTF-8 sequence from its lead byte, 0 if invalid."""
    if lead < 0x80:
        return 1
    if lead >> 5 == 0x6:
        return 2
    if lead >> 4 == 0xE:
        return 3
    if lead >> 3 == 0x1E:
        return 4
    return 0


def next_codepoint(data: bytes | bytearray | str, index: int) -> tuple[int, int]:
    """Decode the code point starting at ``index``.

    Returns the code point and the index just past it. At the end of the data
    or at a NUL byte, returns 0 and leaves the index unchanged. An invalid
    sequence yields U+FFFD and advances by one byte.
    """
    if isinstance(data, str):
        data = data.encode("utf-8", "surrogatepass")
    if index >= len(data) or data[index] == 0:
        return 0, index
    length = _sequence_length(data[index])
    if length == 0:
        return REPLACEMENT_CHARACTER, index + 1
    chunk = bytes(data[index:index + length])
    try:
        decoded = chunk.decode("utf-8")
    except UnicodeDecodeError:
        return REPLACEMENT_CHARACTER, index + 1
    if len(chunk) != length or len(decoded) != 1:
        return REPLACEMENT_CHARACTER, index + 1
    return ord(decoded), index + length


def codepoint_width(codepoint: int) -> int:
    """Return the number of terminal columns a code point occupies."""
    if codepoint < 0:
        raise ValueError(f"negative code point: {codepoint}")
    if codepoint > _WCHAR_MAX:
        return 1
    if codepoint > _CODE_POINT_MAX:
        return 0
    width = wcwidth(chr(codepoint))
    return width if width >= 0 else 0


def _as_text(text: str | bytes | bytearray) -> str:
    """Return text as str; for bytes, keep the valid UTF-8 prefix only."""
    if isinstance(text, (bytes, bytearray, memoryview)):
        data = bytes(text)
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as exc:
            return data[:exc.start].decode("utf-8")
    return text


def display_width(text: str | bytes) -> int:
    """Return the display width of a string in terminal columns."""
    return sum(codepoint_width(ord(ch)) for ch in _as_text(text))


class _Wrapper:
    """State of one word-wrapping pass."""

    def __init__(self, max_width: int, indent: int) -> None:
        self.max_width = max_width
        self.indent = indent
        self.lines: list[str] = []
        self.line = ""
        self.line_width = 0
        self.word = ""
        self.word_width = 0
        self.first_line = True

    def _indent_prefix(self) -> tuple[str, int]:
        if self.first_line:
            return "", 0
        return " " * self.indent, self.indent

    def add_word(self) -> None:
        if not self.word:
            return
        needed = self.line_width + (1 if self.line else 0) + self.word_width
        if needed > self.max_width and self.line:
            self.lines.append(self.line)
            self.line = " " * self.indent
            self.line_width = self.indent
            self.first_line = False
        if self.line and not self.line.endswith(" "):
            self.line += " "
            self.line_width += 1
        self.line += self.word
        self.line_width += self.word_width
        self.word = ""
        self.word_width = 0

    def end_line(self) -> None:
        self.lines.append(self.line)
        self.line = ""
        self.line_width = 0
        self.first_line = True

    def add_char(self, ch: str) -> None:
        self.word += ch
        self.word_width += codepoint_width(ord(ch))
        limit = self.max_width - (0 if self.first_line else self.indent)
        if self.word_width > limit:
            self._flush_long_word()

    def _flush_long_word(self) -> None:
        if self.line:
            self.lines.append(self.line)
            self.line = ""
            self.line_width = 0
            self.first_line = False

        if self.word_width <= self.max_width:
            prefix, prefix_width = self._indent_prefix()
            self.lines.append(prefix + self.word)
            self.line = ""
            self.line_width = 0
            self.first_line = False
        else:
            part = ""
            part_width = 0
            for ch in self.word:
                width = codepoint_width(ord(ch))
                if part_width + width > self.max_width - 1:
                    part += "-"
                    prefix, _ = self._indent_prefix()
                    self.lines.append(prefix + part)
                    part = ""
                    part_width = 0
                    self.first_line = False
                part += ch
                part_width += width
            if part:
                prefix, prefix_width = self._indent_prefix()
                self.line = prefix + part
                self.line_width = prefix_width + part_width

        self.word = ""
        self.word_width = 0

    def finish(self) -> list[str]:
        self.add_word()
        if self.line:
            self.lines.append(self.line)
        return self.lines


def word_wrap(text: str | bytes, max_width: int, indent: int = 0) -> list[str]:
    """Wrap text into lines of at most ``max_width`` display columns.

    Continuation lines are prefixed with ``indent`` spaces; words too long for
    a line are broken with hyphens. Bytes input is wrapped up to the first
    invalid UTF-8 sequence.
    """
    text = _as_text(text)
    if not text or max_width <= 0:
        return []
    wrapper = _Wrapper(max_width, indent)
    for ch in text:
        if ch in _WORD_BREAKS:
            wrapper.add_word()
            if ch == "\n":
                wrapper.end_line()
        else:
            wrapper.add_char(ch)
    return wrapper.finish()