"""Scanner that splits query text into raw fragments."""

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum, auto

from .constants import OPERATORS


class FragmentKind(Enum):
    """Raw lexical kinds produced by the scanner."""

    WORD = auto()  # Field names, function names, bare values (math:abs, @timestamp)
    PUNCT = auto()  # Brackets, commas and operators (:=, >=, |)
    QUOTED_STRING = auto()  # "..." including the quotes
    REGEX_LITERAL = auto()  # /.../ including delimiters and flags
    NUMBER = auto()  # 200, 1.5
    WHITESPACE = auto()  # Run of spaces/tabs
    COMMENT = auto()  # // line comment or /* block comment */
    NEWLINE = auto()  # A single \n


@dataclass(frozen=True)
class Fragment:
    """A maximal raw lexical unit.

    Attributes:
        kind: The kind of fragment.
        start: Offset of the first character in the input.
        end: Offset one past the last character.
        text: The matched slice of the input.
    """

    kind: FragmentKind
    start: int
    end: int
    text: str

    @property
    def span(self) -> tuple[int, int]:
        """The (start, end) offsets of this fragment."""
        return (self.start, self.end)


# Multi-character punctuation matched before falling back to one character
_COMPOUND_PUNCT = tuple(op for op in OPERATORS if len(op) > 1 and not op.isalpha())

# Flags accepted after the closing slash of a regex literal (/foo/i)
_REGEX_FLAGS = "dFgim"


def _is_word_char(char: str) -> bool:
    """Check if a character can continue a word."""
    return char.isalnum() or char == "_"


def _is_word_start(text: str, pos: int) -> bool:
    """Check if a word starts at pos (letters, _, or @/# metadata prefixes)."""
    char = text[pos]
    if char.isalpha() or char == "_":
        return True
    return (
        char in "@#" and pos + 1 < len(text) and _is_word_char(text[pos + 1])
    )


def _scan_line_comment(text: str, pos: int) -> int:
    """Return the end of a // comment (the newline is not included)."""
    end = text.find("\n", pos)
    return len(text) if end == -1 else end


def _scan_block_comment(text: str, pos: int) -> int:
    """Return the end of a /* */ comment, or end of input if unterminated."""
    end = text.find("*/", pos + 2)
    return len(text) if end == -1 else end + 2


def _scan_regex(text: str, pos: int) -> int | None:
    """Return the end of a regex literal starting at pos, or None.

    The closing slash must be on the same line. Without one the slash is
    ordinary punctuation.
    """
    i = pos + 1
    length = len(text)
    while i < length:
        char = text[i]
        if char == "\n":
            return None
        if char == "\\" and i + 1 < length and text[i + 1] != "\n":
            i += 2
        elif char == "/":
            end = i + 1
            flags_end = end
            while flags_end < length and text[flags_end] in _REGEX_FLAGS:
                flags_end += 1
            # Flags only count when they don't run into a longer word
            if flags_end < length and _is_word_char(text[flags_end]):
                return end
            return flags_end
        else:
            i += 1
    return None


def _scan_string(text: str, pos: int) -> int:
    """Return the end of a quoted string, or end of line if unterminated."""
    i = pos + 1
    length = len(text)
    while i < length:
        char = text[i]
        if char == "\\" and i + 1 < length and text[i + 1] != "\n":
            i += 2
        elif char == '"':
            return i + 1
        elif char == "\n":
            return i
        else:
            i += 1
    return length


def _scan_number(text: str, pos: int) -> int:
    """Return the end of a number (digits with at most one decimal point)."""
    i = pos
    length = len(text)
    while i < length and text[i].isdigit():
        i += 1
    if i + 1 < length and text[i] == "." and text[i + 1].isdigit():
        i += 1
        while i < length and text[i].isdigit():
            i += 1
    return i


def _scan_word(text: str, pos: int) -> int:
    """Return the end of a word.

    Colons and dots are word-internal (math:abs, event.action) only when a
    word character follows, so "x:=" stops before ":=".
    """
    i = pos + 1
    length = len(text)
    while i < length:
        char = text[i]
        if _is_word_char(char):
            i += 1
        elif char in ":." and i + 1 < length and _is_word_char(text[i + 1]):
            i += 2
        else:
            break
    return i


def _scan_whitespace(text: str, pos: int) -> int:
    """Return the end of a run of non-newline whitespace."""
    i = pos
    while i < len(text) and text[i].isspace() and text[i] != "\n":
        i += 1
    return i


def _scan_punct(text: str, pos: int) -> int:
    """Return the end of a punctuation fragment (compound operators first)."""
    for op in _COMPOUND_PUNCT:
        if text.startswith(op, pos):
            return pos + len(op)
    return pos + 1


def scan(text: str) -> Iterator[Fragment]:
    """Split query text into fragments.

    Every character of the input belongs to exactly one fragment, so joining
    the fragment texts reproduces the input. Malformed input (unterminated
    strings, comments or regexes) never raises.

    Args:
        text: The query text.

    Yields:
        Fragment objects in document order.
    """
    pos = 0
    length = len(text)

    while pos < length:
        char = text[pos]
        kind: FragmentKind

        if char == "\n":
            kind, end = FragmentKind.NEWLINE, pos + 1
        elif char.isspace():
            kind, end = FragmentKind.WHITESPACE, _scan_whitespace(text, pos)
        elif text.startswith("//", pos):
            kind, end = FragmentKind.COMMENT, _scan_line_comment(text, pos)
        elif text.startswith("/*", pos):
            kind, end = FragmentKind.COMMENT, _scan_block_comment(text, pos)
        elif char == "/" and (regex_end := _scan_regex(text, pos)) is not None:
            kind, end = FragmentKind.REGEX_LITERAL, regex_end
        elif char == '"':
            kind, end = FragmentKind.QUOTED_STRING, _scan_string(text, pos)
        elif char.isdigit():
            kind, end = FragmentKind.NUMBER, _scan_number(text, pos)
        elif _is_word_start(text, pos):
            kind, end = FragmentKind.WORD, _scan_word(text, pos)
        else:
            kind, end = FragmentKind.PUNCT, _scan_punct(text, pos)

        yield Fragment(kind=kind, start=pos, end=end, text=text[pos:end])
        pos = end
