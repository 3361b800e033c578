"""
Low-level string scanning.

Everything here works on strings of UTF-16 code units: astral characters
are spelled out as surrogate pairs (see `to_code_units`) so that offsets
count code units and a "wide" character occupies two of them.

Row/column policy: only '\\n' starts a new row. '\\r' is an ordinary
character taking one column, so a CRLF line ending is one column followed
by a newline.
"""
import re
from typing import Callable, Tuple

_SURROGATE = re.compile("[\ud800-\udfff]")


def to_code_units(text: str) -> str:
    """Spell out every astral character of `text` as a surrogate pair."""
    if not text or max(text) <= "\uffff":
        return text
    units = []
    for char in text:
        code = ord(char)
        if code > 0xFFFF:
            code -= 0x10000
            units.append(chr(0xD800 | (code >> 10)))
            units.append(chr(0xDC00 | (code & 0x3FF)))
        else:
            units.append(char)
    return "".join(units)


def from_code_units(units: str) -> str:
    """Recombine surrogate pairs into ordinary Python characters."""
    if _SURROGATE.search(units) is None:
        return units
    return units.encode("utf-16-le", "surrogatepass").decode("utf-16-le", "surrogatepass")


def char_code_at(offset: int, text: str) -> int:
    """Code unit at `offset`, or -1 when out of range."""
    if 0 <= offset < len(text):
        return ord(text[offset])
    return -1


def is_wide_at(code: int) -> bool:
    """True when the code unit is half of a surrogate pair."""
    return code & 0xF800 == 0xD800


def is_sub_char(predicate: Callable[[str], bool], offset: int, text: str) -> int:
    """
    Test the character at `offset` against `predicate`.

    Returns -1 when out of range or rejected, -2 when an accepted character
    is a newline, and otherwise the offset just past the character.
    """
    length = len(text)
    if offset >= length or offset < 0:
        return -1
    if is_wide_at(ord(text[offset])) and offset + 1 < length:
        if predicate(from_code_units(text[offset:offset + 2])):
            return offset + 2
        return -1
    char = text[offset]
    if predicate(char):
        return -2 if char == "\n" else offset + 1
    return -1


def advance_position(text: str, start: int, end: int, row: int, col: int) -> Tuple[int, int]:
    """Replay the newline and width rules over text[start:end]."""
    if start >= end:
        return row, col
    if _SURROGATE.search(text, start, end) is None:
        newlines = text.count("\n", start, end)
        if newlines:
            row += newlines
            col = 1
            start = text.rfind("\n", start, end) + 1
        return row, col + (end - start)

    offset = start
    while offset < end:
        code = ord(text[offset])
        offset += 1
        if code == 0x0A:
            row += 1
            col = 1
        else:
            col += 1
            if is_wide_at(code):
                offset += 1
    return row, col


def is_sub_string(needle: str, offset: int, row: int, col: int, haystack: str) -> Tuple[int, int, int]:
    """
    Match `needle` literally at `offset`.

    Returns (-1, row, col) on mismatch, otherwise the offset just past the
    match together with the row and column found there.
    """
    end = offset + len(needle)
    if offset < 0 or end > len(haystack) or not haystack.startswith(needle, offset):
        return -1, row, col
    # a needle ending in a high surrogate would split a pair in two
    if needle and 0xD800 <= ord(needle[-1]) < 0xDC00:
        return -1, row, col
    new_row, new_col = advance_position(haystack, offset, end, row, col)
    return end, new_row, new_col


def find_sub_string(needle: str, offset: int, row: int, col: int, haystack: str) -> Tuple[int, int, int]:
    """
    Find the first occurrence of `needle` at or after `offset`.

    Row and column are advanced to the start of the occurrence, or to the
    end of `haystack` when there is none (the offset is then -1).
    """
    new_offset = haystack.find(needle, offset)
    target = len(haystack) if new_offset < 0 else new_offset
    new_row, new_col = advance_position(haystack, offset, target, row, col)
    return new_offset, new_row, new_col
