from enum import Enum, auto
from typing import AbstractSet, Any, Callable

from .Parser import Bad, Good, Parser, State, Step, Token, X, from_info, from_state
from .Prim import Done, Loop, ignorer, loop, one_of, problem
from .Scanner import find_sub_string, from_code_units, is_sub_char, is_sub_string, to_code_units


# 1. token: matches a literal string
def token(tok: Token[X]) -> Parser[Any, X, None]:
    """Match `tok.string` exactly, failing with `tok.expecting` otherwise."""
    needle = to_code_units(tok.string)
    progress = bool(needle)
    expecting = tok.expecting

    def parse(s: State) -> Step:
        new_offset, new_row, new_col = is_sub_string(needle, s.offset, s.row, s.col, s.src)
        if new_offset == -1:
            return Bad(False, from_state(s, expecting), s.trace)
        return Good(progress, None, State(s.src, new_offset, s.indent, s.context, new_row, new_col, s.trace))
    return Parser(parse)


symbol = token


def _is_ident_char(char: str) -> bool:
    return char.isalnum() or char == "_"


# 2. keyword: a token that must not run into an identifier character
def keyword(tok: Token[X]) -> Parser[Any, X, None]:
    """Like `token`, but "let" does not match the start of "letter"."""
    needle = to_code_units(tok.string)
    progress = bool(needle)
    expecting = tok.expecting

    def parse(s: State) -> Step:
        new_offset, new_row, new_col = is_sub_string(needle, s.offset, s.row, s.col, s.src)
        if new_offset == -1 or is_sub_char(_is_ident_char, new_offset, s.src) >= 0:
            return Bad(False, from_state(s, expecting), s.trace)
        return Good(progress, None, State(s.src, new_offset, s.indent, s.context, new_row, new_col, s.trace))
    return Parser(parse)


# --- Chomping ---

def chomp_if(is_good: Callable[[str], bool], expecting: X) -> Parser[Any, X, None]:
    """Chomp one character satisfying `is_good`."""
    def parse(s: State) -> Step:
        new_offset = is_sub_char(is_good, s.offset, s.src)
        if new_offset == -1:
            return Bad(False, from_state(s, expecting), s.trace)
        if new_offset == -2:
            return Good(True, None, State(s.src, s.offset + 1, s.indent, s.context, s.row + 1, 1, s.trace))
        return Good(True, None, State(s.src, new_offset, s.indent, s.context, s.row, s.col + 1, s.trace))
    return Parser(parse)


def chomp_while(is_good: Callable[[str], bool]) -> Parser[Any, Any, None]:
    """Chomp zero or more characters satisfying `is_good`."""
    def parse(s: State) -> Step:
        src = s.src
        offset, row, col = s.offset, s.row, s.col
        while True:
            new_offset = is_sub_char(is_good, offset, src)
            if new_offset == -1:
                break
            if new_offset == -2:
                offset += 1
                row += 1
                col = 1
            else:
                offset = new_offset
                col += 1
        return Good(s.offset < offset, None, State(src, offset, s.indent, s.context, row, col, s.trace))
    return Parser(parse)


def chomp_until(tok: Token[X]) -> Parser[Any, X, None]:
    """Chomp up to (not including) the next occurrence of `tok.string`."""
    needle = to_code_units(tok.string)
    expecting = tok.expecting

    def parse(s: State) -> Step:
        new_offset, new_row, new_col = find_sub_string(needle, s.offset, s.row, s.col, s.src)
        if new_offset == -1:
            return Bad(False, from_info(new_row, new_col, expecting, s.context), s.trace)
        return Good(s.offset < new_offset, None,
                    State(s.src, new_offset, s.indent, s.context, new_row, new_col, s.trace))
    return Parser(parse)


def chomp_until_end_or(string: str) -> Parser[Any, Any, None]:
    """Chomp up to the next occurrence of `string`, or to the end of input."""
    needle = to_code_units(string)

    def parse(s: State) -> Step:
        new_offset, new_row, new_col = find_sub_string(needle, s.offset, s.row, s.col, s.src)
        adjusted = len(s.src) if new_offset < 0 else new_offset
        return Good(s.offset < adjusted, None,
                    State(s.src, adjusted, s.indent, s.context, new_row, new_col, s.trace))
    return Parser(parse)


# --- Variables ---

def variable(*, start: Callable[[str], bool], inner: Callable[[str], bool],
             reserved: AbstractSet[str], expecting: X) -> Parser[Any, X, str]:
    """
    Parse a name: one `start` character then any number of `inner` ones.

    Names listed in `reserved` are rejected without progress.
    """
    reserved = frozenset(reserved)

    def parse(s: State) -> Step:
        src = s.src
        first = is_sub_char(start, s.offset, src)
        if first == -1:
            return Bad(False, from_state(s, expecting), s.trace)
        if first == -2:
            offset, row, col = s.offset + 1, s.row + 1, 1
        else:
            offset, row, col = first, s.row, s.col + 1
        while True:
            new_offset = is_sub_char(inner, offset, src)
            if new_offset == -1:
                break
            if new_offset == -2:
                offset += 1
                row += 1
                col = 1
            else:
                offset = new_offset
                col += 1
        name = from_code_units(src[s.offset:offset])
        if name in reserved:
            return Bad(False, from_state(s, expecting), s.trace)
        return Good(True, name, State(src, offset, s.indent, s.context, row, col, s.trace))
    return Parser(parse)


# --- Whitespace and comments ---

def _is_space(char: str) -> bool:
    return char == " " or char == "\n" or char == "\r"


def spaces() -> Parser[Any, Any, None]:
    """Chomp spaces, newlines and carriage returns."""
    return chomp_while(_is_space)


def line_comment(start: Token[X]) -> Parser[Any, X, None]:
    """Chomp `start` and everything up to the next newline (exclusive)."""
    return ignorer(token(start), chomp_until_end_or("\n"))


class Nestable(Enum):
    NOT_NESTABLE = auto()
    NESTABLE = auto()


def multi_comment(opening: Token[X], closing: Token[X], nestable: Nestable) -> Parser[Any, X, None]:
    """
    Chomp a block comment from `opening` through `closing`.

    A nestable comment only ends once every nested `opening` has been closed.
    """
    if nestable is Nestable.NOT_NESTABLE:
        return token(opening) >> chomp_until(closing) >> token(closing)
    return _nestable_comment(opening, closing)


def _nestable_comment(opening: Token[X], closing: Token[X]) -> Parser[Any, X, None]:
    if not opening.string:
        return problem(opening.expecting)
    if not closing.string:
        return problem(closing.expecting)

    open_char = opening.string[0]
    close_char = closing.string[0]
    skip_irrelevant = chomp_while(lambda c: c != open_char and c != close_char)
    chomp_open = token(opening)
    chomp_close = token(closing)
    chomp_any = chomp_if(lambda _: True, closing.expecting)

    def step(nest_level: int) -> Parser:
        return skip_irrelevant >> one_of([
            chomp_close.map(lambda _: Done(None) if nest_level == 1 else Loop(nest_level - 1)),
            chomp_open.map(lambda _: Loop(nest_level + 1)),
            chomp_any.map(lambda _: Loop(nest_level)),
        ])

    return chomp_open >> loop(1, step)
