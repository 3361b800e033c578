"""
The parsing API with problems as plain strings and no contexts.

Same operations as the full API, with simpler signatures: literals are
given as strings and every failure is described by a human-readable
message such as "expecting ']'".
"""
from typing import Any, Callable, Iterable, List, Optional, Tuple

from . import Char, Combinators, Number
from .Char import Nestable, chomp_until_end_or, chomp_while, spaces
from .Combinators import Trailing
from .Parser import DeadEnd, Parser, T, Token
from .Prim import (
    and_then, backtrackable, commit, get_chomped_string, get_col, get_indent, get_offset,
    get_position, get_row, get_source, ignorer, keeper, lazy, loop, map, map_chomped_string,
    one_of, succeed, with_indent, Done, Loop,
)
from .Prim import run as _run
from .Prim import end as _end
from .Prim import problem as _problem

Problem = str


def expecting(string: str) -> Problem:
    return f"expecting {string!r}"


def token(string: str) -> Parser[Any, Problem, None]:
    return Char.token(Token(string, expecting(string)))


def symbol(string: str) -> Parser[Any, Problem, None]:
    return Char.symbol(Token(string, f"expecting symbol {string!r}"))


def keyword(string: str) -> Parser[Any, Problem, None]:
    return Char.keyword(Token(string, f"expecting keyword {string!r}"))


def problem(message: str) -> Parser[Any, Problem, Any]:
    return _problem(message)


def end() -> Parser[Any, Problem, None]:
    return _end("expecting end of input")


def chomp_if(is_good: Callable[[str], bool]) -> Parser[Any, Problem, None]:
    return Char.chomp_if(is_good, "unexpected character")


def chomp_until(string: str) -> Parser[Any, Problem, None]:
    return Char.chomp_until(Token(string, expecting(string)))


def variable(*, start: Callable[[str], bool], inner: Callable[[str], bool],
             reserved: Iterable[str] = ()) -> Parser[Any, Problem, str]:
    return Char.variable(start=start, inner=inner, reserved=frozenset(reserved),
                         expecting="expecting a variable")


# --- Numbers ---

def _handler(func: Optional[Callable], refusal: Problem):
    return Number.Err(refusal) if func is None else Number.Ok(func)


def number(*, integer: Optional[Callable[[int], T]] = None, hexadecimal: Optional[Callable[[int], T]] = None,
           octal: Optional[Callable[[int], T]] = None, binary: Optional[Callable[[int], T]] = None,
           floating: Optional[Callable[[float], T]] = None) -> Parser[Any, Problem, T]:
    """Parse a number; a format given as None is refused."""
    return Number.number(
        integer=_handler(integer, "expecting an integer"),
        hexadecimal=_handler(hexadecimal, "expecting a hexadecimal number"),
        octal=_handler(octal, "expecting an octal number"),
        binary=_handler(binary, "expecting a binary number"),
        floating=_handler(floating, "expecting a float"),
        invalid="expecting a number",
        expecting="expecting a number",
    )


def integer() -> Parser[Any, Problem, int]:
    return Number.integer("expecting an integer", "expecting an integer")


def floating() -> Parser[Any, Problem, float]:
    return Number.floating("expecting a float", "expecting a float")


# --- Sequences and comments ---

def sequence(*, start: str, separator: str, end: str, spaces: Parser,
             item: Parser[Any, Problem, T], trailing: Trailing) -> Parser[Any, Problem, List[T]]:
    return Combinators.sequence(
        start=Token(start, f"expecting symbol {start!r}"),
        separator=Token(separator, f"expecting symbol {separator!r}"),
        end=Token(end, f"expecting symbol {end!r}"),
        spaces=spaces,
        item=item,
        trailing=trailing,
    )


def line_comment(start: str) -> Parser[Any, Problem, None]:
    return Char.line_comment(Token(start, expecting(start)))


def multi_comment(opening: str, closing: str, nestable: Nestable) -> Parser[Any, Problem, None]:
    return Char.multi_comment(Token(opening, expecting(opening)), Token(closing, expecting(closing)), nestable)


# --- Running ---

def run(parser: Parser[Any, Problem, T], src: str) -> Tuple[Optional[T], Optional[List[DeadEnd]]]:
    """Run a parser; dead ends come back without context stacks."""
    value, dead_ends = _run(parser, src)
    if dead_ends is None:
        return value, None
    return None, [DeadEnd(d.row, d.col, d.problem) for d in dead_ends]


def dead_ends_to_string(dead_ends: List[DeadEnd]) -> str:
    """One "line R, column C: problem" line per dead end."""
    return "\n".join(str(dead_end) for dead_end in dead_ends)
