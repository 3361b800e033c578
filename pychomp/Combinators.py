import logging
from enum import Enum, auto
from typing import Any, List, Optional, Tuple

from .Parser import Good, Parser, State, Step, T, Token, X
from .Prim import Done, Loop, loop, one_of, succeed
from .Char import token
from .Scanner import from_code_units

logger = logging.getLogger(__name__)


class Trailing(Enum):
    """What to do with a separator after the last item of a sequence."""
    FORBIDDEN = auto()
    OPTIONAL = auto()
    MANDATORY = auto()


# Items are gathered newest first in a cons list: None | (item, rest)
RevItems = Optional[Tuple[Any, Any]]


def _to_list(rev_items: RevItems) -> List[Any]:
    items = []
    while rev_items is not None:
        item, rev_items = rev_items
        items.append(item)
    items.reverse()
    return items


# 1. sequence: delimited, separated items
def sequence(*, start: Token[X], separator: Token[X], end: Token[X], spaces: Parser,
             item: Parser[Any, X, T], trailing: Trailing) -> Parser[Any, X, List[T]]:
    """
    Parse `start`, then items separated by `separator`, then `end`.

    `spaces` is skipped around every item and separator. `trailing` decides
    whether a separator after the last item is forbidden, optional or
    mandatory.
    """
    if not isinstance(trailing, Trailing):
        raise ValueError(f"unknown trailing policy {trailing!r}")
    ender = token(end)
    sep = token(separator)
    return token(start) >> spaces >> _sequence_end(ender, spaces, item, sep, trailing)


def _sequence_end(ender: Parser, ws: Parser, parse_item: Parser, sep: Parser, trailing: Trailing) -> Parser:
    def chomp_rest(first: Any) -> Parser:
        if trailing is Trailing.FORBIDDEN:
            return loop((first, None), _forbidden_step(ender, ws, parse_item, sep))
        if trailing is Trailing.OPTIONAL:
            return loop((first, None), _optional_step(ender, ws, parse_item, sep))
        return (ws >> sep >> ws >> loop((first, None), _mandatory_step(ws, parse_item, sep))) << ender

    return one_of([
        parse_item.and_then(chomp_rest),
        ender.map(lambda _: []),
    ])


def _forbidden_step(ender: Parser, ws: Parser, parse_item: Parser, sep: Parser):
    def step(rev_items: RevItems) -> Parser:
        return ws >> one_of([
            sep >> ws >> parse_item.map(lambda item: Loop((item, rev_items))),
            ender.map(lambda _: Done(_to_list(rev_items))),
        ])
    return step


def _optional_step(ender: Parser, ws: Parser, parse_item: Parser, sep: Parser):
    def step(rev_items: RevItems) -> Parser:
        parse_end = ender.map(lambda _: Done(_to_list(rev_items)))
        return ws >> one_of([
            sep >> ws >> one_of([
                parse_item.map(lambda item: Loop((item, rev_items))),
                parse_end,
            ]),
            parse_end,
        ])
    return step


def _mandatory_step(ws: Parser, parse_item: Parser, sep: Parser):
    def step(rev_items: RevItems) -> Parser:
        return one_of([
            (parse_item << ws << sep << ws).map(lambda item: Loop((item, rev_items))),
            succeed(None).map(lambda _: Done(_to_list(rev_items))),
        ])
    return step


# --- Debugging ---

def log_state(label: str) -> Parser[Any, Any, None]:
    """A parser that logs the position and upcoming input, consuming nothing."""
    def parse(state: State) -> Step:
        if logger.isEnabledFor(logging.DEBUG):
            upcoming = from_code_units(state.src[state.offset:state.offset + 30])
            more = "..." if len(state.src) - state.offset > 30 else ""
            logger.debug("%s: %r%s at row %d, col %d", label, upcoming, more, state.row, state.col)
        return Good(False, None, state)
    return Parser(parse)


def traced(label: str, parser: Parser[Any, X, T]) -> Parser[Any, X, T]:
    """Log entering `parser` and whether it succeeded, and with what progress."""
    parse_fn = parser.parse_fn

    def parse(state: State) -> Step:
        logger.debug("%s: enter at row %d, col %d", label, state.row, state.col)
        step = parse_fn(state)
        if isinstance(step, Good):
            logger.debug("%s: ok (progress=%s) at row %d, col %d",
                         label, step.progress, step.state.row, step.state.col)
        else:
            logger.debug("%s: failed (progress=%s)", label, step.progress)
        return step
    return Parser(parse)
