import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, List, NamedTuple, Optional, Sequence, Tuple, TypeVar

from .Parser import (
    EMPTY, Append, Bad, DeadEnd, Good, Located, Parser, State, Step, Trace, TraceMark,
    T, U, X, bag_to_list, from_state, initial_state, map2,
)
from .Scanner import from_code_units, to_code_units

logger = logging.getLogger(__name__)

S = TypeVar('S')  # Loop state


def succeed(value: T) -> Parser[Any, Any, T]:
    """A parser that succeeds with a value without consuming input."""
    def parse(state: State) -> Step:
        return Good(False, value, state)
    return Parser(parse)


def problem(x: X) -> Parser[Any, X, Any]:
    """A parser that always fails with `x` at the current position."""
    def parse(state: State) -> Step:
        return Bad(False, from_state(state, x), state.trace)
    return Parser(parse)


fail = problem


def map(func: Callable[[T], U], parser: Parser[Any, Any, T]) -> Parser[Any, Any, U]:
    return parser.map(func)


def keeper(parse_func: Parser, parse_arg: Parser) -> Parser:
    """Apply the function produced by `parse_func` to the value of `parse_arg`."""
    return map2(lambda func, arg: func(arg), parse_func, parse_arg)


def ignorer(keep: Parser[Any, Any, T], ignore: Parser) -> Parser[Any, Any, T]:
    """Run both parsers, keeping the value of the first."""
    return map2(lambda a, _: a, keep, ignore)


def and_then(callback: Callable[[T], Parser], parser: Parser[Any, Any, T]) -> Parser:
    return parser.and_then(callback)


# 1. one_of: the first alternative that succeeds or fails with progress decides
def one_of(parsers: Sequence[Parser[Any, Any, T]]) -> Parser[Any, Any, T]:
    """
    Try parsers left to right.

    An alternative that fails without consuming input hands over to the
    next one; its dead ends are kept. An alternative that consumed input
    before failing is committed and its failure is the result.
    """
    parse_fns = [p.parse_fn for p in parsers]

    def parse(state: State) -> Step:
        bag = EMPTY
        trace = state.trace
        for parse_fn in parse_fns:
            step = parse_fn(state)
            if isinstance(step, Good) or step.progress:
                return step
            bag = Append(bag, step.bag)
            trace = step.trace
        return Bad(False, bag, trace)
    return Parser(parse)


def backtrackable(parser: Parser[Any, Any, T]) -> Parser[Any, Any, T]:
    """Report no progress, so an enclosing `one_of` may still try other alternatives."""
    parse_fn = parser.parse_fn

    def parse(state: State) -> Step:
        step = parse_fn(state)
        if isinstance(step, Good):
            return Good(False, step.value, step.state)
        return Bad(False, step.bag, step.trace)
    return Parser(parse)


def commit(value: T) -> Parser[Any, Any, T]:
    """Succeed with progress, marking the enclosing branch as chosen."""
    def parse(state: State) -> Step:
        return Good(True, value, state)
    return Parser(parse)


@dataclass(frozen=True)
class Loop(Generic[S]):
    value: S


@dataclass(frozen=True)
class Done(Generic[T]):
    value: T


def loop(state: S, step: Callable[[S], Parser]) -> Parser:
    """
    Repeatedly run `step(state)` until it produces `Done`.

    Each `Loop(new_state)` feeds the next iteration. Progress is the OR of
    all iterations; a failing step fails the loop.
    """
    def parse(s0: State) -> Step:
        progress = False
        loop_state = state
        s = s0
        while True:
            result = step(loop_state)(s)
            if isinstance(result, Bad):
                return Bad(progress or result.progress, result.bag, result.trace)
            progress = progress or result.progress
            outcome = result.value
            s = result.state
            if isinstance(outcome, Loop):
                loop_state = outcome.value
            elif isinstance(outcome, Done):
                return Good(progress, outcome.value, s)
            else:
                raise TypeError(f"loop step must produce Loop or Done, got {outcome!r}")
    return Parser(parse)


def lazy(thunk: Callable[[], Parser[Any, Any, T]]) -> Parser[Any, Any, T]:
    """Build the parser only when it runs, for recursive grammars."""
    def parse(state: State) -> Step:
        return thunk()(state)
    return Parser(parse)


def end(x: X) -> Parser[Any, X, None]:
    """Succeed only at the end of the input."""
    def parse(state: State) -> Step:
        if len(state.src) == state.offset:
            return Good(False, None, state)
        return Bad(False, from_state(state, x), state.trace)
    return Parser(parse)


# --- Chomped strings ---

def map_chomped_string(func: Callable[[str, T], U], parser: Parser[Any, Any, T]) -> Parser[Any, Any, U]:
    """Combine the text consumed by `parser` with its value."""
    parse_fn = parser.parse_fn

    def parse(s0: State) -> Step:
        step = parse_fn(s0)
        if isinstance(step, Bad):
            return step
        chomped = from_code_units(s0.src[s0.offset:step.state.offset])
        return Good(step.progress, func(chomped, step.value), step.state)
    return Parser(parse)


def get_chomped_string(parser: Parser) -> Parser[Any, Any, str]:
    """Replace the value of `parser` with the text it consumed."""
    return map_chomped_string(lambda chomped, _: chomped, parser)


# --- Position and state getters ---

def _getter(read: Callable[[State], Any]) -> Parser:
    def parse(state: State) -> Step:
        return Good(False, read(state), state)
    return Parser(parse)


def get_position() -> Parser[Any, Any, Tuple[int, int]]:
    """The current (row, col)."""
    return _getter(lambda s: (s.row, s.col))


def get_row() -> Parser[Any, Any, int]:
    return _getter(lambda s: s.row)


def get_col() -> Parser[Any, Any, int]:
    return _getter(lambda s: s.col)


def get_offset() -> Parser[Any, Any, int]:
    """The current offset, in UTF-16 code units."""
    return _getter(lambda s: s.offset)


def get_source() -> Parser[Any, Any, str]:
    return _getter(lambda s: from_code_units(s.src))


def get_indent() -> Parser[Any, Any, int]:
    return _getter(lambda s: s.indent)


# --- Context and indentation ---

def in_context(context: Any, parser: Parser[Any, Any, T]) -> Parser[Any, Any, T]:
    """
    Run `parser` inside a named region.

    Dead ends raised inside carry the region in their context stack. When
    the region consumes input it is recorded in the trace.
    """
    parse_fn = parser.parse_fn

    def parse(s0: State) -> Step:
        inner = (Located(s0.row, s0.col, context),) + s0.context
        step = parse_fn(State(s0.src, s0.offset, s0.indent, inner, s0.row, s0.col, s0.trace))
        if isinstance(step, Bad):
            return step
        s1 = step.state
        trace = s1.trace
        if s1.offset > s0.offset:
            trace = (TraceMark(s0.offset, s1.offset, tuple(reversed(inner))), trace)
        return Good(step.progress, step.value, State(s1.src, s1.offset, s1.indent, s0.context, s1.row, s1.col, trace))
    return Parser(parse)


def with_indent(indent: int, parser: Parser[Any, Any, T]) -> Parser[Any, Any, T]:
    """Run `parser` with the indentation baseline set to `indent`."""
    parse_fn = parser.parse_fn

    def parse(s0: State) -> Step:
        step = parse_fn(State(s0.src, s0.offset, indent, s0.context, s0.row, s0.col, s0.trace))
        if isinstance(step, Bad):
            return step
        s1 = step.state
        return Good(step.progress, step.value, State(s1.src, s1.offset, s0.indent, s1.context, s1.row, s1.col, s1.trace))
    return Parser(parse)


# --- Running ---

class TraceEntry(NamedTuple):
    """A region consumed inside `in_context`, with the contexts active there (outermost first)."""
    chomped: str
    context_stack: Tuple[Located, ...]


def _run(parser: Parser[Any, Any, T], src: str) -> Step:
    return parser(initial_state(to_code_units(src)))


def _outcome(step: Step) -> Tuple[Optional[T], Optional[List[DeadEnd]]]:
    if isinstance(step, Good):
        logger.debug("parse succeeded at row %d, col %d", step.state.row, step.state.col)
        return step.value, None
    dead_ends = bag_to_list(step.bag)
    logger.debug("parse failed with %d dead end(s)", len(dead_ends))
    return None, dead_ends


def run(parser: Parser[Any, Any, T], src: str) -> Tuple[Optional[T], Optional[List[DeadEnd]]]:
    """
    Run a parser over `src`.

    Returns (value, None) on success and (None, dead_ends) on failure.
    """
    return _outcome(_run(parser, src))


def trace_to_list(trace: Trace, units: str) -> List[TraceEntry]:
    """Materialise a trace, oldest entry first."""
    entries = []
    while trace is not None:
        mark, trace = trace
        entries.append(TraceEntry(from_code_units(units[mark.start:mark.end]), mark.context))
    entries.reverse()
    return entries


def debug_run(parser: Parser[Any, Any, T], src: str) -> Tuple[List[TraceEntry], Tuple[Optional[T], Optional[List[DeadEnd]]]]:
    """Like `run`, also returning the trace of regions consumed inside `in_context`."""
    units = to_code_units(src)
    step = parser(initial_state(units))
    trace = step.state.trace if isinstance(step, Good) else step.trace
    entries = trace_to_list(trace, units)
    logger.debug("debug run recorded %d trace entries", len(entries))
    return entries, _outcome(step)
