from dataclasses import dataclass
from typing import Any, Callable, Generic, List, NamedTuple, Optional, Tuple, TypeVar, Union

C = TypeVar('C')  # Author-defined context tags
X = TypeVar('X')  # Author-defined problems
T = TypeVar('T')  # Generic type for parser results
U = TypeVar('U')


@dataclass(frozen=True)
class Located(Generic[C]):
    """Where a context region began."""
    row: int
    col: int
    context: C


@dataclass(frozen=True)
class DeadEnd(Generic[C, X]):
    """A single point of failure. `context_stack` is ordered outermost first."""
    row: int
    col: int
    problem: X
    context_stack: Tuple[Located[C], ...] = ()

    def __str__(self) -> str:
        return f"line {self.row}, column {self.col}: {self.problem}"


@dataclass(frozen=True)
class Token(Generic[X]):
    """A literal string paired with the problem to report when it is missing."""
    string: str
    expecting: X


class TraceMark(NamedTuple):
    """A consumed region recorded by `in_context`, kept as offsets until a debug run."""
    start: int
    end: int
    context: Tuple[Located, ...]


# Trace: a persistent cons list, newest entry first: None | (TraceMark, Trace)
Trace = Optional[Tuple[TraceMark, Any]]


@dataclass(frozen=True)
class State:
    """Parser state: source code units, position, indentation, context stack and trace."""
    src: str
    offset: int
    indent: int
    context: Tuple[Located, ...]  # most recent first
    row: int
    col: int
    trace: Trace = None


def initial_state(src: str) -> State:
    return State(src, 0, 1, (), 1, 1, None)


# --- Bag of dead ends ---

class Bag:
    """Persistent multiset of dead ends with constant-time append."""
    __slots__ = ()


class Empty(Bag):
    __slots__ = ()


class AddRight(Bag):
    __slots__ = ("bag", "dead_end")

    def __init__(self, bag: Bag, dead_end: DeadEnd):
        self.bag = bag
        self.dead_end = dead_end


class Append(Bag):
    __slots__ = ("left", "right")

    def __init__(self, left: Bag, right: Bag):
        self.left = left
        self.right = right


EMPTY = Empty()


def from_state(state: State, problem: X) -> Bag:
    return AddRight(EMPTY, DeadEnd(state.row, state.col, problem, tuple(reversed(state.context))))


def from_info(row: int, col: int, problem: X, context: Tuple[Located, ...]) -> Bag:
    return AddRight(EMPTY, DeadEnd(row, col, problem, tuple(reversed(context))))


def bag_to_list(bag: Bag) -> List[DeadEnd]:
    """Flatten a bag into its dead ends, leftmost first."""
    dead_ends = []
    pending = [bag]
    # walk right to left, then reverse once
    while pending:
        node = pending.pop()
        if isinstance(node, AddRight):
            dead_ends.append(node.dead_end)
            pending.append(node.bag)
        elif isinstance(node, Append):
            pending.append(node.left)
            pending.append(node.right)
    dead_ends.reverse()
    return dead_ends


# --- Steps ---

@dataclass(frozen=True)
class Good(Generic[T]):
    progress: bool
    value: T
    state: State


@dataclass(frozen=True)
class Bad:
    progress: bool
    bag: Bag
    trace: Trace = None


Step = Union[Good[T], Bad]


class Parser(Generic[C, X, T]):
    """A parser: a function from State to Step."""
    __slots__ = ("parse_fn",)

    def __init__(self, parse_fn: Callable[[State], Step]):
        self.parse_fn = parse_fn

    def __call__(self, state: State) -> Step:
        return self.parse_fn(state)

    def map(self, func: Callable[[T], U]) -> 'Parser[C, X, U]':
        parse = self.parse_fn

        def mapped(state: State) -> Step:
            step = parse(state)
            if isinstance(step, Good):
                return Good(step.progress, func(step.value), step.state)
            return step
        return Parser(mapped)

    # Monadic bind: the second parser is chosen from the first one's value
    def and_then(self, callback: Callable[[T], 'Parser[C, X, U]']) -> 'Parser[C, X, U]':
        parse = self.parse_fn

        def bound(state: State) -> Step:
            step_a = parse(state)
            if isinstance(step_a, Bad):
                return step_a
            step_b = callback(step_a.value)(step_a.state)
            if isinstance(step_b, Bad):
                return Bad(step_a.progress or step_b.progress, step_b.bag, step_b.trace)
            return Good(step_a.progress or step_b.progress, step_b.value, step_b.state)
        return Parser(bound)

    # Alternative: try `other` only if `self` failed without progress
    def __or__(self, other: 'Parser[C, X, T]') -> 'Parser[C, X, T]':
        parse_a = self.parse_fn
        parse_b = other.parse_fn

        def parse(state: State) -> Step:
            step_a = parse_a(state)
            if isinstance(step_a, Good) or step_a.progress:
                return step_a
            step_b = parse_b(state)
            if isinstance(step_b, Good) or step_b.progress:
                return step_b
            return Bad(False, Append(step_a.bag, step_b.bag), step_b.trace)
        return Parser(parse)

    # Sequence, keeping both values as a pair
    def __and__(self, other: 'Parser[C, X, U]') -> 'Parser[C, X, Tuple[T, U]]':
        return map2(lambda a, b: (a, b), self, other)

    # Sequence keeping the right value, or bind when given a callable
    def __rshift__(self, other: Union['Parser[C, X, U]', Callable[[T], 'Parser[C, X, U]']]) -> 'Parser[C, X, U]':
        if isinstance(other, Parser):
            return map2(lambda _, b: b, self, other)
        return self.and_then(other)

    # Sequence keeping the left value
    def __lshift__(self, other: 'Parser[C, X, Any]') -> 'Parser[C, X, T]':
        return map2(lambda a, _: a, self, other)


def map2(func: Callable[[T, U], Any], parser_a: Parser, parser_b: Parser) -> Parser:
    """Run two parsers in sequence and combine their values."""
    parse_a = parser_a.parse_fn
    parse_b = parser_b.parse_fn

    def parse(state: State) -> Step:
        step_a = parse_a(state)
        if isinstance(step_a, Bad):
            return step_a
        step_b = parse_b(step_a.state)
        if isinstance(step_b, Bad):
            return Bad(step_a.progress or step_b.progress, step_b.bag, step_b.trace)
        return Good(step_a.progress or step_b.progress, func(step_a.value, step_b.value), step_b.state)
    return Parser(parse)
