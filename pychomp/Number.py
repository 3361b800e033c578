from dataclasses import dataclass
from typing import Any, Callable, Generic, Tuple, TypeVar, Union

from .Parser import Bad, Good, Parser, State, Step, X, from_info, from_state

V = TypeVar('V')


@dataclass(frozen=True)
class Ok(Generic[V]):
    """Accept a number format, converting the parsed value with `func`."""
    func: Callable[[Any], V]


@dataclass(frozen=True)
class Err(Generic[X]):
    """Reject a number format, reporting `problem`."""
    problem: X


Handler = Union[Ok[V], Err[X]]


def _is_code(code: int, offset: int, src: str) -> bool:
    return offset < len(src) and ord(src[offset]) == code


def _consume_base(base: int, offset: int, src: str) -> Tuple[int, int]:
    """Accumulate digits below `base`; returns (new_offset, total)."""
    total = 0
    length = len(src)
    while offset < length:
        digit = ord(src[offset]) - 0x30
        if digit < 0 or digit >= base:
            break
        total = base * total + digit
        offset += 1
    return offset, total


def _consume_base16(offset: int, src: str) -> Tuple[int, int]:
    total = 0
    length = len(src)
    while offset < length:
        code = ord(src[offset])
        if 0x30 <= code <= 0x39:
            total = 16 * total + code - 0x30
        elif 0x41 <= code <= 0x46:
            total = 16 * total + code - 55
        elif 0x61 <= code <= 0x66:
            total = 16 * total + code - 87
        else:
            break
        offset += 1
    return offset, total


def _chomp_base10(offset: int, src: str) -> int:
    length = len(src)
    while offset < length and 0x30 <= ord(src[offset]) <= 0x39:
        offset += 1
    return offset


def _consume_exp(offset: int, src: str) -> int:
    """Offset past an optional exponent; negated when the exponent has no digits."""
    if _is_code(0x65, offset, src) or _is_code(0x45, offset, src):
        e_offset = offset + 1
        exp_offset = e_offset + 1 if _is_code(0x2B, e_offset, src) or _is_code(0x2D, e_offset, src) else e_offset
        new_offset = _chomp_base10(exp_offset, src)
        if exp_offset == new_offset:
            return -new_offset
        return new_offset
    return offset


def _consume_dot_and_exp(offset: int, src: str) -> int:
    if _is_code(0x2E, offset, src):
        return _consume_exp(_chomp_base10(offset + 1, src), src)
    return _consume_exp(offset, src)


def _bump_offset(new_offset: int, s: State) -> State:
    # numbers never span newlines or wide characters
    return State(s.src, new_offset, s.indent, s.context, s.row, s.col + (new_offset - s.offset), s.trace)


def _finalize_int(invalid: X, handler: Handler, start_offset: int, end: Tuple[int, int], s: State) -> Step:
    end_offset, total = end
    if isinstance(handler, Err):
        return Bad(True, from_state(s, handler.problem), s.trace)
    if start_offset == end_offset:
        return Bad(s.offset < start_offset, from_state(s, invalid), s.trace)
    return Good(True, handler.func(total), _bump_offset(end_offset, s))


def _finalize_float(invalid: X, expecting: X, int_handler: Handler, float_handler: Handler,
                    int_pair: Tuple[int, int], s: State) -> Step:
    int_offset = int_pair[0]
    if int_offset == s.offset and not (_is_code(0x2E, int_offset, s.src)
                                       and _chomp_base10(int_offset + 1, s.src) > int_offset + 1):
        # "e1" is a name and "." a dot, neither is a number
        return Bad(False, from_state(s, expecting), s.trace)
    float_offset = _consume_dot_and_exp(int_offset, s.src)
    if float_offset < 0:
        # an exponent marker with no digits after it
        return Bad(True, from_info(s.row, s.col + (-float_offset - s.offset), invalid, s.context), s.trace)
    if s.offset == float_offset:
        return Bad(False, from_state(s, expecting), s.trace)
    if int_offset == float_offset:
        return _finalize_int(invalid, int_handler, s.offset, int_pair, s)
    if isinstance(float_handler, Err):
        return Bad(True, from_state(s, float_handler.problem), s.trace)
    try:
        value = float(s.src[s.offset:float_offset])
    except ValueError:
        return Bad(True, from_state(s, invalid), s.trace)
    return Good(True, float_handler.func(value), _bump_offset(float_offset, s))


def number(*, integer: Handler, hexadecimal: Handler, octal: Handler, binary: Handler,
           floating: Handler, invalid: X, expecting: X) -> Parser[Any, X, Any]:
    """
    Parse a numeric literal.

    Each format is either accepted with `Ok(func)` or refused with
    `Err(problem)`. Hexadecimal, octal and binary literals use the `0x`,
    `0o` and `0b` prefixes. A literal that starts well but turns out
    malformed (e.g. "1e" or "0x") fails with progress, so it is reported
    rather than handed to the next alternative.
    """
    def parse(s: State) -> Step:
        src = s.src
        if _is_code(0x30, s.offset, src):
            zero_offset = s.offset + 1
            base_offset = zero_offset + 1
            if _is_code(0x78, zero_offset, src):
                return _finalize_int(invalid, hexadecimal, base_offset, _consume_base16(base_offset, src), s)
            if _is_code(0x6F, zero_offset, src):
                return _finalize_int(invalid, octal, base_offset, _consume_base(8, base_offset, src), s)
            if _is_code(0x62, zero_offset, src):
                return _finalize_int(invalid, binary, base_offset, _consume_base(2, base_offset, src), s)
            return _finalize_float(invalid, expecting, integer, floating, (zero_offset, 0), s)
        return _finalize_float(invalid, expecting, integer, floating, _consume_base(10, s.offset, src), s)
    return Parser(parse)


def integer(expecting: X, invalid: X) -> Parser[Any, X, int]:
    """Parse a decimal integer; other number formats are `invalid`."""
    return number(
        integer=Ok(lambda n: n),
        hexadecimal=Err(invalid),
        octal=Err(invalid),
        binary=Err(invalid),
        floating=Err(invalid),
        invalid=invalid,
        expecting=expecting,
    )


def floating(expecting: X, invalid: X) -> Parser[Any, X, float]:
    """Parse a decimal number as a float; "42" gives 42.0."""
    return number(
        integer=Ok(float),
        hexadecimal=Err(invalid),
        octal=Err(invalid),
        binary=Err(invalid),
        floating=Ok(lambda f: f),
        invalid=invalid,
        expecting=expecting,
    )
