from dataclasses import dataclass, field
from typing import Any, Callable, FrozenSet, List

from . import Simple
from .Char import Nestable, chomp_while
from .Combinators import Trailing
from .Parser import Bad, Good, Parser, State, Step, from_state
from .Prim import Done, Loop, backtrackable, get_chomped_string, get_offset, loop, one_of
from .Scanner import is_sub_char

_OP_CHARS = frozenset(":!#$%&*+./<=>?@\\^|-~")


def _is_ident_start(c: str) -> bool:
    return c.isalpha() or c == "_"


def _is_ident_letter(c: str) -> bool:
    return c.isalnum() or c == "_"


def _is_op_char(c: str) -> bool:
    return c in _OP_CHARS


@dataclass
class LanguageDef:
    """
    Defines the lexical rules of a language.
    """
    comment_start: str = ""          # e.g. "/*"
    comment_end: str = ""            # e.g. "*/"
    comment_line: str = ""           # e.g. "//"
    nested_comments: bool = True     # Allow /* /* nested */ */
    ident_start: Callable[[str], bool] = _is_ident_start
    ident_letter: Callable[[str], bool] = _is_ident_letter
    op_start: Callable[[str], bool] = _is_op_char
    op_letter: Callable[[str], bool] = _is_op_char
    reserved_names: FrozenSet[str] = field(default_factory=frozenset)
    reserved_op_names: FrozenSet[str] = field(default_factory=frozenset)


def _not_followed_by(is_bad: Callable[[str], bool], problem: str) -> Parser[Any, str, None]:
    def parse(s: State) -> Step:
        if is_sub_char(is_bad, s.offset, s.src) == -1:
            return Good(False, None, s)
        return Bad(False, from_state(s, problem), s.trace)
    return Parser(parse)


_ESCAPES = {
    'n': '\n', 'r': '\r', 't': '\t', '\\': '\\',
    '"': '"', "'": "'", 'b': '\b', 'f': '\f',
}


def _join_reversed(chunks) -> str:
    parts: List[str] = []
    while chunks is not None:
        chunk, chunks = chunks
        parts.append(chunk)
    return "".join(reversed(parts))


class TokenParser:
    """
    A helper that generates lexeme parsers for a specific LanguageDef.

    Every lexeme skips the white space (and comments) that follows it.
    """
    def __init__(self, lang: LanguageDef):
        self.lang = lang

        # --- Whitespace & Comments ---
        self.white_space = self._make_white_space()

        # --- Symbols ---
        self.semi = self.symbol(";")
        self.comma = self.symbol(",")
        self.colon = self.symbol(":")
        self.dot = self.symbol(".")

        # --- Numbers ---
        self.natural = self.lexeme(Simple.number(
            integer=lambda n: n,
            hexadecimal=lambda n: n,
            octal=lambda n: n,
            binary=lambda n: n,
        ))
        self.integer = self._signed(Simple.integer())
        self.floating = self._signed(Simple.floating())

        # --- Strings ---
        self.string_literal = self.lexeme(self._make_string_literal())

        # --- Identifiers & Operators ---
        self.identifier = self.lexeme(Simple.variable(
            start=lang.ident_start,
            inner=lang.ident_letter,
            reserved=lang.reserved_names,
        ))
        self.operator = self.lexeme(Simple.variable(
            start=lang.op_start,
            inner=lang.op_letter,
            reserved=lang.reserved_op_names,
        ))

    def lexeme(self, p: Parser) -> Parser:
        return p << self.white_space

    def symbol(self, name: str) -> Parser:
        return self.lexeme(Simple.symbol(name))

    def reserved(self, name: str) -> Parser:
        """A reserved word that must not continue as an identifier."""
        return self.lexeme(backtrackable(
            Simple.keyword(name) << _not_followed_by(self.lang.ident_letter, f"expecting keyword {name!r}")
        ))

    keyword = reserved

    def reserved_op(self, name: str) -> Parser:
        """A reserved operator that must not continue as a longer operator."""
        return self.lexeme(backtrackable(
            Simple.symbol(name) << _not_followed_by(self.lang.op_letter, f"expecting operator {name!r}")
        ))

    def parens(self, p: Parser) -> Parser:
        return self.symbol("(") >> p << self.symbol(")")

    def braces(self, p: Parser) -> Parser:
        return self.symbol("{") >> p << self.symbol("}")

    def angles(self, p: Parser) -> Parser:
        return self.symbol("<") >> p << self.symbol(">")

    def brackets(self, p: Parser) -> Parser:
        return self.symbol("[") >> p << self.symbol("]")

    def comma_list(self, item: Parser, opening: str = "[", closing: str = "]",
                   trailing: Trailing = Trailing.FORBIDDEN) -> Parser:
        """Comma separated items between `opening` and `closing`."""
        return self.lexeme(Simple.sequence(
            start=opening,
            separator=",",
            end=closing,
            spaces=self.white_space,
            item=item,
            trailing=trailing,
        ))

    def _signed(self, p: Parser) -> Parser:
        return self.lexeme(one_of([
            Simple.symbol("-") >> p.map(lambda n: -n),
            Simple.symbol("+") >> p,
            p,
        ]))

    def _make_string_literal(self) -> Parser[Any, str, str]:
        quote = Simple.symbol('"')
        escape = Simple.symbol("\\") >> get_chomped_string(Simple.chomp_if(lambda _: True))
        plain = get_chomped_string(
            Simple.chomp_if(lambda c: c != '"' and c != '\\') >> chomp_while(lambda c: c != '"' and c != '\\')
        )

        def step(chunks):
            return one_of([
                quote.map(lambda _: Done(_join_reversed(chunks))),
                escape.map(lambda c: Loop((_ESCAPES.get(c, c), chunks))),
                plain.map(lambda chunk: Loop((chunk, chunks))),
            ])

        return quote >> loop(None, step)

    def _make_white_space(self) -> Parser[Any, str, None]:
        skip_spaces = chomp_while(str.isspace)
        if not self.lang.comment_start and not self.lang.comment_line:
            return skip_spaces

        parsers = []
        if self.lang.comment_line:
            parsers.append(Simple.line_comment(self.lang.comment_line))
        if self.lang.comment_start and self.lang.comment_end:
            nestable = Nestable.NESTABLE if self.lang.nested_comments else Nestable.NOT_NESTABLE
            parsers.append(Simple.multi_comment(self.lang.comment_start, self.lang.comment_end, nestable))
        parsers.append(skip_spaces)
        chunk = one_of(parsers)

        def if_progress(offset: int) -> Parser:
            return (chunk >> get_offset()).map(lambda new_offset: Done(None) if new_offset == offset else Loop(new_offset))

        return get_offset() >> (lambda offset: loop(offset, if_progress))
