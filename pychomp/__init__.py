# Core
from .Parser import Parser, State, Good, Bad, DeadEnd, Located, Token
from .Prim import (
    run, debug_run, TraceEntry,
    succeed, problem, fail, map2, keeper, ignorer, and_then,
    one_of, backtrackable, commit, loop, Loop, Done, lazy, end,
    get_chomped_string, map_chomped_string,
    get_position, get_row, get_col, get_offset, get_source, get_indent,
    in_context, with_indent,
)

# Lexical primitives
from .Char import (
    token, symbol, keyword, variable,
    chomp_if, chomp_while, chomp_until, chomp_until_end_or,
    spaces, line_comment, multi_comment, Nestable,
)
from .Number import number, integer, floating, Ok, Err

# Combinators
from .Combinators import sequence, Trailing, log_state, traced

# Scanner
from .Scanner import (
    char_code_at, is_wide_at, is_sub_char, is_sub_string, find_sub_string,
    to_code_units, from_code_units,
)

# Lexer Generation (Token)
from .Token import TokenParser, LanguageDef

# Standard Language Definitions
from .Language import empty_def, c_style, python_style, haskell_style

from . import Simple
