import json
import logging
import sys
from dataclasses import replace

from pychomp import Simple
from pychomp.Combinators import Trailing
from pychomp.Language import empty_def
from pychomp.Prim import end, in_context, lazy, one_of, run, succeed
from pychomp.Token import TokenParser

# 1. Lexer Setup
# JSON has no comments and only three words.
json_style = replace(empty_def, reserved_names=frozenset(["null", "true", "false"]))
lexer = TokenParser(json_style)

# Token Parsers
string_literal = lexer.string_literal
reserved = lexer.reserved

# JSON allows "null", "true", "false". We map them to Python equivalents.
null_val = reserved("null") >> succeed(None)
true_val = reserved("true") >> succeed(True)
false_val = reserved("false") >> succeed(False)

_number = Simple.number(integer=int, floating=float)
number_literal = lexer.lexeme(one_of([
    Simple.symbol("-") >> _number.map(lambda n: -n),
    _number,
]))


# 2. Recursive JSON Parser
def json_value():
    return one_of([
        null_val,
        true_val,
        false_val,
        string_literal,
        number_literal,
        json_object(),
        json_array(),
    ])


def json_array():
    # [ value, value, ... ]
    return in_context("array", lexer.comma_list(lazy(json_value), "[", "]", Trailing.FORBIDDEN))


def json_object():
    # { "key": value, ... }
    entry = in_context("entry", string_literal & (lexer.colon >> lazy(json_value)))
    return in_context("object", lexer.comma_list(entry, "{", "}", Trailing.FORBIDDEN).map(dict))


parser = lexer.white_space >> json_value() << end("expecting end of input")


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG if "-v" in sys.argv else logging.WARNING)
    test_json = sys.stdin.read()

    result, dead_ends = run(parser, test_json)

    if dead_ends:
        print("Parsing Failed:")
        for dead_end in dead_ends:
            contexts = " > ".join(str(loc.context) for loc in dead_end.context_stack)
            print(f"  {dead_end}" + (f" (in {contexts})" if contexts else ""))
    else:
        print("Successfully Parsed:")
        print(json.dumps(result, indent=4))
