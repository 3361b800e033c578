from hypothesis import given
from hypothesis import strategies as st

from conftest import step_of
from pychomp.Char import (
    Nestable,
    chomp_if,
    chomp_until,
    chomp_until_end_or,
    chomp_while,
    keyword,
    line_comment,
    multi_comment,
    spaces,
    symbol,
    token,
    variable,
)
from pychomp.Parser import Bad, Good, Token
from pychomp.Prim import end, get_chomped_string, get_position, run

LET = Token("let", "expecting let")


def consumed(parser, text):
    value, err = run(get_chomped_string(parser), text)
    assert err is None, err
    return value


# --- Tokens and keywords ---

@given(st.text(min_size=1), st.text())
def test_token_matches_prefix(literal, rest):
    value, err = run(get_chomped_string(token(Token(literal, "x"))), literal + rest)
    assert value == literal
    assert err is None


def test_token_failure_makes_no_progress():
    step = step_of(token(Token("abc", "expecting abc")), "abd")
    assert isinstance(step, Bad)
    assert step.progress is False


def test_empty_token_succeeds_without_progress():
    step = step_of(symbol(Token("", "never")), "abc")
    assert isinstance(step, Good)
    assert step.progress is False


def test_keyword_boundary():
    value, dead_ends = run(keyword(LET), "letter")
    assert value is None
    assert [(d.col, d.problem) for d in dead_ends] == [(1, "expecting let")]

    assert run(get_chomped_string(keyword(LET)), "let x") == ("let", None)
    assert run(get_chomped_string(keyword(LET)), "let") == ("let", None)
    assert run(keyword(LET), "let_")[1] is not None
    assert run(keyword(LET), "let1")[1] is not None


# --- Chomping ---

def test_chomp_if():
    assert consumed(chomp_if(str.isdigit, "digit"), "7a") == "7"
    step = step_of(chomp_if(str.isdigit, "digit"), "a7")
    assert isinstance(step, Bad) and step.progress is False


def test_chomp_if_newline_moves_to_next_row():
    p = chomp_if(lambda c: c == "\n", "newline") >> get_position()
    assert run(p, "\nx") == ((2, 1), None)


def test_chomp_while():
    assert consumed(chomp_while(str.isalpha), "abc123") == "abc"
    step = step_of(chomp_while(str.isalpha), "123")
    assert isinstance(step, Good) and step.progress is False


def test_chomp_while_tracks_rows():
    p = chomp_while(lambda c: c != "x") >> get_position()
    assert run(p, "ab\ncd\r\nefx") == ((3, 3), None)


def test_chomp_until():
    p = get_chomped_string(chomp_until(Token("*/", "expecting */")))
    assert run(p, "abc */") == ("abc ", None)

    value, dead_ends = run(p, "ab\ncd")
    assert value is None
    # failure is reported where scanning stopped, at the end of input
    assert [(d.row, d.col) for d in dead_ends] == [(2, 3)]


def test_chomp_until_end_or():
    assert consumed(chomp_until_end_or("\n"), "abc\ndef") == "abc"
    assert consumed(chomp_until_end_or("\n"), "abc") == "abc"
    p = chomp_until_end_or("!") >> get_position()
    assert run(p, "a\nbc") == ((2, 3), None)


# --- Variables ---

def is_start(c):
    return c.islower()


def is_inner(c):
    return c.isalnum() or c == "_"


NAME = variable(start=is_start, inner=is_inner, reserved={"let", "in"}, expecting="expecting a name")


def test_variable():
    assert run(NAME, "foo_bar1 = 2") == ("foo_bar1", None)
    assert run(NAME, "letter") == ("letter", None)


def test_variable_rejects_reserved_words():
    value, dead_ends = run(NAME, "let")
    assert value is None
    assert dead_ends[0].problem == "expecting a name"
    assert step_of(NAME, "in").progress is False


def test_variable_requires_start_character():
    step = step_of(NAME, "Foo")
    assert isinstance(step, Bad) and step.progress is False


def test_variable_with_wide_characters():
    p = variable(start=lambda c: not c.isspace(), inner=lambda c: not c.isspace(),
                 reserved=set(), expecting="name") << end("end")
    assert run(p, "\U0001F600x") == ("\U0001F600x", None)


# --- Whitespace and comments ---

def test_spaces():
    p = spaces() >> get_position()
    assert run(p, " \r\n  x") == ((2, 3), None)
    # tabs are not spaces
    assert run(spaces() >> get_position(), "\tx") == ((1, 1), None)


def test_line_comment():
    p = line_comment(Token("--", "expecting --")) >> get_position()
    assert run(p, "-- note\nnext") == ((1, 8), None)
    assert run(p, "-- note") == ((1, 8), None)


def test_multi_comment_not_nestable():
    p = get_chomped_string(multi_comment(Token("/*", "open"), Token("*/", "close"), Nestable.NOT_NESTABLE))
    assert run(p, "/* a /* b */ c */") == ("/* a /* b */", None)


def test_multi_comment_nestable():
    p = get_chomped_string(multi_comment(Token("{-", "open"), Token("-}", "close"), Nestable.NESTABLE))
    assert run(p, "{- a {- b -} c -} d") == ("{- a {- b -} c -}", None)
    assert run(p, "{- a - b -}") == ("{- a - b -}", None)


def test_multi_comment_unclosed():
    p = multi_comment(Token("{-", "open"), Token("-}", "close"), Nestable.NESTABLE)
    value, dead_ends = run(p, "{- a {- b -}")
    assert value is None
    assert dead_ends[-1].problem == "close"
    assert step_of(p, "{- a").progress is True
