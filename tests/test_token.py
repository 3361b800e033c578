# tests/test_token.py
import pytest
from hypothesis import given, strategies as st

from conftest import step_of
from pychomp.Combinators import Trailing
from pychomp.Language import c_style, haskell_style, python, python_style
from pychomp.Parser import Bad
from pychomp.Prim import end, get_offset, lazy, one_of, run
from pychomp.Token import LanguageDef, TokenParser

haskell = TokenParser(haskell_style)
c = TokenParser(c_style)


def test_white_space_skips_comments():
    p = python.white_space >> get_offset()
    assert run(p, "  # one\n  # two\n  x") == (18, None)

    p = haskell.white_space >> get_offset()
    assert run(p, "{- a {- b -} -} -- c\n x") == (22, None)

    p = c.white_space >> get_offset()
    assert run(p, "/* a */ // b\n  x") == (15, None)


def test_white_space_without_comments():
    bare = TokenParser(LanguageDef())
    assert run(bare.white_space >> get_offset(), " \t\n#x") == (3, None)


def test_identifier_and_reserved():
    assert run(python.identifier, "foo_1  bar") == ("foo_1", None)
    value, dead_ends = run(python.identifier, "def")
    assert value is None
    assert dead_ends[0].problem == "expecting a variable"
    assert run(python.identifier & python.identifier, "definitely x") == (("definitely", "x"), None)


def test_reserved_word_boundary():
    assert run(python.reserved("def") >> python.identifier, "def f") == ("f", None)
    step = step_of(python.reserved("def"), "define")
    assert isinstance(step, Bad)
    assert step.progress is False


def test_reserved_op_boundary():
    p = one_of([python.reserved_op("="), python.reserved_op("==")])
    assert run(p >> get_offset(), "== 1") == (3, None)
    assert run(p >> get_offset(), "= 1") == (2, None)


def test_operator():
    assert run(python.operator, "-> x") == ("->", None)
    assert run(python.operator, "<$> x") == ("<$>", None)
    assert run(python.operator, "== x")[0] is None


@given(st.integers())
def test_signed_integers(n):
    assert run(python.integer << end("end"), f"{n}  ") == (n, None)


def test_signs():
    assert run(python.integer, "+5") == (5, None)
    assert run(python.floating, "-2.5e1") == (-25.0, None)
    assert run(python.natural, "0x10 ") == (16, None)
    _, dead_ends = run(python.natural, "1.5")
    assert dead_ends[0].problem == "expecting a float"


@pytest.mark.parametrize("text, expected", [
    ('"plain"', "plain"),
    ('""', ""),
    (r'"a\nb"', "a\nb"),
    (r'"say \"hi\""', 'say "hi"'),
    (r'"back\\slash"', "back\\slash"),
    ('"café \U0001F600"', "café \U0001F600"),
])
def test_string_literal(text, expected):
    assert run(python.string_literal, text + "  ") == (expected, None)


def test_unterminated_string_literal():
    step = step_of(python.string_literal, '"abc')
    assert isinstance(step, Bad)
    assert step.progress is True


def test_brackets():
    assert run(python.parens(python.integer), "( 1 )") == (1, None)
    assert run(python.braces(python.identifier), "{x}") == ("x", None)
    assert run(python.brackets(python.identifier), "[ y ]") == ("y", None)
    assert run(python.angles(python.natural), "<3>") == (3, None)


def test_comma_list():
    assert run(python.comma_list(python.integer), "[1, -2 , 3] ") == ([1, -2, 3], None)
    items = python.comma_list(python.identifier, "(", ")", Trailing.OPTIONAL)
    assert run(items, "(a, b,)") == (["a", "b"], None)


def test_nested_lists():
    def value():
        return one_of([python.integer, python.comma_list(lazy(value))])

    assert run(value(), "[1, [2, []], # note\n 3]") == ([1, [2, []], 3], None)


def test_keyword_is_reserved():
    assert run(haskell.keyword("let") >> haskell.identifier, "let  x") == ("x", None)
