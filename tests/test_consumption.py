# tests/test_consumption.py
from conftest import step_of
from pychomp.Char import chomp_if, token
from pychomp.Parser import Bad, Good, Token
from pychomp.Prim import backtrackable, get_chomped_string, one_of


def char(c):
    return chomp_if(lambda x: x == c, f"'{c}'")


def test_choice_commits_on_consumption():
    """
    one_of([char('a') >> char('b'), char('a')])
    Input: 'ac'

    1. First parser matches 'a' (progress).
    2. Then fails on 'c' (expected 'b').
    3. Because it made progress, one_of should NOT try the second option.
    """
    parser = one_of([char("a") >> char("b"), char("a")])

    result = step_of(parser, "ac")

    assert result.progress is True
    assert isinstance(result, Bad)


def test_backtrackable_reverts_progress():
    """
    one_of([backtrackable(char('a') >> char('b')), char('a')])
    Input: 'ac'

    1. First parser matches 'a', fails on 'c'.
    2. backtrackable reports the failure as having made no progress.
    3. one_of tries the second branch from the start, which matches 'a'.
    """
    parser = one_of([backtrackable(char("a") >> char("b")), get_chomped_string(char("a"))])

    result = step_of(parser, "ac")

    assert isinstance(result, Good)
    assert result.value == "a"
    assert result.state.offset == 1
    # the successful branch itself consumed input
    assert result.progress is True


def test_backtrackable_success_still_moves_forward():
    parser = backtrackable(token(Token("ab", "ab")))
    result = step_of(parser, "abc")
    assert isinstance(result, Good)
    assert result.progress is False
    assert result.state.offset == 2


def test_parsers_are_called_on_a_state(initial):
    step = token(Token("ab", "ab"))(initial("abc"))
    assert isinstance(step, Good)
    assert (step.state.offset, step.state.col) == (2, 3)
