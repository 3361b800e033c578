# tests/test_laws.py
from hypothesis import given, strategies as st

from conftest import assert_step_eq, step_of
from pychomp.Char import chomp_while
from pychomp.Prim import get_chomped_string, succeed

# Strategy to generate arbitrary values
vals = st.integers() | st.text()


# 1. Left Identity: succeed a >>= f  === f a
@given(vals, st.text())
def test_monad_left_identity(v, text):
    f = lambda x: get_chomped_string(chomp_while(str.isalpha)).map(lambda s: (x, s))

    res_lhs = step_of(succeed(v).and_then(f), text)
    res_rhs = step_of(f(v), text)

    assert res_lhs.value == res_rhs.value
    assert res_lhs.progress == res_rhs.progress
    assert res_lhs.state.offset == res_rhs.state.offset


# 2. Right Identity: m >>= succeed === m
@given(st.text())
def test_monad_right_identity(text):
    m = get_chomped_string(chomp_while(str.isdigit))

    assert_step_eq(step_of(m.and_then(succeed), text), step_of(m, text))


# 3. Associativity: (m >>= f) >>= g === m >>= (\x -> f x >>= g)
@given(st.integers())
def test_monad_associativity(v):
    m = succeed(v)
    f = lambda x: succeed(x + 1)
    g = lambda y: succeed(y * 2)

    lhs = m.and_then(f).and_then(g)
    rhs = m.and_then(lambda x: f(x).and_then(g))

    assert step_of(lhs, "").value == step_of(rhs, "").value


# 4. Functor identity and composition
@given(st.text())
def test_map_laws(text):
    m = get_chomped_string(chomp_while(str.isalpha))
    assert step_of(m.map(lambda x: x), text).value == step_of(m, text).value
    assert step_of(m.map(str.upper).map(len), text).value == step_of(m.map(lambda s: len(s.upper())), text).value
