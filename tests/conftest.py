# tests/conftest.py
import pytest

from pychomp.Parser import Bad, Good, initial_state
from pychomp.Scanner import to_code_units


def step_of(parser, text):
    """Run a parser on a fresh state and return the raw Step."""
    return parser(initial_state(to_code_units(text)))


def assert_step_eq(step1, step2):
    """
    Deep comparison of two Steps.
    """
    assert step1.progress == step2.progress, f"Progress mismatch: {step1.progress} != {step2.progress}"

    if isinstance(step1, Good):
        assert isinstance(step2, Good), "Step mismatch: Good vs Bad"
        assert step1.value == step2.value
        assert step1.state.offset == step2.state.offset
        assert (step1.state.row, step1.state.col) == (step2.state.row, step2.state.col)
    else:
        assert isinstance(step2, Bad), "Step mismatch: Bad vs Good"


@pytest.fixture
def initial():
    def _make(text):
        return initial_state(to_code_units(text))

    return _make
