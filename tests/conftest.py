# Pytest looks here for fixtures

import pytest

from tapstack import InterpreterLimits, InterpreterState


@pytest.fixture(params=(
    InterpreterLimits.TAPSCRIPT,
    InterpreterLimits(ops_per_script=201),
))
def limits(request):
    yield request.param


@pytest.fixture
def state(limits):
    yield InterpreterState(limits)
