import numpy as np
import pytest

from core.flow.solver import configure

# 0-1 branch 4 - j12 pu, 1-2 branch 2 - j6 pu, no 0-2 branch.
DEFAULT_RE = [[0.0, 4.0, 0.0],
              [4.0, 0.0, 2.0],
              [0.0, 2.0, 0.0]]
DEFAULT_IM = [[0.0, -12.0, 0.0],
              [-12.0, 0.0, -6.0],
              [0.0, -6.0, 0.0]]


@pytest.fixture
def default_tables():
    return DEFAULT_RE, DEFAULT_IM


@pytest.fixture
def meshed_tables():
    # Meshed variant with a direct 0-2 tie.
    re = np.array([[0.0, 3.0, 0.5],
                   [3.0, 0.0, 1.5],
                   [0.5, 1.5, 0.0]])
    im = np.array([[0.0, -9.0, -2.0],
                   [-9.0, 0.0, -4.5],
                   [-2.0, -4.5, 0.0]])
    return re, im


@pytest.fixture
def ready_state(default_tables):
    return configure(*default_tables)


@pytest.fixture
def dummy_logger(caplog):
    caplog.set_level("DEBUG")
    return caplog
