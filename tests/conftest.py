"""Shared SWC documents for the tests."""

import pytest

SINGLE_SOMA_POINT = "1 1 0 0 0 5 -1\n"

SOMA_ONLY = """\
# three point soma contour
1 1 0 0 0 2 -1
2 1 2 0 0 3 1
3 1 1 3 0 1 2
"""

# one soma point and an unbranched axon of 4 points
AXON_CHAIN = """\
1 1 0 0 0 5 -1
2 2 1 0 0 1 1
3 2 2 0 0 1 2
4 2 3 0 0 1 3
5 2 4 0 0 1 4
"""

# an axon forking at node 3 into two branches of two points
AXON_FORK = """\
1 1 0 0 0 5 -1
2 2 0 1 0 1 1
3 2 0 2 0 1 2
4 2 -1 3 0 0.5 3
5 2 -1 4 0 0.5 4
6 2 1 3 0 0.5 3
7 2 1 4 0 0.5 6
"""

# two dendrites on a two point soma
TWO_DENDRITES = """\
1 1 0 0 0 5 -1
2 1 0 5 0 4 1
3 3 5 0 0 1 1
4 3 6 0 0 1 3
5 4 -5 0 0 1 1
6 4 -6 0 0 1 5
"""

# the axon turns into a basal dendrite at node 4
TYPE_CHANGE = """\
1 1 0 0 0 5 -1
2 2 1 0 0 1 1
3 2 2 0 0 1 2
4 3 3 0 0 1 3
5 3 4 0 0 1 4
"""

NO_SOMA = """\
1 2 0 0 0 1 -1
2 2 1 0 0 1 1
3 2 2 0 0 1 2
4 2 3 1 0 1 3
5 2 3 -1 0 1 3
"""

OUT_OF_ORDER = """\
1 1 0 0 0 5 -1
2 2 1 0 0 1 3
3 2 2 0 0 1 1
"""


@pytest.fixture
def single_soma_point():
    return SINGLE_SOMA_POINT


@pytest.fixture
def soma_only():
    return SOMA_ONLY


@pytest.fixture
def axon_chain():
    return AXON_CHAIN


@pytest.fixture
def axon_fork():
    return AXON_FORK


@pytest.fixture
def two_dendrites():
    return TWO_DENDRITES


@pytest.fixture
def type_change():
    return TYPE_CHANGE


@pytest.fixture
def no_soma():
    return NO_SOMA


@pytest.fixture
def out_of_order():
    return OUT_OF_ORDER


@pytest.fixture
def swc_path(tmp_path):
    path = tmp_path / "fork_neuron.swc"
    path.write_text(AXON_FORK)
    return path
