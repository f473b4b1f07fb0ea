import array_api_strict
import numpy
import pytest

import mpn
from tests.oracle import EDGES, random_ints

NAMESPACES = {
    'numpy': numpy,
    'array_api_strict': array_api_strict,
}


@pytest.fixture(autouse=True, params=sorted(NAMESPACES))
def xp(request, monkeypatch):
    """Run every test with limb arrays from each array namespace."""
    namespace = NAMESPACES[request.param]
    monkeypatch.setattr(mpn, 'xp', namespace)
    return namespace


@pytest.fixture
def rng():
    return numpy.random.default_rng(0)


@pytest.fixture
def values(rng):
    """Boundary values plus a few random multi-limb ones."""
    return EDGES + random_ints(rng, 4, 130)
