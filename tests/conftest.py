"""
Fixtures used in the tests
"""
import pytest

from hdkeys.cryptography import get_curve
from hdkeys.data import get_default_network, set_default_network


@pytest.fixture(params=["python", "openssl"])
def curve(request):
    """Key tree tests run against both curve backends"""
    return get_curve(request.param)


@pytest.fixture(autouse=True)
def restore_default_network():
    """Tests that change the process default network get it restored afterwards"""
    previous = get_default_network()
    yield
    set_default_network(previous)
