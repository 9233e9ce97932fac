import pytest

from certificate_registry.accounts import generate_account
from certificate_registry.clock import ManualClock
from certificate_registry.contract import CertificateRegistry
from certificate_registry.host import LocalHost

TEST_HASH = "0123456789abcdef0123456789abcdef0123456789abcdef0123456789abcdef"
START = 1_700_000_000


@pytest.fixture
def clock():
    return ManualClock(START)


@pytest.fixture
def registry(clock):
    return CertificateRegistry(clock=clock)


@pytest.fixture
def host(clock):
    return LocalHost(clock=clock)


@pytest.fixture
def alice():
    return generate_account()


@pytest.fixture
def bob():
    return generate_account()
