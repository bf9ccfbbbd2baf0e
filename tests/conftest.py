import pytest

from petlib.ec import EcGroup


# secp224r1, NIST P-256, and secp521r1 whose order is not a whole number of bytes.
GROUP_NIDS = [713, 415, 716]


@pytest.fixture(params=GROUP_NIDS)
def group(request):
    return EcGroup(request.param)


@pytest.fixture
def other_group(group):
    other = EcGroup(714)
    assert other != group, "Test assumption is broken."
    return other
