"""Tests for the Endpoint value type."""

import dataclasses

import pytest

from tracewire.errors import ValidationError
from tracewire.tracer import Endpoint


def test_from_address():
    endpoint = Endpoint.from_address("api", "192.168.1.10", 443)
    assert endpoint.ipv4 == 0xC0A8010A
    assert endpoint.ipv4_address == "192.168.1.10"
    assert str(endpoint) == "api@192.168.1.10:443"


def test_signed_ipv4_is_normalized():
    endpoint = Endpoint("api", ipv4=-1062731510, port=443)
    assert endpoint.ipv4_address == "192.168.1.10"
    assert endpoint == Endpoint.from_address("api", "192.168.1.10", 443)


def test_is_immutable():
    endpoint = Endpoint("api")
    with pytest.raises(dataclasses.FrozenInstanceError):
        endpoint.port = 80


@pytest.mark.parametrize("kwargs", [{"port": 70000}, {"port": -1}, {"ipv4": 1 << 32}])
def test_out_of_range(kwargs):
    with pytest.raises(ValidationError):
        Endpoint("api", **kwargs)


def test_invalid_address():
    with pytest.raises(ValidationError):
        Endpoint.from_address("api", "not-an-ip")
