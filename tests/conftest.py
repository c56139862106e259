"""Test configuration and fixtures."""

import itertools

import pytest

from shamir_service.config import DEFAULT_FIELD_MODULUS, get_settings
from shamir_service.core.field import PrimeField
from shamir_service.core.sharing_service import SecretSharingService, get_sharing_service

SMALL_PRIME = 2083


@pytest.fixture(autouse=True)
def reset_cached_settings():
    """Clear cached settings and service so env overrides take effect per test."""
    get_settings.cache_clear()
    get_sharing_service.cache_clear()
    yield
    get_settings.cache_clear()
    get_sharing_service.cache_clear()


@pytest.fixture
def small_field():
    """The field from the worked 2083 example."""
    return PrimeField(SMALL_PRIME)


@pytest.fixture
def large_field():
    """The default production field (Mersenne prime 2**127 - 1)."""
    return PrimeField(DEFAULT_FIELD_MODULUS)


@pytest.fixture
def service(large_field):
    """Service with CSPRNG coefficients over the default field."""
    return SecretSharingService(large_field)


@pytest.fixture
def small_service(small_field):
    """Service over GF(2083)."""
    return SecretSharingService(small_field)


@pytest.fixture
def fixed_coefficients():
    """Factory for a coefficient source returning the given values in order, cycling."""
    def factory(*values):
        source = itertools.cycle(values)

        def random_element(modulus):
            return next(source) % modulus

        return random_element

    return factory
