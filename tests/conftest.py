from __future__ import annotations

import pytest

from requests_mock import Mocker

from meteo_wizard.providers.ipapi import IpApiProvider
from meteo_wizard.providers.postcodes import PostcodesIoProvider
from meteo_wizard.providers.public_ip import PublicAddressResolver


PUBLIC_IP_URL = "https://ipify.test/"
IP_API_URL = "https://ipapi.test/json/{address}"
POSTCODES_URL = "https://postcodes.test/postcodes/{postal_code}"


@pytest.fixture
def requests_mock():
    with Mocker() as mock:
        yield mock


@pytest.fixture
def address_resolver() -> PublicAddressResolver:
    return PublicAddressResolver(base_url=PUBLIC_IP_URL)


@pytest.fixture
def ip_provider() -> IpApiProvider:
    return IpApiProvider(base_url=IP_API_URL)


@pytest.fixture
def postcode_provider() -> PostcodesIoProvider:
    return PostcodesIoProvider(base_url=POSTCODES_URL)
