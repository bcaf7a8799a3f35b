# SPDX-FileCopyrightText: Copyright (c) 2024, NVIDIA CORPORATION & AFFILIATES.
# All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import pytest
from pydantic import ValidationError

from conversion_client.config import ClientConfiguration
from conversion_client.config import ServiceProduct
from conversion_client.errors import ConfigurationError


def test_defaults():
    config = ClientConfiguration(endpoint="https://example.com/buildvu")

    assert config.request_timeout == 60000
    assert config.request_timeout_seconds == 60.0
    assert config.conversion_timeout == -1
    assert not config.has_conversion_timeout
    assert config.poll_interval == 1.0


def test_configuration_is_immutable():
    config = ClientConfiguration(endpoint="https://example.com/buildvu")
    with pytest.raises(ValidationError):
        config.endpoint = "https://other.example.com"


@pytest.mark.parametrize("endpoint", [None, "", "   "])
def test_blank_endpoint_normalized_to_none(endpoint):
    assert ClientConfiguration(endpoint=endpoint).endpoint is None


@pytest.mark.parametrize("timeout,expected", [(-1, False), (0, False), (5, True)])
def test_has_conversion_timeout(timeout, expected):
    assert ClientConfiguration(conversion_timeout=timeout).has_conversion_timeout is expected


def test_create_reports_configuration_error():
    with pytest.raises(ConfigurationError, match="request_timeout"):
        ClientConfiguration.create(endpoint="https://example.com", request_timeout=-5)


def test_from_env(monkeypatch):
    monkeypatch.setenv("CONVERSION_CLIENT_ENDPOINT", "https://example.com/jpedal")
    monkeypatch.setenv("CONVERSION_CLIENT_REQUEST_TIMEOUT", "1000")
    monkeypatch.setenv("CONVERSION_CLIENT_CONVERSION_TIMEOUT", "30")

    config = ClientConfiguration.from_env()

    assert config.endpoint == "https://example.com/jpedal"
    assert config.request_timeout == 1000
    assert config.conversion_timeout == 30


def test_from_env_overrides(monkeypatch):
    monkeypatch.setenv("CONVERSION_CLIENT_ENDPOINT", "https://example.com/jpedal")
    monkeypatch.delenv("CONVERSION_CLIENT_REQUEST_TIMEOUT", raising=False)
    monkeypatch.delenv("CONVERSION_CLIENT_CONVERSION_TIMEOUT", raising=False)

    config = ClientConfiguration.from_env(endpoint="https://example.com/formvu", conversion_timeout=None)

    assert config.endpoint == "https://example.com/formvu"
    assert config.request_timeout == 60000
    assert config.conversion_timeout == -1


def test_from_env_invalid_number(monkeypatch):
    monkeypatch.setenv("CONVERSION_CLIENT_REQUEST_TIMEOUT", "soon")

    with pytest.raises(ConfigurationError, match="CONVERSION_CLIENT_REQUEST_TIMEOUT"):
        ClientConfiguration.from_env()


@pytest.mark.parametrize(
    "product,base_url,expected",
    [
        (ServiceProduct.BUILDVU, "https://example.com", "https://example.com/buildvu"),
        (ServiceProduct.JPEDAL, "https://example.com/", "https://example.com/jpedal"),
        (ServiceProduct.FORMVU, "http://localhost:8080", "http://localhost:8080/formvu"),
    ],
)
def test_service_product_endpoint(product, base_url, expected):
    assert product.endpoint(base_url) == expected
