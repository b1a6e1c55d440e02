"""Pytest fixtures for onfido_client tests."""

import pytest

from onfido_client.api_client import OnfidoApiClient
from onfido_client.config import ClientConfig
from tests.onfido_client.fakes import API_TOKEN, ENDPOINT, FakeTransport


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(api_token=API_TOKEN, endpoint=ENDPOINT)


@pytest.fixture
def fake_transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def client(config, fake_transport) -> OnfidoApiClient:
    return OnfidoApiClient(config, transport=fake_transport)
