"""Shared test fixtures.

Provides:
- ``DEFAULT_SECRET`` / ``SUBSCRIBER_SECRET``: secrets for the 'custom' receiver
- ``resolver`` / ``receiver``: a receiver wired to those secrets
- ``handlers``: an empty handler registry, installed on the app
- ``client``: TestClient over HTTPS against the app
"""

import pytest
from fastapi.testclient import TestClient

from hookreceiver.handlers import HandlerRegistry
from hookreceiver.main import app
from hookreceiver.receivers import CustomWebHookReceiver, SecretResolver

DEFAULT_SECRET = "0123456789abcdef0123456789abcdef"
SUBSCRIBER_SECRET = "subscriber-one-0123456789abcdef0123456789"
SECRET_CONFIG = f"{DEFAULT_SECRET}, sub1={SUBSCRIBER_SECRET}"


@pytest.fixture
def resolver():
    return SecretResolver.from_config({"custom": SECRET_CONFIG})


@pytest.fixture
def receiver(resolver):
    return CustomWebHookReceiver(resolver)


@pytest.fixture
def handlers():
    return HandlerRegistry()


@pytest.fixture
def client(monkeypatch, receiver, handlers):
    monkeypatch.setattr(app.state, "receivers", {receiver.name: receiver})
    monkeypatch.setattr(app.state, "handlers", handlers)
    return TestClient(app, base_url="https://testserver")
