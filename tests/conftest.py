import httpx
import pytest

from mailfinder.models.schemas import ValidationResult
from mailfinder.pipeline.settings_store import SettingsStore
from mailfinder.providers.base import EmailVerificationProvider
from mailfinder.providers.registry import ProviderRegistry


def json_transport(payload, status_code=200, calls=None):
    def handler(request: httpx.Request) -> httpx.Response:
        if calls is not None:
            calls.append(request)
        return httpx.Response(status_code, json=payload)
    return httpx.MockTransport(handler)


class EchoProvider(EmailVerificationProvider):
    """Offline provider: valid unless the local part starts with "bad"."""

    def __init__(self, name="mslm", calls=None):
        super().__init__()
        self.name = name
        self.label = name
        self.calls = calls if calls is not None else []

    async def _check(self, client, email):
        self.calls.append(email)
        ok = not email.startswith("bad")
        return self.result(email=email, is_valid=ok, score=90 if ok else 10)


@pytest.fixture
def store():
    return SettingsStore()


@pytest.fixture
def echo_registry():
    registry = ProviderRegistry()
    registry.register(EchoProvider("mslm"))
    registry.register(EchoProvider("bazzigate"))
    return registry


@pytest.fixture
def make_result():
    def _make(email, **fields):
        return ValidationResult(email=email, timestamp="2024-01-01T00:00:00.000Z", **fields)
    return _make
