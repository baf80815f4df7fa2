from typing import Dict, List
import httpx
from mailfinder.config.providers import PROVIDER_INFO
from mailfinder.models.schemas import ProviderDescription
from mailfinder.providers.base import EmailVerificationProvider
from mailfinder.providers.mslm import MslmProvider
from mailfinder.providers.email_checker import EmailCheckerProvider
from mailfinder.providers.automizely import AutomizelyProvider
from mailfinder.providers.mail7 import Mail7Provider
from mailfinder.providers.validate_email import ValidateEmailProvider
from mailfinder.providers.bazzigate import BazzigateProvider
from mailfinder.providers.supersend import SuperSendProvider
from mailfinder.providers.site24x7 import Site24x7Provider

DEFAULT_PROVIDER = "mslm"

PROVIDER_CLASSES = [
    MslmProvider,
    EmailCheckerProvider,
    AutomizelyProvider,
    Mail7Provider,
    ValidateEmailProvider,
    BazzigateProvider,
    SuperSendProvider,
    Site24x7Provider,
]

class ProviderRegistry:
    def __init__(self, fallback: str = DEFAULT_PROVIDER):
        self.fallback = fallback
        self._providers: Dict[str, EmailVerificationProvider] = {}

    def register(self, provider: EmailVerificationProvider) -> None:
        self._providers[provider.name] = provider

    def get(self, name: str | None) -> EmailVerificationProvider:
        provider = self._providers.get(name or "")
        if provider is None:
            provider = self._providers[self.fallback]
        return provider

    def names(self) -> List[str]:
        return list(self._providers)

    def __contains__(self, name: str) -> bool:
        return name in self._providers

    def describe(self) -> List[ProviderDescription]:
        out = []
        for name, provider in self._providers.items():
            label, description = PROVIDER_INFO.get(name, (provider.label, ""))
            out.append(ProviderDescription(id=name, name=label, description=description))
        return out

def default_registry(transport: httpx.AsyncBaseTransport | None = None) -> ProviderRegistry:
    registry = ProviderRegistry()
    for cls in PROVIDER_CLASSES:
        registry.register(cls(transport=transport))
    return registry
