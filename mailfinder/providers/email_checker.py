import httpx
from mailfinder.config.providers import PROVIDER_ENDPOINTS
from mailfinder.config.settings import settings
from mailfinder.models.schemas import ValidationResult
from mailfinder.providers.base import EmailVerificationProvider
from mailfinder.utils.http import domain_of

class EmailCheckerProvider(EmailVerificationProvider):
    name = "email-checker"
    label = "Email-checker"
    headers = {"Accept": "*/*", "User-Agent": settings.HTTP_USER_AGENT}

    async def _check(self, client: httpx.AsyncClient, email: str) -> ValidationResult:
        resp = await client.get(PROVIDER_ENDPOINTS[self.name], params={"email": email})
        resp.raise_for_status()
        data = resp.json()

        ok = data.get("success") == 1
        return self.result(
            email=email,
            is_valid=ok,
            score=85 if ok else 15,
            domain=domain_of(email),
        )
