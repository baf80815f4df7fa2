import httpx
from mailfinder.config.providers import PROVIDER_ENDPOINTS
from mailfinder.models.schemas import ValidationResult
from mailfinder.providers.base import EmailVerificationProvider
from mailfinder.utils.http import domain_of

class BazzigateProvider(EmailVerificationProvider):
    name = "bazzigate"
    label = "Bazzigate"
    headers = {"accept": "application/json"}

    async def _check(self, client: httpx.AsyncClient, email: str) -> ValidationResult:
        resp = await client.get(PROVIDER_ENDPOINTS[self.name], params={"email": email})
        resp.raise_for_status()
        data = resp.json()

        ok = bool(data.get("res"))
        return self.result(
            email=data.get("email") or email,
            is_valid=ok,
            score=85 if ok else 15,
            domain=domain_of(email),
        )
