import httpx
from mailfinder.config.providers import PROVIDER_ENDPOINTS
from mailfinder.models.schemas import ValidationResult
from mailfinder.providers.base import EmailVerificationProvider
from mailfinder.utils.http import domain_of

class SuperSendProvider(EmailVerificationProvider):
    name = "supersend"
    label = "SuperSend"
    headers = {"accept": "application/json"}

    async def _check(self, client: httpx.AsyncClient, email: str) -> ValidationResult:
        resp = await client.get(PROVIDER_ENDPOINTS[self.name], params={"email": email})
        resp.raise_for_status()
        data = resp.json()

        ok = bool(data.get("valid"))
        validators = data["valid_result"]["validators"]
        return self.result(
            email=data.get("email") or email,
            is_valid=ok,
            score=90 if ok else 10,
            domain=domain_of(email),
            status="valid" if ok else "invalid",
            syntax_valid=validators["regex"]["valid"],
            mx_valid=validators["mx"]["valid"],
            smtp_valid=validators["smtp"]["valid"],
            error=data.get("message") if not ok else None,
        )
