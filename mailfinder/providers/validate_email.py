import httpx
from mailfinder.config.providers import PROVIDER_ENDPOINTS
from mailfinder.models.schemas import ValidationResult
from mailfinder.providers.base import EmailVerificationProvider

class ValidateEmailProvider(EmailVerificationProvider):
    name = "validate-email"
    label = "Validate.email"
    headers = {"accept": "application/json"}

    async def _check(self, client: httpx.AsyncClient, email: str) -> ValidationResult:
        resp = await client.get(PROVIDER_ENDPOINTS[self.name], params={"email": email})
        resp.raise_for_status()
        result = resp.json()["result"]

        reachable = result.get("reachable")
        risk = result.get("riskScore")
        score = max(0, round(100 - float(risk["score"]))) if risk else 50
        syntax = result.get("syntax") or {}
        smtp = result.get("smtp") or {}
        mx = result.get("mx") or {}
        return self.result(
            email=result.get("email") or email,
            is_valid=reachable == "safe",
            score=score,
            domain=syntax.get("domain"),
            status=reachable,
            has_mailbox=smtp.get("is_deliverable"),
            is_disposable=result.get("disposable"),
            syntax_valid=syntax.get("valid"),
            mx_valid=mx.get("accepts_mail"),
            smtp_valid=smtp.get("is_deliverable"),
            error="Email not deliverable" if reachable == "invalid" else None,
        )
