import httpx
import orjson
from mailfinder.config.providers import PROVIDER_ENDPOINTS
from mailfinder.models.schemas import ValidationResult
from mailfinder.providers.base import EmailVerificationProvider
from mailfinder.utils.http import domain_of

class Mail7Provider(EmailVerificationProvider):
    name = "mail7"
    label = "Mail7"
    headers = {"Content-Type": "application/json"}

    async def _check(self, client: httpx.AsyncClient, email: str) -> ValidationResult:
        resp = await client.post(PROVIDER_ENDPOINTS[self.name], content=orjson.dumps({"email": email}))
        resp.raise_for_status()
        data = resp.json()

        smtp_valid = data.get("smtpValid")
        mx_valid = data.get("mxValid")
        format_valid = data.get("formatValid")
        if smtp_valid:
            score = 95
        elif mx_valid:
            score = 75
        elif format_valid:
            score = 50
        else:
            score = 25
        return self.result(
            email=data.get("email") or email,
            is_valid=bool(data.get("valid")),
            score=score,
            domain=domain_of(email),
            syntax_valid=format_valid,
            mx_valid=mx_valid,
            smtp_valid=smtp_valid,
            error=data.get("error") or None,
        )
