import httpx
from mailfinder.config.providers import PROVIDER_ENDPOINTS
from mailfinder.config.settings import settings
from mailfinder.models.schemas import ValidationResult
from mailfinder.providers.base import EmailVerificationProvider

class MslmProvider(EmailVerificationProvider):
    name = "mslm"
    label = "MSLM"
    headers = {"accept": "*/*", "user-agent": settings.HTTP_USER_AGENT}

    async def _check(self, client: httpx.AsyncClient, email: str) -> ValidationResult:
        resp = await client.get(PROVIDER_ENDPOINTS[self.name], params={"email": email})
        resp.raise_for_status()
        data = resp.json()

        status = data.get("status")
        has_mailbox = data.get("has_mailbox")
        mx = data.get("mx")
        if has_mailbox:
            score = 95
        elif status == "real":
            score = 75
        else:
            score = 25
        return self.result(
            email=data.get("email") or email,
            is_valid=status == "real",
            score=score,
            domain=data.get("domain"),
            status=status,
            has_mailbox=has_mailbox,
            is_disposable=data.get("disposable"),
            is_free=data.get("free"),
            is_role=data.get("role"),
            syntax_valid=not data.get("malformed"),
            mx_valid=bool(mx) if mx is not None else None,
            suggestion=data.get("suggestion") or None,
        )
