import httpx
import orjson
from mailfinder.config.providers import PROVIDER_ENDPOINTS
from mailfinder.models.schemas import ValidationResult
from mailfinder.providers.base import EmailVerificationProvider

REACHABLE_SCORES = {"unknown": 70, "deliverable": 95}

class AutomizelyProvider(EmailVerificationProvider):
    name = "automizely"
    label = "Automizely"
    headers = {"Content-Type": "application/json", "accept": "application/json"}

    async def _check(self, client: httpx.AsyncClient, email: str) -> ValidationResult:
        # the endpoint takes a list; one address per call
        payload = {"emails": [email]}
        resp = await client.post(PROVIDER_ENDPOINTS[self.name], content=orjson.dumps(payload))
        resp.raise_for_status()
        data = resp.json()

        items = data.get("data") or []
        if not items:
            raise ValueError("No data returned from Automizely API")
        item = items[0]
        syntax = item.get("syntax") or {}
        syntax_valid = syntax.get("valid")
        has_mx = item.get("has_mx_records")
        return self.result(
            email=item.get("email") or email,
            is_valid=bool(syntax_valid and has_mx),
            score=REACHABLE_SCORES.get(item.get("reachable"), 25),
            domain=syntax.get("domain"),
            syntax_valid=syntax_valid,
            mx_valid=has_mx,
            is_disposable=item.get("disposable"),
            is_role=item.get("role_account"),
            is_free=item.get("free"),
            suggestion=item.get("suggestion") or None,
        )
