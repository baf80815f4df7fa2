import re
import httpx
import orjson
from mailfinder.config.providers import PROVIDER_ENDPOINTS
from mailfinder.models.schemas import ValidationResult
from mailfinder.providers.base import EmailVerificationProvider

HEX_ENTITY = re.compile(r"&#x([0-9a-fA-F]+);")
NAMED_ENTITIES = (("&quot;", '"'), ("&lt;", "<"), ("&gt;", ">"))

SMTP_OK = 250

def decode_entities(text: str) -> str:
    """Undo the HTML escaping Site24x7 applies to its JSON body."""
    text = HEX_ENTITY.sub(lambda m: chr(int(m.group(1), 16)), text)
    for entity, char in NAMED_ENTITIES:
        text = text.replace(entity, char)
    return text

class Site24x7Provider(EmailVerificationProvider):
    name = "site24x7"
    label = "Site24x7"
    headers = {"Content-Type": "application/x-www-form-urlencoded", "accept": "application/json"}

    async def _check(self, client: httpx.AsyncClient, email: str) -> ValidationResult:
        resp = await client.post(PROVIDER_ENDPOINTS[self.name], data={"emails": email})
        resp.raise_for_status()
        data = orjson.loads(decode_entities(resp.text))

        results = data["results"]
        domain = list(results)[0]
        entry = results[domain][email]
        ok = entry.get("status") == SMTP_OK
        return self.result(
            email=email,
            is_valid=ok,
            score=95 if ok else 25,
            domain=domain,
            status="valid" if ok else "invalid",
            smtp_valid=ok,
            error=entry.get("reason") if not ok else None,
        )
