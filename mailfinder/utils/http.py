import httpx
from mailfinder.config.settings import settings

def make_client(
    headers: dict | None = None,
    timeout_s: float | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        timeout=timeout_s if timeout_s is not None else settings.HTTP_TIMEOUT_S,
        headers=headers or {},
        follow_redirects=True,
        transport=transport,
    )

def domain_of(email: str) -> str | None:
    parts = email.split("@")
    return parts[1] if len(parts) > 1 else None
