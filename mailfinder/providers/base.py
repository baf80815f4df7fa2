from abc import ABC, abstractmethod
import httpx
from mailfinder.models.schemas import ValidationResult
from mailfinder.utils.clock import iso_now
from mailfinder.utils.http import make_client
from mailfinder.utils.log import get_logger

logger = get_logger("mailfinder-providers")

class EmailVerificationProvider(ABC):
    """
    One upstream verification API.

    Subclasses implement `_check`, which may raise on transport, status or
    parsing problems. Callers only ever use `validate`, which turns every
    failure into a ValidationResult with `error` set.
    """

    name: str = "base"
    label: str = "Base"
    headers: dict = {}

    def __init__(self, transport: httpx.AsyncBaseTransport | None = None):
        self.transport = transport

    @abstractmethod
    async def _check(self, client: httpx.AsyncClient, email: str) -> ValidationResult:
        raise NotImplementedError

    async def validate(self, email: str, timeout_s: float | None = None) -> ValidationResult:
        try:
            async with make_client(headers=self.headers, timeout_s=timeout_s, transport=self.transport) as client:
                return await self._check(client, email)
        except httpx.HTTPStatusError as e:
            message = f"{self.label} API error: {e.response.status_code}"
        except Exception as e:
            message = str(e) or f"{self.label} API error"
        logger.warning("%s validation failed for %s: %s", self.name, email, message)
        return self.failure(email, message)

    def result(self, **fields) -> ValidationResult:
        # stamped after parsing so the timestamp marks completion
        return ValidationResult(provider=self.name, timestamp=iso_now(), **fields)

    def failure(self, email: str, message: str) -> ValidationResult:
        return self.result(email=email, is_valid=False, error=message)
