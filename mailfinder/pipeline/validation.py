import asyncio
from typing import List
from mailfinder.config.settings import settings
from mailfinder.models.schemas import ValidationResult, ValidationSettings
from mailfinder.pipeline.settings_store import SettingsStore
from mailfinder.providers.registry import ProviderRegistry, default_registry
from mailfinder.utils.clock import iso_now
from mailfinder.utils.log import get_logger

logger = get_logger("mailfinder-validation")

def chunked(items: List[str], size: int) -> List[List[str]]:
    return [items[i:i + size] for i in range(0, len(items), size)]

class ValidationService:
    """Dispatches validation to the configured provider and batches bulk runs."""

    def __init__(
        self,
        store: SettingsStore,
        registry: ProviderRegistry | None = None,
        batch_delay_s: float | None = None,
    ):
        self.store = store
        self.registry = registry or default_registry()
        self.batch_delay_s = settings.BATCH_DELAY_MS / 1000 if batch_delay_s is None else batch_delay_s

    def get_settings(self) -> ValidationSettings:
        return self.store.get()

    def save_settings(self, new: ValidationSettings) -> None:
        self.store.save(new)

    async def validate_email(self, email: str) -> ValidationResult:
        # settings are read per call, so a provider switch mid-run applies to the next email
        current = self.store.get()
        provider = self.registry.get(current.provider)
        return await provider.validate(email, timeout_s=current.timeout / 1000)

    async def _validate_guarded(self, email: str) -> ValidationResult:
        try:
            return await self.validate_email(email)
        except Exception as e:
            logger.warning("validation of %s failed: %s", email, e)
            return ValidationResult(
                email=email,
                is_valid=False,
                error=str(e) or "Validation error",
                provider=self.store.get().provider,
                timestamp=iso_now(),
            )

    async def validate_bulk_emails(self, emails: List[str]) -> List[ValidationResult]:
        if not emails:
            return []
        batches = chunked(emails, self.store.get().batch_size)
        results: List[ValidationResult] = []
        for i, batch in enumerate(batches):
            try:
                results.extend(await asyncio.gather(*(self.validate_email(e) for e in batch)))
            except Exception as e:
                logger.warning("batch %d/%d failed (%s), retrying one by one", i + 1, len(batches), e)
                for email in batch:
                    results.append(await self._validate_guarded(email))
            logger.debug("batch %d/%d done (%d results)", i + 1, len(batches), len(results))

            if i < len(batches) - 1:
                await asyncio.sleep(self.batch_delay_s)
        return results
