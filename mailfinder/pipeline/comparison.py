import asyncio
import time
from collections import defaultdict
from typing import Dict, List, Optional
from mailfinder.config.settings import settings
from mailfinder.models.schemas import ComparisonStats, ProviderAccuracy, ProviderTestResult
from mailfinder.providers.registry import ProviderRegistry

async def compare_providers(
    email: str,
    registry: ProviderRegistry,
    providers: Optional[List[str]] = None,
    timeout_s: float | None = None,
    delay_s: float | None = None,
) -> List[ProviderTestResult]:
    """Run one email through each provider in turn, timing every call."""
    names = [n for n in (providers or registry.names()) if n in registry]
    delay = settings.COMPARE_DELAY_MS / 1000 if delay_s is None else delay_s
    out: List[ProviderTestResult] = []
    for i, name in enumerate(names):
        started = time.perf_counter()
        result = await registry.get(name).validate(email, timeout_s=timeout_s)
        out.append(ProviderTestResult(
            provider=name,
            result=result,
            error=result.error,
            duration=int((time.perf_counter() - started) * 1000),
            timestamp=result.timestamp,
        ))
        if i < len(names) - 1:
            await asyncio.sleep(delay)
    return out

async def compare_bulk(
    emails: List[str],
    registry: ProviderRegistry,
    providers: Optional[List[str]] = None,
    timeout_s: float | None = None,
    delay_s: float | None = None,
    email_delay_s: float | None = None,
) -> List[ProviderTestResult]:
    cleaned = [e.strip() for e in emails if e.strip()]
    gap = settings.COMPARE_EMAIL_DELAY_MS / 1000 if email_delay_s is None else email_delay_s
    out: List[ProviderTestResult] = []
    for i, email in enumerate(cleaned):
        out.extend(await compare_providers(email, registry, providers, timeout_s=timeout_s, delay_s=delay_s))
        if i < len(cleaned) - 1:
            await asyncio.sleep(gap)
    return out

def calculate_stats(tests: List[ProviderTestResult]) -> Optional[ComparisonStats]:
    if not tests:
        return None

    durations: Dict[str, List[int]] = defaultdict(list)
    accuracy: Dict[str, ProviderAccuracy] = {}
    for t in tests:
        durations[t.provider].append(t.duration)
        if t.result is None:
            continue
        acc = accuracy.setdefault(t.provider, ProviderAccuracy())
        acc.total += 1
        if t.result.is_valid:
            acc.valid += 1
        else:
            acc.invalid += 1

    averages = {p: sum(d) / len(d) for p, d in durations.items()}
    return ComparisonStats(
        total_tests=len(tests),
        successful_tests=sum(1 for t in tests if t.result is not None),
        failed_tests=sum(1 for t in tests if t.error),
        average_duration=sum(t.duration for t in tests) / len(tests),
        fastest_provider=min(averages, key=averages.get),
        slowest_provider=max(averages, key=averages.get),
        accuracy_by_provider=accuracy,
    )
