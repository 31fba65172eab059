"""
Fan-out scheduler.

Runs every query concurrently and waits for all of them to settle.
The SDK clients are sync, so each query runs in its own thread from a
pool sized to the batch: no target waits for a free worker. A slow or
failing query never cancels its siblings; each task returns a
ProviderOutcome instead of raising.
"""

import asyncio
import logging
from concurrent.futures import Executor, ThreadPoolExecutor
from typing import Callable

from models import ProviderOutcome, QueryTarget


logger = logging.getLogger(__name__)

QueryFn = Callable[[QueryTarget], ProviderOutcome]


async def run_one(target: QueryTarget, query: QueryFn, executor: Executor) -> ProviderOutcome:
    """Run a single query on the given executor."""
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(executor, query, target)


async def gather_outcomes(targets: list[QueryTarget], query: QueryFn) -> list[ProviderOutcome]:
    """
    Dispatch all targets at once and wait for every one.

    Results come back in target order regardless of completion order.
    """
    if not targets:
        return []

    logger.info("[fan-out] Dispatching %d queries", len(targets))
    with ThreadPoolExecutor(max_workers=len(targets), thread_name_prefix="visibility") as pool:
        outcomes = await asyncio.gather(*(run_one(t, query, pool) for t in targets))

    succeeded = sum(1 for o in outcomes if o.succeeded)
    logger.info("[fan-out] Settled: %d succeeded, %d failed", succeeded, len(outcomes) - succeeded)
    return list(outcomes)


def group_by_provider(outcomes: list[ProviderOutcome]) -> dict[str, list[ProviderOutcome]]:
    """Group outcomes by provider_id, keeping first-seen provider order."""
    grouped: dict[str, list[ProviderOutcome]] = {}
    for outcome in outcomes:
        grouped.setdefault(outcome.provider_id, []).append(outcome)
    return grouped
