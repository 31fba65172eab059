"""
Entry point: business in, AggregateReport out.

    report = check_visibility(business, table)

Nothing here raises for per-model or per-provider failures. The only
error surfaced to the caller is ConfigurationError for a table with
no models.
"""

import asyncio
import logging
from functools import partial
from typing import Optional, Union

from models import AggregateReport, Business, ProviderTable, ScorePolicy
from .adapters import CompletionFn, CredentialFn, LiveCompletion, query_target
from .report import build_report
from .scheduler import gather_outcomes, group_by_provider
from .targets import enumerate_targets


logger = logging.getLogger(__name__)


async def check_visibility_async(
    business: Union[Business, dict],
    table: ProviderTable,
    complete: Optional[CompletionFn] = None,
    credentials: Optional[CredentialFn] = None,
    policy: Union[ScorePolicy, str] = ScorePolicy.EXCLUDE_FAILED,
) -> AggregateReport:
    """
    Query every (provider, model) in table concurrently and aggregate.

    Args:
        business: Business or a dict with name/type/location/website
        table: Provider -> models to query
        complete: Completion capability; defaults to the live SDK clients
        credentials: provider_id -> API key; defaults to environment lookup
        policy: How providers without successes enter overall_score
    """
    if not isinstance(business, Business):
        business = Business.model_validate(business)
    policy = ScorePolicy(policy)
    targets = enumerate_targets(table)

    if complete is None:
        complete = LiveCompletion()
    if credentials is None:
        from config import get_credential
        credentials = get_credential

    logger.info("[visibility] Querying %d models across %d providers for: %s",
                table.model_count, len(table.provider_ids), business.name)

    query = partial(query_target, business=business, complete=complete, credentials=credentials)
    outcomes = await gather_outcomes(targets, query)
    return build_report(group_by_provider(outcomes), policy)


def check_visibility(
    business: Union[Business, dict],
    table: ProviderTable,
    complete: Optional[CompletionFn] = None,
    credentials: Optional[CredentialFn] = None,
    policy: Union[ScorePolicy, str] = ScorePolicy.EXCLUDE_FAILED,
) -> AggregateReport:
    """Synchronous wrapper. Use check_visibility_async inside a running loop."""
    return asyncio.run(check_visibility_async(
        business, table, complete=complete, credentials=credentials, policy=policy
    ))
