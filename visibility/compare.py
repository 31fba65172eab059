"""
Competitor comparison table - main business vs competitors, per provider.
"""

from typing import Sequence

from models import AggregateReport, Business, ComparisonRow, KnowledgeComparison


def comparison_row(name: str, domain: str, report: AggregateReport) -> ComparisonRow:
    return ComparisonRow(name=name, domain=domain, scores=report.provider_scores())


def build_knowledge_comparison(
    main_report: AggregateReport,
    competitor_reports: Sequence[AggregateReport],
    main_business: Business,
    competitors: Sequence[Business],
) -> KnowledgeComparison:
    """
    Line up provider scores for the main business and each competitor.

    competitor_reports[i] belongs to competitors[i]. A report without a
    matching descriptor is labelled "Competitor N" (1-based).
    """
    rows = []
    for idx, report in enumerate(competitor_reports):
        competitor = competitors[idx] if idx < len(competitors) else None
        if competitor is None:
            rows.append(comparison_row(f"Competitor {idx + 1}", "N/A", report))
        else:
            rows.append(comparison_row(competitor.name, competitor.domain, report))

    return KnowledgeComparison(
        main_business=comparison_row(main_business.name, main_business.domain, main_report),
        competitors=tuple(rows),
    )
