#!/usr/bin/env python3
"""
AI Visibility - CLI Entry Point

Ask every configured model what it knows about a business and show
how visible the business is to each AI platform.
"""

import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError
from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from config import credentials_for, load_provider_config
from models import AggregateReport, Business, ScorePolicy
from visibility import ConfigurationError, LiveCompletion, check_visibility

console = Console()


def configure_logging(verbose: bool) -> None:
    """Route engine logs through rich on stderr, keeping stdout clean for --json."""
    level = logging.INFO if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def score_style(score: int) -> str:
    if score >= 70:
        return "green"
    if score >= 40:
        return "yellow"
    return "red"


def render_report(business: Business, report: AggregateReport) -> None:
    """Print the report as a rich table."""
    table = Table(title=f"AI Visibility: {business.name}", box=box.ROUNDED)
    table.add_column("Provider", style="cyan")
    table.add_column("Best Model", style="dim")
    table.add_column("Knowledge")
    table.add_column("Mentioned", justify="center")
    table.add_column("Score", justify="right")
    table.add_column("Models OK", justify="right")

    for summary in report.provider_summaries:
        best = summary.best
        ok = f"{summary.models_succeeded}/{summary.models_attempted}"
        if best is None:
            table.add_row(summary.provider_id, "-", "[red]unreachable[/red]", "-", "[dim]0[/dim]", ok)
            continue
        style = score_style(best.score)
        table.add_row(
            summary.provider_id,
            summary.best_model or "-",
            best.knowledge_level.value,
            "[green]yes[/green]" if best.mentioned else "no",
            f"[{style}]{best.score}[/{style}]",
            ok,
        )

    console.print(table)

    style = score_style(report.overall_score)
    console.print(Panel(
        f"Overall visibility: [{style}]{report.overall_score}/100[/{style}]\n"
        f"Mentioned by {report.providers_with_mention} of {len(report.provider_summaries)} providers\n"
        f"[dim]{report.total_models_succeeded}/{report.total_models_queried} model queries succeeded "
        f"(policy: {report.policy.value})[/dim]",
        box=box.ROUNDED,
    ))

    for summary in report.provider_summaries:
        for failure in summary.failures:
            console.print(f"[dim]  {failure.target.key}: {failure.reason.value} {escape(failure.message)}[/dim]")


def cli(argv=None) -> int:
    """Main CLI entry point"""
    import argparse

    parser = argparse.ArgumentParser(
        description="Estimate how well AI models know a business",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  visibility "Joe's Pizza" --type restaurant --location "Austin, TX"
  visibility "Joe's Pizza" --website https://joespizza.com --json
  visibility "Joe's Pizza" --providers providers.yaml --policy failed_as_zero
        """
    )
    parser.add_argument("name", help="Business name")
    parser.add_argument("--type", "-t", dest="business_type", help="Business type")
    parser.add_argument("--location", "-l", help="Location, e.g. 'Austin, TX'")
    parser.add_argument("--website", "-w", help="Business website")
    parser.add_argument("--providers", "-p", type=Path, help="Provider/model YAML (default: providers.yaml)")
    parser.add_argument("--policy", choices=[p.value for p in ScorePolicy],
                        default=ScorePolicy.EXCLUDE_FAILED.value,
                        help="How providers with no successful model enter the overall score")
    parser.add_argument("--json", action="store_true", help="Print the report as JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show per-model progress")

    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        business = Business(
            name=args.name,
            type=args.business_type,
            location=args.location,
            website=args.website,
        )
    except ValidationError as e:
        console.print(f"[red]Invalid business: {escape(str(e))}[/red]")
        return 2

    try:
        cfg = load_provider_config(args.providers)
        report = check_visibility(
            business,
            cfg.table,
            complete=LiveCompletion(registry=cfg.registry),
            credentials=credentials_for(cfg.registry),
            policy=args.policy,
        )
    except ConfigurationError as e:
        console.print(f"[red]Configuration error: {escape(str(e))}[/red]")
        return 2

    if args.json:
        print(json.dumps({"business": business.to_dict(), **report.to_dict()}, indent=2))
    else:
        render_report(business, report)
    return 0


if __name__ == "__main__":
    sys.exit(cli())
