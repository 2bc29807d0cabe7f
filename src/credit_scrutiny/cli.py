"""CLI for the credit scrutiny engine.

Commands:
- sectors: List taxonomy sectors
- industries: List industries within a sector
- sub-industries: Show sub-industries of an industry with score and points
- lookup: Resolve the best taxonomy entry for a (partial) classification
- score: Run a bankability evaluation and print verdict and breakdown
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Protocol

import typer
from rich import print as rprint
from rich.table import Table

from . import __version__
from .application.taxonomy_catalog import registry_for_config
from .application.underwriting import run_scrutiny
from .config import ScrutinyConfig
from .config_file import KNOWN_ROLES, load_scrutiny_config_file
from .domain.classification import (
    ClassificationSelection,
    fill_missing_parents,
    resolve_selection,
)
from .domain.scoring import (
    DebtLevel,
    EstateType,
    OwnershipType,
    PaymentHistory,
    ScoringInputs,
    ScrutinyResult,
)
from .domain.taxonomy import TaxonomyEntry, TaxonomyRegistry, credit_score_band, priority_band
from .exceptions import InvalidSelectionError, ScrutinyAccessDeniedError, ScrutinyError
from .observability.logging import set_log_level
from .protocols import FileSystem

_DEFAULT_INPUTS = ScoringInputs.defaults()


class DependenciesBuilder(Protocol):
    """Protocol for constructing CLI dependencies."""

    def __call__(self, *, config: ScrutinyConfig) -> CliDependencies:
        """Build dependencies for CLI commands."""
        ...


@dataclass(frozen=True)
class CliDependencies:
    """Concrete dependencies required by the CLI."""

    fs: FileSystem


@dataclass(frozen=True)
class CliContext:
    """Runtime CLI context for a single command invocation."""

    config: ScrutinyConfig
    deps: CliDependencies

    def registry(self) -> TaxonomyRegistry:
        """Return the taxonomy selected by configuration."""
        try:
            return registry_for_config(config=self.config, fs=self.deps.fs)
        except ScrutinyError as exc:
            raise typer.BadParameter(str(exc)) from exc


class CliContextNotInitialisedError(typer.BadParameter):
    """Raised when CLI context is missing."""

    def __init__(self) -> None:
        super().__init__("CLI context is not initialised. Use the credit-scrutiny entry point.")


def _get_context(ctx: typer.Context) -> CliContext:
    if not isinstance(ctx.obj, CliContext):
        raise CliContextNotInitialisedError()
    return ctx.obj


def _version_callback(value: bool) -> None:
    if value:
        rprint(f"credit-scrutiny {__version__}")
        raise typer.Exit()


def _parse_role_option(role: str | None) -> str | None:
    if role is None:
        return None
    text = role.strip().lower()
    if text not in KNOWN_ROLES:
        raise typer.BadParameter(
            f"Unknown role '{role}'. Expected one of: {', '.join(sorted(KNOWN_ROLES))}.",
            param_hint="--role",
        )
    return text


def _print_entry(entry: TaxonomyEntry) -> None:
    rprint(f"[bold]{entry.sub_industry}[/bold]")
    rprint(f"  Sector:   {entry.sector}")
    rprint(f"  Industry: {entry.industry}")
    rprint(f"  Base credit score: {entry.score}/10 ({credit_score_band(entry.score)})")
    rprint(f"  Priority points:   {entry.points}/5 ({priority_band(entry.points)})")


def _print_result(result: ScrutinyResult) -> None:
    match = result.taxonomy_match
    if match is not None:
        rprint(
            f"Classification: {match.sector} > {match.industry} > {match.sub_industry} "
            f"(score {match.score}/10, points {match.points}/5)"
        )
    else:
        rprint("[yellow]Classification: unclassified (neutral base)[/yellow]")

    rprint(f"[bold]Bankability: {result.score}%[/bold]")
    rprint(f"Verdict: [bold]{result.label}[/bold] ({result.tier.value})")
    rprint(f"  {result.guidance}")
    rprint(f"  {result.underwriting_note}")

    breakdown = result.breakdown
    table = Table(title="Score breakdown")
    table.add_column("Category")
    table.add_column("Points", justify="right")
    table.add_row("Sector base score", f"{breakdown.base_score}")
    table.add_row("Longevity bonus", f"{breakdown.longevity_bonus:+d}")
    table.add_row("Ownership bonus", f"{breakdown.ownership_bonus:+d}")
    table.add_row("Estate security", f"{breakdown.estate_bonus:+d}")
    table.add_row("Financial overlay", f"{breakdown.financial_overlay:+d}")
    table.add_row("Payment history", f"{breakdown.payment_bonus:+d}")
    table.add_row("Total (clamped)", f"{result.score}")
    rprint(table)


def create_app(deps_builder: DependenciesBuilder) -> typer.Typer:
    """Create a Typer app wired with the provided dependencies builder."""
    app = typer.Typer(
        add_completion=False,
        help="Thai sector taxonomy lookup and counterparty bankability scoring.",
    )

    @app.callback()
    def main(
        ctx: typer.Context,
        config_path: Annotated[
            Path | None,
            typer.Option(
                "--config",
                "-c",
                help="TOML config file (overrides environment values)",
            ),
        ] = None,
        taxonomy_path: Annotated[
            str | None,
            typer.Option(
                "--taxonomy",
                help="Custom taxonomy catalogue JSON (default: bundled Thai taxonomy)",
            ),
        ] = None,
        version: Annotated[
            bool,
            typer.Option(
                "--version",
                callback=_version_callback,
                is_eager=True,
                help="Show the package version and exit",
            ),
        ] = False,
    ) -> None:
        """Initialise CLI context."""
        _ = version
        config = ScrutinyConfig.from_env()
        deps = deps_builder(config=config)
        if config_path is not None:
            try:
                file_config = load_scrutiny_config_file(path=config_path, fs=deps.fs)
            except ScrutinyError as exc:
                raise typer.BadParameter(str(exc), param_hint="--config") from exc
            config = config.with_file_overrides(file_config)
        config = config.with_overrides(taxonomy_path=taxonomy_path)
        set_log_level(config.log_level)
        ctx.obj = CliContext(config=config, deps=deps)

    @app.command()
    def sectors(ctx: typer.Context) -> None:
        """List taxonomy sectors."""
        registry = _get_context(ctx).registry()
        for sector in registry.get_sectors():
            rprint(f"  {sector}")

    @app.command()
    def industries(
        ctx: typer.Context,
        sector: Annotated[str, typer.Argument(help="Sector name, e.g. 'Energy & Utilities'")],
    ) -> None:
        """List industries within a sector."""
        registry = _get_context(ctx).registry()
        names = registry.get_industries(sector)
        if not names:
            rprint(f"[yellow]No industries listed for sector '{sector}'[/yellow]")
            raise typer.Exit(code=1)
        for name in names:
            rprint(f"  {name}")

    @app.command(name="sub-industries")
    def sub_industries(
        ctx: typer.Context,
        industry: Annotated[str, typer.Argument(help="Industry name, e.g. 'Power generation'")],
    ) -> None:
        """Show sub-industries of an industry with base score and priority points."""
        registry = _get_context(ctx).registry()
        options = registry.get_sub_industries(industry)
        if not options:
            rprint(f"[yellow]No sub-industries listed for industry '{industry}'[/yellow]")
            raise typer.Exit(code=1)
        table = Table(title=industry)
        table.add_column("Sub-industry")
        table.add_column("Score", justify="right")
        table.add_column("Points", justify="right")
        for option in options:
            table.add_row(option.name, f"{option.score}/10", f"{option.points}/5")
        rprint(table)

    @app.command()
    def lookup(
        ctx: typer.Context,
        sector: Annotated[str | None, typer.Option("--sector", "-s")] = None,
        industry: Annotated[str | None, typer.Option("--industry", "-i")] = None,
        sub_industry: Annotated[str | None, typer.Option("--sub-industry", "-u")] = None,
    ) -> None:
        """Resolve the most specific taxonomy entry for the given labels."""
        registry = _get_context(ctx).registry()
        entry = registry.find_taxonomy(sector, industry, sub_industry)
        if entry is None:
            rprint("[yellow]No taxonomy entry matches[/yellow]")
            raise typer.Exit(code=1)
        _print_entry(entry)

    @app.command()
    def score(
        ctx: typer.Context,
        sector: Annotated[str | None, typer.Option("--sector", "-s")] = None,
        industry: Annotated[str | None, typer.Option("--industry", "-i")] = None,
        sub_industry: Annotated[str | None, typer.Option("--sub-industry", "-u")] = None,
        years: Annotated[
            int,
            typer.Option("--years", "-y", help="Years in business"),
        ] = _DEFAULT_INPUTS.years_in_business,
        ownership: Annotated[
            OwnershipType,
            typer.Option("--ownership", help="Ownership / structure"),
        ] = _DEFAULT_INPUTS.ownership_type,
        estate: Annotated[
            EstateType,
            typer.Option("--estate", help="Site / industrial estate type"),
        ] = _DEFAULT_INPUTS.estate_type,
        debt: Annotated[
            DebtLevel,
            typer.Option("--debt", help="Debt level (Low: D/E < 1, High: D/E > 2)"),
        ] = _DEFAULT_INPUTS.debt_level,
        payment: Annotated[
            PaymentHistory,
            typer.Option("--payment", help="Payment history"),
        ] = _DEFAULT_INPUTS.payment_history,
        financials: Annotated[
            bool,
            typer.Option("--financials/--no-financials", help="Audited financials available"),
        ] = _DEFAULT_INPUTS.financials_available,
        role: Annotated[
            str | None,
            typer.Option("--role", help="Viewer role (default: SCRUTINY_VIEWER_ROLE)"),
        ] = None,
    ) -> None:
        """Score a counterparty's bankability and print the verdict."""
        state = _get_context(ctx)
        config = state.config.with_overrides(viewer_role=_parse_role_option(role))
        registry = state.registry()
        stored = ClassificationSelection.from_record(sector, industry, sub_industry)
        stored = fill_missing_parents(stored, registry=registry)
        try:
            selection = resolve_selection(
                sector=stored.sector,
                industry=stored.industry,
                sub_industry=stored.sub_industry,
                registry=registry,
            )
        except InvalidSelectionError as exc:
            raise typer.BadParameter(str(exc)) from exc

        inputs = ScoringInputs(
            years_in_business=years,
            ownership_type=ownership,
            estate_type=estate,
            debt_level=debt,
            payment_history=payment,
            financials_available=financials,
        )
        try:
            result = run_scrutiny(
                selection=selection,
                inputs=inputs,
                viewer_role=config.viewer_role,
                registry=registry,
            )
        except ScrutinyAccessDeniedError as exc:
            rprint(f"[red]{exc}[/red]")
            raise typer.Exit(code=1) from exc
        _print_result(result)

    _ = (main, sectors, industries, sub_industries, lookup, score)

    return app
