"""Command line entry points for SavingsCircle."""

from __future__ import annotations

import calendar
from datetime import date
from pathlib import Path

import click

from .config import BaseConfig
from .domain.repositories import CONTRIBUTIONS, MEMBERS
from .logging_config import setup_logging


def _load(config: BaseConfig):
    from .desktop.context import create_app_context

    ctx = create_app_context(config)
    return ctx.store.snapshot(MEMBERS), ctx.store.snapshot(CONTRIBUTIONS)


def _period_options(func):
    today = date.today()
    func = click.option("--year", type=int, default=today.year, show_default=True)(func)
    func = click.option(
        "--month", type=click.IntRange(1, 12), default=today.month, show_default=True
    )(func)
    return func


@click.group()
def cli() -> None:
    """Group savings tracker."""


@cli.command("report")
@_period_options
def report_command(month: int, year: int) -> None:
    """Print the monthly compliance report."""

    from .services.aggregation import monthly_report, total_savings
    from .services.money import format_amount

    config = BaseConfig()
    members, contributions = _load(config)
    report = monthly_report(members, contributions, month, year, config.MONTHLY_EXPECTED_AMOUNT)
    symbol = config.CURRENCY_SYMBOL

    click.echo(f"{calendar.month_name[month]} {year}")
    click.echo(f"Total savings: {format_amount(total_savings(contributions), symbol)}")
    if report is None:
        raise click.ClickException("Invalid month/year selection")
    width = max([len(row.name) for row in report.member_reports] + [6])
    for row in report.member_reports:
        click.echo(
            f"  {row.name:<{width}}  {format_amount(row.paid_amount, symbol):>14}"
            f"  {format_amount(row.balance, symbol):>14}  {row.status}"
        )
    click.echo(f"Expected:  {format_amount(report.expected_total, symbol)}")
    click.echo(f"Collected: {format_amount(report.total_collected, symbol)}")
    click.echo(f"Shortfall: {format_amount(report.shortfall, symbol)}")


@cli.command("export")
@_period_options
@click.option("--output-dir", type=click.Path(file_okay=False, path_type=Path), default=None)
def export_command(month: int, year: int, output_dir: Path | None) -> None:
    """Write the report CSV, report chart PNG and full ledger CSV."""

    from .services.aggregation import monthly_report
    from .services.export_csv import export_contributions_csv, export_report_csv
    from .services.reports import export_report_png

    config = BaseConfig()
    setup_logging(config)
    members, contributions = _load(config)
    report = monthly_report(members, contributions, month, year, config.MONTHLY_EXPECTED_AMOUNT)
    if report is None:
        raise click.ClickException("Invalid month/year selection")
    target = output_dir or config.exports_dir
    period = f"{year:04d}-{month:02d}"
    for path in (
        export_report_csv(report=report, output_path=target / f"report_{period}.csv"),
        export_report_png(
            report=report, output_path=target / f"report_{period}.png", currency_symbol=config.CURRENCY_SYMBOL
        ),
        export_contributions_csv(contributions=contributions, output_path=target / "ledger.csv"),
    ):
        click.echo(f"Export written: {path}")


@cli.command("desktop")
def desktop_command() -> None:
    """Launch the admin dashboard."""

    import flet as ft

    from .desktop.app import main

    ft.app(target=main)


@cli.command("viewer")
def viewer_command() -> None:
    """Launch the read-only viewer."""

    import flet as ft

    from .desktop.app import viewer_main

    ft.app(target=viewer_main)


if __name__ == "__main__":  # pragma: no cover
    cli()
