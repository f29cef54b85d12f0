"""
Stock Check — CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Load inputs from local files (never the network).
  4. Run the engine.
  5. Report result to stdout; write JSON/CSV unless ``--no-write``.

Install and run::

    pip install -e .
    stock-check --help
    stock-check validate-config
    stock-check factors
    stock-check demo --current-date 2026-02-14 --prediction-date 2026-02-15
    stock-check run --universe universe.csv --prices prices.json \\
        --current-date 2026-02-14 --prediction-date 2026-02-15
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    name="stock-check",
    help="Stock Check — deterministic end-of-day ranking and trade header engine.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from pydantic import ValidationError

    from stock_check.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except (ValidationError, ValueError) as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from stock_check.utils.logging import configure_logging
    configure_logging(config.logging)


def _execute_and_report(
    config,
    universe,
    price_map,
    current_date: str,
    prediction_date: str,
    manual_override: bool,
    output_dir: Optional[str],
    no_write: bool,
    as_json: bool,
) -> None:
    from stock_check.engine import StockCheckEngine, StockCheckRequest
    from stock_check.errors import StockCheckError
    from stock_check.reporting.export import write_display_csv, write_output_json
    from stock_check.reporting.formatters import format_stock_check_table

    engine = StockCheckEngine.from_app_config(config)
    try:
        report = engine.run(
            StockCheckRequest(
                current_date=current_date,
                prediction_date=prediction_date,
                universe=universe,
                price_map=price_map,
                manual_override=manual_override,
            )
        )
    except StockCheckError as exc:
        typer.echo(f"[ERROR] {type(exc).__name__}: {exc}", err=True)
        raise typer.Exit(code=1)

    if as_json:
        typer.echo(json.dumps(report.to_dict(), indent=2))
    else:
        typer.echo(format_stock_check_table(report))

    if no_write:
        return

    target = Path(output_dir or config.output.output_dir)
    json_path = write_output_json(report, target)
    csv_path = write_display_csv(report, target)
    typer.echo("", err=as_json)
    typer.echo(f"  JSON: {json_path}", err=as_json)
    typer.echo(f"  CSV:  {csv_path}", err=as_json)
    typer.echo("[OK] Stock check complete.", err=as_json)


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("run")
def run(
    universe_file: str = typer.Option(
        ..., "--universe", "-u", help="Universe file (.json or .csv)."
    ),
    prices_file: str = typer.Option(
        ..., "--prices", "-p", help="User-supplied EOD prices (.json or .csv)."
    ),
    current_date: str = typer.Option(..., "--current-date", help="As-of date (YYYY-MM-DD)."),
    prediction_date: str = typer.Option(..., "--prediction-date", help="Target date (YYYY-MM-DD)."),
    manual_override: bool = typer.Option(
        False, "--override", help="Force NO TRADE regardless of the computed header."
    ),
    output_dir: Optional[str] = typer.Option(
        None, "--output-dir", help="Override output directory from config."
    ),
    no_write: bool = typer.Option(False, "--no-write", help="Print only; write no files."),
    as_json: bool = typer.Option(False, "--json", help="Print the JSON document instead of a table."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Rank a universe file against a price file and print the results.

    \b
    Every output ticker (top 10 plus the required ticker) must have a
    positive price in the price file.  Missing data fails the run; nothing
    is fetched or defaulted.
    """
    from stock_check.ingestion.universe_file import load_price_map, load_universe

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    try:
        universe = load_universe(Path(universe_file))
        price_map = load_price_map(Path(prices_file))
    except (FileNotFoundError, ValueError) as exc:
        typer.echo(f"[ERROR] Input load failed:\n{exc}", err=True)
        raise typer.Exit(code=1)

    _execute_and_report(
        config, universe, price_map, current_date, prediction_date,
        manual_override, output_dir, no_write, as_json,
    )


@app.command("demo")
def demo(
    current_date: str = typer.Option(..., "--current-date", help="As-of date (YYYY-MM-DD)."),
    prediction_date: str = typer.Option(..., "--prediction-date", help="Target date (YYYY-MM-DD)."),
    size: int = typer.Option(250, "--size", help="Synthetic universe size."),
    price: float = typer.Option(100.0, "--price", help="Flat EOD price for every ticker."),
    manual_override: bool = typer.Option(False, "--override", help="Force NO TRADE."),
    output_dir: Optional[str] = typer.Option(None, "--output-dir", help="Override output directory."),
    no_write: bool = typer.Option(False, "--no-write", help="Print only; write no files."),
    as_json: bool = typer.Option(False, "--json", help="Print the JSON document instead of a table."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Run against the deterministic synthetic universe (offline demo)."""
    from stock_check.ingestion.mock_universe import make_mock_universe, mock_price_map

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    universe = make_mock_universe(size, required_ticker=config.engine.required_ticker)
    price_map = mock_price_map((e.ticker for e in universe), price)

    _execute_and_report(
        config, universe, price_map, current_date, prediction_date,
        manual_override, output_dir, no_write, as_json,
    )


@app.command("factors")
def factors() -> None:
    """Print the locked factor table and weights."""
    from stock_check.factors.spec import get_spec
    from stock_check.reporting.formatters import format_factor_table

    typer.echo(format_factor_table(get_spec()))


@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(
        None, "--config", help="Path to TOML config file (default: config/default.toml)."
    ),
    show_full: bool = typer.Option(False, "--full", help="Print full config as JSON."),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config fails validation.
    """
    config = _load_config_or_exit(config_path)

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Model version:     {config.engine.model_version}")
    typer.echo(f"  Min universe size: {config.engine.min_universe_size}")
    typer.echo(f"  Required ticker:   {config.engine.required_ticker}")
    typer.echo(f"  Top N:             {config.engine.top_n}")
    typer.echo(
        f"  TRADE thresholds:  avg >= {config.decision.min_average_growth_pct}, "
        f"dispersion >= {config.decision.min_dispersion_pct}"
    )
    typer.echo(f"  Sector warning at: {config.decision.sector_concentration_threshold}")
    typer.echo(f"  Output dir:        {config.output.output_dir}")
    typer.echo(f"  Log level:         {config.logging.level}")
    typer.echo(f"  Debug mode:        {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config valid.")


if __name__ == "__main__":
    app()
