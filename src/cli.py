from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv

from src.taxmat.staking.config import load_taxmat_config
from src.taxmat.staking.convert import ConversionRequest, convert_file
from src.taxmat.staking.errors import ConfigurationError, TaxmatError, UnrecognizedSymbolError
from src.taxmat.staking.exporters import OutputFormat
from src.taxmat.staking.importers.base import InputFormat
from src.taxmat.staking.periods import parse_quarter, resolve_date_window
from src.taxmat.staking.symbols import parse_coin

app = typer.Typer(help="Polkadot staking csv tax formatter.", add_completion=False)


@app.command()
def convert_cmd(
    input: Path = typer.Argument(..., dir_okay=False, help="input CSV file"),
    output: Path = typer.Argument(..., dir_okay=False, help="output CSV file name"),
    input_format: str = typer.Option("subscan", "--input-format", "-i", help="subscan|kraken|staketax"),
    output_format: str = typer.Option(
        "bitcointax", "--output-format", "-o", help="bitcointax|bitcoin.tax|cointracking|coin tracking"
    ),
    coin: str = typer.Option("DOT", "--coin", "-c", help="Coin symbol (ignored for kraken: taken from each row)"),
    year: Optional[int] = typer.Option(None, "--year", "-y", help="year to parse results from (default: current)"),
    quarter: str = typer.Option("all", "--quarter", "-q", help="Q1|Q2|Q3|Q4|ALL|1|2|3|4"),
    config: Optional[Path] = typer.Option(None, "--config", dir_okay=False, help="taxmat.yaml path override"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    load_dotenv()
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        in_fmt = InputFormat.parse(input_format)
    except ConfigurationError as e:
        typer.echo(str(e))
        raise typer.Exit(code=1)
    try:
        out_fmt = OutputFormat.parse(output_format)
    except ConfigurationError as e:
        typer.echo(str(e))
        raise typer.Exit(code=1)

    try:
        cfg, cfg_path = load_taxmat_config(config)
        run_coin = parse_coin(coin)
        window = resolve_date_window(parse_quarter(quarter), year)
    except (ConfigurationError, UnrecognizedSymbolError, OSError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    if cfg_path:
        logging.getLogger(__name__).info("Using config: %s", cfg_path)

    request = ConversionRequest(
        input_format=in_fmt,
        output_format=out_fmt,
        coin=run_coin,
        window=window,
        trade_group=cfg.coin_tracking.trade_group,
        comment=cfg.coin_tracking.comment,
        settlement_currency=cfg.settlement_currency,
    )
    try:
        result = convert_file(input, output, request)
    except (TaxmatError, OSError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    typer.echo(
        f"Wrote {result.rows_written} of {result.rows_read} rows to {output} "
        f"({window.start:%Y-%m-%d} to {window.end:%Y-%m-%d})"
    )


if __name__ == "__main__":
    app()
