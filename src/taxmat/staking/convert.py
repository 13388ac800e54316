from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from typing import TextIO

from pydantic import BaseModel

from src.taxmat.staking.errors import RowParseError, UnrecognizedSymbolError, UnsupportedFormatError
from src.taxmat.staking.exporters import BitcoinTaxRow, CoinTrackingRow, OutputFormat, OutputRecord, RecordWriter
from src.taxmat.staking.importers import importer_for
from src.taxmat.staking.importers.base import InputFormat, StakingImporter, iter_csv_rows
from src.taxmat.staking.normalize import parse_timestamp
from src.taxmat.staking.periods import DateWindow
from src.taxmat.staking.symbols import Coin, Currency, tax_label


log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConversionRequest:
    input_format: InputFormat
    output_format: OutputFormat
    coin: Coin
    window: DateWindow
    trade_group: str = "Staking"
    comment: str = "Staking reward"
    settlement_currency: Currency = Currency.USD


class ConversionResult(BaseModel):
    input_format: str
    output_format: str
    rows_read: int
    rows_written: int
    rows_skipped: int


def build_record(request: ConversionRequest, *, date: dt.datetime, amount: Decimal, coin: Coin) -> OutputRecord:
    if request.output_format == OutputFormat.BITCOIN_TAX:
        return BitcoinTaxRow.create(date, amount, coin)
    return CoinTrackingRow.create(
        amount,
        tax_label(coin),
        request.trade_group,
        request.comment,
        date,
        currency=request.settlement_currency,
    )


def _convert_rows(
    source: TextIO,
    writer: RecordWriter,
    *,
    importer: StakingImporter,
    request: ConversionRequest,
) -> int:
    rows_read = 0
    for line, row in iter_csv_rows(source):
        rows_read += 1
        record = importer.parse_row(row, line=line)
        try:
            when = parse_timestamp(record.event_time())
        except ValueError as e:
            raise RowParseError(line, str(e)) from e

        if not request.window.contains(when):
            log.debug("line %d: %s outside %s..%s", line, when, request.window.start, request.window.end)
            continue
        if not importer.accepts(record):
            log.debug("line %d: not a staking reward, skipped", line)
            continue

        # Compatibility is only checked once a record actually needs converting.
        if not importer.supports(request.output_format):
            raise UnsupportedFormatError(
                f"format combination not supported: {importer.format_name} -> {request.output_format.value}"
            )
        try:
            coin = importer.coin_for(record, request.coin)
        except UnrecognizedSymbolError as e:
            raise RowParseError(line, str(e)) from e
        writer.write(build_record(request, date=when, amount=record.event_amount(), coin=coin))
    return rows_read


def convert_stream(source: TextIO, sink: TextIO, request: ConversionRequest) -> ConversionResult:
    """
    Single ordered pass over `source`: parse each row with the input format's schema,
    keep rows inside the window that the format considers staking income, and write
    them to `sink` in the requested output format (header first).

    Any malformed row aborts the whole conversion; rows already written stay in `sink`.
    """
    importer = importer_for(request.input_format)
    writer = RecordWriter(sink, request.output_format)
    writer.write_header()
    rows_read = _convert_rows(source, writer, importer=importer, request=request)
    result = ConversionResult(
        input_format=request.input_format.value,
        output_format=request.output_format.value,
        rows_read=rows_read,
        rows_written=writer.rows_written,
        rows_skipped=rows_read - writer.rows_written,
    )
    log.info(
        "Converted %d of %d %s rows to %s",
        result.rows_written,
        result.rows_read,
        result.input_format,
        result.output_format,
    )
    return result


def convert_file(input_path: Path, output_path: Path, request: ConversionRequest) -> ConversionResult:
    with input_path.open("r", encoding="utf-8-sig", newline="") as src, output_path.open(
        "w", encoding="utf-8", newline=""
    ) as dst:
        return convert_stream(src, dst, request)
