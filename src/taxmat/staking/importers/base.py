from __future__ import annotations

import csv
from abc import ABC, abstractmethod
from decimal import Decimal
from enum import Enum
from typing import Iterator, TextIO

from pydantic import BaseModel, ConfigDict, ValidationError

from src.taxmat.staking.errors import ConfigurationError, RowParseError
from src.taxmat.staking.exporters import OutputFormat
from src.taxmat.staking.symbols import Coin


class InputFormat(str, Enum):
    SUBSCAN = "subscan"
    KRAKEN = "kraken"
    STAKETAX = "staketax"

    @classmethod
    def parse(cls, value: str) -> "InputFormat":
        try:
            return cls((value or "").lower())
        except ValueError:
            raise ConfigurationError("Invalid input format!") from None


class StakingRecord(BaseModel):
    """One row of an exporter CSV. Only the event time and amount are used downstream."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    @abstractmethod
    def event_time(self) -> str: ...

    @abstractmethod
    def event_amount(self) -> Decimal: ...


def iter_csv_rows(f: TextIO) -> Iterator[tuple[int, dict[str, str]]]:
    """
    Yield (line number, row) pairs in file order. A row whose column count does not
    match the header is an error, not a best-effort parse.
    """
    reader = csv.DictReader(f)
    for r in reader:
        if None in r or any(v is None for v in r.values()):
            expected = len(reader.fieldnames or [])
            raise RowParseError(reader.line_num, f"expected {expected} columns, got a row of a different length")
        yield reader.line_num, r


class StakingImporter(ABC):
    format_name: str
    record_model: type[StakingRecord]
    output_formats: frozenset[OutputFormat] = frozenset({OutputFormat.BITCOIN_TAX})

    @property
    def fieldnames(self) -> list[str]:
        return [f.alias or name for name, f in self.record_model.model_fields.items()]

    def parse_row(self, row: dict[str, str], *, line: int) -> StakingRecord:
        try:
            return self.record_model.model_validate(row)
        except ValidationError as e:
            raise RowParseError(line, f"{self.format_name}: {e}") from e

    @abstractmethod
    def accepts(self, record: StakingRecord) -> bool: ...

    def coin_for(self, record: StakingRecord, default: Coin) -> Coin:
        return default

    def supports(self, output_format: OutputFormat) -> bool:
        return output_format in self.output_formats
