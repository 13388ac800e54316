from __future__ import annotations

import csv
import datetime as dt
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import ClassVar, TextIO, Union

from src.taxmat.staking.errors import ConfigurationError
from src.taxmat.staking.normalize import format_decimal, format_timestamp
from src.taxmat.staking.symbols import Coin, Currency, tax_label


class OutputFormat(str, Enum):
    BITCOIN_TAX = "bitcointax"
    COIN_TRACKING = "cointracking"

    @classmethod
    def parse(cls, value: str) -> "OutputFormat":
        fmt = _OUTPUT_FORMAT_ALIASES.get((value or "").lower())
        if fmt is None:
            raise ConfigurationError("Invalid output format!")
        return fmt


_OUTPUT_FORMAT_ALIASES: dict[str, OutputFormat] = {
    "bitcointax": OutputFormat.BITCOIN_TAX,
    "bitcoin.tax": OutputFormat.BITCOIN_TAX,
    "cointracking": OutputFormat.COIN_TRACKING,
    "coin tracking": OutputFormat.COIN_TRACKING,
}

_ZERO = Decimal("0.0")


@dataclass(frozen=True)
class BitcoinTaxRow:
    """
    bitcoin.tax income import row.

    Sample:
      Date,Action,Account,Symbol,Volume
      2021-01-05 12:00:00,INCOME,DOT2 STAKING,DOT,1.2345
    """

    HEADERS: ClassVar[tuple[str, ...]] = ("Date", "Action", "Account", "Symbol", "Volume")

    date: dt.datetime
    action: str
    account: str
    symbol: Coin
    volume: Decimal

    @classmethod
    def create(cls, date: dt.datetime, volume: Decimal, symbol: Coin) -> "BitcoinTaxRow":
        return cls(
            date=date,
            action="INCOME",
            account=f"{tax_label(symbol)} STAKING",
            symbol=symbol,
            volume=volume,
        )

    def to_row(self) -> list[str]:
        return [format_timestamp(self.date), self.action, self.account, self.symbol.value, format_decimal(self.volume)]


@dataclass(frozen=True)
class CoinTrackingRow:
    """
    CoinTracking "Income" ledger row. Sell and fee legs are always zero and no
    fiat value is computed; CoinTracking fills the account-currency value itself.
    """

    HEADERS: ClassVar[tuple[str, ...]] = (
        "Type",
        "Buy Amount",
        "Buy Currency",
        "Sell Amount",
        "Sell Currency",
        "Fee",
        "Fee Currency",
        "Exchange",
        "Trade-Group",
        "Comment",
        "Date",
        "Tx-ID",
        "Buy Value in Account Currency",
    )

    tx_type: str
    buy_amount: Decimal
    buy_currency: str
    sell_amount: Decimal
    sell_currency: Currency
    fee: Decimal
    fee_currency: Currency
    exchange: str
    trade_group: str
    comment: str
    date: dt.datetime
    tx_id: str
    buy_value: Decimal

    @classmethod
    def create(
        cls,
        buy_amount: Decimal,
        buy_currency: str,
        trade_group: str,
        comment: str,
        date: dt.datetime,
        *,
        currency: Currency = Currency.USD,
    ) -> "CoinTrackingRow":
        return cls(
            tx_type="Income",
            buy_amount=buy_amount,
            buy_currency=buy_currency,
            sell_amount=_ZERO,
            sell_currency=currency,
            fee=_ZERO,
            fee_currency=currency,
            exchange="",
            trade_group=trade_group,
            comment=comment,
            date=date,
            tx_id="",
            buy_value=_ZERO,
        )

    def to_row(self) -> list[str]:
        return [
            self.tx_type,
            format_decimal(self.buy_amount),
            self.buy_currency,
            format_decimal(self.sell_amount),
            self.sell_currency.value,
            format_decimal(self.fee),
            self.fee_currency.value,
            self.exchange,
            self.trade_group,
            self.comment,
            format_timestamp(self.date),
            self.tx_id,
            format_decimal(self.buy_value),
        ]


OutputRecord = Union[BitcoinTaxRow, CoinTrackingRow]

_ROW_TYPES: dict[OutputFormat, type] = {
    OutputFormat.BITCOIN_TAX: BitcoinTaxRow,
    OutputFormat.COIN_TRACKING: CoinTrackingRow,
}


def headers_for(output_format: OutputFormat) -> tuple[str, ...]:
    return _ROW_TYPES[output_format].HEADERS


class RecordWriter:
    def __init__(self, f: TextIO, output_format: OutputFormat):
        self.output_format = output_format
        self._w = csv.writer(f, lineterminator="\n")
        self.rows_written = 0

    def write_header(self) -> None:
        self._w.writerow(headers_for(self.output_format))

    def write(self, record: OutputRecord) -> None:
        if not isinstance(record, _ROW_TYPES[self.output_format]):
            raise TypeError(f"{type(record).__name__} does not match output format {self.output_format.value}")
        self._w.writerow(record.to_row())
        self.rows_written += 1
