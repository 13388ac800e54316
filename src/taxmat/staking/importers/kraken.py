from __future__ import annotations

from decimal import Decimal

from pydantic import Field

from src.taxmat.staking.importers.base import StakingImporter, StakingRecord
from src.taxmat.staking.symbols import Coin, parse_coin


class KrakenLedgerEntry(StakingRecord):
    txid: str
    refid: str
    date: str = Field(alias="time")
    action: str = Field(alias="type")
    aclass: str
    asset: str
    amount: Decimal
    fee: Decimal

    def event_time(self) -> str:
        return self.date

    def event_amount(self) -> Decimal:
        return self.amount


class KrakenImporter(StakingImporter):
    """
    Kraken ledger export. A single file mixes assets, so the coin is taken from
    each row's `asset` column (e.g. DOT.S, ETH2.S) instead of the run's coin.

    Sample headers:
      txid, refid, time, type, subtype, aclass, asset, amount, fee, balance
    """

    format_name = "kraken"
    record_model = KrakenLedgerEntry

    def accepts(self, record: StakingRecord) -> bool:
        return record.action == "staking"

    def coin_for(self, record: StakingRecord, default: Coin) -> Coin:
        return parse_coin(record.asset)
