from __future__ import annotations

from decimal import Decimal
from typing import Optional

from pydantic import Field, field_validator

from src.taxmat.staking.importers.base import StakingImporter, StakingRecord
from src.taxmat.staking.normalize import none_if_blank, parse_flag


class StakeTaxEntry(StakingRecord):
    timestamp: str
    tx_type: str
    taxable: bool
    received_amount: Optional[Decimal] = None
    received_currency: str
    sent_amount: Optional[Decimal] = None
    sent_currency: str
    fee: Optional[Decimal] = None
    fee_currency: str
    comment: str
    tx_id: str = Field(alias="txid")
    url: str
    exchange: str
    wallet_address: str

    @field_validator("taxable", mode="before")
    @classmethod
    def _taxable_flag(cls, v):
        if isinstance(v, str):
            return parse_flag(v)
        return v

    @field_validator("received_amount", "sent_amount", "fee", mode="before")
    @classmethod
    def _optional_numbers_blank_to_none(cls, v):
        return none_if_blank(v)

    def event_time(self) -> str:
        return self.timestamp

    def event_amount(self) -> Decimal:
        if self.received_amount is None:
            return Decimal("0")
        return self.received_amount


class StakeTaxImporter(StakingImporter):
    """
    stake.tax export. `taxable` is validated but does not filter rows.

    Sample headers:
      timestamp, tx_type, taxable, received_amount, received_currency, sent_amount,
      sent_currency, fee, fee_currency, comment, txid, url, exchange, wallet_address
    """

    format_name = "staketax"
    record_model = StakeTaxEntry

    def accepts(self, record: StakingRecord) -> bool:
        return record.tx_type == "STAKING"
