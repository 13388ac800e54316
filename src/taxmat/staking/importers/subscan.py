from __future__ import annotations

from decimal import Decimal

from pydantic import Field

from src.taxmat.staking.exporters import OutputFormat
from src.taxmat.staking.importers.base import StakingImporter, StakingRecord


class SubscanReward(StakingRecord):
    event_id: str = Field(alias="Event Index")
    date: str = Field(alias="Date")
    block: int = Field(alias="Block")
    extrinsic: str = Field(alias="Extrinsic Index")
    amount: Decimal = Field(alias="Value")
    action: str = Field(alias="Action")

    def event_time(self) -> str:
        return self.date

    def event_amount(self) -> Decimal:
        return self.amount


class SubscanImporter(StakingImporter):
    """
    Subscan reward/slash export (Polkadot, Kusama).

    Sample headers:
      Event Index, Date, Block, Extrinsic Index, Value, Action
    """

    format_name = "subscan"
    record_model = SubscanReward
    output_formats = frozenset({OutputFormat.BITCOIN_TAX, OutputFormat.COIN_TRACKING})

    def accepts(self, record: StakingRecord) -> bool:
        # No Action filter: every row in the window is treated as a reward.
        return True
