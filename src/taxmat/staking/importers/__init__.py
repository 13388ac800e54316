from __future__ import annotations

from src.taxmat.staking.importers.base import InputFormat, StakingImporter
from src.taxmat.staking.importers.kraken import KrakenImporter
from src.taxmat.staking.importers.staketax import StakeTaxImporter
from src.taxmat.staking.importers.subscan import SubscanImporter


def default_importers() -> list[StakingImporter]:
    return [SubscanImporter(), KrakenImporter(), StakeTaxImporter()]


def importer_for(input_format: InputFormat) -> StakingImporter:
    for imp in default_importers():
        if imp.format_name == input_format.value:
            return imp
    raise ValueError(f"No importer for format: {input_format.value}")
