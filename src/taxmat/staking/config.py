from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from src.taxmat.staking.errors import ConfigurationError, UnrecognizedCurrencyError
from src.taxmat.staking.symbols import Currency, parse_currency


class CoinTrackingConfig(BaseModel):
    trade_group: str = "Staking"
    comment: str = "Staking reward"


class TaxmatConfig(BaseModel):
    # Settlement currency for the zero sell/fee legs of ledger-style exports.
    settlement_currency: Currency = Currency.USD
    coin_tracking: CoinTrackingConfig = Field(default_factory=CoinTrackingConfig)

    @field_validator("settlement_currency", mode="before")
    @classmethod
    def _currency(cls, v):
        if isinstance(v, str):
            return parse_currency(v)
        return v


def _candidate_paths() -> list[Path]:
    paths: list[Path] = []
    env_path = os.environ.get("TAXMAT_CONFIG", "").strip()
    if env_path:
        paths.append(Path(env_path))
    paths.append(Path("taxmat.yaml"))
    home = Path(os.path.expanduser("~"))
    paths.append(home / ".taxmat" / "taxmat.yaml")
    return paths


def load_taxmat_config(path: Optional[Path] = None) -> tuple[TaxmatConfig, Optional[str]]:
    """
    Load settings from the first YAML file found (explicit path, $TAXMAT_CONFIG,
    ./taxmat.yaml, ~/.taxmat/taxmat.yaml). Settings may sit under a top-level
    `taxmat:` key. No file means defaults.
    """
    if path is not None:
        if not path.exists():
            raise ConfigurationError(f"Config file not found: {path}")
        candidates = [path]
    else:
        candidates = _candidate_paths()
    for p in candidates:
        if not p.exists():
            continue
        try:
            data = yaml.safe_load(p.read_text()) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {p}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigurationError(f"Expected a mapping in {p}")
        try:
            return TaxmatConfig.model_validate(data.get("taxmat") or data), str(p)
        except (ValidationError, UnrecognizedCurrencyError) as e:
            raise ConfigurationError(f"Invalid config {p}: {e}") from e
    return TaxmatConfig(), None
