from __future__ import annotations

from enum import Enum

from src.taxmat.staking.errors import UnrecognizedCurrencyError, UnrecognizedSymbolError


class Coin(str, Enum):
    DOT = "DOT"
    KSM = "KSM"
    ATOM = "ATOM"
    ETH = "ETH"
    SOL = "SOL"
    KAVA = "KAVA"
    ADA = "ADA"
    XTZ = "XTZ"


class Currency(str, Enum):
    USD = "USD"
    GBP = "GBP"
    EUR = "EUR"


# Adding a coin means adding both the enum member and its aliases here.
_COIN_ALIASES: dict[str, Coin] = {
    "dot": Coin.DOT,
    "dot.s": Coin.DOT,
    "ksm": Coin.KSM,
    "ksm.s": Coin.KSM,
    "atom": Coin.ATOM,
    "atom.s": Coin.ATOM,
    "eth": Coin.ETH,
    "eth.s": Coin.ETH,
    "eth2": Coin.ETH,
    "eth2.s": Coin.ETH,
    "sol": Coin.SOL,
    "sol.s": Coin.SOL,
    "kava": Coin.KAVA,
    "kava.s": Coin.KAVA,
    "ada": Coin.ADA,
    "ada.s": Coin.ADA,
    "xtz": Coin.XTZ,
    "xtz.s": Coin.XTZ,
}

_CURRENCY_ALIASES: dict[str, Currency] = {
    "usd": Currency.USD,
    "gbp": Currency.GBP,
    "eur": Currency.EUR,
}

# bitcoin.tax / CoinTracking ticker overrides; everything else uses its own name.
_TAX_LABELS: dict[Coin, str] = {
    Coin.DOT: "DOT2",
}


def parse_coin(value: str) -> Coin:
    """
    Case-insensitive lookup of a coin symbol, including staked variants such as
    "DOT.S" or "ETH2.S" as exported by Kraken. Unknown symbols are an error.
    """
    coin = _COIN_ALIASES.get((value or "").lower())
    if coin is None:
        raise UnrecognizedSymbolError(f"Invalid coin type: {value!r}")
    return coin


def parse_currency(value: str) -> Currency:
    cur = _CURRENCY_ALIASES.get((value or "").lower())
    if cur is None:
        raise UnrecognizedCurrencyError(f"Invalid currency type: {value!r}")
    return cur


def tax_label(coin: Coin) -> str:
    return _TAX_LABELS.get(coin, coin.value)
