from __future__ import annotations


class TaxmatError(Exception):
    pass


class ConfigurationError(TaxmatError):
    pass


class UnrecognizedSymbolError(TaxmatError):
    pass


class UnrecognizedCurrencyError(UnrecognizedSymbolError):
    pass


class UnsupportedFormatError(TaxmatError):
    pass


class RowParseError(TaxmatError):
    def __init__(self, line: int, message: str):
        super().__init__(f"line {line}: {message}")
        self.line = line
