from __future__ import annotations

import io
from decimal import Decimal
from pathlib import Path

import pytest

from src.taxmat.staking.errors import ConfigurationError, RowParseError
from src.taxmat.staking.exporters import OutputFormat
from src.taxmat.staking.importers import default_importers, importer_for
from src.taxmat.staking.importers.base import InputFormat, iter_csv_rows
from src.taxmat.staking.importers.kraken import KrakenImporter
from src.taxmat.staking.importers.staketax import StakeTaxImporter
from src.taxmat.staking.importers.subscan import SubscanImporter
from src.taxmat.staking.symbols import Coin


def _rows(path: Path) -> list[tuple[int, dict[str, str]]]:
    with path.open(newline="") as f:
        return list(iter_csv_rows(f))


def test_input_format_parse() -> None:
    assert InputFormat.parse("Subscan") == InputFormat.SUBSCAN
    assert InputFormat.parse("KRAKEN") == InputFormat.KRAKEN
    assert InputFormat.parse("staketax") == InputFormat.STAKETAX
    with pytest.raises(ConfigurationError, match="Invalid input format!"):
        InputFormat.parse("coinbase")


def test_importer_for_each_format() -> None:
    assert [i.format_name for i in default_importers()] == ["subscan", "kraken", "staketax"]
    for fmt in InputFormat:
        assert importer_for(fmt).format_name == fmt.value


def test_parse_subscan_sample(fixtures_dir: Path) -> None:
    imp = SubscanImporter()
    rows = _rows(fixtures_dir / "subscan_sample.csv")
    assert len(rows) == 5
    line, row = rows[0]
    assert line == 2
    rec = imp.parse_row(row, line=line)
    assert rec.event_time() == "2021-01-01 00:00:00"
    assert rec.event_amount() == Decimal("1.2345")
    assert rec.block == 3525461
    assert rec.extrinsic == "3525461-2"
    assert imp.accepts(rec)
    assert imp.coin_for(rec, Coin.KSM) == Coin.KSM
    assert imp.supports(OutputFormat.COIN_TRACKING)


def test_subscan_accepts_any_action() -> None:
    imp = SubscanImporter()
    rec = imp.parse_row(
        {
            "Event Index": "1-1",
            "Date": "2021-01-01 00:00:00",
            "Block": "1",
            "Extrinsic Index": "1-0",
            "Value": "-0.3",
            "Action": "Slash",
        },
        line=2,
    )
    assert imp.accepts(rec)


def test_subscan_fieldnames_use_export_headers() -> None:
    assert SubscanImporter().fieldnames == ["Event Index", "Date", "Block", "Extrinsic Index", "Value", "Action"]


def test_subscan_bad_block_is_row_error() -> None:
    imp = SubscanImporter()
    row = {
        "Event Index": "1-1",
        "Date": "2021-01-01 00:00:00",
        "Block": "not-a-block",
        "Extrinsic Index": "1-0",
        "Value": "1",
        "Action": "Reward",
    }
    with pytest.raises(RowParseError, match="line 7"):
        imp.parse_row(row, line=7)


def test_parse_kraken_sample(fixtures_dir: Path) -> None:
    imp = KrakenImporter()
    recs = [imp.parse_row(r, line=n) for n, r in _rows(fixtures_dir / "kraken_sample.csv")]
    assert [imp.accepts(r) for r in recs] == [True, False, True, True, False]
    assert recs[0].asset == "DOT.S"
    assert recs[0].event_amount() == Decimal("0.5000000000")
    assert recs[0].fee == Decimal("0")
    assert imp.coin_for(recs[0], Coin.KSM) == Coin.DOT
    assert imp.coin_for(recs[2], Coin.DOT) == Coin.ETH
    assert not imp.supports(OutputFormat.COIN_TRACKING)


def test_parse_staketax_sample(fixtures_dir: Path) -> None:
    imp = StakeTaxImporter()
    recs = [imp.parse_row(r, line=n) for n, r in _rows(fixtures_dir / "staketax_sample.csv")]
    assert recs[0].taxable is True
    assert recs[0].event_amount() == Decimal("5.0")
    assert recs[1].taxable is False
    assert recs[1].sent_amount == Decimal("10.0")
    assert not imp.accepts(recs[1])
    # Blank received_amount reads as zero, blank taxable as false.
    assert recs[2].received_amount is None
    assert recs[2].event_amount() == Decimal("0")
    assert recs[2].taxable is False
    assert recs[2].tx_id == "ABC125"
    # Case-sensitive tx_type.
    assert not imp.accepts(recs[3])


def _staketax_row(**overrides: str) -> dict[str, str]:
    row = {
        "timestamp": "2021-08-01 04:00:00",
        "tx_type": "STAKING",
        "taxable": "true",
        "received_amount": "1",
        "received_currency": "ATOM",
        "sent_amount": "",
        "sent_currency": "",
        "fee": "",
        "fee_currency": "",
        "comment": "",
        "txid": "X",
        "url": "",
        "exchange": "",
        "wallet_address": "",
    }
    row.update(overrides)
    return row


@pytest.mark.parametrize("flag,expected", [("TRUE", True), ("False", False), ("", False)])
def test_staketax_taxable_flag(flag: str, expected: bool) -> None:
    rec = StakeTaxImporter().parse_row(_staketax_row(taxable=flag), line=2)
    assert rec.taxable is expected


def test_staketax_rejects_unknown_taxable_value() -> None:
    with pytest.raises(RowParseError, match="taxable"):
        StakeTaxImporter().parse_row(_staketax_row(taxable="yes"), line=2)


def test_staketax_rejects_bad_amount() -> None:
    with pytest.raises(RowParseError):
        StakeTaxImporter().parse_row(_staketax_row(received_amount="five"), line=2)


def test_iter_csv_rows_rejects_short_row() -> None:
    content = "a,b,c\n1,2,3\n4,5\n"
    rows = iter_csv_rows(io.StringIO(content))
    assert next(rows) == (2, {"a": "1", "b": "2", "c": "3"})
    with pytest.raises(RowParseError, match="line 3"):
        next(rows)


def test_iter_csv_rows_rejects_long_row() -> None:
    with pytest.raises(RowParseError):
        list(iter_csv_rows(io.StringIO("a,b\n1,2,3\n")))


def test_header_names_are_matched_exactly() -> None:
    content = (
        "txid,refid, time,type,aclass,asset,amount,fee\n"
        "T1,R1,2021-02-01 00:00:00,staking,currency,DOT.S,1.0,0\n"
    )
    (line, row), = iter_csv_rows(io.StringIO(content))
    assert " time" in row
    with pytest.raises(RowParseError, match="line 2"):
        KrakenImporter().parse_row(row, line=line)
