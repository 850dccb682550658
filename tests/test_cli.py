"""Tests for the command-line entry point."""

import json
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest
import structlog

from property_checklist import main as cli
from property_checklist.logging import configure_logging

LISTING = {
    "price": "£320,000",
    "tenure": "Freehold",
    "epc": "B",
    "councilTax": "Band D",
    "listingHistory": "Added on 01/05/2024",
    "saleHistory": [{"year": "2019", "soldPrice": "£280,000"}],
}


@pytest.fixture(autouse=True)
def _uncached_logging(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep module loggers from holding on to a captured stream between tests."""

    def configure(**kwargs: Any) -> None:
        configure_logging(**kwargs)
        structlog.configure(cache_logger_on_first_use=False)

    monkeypatch.setattr(cli, "configure_logging", configure)
    monkeypatch.setenv("PROPERTY_CHECKLIST_REFERENCE_DATE", "2024-06-01")
    yield
    structlog.reset_defaults()


def _write(tmp_path: Path, name: str, payload: object) -> Path:
    path = tmp_path / name
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


class TestMain:
    def test_prints_evaluation(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        listing = _write(tmp_path, "listing.json", LISTING)

        assert cli.main([str(listing)]) == 0

        output = json.loads(capsys.readouterr().out)
        assert set(output) == {"checklist", "sales_insights", "dashboard"}
        assert len(output["checklist"]) == 33
        assert output["sales_insights"]["price_discrepancy"]["value"] == "14.29% over 5 years"

    def test_with_premium(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        listing = _write(tmp_path, "listing.json", LISTING)
        premium = _write(
            tmp_path,
            "premium.json",
            {"estimatedSaleValue": 350000, "broadbandMaxDownloadMbps": 80},
        )

        assert cli.main([str(listing), "--premium", str(premium)]) == 0

        output = json.loads(capsys.readouterr().out)
        assert len(output["checklist"]) == 54
        broadband = next(i for i in output["checklist"] if i["key"] == "broadband")
        assert broadband["value"] == "80 Mbps"

    def test_premium_loading_flag(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        listing = _write(tmp_path, "listing.json", LISTING)

        assert cli.main([str(listing), "--premium-loading"]) == 0

        output = json.loads(capsys.readouterr().out)
        statuses = [item["status"] for item in output["checklist"]]
        assert statuses.count("IS_LOADING") == 21

    def test_json_logs_on_stderr(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        listing = _write(tmp_path, "listing.json", LISTING)

        assert cli.main([str(listing), "--json-logs"]) == 0

        events = [json.loads(line) for line in capsys.readouterr().err.splitlines() if line]
        assert any(e["event"] == "property_evaluated" for e in events)

    def test_missing_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert cli.main([str(tmp_path / "absent.json")]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "invalid_input" in captured.err

    def test_invalid_json(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        listing = tmp_path / "listing.json"
        listing.write_text("{not json", encoding="utf-8")

        assert cli.main([str(listing)]) == 1
        assert capsys.readouterr().out == ""

    def test_invalid_premium(self, tmp_path: Path) -> None:
        listing = _write(tmp_path, "listing.json", LISTING)
        premium = _write(tmp_path, "premium.json", {"estimatedSaleValue": -5})

        assert cli.main([str(listing), "--premium", str(premium)]) == 1

    def test_invalid_settings(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("PROPERTY_CHECKLIST_LOG_LEVEL", "chatty")
        listing = _write(tmp_path, "listing.json", LISTING)

        assert cli.main([str(listing)]) == 1


class TestBuildParser:
    def test_defaults(self) -> None:
        args = cli.build_parser().parse_args(["listing.json"])
        assert args.listing == Path("listing.json")
        assert args.premium is None
        assert not args.premium_loading
        assert not args.json_logs
        assert not args.debug

    def test_requires_listing(self) -> None:
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args([])
